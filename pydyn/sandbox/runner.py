from asyncio import create_subprocess_exec, wait_for
from asyncio.exceptions import TimeoutError
from contextlib import suppress
from json import loads
from json.decoder import JSONDecodeError
from math import ceil
from os import environ
from subprocess import PIPE
from typing import Mapping, Sequence

from pynvim_pp.lib import decode, encode
from pynvim_pp.logging import log
from std2.pickle.decoder import new_decoder
from std2.pickle.types import DecodeError

from ..consts import INTROSPECT_PY
from ..shared.timeit import timeit
from ..shared.types import SandboxInvocation, SandboxResult
from .introspect import ALARM_ENV

_DECODER = new_decoder[Sequence[str]](Sequence[str])
_SCRIPT = decode(INTROSPECT_PY.read_bytes())


def _env(timeout: float) -> Mapping[str, str]:
    # self alarm fires strictly after the kill deadline
    alarm = ceil(timeout) + 1
    return {**environ, "PYTHONDONTWRITEBYTECODE": "1", ALARM_ENV: str(alarm)}


async def run(invocation: SandboxInvocation, timeout: float) -> SandboxResult:
    """
    Raises `OSError` if the interpreter cannot be spawned
    """

    proc = await create_subprocess_exec(
        invocation.interpreter,
        "-c",
        _SCRIPT,
        invocation.filename,
        invocation.expr,
        invocation.prefix,
        stdin=PIPE,
        stdout=PIPE,
        stderr=PIPE,
        env=_env(timeout),
    )
    try:
        stdout, stderr = await wait_for(
            proc.communicate(encode(invocation.source)), timeout=timeout
        )
    except TimeoutError:
        with suppress(ProcessLookupError):
            proc.kill()
        await proc.wait()
        return SandboxResult(returncode=None, timed_out=True, stdout="", stderr="")
    else:
        return SandboxResult(
            returncode=proc.returncode,
            timed_out=False,
            stdout=decode(stdout),
            stderr=decode(stderr),
        )


def parse(stdout: str) -> Sequence[str]:
    text = stdout.strip()
    if not text:
        return ()

    try:
        json = loads(text)
    except JSONDecodeError as e:
        log.warning("%s :: %s", e, text)
        return ()

    if not isinstance(json, list):
        log.warning("%s", f"expected array :: {text}")
        return ()

    try:
        names: Sequence[str] = _DECODER(json)
    except DecodeError as e:
        log.warning("%s", e)
        return ()
    else:
        return tuple(names)


async def attributes(invocation: SandboxInvocation, timeout: float) -> Sequence[str]:
    with timeit("SANDBOX", invocation.interpreter, invocation.expr):
        try:
            result = await run(invocation, timeout=timeout)
        except OSError as e:
            log.warning("%s", f"spawn failed :: {invocation.interpreter} :: {e}")
            return ()

    if result.timed_out:
        log.warning("%s", f"timed out after {timeout}s :: {invocation.expr}")
        return ()
    elif result.returncode:
        log.warning(
            "%s",
            f"exited with {result.returncode} :: {invocation.interpreter}"
            + (f"\n{result.stderr}" if result.stderr else ""),
        )
        return ()
    else:
        if result.stderr:
            log.debug("%s", result.stderr)
        return parse(result.stdout)
