"""
Runs inside the interpreter being introspected, standard library only

argv   :: <filename> <expr> <prefix>
stdin  :: source, UTF-8
env    :: PYDYN_ALARM, self alarm in seconds, defaults to 2
stdout :: one line, JSON array of attribute names, `[]` on any failure
"""

import signal
import sys
from contextlib import contextmanager, redirect_stderr, redirect_stdout
from enum import Enum
from io import StringIO
from json import dumps
from os import _exit, environ
from os.path import dirname, isfile, join
from traceback import format_exception, print_exc
from types import FrameType, ModuleType
from typing import (
    Any,
    Dict,
    Iterable,
    Iterator,
    List,
    Mapping,
    NamedTuple,
    Optional,
    Sequence,
    TextIO,
    Union,
)

ALARM = 2
ALARM_ENV = "PYDYN_ALARM"
MODULE_NAME = "__dyn__"
PACKAGE_MARKER = "__init__.py"


class Stage(Enum):
    read = "read"
    compile = "compile"
    execute = "execute"
    evaluate = "evaluate"


class Ok(NamedTuple):
    value: Any


class Failure(NamedTuple):
    stage: Stage
    detail: str


Result = Union[Ok, Failure]


def _failure(stage: Stage, e: BaseException) -> Failure:
    detail = "".join(format_exception(type(e), e, e.__traceback__))
    return Failure(stage=stage, detail=detail)


def emit(stdout: TextIO, names: Iterable[str]) -> None:
    stdout.write(dumps(list(names)))
    stdout.write("\n")
    stdout.flush()


def compute_sys_paths(filename: str) -> Sequence[str]:
    """
    The file's own directory, plus the parent of its outermost enclosing
    package, if any
    """

    parent = dirname(filename)
    paths: List[str] = [parent] if parent else []

    path, last_pkg = parent, None
    while path and path != dirname(path):
        if isfile(join(path, PACKAGE_MARKER)):
            last_pkg = path
            path = dirname(path)
        else:
            break

    if last_pkg:
        root = dirname(last_pkg)
        if root and root not in paths:
            paths.append(root)

    return paths


@contextmanager
def sys_paths(paths: Sequence[str]) -> Iterator[Sequence[str]]:
    added: List[str] = []
    try:
        for path in paths:
            if path and path not in sys.path:
                sys.path.insert(0, path)
                added.append(path)
        yield added
    finally:
        for path in added:
            try:
                sys.path.remove(path)
            except ValueError:
                pass


@contextmanager
def synthetic_module(filename: str) -> Iterator[ModuleType]:
    mod = ModuleType(MODULE_NAME)
    mod.__file__ = filename
    prev = sys.modules.get(MODULE_NAME)
    sys.modules[MODULE_NAME] = mod
    try:
        yield mod
    finally:
        if prev is None:
            sys.modules.pop(MODULE_NAME, None)
        else:
            sys.modules[MODULE_NAME] = prev


def alarm_seconds(env: Mapping[str, str]) -> int:
    try:
        seconds = int(env.get(ALARM_ENV, ""))
    except ValueError:
        return ALARM
    else:
        return seconds if seconds > 0 else ALARM


@contextmanager
def self_alarm(seconds: int, stdout: TextIO) -> Iterator[None]:
    if not hasattr(signal, "SIGALRM"):
        yield None
    else:

        def on_alarm(signum: int, frame: Optional[FrameType]) -> None:
            emit(stdout, ())
            _exit(0)

        prev = signal.signal(signal.SIGALRM, on_alarm)
        signal.alarm(seconds)
        try:
            yield None
        finally:
            signal.alarm(0)
            signal.signal(signal.SIGALRM, prev)


@contextmanager
def _muted() -> Iterator[None]:
    with redirect_stdout(StringIO()), redirect_stderr(StringIO()):
        yield None


def read_source(stdin: TextIO) -> Result:
    try:
        buf = getattr(stdin, "buffer", None)
        source = buf.read().decode("UTF-8") if buf else stdin.read()
    except (OSError, UnicodeDecodeError) as e:
        return _failure(Stage.read, e)
    else:
        return Ok(source)


def execute(source: str, filename: str, namespace: Dict[str, Any]) -> Result:
    try:
        code = compile(source, filename, "exec")
    except Exception as e:
        return _failure(Stage.compile, e)

    try:
        with _muted():
            exec(code, namespace, namespace)
    except BaseException as e:
        return _failure(Stage.execute, e)
    else:
        return Ok(None)


def evaluate(expr: str, namespace: Dict[str, Any]) -> Result:
    try:
        with _muted():
            obj = eval(expr, namespace, namespace)
    except BaseException as e:
        return _failure(Stage.evaluate, e)
    else:
        return Ok(obj)


def attributes(obj: Any, prefix: str) -> Sequence[str]:
    try:
        with _muted():
            names = dir(obj)
        return [
            name for name in names if isinstance(name, str) and name.startswith(prefix)
        ]
    except BaseException:
        return []


def introspect(filename: str, expr: str, prefix: str, source: str) -> Result:
    with sys_paths(compute_sys_paths(filename)):
        with synthetic_module(filename) as mod:
            namespace = mod.__dict__

            executed = execute(source, filename=filename, namespace=namespace)
            if isinstance(executed, Failure):
                return executed

            evaluated = evaluate(expr, namespace=namespace)
            if isinstance(evaluated, Failure):
                return evaluated

            return Ok(attributes(evaluated.value, prefix=prefix))


def main(argv: Sequence[str], stdin: TextIO, stdout: TextIO, stderr: TextIO) -> None:
    if len(argv) < 3:
        emit(stdout, ())
        return

    filename, expr, prefix = argv[:3]
    with self_alarm(alarm_seconds(environ), stdout=stdout):
        read = read_source(stdin)
        result = (
            read
            if isinstance(read, Failure)
            else introspect(filename, expr=expr, prefix=prefix, source=read.value)
        )

    if isinstance(result, Failure):
        stderr.write(f"pydyn :: {result.stage.value} failed\n{result.detail}")
        stderr.flush()
        emit(stdout, ())
    else:
        emit(stdout, result.value)


if __name__ == "__main__":
    try:
        main(sys.argv[1:], stdin=sys.stdin, stdout=sys.stdout, stderr=sys.stderr)
    except BaseException:
        print_exc()
        print("[]", flush=True)
    finally:
        sys.stderr.flush()
        # skip atexit hooks and non-daemon threads of the introspected code
        _exit(0)
