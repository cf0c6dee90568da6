from asyncio import create_task
from typing import Any, Literal, Mapping, Sequence, Tuple, Union, cast

from pynvim_pp.atomic import Atomic
from pynvim_pp.buffer import Buffer
from pynvim_pp.lib import encode
from pynvim_pp.logging import log, suppress_and_log
from pynvim_pp.types import NoneType

from ...completion import complete as dyn_complete
from ...registry import rpc
from ...shared.parse import is_ident, parse_target
from ...shared.settings import CompleteOptions
from ...shared.timeit import timeit
from ..completions import complete
from ..context import BufContext, NvimPos, context
from ..rt_types import Stack


def should_cont(options: CompleteOptions, line_before: str) -> bool:
    if not line_before:
        return False
    elif line_before[-1] in options.trigger_chars:
        return True
    elif options.while_typing and is_ident(line_before[-1]):
        return parse_target(line_before) is not None
    else:
        return False


async def _status() -> Tuple[str, int, NvimPos]:
    with Atomic() as (atomic, ns):
        ns.mode = atomic.get_mode()
        ns.buf = atomic.get_current_buf()
        ns.cursor = atomic.win_get_cursor(0)
        await atomic.commit(NoneType)

    mode = cast(Mapping[str, str], ns.mode(NoneType))["mode"]
    (r, col) = cast(Tuple[int, int], ns.cursor(NoneType))
    return mode, ns.buf(Buffer).number, (r - 1, col)


async def _unmoved(ctx: BufContext) -> bool:
    mode, buf_id, position = await _status()
    return mode.startswith("i") and buf_id == ctx.buf_id and position == ctx.position


async def comp_func(stack: Stack, manual: bool) -> None:
    with suppress_and_log(), timeit("COMP FUNC"):
        ctx = await context()
        options = stack.settings.completion

        if ctx.filetype not in options.filetypes:
            return
        elif not manual and not should_cont(options, line_before=ctx.line_before):
            return
        elif not (target := parse_target(ctx.line_before)):
            return

        items = await dyn_complete(stack.settings, request=ctx.request)
        if await _unmoved(ctx):
            _, col = ctx.position
            await complete(col - len(encode(target.prefix)), items=items)
        else:
            log.debug("%s", f"stale :: {target.expr}")


@rpc()
async def omnifunc(
    stack: Stack, findstart: Literal[0, 1], base: str
) -> Union[int, Sequence[Mapping[str, Any]]]:
    if findstart:
        return -1
    else:
        create_task(comp_func(stack=stack, manual=True))
        return ()
