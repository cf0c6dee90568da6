from dataclasses import dataclass
from os.path import normcase
from typing import Tuple, cast

from pynvim_pp.atomic import Atomic
from pynvim_pp.buffer import Buffer
from pynvim_pp.lib import decode, encode
from pynvim_pp.types import NoneType

from ..shared.types import CompletionRequest

# (row, col), zero based, col is an utf-8 byte offset, same as nvim
NvimPos = Tuple[int, int]


@dataclass(frozen=True)
class BufContext:
    buf_id: int
    filetype: str
    position: NvimPos
    line_before: str
    request: CompletionRequest


async def context() -> BufContext:
    with Atomic() as (atomic, ns):
        ns.buf = atomic.get_current_buf()
        ns.name = atomic.buf_get_name(0)
        ns.filetype = atomic.buf_get_option(0, "filetype")
        ns.cursor = atomic.win_get_cursor(0)
        await atomic.commit(NoneType)

    buf = ns.buf(Buffer)
    filename = normcase(ns.name(str))
    filetype = ns.filetype(str)
    (r, col) = cast(Tuple[int, int], ns.cursor(NoneType))
    row = r - 1

    lines = await buf.get_lines(lo=0, hi=-1)
    line = lines[row] if row < len(lines) else ""
    line_before = decode(encode(line)[:col])

    request = CompletionRequest(
        filename=filename,
        text="\n".join(lines),
        row=row,
        col=len(line_before),
    )
    ctx = BufContext(
        buf_id=buf.number,
        filetype=filetype,
        position=(row, col),
        line_before=line_before,
        request=request,
    )
    return ctx
