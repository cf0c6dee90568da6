from typing import Any, Callable

from pynvim_pp.atomic import Atomic
from pynvim_pp.autocmd import AutoCMD
from pynvim_pp.rpc import RPC

NAMESPACE = "PYDYN"


def _name_gen(fn: Callable[[Callable[..., Any]], str]) -> str:
    """
    `_text_changed` -> `TextChanged`, exposed as `PYDYN.TextChanged` in lua
    """

    parts = fn.__qualname__.split("_")
    return "".join(part.capitalize() for part in parts if part)


autocmd = AutoCMD()
atomic = Atomic()
rpc = RPC(NAMESPACE, name_gen=_name_gen)
