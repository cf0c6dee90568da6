from asyncio import create_task

from ...registry import NAMESPACE, autocmd, rpc
from ..rt_types import Stack
from .omnifunc import comp_func


@rpc()
async def _text_changed(stack: Stack) -> None:
    create_task(comp_func(stack=stack, manual=False))


_ = autocmd("TextChangedI") << f"lua {NAMESPACE}.{_text_changed.method}()"
