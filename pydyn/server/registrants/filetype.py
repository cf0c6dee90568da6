from pynvim_pp.buffer import Buffer

from ...registry import NAMESPACE, atomic, autocmd, rpc
from ..rt_types import Stack
from .omnifunc import omnifunc


@rpc()
async def _ft_changed(stack: Stack) -> None:
    options = stack.settings.completion
    if options.set_omnifunc:
        buf = await Buffer.get_current()
        if await buf.filetype() in options.filetypes:
            await buf.opts.set("omnifunc", val=f"v:lua.{NAMESPACE}.{omnifunc.method}")


_ = autocmd("FileType") << f"lua {NAMESPACE}.{_ft_changed.method}()"
atomic.exec_lua(f"{NAMESPACE}.{_ft_changed.method}()", ())
