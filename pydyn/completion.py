from typing import Sequence

from pynvim_pp.logging import suppress_and_log

from .locator import locate
from .neutralize import neutralize
from .reducer import reduce
from .sandbox.runner import attributes
from .shared.parse import parse_target, split_lines
from .shared.settings import Settings
from .shared.timeit import timeit
from .shared.types import CompletionItem, CompletionRequest, SandboxInvocation


def line_before(request: CompletionRequest) -> str:
    lines = split_lines(request.text)
    line = lines[request.row] if 0 <= request.row < len(lines) else ""
    return line[: request.col]


async def complete(
    settings: Settings, request: CompletionRequest
) -> Sequence[CompletionItem]:
    with suppress_and_log(), timeit("COMPLETE", request.filename):
        target = parse_target(line_before(request))
        if not target:
            return ()

        interpreter = locate(settings.interpreter, filename=request.filename)
        invocation = SandboxInvocation(
            interpreter=interpreter,
            filename=request.filename,
            expr=target.expr,
            prefix=target.prefix,
            source=neutralize(request.text, row=request.row),
        )
        names = await attributes(invocation, timeout=settings.limits.timeout)
        return reduce(settings.display, names=names)

    return ()
