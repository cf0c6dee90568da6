from re import compile
from typing import Iterator, Optional

from .shared.parse import split_lines

NEUTERED_LINE = "pass  # pydyn: neutered line"
NEUTERED_EXEC = "pass  # pydyn: neutered execution"
DISABLED_GUARD = "if False:"

_INDENT = compile(r"^\s*")
_ENTRY_POINT = compile(r"\b(run|start|serve|listen|main)\s*\(")
_DEFINITION = compile(r"^(async\s+def|def|class)\b")
_GUARD = compile(r"^if\s+__name__\s*==[^:]*(?::(?P<tail>.*))?$")


def _indent(line: str) -> str:
    match = _INDENT.match(line)
    return match.group() if match else ""


def _disable_guard(stripped: str) -> Optional[str]:
    if match := _GUARD.match(stripped):
        return DISABLED_GUARD + (match.group("tail") or "")
    else:
        return None


def neuter_line(line: str) -> str:
    indent = _indent(line)
    stripped = line[len(indent) :]

    if (guard := _disable_guard(stripped)) is not None:
        return indent + guard
    elif _ENTRY_POINT.search(stripped) and not _DEFINITION.match(stripped):
        return indent + NEUTERED_EXEC
    else:
        return line


def neutralize(text: str, row: int) -> str:
    """
    1:1 line rewrite, the line count is never changed

    - cursor line -> `pass`
    - `if __name__ == ...` -> `if False`
    - `run(...)`, `main(...)`, etc -> `pass`
    """

    def cont() -> Iterator[str]:
        for idx, line in enumerate(split_lines(text)):
            if idx == row:
                yield _indent(line) + NEUTERED_LINE
            else:
                yield neuter_line(line)

    return "\n".join(cont())
