from re import compile
from typing import Optional, Sequence

from .types import Target

_TARGET = compile(r"([A-Za-z_][A-Za-z0-9_.]*?)\.([A-Za-z_][A-Za-z0-9_]*)?$")
_LINE_SEP = compile(r"\r?\n")


def split_lines(text: str) -> Sequence[str]:
    return _LINE_SEP.split(text)


def is_ident(chr: str) -> bool:
    return chr.isalnum() or chr == "_"


def parse_target(line_before: str) -> Optional[Target]:
    """
    `foo.bar.ba` -> Target(expr="foo.bar", prefix="ba")
    """

    if match := _TARGET.search(line_before):
        expr, prefix = match.group(1), match.group(2) or ""
        return Target(expr=expr, prefix=prefix)
    else:
        return None
