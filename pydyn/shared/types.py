from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CompletionRequest:
    """
    |...          line_before           🐭          line_after          ...|

    `row` and `col` are zero based, `col` counts characters, not bytes
    """

    filename: str
    text: str
    row: int
    col: int


@dataclass(frozen=True)
class Target:
    """
    <expr>.<prefix>🐭
    """

    expr: str
    prefix: str


@dataclass(frozen=True)
class SandboxInvocation:
    interpreter: str
    filename: str
    expr: str
    prefix: str
    source: str


@dataclass(frozen=True)
class SandboxResult:
    # `None` <-> killed after timeout
    returncode: Optional[int]
    timed_out: bool
    stdout: str
    stderr: str


@dataclass(frozen=True)
class CompletionItem:
    label: str
    sort_by: str
    insert_text: str
    filter_text: str
    kind: str
    detail: str
