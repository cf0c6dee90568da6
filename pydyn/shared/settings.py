from dataclasses import dataclass
from typing import AbstractSet


@dataclass(frozen=True)
class InterpreterOptions:
    python_path: str
    project_marker: str
    venv_dir: str
    fallback: str


@dataclass(frozen=True)
class Limits:
    timeout: float


@dataclass(frozen=True)
class Display:
    mark: str
    kind: str


@dataclass(frozen=True)
class CompleteOptions:
    filetypes: AbstractSet[str]
    trigger_chars: AbstractSet[str]
    while_typing: bool
    set_omnifunc: bool


@dataclass(frozen=True)
class Settings:
    interpreter: InterpreterOptions
    limits: Limits
    display: Display
    completion: CompleteOptions
