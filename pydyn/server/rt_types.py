from dataclasses import dataclass

from ..shared.settings import Settings


class ValidationError(Exception): ...


@dataclass(frozen=True)
class Stack:
    settings: Settings
