from typing import Iterable, Iterator, MutableSet, Sequence

from .shared.settings import Display
from .shared.types import CompletionItem

_PRIVATE = "_"


def dedup(names: Iterable[str]) -> Iterator[str]:
    seen: MutableSet[str] = set()
    for name in names:
        if name not in seen:
            seen.add(name)
            yield name


def sort_by(name: str) -> str:
    """
    public -> `0...`, private & dunder -> `1...`
    """

    bucket = "1" if name.startswith(_PRIVATE) else "0"
    return bucket + name.lower()


def reduce(display: Display, names: Iterable[str]) -> Sequence[CompletionItem]:
    def cont() -> Iterator[CompletionItem]:
        for name in dedup(names):
            yield CompletionItem(
                label=name,
                sort_by=sort_by(name),
                insert_text=name,
                filter_text=name,
                kind=display.kind,
                detail=display.mark,
            )

    return sorted(cont(), key=lambda item: item.sort_by)
