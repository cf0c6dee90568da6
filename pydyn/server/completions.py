from dataclasses import dataclass
from typing import Any, Iterable, MutableSequence

from pynvim_pp.nvim import Nvim
from pynvim_pp.types import NoneType
from std2.pickle.encoder import new_encoder

from ..shared.types import CompletionItem


@dataclass(frozen=True)
class VimCompletion:
    word: str
    abbr: str
    menu: str
    kind: str = ""
    icase: int = 1
    equal: int = 1
    dup: int = 0
    empty: int = 0


_ENCODER = new_encoder[VimCompletion](VimCompletion)


def trans(item: CompletionItem) -> VimCompletion:
    return VimCompletion(
        word=item.insert_text,
        abbr=item.label,
        menu=item.detail,
        kind=item.kind,
    )


async def complete(col: int, items: Iterable[CompletionItem]) -> None:
    """
    `col` is the zero based byte offset where the attribute prefix begins
    """

    acc: MutableSequence[Any] = []
    for item in items:
        encoded = _ENCODER(trans(item))
        acc.append(encoded)

    await Nvim.fn.complete(NoneType, col + 1, acc)
