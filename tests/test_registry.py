from unittest import TestCase

from pydyn.registry import _name_gen


def _text_changed() -> None:
    pass


def omnifunc() -> None:
    pass


class NameGen(TestCase):
    def test_1(self) -> None:
        self.assertEqual(_name_gen(_text_changed), "TextChanged")

    def test_2(self) -> None:
        self.assertEqual(_name_gen(omnifunc), "Omnifunc")
