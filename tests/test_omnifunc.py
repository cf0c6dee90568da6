from unittest import TestCase

from pydyn.server.registrants.omnifunc import should_cont
from pydyn.server.runtime import load_settings

_OPTIONS = load_settings(None).completion
_MANUAL = load_settings({"completion": {"while_typing": False}}).completion


class ShouldCont(TestCase):
    def test_1(self) -> None:
        self.assertTrue(should_cont(_OPTIONS, line_before="x = os."))

    def test_2(self) -> None:
        self.assertTrue(should_cont(_OPTIONS, line_before="x = os.pa"))

    def test_3(self) -> None:
        self.assertFalse(should_cont(_OPTIONS, line_before="x = os"))

    def test_4(self) -> None:
        self.assertFalse(should_cont(_OPTIONS, line_before=""))

    def test_5(self) -> None:
        self.assertFalse(should_cont(_OPTIONS, line_before="x = os.path "))

    def test_6(self) -> None:
        self.assertTrue(should_cont(_MANUAL, line_before="x = os."))

    def test_7(self) -> None:
        self.assertFalse(should_cont(_MANUAL, line_before="x = os.pa"))
