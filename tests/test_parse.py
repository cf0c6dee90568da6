from unittest import TestCase

from pydyn.shared.parse import is_ident, parse_target, split_lines
from pydyn.shared.types import Target


class ParseTarget(TestCase):
    def test_1(self) -> None:
        target = parse_target("foo.")
        self.assertEqual(target, Target(expr="foo", prefix=""))

    def test_2(self) -> None:
        target = parse_target("    x = foo.bar.ba")
        self.assertEqual(target, Target(expr="foo.bar", prefix="ba"))

    def test_3(self) -> None:
        target = parse_target("print(self._cache.")
        self.assertEqual(target, Target(expr="self._cache", prefix=""))

    def test_4(self) -> None:
        self.assertIsNone(parse_target("foo"))

    def test_5(self) -> None:
        self.assertIsNone(parse_target(""))

    def test_6(self) -> None:
        self.assertIsNone(parse_target("x = 1."))

    def test_7(self) -> None:
        self.assertIsNone(parse_target("'abc'."))

    def test_8(self) -> None:
        target = parse_target("os.path.jo")
        self.assertEqual(target, Target(expr="os.path", prefix="jo"))


class SplitLines(TestCase):
    def test_1(self) -> None:
        self.assertEqual(split_lines("a\r\nb\nc"), ["a", "b", "c"])

    def test_2(self) -> None:
        self.assertEqual(split_lines(""), [""])

    def test_3(self) -> None:
        self.assertEqual(split_lines("a\n"), ["a", ""])


class IsIdent(TestCase):
    def test_1(self) -> None:
        self.assertTrue(all(map(is_ident, "aZ_9")))
        self.assertFalse(any(map(is_ident, ". ()")))
