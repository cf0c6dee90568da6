import sys
from textwrap import dedent
from unittest import IsolatedAsyncioTestCase, TestCase
from unittest.mock import AsyncMock, patch

from pydyn.completion import complete, line_before
from pydyn.neutralize import NEUTERED_LINE
from pydyn.server.runtime import load_settings
from pydyn.shared.parse import split_lines
from pydyn.shared.types import CompletionRequest

_SETTINGS = load_settings({"interpreter": {"python_path": sys.executable}})

_SOURCE = dedent(
    """
    class Bar:
        baz = 1
        _private = 2

    class Foo:
        bar = Bar()

    foo = Foo()
    x = foo.bar.
    """
)
_ROW = 9


def _request(text: str, row: int, col: int) -> CompletionRequest:
    return CompletionRequest(filename="dyn_test.py", text=text, row=row, col=col)


class LineBefore(TestCase):
    def test_1(self) -> None:
        request = _request("abc\ndef.ghi\n", row=1, col=4)
        self.assertEqual(line_before(request), "def.")

    def test_2(self) -> None:
        request = _request("abc", row=5, col=2)
        self.assertEqual(line_before(request), "")


class Complete(IsolatedAsyncioTestCase):
    async def test_1(self) -> None:
        line = split_lines(_SOURCE)[_ROW]
        self.assertEqual(line, "x = foo.bar.")

        items = await complete(_SETTINGS, request=_request(_SOURCE, _ROW, len(line)))
        labels = [item.label for item in items]
        self.assertEqual(labels[0], "baz")
        self.assertIn("_private", labels)
        self.assertLess(labels.index("baz"), labels.index("_private"))
        self.assertTrue(all(item.detail == "[DYN]" for item in items))

    async def test_2(self) -> None:
        mock = AsyncMock(return_value=("foo", "Bar", "foo", "_x"))
        with patch("pydyn.completion.attributes", mock):
            line = "x = foo.bar."
            items = await complete(
                _SETTINGS, request=_request(_SOURCE, _ROW, len(line))
            )

        self.assertEqual([item.label for item in items], ["Bar", "foo", "_x"])
        (invocation,), kwargs = mock.call_args
        self.assertEqual(invocation.interpreter, sys.executable)
        self.assertEqual(invocation.expr, "foo.bar")
        self.assertEqual(invocation.prefix, "")
        self.assertEqual(split_lines(invocation.source)[_ROW], NEUTERED_LINE)
        self.assertEqual(kwargs, {"timeout": _SETTINGS.limits.timeout})

    async def test_3(self) -> None:
        mock = AsyncMock(return_value=("bar",))
        with patch("pydyn.completion.attributes", mock):
            items = await complete(_SETTINGS, request=_request("x = 1 + 2", 0, 9))

        self.assertEqual(list(items), [])
        mock.assert_not_called()

    async def test_4(self) -> None:
        mock = AsyncMock(return_value=("bar",))
        with patch("pydyn.completion.attributes", mock):
            text = "x = foo.ba"
            await complete(_SETTINGS, request=_request(text, 0, len(text)))

        (invocation,), _ = mock.call_args
        self.assertEqual(invocation.expr, "foo")
        self.assertEqual(invocation.prefix, "ba")

    async def test_5(self) -> None:
        text = "raise RuntimeError('boom')\nx = 1\ny = x."
        items = await complete(_SETTINGS, request=_request(text, 2, 6))
        self.assertEqual(list(items), [])

    async def test_6(self) -> None:
        mock = AsyncMock(side_effect=RuntimeError("boom"))
        with patch("pydyn.completion.attributes", mock):
            text = "y = x."
            items = await complete(_SETTINGS, request=_request(text, 0, len(text)))
        self.assertEqual(list(items), [])
