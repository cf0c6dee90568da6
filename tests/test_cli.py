import sys
from json import loads
from os.path import join
from pathlib import Path
from subprocess import CompletedProcess, run
from tempfile import TemporaryDirectory
from unittest import TestCase

_TOP_LV = Path(__file__).resolve(strict=True).parent.parent


def _complete(*args: str) -> CompletedProcess:
    return run(
        (sys.executable, "-m", "pydyn", "complete", *args),
        cwd=_TOP_LV,
        capture_output=True,
        text=True,
        timeout=30,
    )


class Complete(TestCase):
    def test_1(self) -> None:
        with TemporaryDirectory() as tmp:
            path = join(tmp, "sample.py")
            Path(path).write_text("class A:\n    alpha = 1\n\nA.al\n", "UTF-8")

            proc = _complete(path, "3", "4", "--python", sys.executable)
            self.assertEqual(proc.returncode, 0, proc.stderr)
            items = loads(proc.stdout)
            self.assertEqual([item["label"] for item in items], ["alpha"])
            self.assertEqual(items[0]["detail"], "[DYN]")

    def test_2(self) -> None:
        with TemporaryDirectory() as tmp:
            proc = _complete(join(tmp, "missing.py"), "0", "0")
            self.assertEqual(proc.returncode, 1)

    def test_3(self) -> None:
        with TemporaryDirectory() as tmp:
            path = join(tmp, "sample.py")
            Path(path).write_text("x = 1\n", "UTF-8")
            proc = _complete(path, "0", "0", "--timeout", "0")
            self.assertEqual(proc.returncode, 2)
