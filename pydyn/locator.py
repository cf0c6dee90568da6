from os import getcwd
from os.path import abspath
from pathlib import Path
from typing import Iterator, Optional

from .shared.settings import InterpreterOptions


def _ancestors(start: Path) -> Iterator[Path]:
    yield start
    yield from start.parents


def _exists(path: Path) -> bool:
    try:
        return path.exists()
    except OSError:
        return False


def venv_python(options: InterpreterOptions, filename: str) -> Optional[Path]:
    """
    Nearest `project_marker` upwards, then its `<venv_dir>/bin/python` or
    `<venv_dir>/Scripts/python.exe`

    Only the nearest project is considered
    """

    start = Path(abspath(filename)).parent if filename else Path(getcwd())
    for parent in _ancestors(start):
        if _exists(parent / options.project_marker):
            venv = parent / options.venv_dir
            for candidate in (
                venv / "bin" / "python",
                venv / "Scripts" / "python.exe",
            ):
                if _exists(candidate):
                    return candidate
            break

    return None


def locate(options: InterpreterOptions, filename: str) -> str:
    if configured := options.python_path.strip():
        return configured
    elif venv := venv_python(options, filename=filename):
        return str(venv)
    else:
        return options.fallback
