from argparse import ArgumentParser, Namespace
from asyncio import run
from contextlib import nullcontext
from dataclasses import asdict
from json import dumps
from pathlib import Path, PurePath
from sys import exit, stderr, stdout
from typing import Any, Mapping, MutableMapping, Optional

from pynvim_pp.lib import decode
from std2.pickle.types import DecodeError


def parse_args() -> Namespace:
    parser = ArgumentParser(prog="pydyn")

    sub_parsers = parser.add_subparsers(dest="command", required=True)

    with nullcontext(sub_parsers.add_parser("run")) as p:
        p.add_argument("--socket", required=True)

    with nullcontext(sub_parsers.add_parser("complete")) as p:
        p.add_argument("file", type=Path)
        p.add_argument("row", type=int, help="zero based")
        p.add_argument("col", type=int, help="zero based, in characters")
        p.add_argument("--python", help="interpreter override")
        p.add_argument("--timeout", type=float)

    return parser.parse_args()


def _overrides(python: Optional[str], timeout: Optional[float]) -> Mapping[str, Any]:
    conf: MutableMapping[str, Any] = {}
    if python is not None:
        conf["interpreter"] = {"python_path": python}
    if timeout is not None:
        conf["limits"] = {"timeout": timeout}
    return conf


def main() -> int:
    args = parse_args()

    if args.command == "run":
        from .client import init

        run(init(PurePath(args.socket)))
        return 0

    elif args.command == "complete":
        from .completion import complete
        from .server.rt_types import ValidationError
        from .server.runtime import load_settings
        from .shared.types import CompletionRequest

        try:
            settings = load_settings(_overrides(args.python, timeout=args.timeout))
        except (DecodeError, ValidationError) as e:
            print(e, file=stderr)
            return 2

        try:
            text = decode(args.file.read_bytes())
        except OSError as e:
            print(e, file=stderr)
            return 1

        request = CompletionRequest(
            filename=str(args.file.resolve()),
            text=text,
            row=args.row,
            col=args.col,
        )
        items = run(complete(settings, request=request))
        json = dumps([asdict(item) for item in items], ensure_ascii=False)
        print(json, file=stdout)
        return 0

    else:
        assert False


if __name__ == "__main__":
    exit(main())
