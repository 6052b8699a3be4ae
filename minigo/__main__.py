"""Command line entry point: ``python -m minigo [-entrypoint NAME] FILE``."""

from __future__ import annotations

import argparse
import logging
import sys

from minigo import config
from minigo.errors import MinigoError
from minigo.interpreter import Interpreter
from minigo.reader import FileSet, parse_file

logger = logging.getLogger("minigo")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="minigo", description="Run a Go source file with minigo.")
    parser.add_argument("file", help="Go source file to run")
    parser.add_argument(
        "-entrypoint", "--entrypoint",
        default=config.get_default_entrypoint(),
        help="entrypoint function name (default: %(default)s)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug output to stderr")
    return parser


def run(filename: str, entry_point: str) -> None:
    fset = FileSet()
    tree = parse_file(fset, filename)
    Interpreter(fset).run_file(tree, entry_point)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="level=%(levelname)s msg=%(message)s",
        stream=sys.stderr,
    )
    try:
        run(args.file, args.entrypoint)
    except OSError as err:
        logger.error("failed to read %s: %s", args.file, err.strerror or err)
        return 1
    except MinigoError as err:
        logger.error("failed to run: %s", err)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
