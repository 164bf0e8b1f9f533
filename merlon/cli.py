"""CLI entrypoints for merlon commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError
from .errors import PackagingError
from .logging import configure_logging
from .mod_dir import ModDir
from .packaging import Packager


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="merlon",
        description="Package mods as encrypted patch sets tied to the base ROM.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--mod-dir",
        type=Path,
        default=Path("."),
        help="Path to the mod project root (defaults to current directory).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    package_parser = subparsers.add_parser(
        "package",
        help="Package the mod's commits into a distributable .merlon file.",
    )
    package_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="File to write. Defaults to NAME.merlon, where NAME is the package name.",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for merlon commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))

    if args.command == "package":
        try:
            result = Packager().run(ModDir(args.mod_dir), args.output)
        except (ConfigError, PackagingError, OSError) as exc:
            parser.exit(1, f"error: {exc}\n")
        print(f"Wrote distributable to {result.path}")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


if __name__ == "__main__":
    main(sys.argv[1:])
