"""Command-line front end: ``treedigest PATH [ALGO] [-t FILE] [-hashnames] [-exclude PATTERN]``."""

from __future__ import annotations

import argparse
import logging
import ntpath
import sys
from typing import List

from treedigest.core.tree import TreeHasher
from treedigest.errors import (
    ConfigurationError,
    FileReadError,
    PathNotFoundError,
    PathTooLongError,
    TraversalError,
    TreeDigestError,
    format_error,
)
from treedigest.hashing import available_algorithms
from treedigest.output import ResultWriter
from treedigest.settings import SettingsManager

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONFIG = 1
EXIT_USAGE = 2  # argparse's own exit status
EXIT_NOT_FOUND = 3
EXIT_TOO_LONG = 4
EXIT_READ = 5


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="treedigest",
        description=(
            "Recursively compute the hash of a directory's content in "
            "lexicographical order, or the hash of a single file."
        ),
        epilog="Supported algorithms (not case sensitive, default SHA1): "
        + ", ".join(available_algorithms()),
        allow_abbrev=False,
    )
    try:
        from treedigest import __version__ as _VER
    except ImportError:
        _VER = "unknown"
    parser.add_argument("--version", action="version", version=f"treedigest {_VER}")
    parser.add_argument("path", help="Directory or file to hash")
    parser.add_argument(
        "algorithm",
        nargs="?",
        default=None,
        help="Hash algorithm: " + ", ".join(available_algorithms()),
    )
    parser.add_argument(
        "-t",
        dest="result_file",
        metavar="FILE",
        default=None,
        help="Text file where the result is appended",
    )
    parser.add_argument(
        "-hashnames",
        "--hashnames",
        dest="hashnames",
        action="store_true",
        default=None,
        help="Include file and directory names in the hash computation",
    )
    parser.add_argument(
        "--no-hashnames",
        dest="hashnames",
        action="store_false",
        default=None,
        help="Leave names out of the hash even if settings turn them on",
    )
    parser.add_argument(
        "-exclude",
        "--exclude",
        dest="exclude",
        metavar="PATTERN",
        action="append",
        default=None,
        help="Skip entries whose name matches PATTERN (repeatable)",
    )
    parser.add_argument(
        "-nowait",
        "--nowait",
        action="store_true",
        help=argparse.SUPPRESS,
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def _exit_code(e: TreeDigestError) -> int:
    if isinstance(e, PathNotFoundError):
        return EXIT_NOT_FOUND
    if isinstance(e, PathTooLongError):
        return EXIT_TOO_LONG
    if isinstance(e, (FileReadError, TraversalError)):
        return EXIT_READ
    if isinstance(e, ConfigurationError):
        return EXIT_CONFIG
    return EXIT_READ


def main(argv: List[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    args = build_parser().parse_intermixed_args(argv)

    try:
        settings = SettingsManager().load_settings(
            ".",
            algorithm=args.algorithm,
            include_names=args.hashnames,
            exclude=args.exclude,
            result_file=args.result_file,
        )
    except TreeDigestError as e:
        print(format_error(e), file=sys.stderr)
        return _exit_code(e)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        writer = ResultWriter(settings.result_file) if settings.result_file else None
        if writer is not None:
            writer.ensure_writable()

        hasher = TreeHasher.from_settings(settings)
        hasher.validate_root(args.path)
        name = ntpath.basename(args.path.rstrip("/\\")) or args.path
        if not args.json:
            print(f'Using {settings.algorithm} to compute hash of "{name}" ...')
            names = "on" if settings.include_names else "off"
            exclude = ", ".join(settings.exclude) if settings.exclude else "none"
            print(f"Options: names: {names}, exclude: {exclude}")

        result = hasher.hash(args.path)
        if writer is not None:
            writer.write(result)
    except TreeDigestError as e:
        logger.debug("Run aborted", exc_info=True)
        print(format_error(e), file=sys.stderr)
        return _exit_code(e)

    print(result.to_json() if args.json else result.render())
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
