"""
Command line entry point.

Usage:
    pg_hexedit [-hkl] [-R startblock [endblock]] [-s segsize] [-n segnumber] file

Writes a wxHexEditor tag file for a PostgreSQL heap or B-Tree index
relation file to stdout.
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from rich.console import Console
from rich.markup import escape

from pghexedit import __version__
from pghexedit.config import RunConfig
from pghexedit.core.exceptions import HexEditError, OptionError
from pghexedit.runner import HexEditRunner
from pghexedit.utils.log import configure_logging

error_console = Console(stderr=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pg_hexedit",
        description="Display formatted contents of a PostgreSQL heap/index file "
                    "as wxHexEditor tags. Defaults are: relative addressing, range "
                    "of the entire file, block size as listed on block 0 in the file.")
    parser.add_argument("-k", dest="verify_checksums", action="store_true",
                        help="Verify block checksums")
    parser.add_argument("-l", dest="skip_leaf_pages", action="store_true",
                        help="Skip non-root B-Tree leaf pages")
    parser.add_argument("-R", dest="block_range", nargs="+", metavar="BLOCK",
                        help="Display specific block ranges within the file (blocks are "
                             "indexed from 0): startblock [endblock]. A startblock "
                             "without an endblock formats the single block")
    parser.add_argument("-s", dest="segment_size", metavar="SEGSIZE",
                        help="Force segment size to SEGSIZE")
    parser.add_argument("-n", dest="segment_number", metavar="SEGNUMBER",
                        help="Force segment number to SEGNUMBER")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Log progress to stderr (-vv for per-block detail)")
    parser.add_argument("--version", action="version",
                        version=f"%(prog)s {__version__}")
    parser.add_argument("file", nargs="?", help="Relation file to annotate")
    return parser


def _option_value(text: str, what: str) -> int:
    """Convert an all-digits option value, like the block range numbers."""
    if not text.isdigit():
        raise OptionError(f"Invalid {what} <{text}>")
    return int(text)


def parse_config(args: argparse.Namespace) -> RunConfig:
    """
    Turn parsed arguments into a RunConfig.

    -R is greedy, so when no file name is left over the last range token is
    taken as the file, just as the last argument is always the file.
    """
    block_start = block_end = None
    if args.block_range:
        tokens = list(args.block_range)
        if args.file is None:
            if len(tokens) < 2:
                raise OptionError("Missing file name to dump")
            args.file = tokens.pop()
        if len(tokens) > 2:
            raise OptionError(f"Too many block range values <{' '.join(tokens)}>")
        block_start = _option_value(tokens[0], "range start identifier")
        if len(tokens) == 2:
            block_end = _option_value(tokens[1], "range end identifier")

    if args.file is None:
        raise OptionError("Missing file name to dump")

    config = RunConfig(verify_checksums=args.verify_checksums,
                       skip_leaf_pages=args.skip_leaf_pages,
                       block_start=block_start,
                       block_end=block_end)

    if args.segment_size is not None:
        size = _option_value(args.segment_size, "segment size requested")
        if size <= 0:
            raise OptionError(f"Invalid segment size requested <{args.segment_size}>")
        config.segment_size = size

    if args.segment_number is not None:
        number = _option_value(args.segment_number, "segment number requested")
        if number <= 0:
            raise OptionError(f"Invalid segment number requested <{args.segment_number}>")
        config.segment_number = number
        config.segment_number_forced = True

    return config


def main(argv: Optional[Sequence[str]] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose > 1:
        level = logging.DEBUG
    configure_logging(level)

    try:
        config = parse_config(args)
    except OptionError as e:
        error_console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        parser.print_usage(sys.stderr)
        return 1

    # The document comment lists the options, not the file name
    options = argv[:-1] if argv else []

    try:
        return HexEditRunner(args.file, config, options=options).run()
    except HexEditError as e:
        error_console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
