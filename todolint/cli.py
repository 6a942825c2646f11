"""CLI for todolint."""

import argparse
import sys
from typing import List, Optional

from todolint import __version__
from todolint.config import load_configuration
from todolint.errors import TodolintError
from todolint.linter import Linter
from todolint.patterns import CONFIG_FILENAME, split_markers


def create_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser.

    Returns
    -------
    argparse.ArgumentParser
        Configured argument parser for the CLI
    """
    parser = argparse.ArgumentParser(
        prog="todolint",
        description=(
            "Recursively scan files and directories for dangling work markers.\n\n"
            "Lines mentioning incomplete or provisional work (todo, hack, workaround,\n"
            "and their equivalents in other languages) are reported, unless the marker\n"
            "cites an external reference such as a ticket URL:\n"
            "  // pending: https://tracker.example/123\n\n"
            f"Overrides are read from {CONFIG_FILENAME} in the current directory, if present.\n"
            "Command line arguments take precedence over the configuration file."
        ),
        epilog=(
            "Examples:\n"
            "  %(prog)s .\n"
            "      Scan the current directory\n\n"
            "  %(prog)s src README.md\n"
            "      Scan a directory and a single file\n\n"
            "  %(prog)s -m todo,fixme src\n"
            "      Only look for the given markers (comma-separated)\n\n"
            "  %(prog)s -d .\n"
            "      Show which paths are skipped and why\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "paths",
        nargs="*",
        metavar="PATH",
        help="Files and/or directories to scan, in order.",
    )

    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        default=None,
        help="Enable additional logging of skipped paths",
    )

    parser.add_argument(
        "-m",
        "--markers",
        metavar="MARKERS",
        help=(
            "Work marker(s) to look for. For multiple markers, separate with commas: "
            "'todo,fixme,hack'. Replaces the built-in marker list."
        ),
    )

    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
        help="Show program version and exit",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """
    Main entry point for the script.

    Parameters
    ----------
    argv : list of str, optional
        Command line arguments. If None, defaults to sys.argv[1:]
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.paths:
        parser.print_usage(sys.stderr)
        sys.exit(1)

    try:
        config = load_configuration()

        if args.markers is not None:
            markers = split_markers(args.markers)
            if not markers:
                parser.error("--markers requires at least one marker")
            config = config.replace(task_markers=markers, task_pattern=None)

        linter = Linter(config, debug=args.debug)

        if linter.debug:
            print(f"info: configuration: {config!r}", file=sys.stderr)

        warnings = linter.scan(args.paths)
    except TodolintError as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)

    if not warnings:
        sys.exit(0)

    for warning in warnings:
        print(warning)

    sys.exit(1)


if __name__ == "__main__":
    main()
