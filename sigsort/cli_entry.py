"""
Command-line interface for sigsort

Sorts the members of class, module and interface declarations into
canonical order. Input is a declaration tree serialized as JSON or YAML;
output is stub text or the sorted tree.
"""

import argparse
import logging
import sys
from typing import List, Optional

from sigsort import __version__
from sigsort.api import SigSort
from sigsort.cli.commands import cmd_check, cmd_config, cmd_sort, cmd_stats
from sigsort.cli.rich_output import get_rich_output, set_rich_enabled
from sigsort.config import OUTPUT_FORMATS, SigsortConfig
from sigsort.errors import SigsortError

logger = logging.getLogger("sigsort")

INPUT_FORMATS = ("auto", "json", "yaml")


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="sigsort",
        description="sigsort - canonical member ordering for signature declaration files",
        epilog='Use "sigsort <command> --help" for detailed command help.',
    )

    parser.add_argument("--config", "-c", type=str, help="Path to configuration file")

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output and debug logging",
    )

    parser.add_argument(
        "--no-rich",
        action="store_true",
        help="Disable rich terminal output (use plain text)",
    )

    parser.add_argument("--no-color", action="store_true", help="Disable colored output")

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Sort command
    sort_parser = subparsers.add_parser(
        "sort", help="Sort declaration members and write the result"
    )
    sort_parser.add_argument("path", help="JSON or YAML declaration tree")
    destination = sort_parser.add_mutually_exclusive_group()
    destination.add_argument("--output", "-o", help="Write the result to this file")
    destination.add_argument(
        "--in-place",
        "-i",
        action="store_true",
        help="Rewrite the input file with the sorted tree",
    )
    sort_parser.add_argument(
        "--format",
        "-f",
        choices=OUTPUT_FORMATS,
        help="Output format (default: from configuration, or the input format with --in-place)",
    )
    sort_parser.add_argument(
        "--input-format", choices=INPUT_FORMATS, default="auto", help="Input format"
    )

    # Check command
    check_parser = subparsers.add_parser(
        "check", help="Exit with status 1 if any file is not canonically ordered"
    )
    check_parser.add_argument("paths", nargs="+", help="JSON or YAML declaration trees")
    check_parser.add_argument(
        "--input-format", choices=INPUT_FORMATS, default="auto", help="Input format"
    )

    # Stats command
    stats_parser = subparsers.add_parser(
        "stats", help="Show member category counts per declaration"
    )
    stats_parser.add_argument("path", help="JSON or YAML declaration tree")
    stats_parser.add_argument(
        "--format", choices=["text", "json"], default="text", help="Output format"
    )
    stats_parser.add_argument(
        "--input-format", choices=INPUT_FORMATS, default="auto", help="Input format"
    )

    # Config command
    config_parser = subparsers.add_parser("config", help="Configuration management")
    config_subparsers = config_parser.add_subparsers(dest="config_action")

    config_subparsers.add_parser("show", help="Show current configuration")

    init_parser = config_subparsers.add_parser("init", help="Write a default configuration file")
    init_parser.add_argument("path", help="Path of the configuration file to create")
    init_parser.add_argument(
        "--format", choices=["json", "yaml"], default="yaml", help="Configuration file format"
    )

    validate_parser = config_subparsers.add_parser("validate", help="Validate configuration file")
    validate_parser.add_argument("config_file", help="Configuration file to validate")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    setup_logging(args.verbose)
    set_rich_enabled(not args.no_rich, no_color=args.no_color)
    output = get_rich_output()

    try:
        if args.command == "config":
            return cmd_config(args)

        sigsort = SigSort(SigsortConfig.load(args.config))

        if args.command == "sort":
            return cmd_sort(args, sigsort)
        if args.command == "check":
            return cmd_check(args, sigsort)
        if args.command == "stats":
            return cmd_stats(args, sigsort)
    except SigsortError as e:
        logger.debug("Command failed", exc_info=True)
        output.print_error(str(e))
        return 1
    except OSError as e:
        logger.debug("Command failed", exc_info=True)
        output.print_error(f"{e.strerror or e}: {e.filename}" if e.filename else str(e))
        return 1

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
