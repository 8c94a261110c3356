"""
Sorting commands for the sigsort CLI.

This module contains command handlers for:
- sort: rewrite a declaration tree in canonical member order
- check: report files that are not canonically ordered
- stats: show member category counts per declaration
"""

import sys
from pathlib import Path

from ...api import SigSort
from ...serialization import detect_format
from ..formatters import stats_payload, stats_rows
from ..rich_output import get_rich_output


def cmd_sort(args, sigsort: SigSort) -> int:
    """Handle sort command."""
    output = get_rich_output()
    path = Path(args.path)
    result = sigsort.sort_file(path, fmt=args.input_format)

    if args.in_place:
        fmt = args.format or (
            detect_format(path) if args.input_format == "auto" else args.input_format
        )
        if fmt == "rbs":
            output.print_error("--in-place rewrites the serialized tree; use --output for stub text")
            return 1
        if result.changed:
            sigsort.write(result, path, fmt)
            output.print_success(f"Sorted {path}")
        else:
            output.print_info(f"{path} is already sorted")
        return 0

    if args.output:
        written = sigsort.write(result, args.output, args.format)
        output.print_success(f"Wrote sorted declarations to {written}")
        return 0

    sys.stdout.write(sigsort.render(result.sorted, args.format))
    return 0


def cmd_check(args, sigsort: SigSort) -> int:
    """Handle check command. Returns 1 when any file needs sorting."""
    output = get_rich_output()
    unsorted = []

    for path in args.paths:
        if sigsort.check_file(path, fmt=args.input_format):
            output.print_success(f"{path} is sorted")
        else:
            output.print_warning(f"{path} would be reordered")
            unsorted.append(path)

    if unsorted:
        output.print_error(f"{len(unsorted)} of {len(args.paths)} file(s) need sorting")
        return 1
    return 0


def cmd_stats(args, sigsort: SigSort) -> int:
    """Handle stats command."""
    output = get_rich_output()
    decls = sigsort.load(args.path, fmt=args.input_format)
    statistics = sigsort.statistics(decls)

    if args.format == "json":
        output.print_json(stats_payload(str(args.path), statistics))
        return 0

    if not statistics:
        output.print_info(f"No class, module or interface declarations in {args.path}")
        return 0

    table = output.create_table(f"Member categories: {args.path}", ["Declaration", "Members", "Categories"])
    for row in stats_rows(statistics):
        output.add_table_row(table, *row)
    output.print_table(table)
    return 0
