"""Create subcommand: report a directory tree, check it and optionally save it."""

import sys
from pathlib import Path
from typing import NamedTuple

from .format import format_analysis, format_comparison, format_invalid_names
from ..report.record import FileRecord
from ..session import ReportSession


class CreateArgs(NamedTuple):
    """Arguments for the create operation."""
    directory: Path  # Directory to report
    output: Path | None  # Where to save the report, if anywhere
    check_names: bool  # Stop before fingerprinting if any file name is not a valid book file name
    compare_with: Path | None  # Older report to compare the new one with
    verbose: bool  # Print every processed file


def do_create(session: ReportSession, args: CreateArgs) -> int:
    """Run the create operation.

    Returns:
        Exit status: 0 on success, 2 if invalid file names stopped the operation
    """
    def file_processed(record: FileRecord):
        print(f"Processed '{record.path}' ({record.size} bytes)", file=sys.stderr)

    invalid_names = session.create(
        args.directory,
        check_names=args.check_names,
        file_processed=file_processed if args.verbose else None)

    if invalid_names:
        print(format_invalid_names(invalid_names), end='')
        return 2

    print(format_analysis(session.analyze()), end='')

    if args.output is not None:
        session.save_as(args.output)

    if args.compare_with is not None:
        print(format_comparison(session.compare_with(args.compare_with)), end='')

    return 0
