"""Compare and analyze subcommands working on saved reports or directories."""

from pathlib import Path

from .format import format_analysis, format_comparison
from ..report.analysis import analyze_report
from ..report.builder import generate_report
from ..report.codec import load_report
from ..report.reconcile import compare_reports
from ..report.record import Report
from ..utils.processor import Processor
from ..utils.walker import list_files


def obtain_report(processor: Processor, source: Path) -> Report:
    """Load a saved report, or build one if source is a directory."""
    if source.is_dir():
        return generate_report(processor, source, list_files(source))
    return load_report(source)


def do_compare(processor: Processor, old_source: Path, new_source: Path) -> int:
    old_report = obtain_report(processor, old_source)
    new_report = obtain_report(processor, new_source)
    print(format_comparison(compare_reports(old_report, new_report)), end='')
    return 0


def do_analyze(report_source: Path) -> int:
    print(format_analysis(analyze_report(load_report(report_source))), end='')
    return 0
