"""Plain text rendering of analysis and comparison results.

Every section starts with a rule and a title line and ends with a blank line. Files are listed by their
normalized paths in canonical order.
"""

from typing import Iterable

from ..report.analysis import ReportAnalysisResult
from ..report.reconcile import ReportComparisonResult
from ..report.record import FileRecord

RULE = "-" * 90


class SectionWriter:
    """Accumulates sections of text."""

    def __init__(self) -> None:
        self._lines: list[str] = []

    def line(self, text: str = "") -> None:
        self._lines.append(text)

    def start_section(self, title: str) -> None:
        self.line(RULE)
        self.line(f"-- {title}")
        self.line()

    def end_section(self) -> None:
        self.line()

    def section(self, title: str, lines: Iterable[str]) -> None:
        self.start_section(title)
        for text in lines:
            self.line(text)
        self.end_section()

    def getvalue(self) -> str:
        return "".join(f"{text}\n" for text in self._lines)


def _paths(files: Iterable[FileRecord]) -> list[str]:
    return [f.path for f in sorted(files)]


def _join_blocks(blocks: Iterable[str]) -> list[str]:
    return "\n\n".join(blocks).split("\n")


def format_invalid_names(names: Iterable[str]) -> str:
    out = SectionWriter()
    out.section("Invalid file names", sorted(names))
    return out.getvalue()


def format_analysis(analysis: ReportAnalysisResult) -> str:
    out = SectionWriter()

    if analysis.zero_size:
        out.section("Files with size 0", _paths(analysis.zero_size))

    if analysis.duplicates:
        groups = sorted(_paths(group) for group in analysis.duplicates)
        out.section("Files which have same content", _join_blocks("\n".join(group) for group in groups))

    if analysis.is_clean:
        out.start_section("Analysis - OK")
        out.end_section()

    return out.getvalue()


def format_comparison(comparison: ReportComparisonResult) -> str:
    out = SectionWriter()

    if comparison.moved:
        out.section("Moved files", _join_blocks(
            f"File '{old.path}'\nmoved to '{new.path}'" for old, new in sorted(comparison.moved)))

    if comparison.modified:
        out.section("Modified files", _paths(old for old, _ in comparison.modified))

    if comparison.added:
        out.section("Added files", _paths(comparison.added))

    if comparison.deleted:
        out.section("Deleted files", _paths(comparison.deleted))

    if comparison.is_same:
        out.start_section("Report comparison - SAME")
        out.end_section()

    return out.getvalue()


def format_error(e: BaseException) -> str:
    out = SectionWriter()
    out.section("Exception", [
        f"Type: {type(e).__name__}",
        f"Message: {e}",
    ])
    return out.getvalue()
