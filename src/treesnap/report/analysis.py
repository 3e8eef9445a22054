"""Analysis of a single report: zero-size files and groups of files sharing content."""

from collections import defaultdict
from dataclasses import dataclass, field

from .record import FileRecord, Report


@dataclass(frozen=True)
class ReportAnalysisResult:
    """Findings of analyze_report().

    Attributes:
        zero_size: Records with size 0.
        duplicates: Groups of two or more non-empty records sharing the same (size, hash). Groups are disjoint.
                    Empty files are excluded since they all trivially share content; they are reported once
                    under zero_size instead.
    """
    zero_size: frozenset[FileRecord] = field(default_factory=frozenset)
    duplicates: frozenset[frozenset[FileRecord]] = field(default_factory=frozenset)

    @property
    def is_clean(self) -> bool:
        return not self.zero_size and not self.duplicates


def analyze_report(report: Report) -> ReportAnalysisResult:
    zero_size = frozenset(f for f in report if f.size == 0)

    groups: defaultdict[tuple[int, str], set[FileRecord]] = defaultdict(set)
    for f in report:
        if f.size > 0:
            groups[f.fingerprint].add(f)

    duplicates = frozenset(frozenset(group) for group in groups.values() if len(group) > 1)

    return ReportAnalysisResult(zero_size, duplicates)
