"""Reconciliation of two reports.

Two reports are compared by pairing their records in three phases, each using a weaker key than the previous
one and each working on what the previous phases left unpaired:

1. Exact match on the whole record. These files did not change and are dropped from the result.
2. Match on (size, hash). Same content at a different path: the file was moved.
3. Match on path. Same path with different content: the file was modified.

Records of the old report left after the third phase were deleted, records of the new report were added.

Pairing within a phase is greedy. When a key is shared by several records on both sides, records are paired in
canonical (sorted) order. The result is deterministic, but when several copies of the same content are moved at
once it need not correspond to the renames that actually happened.
"""

import logging
from collections import defaultdict, deque
from dataclasses import dataclass, field
from typing import Callable, Hashable, Iterable, Iterator, TypeVar

from .record import FileRecord, Report

logger = logging.getLogger(__name__)

T = TypeVar('T')


def find_pairs(key: Callable[[T], Hashable], xs: Iterable[T], ys: Iterable[T]) -> Iterator[tuple[T, T]]:
    """Pair elements of ``xs`` with elements of ``ys`` sharing the same key.

    Each element of ``xs`` and ``ys`` is used in at most one pair and the produced pairs are maximal (no further
    pair can be added). Elements of ``ys`` with the same key are handed out in their iteration order, and pairs
    are produced in the iteration order of ``xs``.

    Example:
        >>> list(find_pairs(len, ['aa', 'aaa', 'bb', 'bb', 'cc', 'ccc', 'd', ''], ['', 'uuu', 'vv', 'w', 'ww']))
        [('aa', 'vv'), ('aaa', 'uuu'), ('bb', 'ww'), ('d', 'w'), ('', '')]

        >>> list(find_pairs(lambda x: x, [1, 1, 1, 4], [4, 1, 1]))
        [(1, 1), (1, 1), (4, 4)]

    The third ``1`` in ``xs`` has no counterpart left in ``ys``.
    """
    queues: defaultdict[Hashable, deque[T]] = defaultdict(deque)
    for y in ys:
        queues[key(y)].append(y)

    for x in xs:
        queue = queues.get(key(x))
        if queue:
            yield x, queue.popleft()


def extract_pairs(
        key: Callable[[T], Hashable],
        xs: Iterable[T],
        ys: Iterable[T]) -> tuple[frozenset[tuple[T, T]], frozenset[T], frozenset[T]]:
    """Pair two sets by key, iterating both in canonical (sorted) order.

    Returns:
        A 3-tuple of (pairs, unpaired_xs, unpaired_ys)
    """
    xs = frozenset(xs)
    ys = frozenset(ys)
    pairs = frozenset(find_pairs(key, sorted(xs), sorted(ys)))
    paired_xs = frozenset(x for x, _ in pairs)
    paired_ys = frozenset(y for _, y in pairs)
    return pairs, xs - paired_xs, ys - paired_ys


@dataclass(frozen=True)
class ReportComparisonResult:
    """Differences between an old and a new report.

    Pairs are (old record, new record). Unchanged files appear nowhere.
    """
    moved: frozenset[tuple[FileRecord, FileRecord]] = field(default_factory=frozenset)
    modified: frozenset[tuple[FileRecord, FileRecord]] = field(default_factory=frozenset)
    added: frozenset[FileRecord] = field(default_factory=frozenset)
    deleted: frozenset[FileRecord] = field(default_factory=frozenset)

    @property
    def is_same(self) -> bool:
        return not (self.moved or self.modified or self.added or self.deleted)


def _whole_record(f: FileRecord):
    return f


def _content(f: FileRecord):
    return f.fingerprint


def _location(f: FileRecord):
    return f.path


def compare_reports(old_report: Report, new_report: Report) -> ReportComparisonResult:
    unchanged, old_rest, new_rest = extract_pairs(_whole_record, old_report, new_report)
    logger.debug(f"Unchanged files: {len(unchanged)}")

    moved, old_rest, new_rest = extract_pairs(_content, old_rest, new_rest)
    logger.debug(f"Moved files: {len(moved)}")

    modified, old_rest, new_rest = extract_pairs(_location, old_rest, new_rest)
    logger.debug(f"Modified files: {len(modified)}")

    result = ReportComparisonResult(moved=moved, modified=modified, added=new_rest, deleted=old_rest)
    logger.info(
        f"Compared reports ({len(old_report)} old, {len(new_report)} new files): {len(result.moved)} moved, "
        f"{len(result.modified)} modified, {len(result.added)} added, {len(result.deleted)} deleted")
    return result
