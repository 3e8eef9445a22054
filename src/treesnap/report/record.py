"""File records and reports."""

from typing import Iterable, NamedTuple


class FileRecord(NamedTuple):
    """Identity of one file at the moment a report was built.

    Attributes:
        path: Normalized path relative to the reported directory (see normalize_path())
        size: File length in bytes
        hash: Lowercase hex SHA-1 digest of the file content

    Records compare equal iff all three fields are equal. The natural tuple ordering (path, size, hash) is the
    canonical order used to break ties when reports are reconciled.
    """
    path: str
    size: int
    hash: str

    @property
    def fingerprint(self) -> tuple[int, str]:
        """Content identity of the file: (size, hash)."""
        return self.size, self.hash


Report = frozenset[FileRecord]
"""A report is the set of records describing one snapshot of a directory tree."""


def make_report(records: Iterable[FileRecord]) -> Report:
    """Create a report from records, dropping exact duplicates."""
    return frozenset(records)
