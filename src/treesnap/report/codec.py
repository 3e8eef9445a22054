"""Persistence of reports.

A report is stored as a self-describing map tagged with a format version::

    {"version": "1", "files": [{"path": "dir/cat.png", "size": "920", "hash": "..."}, ...]}

Sizes are decimal strings. The map is written either as JSON text (the default) or as msgpack, which carries
the same structure in a compact binary form. Both encodings are validated the same way when loading.
Paths that are not valid UTF-8 on disk keep their surrogate escapes in both encodings.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

import msgpack

from .record import FileRecord, Report, make_report

logger = logging.getLogger(__name__)

FORMAT_VERSION = "1"

ENCODING_JSON = 'json'
ENCODING_MSGPACK = 'msgpack'

_RECORD_ATTRIBUTES = ('path', 'size', 'hash')


class FormatError(ValueError):
    """Raised when a persisted report is malformed or uses an unsupported format version."""


def report_to_dict(report: Report) -> dict[str, Any]:
    """Convert a report to its persisted map. Files are listed in canonical order."""
    return {
        'version': FORMAT_VERSION,
        'files': [
            {'path': f.path, 'size': str(f.size), 'hash': f.hash}
            for f in sorted(report)
        ],
    }


def report_from_dict(data: Any) -> Report:
    """Convert a persisted map back to a report.

    Raises:
        FormatError: If the version tag is missing or unsupported, or if any file entry is incomplete
    """
    if not isinstance(data, dict):
        raise FormatError("Report root is not a map")

    version = data.get('version')
    if version is None:
        raise FormatError("Report version is missing")
    if version != FORMAT_VERSION:
        raise FormatError(f"Unsupported report version: {version!r}")

    entries = data.get('files')
    if not isinstance(entries, list):
        raise FormatError("Report has no file list")

    return make_report(_record_from_entry(index, entry) for index, entry in enumerate(entries))


def _record_from_entry(index: int, entry: Any) -> FileRecord:
    if not isinstance(entry, dict):
        raise FormatError(f"File entry #{index} is not a map")

    for attribute in _RECORD_ATTRIBUTES:
        if attribute not in entry:
            raise FormatError(f"File entry #{index} is missing attribute {attribute!r}")

    path, size, digest = (entry[attribute] for attribute in _RECORD_ATTRIBUTES)
    if not isinstance(path, str) or not isinstance(digest, str):
        raise FormatError(f"File entry #{index} has a non-string path or hash")
    # Only plain decimal digits: int() would also accept signs, whitespace and underscores.
    if not isinstance(size, str) or not size.isascii() or not size.isdigit():
        raise FormatError(f"File entry #{index} has an invalid size: {size!r}")

    return FileRecord(path, int(size), digest)


def dumps_report(report: Report, encoding: str = ENCODING_JSON) -> bytes:
    data = report_to_dict(report)
    if encoding == ENCODING_JSON:
        return (json.dumps(data, indent=2) + '\n').encode('utf-8')
    elif encoding == ENCODING_MSGPACK:
        result = msgpack.packb(data, unicode_errors='surrogateescape')
        assert isinstance(result, bytes)
        return result
    else:
        raise ValueError(f"Unknown report encoding: {encoding}")


def loads_report(data: bytes, encoding: str = ENCODING_JSON) -> Report:
    if encoding == ENCODING_JSON:
        try:
            decoded = json.loads(data.decode('utf-8'))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise FormatError(f"Report is not valid JSON: {e}") from e
    elif encoding == ENCODING_MSGPACK:
        try:
            decoded = msgpack.unpackb(data, unicode_errors='surrogateescape')
        except (ValueError, msgpack.exceptions.UnpackException) as e:
            raise FormatError(f"Report is not valid msgpack: {e}") from e
    else:
        raise ValueError(f"Unknown report encoding: {encoding}")

    return report_from_dict(decoded)


def encoding_for_path(path: str | os.PathLike) -> str:
    """Choose the report encoding from a file name: ``.msgpack`` files are binary, anything else is JSON."""
    return ENCODING_MSGPACK if Path(path).suffix.lower() == '.msgpack' else ENCODING_JSON


def save_report(report: Report, destination: str | os.PathLike, encoding: str | None = None) -> None:
    """Write a report to a file.

    Args:
        report: The report to write
        destination: Path of the report file
        encoding: ENCODING_JSON or ENCODING_MSGPACK; chosen from the file suffix when omitted
    """
    if encoding is None:
        encoding = encoding_for_path(destination)
    data = dumps_report(report, encoding)
    with open(destination, 'wb') as f:
        f.write(data)
    logger.info(f"Saved report with {len(report)} files to {destination} ({encoding})")


def load_report(source: str | os.PathLike, encoding: str | None = None) -> Report:
    """Read a report from a file.

    Raises:
        OSError: If the file cannot be read
        FormatError: If the content is not a valid report
    """
    if encoding is None:
        encoding = encoding_for_path(source)
    with open(source, 'rb') as f:
        data = f.read()
    report = loads_report(data, encoding)
    logger.info(f"Loaded report with {len(report)} files from {source} ({encoding})")
    return report
