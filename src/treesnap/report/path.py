"""Normalized representation for relative paths stored in reports."""

import os


def normalize_path(path: str | os.PathLike, sep: str = os.sep, altsep: str | None = os.altsep) -> str:
    """Convert a platform native relative path to its normalized form.

    Every directory separator of the platform (``sep`` and, where defined, ``altsep``) is rewritten to ``/``.
    Nothing else changes: no case folding, no trimming, no resolution of ``.`` or ``..`` components.

    Reports store paths in this form so that reports created on different platforms can be compared with
    plain string equality. A normalized path must not be handed back to the filesystem; native access always
    uses the relative path produced by the traversal.

    Args:
        path: Relative path in platform native form
        sep: Primary directory separator of the originating platform
        altsep: Alternative directory separator of the originating platform, if any

    Returns:
        The normalized path string
    """
    normalized = os.fspath(path)
    if sep != '/':
        normalized = normalized.replace(sep, '/')
    if altsep is not None and altsep != '/':
        normalized = normalized.replace(altsep, '/')
    return normalized
