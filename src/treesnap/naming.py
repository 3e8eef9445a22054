"""Validation of book file names of the form ``Author - Title (YYYY).ext``.

Examples of valid names::

    Dasgupta - Algorithms (2006).pdf
    Graham - Concrete Mathematics - A Foundation for Computer Science (1994).pdf
    Syme - Expert F# 3.0 (2012).pdf
    Ben-Ari - Ada For Software Engineers (2009).pdf
"""

import os
import re
from pathlib import PurePath
from typing import Iterable

from .report.path import normalize_path

_LETTER = "[A-Za-z]"
# A dash must have letters on both sides. Singular possessives are allowed, digits are not.
_WORD = f"(?:{_LETTER}|(?<={_LETTER})-(?={_LETTER}))+(?:'s)?"
# One or two words, the first one may start with O' (O'Brien).
_AUTHOR = f"(?:O')?{_WORD}(?: {_WORD})?"
# Digits with dots only between digits: 2, 3.0, 1.2.10
_NUMBER_OR_VERSION = r"(?:[0-9]|(?<=[0-9])\.(?=[0-9]))+"
# Tokens occurring in titles which aren't words
_SPECIAL_WORD = r"(?:C#|F#|\.NET|ASP\.NET|C\+\+|HTML5)"
_TITLE_TOKEN = f"(?:{_WORD}|{_NUMBER_OR_VERSION}|{_SPECIAL_WORD})"
_TITLE = f"(?:{_TITLE_TOKEN}(?: |, | - ))*{_TITLE_TOKEN}"
_YEAR = r"\([0-9]{4}\)"
# Lower case only
_EXTENSION = r"\.(?:pdf|djvu)"

BOOK_FILE_NAME_PATTERN = re.compile(f"{_AUTHOR} - {_TITLE} {_YEAR}{_EXTENSION}", re.ASCII)


def is_valid_book_file_name(name: str) -> bool:
    return BOOK_FILE_NAME_PATTERN.fullmatch(name) is not None


def find_invalid_names(relative_paths: Iterable[str | os.PathLike]) -> set[str]:
    """Check the base name of every path.

    Returns:
        Normalized relative paths of the files whose base name is not a valid book file name
    """
    return {
        normalize_path(p)
        for p in relative_paths
        if not is_valid_book_file_name(PurePath(p).name)
    }
