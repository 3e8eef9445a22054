"""Check-names subcommand."""

from pathlib import Path

from .format import format_invalid_names
from ..naming import find_invalid_names
from ..utils.walker import list_files


def do_check_names(directory: Path) -> int:
    """Print files under directory whose names are not valid book file names.

    Returns:
        Exit status: 0 if all names are valid, 2 otherwise
    """
    invalid_names = find_invalid_names(list_files(directory))
    if not invalid_names:
        return 0

    print(format_invalid_names(invalid_names), end='')
    return 2
