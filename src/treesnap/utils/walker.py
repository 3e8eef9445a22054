import functools
import os
import stat
from pathlib import Path
from typing import Generator


class FileContext:
    """Context object for a file or directory during traversal.

    IMPORTANT: The _path attribute is protected and should not be accessed directly
    outside of this class. To get the full path of a file, concatenate the root
    path with the relative_path property instead:
        full_path = root_path / context.relative_path
    """
    def __init__(self, parent, name: str | None, path: Path | None = None, st: os.stat_result | None = None):
        self._parent: FileContext | None = parent
        self._name: str | None = name
        self._stat: os.stat_result | None = st
        self._path: Path | None = path

    @property
    def name(self) -> str | None:
        return self._name

    @property
    def parent(self) -> 'FileContext':
        if self._parent is None:
            raise LookupError("no parent")

        return self._parent

    @property
    def stat(self) -> os.stat_result:
        if self._stat is None:
            if self._path is None:
                raise LookupError("stat not available and path not provided")
            self._stat = self._path.stat(follow_symlinks=False)
        return self._stat

    @functools.cached_property
    def relative_path(self) -> Path | None:
        """Get the relative path from the root context.

        Built recursively from the parent's cached result.
        """
        if self._name is None:
            return None

        if self._parent is None:
            return Path(self._name)

        parent_path = self._parent.relative_path
        if parent_path is None:
            return Path(self._name)

        return parent_path / self._name

    def is_file(self):
        """True for regular files. Symbolic links are never followed, so a link to a file is not a file."""
        return stat.S_ISREG(self.stat.st_mode)

    def is_dir(self):
        return stat.S_ISDIR(self.stat.st_mode)


def walk(path: Path, parent: FileContext) -> Generator[tuple[Path, FileContext], None, None]:
    """Recursively traverse a directory.

    Entries of each directory are visited in lexicographic order of their names: regular files and other
    non-directory entries first, then subdirectories, each of which is fully traversed before the next one.

    Raises:
        OSError: If a directory cannot be listed. The traversal is aborted.
    """
    entries = [FileContext(parent, child.name, path=child) for child in sorted(path.iterdir())]
    directories = []

    for context in entries:
        if context.is_dir():
            directories.append(context)
        else:
            yield path / context.name, context

    for context in directories:
        child = path / context.name
        yield child, context
        yield from walk(child, context)


def list_files(root: str | os.PathLike) -> set[Path]:
    """List every regular file under a directory.

    Directories are traversed but not listed. Symbolic links, devices and other special files are skipped.

    Args:
        root: Directory to enumerate

    Returns:
        Set of paths relative to root, in platform native form

    Raises:
        OSError: If root or any directory below it cannot be listed
    """
    root = Path(root)
    files: set[Path] = set()
    for _, context in walk(root, FileContext(None, None, root)):
        if context.is_file():
            relative_path = context.relative_path
            assert relative_path is not None, "File context must have a relative path"
            files.add(relative_path)
    return files
