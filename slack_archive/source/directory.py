"""Log source over a plain directory tree."""

from __future__ import annotations

import os
from typing import IO

from slack_archive.source.base import LogSourceIter, clean_name
from slack_archive.source.errors import LogEntryNotFoundError


class DirSource:
    """Log source backed by a directory on the filesystem.

    Logical names are joined onto the base path. Directory listings expose
    both files and immediate subdirectories.
    """

    def __init__(self, base_path: str | os.PathLike[str]) -> None:
        self.base_path = os.fspath(base_path)

    def __repr__(self) -> str:
        return f"DirSource({self.base_path!r})"

    def _resolve(self, name: str) -> str:
        return os.path.join(self.base_path, *clean_name(name).split("/"))

    def open(self, name: str) -> IO[bytes]:
        path = self._resolve(name)
        try:
            return open(path, "rb")
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError) as exc:
            # Archives have no file at a directory path either
            raise LogEntryNotFoundError(self.base_path, name) from exc

    def open_dir(self, name: str) -> "DirSourceIter":
        path = self._resolve(name)
        try:
            entries = os.scandir(path)
        except (FileNotFoundError, NotADirectoryError) as exc:
            raise LogEntryNotFoundError(self.base_path, name) from exc
        return DirSourceIter(clean_name(name), entries)


class DirSourceIter(LogSourceIter):
    """Iterates a directory's entries through os.scandir."""

    def __init__(self, name: str, entries: "os._ScandirIterator[str]") -> None:
        super().__init__()
        self._name = name
        self._entries = entries

    def _advance(self) -> str | None:
        entry = next(self._entries, None)
        if entry is None:
            return None
        return f"{self._name}/{entry.name}" if self._name else entry.name

    def _release(self) -> None:
        self._entries.close()
