"""Log source over a zip archive.

Unlike tar streams, zip files carry a central directory, so lookups go
through ZipFile.getinfo() instead of a linear scan of local headers.
"""

from __future__ import annotations

import os
import zipfile
from contextlib import ExitStack
from typing import Iterator

from slack_archive.source.base import ArchiveDirIter, EntryStream, clean_name, strip_prefix
from slack_archive.source.errors import LogEntryNotFoundError, UnsupportedArchiveError
from slack_archive.source.tar import check_regular_file


class ZipSource:
    """Log source backed by a .zip file.

    Args:
        filename: Path of the archive.
        prefix: Root prefix stripped from every entry name.
    """

    def __init__(self, filename: str | os.PathLike[str], prefix: str = "") -> None:
        self.filename = os.fspath(filename)
        if os.path.splitext(self.filename)[1].lower() != ".zip":
            raise UnsupportedArchiveError(self.filename)
        check_regular_file(self.filename)
        self.prefix = prefix

    def __repr__(self) -> str:
        return f"ZipSource({self.filename!r}, prefix={self.prefix!r})"

    def open_zip(self, stack: ExitStack) -> zipfile.ZipFile:
        return stack.enter_context(zipfile.ZipFile(self.filename))

    def iter_names(self, zf: zipfile.ZipFile) -> Iterator[tuple[str, zipfile.ZipInfo]]:
        """Yield (logical name, info) for entries under the root prefix."""
        for info in zf.infolist():
            name = strip_prefix(info.filename, self.prefix)
            if name:
                yield name, info

    def _entry_name(self, name: str) -> str:
        cleaned = clean_name(name)
        if self.prefix:
            return f"{self.prefix.rstrip('/')}/{cleaned}"
        return cleaned

    def open(self, name: str) -> EntryStream:
        with ExitStack() as stack:
            zf = self.open_zip(stack)
            try:
                info = zf.getinfo(self._entry_name(name))
            except KeyError:
                info = None
            if info is not None and not info.is_dir():
                reader = stack.enter_context(zf.open(info))
                return EntryStream(reader, stack.pop_all())
        raise LogEntryNotFoundError(self.filename, name)

    def open_dir(self, name: str) -> ArchiveDirIter:
        """List the immediate children of a directory from the central directory."""
        with ExitStack() as stack:
            zf = self.open_zip(stack)
            entries = ((logical, info.is_dir()) for logical, info in self.iter_names(zf))
            return ArchiveDirIter.open(self.filename, entries, name, stack)
