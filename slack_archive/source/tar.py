"""Log source over a tar archive, optionally gzip or bzip2 compressed.

Tar archives are read strictly sequentially: every open() and open_dir()
re-opens the backing file and scans member headers from the start in
tarfile stream mode, so no seeking is ever required of the decompressor.
"""

from __future__ import annotations

import bz2
import gzip
import os
import tarfile
from contextlib import ExitStack
from enum import Enum
from typing import IO, Iterator

from slack_archive.source.base import ArchiveDirIter, EntryStream, clean_name, strip_prefix
from slack_archive.source.errors import (
    InvalidLogSourceError,
    LogEntryNotFoundError,
    UnsupportedArchiveError,
)


class Compression(str, Enum):
    """Compression applied to the tar stream."""

    RAW = "raw"
    GZIP = "gzip"
    BZIP2 = "bzip2"


_EXTENSIONS = {
    ".tar": Compression.RAW,
    ".gz": Compression.GZIP,
    ".bz2": Compression.BZIP2,
}


def check_regular_file(filename: str) -> None:
    """Raise InvalidLogSourceError unless filename is an existing regular file."""
    if not os.path.exists(filename):
        raise InvalidLogSourceError(filename, "no such file")
    if not os.path.isfile(filename):
        raise InvalidLogSourceError(filename, "not regular file")


class TarSource:
    """Log source backed by a tar, tar.gz or tar.bz2 file.

    Args:
        filename: Path of the archive. The extension selects the compression.
        prefix: Root prefix stripped from every member name.

    Raises:
        UnsupportedArchiveError: The extension is not .tar, .gz or .bz2.
        InvalidLogSourceError: The file is missing or not a regular file.
    """

    def __init__(self, filename: str | os.PathLike[str], prefix: str = "") -> None:
        self.filename = os.fspath(filename)
        ext = os.path.splitext(self.filename)[1].lower()
        if ext not in _EXTENSIONS:
            raise UnsupportedArchiveError(self.filename)
        check_regular_file(self.filename)
        self.compression = _EXTENSIONS[ext]
        self.prefix = prefix

    def __repr__(self) -> str:
        return f"TarSource({self.filename!r}, prefix={self.prefix!r})"

    def open_tar(self, stack: ExitStack) -> tarfile.TarFile:
        """Open the archive as a sequential tar stream.

        Every handle is registered on ``stack`` as soon as it exists, so a
        failure part way through still releases what was opened.
        """
        f = stack.enter_context(open(self.filename, "rb"))
        stream: IO[bytes]
        if self.compression is Compression.GZIP:
            stream = stack.enter_context(gzip.GzipFile(fileobj=f, mode="rb"))
        elif self.compression is Compression.BZIP2:
            stream = stack.enter_context(bz2.BZ2File(f, mode="rb"))
        else:
            stream = f
        return stack.enter_context(tarfile.open(fileobj=stream, mode="r|"))

    def iter_members(self, tf: tarfile.TarFile) -> Iterator[tuple[str, tarfile.TarInfo]]:
        """Yield (logical name, member) for members under the root prefix."""
        for member in tf:
            name = strip_prefix(member.name, self.prefix)
            if name:
                yield name, member

    def open(self, name: str) -> EntryStream:
        target = clean_name(name)
        with ExitStack() as stack:
            tf = self.open_tar(stack)
            for logical, member in self.iter_members(tf):
                if logical != target or not member.isfile():
                    continue
                reader = tf.extractfile(member)
                if reader is None:
                    break
                return EntryStream(reader, stack.pop_all())
        raise LogEntryNotFoundError(self.filename, name)

    def open_dir(self, name: str) -> ArchiveDirIter:
        """List the immediate children of a directory in one linear scan."""
        with ExitStack() as stack:
            tf = self.open_tar(stack)
            entries = ((logical, member.isdir()) for logical, member in self.iter_members(tf))
            return ArchiveDirIter.open(self.filename, entries, name, stack)
