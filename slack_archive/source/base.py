"""Common log source interface.

A log source gives read-only access to the entries of an exported Slack
workspace, addressed by forward-slash logical paths regardless of whether
the export is a directory tree, a tar archive or a zip archive.
"""

from __future__ import annotations

import posixpath
from abc import ABC, abstractmethod
from contextlib import ExitStack
from typing import IO, TYPE_CHECKING, Any, Iterator, Protocol

from slack_archive.source.errors import LogEntryNotFoundError

if TYPE_CHECKING:
    from typing import Self


class LogSource(Protocol):
    """Read-only access to log entries by logical path."""

    def open(self, name: str) -> IO[bytes]:
        """Open a named entry for reading.

        Raises:
            LogEntryNotFoundError: If the entry does not exist.
        """
        ...

    def open_dir(self, name: str) -> "LogSourceIter":
        """Open a directory to iterate its immediate children."""
        ...


class LogSourceIter(ABC):
    """Forward-only iterator over the immediate children of a directory.

    Call next() until it returns False, reading the current child from
    name. The iterator also supports ``for child in it`` and ``with`` blocks;
    close() releases the underlying resources whether or not it was drained.
    """

    def __init__(self) -> None:
        self._current: str | None = None
        self._closed = False

    @abstractmethod
    def _advance(self) -> str | None:
        """Return the logical path of the next child, or None when exhausted."""
        ...

    @abstractmethod
    def _release(self) -> None:
        """Release resources held by the iterator."""
        ...

    def next(self) -> bool:
        """Advance to the next child. Returns False when exhausted."""
        if self._closed:
            self._current = None
            return False
        self._current = self._advance()
        return self._current is not None

    @property
    def name(self) -> str:
        """Logical path of the current child ("" before the first next())."""
        return self._current or ""

    def close(self) -> None:
        self._current = None
        if not self._closed:
            self._closed = True
            self._release()

    def __iter__(self) -> Iterator[str]:
        while self.next():
            yield self.name

    def __enter__(self) -> "Self":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()


class ArchiveDirIter(LogSourceIter):
    """Single linear scan over archive entries yielding immediate children.

    Subdirectories implied only by deeper entries are synthesized, and every
    child is yielded once no matter how many entries lie below it. Build
    instances with open(), which also checks that the directory exists.
    """

    def __init__(self, entries: Iterator[tuple[str, bool]], name: str) -> None:
        super().__init__()
        # The root always exists, even in an empty archive
        self._dir_seen = not name
        self._children = self._scan(entries, name)
        self._pending: str | None = None
        self._resources = ExitStack()

    @classmethod
    def open(
        cls,
        filename: str,
        entries: Iterator[tuple[str, bool]],
        name: str,
        stack: ExitStack,
    ) -> "ArchiveDirIter":
        """List directory ``name`` from (logical name, is directory) pairs.

        On success the iterator takes over every handle on ``stack``;
        otherwise they stay with the caller's stack.

        Raises:
            LogEntryNotFoundError: No entry lies at or below ``name``.
        """
        it = cls(entries, clean_name(name))
        stack.callback(it._children.close)
        if not it._exists():
            raise LogEntryNotFoundError(filename, name)
        it._resources = stack.pop_all()
        return it

    def _scan(self, entries: Iterator[tuple[str, bool]], name: str) -> Iterator[str]:
        seen: set[str] = set()
        for logical, is_dir in entries:
            if logical == name:
                self._dir_seen = self._dir_seen or is_dir
                continue
            child = immediate_child(logical, name)
            if child is None or child in seen:
                continue
            seen.add(child)
            yield child

    def _exists(self) -> bool:
        # Scans up to the first child; _advance hands it out later
        self._pending = next(self._children, None)
        return self._pending is not None or self._dir_seen

    def _advance(self) -> str | None:
        if self._pending is not None:
            child, self._pending = self._pending, None
            return child
        return next(self._children, None)

    def _release(self) -> None:
        self._resources.close()


class EntryStream:
    """Binary reader over an archive entry that owns its resource chain.

    Closing the stream unwinds the ExitStack, which closes the entry reader,
    any decompressor and the backing file handle in reverse order.
    """

    def __init__(self, reader: IO[bytes], resources: ExitStack) -> None:
        self._reader = reader
        self._resources = resources

    def read(self, size: int = -1) -> bytes:
        return self._reader.read(size)

    def readable(self) -> bool:
        return True

    @property
    def closed(self) -> bool:
        return self._reader is None

    def close(self) -> None:
        if self._reader is not None:
            self._reader = None  # type: ignore[assignment]
            self._resources.close()

    def __iter__(self) -> Iterator[bytes]:
        return iter(self._reader)

    def __enter__(self) -> "Self":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()


def read_dir_all(it: LogSourceIter) -> list[str]:
    """Drain a directory iterator into a list of logical paths."""
    return [name for name in it if name]


def clean_name(name: str) -> str:
    """Normalize a logical path: no leading "./" or "/", no trailing "/"."""
    stripped = name.strip("/")
    if not stripped:
        return ""
    cleaned = posixpath.normpath(stripped)
    return "" if cleaned == "." else cleaned


def strip_prefix(entry_name: str, prefix: str) -> str | None:
    """Strip the root prefix from an archive entry name.

    Returns the cleaned logical path, or None when the entry lies outside
    the prefix.
    """
    if prefix:
        head = prefix.rstrip("/") + "/"
        if not entry_name.startswith(head):
            return None
        entry_name = entry_name[len(head):]
    return clean_name(entry_name)


def immediate_child(logical_name: str, dir_name: str) -> str | None:
    """Return the immediate child of dir_name that contains logical_name.

    For a direct child the child's own path is returned; for deeper entries
    the path of the intermediate subdirectory is returned. Returns None when
    logical_name is not below dir_name.
    """
    if dir_name:
        head = dir_name + "/"
        if not logical_name.startswith(head):
            return None
        rest = logical_name[len(head):]
    else:
        rest = logical_name
    if not rest:
        return None
    first = rest.split("/", 1)[0]
    return posixpath.join(dir_name, first) if dir_name else first
