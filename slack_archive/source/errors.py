"""Exceptions raised by log sources."""

from __future__ import annotations

import errno


class SlackArchiveError(Exception):
    """Base class for errors raised by slack_archive."""


class InvalidLogSourceError(SlackArchiveError):
    """Raised when a log source cannot be constructed.

    Covers a missing or non-regular backing file and an archive that cannot
    be read. Not retryable without fixing the input.
    """

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{reason}: {path}")


class UnsupportedArchiveError(InvalidLogSourceError):
    """Raised when an archive's extension maps to no known compression."""

    def __init__(self, path: str) -> None:
        super().__init__(path, "unsupported compression type")


class PrefixDetectionError(InvalidLogSourceError):
    """Raised when the root marker entry is absent from an archive."""

    def __init__(self, path: str) -> None:
        super().__init__(path, "failed to detect prefix in archive")


class LogEntryNotFoundError(SlackArchiveError, FileNotFoundError):
    """Raised when a named entry does not exist in a log source.

    Subclasses FileNotFoundError so callers may treat optional inputs
    the same way they would a missing file on disk.
    """

    def __init__(self, source: str, name: str) -> None:
        self.source = source
        self.name = name
        super().__init__(errno.ENOENT, "no such entry", f"{source}:{name}")
