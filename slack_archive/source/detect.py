"""Pick a log source for an arbitrary path and detect the archive root."""

from __future__ import annotations

import logging
import os
import tarfile
import zipfile
from contextlib import ExitStack

from slack_archive.source.base import LogSource
from slack_archive.source.directory import DirSource
from slack_archive.source.errors import InvalidLogSourceError, PrefixDetectionError
from slack_archive.source.tar import TarSource
from slack_archive.source.zip import ZipSource

logger = logging.getLogger(__name__)

# Every export holds exactly one users.json directly under its root
MARKER_NAME = "users.json"
MARKER_SUFFIX = "/" + MARKER_NAME

# Raised by the archive readers on damaged or truncated input (gzip and bz2
# report bad data as OSError)
CORRUPT_ARCHIVE_ERRORS = (tarfile.TarError, zipfile.BadZipFile, EOFError, OSError)


def detect_prefix(entry_name: str) -> str | None:
    """Return the root prefix implied by a marker entry, or None."""
    if entry_name == MARKER_NAME:
        return ""
    if entry_name.endswith(MARKER_SUFFIX):
        return entry_name[: -len(MARKER_SUFFIX)]
    return None


def open_log_source(path: str | os.PathLike[str]) -> LogSource:
    """Open a directory or archive as a log source.

    Directories map to DirSource. Anything else is opened as a zip (".zip")
    or tar archive and scanned in order for the users.json marker; the path
    in front of it becomes the prefix stripped from all logical names.

    Raises:
        InvalidLogSourceError: The path does not exist, is not a regular file
            or is not a readable archive.
        UnsupportedArchiveError: The archive extension is not supported.
        PrefixDetectionError: No users.json entry was found in the archive.
    """
    path = os.fspath(path)
    if not os.path.exists(path):
        raise InvalidLogSourceError(path, "no such file or directory")
    if os.path.isdir(path):
        return DirSource(path)

    source: TarSource | ZipSource
    if os.path.splitext(path)[1].lower() == ".zip":
        source = ZipSource(path)
    else:
        source = TarSource(path)

    try:
        prefix = _find_prefix(source)
    except CORRUPT_ARCHIVE_ERRORS as exc:
        raise InvalidLogSourceError(path, f"corrupt archive ({exc})") from exc
    if prefix is None:
        raise PrefixDetectionError(path)

    source.prefix = prefix
    logger.debug("Detected prefix %r in %s", prefix, path)
    return source


def _find_prefix(source: TarSource | ZipSource) -> str | None:
    """Scan entry names in archive order for the first marker."""
    with ExitStack() as stack:
        if isinstance(source, ZipSource):
            names = (info.filename for info in source.open_zip(stack).infolist())
        else:
            names = (member.name for member in source.open_tar(stack))
        for name in names:
            prefix = detect_prefix(name)
            if prefix is not None:
                return prefix
    return None
