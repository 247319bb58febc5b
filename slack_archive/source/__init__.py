"""Read-only access to exported Slack logs.

Exports may be a plain directory, a tar archive (raw, gzip or bzip2) or a
zip archive; all are exposed through the same LogSource interface.

Usage:
    source = open_log_source("slack-export.tar.gz")
    with source.open("users.json") as f:
        data = f.read()
"""

from slack_archive.source.base import (
    ArchiveDirIter,
    EntryStream,
    LogSource,
    LogSourceIter,
    read_dir_all,
)
from slack_archive.source.detect import open_log_source
from slack_archive.source.directory import DirSource
from slack_archive.source.errors import (
    InvalidLogSourceError,
    LogEntryNotFoundError,
    PrefixDetectionError,
    SlackArchiveError,
    UnsupportedArchiveError,
)
from slack_archive.source.tar import TarSource
from slack_archive.source.zip import ZipSource

__all__ = [
    "ArchiveDirIter",
    "DirSource",
    "EntryStream",
    "InvalidLogSourceError",
    "LogEntryNotFoundError",
    "LogSource",
    "LogSourceIter",
    "PrefixDetectionError",
    "SlackArchiveError",
    "TarSource",
    "UnsupportedArchiveError",
    "ZipSource",
    "open_log_source",
    "read_dir_all",
]
