"""Per-channel message table built from YYYY-MM-DD.json day files.

Day files are read through a LogSource and merged into month buckets.
Each file is ingested at most once; after every file all buckets are
re-sorted by ts and their trail flags recomputed, so the table is ready
to query no matter which order files arrive in.
"""

from __future__ import annotations

import posixpath
import re

from pydantic import TypeAdapter, ValidationError

from slack_archive.ingest.logger import logger
from slack_archive.models import BROADCAST_SUBTYPES, Message, MonthKey, Thread
from slack_archive.source import LogSource, read_dir_all
from slack_archive.source.base import clean_name
from slack_archive.source.errors import SlackArchiveError

# "{year}-{month}-{day}.json"
MESSAGE_FILENAME_RE = re.compile(r"^(\d{4})-(\d{2})-\d{2}\.json$")

_MESSAGES = TypeAdapter(list[Message])


class MessageFileError(SlackArchiveError):
    """Raised when a day file is not a valid JSON array of messages."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__(f"failed to decode {path}: {reason}")


class MessageTable:
    """Messages of one channel, bucketed by month, plus its reply threads.

    Attributes:
        msgs_map: Visible messages per month, sorted by ts.
        thread_map: Threads keyed by the root message's ts.
    """

    def __init__(self) -> None:
        self.msgs_map: dict[MonthKey, list[Message]] = {}
        self.thread_map: dict[str, Thread] = {}
        self._loaded_files: set[str] = set()

    def is_loaded(self, path: str) -> bool:
        return _file_id(path) in self._loaded_files

    def read_directory(self, source: LogSource, path: str) -> None:
        """Ingest every day file directly under ``path``.

        Entries are processed in lexicographic order since directory
        listing order differs between source types.

        Raises:
            LogEntryNotFoundError: The directory does not exist.
            MessageFileError: A day file could not be decoded.
        """
        with source.open_dir(path) as it:
            names = sorted(read_dir_all(it))
        for name in names:
            self.read_file(source, name)

    def read_file(self, source: LogSource, path: str) -> None:
        """Ingest a single day file. Files already ingested are ignored.

        Entries whose name is not YYYY-MM-DD.json are skipped with a warning.
        """
        file_id = _file_id(path)
        if file_id in self._loaded_files:
            return

        match = MESSAGE_FILENAME_RE.match(posixpath.basename(file_id))
        if match is None:
            logger.file_skipped(path)
            return
        # Bucket by the filename's month, not the message timestamps
        key = MonthKey.parse(match.group(1), match.group(2))

        with source.open(path) as f:
            content = f.read()
        try:
            msgs = _MESSAGES.validate_json(content)
        except ValidationError as exc:
            raise MessageFileError(path, str(exc)) from exc

        visible_msgs: list[Message] = []
        for msg in msgs:
            if not msg.is_visible():
                continue
            msg.remove_token_from_urls()
            thread_ts = msg.thread_ts
            if (
                not thread_ts
                or msg.is_root_of_thread()
                or msg.subtype in BROADCAST_SUBTYPES
            ):
                visible_msgs.append(msg)
            if thread_ts:
                thread = self.thread_map.setdefault(thread_ts, Thread())
                if msg.is_root_of_thread():
                    thread.root = msg
                else:
                    thread.replies.append(msg)

        if visible_msgs:
            self.msgs_map.setdefault(key, []).extend(visible_msgs)

        self._reorder()

        self._loaded_files.add(file_id)
        logger.file_loaded(path, len(visible_msgs), len(msgs))

    def _reorder(self) -> None:
        """Sort every bucket by ts and recompute trail flags."""
        for msgs in self.msgs_map.values():
            # list.sort is stable; all ts share one width so str order is time order
            msgs.sort(key=lambda m: m.ts)
            prev: Message | None = None
            for msg in msgs:
                msg.trail = prev is not None and msg.user == prev.user
                prev = msg

    def message_count(self) -> int:
        return sum(len(msgs) for msgs in self.msgs_map.values())

    def months(self) -> list[MonthKey]:
        """Month keys with at least one visible message, oldest first."""
        return sorted(self.msgs_map)


def _file_id(path: str) -> str:
    """Absolute logical path identifying a day file within its source."""
    return "/" + clean_name(path)
