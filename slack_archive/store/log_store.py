"""LogStore: read-only query surface over an exported Slack workspace.

Holds the log source, the channel/user/emoji tables and one MessageTable
per channel. Message tables start empty and are filled the first time a
channel's messages are requested.
"""

from __future__ import annotations

import os

from slack_archive.config.settings import AppSettings
from slack_archive.ingest.logger import logger
from slack_archive.ingest.message_table import MessageTable
from slack_archive.models import Channel, Message, MonthKey, Thread, User
from slack_archive.source import LogEntryNotFoundError, LogSource, open_log_source
from slack_archive.source.errors import SlackArchiveError
from slack_archive.store.tables import ChannelTable, EmojiTable, UserTable

USERS_JSON = "users.json"
CHANNELS_JSON = "channels.json"


class ChannelNotFoundError(SlackArchiveError, KeyError):
    """Raised when a channel ID is not among the store's channels."""

    def __init__(self, channel_id: str) -> None:
        self.channel_id = channel_id
        super().__init__(f"not found channel: id={channel_id}")

    def __str__(self) -> str:
        return f"not found channel: id={self.channel_id}"


class LogStore:
    """Composition root over one log source.

    Args:
        source: Where the export is read from.
        settings: Channel allow list, emoji table path and channel directory
            naming. Defaults to AppSettings().
    """

    def __init__(self, source: LogSource, settings: AppSettings | None = None) -> None:
        self.settings = settings or AppSettings()
        self.src = source
        logger.source_opened(source)

        self.ut = UserTable(source, USERS_JSON)
        self.ct = ChannelTable(source, CHANNELS_JSON, self.settings.channels)
        try:
            self.et: EmojiTable | None = EmojiTable(source, self.settings.emoji_json)
        except LogEntryNotFoundError:
            # The emoji table is optional
            logger.debug(f"No emoji table at {self.settings.emoji_json}")
            self.et = None

        self.mts: dict[str, MessageTable] = {
            channel_id: MessageTable() for channel_id in self.ct.channel_map
        }
        self._loaded_channels: set[str] = set()

    @classmethod
    def open(
        cls, path: str | os.PathLike[str], settings: AppSettings | None = None
    ) -> "LogStore":
        """Open a directory or archive, detecting its layout automatically."""
        return cls(open_log_source(path), settings)

    # -------------------------------------------------------------------------
    # Channels & messages
    # -------------------------------------------------------------------------

    def get_channels(self) -> list[Channel]:
        return self.ct.channels

    def channel_dir(self, channel: Channel) -> str:
        """Directory holding a channel's day files."""
        if self.settings.channel_dir == "name":
            return channel.name
        return channel.id

    def _table(self, channel_id: str) -> MessageTable:
        try:
            return self.mts[channel_id]
        except KeyError:
            raise ChannelNotFoundError(channel_id) from None

    def get_messages_per_month(self, channel_id: str) -> dict[MonthKey, list[Message]]:
        """Return the channel's month buckets, ingesting its day files once.

        Raises:
            ChannelNotFoundError: The channel is unknown or filtered out.
            MessageFileError: A day file could not be decoded.
        """
        mt = self._table(channel_id)
        if channel_id not in self._loaded_channels:
            channel = self.ct.channel_map[channel_id]
            mt.read_directory(self.src, self.channel_dir(channel))
            self._loaded_channels.add(channel_id)
        return mt.msgs_map

    def has_next_month(self, channel_id: str, key: MonthKey) -> bool:
        mt = self.mts.get(channel_id)
        return mt is not None and key.next() in mt.msgs_map

    def has_prev_month(self, channel_id: str, key: MonthKey) -> bool:
        mt = self.mts.get(channel_id)
        return mt is not None and key.prev() in mt.msgs_map

    def get_thread(self, channel_id: str, ts: str) -> Thread | None:
        mt = self.mts.get(channel_id)
        if mt is None:
            return None
        return mt.thread_map.get(ts)

    # -------------------------------------------------------------------------
    # Users & emoji
    # -------------------------------------------------------------------------

    def get_user_by_id(self, user_id: str) -> User | None:
        return self.ut.user_map.get(user_id)

    def get_display_name_by_user_id(self, user_id: str) -> str:
        user = self.ut.user_map.get(user_id)
        return user.display_name if user else ""

    def get_display_name_map(self) -> dict[str, str]:
        return {
            user_id: self.get_display_name_by_user_id(user.id)
            for user_id, user in self.ut.user_map.items()
        }

    def get_emoji_map(self) -> dict[str, str]:
        """Emoji name to URL; empty when the export has no emoji table."""
        return self.et.url_map if self.et else {}
