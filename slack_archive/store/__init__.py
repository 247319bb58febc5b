"""Read-only store over an exported Slack workspace."""

from slack_archive.store.log_store import ChannelNotFoundError, LogStore
from slack_archive.store.tables import ChannelTable, EmojiTable, UserTable, filter_channels

__all__ = [
    "ChannelNotFoundError",
    "ChannelTable",
    "EmojiTable",
    "LogStore",
    "UserTable",
    "filter_channels",
]
