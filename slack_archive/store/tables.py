"""Channel, user and emoji lookup tables decoded from the export root."""

from __future__ import annotations

from slack_archive.config.settings import ALL_CHANNELS
from slack_archive.models import Channel, User
from slack_archive.source import LogSource
from slack_archive.utils.json import read_source_json


def filter_channels(channels: list[Channel], allowed: list[str]) -> list[Channel]:
    """Keep channels named in ``allowed``, in allow-list order.

    A "*" entry selects every channel.
    """
    by_name = {c.name: c for c in reversed(channels)}
    selected: list[Channel] = []
    for name in allowed:
        if name == ALL_CHANNELS:
            return list(channels)
        if name in by_name:
            selected.append(by_name[name])
    return selected


class ChannelTable:
    """Channels from channels.json, filtered and sorted by name."""

    def __init__(self, source: LogSource, path: str, allowed: list[str]) -> None:
        channels: list[Channel] = read_source_json(source, path, list[Channel])
        self.channels = sorted(filter_channels(channels, allowed), key=lambda c: c.name)
        self.channel_map: dict[str, Channel] = {c.id: c for c in self.channels}


class UserTable:
    """Users from users.json, keyed by user ID and by bot ID."""

    def __init__(self, source: LogSource, path: str) -> None:
        self.users: list[User] = read_source_json(source, path, list[User])
        self.user_map: dict[str, User] = {}
        for user in self.users:
            self.user_map[user.id] = user
            # Bot messages carry the bot ID rather than the user ID
            if user.profile.bot_id:
                self.user_map[user.profile.bot_id] = user


class EmojiTable:
    """Custom emoji name to image URL."""

    def __init__(self, source: LogSource, path: str) -> None:
        self.url_map: dict[str, str] = read_source_json(source, path, dict[str, str])
