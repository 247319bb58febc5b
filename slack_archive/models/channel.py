"""Channel records from channels.json."""

from __future__ import annotations

from slack_archive.models.base import ExportModel


class ChannelText(ExportModel):
    """Topic or purpose of a channel."""

    value: str = ""
    creator: str = ""
    last_set: int = 0


class ChannelPin(ExportModel):
    id: str = ""
    type: str = ""
    created: int = 0
    user: str = ""
    owner: str = ""


class Channel(ExportModel):
    id: str = ""
    name: str = ""
    created: int = 0
    creator: str = ""
    is_archived: bool = False
    is_general: bool = False
    members: list[str] = []
    pins: list[ChannelPin] = []
    topic: ChannelText = ChannelText()
    purpose: ChannelText = ChannelText()
