"""Message records from exported YYYY-MM-DD.json day files.

Field names follow the Slack export format:
https://slack.com/help/articles/220556107
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Any

from pydantic import Field

from slack_archive.models.base import ExportModel
from slack_archive.utils.time import ts_to_datetime

# Subtypes rendered in the month view; everything else (channel_join, ...) is hidden
VISIBLE_SUBTYPES = frozenset({"bot_message", "slackbot_response", "thread_broadcast"})

# Thread replies with these subtypes are also shown in the month view
BROADCAST_SUBTYPES = frozenset({"thread_broadcast", "bot_message", "slackbot_response"})

_TOKEN_RE = re.compile(r"\?t=xoxe-[-a-f0-9]+$")

# MessageFile URL fields that may carry a short-lived access token
_TOKEN_URL_FIELDS = (
    "url_private",
    "url_private_download",
    "thumb_64",
    "thumb_80",
    "thumb_160",
    "thumb_360",
    "thumb_480",
    "thumb_720",
    "thumb_800",
    "thumb_960",
    "thumb_1024",
    "thumb_360_gif",
    "thumb_480_gif",
    "deanimate_gif",
    "thumb_video",
)


class MessageUserProfile(ExportModel):
    avatar_hash: str = ""
    image_72: str = ""
    first_name: str = ""
    real_name: str = ""
    display_name: str = ""
    team: str = ""
    name: str = ""
    is_restricted: bool = False
    is_ultra_restricted: bool = False


class MessageAttachment(ExportModel):
    id: int = 0
    service_name: str = ""
    service_icon: str = ""
    author_icon: str = ""
    author_name: str = ""
    author_subname: str = ""
    title: str = ""
    title_link: str = ""
    text: str = ""
    fallback: str = ""
    thumb_url: str = ""
    thumb_width: int = 0
    thumb_height: int = 0
    from_url: str = ""
    original_url: str = ""
    video_html: str = ""
    video_html_width: int = 0
    video_html_height: int = 0
    footer: str = ""
    footer_icon: str = ""


class MessageReaction(ExportModel):
    name: str = ""
    users: list[str] = []
    count: int = 0


class MessageEdited(ExportModel):
    user: str = ""
    ts: str = ""


class MessageIcons(ExportModel):
    image_48: str = ""


class MessageFile(ExportModel):
    """A file shared in a message."""

    id: str = ""
    created: int = 0
    timestamp: int = 0
    name: str = ""
    title: str = ""
    mimetype: str = ""
    filetype: str = ""
    pretty_type: str = ""
    user: str = ""
    size: int = 0
    mode: str = ""
    is_external: bool = False
    external_type: str = ""
    is_public: bool = False
    display_as_bot: bool = False
    username: str = ""
    url_private: str = ""
    url_private_download: str = ""
    thumb_64: str = ""
    thumb_80: str = ""
    thumb_160: str = ""
    thumb_360: str = ""
    thumb_360_w: int = 0
    thumb_360_h: int = 0
    thumb_480: str = ""
    thumb_480_w: int = 0
    thumb_480_h: int = 0
    thumb_720: str = ""
    thumb_720_w: int = 0
    thumb_720_h: int = 0
    thumb_800: str = ""
    thumb_800_w: int = 0
    thumb_800_h: int = 0
    thumb_960: str = ""
    thumb_960_w: int = 0
    thumb_960_h: int = 0
    thumb_1024: str = ""
    thumb_1024_w: int = 0
    thumb_1024_h: int = 0
    thumb_360_gif: str = ""
    thumb_480_gif: str = ""
    deanimate_gif: str = ""
    thumb_tiny: str = ""
    original_w: int = 0
    original_h: int = 0
    thumb_video: str = ""
    permalink: str = ""
    permalink_public: str = ""

    def top_level_mimetype(self) -> str:
        """Return the part of the mimetype before "/", e.g. "image"."""
        top, sep, _ = self.mimetype.partition("/")
        return top if sep else ""

    def thumb_image_width(self) -> int:
        return self.thumb_1024_w if self.thumb_1024 else self.original_w

    def thumb_image_height(self) -> int:
        return self.thumb_1024_h if self.thumb_1024 else self.original_h

    def remove_token_from_urls(self) -> None:
        for field_name in _TOKEN_URL_FIELDS:
            setattr(self, field_name, _TOKEN_RE.sub("", getattr(self, field_name)))


class Message(ExportModel):
    """A single message record.

    ``ts`` and ``thread_ts`` are kept as strings: every timestamp in an
    export has the same "seconds.microseconds" width, so string order is
    chronological order.
    """

    client_msg_id: str = ""
    type: str = ""
    subtype: str = ""
    text: str = ""
    user: str = ""
    ts: str
    thread_ts: str = ""
    parent_user_id: str = ""
    username: str = ""
    bot_id: str = ""
    team: str = ""
    user_team: str = ""
    source_team: str = ""
    user_profile: MessageUserProfile | None = None
    attachments: list[MessageAttachment] = []
    blocks: list[Any] = []
    reactions: list[MessageReaction] = []
    edited: MessageEdited | None = None
    icons: MessageIcons | None = None
    files: list[MessageFile] = []
    root: Message | None = None
    display_as_bot: bool = False
    upload: bool = False

    # True when the author matches the previous message in its month bucket
    trail: bool = Field(default=False, exclude=True)

    def is_visible(self) -> bool:
        """Whether the message belongs in the month view (channel_join etc. do not)."""
        return self.subtype == "" or self.subtype in VISIBLE_SUBTYPES

    def is_root_of_thread(self) -> bool:
        return self.ts == self.thread_ts

    @property
    def created_at(self) -> datetime:
        return ts_to_datetime(self.ts)

    def remove_token_from_urls(self) -> None:
        """Strip access tokens appended to file URLs by the exporter."""
        for f in self.files:
            f.remove_token_from_urls()
