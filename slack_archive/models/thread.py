"""Reply threads reconstructed from day files."""

from __future__ import annotations

from dataclasses import dataclass, field

from slack_archive.models.message import Message


@dataclass
class Thread:
    """A thread root and its replies, keyed elsewhere by the root's ts.

    Replies keep the order they were encountered in while ingesting; they
    are not re-sorted. The root stays None until the file holding it is read.
    """

    root: Message | None = None
    replies: list[Message] = field(default_factory=list)

    @property
    def num_replies(self) -> int:
        return len(self.replies)

    @property
    def last_reply(self) -> Message | None:
        return self.replies[-1] if self.replies else None
