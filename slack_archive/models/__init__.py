"""Pydantic models for exported Slack data."""

from slack_archive.models.base import ExportModel
from slack_archive.models.channel import Channel, ChannelPin, ChannelText
from slack_archive.models.message import (
    BROADCAST_SUBTYPES,
    VISIBLE_SUBTYPES,
    Message,
    MessageAttachment,
    MessageEdited,
    MessageFile,
    MessageIcons,
    MessageReaction,
    MessageUserProfile,
)
from slack_archive.models.month import MonthKey
from slack_archive.models.thread import Thread
from slack_archive.models.user import User, UserProfile

__all__ = [
    "BROADCAST_SUBTYPES",
    "VISIBLE_SUBTYPES",
    "Channel",
    "ExportModel",
    "ChannelPin",
    "ChannelText",
    "Message",
    "MessageAttachment",
    "MessageEdited",
    "MessageFile",
    "MessageIcons",
    "MessageReaction",
    "MessageUserProfile",
    "MonthKey",
    "Thread",
    "User",
    "UserProfile",
]
