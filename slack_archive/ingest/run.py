"""Main orchestration for loading an export.

Opens the configured log source, ingests every allowed channel and
reports counts.
"""

from __future__ import annotations

import time
from dataclasses import dataclass

from slack_archive.config.settings import AppSettings, load_config
from slack_archive.ingest.logger import logger
from slack_archive.source import LogEntryNotFoundError
from slack_archive.store import LogStore


@dataclass
class IngestResult:
    """Counts collected while loading an export."""

    channels: int = 0
    messages: int = 0
    threads: int = 0


def ingest_store(store: LogStore) -> IngestResult:
    """Load the messages of every channel in the store."""
    result = IngestResult()
    for channel in store.get_channels():
        logger.channel_start(channel.name, channel.id)
        try:
            msgs_map = store.get_messages_per_month(channel.id)
        except LogEntryNotFoundError:
            # Exports omit the directory of channels that never had a message
            logger.warning(f"No day files for #{channel.name}")
            continue
        if not msgs_map:
            logger.channel_empty()
            continue
        mt = store.mts[channel.id]
        message_count = mt.message_count()
        logger.channel_complete(message_count, len(msgs_map))
        result.channels += 1
        result.messages += message_count
        result.threads += len(mt.thread_map)
    return result


def run_ingest(
    config_path: str = "config.json",
    source: str | None = None,
    settings: AppSettings | None = None,
) -> IngestResult:
    """Entry point for loading an export and printing its summary."""
    start_time = time.time()
    settings = settings or load_config(config_path)
    path = source or settings.log_source
    store = LogStore.open(path, settings)

    with logger.block("Log source") as block:
        block.field("path", path, color="magenta")
        block.field("users", len(store.ut.users))
        block.field("channels", len(store.get_channels()))
        block.field("custom emoji", len(store.get_emoji_map()))

    result = ingest_store(store)
    logger.summary(
        channels=result.channels,
        messages=result.messages,
        threads=result.threads,
        elapsed=time.time() - start_time,
    )
    return result
