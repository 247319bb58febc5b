"""Slack Archive Ingest.

This package parses exported YYYY-MM-DD.json day files into per-channel
month buckets and reply threads.

Usage:
    python -m slack_archive.ingest                      # Load the export named in config.json
    python -m slack_archive.ingest --source export.zip  # Load a specific export
"""

from slack_archive.ingest.message_table import (
    MESSAGE_FILENAME_RE,
    MessageFileError,
    MessageTable,
)

__all__ = ["MESSAGE_FILENAME_RE", "MessageFileError", "MessageTable"]
