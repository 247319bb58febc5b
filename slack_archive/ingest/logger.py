"""Rich-based logging utilities for the log ingestion pipeline.

Provides console output for channel loading and routes warnings
(skipped files and the like) through Python logging.
"""

from __future__ import annotations

from typing import Any

from slack_archive.utils.pipeline_logger import BasePipelineLogger


class IngestLogger(BasePipelineLogger):
    """Logger for message ingestion with rich output.

    Extends BasePipelineLogger with channel and day-file specific methods.
    """

    def __init__(self) -> None:
        super().__init__(__name__)

    # -------------------------------------------------------------------------
    # Ingest-specific: Source
    # -------------------------------------------------------------------------

    def source_opened(self, source: Any) -> None:
        """Log which backing store the export is read from."""
        self._logger.debug(f"Opened log source {source!r}")

    # -------------------------------------------------------------------------
    # Ingest-specific: Day Files
    # -------------------------------------------------------------------------

    def file_skipped(self, path: str) -> None:
        """Warn about an entry that is not a YYYY-MM-DD.json day file."""
        self._logger.warning(f"Skipping {path} (not a YYYY-MM-DD.json day file)")

    def file_loaded(self, path: str, visible: int, total: int) -> None:
        """Log a day file that was ingested."""
        self._logger.debug(f"Loaded {path}: {visible}/{total} visible messages")

    # -------------------------------------------------------------------------
    # Ingest-specific: Channel Processing
    # -------------------------------------------------------------------------

    def channel_start(self, channel_name: str, channel_id: str) -> None:
        """Log the start of channel loading."""
        self.console.print(
            f"\n[bold]#{channel_name}[/bold] [dim]({channel_id})[/dim]"
        )

    def channel_complete(self, message_count: int, month_count: int) -> None:
        """Log channel completion."""
        self.console.print(
            f"  [green]✓[/green] {message_count:,} messages in {month_count:,} months"
        )

    def channel_empty(self) -> None:
        """Log a channel without any visible messages."""
        self.console.print("  [dim]Empty channel, skipping[/dim]")

    # -------------------------------------------------------------------------
    # Summary
    # -------------------------------------------------------------------------

    def summary(
        self,
        channels: int = 0,
        messages: int = 0,
        threads: int = 0,
        elapsed: float = 0.0,
        **kwargs: Any,
    ) -> None:
        """Print final ingest summary."""
        self.print_summary(
            "Ingest",
            elapsed=elapsed,
            stats={
                "Channels": channels,
                "Messages": messages,
                "Threads": threads,
            },
            style="cyan",
        )


# Global logger instance
logger = IngestLogger()
