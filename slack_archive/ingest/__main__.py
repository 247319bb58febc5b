"""CLI entry point for slack_archive.ingest.

Loads every configured channel of an export and prints a summary.

Usage:
    python -m slack_archive.ingest                       # Use config.json
    python -m slack_archive.ingest --source export.tar.gz
    python -m slack_archive.ingest --verbose             # Show more details
"""

from __future__ import annotations

import argparse
import logging
import sys

from slack_archive.ingest.logger import logger
from slack_archive.ingest.run import run_ingest
from slack_archive.utils.logging import setup_logging


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Slack Archive Ingest",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m slack_archive.ingest
      Load the export named by log_source in config.json

  python -m slack_archive.ingest --source slack-export.zip
      Load a zip export, detecting its root automatically

  python -m slack_archive.ingest --config /path/to/config.json
      Use a custom config file
        """,
    )

    parser.add_argument(
        "--config",
        type=str,
        default="config.json",
        help="Path to config.json (default: config.json)",
    )
    parser.add_argument(
        "--source",
        type=str,
        help="Export directory or archive (overrides log_source in config)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output (DEBUG level)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode with third-party library logs",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        help="Optional file to write logs to",
    )

    args = parser.parse_args()

    setup_logging(
        level=logging.DEBUG if args.verbose or args.debug else logging.INFO,
        log_file=args.log_file,
        debug_third_party=args.debug,
    )

    logger.info("Starting Slack Archive Ingest")

    try:
        run_ingest(config_path=args.config, source=args.source)
        logger.success("Ingest complete!")
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        raise


if __name__ == "__main__":
    main()
