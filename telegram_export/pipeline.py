#!/usr/bin/env python3
"""
Telegram Export Pipeline

Orchestrates parsing of a Telegram Desktop HTML export directory.

Pipeline Steps:
1. Find the messages*.html fragment files
2. Split them into one contiguous range per worker
3. Parse the ranges in parallel and merge them into one message room
4. Write the room to disk

Usage:
  # Parse an export and write messages.json next to it
  telegram-export ~/Downloads/Telegram\\ Desktop/ChatExport_30_12_2019

  # Four workers, explicit time zone, JSONL sorted by send time
  telegram-export ./ChatExport --workers 4 --timezone Europe/Berlin \\
      --format jsonl --sort --output chat.jsonl

Environment Variables:
- TELEGRAM_EXPORT_TIMEZONE (default Asia/Jakarta)
- TELEGRAM_EXPORT_MAX_WORKERS (default: number of CPU cores)
- TELEGRAM_EXPORT_OUTPUT_FORMAT (default json)
"""

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence, Union

from telegram_export.config import ParserConfig
from telegram_export.exceptions import ExportParsingError
from telegram_export.steps import (
    OUTPUT_FORMATS,
    ParallelExtractor,
    index_export_directory,
    save_room,
)
from telegram_export.strategies.parsing import (
    DEFAULT_TIME_ZONE,
    MessageRoom,
    TelegramHtmlParser,
    TimeResolver,
)

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_NAMES = {"json": "messages.json", "jsonl": "messages.jsonl", "text": "messages.txt"}


def parse_export(
    root: Union[str, Path],
    worker_count: Optional[int] = None,
    time_zone: str = DEFAULT_TIME_ZONE,
    room: Optional[MessageRoom] = None,
    time_resolver: Optional[TimeResolver] = None,
) -> MessageRoom:
    """
    Parse every fragment of an export directory into one message room.

    Args:
        root: Export directory containing messages*.html files
        worker_count: Worker-count hint, clamped to the available cores
        time_zone: Zone the export's local dates are interpreted in
        room: Room to fill; a new one is created when omitted
        time_resolver: Shared resolver; a new one is created when omitted

    Returns:
        The populated room. Message order across fragment files is not
        guaranteed; use ``sort_messages`` when a global order is needed.
    """
    files = index_export_directory(root)

    time_resolver = time_resolver or TimeResolver()
    time_resolver.get_zone(time_zone)

    parser = TelegramHtmlParser(time_resolver=time_resolver, time_zone=time_zone)
    return ParallelExtractor(parser).run(files, worker_count, room=room)


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(asctime)s] [Thread-%(thread)d] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def build_arg_parser(config: ParserConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Telegram Desktop HTML export parser - writes one message room"
    )
    parser.add_argument("export_dir", help="Directory containing messages*.html files")
    parser.add_argument(
        "--workers",
        type=int,
        default=config.max_workers,
        help="Number of parallel workers (default: number of CPU cores)",
    )
    parser.add_argument(
        "--timezone",
        default=config.time_zone,
        help=f"Time zone of the export's dates (default: {config.time_zone})",
    )
    parser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default=config.output_format,
        help=f"Output format (default: {config.output_format})",
    )
    parser.add_argument(
        "--output",
        help="Output file (default: messages.<ext> inside the export directory)",
    )
    parser.add_argument(
        "--sort",
        action="store_true",
        help="Order messages by send time before writing",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        default=config.verbose,
        help="Enable debug logging, including per-file timings",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main pipeline entry point."""
    try:
        config = ParserConfig.from_env()
    except ExportParsingError as e:
        print(f"❌ {e}")
        return 1

    args = build_arg_parser(config).parse_args(argv)
    setup_logging(args.verbose)

    export_dir = Path(args.export_dir).expanduser()
    output_path = (
        Path(args.output) if args.output else export_dir / DEFAULT_OUTPUT_NAMES[args.format]
    )

    print("🚀 Telegram Export Parser")
    print(f"📂 Export: {export_dir}")
    print(f"🕒 Time zone: {args.timezone}")

    try:
        room = parse_export(export_dir, worker_count=args.workers, time_zone=args.timezone)
    except ExportParsingError as e:
        print(f"❌ Parsing failed: {e}")
        return 1

    summary = room.summary()
    logger.info(
        f"📊 {summary.chat_name or '(unnamed room)'}: {summary.message_count} messages, "
        f"{len(summary.participants)} participants"
    )
    if room.skipped_files:
        logger.warning(f"⚠️ Skipped {len(room.skipped_files)} unreadable files")

    try:
        save_room(room, output_path, output_format=args.format, sort=args.sort)
    except OSError as e:
        print(f"❌ Could not write {output_path}: {e}")
        return 1

    print(f"✅ Wrote {output_path}")
    return 0


if __name__ == "__main__":
    exit(main())
