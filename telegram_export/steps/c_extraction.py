#!/usr/bin/env python3
"""
Step 3: Parallel Extraction and Aggregation

Runs one worker per file partition. Each worker parses its fragments into a
private buffer and merges that buffer into the shared MessageRoom once, under
the room lock. Messages keep their in-file order; the order between files
depends on which worker finished first.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import List, Optional, Sequence

from telegram_export.steps.b_partitioning import clamp_worker_count, partition_files
from telegram_export.strategies.parsing import (
    BaseParser,
    Message,
    MessageRoom,
    TelegramHtmlParser,
)

logger = logging.getLogger(__name__)


class ParallelExtractor:
    """Parses fragment files on a fixed pool of workers into one room."""

    def __init__(self, parser: Optional[BaseParser] = None):
        self.parser = parser or TelegramHtmlParser()

    def run(
        self,
        files: Sequence[Path],
        worker_count: Optional[int] = None,
        room: Optional[MessageRoom] = None,
    ) -> MessageRoom:
        """
        Parse all files and aggregate their messages.

        Args:
            files: Fragment files in export order
            worker_count: Worker-count hint, clamped to the available cores
            room: Room to merge into; a new one is created when omitted

        Returns:
            The populated room

        Raises:
            ExportParsingError: on the first fatal error of any worker, after
                the remaining workers finish
        """
        if room is None:
            room = MessageRoom()
        if not files:
            return room

        worker_count = clamp_worker_count(worker_count, len(files))
        partitions = partition_files(list(files), worker_count)
        logger.info(
            f"🚀 Extracting {len(files)} files with {worker_count} workers"
        )

        first_error = None
        with ThreadPoolExecutor(max_workers=worker_count) as executor:
            future_to_index = {
                executor.submit(self._process_partition, partition, room): index
                for index, partition in enumerate(partitions)
            }

            for future in as_completed(future_to_index):
                index = future_to_index[future]
                try:
                    merged = future.result()
                    logger.info(f"📈 Worker {index}: {merged} messages merged")
                except Exception as e:
                    logger.error(f"❌ Worker {index} failed: {e}")
                    if first_error is None:
                        first_error = e

        if first_error is not None:
            raise first_error

        logger.info(f"✅ Extracted {len(room.messages)} messages")
        return room

    def _process_partition(self, files: List[Path], room: MessageRoom) -> int:
        """Parse one partition into a local buffer, then merge it once."""
        buffer: List[Message] = []
        skipped: List[str] = []
        room_name = ""

        for file_path in files:
            try:
                messages, context = self.parser.parse_file(file_path)
            except (OSError, UnicodeDecodeError) as e:
                logger.error(f"❌ Skipping unreadable file {file_path}: {e}")
                skipped.append(str(file_path))
                continue

            if not room_name:
                room_name = context.chat_name
            buffer.extend(messages)

        room.merge(buffer, room_name=room_name, skipped_files=skipped)
        return len(buffer)
