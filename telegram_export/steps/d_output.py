#!/usr/bin/env python3
"""
Step 4: Output

Writes a parsed MessageRoom to disk:
- json: a single object with the room name and all messages
- jsonl: a context record line, then one line per message
- text: one standardized "[unix_ts] sender: content" line per message
"""

import json
import logging
from pathlib import Path
from typing import Iterable, List, Union

from telegram_export.strategies.parsing import Message, MessageRoom

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("json", "jsonl", "text")


def sort_messages(messages: Iterable[Message]) -> List[Message]:
    """Stable global order by send time, then message id."""
    return sorted(messages, key=lambda message: (message.sent_at, message.id))


def save_room(
    room: MessageRoom,
    output_path: Union[str, Path],
    output_format: str = "json",
    sort: bool = False,
) -> Path:
    """
    Save a room in the requested format.

    Args:
        room: Parsed room
        output_path: Destination file
        output_format: One of ``json``, ``jsonl``, ``text``
        sort: Order messages by send time before writing

    Returns:
        The written path
    """
    if output_format not in OUTPUT_FORMATS:
        raise ValueError(
            f"Unknown output format: {output_format}. Available: {list(OUTPUT_FORMATS)}"
        )

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    messages = list(room.messages)
    if sort:
        messages = sort_messages(messages)

    with open(output_path, "w", encoding="utf-8") as f:
        if output_format == "json":
            record = {
                "room_name": room.room_name,
                "messages": [message.to_dict() for message in messages],
            }
            json.dump(record, f, ensure_ascii=False, indent=2)
            f.write("\n")
        elif output_format == "jsonl":
            # Write context as first line
            context_record = {"type": "context", "data": room.summary().to_dict()}
            f.write(json.dumps(context_record, ensure_ascii=False) + "\n")
            for message in messages:
                message_record = {"type": "message", **message.to_dict()}
                f.write(json.dumps(message_record, ensure_ascii=False) + "\n")
        else:
            for message in messages:
                f.write(message.to_standardized_format() + "\n")

    logger.info(f"💾 Saved {output_format}: {output_path}")
    logger.info(f"📊 {len(messages)} messages written")
    return output_path
