"""
Base parser interface and the records every parser produces.
"""

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple


class MessageType(str, Enum):
    """Kind of content carried by a message."""

    UNKNOWN = ""
    TEXT = "text"
    PHOTO = "photo"
    STICKER = "sticker"
    VIDEO = "video"
    ANIMATED_GIF = "animated_gif"
    AUDIO = "audio"
    VOICE = "voice"


# Media types rendered with a preview image in the export.
THUMBNAIL_TYPES = frozenset(
    {
        MessageType.PHOTO,
        MessageType.STICKER,
        MessageType.VIDEO,
        MessageType.ANIMATED_GIF,
    }
)


@dataclass(frozen=True)
class MessageContent:
    """
    Payload of a message, keyed by its type.

    Only the fields valid for ``message_type`` are set: ``text`` for TEXT,
    ``media_path`` for media types and ``thumbnail_path`` for media types
    that have a preview image.
    """

    message_type: MessageType = MessageType.UNKNOWN
    text: Optional[str] = None
    media_path: Optional[str] = None
    thumbnail_path: Optional[str] = None

    @classmethod
    def for_text(cls, text: str) -> "MessageContent":
        return cls(MessageType.TEXT, text=text)

    @classmethod
    def for_media(
        cls,
        message_type: MessageType,
        media_path: Optional[str],
        thumbnail_path: Optional[str] = None,
    ) -> "MessageContent":
        if message_type not in THUMBNAIL_TYPES:
            thumbnail_path = None
        return cls(
            message_type,
            media_path=media_path or None,
            thumbnail_path=thumbnail_path or None,
        )


@dataclass(frozen=True)
class Message:
    """Standardized message representation."""

    id: str
    sent_at: datetime
    sender_name: str
    reply_to_id: Optional[str] = None
    message_type: MessageType = MessageType.UNKNOWN
    content: Optional[str] = None
    media_path: Optional[str] = None
    media_thumbnail_path: Optional[str] = None

    @classmethod
    def from_content(
        cls,
        message_id: str,
        sent_at: datetime,
        sender_name: str,
        reply_to_id: Optional[str],
        payload: MessageContent,
    ) -> "Message":
        return cls(
            id=message_id,
            sent_at=sent_at,
            sender_name=sender_name,
            reply_to_id=reply_to_id or None,
            message_type=payload.message_type,
            content=payload.text,
            media_path=payload.media_path,
            media_thumbnail_path=payload.thumbnail_path,
        )

    def to_standardized_format(self) -> str:
        """Convert to standardized text format using Unix timestamps."""
        unix_timestamp = int(self.sent_at.timestamp())

        if self.message_type == MessageType.TEXT:
            return f"[{unix_timestamp}] {self.sender_name}: {self.content}"
        elif self.message_type == MessageType.UNKNOWN:
            return f"[{unix_timestamp}] {self.sender_name}: <unknown>"
        else:
            return (
                f"[{unix_timestamp}] {self.sender_name}: "
                f"<{self.message_type.value}: {self.media_path or ''}>"
            )

    def to_dict(self):
        return {
            "id": self.id,
            "sent_at": self.sent_at.isoformat(),
            "sender_name": self.sender_name,
            "reply_to_id": self.reply_to_id,
            "message_type": self.message_type.value,
            "content": self.content,
            "media_path": self.media_path,
            "media_thumbnail_path": self.media_thumbnail_path,
        }


class ChatContext:
    """Container for chat context and metadata."""

    def __init__(self, chat_name: str = ""):
        self.chat_name = chat_name
        self.participants: List[str] = []
        self.message_count: int = 0
        self.date_range: Optional[Tuple[datetime, datetime]] = None
        self.source_format: str = "telegram_html"

    @classmethod
    def from_messages(cls, chat_name: str, messages: Iterable[Message]) -> "ChatContext":
        context = cls(chat_name)
        participants = set()
        first = last = None
        for message in messages:
            context.message_count += 1
            if message.sender_name:
                participants.add(message.sender_name)
            if first is None or message.sent_at < first:
                first = message.sent_at
            if last is None or message.sent_at > last:
                last = message.sent_at
        context.participants = sorted(participants)
        if first is not None:
            context.date_range = (first, last)
        return context

    def to_dict(self):
        return {
            "chat_name": self.chat_name,
            "participants": self.participants,
            "message_count": self.message_count,
            "date_range": (
                (self.date_range[0].isoformat(), self.date_range[1].isoformat())
                if self.date_range
                else None
            ),
            "source_format": self.source_format,
        }


@dataclass
class MessageRoom:
    """
    Aggregate result of parsing one exported conversation.

    Workers never touch ``messages`` directly while parsing; they hand a
    finished buffer to :meth:`merge`, which holds the room lock for the
    append and the room-name check. Message order across fragment files is
    whatever order the workers finished in.
    """

    room_name: str = ""
    messages: List[Message] = field(default_factory=list)
    skipped_files: List[str] = field(default_factory=list)
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    def merge(
        self,
        messages: List[Message],
        room_name: str = "",
        skipped_files: Optional[List[str]] = None,
    ) -> None:
        """Append a worker buffer; the first non-empty room name wins."""
        with self._lock:
            if room_name and not self.room_name:
                self.room_name = room_name
            self.messages.extend(messages)
            if skipped_files:
                self.skipped_files.extend(skipped_files)

    def summary(self) -> ChatContext:
        with self._lock:
            return ChatContext.from_messages(self.room_name, list(self.messages))

    def to_dict(self) -> Dict:
        with self._lock:
            return {
                "room_name": self.room_name,
                "messages": [message.to_dict() for message in self.messages],
            }


class BaseParser(ABC):
    """Abstract base class for all export parsers."""

    @abstractmethod
    def parse_file(self, file_path: Path) -> Tuple[List[Message], ChatContext]:
        """
        Parse one export fragment and return its messages and context.
        """
        pass
