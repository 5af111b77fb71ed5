"""
Parsing Strategies

This module contains the parser for Telegram Desktop HTML chat exports and
the building blocks it uses: content classification and timestamp
resolution.
"""

from .base import (
    BaseParser,
    ChatContext,
    Message,
    MessageContent,
    MessageRoom,
    MessageType,
)
from .content import classify_content
from .telegram_html_parser import DEFAULT_TIME_ZONE, TelegramHtmlParser
from .timestamps import TimeResolver

__all__ = [
    "BaseParser",
    "ChatContext",
    "Message",
    "MessageContent",
    "MessageRoom",
    "MessageType",
    "TelegramHtmlParser",
    "TimeResolver",
    "classify_content",
    "DEFAULT_TIME_ZONE",
]
