"""
Telegram Desktop HTML parser.

Parses the ``messages*.html`` fragments of a Telegram Desktop chat export into
standardized Message records.

Layout of one user message inside a fragment::

    <div class="message default clearfix [joined]" id="message123">
      <div class="body">
        <div class="pull_right date details" title="29.12.2019 14:05:30">14:05</div>
        <div class="from_name">Alice</div>           (absent when joined)
        <div class="reply_to details">In reply to
          <a href="#go_to_message120">this message</a></div>
        <div class="text">hello</div>                 (or .media_wrap)
      </div>
    </div>

Service entries (``message service``) are skipped.
"""

import logging
import time
from pathlib import Path
from typing import List, Optional, Tuple

from bs4 import BeautifulSoup, Tag

from .base import BaseParser, ChatContext, Message
from .content import classify_content, find_first, get_attr, get_text
from .timestamps import TimeResolver

logger = logging.getLogger(__name__)

DEFAULT_TIME_ZONE = "Asia/Jakarta"

# Reply anchors point at "#go_to_message123", or "messages2.html#go_to_message123"
# when the replied-to message lives in another fragment; message ids are "message123".
REPLY_LINK_PREFIX = "#go_to_"


class TelegramHtmlParser(BaseParser):
    """Parser for Telegram Desktop HTML chat exports."""

    def __init__(
        self,
        time_resolver: Optional[TimeResolver] = None,
        time_zone: str = DEFAULT_TIME_ZONE,
        features: str = "html.parser",
    ):
        self.time_resolver = time_resolver or TimeResolver()
        self.time_zone = time_zone
        self.features = features

    def parse_file(self, file_path: Path) -> Tuple[List[Message], ChatContext]:
        """
        Parse one export fragment and return messages and context.

        Args:
            file_path: Path to a ``messages*.html`` fragment

        Returns:
            Tuple of (messages in document order, context)
        """
        started = time.perf_counter()
        with open(file_path, "r", encoding="utf-8") as f:
            soup = BeautifulSoup(f, self.features)

        messages = self.scan_document(soup)
        context = ChatContext.from_messages(self.extract_room_name(soup), messages)

        logger.debug(
            f"⏱️ {Path(file_path).name}: {len(messages)} messages in "
            f"{time.perf_counter() - started:.3f}s"
        )
        return messages, context

    def extract_room_name(self, soup: BeautifulSoup) -> str:
        """Room title from the page header, empty when the header has none."""
        return get_text(find_first(soup.select_one(".page_header"), ".text"))

    def scan_document(self, soup: BeautifulSoup) -> List[Message]:
        """
        Extract every user message of a parsed fragment in document order.

        The sender of the last non-continuation message is carried from one
        accepted message to the next. Service entries are not visited, so
        they never change it.
        """
        messages = []
        previous_sender = ""

        for element in soup.select(".message"):
            if not self.is_user_message(element):
                continue
            message, previous_sender = self.extract_message(element, previous_sender)
            messages.append(message)

        return messages

    @staticmethod
    def is_user_message(element: Tag) -> bool:
        return "default" in element.get("class", [])

    def extract_message(self, element: Tag, previous_sender: str) -> Tuple[Message, str]:
        """
        Build a Message from one ``.message.default`` element.

        Args:
            element: The message element
            previous_sender: Sender carried forward from the previous message

        Returns:
            Tuple of (message, sender to carry forward)
        """
        message_id = get_attr(element, "id")
        body = element.select_one(".body")

        if "joined" in element.get("class", []):
            sender_name = previous_sender
        else:
            sender_name = get_text(find_first(body, ".from_name"))

        sent_at = self.time_resolver.resolve(
            get_attr(find_first(body, ".date"), "title"),
            self.time_zone,
        )

        message = Message.from_content(
            message_id,
            sent_at,
            sender_name,
            self._extract_reply_to(body),
            classify_content(body),
        )
        return message, sender_name

    def _extract_reply_to(self, body: Optional[Tag]) -> Optional[str]:
        """Message id this message replies to, None when it is not a reply."""
        reply = find_first(body, ".reply_to")
        if reply is None:
            return None
        href = get_attr(reply.find("a"), "href")
        _, separator, message_id = href.partition(REPLY_LINK_PREFIX)
        if not separator:
            return None
        return message_id or None

