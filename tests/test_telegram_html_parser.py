"""
Tests for the Telegram Desktop HTML parser (document scan and message extraction).
"""

from datetime import datetime, timezone

import pytest
from bs4 import BeautifulSoup

from export_builders import (
    photo_content,
    render_page,
    service_message,
    text_content,
    user_message,
    voice_content,
    write_fragment,
)
from telegram_export.exceptions import MalformedTimestampError, UnresolvableTimeZoneError
from telegram_export.strategies.parsing import BaseParser, MessageType, TelegramHtmlParser


def soup_of(*messages, room_name="Family Group"):
    return BeautifulSoup(render_page(*messages, room_name=room_name), "html.parser")


@pytest.fixture
def parser():
    return TelegramHtmlParser(time_zone="Asia/Jakarta")


def test_extracts_all_fields(parser):
    soup = soup_of(
        user_message(
            "message42",
            date="29.12.2019 14:05:30",
            sender=" Alice ",
            reply_to="message41",
            content=text_content("hello there"),
        )
    )

    [message] = parser.scan_document(soup)

    assert message.id == "message42"
    assert message.sent_at == datetime(2019, 12, 29, 7, 5, 30, tzinfo=timezone.utc)
    assert message.sender_name == "Alice"
    assert message.reply_to_id == "message41"
    assert message.message_type == MessageType.TEXT
    assert message.content == "hello there"
    assert message.media_path is None
    assert message.media_thumbnail_path is None


def test_joined_message_inherits_previous_sender(parser):
    soup = soup_of(
        user_message("message1", sender="Alice"),
        user_message("message2", joined=True),
        user_message("message3", sender="Bob"),
        user_message("message4", joined=True),
        user_message("message5", joined=True),
    )

    senders = [message.sender_name for message in parser.scan_document(soup)]

    assert senders == ["Alice", "Alice", "Bob", "Bob", "Bob"]


def test_service_entries_are_skipped_without_breaking_inheritance(parser):
    soup = soup_of(
        service_message("message-1"),
        user_message("message1", sender="Alice"),
        service_message("message-2", text="Bob joined group by link"),
        user_message("message2", joined=True),
    )

    messages = parser.scan_document(soup)

    assert [message.id for message in messages] == ["message1", "message2"]
    assert messages[1].sender_name == "Alice"


def test_joined_first_message_has_empty_sender(parser):
    [message] = parser.scan_document(soup_of(user_message("message1", joined=True)))

    assert message.sender_name == ""


def test_extract_message_threads_sender_explicitly(parser):
    soup = soup_of(
        user_message("message1", sender="Carol"),
        user_message("message2", joined=True),
    )
    first, second = soup.select(".message.default")

    message, carried = parser.extract_message(second, "Dave")
    assert message.sender_name == "Dave"
    assert carried == "Dave"

    message, carried = parser.extract_message(first, "Dave")
    assert message.sender_name == "Carol"
    assert carried == "Carol"


def test_media_messages(parser):
    soup = soup_of(
        user_message("message1", content=photo_content()),
        user_message("message2", joined=True, content=voice_content()),
    )

    photo, voice = parser.scan_document(soup)

    assert photo.message_type == MessageType.PHOTO
    assert photo.content is None
    assert photo.media_path == "photos/photo_1.jpg"
    assert photo.media_thumbnail_path == "photos/photo_1_thumb.jpg"
    assert voice.message_type == MessageType.VOICE
    assert voice.media_path == "voice_messages/audio_1.ogg"
    assert voice.media_thumbnail_path is None


def test_message_without_reply_has_no_reply_id(parser):
    [message] = parser.scan_document(soup_of(user_message("message1")))

    assert message.reply_to_id is None


def test_reply_to_message_in_another_fragment(parser):
    soup = soup_of(user_message("message90", reply_href="messages2.html#go_to_message41"))

    [message] = parser.scan_document(soup)

    assert message.reply_to_id == "message41"


@pytest.mark.parametrize("href", ["https://t.me/c/1/41", "message41", "#"])
def test_reply_link_without_message_anchor_is_ignored(parser, href):
    soup = soup_of(user_message("message90", reply_href=href))

    [message] = parser.scan_document(soup)

    assert message.reply_to_id is None


def test_scanning_twice_is_deterministic(parser):
    soup = soup_of(
        user_message("message1", sender="Alice"),
        user_message("message2", joined=True, content=photo_content()),
        service_message("message-1"),
        user_message("message3", sender="Bob", reply_to="message1"),
    )

    assert parser.scan_document(soup) == parser.scan_document(soup)


def test_malformed_date_is_fatal(parser):
    soup = soup_of(user_message("message1", date="yesterday at noon"))

    with pytest.raises(MalformedTimestampError):
        parser.scan_document(soup)


def test_unknown_time_zone_is_fatal():
    parser = TelegramHtmlParser(time_zone="Nowhere/Special")

    with pytest.raises(UnresolvableTimeZoneError):
        parser.scan_document(soup_of(user_message("message1")))


def test_parse_file_returns_messages_and_room_context(parser, tmp_path):
    path = write_fragment(
        tmp_path,
        "messages.html",
        service_message("message-1"),
        user_message("message1", sender="Alice", date="29.12.2019 14:05:30"),
        user_message("message2", sender="Bob", date="29.12.2019 15:00:00"),
        user_message("message3", joined=True, date="29.12.2019 15:01:00"),
        room_name="Weekend Trip",
    )

    messages, context = parser.parse_file(path)

    assert [message.id for message in messages] == ["message1", "message2", "message3"]
    assert context.chat_name == "Weekend Trip"
    assert context.participants == ["Alice", "Bob"]
    assert context.message_count == 3
    assert context.date_range == (messages[0].sent_at, messages[2].sent_at)


def test_missing_page_header_gives_empty_room_name(parser):
    soup = BeautifulSoup("<html><body><div class='history'></div></body></html>", "html.parser")

    assert parser.extract_room_name(soup) == ""
    assert parser.scan_document(soup) == []


def test_parser_interface_is_parse_file_only(parser):
    assert isinstance(parser, BaseParser)
    assert BaseParser.__abstractmethods__ == frozenset({"parse_file"})
    assert not hasattr(parser, "get_supported_extensions")
    assert not hasattr(parser, "get_parser_name")
