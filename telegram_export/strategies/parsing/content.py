"""
Content classification for Telegram Desktop message bodies.

A message body carries either a ``.text`` element or a ``.media_wrap``
element whose first child tells the media kind through its class list.
"""

from typing import Optional

from bs4 import Tag

from .base import MessageContent, MessageType

# Class marker on the media wrapper's first child -> (type, thumbnail <img> class)
MEDIA_MARKERS = (
    ("video_file_wrap", MessageType.VIDEO, "video_file"),
    ("photo_wrap", MessageType.PHOTO, "photo"),
    ("sticker_wrap", MessageType.STICKER, "sticker"),
    ("animated_wrap", MessageType.ANIMATED_GIF, "animated"),
    ("media_voice_message", MessageType.VOICE, None),
    ("media_audio_file", MessageType.AUDIO, None),
)


def find_first(element: Optional[Tag], selector: str) -> Optional[Tag]:
    """First descendant matching a CSS selector, None when the element is absent."""
    if element is None:
        return None
    return element.select_one(selector)


def get_text(element: Optional[Tag]) -> str:
    """Trimmed text of an element, empty when the element is absent."""
    if element is None:
        return ""
    return element.get_text().strip()


def get_attr(element: Optional[Tag], name: str) -> str:
    """Attribute value of an element, empty when element or attribute is absent."""
    if element is None:
        return ""
    value = element.get(name)
    if isinstance(value, list):
        return " ".join(value)
    return value or ""


def classify_content(body: Optional[Tag]) -> MessageContent:
    """
    Determine the message type and payload of a message body.

    Args:
        body: The ``.body`` element of a message

    Returns:
        MessageContent with only the fields valid for its type populated
    """
    if body is None:
        return MessageContent()

    text_el = body.select_one(".text")
    if text_el is not None:
        return MessageContent.for_text(get_text(text_el))

    media_wrap = body.select_one(".media_wrap")
    if media_wrap is None:
        return MessageContent()

    media_el = media_wrap.find(True)
    media_path = get_attr(media_el, "href")
    classes = media_el.get("class", []) if media_el is not None else []

    for marker, message_type, thumbnail_class in MEDIA_MARKERS:
        if marker not in classes:
            continue
        thumbnail_path = None
        if thumbnail_class:
            thumbnail_path = get_attr(media_el.find("img", class_=thumbnail_class), "src")
        return MessageContent.for_media(message_type, media_path, thumbnail_path)

    return MessageContent(media_path=media_path or None)
