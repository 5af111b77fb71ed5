"""
Shared fixtures for the export parser tests.
"""

import pytest

from export_builders import (
    photo_content,
    service_message,
    text_content,
    user_message,
    write_fragment,
)


@pytest.fixture
def export_dir(tmp_path):
    """An export with five fragments, service entries and continuations."""
    directory = tmp_path / "ChatExport_30_12_2019"
    directory.mkdir()
    (directory / "photos").mkdir()
    (directory / "css").mkdir()
    (directory / "css" / "style.css").write_text("body {}", encoding="utf-8")

    counter = 0
    senders = ["Alice", "Bob", "Carol"]
    for fragment in range(1, 6):
        name = "messages.html" if fragment == 1 else f"messages{fragment}.html"
        entries = [service_message(f"message-{fragment}")]
        for position in range(6):
            counter += 1
            sender = senders[(fragment + position // 2) % len(senders)]
            entries.append(
                user_message(
                    f"message{counter}",
                    date=f"{fragment + 10:02d}.12.2019 14:{position:02d}:30",
                    sender=sender,
                    joined=position % 2 == 1,
                    reply_to=f"message{counter - 1}" if position == 3 else None,
                    content=text_content(f"line {counter}") if position != 4 else photo_content(),
                )
            )
        write_fragment(directory, name, *entries)

    return directory
