#!/usr/bin/env python3
"""
Step 1: Export Directory Indexing

Finds the fragment files of a Telegram Desktop export. An export of a long
conversation is split across ``messages.html``, ``messages2.html``,
``messages3.html``, ...; everything else in the directory (media folders,
css, js) is ignored.
"""

import logging
import re
from pathlib import Path
from typing import List, Union

from telegram_export.exceptions import InvalidDirectoryError

logger = logging.getLogger(__name__)

# Fragment file pattern: messages.html, messages2.html, ...
FRAGMENT_FILE_RE = re.compile(r"^messages(\d*)\.html$")


def fragment_number(path: Path) -> int:
    """Position of a fragment in the export; ``messages.html`` is the first."""
    match = FRAGMENT_FILE_RE.match(path.name)
    if not match or not match.group(1):
        return 1
    return int(match.group(1))


def index_export_directory(root: Union[str, Path]) -> List[Path]:
    """
    List the fragment files of an export directory in fragment order.

    Args:
        root: Export directory

    Returns:
        Fragment file paths, ``messages.html`` first

    Raises:
        InvalidDirectoryError: if the directory is missing or has no fragments
    """
    root = Path(root)

    if not root.exists():
        raise InvalidDirectoryError(root, "does not exist")
    if not root.is_dir():
        raise InvalidDirectoryError(root, "is not a directory")

    fragments = [
        entry
        for entry in root.iterdir()
        if entry.is_file() and FRAGMENT_FILE_RE.match(entry.name)
    ]

    if not fragments:
        raise InvalidDirectoryError(
            root, "contains no messages*.html fragment files"
        )

    fragments.sort(key=lambda path: (fragment_number(path), path.name))
    logger.info(f"📂 Found {len(fragments)} fragment files in {root}")
    return fragments
