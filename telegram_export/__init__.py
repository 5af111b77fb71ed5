"""
Telegram Export Parser

Turns a Telegram Desktop HTML chat export (messages.html, messages2.html, ...)
into a single MessageRoom of typed Message records:
- Indexing the fragment files of an export directory
- Partitioning them across a bounded pool of workers
- Decoding every user message (sender inheritance, reply links, content type)
- Merging the per-worker results into one shared room

Use ``telegram_export.pipeline.parse_export`` from code or the
``telegram-export`` command from a shell.
"""

from . import steps, strategies

__all__ = ["steps", "strategies"]
