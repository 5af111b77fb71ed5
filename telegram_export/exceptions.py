"""
Errors raised while turning a Telegram Desktop export into a message room.

Structural and configuration problems (bad export directory, unparsable
timestamps, unknown time zones) abort the whole run. A single unreadable
fragment file does not; it is logged and recorded on the room instead.
"""

from pathlib import Path
from typing import Union


class ExportParsingError(Exception):
    """Base class for all errors surfaced to the caller of a parse run."""


class ConfigurationError(ExportParsingError):
    """Raised when a configuration value (env or CLI) cannot be used."""


class InvalidDirectoryError(ExportParsingError):
    """Raised when an export directory holds no usable fragment files."""

    def __init__(self, directory: Union[str, Path], cause: str):
        self.directory = str(directory)
        self.cause = cause
        super().__init__(
            f"Directory [{self.directory}] is not a valid export because it {cause}"
        )


class MalformedTimestampError(ExportParsingError):
    """Raised when a message date does not look like DD.MM.YYYY HH:MM:SS."""

    def __init__(self, date_string: str, reason: str = "does not match DD.MM.YYYY HH:MM:SS"):
        self.date_string = date_string
        super().__init__(f"Malformed timestamp {date_string!r}: {reason}")


class UnresolvableTimeZoneError(ExportParsingError):
    """Raised when the configured time zone is not in the zone database."""

    def __init__(self, zone_name: str):
        self.zone_name = zone_name
        super().__init__(f"Unknown time zone: {zone_name!r}")
