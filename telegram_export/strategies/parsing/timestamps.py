"""
Timestamp resolution for Telegram Desktop exports.

The ``title`` attribute of a message's ``.date`` element holds the local send
time as ``DD.MM.YYYY HH:MM:SS`` (newer exports append ``UTC+07:00``). The
time zone comes from configuration and is the same for a whole run.
"""

import logging
import re
import threading
from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from telegram_export.exceptions import MalformedTimestampError, UnresolvableTimeZoneError

logger = logging.getLogger(__name__)

# Telegram export date pattern: DD.MM.YYYY HH:MM:SS
TELEGRAM_DATE_RE = re.compile(
    r"^\s*(\d{2})\.(\d{2})\.(\d{4}) (\d{2}):(\d{2}):(\d{2})(?=\s|$)",
    re.ASCII,
)


class TimeResolver:
    """
    Turns export date strings into timezone-aware datetimes.

    One instance is shared by every extraction worker. The last resolved zone
    is cached by name; looking it up and replacing it happens under a single
    lock so two workers never interleave the check and the store.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._zone_name: Optional[str] = None
        self._zone: Optional[ZoneInfo] = None

    def resolve(self, date_string: str, zone_name: str) -> datetime:
        """
        Parse a date string and attach the named time zone.

        Args:
            date_string: Value like ``29.12.2019 14:05:30``
            zone_name: IANA zone name, e.g. ``Asia/Jakarta``

        Returns:
            Timezone-aware datetime

        Raises:
            MalformedTimestampError: if the string does not match the pattern
            UnresolvableTimeZoneError: if the zone name is unknown
        """
        match = TELEGRAM_DATE_RE.match(date_string or "")
        if not match:
            raise MalformedTimestampError(date_string or "")

        day, month, year, hour, minute, second = (int(part) for part in match.groups())
        zone = self.get_zone(zone_name)

        try:
            return datetime(year, month, day, hour, minute, second, tzinfo=zone)
        except ValueError as e:
            raise MalformedTimestampError(date_string, str(e)) from e

    def get_zone(self, zone_name: str) -> ZoneInfo:
        """Return the zone object for ``zone_name``, loading it on a cache miss."""
        with self._lock:
            if self._zone is not None and zone_name == self._zone_name:
                return self._zone

            try:
                zone = ZoneInfo(zone_name)
            except (ZoneInfoNotFoundError, ValueError, OSError) as e:
                raise UnresolvableTimeZoneError(zone_name) from e

            logger.debug(f"🕒 Loaded time zone {zone_name}")
            self._zone_name = zone_name
            self._zone = zone
            return zone
