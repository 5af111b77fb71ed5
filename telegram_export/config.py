"""
Runtime configuration.

Environment Variables:
- TELEGRAM_EXPORT_TIMEZONE (default Asia/Jakarta)
- TELEGRAM_EXPORT_MAX_WORKERS (default: number of CPU cores)
- TELEGRAM_EXPORT_OUTPUT_FORMAT (default json)
- TELEGRAM_EXPORT_VERBOSE (default false)

Values are read from the process environment after loading a ``.env`` file
from the working directory, if one exists.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from telegram_export.exceptions import ConfigurationError
from telegram_export.steps.d_output import OUTPUT_FORMATS
from telegram_export.strategies.parsing import DEFAULT_TIME_ZONE

TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class ParserConfig:
    """Configuration for a parse run."""

    # Time zone applied to every message date of the export
    time_zone: str = DEFAULT_TIME_ZONE

    # Worker-count hint; None uses every available core
    max_workers: Optional[int] = None

    # Output options
    output_format: str = "json"  # "json", "jsonl" or "text"
    verbose: bool = False

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "ParserConfig":
        """Build a config from environment variables."""
        if load_env_file:
            load_dotenv(find_dotenv(usecwd=True))

        output_format = os.getenv("TELEGRAM_EXPORT_OUTPUT_FORMAT", "json").lower()
        if output_format not in OUTPUT_FORMATS:
            raise ConfigurationError(
                f"TELEGRAM_EXPORT_OUTPUT_FORMAT must be one of {list(OUTPUT_FORMATS)}, "
                f"got {output_format!r}"
            )

        return cls(
            time_zone=os.getenv("TELEGRAM_EXPORT_TIMEZONE", DEFAULT_TIME_ZONE),
            max_workers=_get_int("TELEGRAM_EXPORT_MAX_WORKERS"),
            output_format=output_format,
            verbose=os.getenv("TELEGRAM_EXPORT_VERBOSE", "").lower() in TRUE_VALUES,
        )


def _get_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from e
