"""Environment configuration for the meilies tools.

The decoding functions themselves take no configuration; these settings only
affect the developer CLI.

Environment variables:
    MEILIES_LOG_LEVEL      Log level name (default: WARNING)
    MEILIES_OUTPUT_FORMAT  "table" or "json" (default: table)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

FORMAT_TABLE = "table"
FORMAT_JSON = "json"
OUTPUT_FORMATS = (FORMAT_TABLE, FORMAT_JSON)

LOG_LEVEL_ENV = "MEILIES_LOG_LEVEL"
OUTPUT_FORMAT_ENV = "MEILIES_OUTPUT_FORMAT"


@dataclass(frozen=True)
class Settings:
    """CLI settings.

    Attributes:
        log_level: Logging level name (DEBUG, INFO, WARNING, ...)
        output_format: Default output format for decoded commands
    """

    log_level: str = "WARNING"
    output_format: str = FORMAT_TABLE

    @classmethod
    def from_env(cls) -> Settings:
        """Read settings from the environment, falling back to defaults."""
        log_level = os.getenv(LOG_LEVEL_ENV, cls.log_level).upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ValueError(f"Invalid {LOG_LEVEL_ENV}: {log_level}")

        output_format = os.getenv(OUTPUT_FORMAT_ENV, cls.output_format).lower()
        if output_format not in OUTPUT_FORMATS:
            raise ValueError(
                f"Invalid {OUTPUT_FORMAT_ENV}: {output_format} "
                f"(expected one of: {', '.join(OUTPUT_FORMATS)})"
            )

        return cls(log_level=log_level, output_format=output_format)

    @property
    def log_level_value(self) -> int:
        return getattr(logging, self.log_level, logging.WARNING)
