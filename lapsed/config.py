"""
Runtime configuration for Lapsed.

Values come from the environment (a .env file is loaded if present), with
defaults that match the stock behavior: a three month lookback window and
digits-only identifier matching.

File: config.py
Author: Aidan Allchin
Created: 2026-01-05
Last Modified: 2026-01-11
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

from .collection import DIGITS, IDENTIFIER_MODES
from .database.common import LOCAL_DB_PATH


@dataclass
class LapsedConfig:
    """Configuration for the staleness pipeline and deletion coordinator."""

    # Staleness policy
    lookback_months: int = 3
    timezone: str = "UTC"  # calendar used for month arithmetic

    # Identifier matching
    identifier_mode: str = DIGITS
    default_region: str = "US"  # only used in e164 mode

    # Storage
    db_path: Path = field(default_factory=lambda: LOCAL_DB_PATH)
    imessage_db_path: Path = field(default_factory=lambda: Path("~/Library/Messages/chat.db").expanduser())

    # Deletion
    max_concurrent_deletes: int = 8

    def __post_init__(self):
        # Ensure paths are Path objects
        if isinstance(self.db_path, str):
            self.db_path = Path(self.db_path)
        if isinstance(self.imessage_db_path, str):
            self.imessage_db_path = Path(self.imessage_db_path).expanduser()

        if self.lookback_months < 0:
            raise ValueError(f"lookback_months must be >= 0, got {self.lookback_months}")
        if self.identifier_mode not in IDENTIFIER_MODES:
            raise ValueError(f"identifier_mode must be one of {IDENTIFIER_MODES}, got '{self.identifier_mode}'")
        if self.max_concurrent_deletes < 1:
            raise ValueError(f"max_concurrent_deletes must be >= 1, got {self.max_concurrent_deletes}")
        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone '{self.timezone}'") from e

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> "LapsedConfig":
        """Build a config from LAPSED_* environment variables."""
        load_dotenv(env_file)
        defaults = cls()

        def _int(name: str, default: int) -> int:
            value = os.getenv(name)
            if value is None or not value.strip():
                return default
            try:
                return int(value)
            except ValueError as e:
                raise ValueError(f"{name} must be an integer, got '{value}'") from e

        return cls(
            lookback_months=_int("LAPSED_LOOKBACK_MONTHS", defaults.lookback_months),
            timezone=os.getenv("LAPSED_TIMEZONE", defaults.timezone),
            identifier_mode=os.getenv("LAPSED_IDENTIFIER_MODE", defaults.identifier_mode).lower(),
            default_region=os.getenv("LAPSED_DEFAULT_REGION", defaults.default_region).upper(),
            db_path=os.getenv("LAPSED_DB_PATH", str(defaults.db_path)),
            imessage_db_path=os.getenv("LAPSED_IMESSAGE_DB_PATH", str(defaults.imessage_db_path)),
            max_concurrent_deletes=_int("LAPSED_MAX_CONCURRENT_DELETES", defaults.max_concurrent_deletes),
        )

    def to_dict(self) -> dict:
        """Convert to dict for logging."""
        return {
            "lookback_months": self.lookback_months,
            "timezone": self.timezone,
            "identifier_mode": self.identifier_mode,
            "default_region": self.default_region,
            "db_path": str(self.db_path),
            "imessage_db_path": str(self.imessage_db_path),
            "max_concurrent_deletes": self.max_concurrent_deletes,
        }
