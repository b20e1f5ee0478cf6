"""Runtime settings sourced from environment variables."""

from dataclasses import dataclass
from decimal import Decimal
import os
from pathlib import Path
from typing import Optional

from ledgerbook.domain.tax import HST_RATE
from ledgerbook.utils.amount_parser import to_decimal

DB_PATH_ENV = "LEDGERBOOK_DB_PATH"
HST_RATE_ENV = "LEDGERBOOK_HST_RATE"
LOG_LEVEL_ENV = "LEDGERBOOK_LOG_LEVEL"
LOG_JSON_ENV = "LEDGERBOOK_LOG_JSON"


@dataclass(frozen=True)
class Settings:
    """Application settings.

    Attributes:
        db_path: SQLite database path, or None for the default location.
        hst_rate: Sales tax rate used for decomposition and invoices.
        log_level: Log level name.
        log_json: Emit JSON log lines.
    """

    db_path: Optional[str] = None
    hst_rate: Decimal = HST_RATE
    log_level: str = "WARNING"
    log_json: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables."""
        raw_rate = os.getenv(HST_RATE_ENV)
        hst_rate = (
            to_decimal(raw_rate.strip(), HST_RATE_ENV, non_negative=True)
            if raw_rate
            else HST_RATE
        )
        return cls(
            db_path=os.getenv(DB_PATH_ENV) or None,
            hst_rate=hst_rate,
            log_level=os.getenv(LOG_LEVEL_ENV, "WARNING").strip().upper(),
            log_json=os.getenv(LOG_JSON_ENV, "").strip().lower() in ("1", "true", "yes"),
        )

    @staticmethod
    def default_db_path() -> Path:
        """Return ~/.ledgerbook/ledgerbook.db, creating the directory."""
        db_dir = Path.home() / ".ledgerbook"
        db_dir.mkdir(exist_ok=True)
        return db_dir / "ledgerbook.db"
