"""Configuration management for the finance tracker.

This module centralizes all configuration values including paths,
record service connection settings, and environment variable overrides.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

# Base project root - assumes this file is in finance_tracker/
_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

# Data directories
DATA_DIR = Path(os.getenv("FINTRACK_DATA_DIR", _PROJECT_ROOT / "data"))
CACHE_PATH = DATA_DIR / "persistent_cache.json"

# Record service
API_URL = os.getenv("FINTRACK_API_URL", "http://localhost:8080/api")
PROJECT_ID = os.getenv("FINTRACK_PROJECT_ID", "")
PUBLIC_KEY = os.getenv("FINTRACK_PUBLIC_KEY", "")

LOG_LEVEL = os.getenv("FINTRACK_LOG_LEVEL", "INFO")

# Table names on the record service
ACCOUNTS_TABLE = "accounts_c"
BUDGETS_TABLE = "Budget_c"
BILLS_TABLE = "bills_c"
TRANSACTIONS_TABLE = "Transaction_c"
SAVINGS_GOALS_TABLE = "SavingsGoal_c"
CATEGORIES_TABLE = "Category_c"


@dataclass(frozen=True)
class RecordServiceSettings:
    """Connection settings for the hosted record service."""
    base_url: str
    project_id: str = ""
    public_key: str = ""

    @property
    def is_configured(self) -> bool:
        return bool(self.base_url and self.project_id)


def load_record_settings(
    base_url: Optional[str] = None,
    project_id: Optional[str] = None,
    public_key: Optional[str] = None,
) -> RecordServiceSettings:
    """Build record service settings, falling back to environment values."""
    return RecordServiceSettings(
        base_url=(base_url or API_URL).rstrip("/"),
        project_id=project_id if project_id is not None else PROJECT_ID,
        public_key=public_key if public_key is not None else PUBLIC_KEY,
    )


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging once for the app process."""
    resolved = (level or LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, resolved, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def ensure_data_directories() -> None:
    """Create all required data directories if they don't exist."""
    DATA_DIR.mkdir(parents=True, exist_ok=True)
