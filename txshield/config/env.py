"""
Environment variable loading for txshield.

- TXSHIELD_DETECTION_ENABLED: master switch for all checks (default: on)
- TXSHIELD_LEDGER_DB_URL: SQLAlchemy URL of the resolution ledger
- TXSHIELD_LEDGER_DB_PATH: SQLite file for the ledger when no URL is set
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

# Project root: config is txshield/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_PACKAGE_DIR = _CONFIG_DIR.parent
_ROOT = _PACKAGE_DIR.parent
_ENV_PATH = _ROOT / ".env"

DEFAULT_LEDGER_DB_PATH = "txshield_ledger.db"

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


def load_txshield_env() -> None:
    """Load .env from project root. Safe to call multiple times."""
    from dotenv import load_dotenv

    load_dotenv(_ENV_PATH)


def env_flag(name: str, default: bool) -> bool:
    """Read a boolean flag; unknown or empty values fall back to default."""
    raw = (os.getenv(name) or "").strip().lower()
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    return default


def get_ledger_db_url() -> str:
    """
    Resolve the ledger database URL.
    Order: TXSHIELD_LEDGER_DB_URL > sqlite:///TXSHIELD_LEDGER_DB_PATH > sqlite:///txshield_ledger.db.
    """
    load_txshield_env()
    url = (os.getenv("TXSHIELD_LEDGER_DB_URL") or "").strip()
    if url:
        return url
    path = (os.getenv("TXSHIELD_LEDGER_DB_PATH") or "").strip() or DEFAULT_LEDGER_DB_PATH
    return f"sqlite:///{path}"
