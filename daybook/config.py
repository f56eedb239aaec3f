"""
Centralized configuration for daybook.
Settings come from environment variables, optionally loaded from a .env file.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

PACKAGE_DIR = Path(__file__).resolve().parent


class Config:
    """Application configuration, read from the environment."""

    @staticmethod
    def data_dir() -> Path:
        raw = os.getenv("DAYBOOK_DATA_DIR", "").strip()
        return Path(raw).expanduser() if raw else PACKAGE_DIR / "data"

    @staticmethod
    def events_file() -> Path:
        raw = os.getenv("DAYBOOK_EVENTS_FILE", "").strip()
        return Path(raw).expanduser() if raw else Config.data_dir() / "events.json"

    @staticmethod
    def log_level() -> str:
        return os.getenv("DAYBOOK_LOG_LEVEL", "INFO").strip().upper() or "INFO"

    @staticmethod
    def log_file() -> Optional[Path]:
        raw = os.getenv("DAYBOOK_LOG_FILE", "").strip()
        return Path(raw).expanduser() if raw else None
