# src/config/settings.py

"""Central configuration for the offer_ledger service."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the offer_ledger service."""

    # --- Dates ---
    DATE_FORMAT: str = "%Y-%m-%d"       # ISO calendar date, CLI + storage

    # --- Logging ---
    CONSOLE_LOG_LEVEL: str = os.getenv("OFFER_CONSOLE_LOG_LEVEL", "WARNING")

    # --- Output ---
    DEFAULT_OUTPUT_FORMAT: str = "json"
    OUTPUT_FORMATS: list[str] = ["json", "table"]

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    DB_PATH: Path = Path(
        os.getenv("OFFER_DB_PATH", str(BASE_DIR / "data" / "offers.db"))
    )
    LOGS_DIR: Path = Path(
        os.getenv("OFFER_LOG_DIR", str(BASE_DIR / "logs"))
    )
