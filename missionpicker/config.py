import logging
import os

from .services.catalogue import DAILY_POOL, WEEKLY_POOL

DEFAULT_DATABASE_URL = "sqlite:///missionpicker.db"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Get DATABASE_URL, but validate it; fallback to SQLite if invalid
_raw_db_url = os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)

if _raw_db_url and not _raw_db_url.startswith(("sqlite://", "postgresql://", "postgres://")):
    DATABASE_URL = DEFAULT_DATABASE_URL
    _invalid_db_url = True
else:
    DATABASE_URL = _raw_db_url
    _invalid_db_url = False


def configure_logging():
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    if _invalid_db_url:
        logging.getLogger(__name__).warning("Invalid DATABASE_URL detected. Using SQLite fallback.")


def get_diagnostics():
    return {
        "Database": "SQLite (Default)" if "sqlite" in DATABASE_URL else "Postgres",
        "Log level": LOG_LEVEL,
        "Daily missions": len(DAILY_POOL),
        "Weekly missions": len(WEEKLY_POOL),
    }
