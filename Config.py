# Config.py
#
# Runtime settings for the greenhouse host, read from the environment.
# A local .env file (if present) is loaded first.

import os
import logging
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

BASE_DIR = os.path.dirname(os.path.abspath(__file__))


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


class Config:
    """
    Application configuration loaded from environment variables.

    Environment Variables:
        PORT: Listening port (default: 3000)
        HOST: Bind address (default: 0.0.0.0)
        DB_PATH: SQLite database file (default: <repo>/db/greenhouse.db)
        LOG_LEVEL: Root logging level (default: INFO)
        CORS_ORIGINS: Comma separated allowed origins (default: *)
    """

    APP_TITLE = "Greenhouse Host"

    PORT = _int_env("PORT", 3000)
    HOST = os.getenv("HOST", "0.0.0.0")

    DB_PATH = os.getenv("DB_PATH", os.path.join(BASE_DIR, "db", "greenhouse.db"))

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    CORS_ORIGINS = [
        o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()
    ]


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=getattr(logging, (level or Config.LOG_LEVEL), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
