# config.py
# Settings come from environment variables; a local .env file is picked up if present.
import logging
import os
from dotenv import load_dotenv

load_dotenv()  # Load .env automatically

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class Settings:
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///courses.db")
    CATALOG_BACKEND: str = os.getenv("CATALOG_BACKEND", "map").lower()
    COURSE_FILE: str = os.getenv("COURSE_FILE", "courses.csv")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "WARNING").upper()

settings = Settings()


def configure_logging(level: str | None = None):
    """Set up root logging. Unknown level names fall back to INFO."""
    level_name = (level or settings.LOG_LEVEL).upper()
    numeric_level = getattr(logging, level_name, None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT)
    return numeric_level
