"""Configuration management using environment variables."""

import logging
import os
import sys
from functools import lru_cache

from attrs import define


LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s %(message)s"


@define
class Settings:
    """Application settings."""

    tmdb_read_access_token: str = ""
    tmdb_base_url: str = "https://api.themoviedb.org/3"
    appwrite_endpoint: str = "https://cloud.appwrite.io/v1"
    appwrite_project_id: str = ""
    appwrite_database_id: str = ""
    appwrite_collection_id: str = ""
    appwrite_api_key: str | None = None
    search_debounce_ms: int = 500
    trending_limit: int = 5
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Load settings from environment.

    Missing secrets fall back to empty strings so that an absent token shows
    up later as an authentication failure instead of a crash at startup.
    """
    return Settings(
        tmdb_read_access_token=os.environ.get("TMDB_API_KEY", ""),
        tmdb_base_url=os.environ.get("TMDB_BASE_URL", "https://api.themoviedb.org/3"),
        appwrite_endpoint=os.environ.get(
            "APPWRITE_ENDPOINT", "https://cloud.appwrite.io/v1"
        ),
        appwrite_project_id=os.environ.get("APPWRITE_PROJECT_ID", ""),
        appwrite_database_id=os.environ.get("APPWRITE_DATABASE_ID", ""),
        appwrite_collection_id=os.environ.get("APPWRITE_COLLECTION_ID", ""),
        appwrite_api_key=os.environ.get("APPWRITE_API_KEY"),
        search_debounce_ms=int(os.environ.get("SEARCH_DEBOUNCE_MS", "500")),
        trending_limit=int(os.environ.get("TRENDING_LIMIT", "5")),
        log_level=os.environ.get("MOVIE_DISCOVERY_LOG_LEVEL", "INFO"),
    )


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """Attach a single stderr handler to the package logger."""
    logger = logging.getLogger("movie_discovery")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
