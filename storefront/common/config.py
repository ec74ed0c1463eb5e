"""
Application settings loaded from environment variables.
"""
import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _as_bool(value: str, default: bool = False) -> bool:
    if value is None:
        return default
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    # Firebase credentials: JSON content for hosted environments, file path for local development
    firebase_credentials_json: str = os.environ.get("FIREBASE_CREDENTIALS_JSON_CONTENT", "")
    firebase_credentials_file: str = os.environ.get("FIREBASE_CREDENTIALS_FILE", "beautydiscount-firebase-adminsdk.json")
    redis_url: str = os.environ.get("REDIS_URL", "redis://localhost:6379/0")
    catalog_cache_enabled: bool = _as_bool(os.environ.get("CATALOG_CACHE_ENABLED"), default=True)
    catalog_cache_ttl: int = int(os.environ.get("CATALOG_CACHE_TTL", "600"))
    search_fetch_limit: int = int(os.environ.get("SEARCH_FETCH_LIMIT", "1000"))
    listing_fetch_limit: int = int(os.environ.get("LISTING_FETCH_LIMIT", "1000"))
    store_timezone: str = os.environ.get("STORE_TIMEZONE", "Africa/Casablanca")
    analytics_collection: str = os.environ.get("ANALYTICS_COLLECTION", "")
    log_level: str = os.environ.get("LOG_LEVEL", "INFO")
    port: int = int(os.environ.get("PORT", "8000"))


settings = Settings()


def configure_logging(level: str = None) -> None:
    """Configure root logging once for the whole application."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    # Firestore's transport is chatty at INFO
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("google").setLevel(logging.WARNING)
