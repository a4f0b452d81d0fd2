"""
Configuration loader for the site.

Loads environment variables from .env (if present) and provides safe defaults.
By default a local SQLite DB is used (sqlite:///./newsdesk.db) unless DATABASE_URL is set.
"""

import os
from dotenv import load_dotenv

load_dotenv()

def _getenv(name: str, default: str = "") -> str:
    return os.getenv(name, default)

def _getbool(name: str, default: bool = False) -> bool:
    value = _getenv(name, "")
    if not value:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")

# demo fixtures create this category
DEFAULT_LISTING_CATEGORY = "international"

class Settings:
    DATABASE_URL: str = _getenv("DATABASE_URL") or "sqlite:///./newsdesk.db"
    # Listings
    PAGE_SIZE: int = int(_getenv("PAGE_SIZE", "10"))
    # slug applied to the article listing when no tag/category filter is given (empty = none)
    DEFAULT_CATEGORY_SLUG: str = _getenv("DEFAULT_CATEGORY_SLUG", DEFAULT_LISTING_CATEGORY).strip()
    # Homepage
    HOMEPAGE_RAW_LIMIT: int = int(_getenv("HOMEPAGE_RAW_LIMIT", "15"))
    HOMEPAGE_LATEST_SIZE: int = int(_getenv("HOMEPAGE_LATEST_SIZE", "10"))
    HOMEPAGE_TRENDING_SIZE: int = int(_getenv("HOMEPAGE_TRENDING_SIZE", "3"))
    # Cache
    TAG_CLOUD_TTL_SECONDS: int = int(_getenv("TAG_CLOUD_TTL_SECONDS", "3600"))
    CATEGORY_MENU_TTL_SECONDS: int = int(_getenv("CATEGORY_MENU_TTL_SECONDS", "3600"))
    # Search (title matching ignores case unless this is set)
    SEARCH_CASE_SENSITIVE: bool = _getbool("SEARCH_CASE_SENSITIVE", False)
    # RSS
    SITE_URL: str = _getenv("SITE_URL", "http://localhost:8000").rstrip("/")
    SITE_TITLE: str = _getenv("SITE_TITLE", "Newsdesk")
    SITE_DESCRIPTION: str = _getenv("SITE_DESCRIPTION", "Latest articles")
    # Demo content
    SEED_DEMO_DATA: bool = _getbool("SEED_DEMO_DATA", False)
    # Logging
    LOG_LEVEL: str = _getenv("LOG_LEVEL", "INFO").upper()

settings = Settings()
