# snackbar/config/settings.py

"""Central configuration for the SnackBar catalog layer."""

import os
from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()


def _env_int(name: str, default: int) -> int:
    """Read a positive integer from the environment."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        msg = f"Invalid environment configuration: {name}={raw!r} is not an integer"
        raise ValueError(msg) from exc
    if value <= 0:
        msg = f"Invalid environment configuration: {name} must be positive"
        raise ValueError(msg)
    return value


class Settings:
    """Central configuration for the SnackBar catalog layer."""

    # --- Catalog ---
    CATALOG_BASE_URL: str = os.getenv(
        "OFF_BASE_URL", "https://world.openfoodfacts.org"
    )
    REMOTE_TIMEOUT_MS: int = _env_int("OFF_TIMEOUT_MS", 20000)
    CACHE_TTL_MS: int = _env_int("OFF_CACHE_TTL_MS", 5 * 60 * 1000)
    DEFAULT_PAGE_SIZE: int = _env_int("OFF_PAGE_SIZE", 12)
    CATALOG_FIELDS: list[str] = [
        "code",
        "product_name",
        "brands",
        "image_small_url",
        "image_url",
        "nutriscore_grade",
        "quantity",
        "categories_tags",
        "nutriments",
        "ingredients_text",
        "allergens",
        "origins",
        "countries_tags",
    ]

    # --- Search ---
    MIN_QUERY_LENGTH: int = 2
    PRIMARY_TIMEOUT_CAP_MS: int = 20000   # Full-query attempt
    FALLBACK_TIMEOUT_CAP_MS: int = 12000  # Per-token attempts
    FALLBACK_PAGE_SIZE_CAP: int = 8
    FALLBACK_MAX_TOKENS: int = 4
    FALLBACK_MIN_TOKEN_LENGTH: int = 3
    SEARCH_SORT_BY: str = "unique_scans_n"

    # --- Alternatives ---
    ALTERNATIVES_POOL_SIZE: int = 28
    ALTERNATIVES_DEFAULT_LIMIT: int = 4
    ALTERNATIVES_FALLBACK_TERM: str = "tuote"

    # --- Transport ---
    ERROR_BODY_EXCERPT_CHARS: int = 300
    HEALTH_SLOW_THRESHOLD_MS: float = 5000.0
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"
    DEFAULT_HEADERS: dict[str, str] = {
        "Accept": "application/json",
        "Accept-Language": "en-US,en;q=0.9",
        "User-Agent": "SnackBar/0.1 (catalog access layer)",
    }

    # --- Logging ---
    CONSOLE_LOG_LEVEL: str = os.getenv("SNACKBAR_LOG_LEVEL", "WARNING").upper()

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    LOGS_DIR: Path = BASE_DIR / "logs"
