"""Application configuration"""

import json
import os
from pathlib import Path


def _get_config_value(key: str, default: str | None = None) -> str | None:
    """
    Get configuration value from environment or local.settings.json.

    Priority:
    1. Environment variable
    2. local.settings.json (Values.key)
    3. Default value

    Args:
        key: Configuration key name
        default: Default value if not found

    Returns:
        Configuration value or default
    """
    # Try environment variable first
    value = os.getenv(key)
    if value:
        return value

    # Try local.settings.json
    project_root = Path(__file__).resolve().parent.parent
    local_settings_path = project_root / "local.settings.json"

    if local_settings_path.exists():
        try:
            with open(local_settings_path) as f:
                settings = json.load(f)
                value = settings.get("Values", {}).get(key)
                if value:
                    return value
        except (json.JSONDecodeError, KeyError):
            pass

    return default


def _get_int_config_value(key: str, default: int) -> int:
    """Get an integer configuration value, falling back to default on bad input."""
    value = _get_config_value(key)
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def get_data_dir() -> Path:
    """
    Get the directory holding movies.json and user_ratings.json.

    Returns:
        Data directory (default: <project root>/data)
    """
    value = _get_config_value("MOVIE_DATA_DIR")
    if value:
        return Path(value)
    return Path(__file__).resolve().parent.parent / "data"


def get_data_service_url() -> str | None:
    """
    Get the base URL of a remote movie data service.

    Returns:
        Service URL, or None to load datasets from the local data directory
    """
    return _get_config_value("DATA_SERVICE_URL")


def get_default_recommendation_count() -> int:
    """Number of recommendations returned when the caller does not ask for a count."""
    return _get_int_config_value("DEFAULT_RECOMMENDATION_COUNT", 5)


def get_max_recommendations() -> int:
    """Upper bound on the count accepted by the HTTP layer."""
    return _get_int_config_value("MAX_RECOMMENDATIONS", 50)


def get_rating_sample_size() -> int:
    """Number of movies offered to a new user for rating."""
    return _get_int_config_value("RATING_SAMPLE_SIZE", 8)


def get_min_active_ratings() -> int:
    """Minimum ratings a user must supply before collaborative recommendations are served."""
    return _get_int_config_value("MIN_ACTIVE_RATINGS", 3)
