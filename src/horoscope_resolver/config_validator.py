"""
Configuration validation utilities.

Environment access with placeholder detection, plus checks for the
resolver settings that would otherwise only fail deep inside a resolution.
"""
import os
import warnings
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .config import ResolverConfig
from .exceptions import ConfigurationError

STORE_BACKENDS = ("memory", "csv", "supabase")


def get_required_env(key: str, description: str = None) -> str:
    """
    Get required environment variable with validation.

    :param key: Environment variable name
    :param description: Human-readable description for error messages
    :return: Environment variable value
    :raises: ConfigurationError if not set or a placeholder
    """
    value = os.getenv(key)

    if not value:
        desc = description or key
        raise ConfigurationError(
            f"{key} is required but not set.\n"
            f"Please set it using one of these methods:\n"
            f"  1. Environment variable: export {key}='your-value'\n"
            f"  2. .env file: Create .env in project root with {key}=your-value\n\n"
            f"Description: {desc}"
        )

    if _is_placeholder(value):
        raise ConfigurationError(
            f"{key} appears to be a placeholder value.\n"
            f"Please set a real value. Current value: {_mask_secret(value)}"
        )

    return value


def get_optional_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """
    Get optional environment variable.

    :param key: Environment variable name
    :param default: Default value if not set
    :return: Environment variable value or default
    """
    value = os.getenv(key, default)

    if value and _is_placeholder(value):
        warnings.warn(
            f"{key} appears to be a placeholder. Using default or None.",
            UserWarning
        )
        return default

    return value


def parse_bool(value: Optional[str], default: bool = False) -> bool:
    """Parse a boolean environment value ("true", "1", "yes", "on")."""
    if value is None or not value.strip():
        return default
    return value.strip().lower() in ("true", "1", "yes", "on")


def validate_timezone(name: str, setting_name: str) -> str:
    """
    Validate an IANA timezone name.

    :raises: ConfigurationError if the zone cannot be loaded
    """
    if not name:
        raise ConfigurationError(f"{setting_name} is required.")
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigurationError(
            f"{setting_name} is not a known timezone: {name!r}"
        ) from e
    return name


def validate_config(config: ResolverConfig) -> ResolverConfig:
    """
    Validate a ResolverConfig, raising on the first problem found.

    :param config: Configuration to validate
    :return: The same configuration
    :raises: ConfigurationError if any value is invalid
    """
    validate_timezone(config.reference_timezone, "HOROSCOPE_REFERENCE_TIMEZONE")
    if config.local_timezone:
        validate_timezone(config.local_timezone, "HOROSCOPE_LOCAL_TIMEZONE")

    if (config.default_hemisphere or "").strip().lower() not in ("northern", "southern"):
        raise ConfigurationError(
            f"HOROSCOPE_DEFAULT_HEMISPHERE must be 'Northern' or 'Southern', "
            f"got {config.default_hemisphere!r}"
        )

    if config.fetch_timeout_seconds <= 0:
        raise ConfigurationError(
            f"HOROSCOPE_FETCH_TIMEOUT_SECONDS must be positive, got {config.fetch_timeout_seconds}"
        )

    if not 0.0 <= config.fuzzy_sign_threshold <= 1.0:
        raise ConfigurationError(
            f"HOROSCOPE_FUZZY_SIGN_THRESHOLD must be between 0.0 and 1.0, "
            f"got {config.fuzzy_sign_threshold}"
        )

    if config.store_backend not in STORE_BACKENDS:
        raise ConfigurationError(
            f"Unknown store backend '{config.store_backend}'. "
            f"Must be one of: {list(STORE_BACKENDS)}"
        )

    if config.store_backend == "csv" and not (config.daily_csv_path or config.monthly_csv_path):
        raise ConfigurationError(
            "The csv store backend needs HOROSCOPE_DAILY_CSV_PATH or HOROSCOPE_MONTHLY_CSV_PATH."
        )

    if config.store_backend == "supabase":
        if not config.supabase_url or not config.supabase_key:
            raise ConfigurationError(
                "Supabase URL and key must be configured. "
                "Set SUPABASE_URL and SUPABASE_ANON_KEY in .env"
            )

    return config


def validate_path(path: str, path_name: str, must_exist: bool = False) -> str:
    """
    Validate file/directory path.

    :param path: Path to validate
    :param path_name: Name of the path (for error messages)
    :param must_exist: Whether path must exist
    :return: Validated path
    :raises: ConfigurationError if invalid
    """
    if not path:
        raise ConfigurationError(f"{path_name} is required.")

    if must_exist and not os.path.exists(path):
        raise ConfigurationError(
            f"{path_name} does not exist: {path}\n"
            f"Please check the path and ensure the file exists."
        )

    return path


def _is_placeholder(value: str) -> bool:
    """Check if value is a placeholder."""
    if not value:
        return False

    placeholder_patterns = [
        "your_",
        "your-",
        "placeholder",
        "xxx",
        "replace",
        "changeme",
    ]

    value_lower = value.lower()
    return any(pattern in value_lower for pattern in placeholder_patterns)


def _mask_secret(secret: str, show_chars: int = 4) -> str:
    """
    Mask secret for safe display in error messages.

    :param secret: Secret to mask
    :param show_chars: Number of characters to show at start/end
    :return: Masked secret
    """
    if not secret or len(secret) <= show_chars * 2:
        return "***"

    return f"{secret[:show_chars]}...{secret[-show_chars:]}"
