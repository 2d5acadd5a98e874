"""
Configuration loader with validation.

Builds a ResolverConfig from environment variables (and a local .env file).
"""
from dotenv import load_dotenv

from .config import ResolverConfig
from .config_validator import (
    get_optional_env,
    get_required_env,
    parse_bool,
    validate_config,
    validate_path,
)
from .exceptions import ConfigurationError


def load_config_from_env() -> ResolverConfig:
    """
    Load configuration from environment variables with validation.

    Usage:
        config = load_config_from_env()
        service = HoroscopeService(config)

    :return: Validated ResolverConfig instance
    :raises: ConfigurationError if required configs are missing or invalid
    """
    # Load .env file if it exists (for local development)
    load_dotenv()

    defaults = ResolverConfig()
    backend = (get_optional_env("HOROSCOPE_STORE_BACKEND", defaults.store_backend) or "").strip().lower()

    try:
        config = ResolverConfig(
            store_backend=backend,
            daily_csv_path=get_optional_env("HOROSCOPE_DAILY_CSV_PATH"),
            monthly_csv_path=get_optional_env("HOROSCOPE_MONTHLY_CSV_PATH"),
            supabase_url=get_optional_env("SUPABASE_URL"),
            supabase_key=get_optional_env("SUPABASE_ANON_KEY"),
            daily_table=get_optional_env("HOROSCOPE_DAILY_TABLE", defaults.daily_table),
            monthly_table=get_optional_env("HOROSCOPE_MONTHLY_TABLE", defaults.monthly_table),
            reference_timezone=get_optional_env(
                "HOROSCOPE_REFERENCE_TIMEZONE", defaults.reference_timezone
            ),
            local_timezone=get_optional_env("HOROSCOPE_LOCAL_TIMEZONE"),
            default_hemisphere=get_optional_env(
                "HOROSCOPE_DEFAULT_HEMISPHERE", defaults.default_hemisphere
            ),
            fetch_timeout_seconds=float(
                get_optional_env("HOROSCOPE_FETCH_TIMEOUT_SECONDS", str(defaults.fetch_timeout_seconds))
            ),
            allow_single_sign_fallback=parse_bool(
                get_optional_env("HOROSCOPE_ALLOW_SINGLE_SIGN_FALLBACK"),
                defaults.allow_single_sign_fallback,
            ),
            enable_fuzzy_signs=parse_bool(
                get_optional_env("HOROSCOPE_ENABLE_FUZZY_SIGNS"),
                defaults.enable_fuzzy_signs,
            ),
            fuzzy_sign_threshold=float(
                get_optional_env("HOROSCOPE_FUZZY_SIGN_THRESHOLD", str(defaults.fuzzy_sign_threshold))
            ),
            enable_cache=parse_bool(
                get_optional_env("HOROSCOPE_ENABLE_CACHE"),
                defaults.enable_cache,
            ),
        )
    except ValueError as e:
        raise ConfigurationError(f"Invalid numeric configuration value: {e}") from e

    if config.store_backend == "supabase":
        config.supabase_url = get_required_env("SUPABASE_URL", "Supabase project URL")
        config.supabase_key = get_required_env("SUPABASE_ANON_KEY", "Supabase anonymous/public key")

    validate_config(config)

    if config.store_backend == "csv":
        for path, name in (
            (config.daily_csv_path, "HOROSCOPE_DAILY_CSV_PATH"),
            (config.monthly_csv_path, "HOROSCOPE_MONTHLY_CSV_PATH"),
        ):
            if path:
                validate_path(path, name, must_exist=True)

    return config
