"""
Tests for configuration loading and validation.
"""
import pytest

from horoscope_resolver import ConfigurationError, ResolverConfig
from horoscope_resolver.config_loader import load_config_from_env
from horoscope_resolver.config_validator import (
    get_optional_env,
    get_required_env,
    parse_bool,
    validate_config,
)

ENV_VARS = (
    "HOROSCOPE_STORE_BACKEND",
    "HOROSCOPE_DAILY_CSV_PATH",
    "HOROSCOPE_MONTHLY_CSV_PATH",
    "HOROSCOPE_DAILY_TABLE",
    "HOROSCOPE_MONTHLY_TABLE",
    "HOROSCOPE_REFERENCE_TIMEZONE",
    "HOROSCOPE_LOCAL_TIMEZONE",
    "HOROSCOPE_DEFAULT_HEMISPHERE",
    "HOROSCOPE_FETCH_TIMEOUT_SECONDS",
    "HOROSCOPE_ALLOW_SINGLE_SIGN_FALLBACK",
    "HOROSCOPE_ENABLE_FUZZY_SIGNS",
    "HOROSCOPE_FUZZY_SIGN_THRESHOLD",
    "HOROSCOPE_ENABLE_CACHE",
    "SUPABASE_URL",
    "SUPABASE_ANON_KEY",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Run every test without resolver variables set."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestLoadConfigFromEnv:
    """Tests for load_config_from_env."""

    def test_defaults(self):
        """Test that an empty environment gives the default configuration."""
        config = load_config_from_env()

        assert config == ResolverConfig()

    def test_reads_overrides(self, monkeypatch):
        """Test that environment values override defaults."""
        monkeypatch.setenv("HOROSCOPE_REFERENCE_TIMEZONE", "Europe/London")
        monkeypatch.setenv("HOROSCOPE_DEFAULT_HEMISPHERE", "Northern")
        monkeypatch.setenv("HOROSCOPE_FETCH_TIMEOUT_SECONDS", "2.5")
        monkeypatch.setenv("HOROSCOPE_ALLOW_SINGLE_SIGN_FALLBACK", "yes")
        monkeypatch.setenv("HOROSCOPE_ENABLE_CACHE", "false")

        config = load_config_from_env()

        assert config.reference_timezone == "Europe/London"
        assert config.default_hemisphere == "Northern"
        assert config.fetch_timeout_seconds == 2.5
        assert config.allow_single_sign_fallback is True
        assert config.enable_cache is False

    def test_invalid_number(self, monkeypatch):
        """Test that a non-numeric timeout raises ConfigurationError."""
        monkeypatch.setenv("HOROSCOPE_FETCH_TIMEOUT_SECONDS", "soon")

        with pytest.raises(ConfigurationError):
            load_config_from_env()

    def test_unknown_timezone(self, monkeypatch):
        """Test that an unknown timezone raises ConfigurationError."""
        monkeypatch.setenv("HOROSCOPE_REFERENCE_TIMEZONE", "Mars/Olympus_Mons")

        with pytest.raises(ConfigurationError, match="not a known timezone"):
            load_config_from_env()

    def test_supabase_requires_credentials(self, monkeypatch):
        """Test that the supabase backend needs URL and key."""
        monkeypatch.setenv("HOROSCOPE_STORE_BACKEND", "supabase")

        with pytest.raises(ConfigurationError, match="SUPABASE_URL"):
            load_config_from_env()

    def test_supabase_backend(self, monkeypatch):
        """Test that a complete supabase configuration loads."""
        monkeypatch.setenv("HOROSCOPE_STORE_BACKEND", "Supabase")
        monkeypatch.setenv("SUPABASE_URL", "https://abc.supabase.co")
        monkeypatch.setenv("SUPABASE_ANON_KEY", "eyJhbGciOiJIUzI1NiJ9.test")

        config = load_config_from_env()

        assert config.store_backend == "supabase"
        assert config.supabase_url == "https://abc.supabase.co"

    def test_csv_path_must_exist(self, monkeypatch, tmp_path):
        """Test that a csv backend pointing at a missing file is rejected."""
        monkeypatch.setenv("HOROSCOPE_STORE_BACKEND", "csv")
        monkeypatch.setenv("HOROSCOPE_DAILY_CSV_PATH", str(tmp_path / "missing.csv"))

        with pytest.raises(ConfigurationError, match="does not exist"):
            load_config_from_env()


class TestValidateConfig:
    """Tests for validate_config."""

    @pytest.mark.parametrize("overrides", [
        {"default_hemisphere": "Eastern"},
        {"fetch_timeout_seconds": 0},
        {"fuzzy_sign_threshold": 1.5},
        {"store_backend": "redis"},
        {"store_backend": "csv"},
        {"local_timezone": "Nowhere/Special"},
    ])
    def test_invalid_values(self, overrides):
        """Test that each invalid setting is rejected."""
        with pytest.raises(ConfigurationError):
            validate_config(ResolverConfig(**overrides))

    def test_valid_config_is_returned(self):
        """Test that a valid configuration passes through unchanged."""
        config = ResolverConfig(local_timezone="UTC")

        assert validate_config(config) is config


class TestEnvHelpers:
    """Tests for environment helpers."""

    def test_required_env_missing(self):
        """Test that a missing required variable raises with instructions."""
        with pytest.raises(ConfigurationError, match="is required"):
            get_required_env("SUPABASE_URL")

    def test_required_env_placeholder(self, monkeypatch):
        """Test that placeholder values are rejected."""
        monkeypatch.setenv("SUPABASE_ANON_KEY", "your_supabase_key")

        with pytest.raises(ConfigurationError, match="placeholder"):
            get_required_env("SUPABASE_ANON_KEY")

    def test_optional_env_placeholder_warns(self, monkeypatch):
        """Test that an optional placeholder warns and falls back to the default."""
        monkeypatch.setenv("HOROSCOPE_LOCAL_TIMEZONE", "changeme")

        with pytest.warns(UserWarning):
            assert get_optional_env("HOROSCOPE_LOCAL_TIMEZONE", "UTC") == "UTC"

    @pytest.mark.parametrize("value,expected", [
        ("true", True), ("1", True), ("YES", True), ("on", True),
        ("false", False), ("0", False), ("no", False),
    ])
    def test_parse_bool(self, value, expected):
        """Test boolean parsing."""
        assert parse_bool(value) is expected

    def test_parse_bool_default(self):
        """Test that an empty value gives the default."""
        assert parse_bool(None, True) is True
        assert parse_bool("  ", False) is False
