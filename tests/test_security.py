"""
Tests for security module.

Validates sanitization of inbound profile payloads.
"""
import pytest

from horoscope_resolver.security import InputValidator, ValidationError


class TestInputValidator:
    """Test input validation and sanitization."""

    def test_sanitize_text_strips_control_characters(self):
        """Test that control characters and surrounding whitespace are removed."""
        assert InputValidator.sanitize_text("  Leo\x00\n ", "primarySign") == "Leo"

    def test_sanitize_text_empty_is_none(self):
        """Test that blank values become None."""
        assert InputValidator.sanitize_text("   ", "primarySign") is None

    def test_sanitize_text_too_long(self):
        """Test that overlong fields are rejected."""
        with pytest.raises(ValidationError, match="exceeds maximum length"):
            InputValidator.sanitize_text("a" * 201, "cuspName")

    def test_sanitize_text_rejects_non_strings(self):
        """Test that lists and objects are rejected."""
        with pytest.raises(ValidationError):
            InputValidator.sanitize_text(["Leo"], "primarySign")

    def test_numeric_ids_are_accepted(self):
        """Test that numeric user ids are converted to text."""
        assert InputValidator.sanitize_text(42, "userId") == "42"

    def test_validate_profile_drops_unknown_keys(self):
        """Test that only profile fields survive validation."""
        profile = InputValidator.validate_profile({"primarySign": "Leo", "isAdmin": True})

        assert profile == {"primarySign": "Leo"}

    def test_validate_profile_nested_cusp_result(self):
        """Test that a nested cuspResult is validated too."""
        profile = InputValidator.validate_profile({"cuspResult": {"cuspName": " Cusp of Power "}})

        assert profile == {"cuspResult": {"cuspName": "Cusp of Power"}}

    def test_validate_profile_requires_object(self):
        """Test that a non-object profile is rejected."""
        with pytest.raises(ValidationError, match="must be an object"):
            InputValidator.validate_profile("Leo")

    @pytest.mark.parametrize("value,expected", [(None, None), ("", None), (" 2025-04-20 ", "2025-04-20")])
    def test_validate_date(self, value, expected):
        """Test optional date validation."""
        assert InputValidator.validate_date(value) == expected

    @pytest.mark.parametrize("value", ["20/04/2025", 20250420, "2025-4-20"])
    def test_validate_date_rejects_bad_format(self, value):
        """Test that malformed dates are rejected."""
        with pytest.raises(ValidationError):
            InputValidator.validate_date(value)

    def test_validate_flag(self):
        """Test boolean flag validation."""
        assert InputValidator.validate_flag(True, "force_fresh") is True
        assert InputValidator.validate_flag(None, "force_fresh") is None
        with pytest.raises(ValidationError):
            InputValidator.validate_flag("yes", "force_fresh")
