"""
Tests for hemisphere resolution.
"""
import pytest

from horoscope_resolver.resolution import (
    Hemisphere,
    hemisphere_aliases,
    resolve_hemisphere,
    row_matches_hemisphere,
)


class TestResolveHemisphere:
    """Tests for resolve_hemisphere."""

    @pytest.mark.parametrize("raw", [
        "Northern", "northern", "NH", "nh", "N", " Northern Hemisphere ", "north", "NH (Europe)",
    ])
    def test_northern_spellings(self, raw):
        """Test that northern spellings resolve to NORTHERN."""
        assert resolve_hemisphere(raw) == Hemisphere.NORTHERN
        assert resolve_hemisphere(raw, default=Hemisphere.SOUTHERN) == Hemisphere.NORTHERN

    @pytest.mark.parametrize("raw", [
        "Southern", "SOUTHERN", "SH", "sh", "s", "southern hemisphere", "South (AU)",
    ])
    def test_southern_spellings(self, raw):
        """Test that southern spellings resolve to SOUTHERN."""
        assert resolve_hemisphere(raw) == Hemisphere.SOUTHERN
        assert resolve_hemisphere(raw, default=Hemisphere.NORTHERN) == Hemisphere.SOUTHERN

    @pytest.mark.parametrize("raw", [None, "", "equator", "north and south"])
    def test_unrecognized_uses_default(self, raw):
        """Test that empty, unknown or ambiguous values fall back to the default."""
        assert resolve_hemisphere(raw) == Hemisphere.SOUTHERN
        assert resolve_hemisphere(raw, default=Hemisphere.NORTHERN) == Hemisphere.NORTHERN

    def test_parse_default(self):
        """Test that the configured default is parsed case-insensitively."""
        assert Hemisphere.parse_default("northern") == Hemisphere.NORTHERN
        assert Hemisphere.parse_default(Hemisphere.SOUTHERN) == Hemisphere.SOUTHERN
        with pytest.raises(ValueError):
            Hemisphere.parse_default("eastern")


class TestRowMatchesHemisphere:
    """Tests for tolerant row hemisphere checks."""

    def test_short_code_profile_matches_long_row_label(self):
        """Test that a profile's 'SH' matches a row stored as 'Southern Hemisphere'."""
        assert row_matches_hemisphere("Southern Hemisphere", resolve_hemisphere("SH"))

    def test_other_hemisphere_does_not_match(self):
        """Test that a northern row never answers a southern query."""
        assert not row_matches_hemisphere("NH", Hemisphere.SOUTHERN)
        assert not row_matches_hemisphere("Northern", Hemisphere.SOUTHERN)

    def test_unlabelled_row_does_not_match(self):
        """Test that a row without a recognizable hemisphere is excluded."""
        assert not row_matches_hemisphere("", Hemisphere.SOUTHERN)
        assert not row_matches_hemisphere("global", Hemisphere.NORTHERN)


class TestAliases:
    """Tests for store-facing spellings."""

    def test_aliases_include_canonical_and_short_code(self):
        """Test that the alias list covers the stored spellings."""
        aliases = hemisphere_aliases(Hemisphere.SOUTHERN)

        assert "Southern" in aliases
        assert "SH" in aliases
        assert "Southern Hemisphere" in aliases

    def test_every_alias_resolves_back(self):
        """Test that each alias resolves to the hemisphere it belongs to."""
        for hemisphere in Hemisphere:
            for alias in hemisphere_aliases(hemisphere):
                assert resolve_hemisphere(alias) == hemisphere
