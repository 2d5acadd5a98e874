"""
Tests for date anchor building.
"""
from datetime import datetime, timezone

import pytest

from horoscope_resolver import InvalidDateError
from horoscope_resolver.resolution import build_anchors, month_anchor, month_anchors, parse_anchor


class TestBuildAnchors:
    """Tests for build_anchors."""

    def test_all_frames_agree(self):
        """Test that one day plus its neighbours is returned when all frames agree."""
        now = datetime(2025, 4, 20, 2, 0, tzinfo=timezone.utc)

        anchors = build_anchors(now=now, local_timezone="UTC")

        assert anchors == ["2025-04-20", "2025-04-19", "2025-04-21"]

    def test_frames_disagree_near_midnight(self):
        """Test ordering when Sydney has already rolled over to the next day."""
        # 11:00 in New York, 01:00 the next day in Sydney
        now = datetime(2025, 4, 20, 15, 0, tzinfo=timezone.utc)

        anchors = build_anchors(now=now, local_timezone="America/New_York")

        assert anchors == ["2025-04-20", "2025-04-21", "2025-04-19", "2025-04-22"]

    def test_local_day_comes_first(self):
        """Test that the caller's own calendar day is always the first anchor."""
        # 02:00 on the 21st in Kiritimati (UTC+14)
        now = datetime(2025, 4, 20, 12, 0, tzinfo=timezone.utc)

        anchors = build_anchors(now=now, local_timezone="Pacific/Kiritimati")

        assert anchors[0] == "2025-04-21"

    def test_anchors_are_unique(self):
        """Test that no anchor is repeated."""
        now = datetime(2025, 12, 31, 13, 30, tzinfo=timezone.utc)

        anchors = build_anchors(now=now, local_timezone="America/Los_Angeles")

        assert len(anchors) == len(set(anchors))
        assert "2026-01-01" in anchors

    def test_naive_now_is_treated_as_utc(self):
        """Test that a naive datetime is interpreted as UTC."""
        naive = datetime(2025, 4, 20, 2, 0)
        aware = naive.replace(tzinfo=timezone.utc)

        assert build_anchors(now=naive, local_timezone="UTC") == build_anchors(now=aware, local_timezone="UTC")

    def test_override_is_the_only_anchor(self):
        """Test that an explicit date disables anchor computation."""
        assert build_anchors(override="2025-04-20") == ["2025-04-20"]

    @pytest.mark.parametrize("bad", ["2025-02-30", "20-04-2025", "tomorrow", "2025/04/20"])
    def test_invalid_override_raises(self, bad):
        """Test that malformed overrides raise InvalidDateError."""
        with pytest.raises(InvalidDateError):
            build_anchors(override=bad)


class TestMonthAnchors:
    """Tests for month keys."""

    def test_month_anchor(self):
        """Test that a day maps to the first of its month."""
        assert month_anchor("2025-04-20") == "2025-04-01"

    def test_month_anchors_keep_order_and_dedupe(self):
        """Test that month keys keep anchor priority and appear once."""
        assert month_anchors(["2025-04-30", "2025-05-01", "2025-04-29"]) == ["2025-04-01", "2025-05-01"]

    def test_parse_anchor_strips_whitespace(self):
        """Test that surrounding whitespace is tolerated."""
        assert parse_anchor(" 2025-04-20 ") == "2025-04-20"
