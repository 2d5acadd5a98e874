"""
Tests for row matching: strict pass, lenient pass and the cusp guard.
"""
from itertools import permutations

from horoscope_resolver.resolution import (
    ExactRowMatcher,
    LenientRowMatcher,
    RowMatchPolicy,
    build_attempts,
    loose_label,
    normalize,
    pick_best_row,
)

from conftest import make_row


def _pick(rows, label, allow_single_sign_fallback=False):
    key = normalize(label)
    attempts = build_attempts(key, allow_single_sign_fallback)
    return RowMatchPolicy().pick(rows, attempts, key, allow_single_sign_fallback)


class TestLooseLabel:
    """Tests for loose_label."""

    def test_parenthetical_is_dropped(self):
        """Test that descriptive asides in brackets are removed."""
        assert loose_label("Full Moon in Cancer (Wolf Supermoon)") == "fullmoonincancer"

    def test_hemisphere_words_are_dropped(self):
        """Test that hemisphere words do not take part in containment."""
        assert loose_label("Aries–Taurus Southern Hemisphere") == "ariestaurus"


class TestExactPass:
    """Tests for the strict pass."""

    def test_cusp_row_is_found_by_any_spelling(self):
        """Test that 'aries-taurus' answers the 'Aries–Taurus Cusp' attempt."""
        rows = [make_row("aries-taurus", daily="X")]

        match = _pick(rows, "Aries–Taurus Cusp")

        assert match.row.fields["daily"] == "X"
        assert match.strategy_used == "exact"
        assert match.attempt == "Aries–Taurus Cusp"

    def test_attempt_order_beats_row_order(self):
        """Test that the first attempt with a matching row wins."""
        rows = [make_row("Aries"), make_row("Taurus")]

        match = ExactRowMatcher().match(rows, ["Taurus", "Aries"])

        assert match.row.sign_label == "Taurus"

    def test_cusp_row_preferred_over_single_sign_with_fallback(self):
        """Test that the cusp row wins even when constituent signs are also tried."""
        rows = [make_row("Taurus"), make_row("Aries–Taurus Cusp")]

        match = _pick(rows, "Aries-Taurus", allow_single_sign_fallback=True)

        assert match.row.sign_label == "Aries–Taurus Cusp"

    def test_single_sign_row_never_answers_cusp_query(self):
        """Test that a plain 'Taurus' row cannot satisfy a cusp query by default."""
        rows = [make_row("Taurus")]

        assert _pick(rows, "Aries-Taurus") is None


class TestLenientPass:
    """Tests for the lenient pass."""

    def test_descriptive_label_contains_sign(self):
        """Test that a noisy label naming only the sign is accepted for that sign."""
        rows = [make_row("Full Moon in Cancer (Wolf Supermoon)", daily="moon")]

        match = _pick(rows, "Cancer")

        assert match.row.fields["daily"] == "moon"
        assert match.strategy_used == "lenient"
        assert match.attempt == "Cancer"

    def test_noisy_single_sign_row_rejected_for_cusp(self):
        """Test that containment alone cannot let 'Taurus (Southern)' answer a cusp."""
        rows = [make_row("Taurus (Southern)")]

        assert _pick(rows, "Aries-Taurus") is None

    def test_lone_constituent_accepted_with_fallback(self):
        """Test the relaxation: one constituent sign, fallback on, no two-part rows."""
        rows = [make_row("Taurus (Southern)", daily="T")]

        match = _pick(rows, "Aries-Taurus", allow_single_sign_fallback=True)

        assert match.row.fields["daily"] == "T"

    def test_two_part_row_blocks_relaxation(self):
        """Test that a row naming both signs is chosen over a lone constituent."""
        rows = [
            make_row("Taurus (Southern)", daily="T"),
            make_row("Aries and Taurus special (NH)", daily="AT"),
        ]

        match = _pick(rows, "Aries-Taurus", allow_single_sign_fallback=True)

        assert match.row.fields["daily"] == "AT"

    def test_cusp_row_rejected_for_single_sign_query(self):
        """Test that a row naming two signs does not answer a one-sign query."""
        rows = [make_row("Aries-Taurus (Southern)")]

        assert _pick(rows, "Taurus") is None

    def test_opaque_query_uses_containment_only(self):
        """Test that a non-zodiac label matches a row that contains it."""
        rows = [make_row("Wolf Moon Special")]

        match = LenientRowMatcher().match(rows, ["Wolf Moon"], normalize("Wolf Moon"))

        assert match.row.sign_label == "Wolf Moon Special"

    def test_short_fragments_are_ignored(self):
        """Test that tiny loose labels never match by containment."""
        rows = [make_row("SH")]

        assert LenientRowMatcher().match(rows, ["Shadow"]) is None


class TestDeterminism:
    """Tests for order independence."""

    def test_result_independent_of_row_order(self):
        """Test that every permutation of the fetched rows picks the same row."""
        rows = [
            make_row("Cancer (Wolf)", daily="A"),
            make_row("Cancer Full Moon", daily="B"),
            make_row("Leo", daily="C"),
        ]

        key = normalize("Cancer")
        attempts = build_attempts(key)
        picks = {
            pick_best_row(list(order), attempts, key).fields["daily"]
            for order in permutations(rows)
        }

        assert len(picks) == 1

    def test_no_rows(self):
        """Test that an empty row set gives no match."""
        assert pick_best_row([], ["Leo"]) is None
