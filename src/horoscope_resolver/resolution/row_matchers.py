"""
Row matching strategies.

Each strategy scans the rows fetched for one date and hemisphere and returns
the first row whose sign label answers one of the lookup attempts.
"""
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Sequence

from .label_normalizer import LabelNormalizer, SignKey, normalize
from .vocabulary import signs_mentioned

if TYPE_CHECKING:
    from ..models import ContentRow

_PARENTHETICAL = re.compile(r"\([^)]*\)|\[[^\]]*\]")
_HEMISPHERE_WORDS = re.compile(r"\b(northern|southern|north|south|hemisphere|nh|sh)\b")
_NON_LETTERS = re.compile(r"[^a-z]")

# Loose forms shorter than this ("sh", "") never take part in containment
MIN_LOOSE_LENGTH = 3


def loose_label(text) -> str:
    """
    Letters-only lowercase form of a label, without parenthetical asides
    or hemisphere words.

    "Full Moon in Cancer (Wolf Supermoon)" -> "fullmoonincancer"
    """
    lowered = str(text or "").lower()
    lowered = _PARENTHETICAL.sub(" ", lowered)
    lowered = _HEMISPHERE_WORDS.sub(" ", lowered)
    return _NON_LETTERS.sub("", lowered)


@dataclass(frozen=True)
class RowMatch:
    """
    A row accepted by a matching strategy.

    Attributes:
        row: The accepted content row
        attempt: The lookup attempt it answered
        strategy_used: "exact" or "lenient"
    """
    row: "ContentRow"
    attempt: str
    strategy_used: str


class RowMatcher(ABC):
    """
    Protocol for row matching strategies.
    """

    @abstractmethod
    def match(
        self,
        rows: Sequence["ContentRow"],
        attempts: Sequence[str],
        query_key: Optional[SignKey] = None,
        allow_single_sign_fallback: bool = False,
    ) -> Optional[RowMatch]:
        """
        Find the first row answering an attempt.

        :param rows: Rows for one date and hemisphere, already in a stable order
        :param attempts: Lookup attempts, highest priority first
        :param query_key: The key the attempts were built from, if known
        :param allow_single_sign_fallback: Caller allows single-sign rows for a cusp
        :return: RowMatch or None
        """
        pass


class ExactRowMatcher(RowMatcher):
    """
    Strict pass: the row label and the attempt normalize to the same key.

    Attempt order decides priority; row order only breaks ties within
    one attempt.
    """

    def __init__(self, normalizer: Optional[LabelNormalizer] = None):
        self._normalize = normalizer.normalize if normalizer else normalize

    def match(
        self,
        rows: Sequence["ContentRow"],
        attempts: Sequence[str],
        query_key: Optional[SignKey] = None,
        allow_single_sign_fallback: bool = False,
    ) -> Optional[RowMatch]:
        row_keys = [self._normalize(row.sign_label) for row in rows]

        for attempt in attempts:
            wanted = self._normalize(attempt)
            if wanted.is_empty:
                continue
            for row, row_key in zip(rows, row_keys):
                if row_key == wanted:
                    return RowMatch(row=row, attempt=attempt, strategy_used="exact")

        return None


class LenientRowMatcher(RowMatcher):
    """
    Lenient pass: either-direction containment of loose labels.

    Real labels carry descriptive noise ("Full Moon in Cancer (Wolf
    Supermoon)", "Aries-Taurus Southern"). Containment alone would let
    "taurus" answer "Aries–Taurus Cusp", so rows are also checked against the
    signs the query names:

    - cusp query: the row must name both signs. A row naming only one of them
      is accepted only when the caller allows single-sign fallback and no row
      in the set names two signs at all.
    - single-sign query: the row must name that sign and no other.
    - opaque query: containment alone decides.
    """

    def match(
        self,
        rows: Sequence["ContentRow"],
        attempts: Sequence[str],
        query_key: Optional[SignKey] = None,
        allow_single_sign_fallback: bool = False,
    ) -> Optional[RowMatch]:
        loose_rows = [loose_label(row.sign_label) for row in rows]
        row_signs = [signs_mentioned(loose) for loose in loose_rows]
        has_two_part_row = any(len(signs) >= 2 for signs in row_signs)

        for attempt in attempts:
            loose_attempt = loose_label(attempt)
            if len(loose_attempt) < MIN_LOOSE_LENGTH:
                continue
            for row, loose_row, signs in zip(rows, loose_rows, row_signs):
                if len(loose_row) < MIN_LOOSE_LENGTH:
                    continue
                if loose_attempt not in loose_row and loose_row not in loose_attempt:
                    continue
                if self._passes_sign_guard(signs, query_key, allow_single_sign_fallback, has_two_part_row):
                    return RowMatch(row=row, attempt=attempt, strategy_used="lenient")

        return None

    @staticmethod
    def _passes_sign_guard(
        row_signs: List[str],
        query_key: Optional[SignKey],
        allow_single_sign_fallback: bool,
        has_two_part_row: bool,
    ) -> bool:
        if query_key is None or not query_key.signs:
            return True

        wanted = set(query_key.signs)
        named = set(row_signs)

        if query_key.is_cusp:
            if named == wanted:
                return True
            # A lone constituent sign, only on request
            return (
                allow_single_sign_fallback
                and not has_two_part_row
                and len(named) == 1
                and named <= wanted
            )

        return named == wanted
