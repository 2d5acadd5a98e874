"""
Sign label normalization.

Turns free-form sign and cusp text ("Aries–Taurus Cusp", "aries_taurus",
"Cusp of Power", "  taurus ") into a SignKey that compares equal whenever two
labels designate the same sign or cusp.
"""
import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .exact_matcher import ExactSignMatcher
from .fuzzy_matcher import FuzzySignMatcher
from .resolution_policy import ResolutionPolicy
from .vocabulary import ZODIAC_SIGNS, is_adjacent_pair, is_sign, lookup_marketing_name

logger = logging.getLogger(__name__)

EN_DASH = "–"

# en dash, em dash, figure dash, horizontal bar, non-breaking hyphen, minus sign, underscore
_DASHES = re.compile(r"[‒–—―‑−_]")
_TRAILING_CUSP = re.compile(r"\s*\bcusp\s*$", re.IGNORECASE)


def squash_spaces(text) -> str:
    return re.sub(r"\s+", " ", str(text or "")).strip()


def normalize_dashes(text: str) -> str:
    return _DASHES.sub("-", text or "")


def strip_trailing_cusp(text: str) -> str:
    return _TRAILING_CUSP.sub("", text).strip()


def _title_word(word: str) -> str:
    return word[:1].upper() + word[1:].lower() if word else ""


def _title_fragment(fragment: str) -> str:
    return " ".join(_title_word(w) for w in fragment.split(" ") if w)


@dataclass(frozen=True)
class SignKey:
    """
    Canonical form of a sign designation.

    Exactly one of ``signs`` (one or two lowercase zodiac names) or
    ``opaque_fragments`` (label fragments that are not zodiac names) is set;
    both empty means there was no designation at all. Only those two fields
    take part in equality.
    """
    signs: Tuple[str, ...] = ()
    opaque_fragments: Tuple[str, ...] = ()
    raw: str = field(default="", compare=False)
    source: str = field(default="empty", compare=False)
    corrected: bool = field(default=False, compare=False)

    @property
    def is_empty(self) -> bool:
        return not self.signs and not self.opaque_fragments

    @property
    def is_opaque(self) -> bool:
        return not self.signs and bool(self.opaque_fragments)

    @property
    def is_single(self) -> bool:
        return len(self.signs) == 1

    @property
    def is_cusp(self) -> bool:
        return len(self.signs) == 2

    @property
    def key(self) -> str:
        """Lowercase, hyphen-joined comparison key ("aries-taurus")."""
        if self.signs:
            return "-".join(self.signs)
        return "-".join(f.lower() for f in self.opaque_fragments)

    @property
    def display(self) -> str:
        """Title-cased display label, en-dash joined for cusps ("Aries–Taurus")."""
        if self.signs:
            return EN_DASH.join(_title_word(s) for s in self.signs)
        return EN_DASH.join(_title_fragment(f) for f in self.opaque_fragments)

    @property
    def hyphen_display(self) -> str:
        """Title-cased display label joined with a plain hyphen ("Aries-Taurus")."""
        return self.display.replace(EN_DASH, "-")

    def reversed(self) -> "SignKey":
        """The same cusp with its signs in the opposite order."""
        return SignKey(
            signs=tuple(reversed(self.signs)),
            opaque_fragments=self.opaque_fragments,
            raw=self.raw,
            source=self.source,
            corrected=self.corrected,
        )

    @property
    def is_canonical_order(self) -> bool:
        """False for a cusp whose signs are not consecutive in zodiac order."""
        return not self.is_cusp or is_adjacent_pair(*self.signs)

    def __str__(self) -> str:
        return self.display


class LabelNormalizer:
    """
    Normalizes sign and cusp labels.

    Resolution order:
    1. Marketing cusp names ("Cusp of Power"), matched anywhere in the label
    2. Decomposition on hyphens into one or two zodiac names
    3. Opaque fallback (kept for best-effort matching)
    """

    def __init__(
        self,
        enable_fuzzy: bool = True,
        fuzzy_threshold: float = 0.85,
    ):
        """
        :param enable_fuzzy: Correct misspelt sign names with rapidfuzz
        :param fuzzy_threshold: Minimum similarity (0.0-1.0) for a correction
        """
        matchers = [ExactSignMatcher()]
        if enable_fuzzy:
            matchers.append(FuzzySignMatcher(threshold=fuzzy_threshold))
        self._policy = ResolutionPolicy(matchers=matchers, confidence_threshold=fuzzy_threshold)

    def normalize(self, raw) -> SignKey:
        """
        Normalize a raw label.

        :param raw: Free-form sign/cusp text (None and non-strings are tolerated)
        :return: SignKey (possibly opaque or empty, never None)
        """
        original = "" if raw is None else str(raw)
        text = strip_trailing_cusp(squash_spaces(normalize_dashes(squash_spaces(original))))
        if not text:
            return SignKey(raw=original)

        pair = lookup_marketing_name(text.lower())
        if pair:
            return SignKey(signs=pair, raw=original, source="marketing")

        fragments = [squash_spaces(p) for p in text.split("-")]
        fragments = [f for f in fragments if f]
        if not fragments:
            return SignKey(raw=original)

        signs, corrected = self._decompose(fragments)
        if signs is not None:
            if len(signs) == 2 and not is_adjacent_pair(*signs) and is_adjacent_pair(signs[1], signs[0]):
                signs = (signs[1], signs[0])
            return SignKey(signs=signs, raw=original, source="decomposition", corrected=corrected)

        logger.debug(f"Label '{original}' did not decompose into zodiac signs; keeping it opaque")
        return SignKey(
            opaque_fragments=tuple(fragments),
            raw=original,
            source="opaque",
        )

    def _decompose(self, fragments: List[str]) -> Tuple[Optional[Tuple[str, ...]], bool]:
        if len(fragments) == 1:
            sign, corrected = self._resolve_word(fragments[0])
            return ((sign,), corrected) if sign else (None, False)

        if len(fragments) != 2:
            return None, False

        # "Aries Cusp of X - Taurus": the sign is the word next to the dash
        first, first_corrected = self._resolve_word(fragments[0])
        if first is None:
            first = self._sole_sign_word(fragments[0].split(" ")[-1:])
        second, second_corrected = self._resolve_word(fragments[1])
        if second is None:
            second = self._sole_sign_word(fragments[1].split(" ")[:1])

        if first and second and first != second:
            return (first, second), first_corrected or second_corrected
        return None, False

    def _resolve_word(self, fragment: str) -> Tuple[Optional[str], bool]:
        word = re.sub(r"[^a-z]", "", fragment.lower())
        if not word:
            return None, False
        result = self._policy.resolve(word, ZODIAC_SIGNS)
        if result.canonical_value is None:
            return None, False
        if result.strategy_used == "fuzzy":
            logger.info(
                f"Corrected sign '{fragment}' to '{result.canonical_value}' "
                f"(confidence {result.confidence:.2f})"
            )
            return result.canonical_value, True
        return result.canonical_value, False

    @staticmethod
    def _sole_sign_word(words: List[str]) -> Optional[str]:
        hits = [w.lower() for w in words if is_sign(w.lower())]
        return hits[0] if len(hits) == 1 else None


_default_normalizer = LabelNormalizer()


def normalize(raw) -> SignKey:
    """Normalize a label with the default normalizer (fuzzy correction on)."""
    return _default_normalizer.normalize(raw)


def key_from_signs(first, second=None, normalizer: Optional[LabelNormalizer] = None) -> SignKey:
    """
    Build a key from separately stored sign names (e.g. a profile's primary
    and secondary sign). Returns an opaque or empty key when either name is
    not a zodiac sign.
    """
    normalizer = normalizer or _default_normalizer
    a = normalizer.normalize(first)
    if second is None or not squash_spaces(second):
        return a
    b = normalizer.normalize(second)
    if a.is_single and b.is_single:
        if a.signs == b.signs:
            return a
        return normalizer.normalize(f"{a.signs[0]}-{b.signs[0]}")
    if b.is_empty:
        return a
    return SignKey(
        opaque_fragments=tuple(f for f in (squash_spaces(first), squash_spaces(second)) if f),
        raw=f"{first}-{second}",
        source="opaque",
    )
