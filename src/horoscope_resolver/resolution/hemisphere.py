"""
Hemisphere resolution.

Stored profiles and content rows spell the hemisphere many ways ("Northern",
"NH", "southern hemisphere", "Southern (AU)"). Everything is folded into one
of two canonical values.
"""
import re
from enum import Enum
from typing import List, Tuple


class Hemisphere(str, Enum):
    """Canonical hemisphere values."""
    NORTHERN = "Northern"
    SOUTHERN = "Southern"

    @classmethod
    def parse_default(cls, value) -> "Hemisphere":
        """Parse a configured default ("Northern"/"Southern", any case)."""
        if isinstance(value, Hemisphere):
            return value
        text = str(value or "").strip().lower()
        if text == "northern":
            return cls.NORTHERN
        if text == "southern":
            return cls.SOUTHERN
        raise ValueError(f"Default hemisphere must be 'Northern' or 'Southern', got {value!r}")


_SHORT_CODES = {
    "nh": Hemisphere.NORTHERN,
    "sh": Hemisphere.SOUTHERN,
    "n": Hemisphere.NORTHERN,
    "s": Hemisphere.SOUTHERN,
}

_ALIASES = {
    Hemisphere.NORTHERN: ("Northern", "NH", "Northern Hemisphere", "northern", "North"),
    Hemisphere.SOUTHERN: ("Southern", "SH", "Southern Hemisphere", "southern", "South"),
}


def _squash(raw) -> str:
    return re.sub(r"\s+", " ", str(raw or "")).strip().lower()


def classify_hemisphere(raw) -> Tuple[Hemisphere, bool]:
    """
    Classify a raw hemisphere value.

    :param raw: Free-form hemisphere text
    :return: (hemisphere, recognized). When not recognized the hemisphere
             is SOUTHERN and the caller decides whether to apply another default.
    """
    text = _squash(raw)
    if not text:
        return Hemisphere.SOUTHERN, False

    if text in _SHORT_CODES:
        return _SHORT_CODES[text], True

    # Tokens like "NH" inside "NH (Europe)"
    tokens = re.findall(r"[a-z]+", text)
    has_north = "north" in text or "nh" in tokens
    has_south = "south" in text or "sh" in tokens

    if has_north and not has_south:
        return Hemisphere.NORTHERN, True
    if has_south and not has_north:
        return Hemisphere.SOUTHERN, True

    return Hemisphere.SOUTHERN, False


def resolve_hemisphere(raw, default: Hemisphere = Hemisphere.SOUTHERN) -> Hemisphere:
    """
    Resolve any hemisphere representation to a canonical value.

    Empty or unrecognized input resolves to ``default``.
    """
    hemisphere, recognized = classify_hemisphere(raw)
    return hemisphere if recognized else default


def row_matches_hemisphere(row_value, wanted: Hemisphere) -> bool:
    """
    Tolerant check of a content row's stored hemisphere against a canonical value.

    The row value does not have to be normalized; an unrecognizable row value
    never matches.
    """
    hemisphere, recognized = classify_hemisphere(row_value)
    return recognized and hemisphere == wanted


def hemisphere_aliases(hemisphere: Hemisphere) -> List[str]:
    """Stored spellings of a hemisphere, for pushing a filter down to a store."""
    return list(_ALIASES[hemisphere])
