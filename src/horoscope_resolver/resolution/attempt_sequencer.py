"""
Lookup attempt sequencing.

Content rows spell the same cusp several ways ("Aries–Taurus Cusp",
"Aries-Taurus", ...). The sequencer lists those spellings in priority order.
"""
from typing import Iterable, List

from .label_normalizer import EN_DASH, SignKey


def _dedupe(items: Iterable[str]) -> List[str]:
    seen = set()
    ordered = []
    for item in items:
        if item and item not in seen:
            seen.add(item)
            ordered.append(item)
    return ordered


def _cusp_variants(key: SignKey) -> List[str]:
    en_dash = key.display
    hyphen = en_dash.replace(EN_DASH, "-")
    return [
        f"{en_dash} Cusp",
        f"{hyphen} Cusp",
        en_dash,
        hyphen,
    ]


def build_attempts(key: SignKey, allow_single_sign_fallback: bool = False) -> List[str]:
    """
    Build the ordered lookup attempts for a sign key.

    A cusp yields its four spellings (plus the reversed order when the pair is
    not consecutive in the zodiac). Its constituent signs are appended only when
    ``allow_single_sign_fallback`` is set, so a plain-sign row can never answer
    a cusp query by default.

    :param key: Normalized sign key
    :param allow_single_sign_fallback: Also try each constituent sign
    :return: Deduplicated attempts, highest priority first
    """
    if key.is_empty:
        return []

    if key.is_opaque:
        return _dedupe([key.display, key.raw.strip()])

    attempts: List[str] = []
    if key.is_cusp:
        attempts.extend(_cusp_variants(key))
        if not key.is_canonical_order:
            attempts.extend(_cusp_variants(key.reversed()))

    if allow_single_sign_fallback or key.is_single:
        attempts.extend(sign.capitalize() for sign in key.signs)

    return _dedupe(attempts)
