"""
Zodiac vocabulary.

Closed-world tables the normalizer resolves against: the twelve signs in
zodiac order and the marketing names given to each cusp.
"""
from typing import Dict, List, Optional, Tuple

ZODIAC_SIGNS: Tuple[str, ...] = (
    "aries",
    "taurus",
    "gemini",
    "cancer",
    "leo",
    "virgo",
    "libra",
    "scorpio",
    "sagittarius",
    "capricorn",
    "aquarius",
    "pisces",
)

_SIGN_INDEX = {sign: i for i, sign in enumerate(ZODIAC_SIGNS)}

# Marketing cusp names -> (first sign, second sign) in zodiac order.
# Long forms are listed so a stored "The Cusp of Mystery & Imagination" resolves
# through the table rather than through decomposition.
CUSP_MARKETING_NAMES: Dict[str, Tuple[str, str]] = {
    "cusp of mystery & imagination": ("capricorn", "aquarius"),
    "cusp of mystery and imagination": ("capricorn", "aquarius"),
    "cusp of mystery": ("capricorn", "aquarius"),
    "cusp of sensitivity & mystery": ("aquarius", "pisces"),
    "cusp of sensitivity and mystery": ("aquarius", "pisces"),
    "cusp of sensitivity": ("aquarius", "pisces"),
    "cusp of rebirth": ("pisces", "aries"),
    "cusp of power": ("aries", "taurus"),
    "cusp of energy": ("taurus", "gemini"),
    "cusp of magic": ("gemini", "cancer"),
    "cusp of oscillation": ("cancer", "leo"),
    "cusp of exposure": ("leo", "virgo"),
    "cusp of beauty": ("virgo", "libra"),
    "cusp of drama & criticism": ("libra", "scorpio"),
    "cusp of drama and criticism": ("libra", "scorpio"),
    "cusp of drama": ("libra", "scorpio"),
    "cusp of revolution": ("scorpio", "sagittarius"),
    "cusp of prophecy": ("sagittarius", "capricorn"),
}

# Longest phrase first so "cusp of drama & criticism" wins over "cusp of drama"
_MARKETING_BY_LENGTH: List[str] = sorted(CUSP_MARKETING_NAMES, key=len, reverse=True)


def is_sign(word: str) -> bool:
    return word in _SIGN_INDEX


def next_sign(sign: str) -> str:
    """The sign that follows ``sign`` in the zodiac (Pisces wraps to Aries)."""
    return ZODIAC_SIGNS[(_SIGN_INDEX[sign] + 1) % len(ZODIAC_SIGNS)]


def is_adjacent_pair(first: str, second: str) -> bool:
    """True when ``second`` directly follows ``first`` in the zodiac."""
    return next_sign(first) == second


def lookup_marketing_name(text: str) -> Optional[Tuple[str, str]]:
    """
    Find a marketing cusp name inside ``text``.

    :param text: Lowercased, whitespace-squashed label
    :return: The cusp's sign pair, or None
    """
    for phrase in _MARKETING_BY_LENGTH:
        if phrase in text:
            return CUSP_MARKETING_NAMES[phrase]
    return None


def signs_mentioned(letters: str) -> List[str]:
    """
    Signs whose names occur in a letters-only lowercase string, by position.

    Each sign is reported once.
    """
    found = []
    for sign in ZODIAC_SIGNS:
        pos = letters.find(sign)
        if pos >= 0:
            found.append((pos, sign))
    return [sign for _, sign in sorted(found)]
