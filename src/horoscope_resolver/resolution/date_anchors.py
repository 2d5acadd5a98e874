"""
Date anchor building.

"Today" differs between the reader's device, the publishing timezone the
content is keyed in, and UTC. Anchors list every candidate day in the order
they should be queried.
"""
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Iterable, List, Optional, Union
from zoneinfo import ZoneInfo

from ..exceptions import InvalidDateError

DEFAULT_REFERENCE_TIMEZONE = "Australia/Sydney"

TimeZoneLike = Union[str, tzinfo, None]


def _as_tz(value: TimeZoneLike) -> Optional[tzinfo]:
    if value is None or isinstance(value, tzinfo):
        return value
    return ZoneInfo(value)


def parse_anchor(value: str) -> str:
    """
    Validate a YYYY-MM-DD date string.

    :return: The same string
    :raises InvalidDateError: If it is not a real calendar date in that format
    """
    text = str(value or "").strip()
    try:
        parsed = datetime.strptime(text, "%Y-%m-%d").date()
    except ValueError as e:
        raise InvalidDateError(f"Date must be YYYY-MM-DD, got {value!r}") from e
    return parsed.isoformat()


def _dedupe(anchors: Iterable[str]) -> List[str]:
    seen = set()
    ordered = []
    for anchor in anchors:
        if anchor not in seen:
            seen.add(anchor)
            ordered.append(anchor)
    return ordered


def build_anchors(
    now: Optional[datetime] = None,
    reference_timezone: TimeZoneLike = DEFAULT_REFERENCE_TIMEZONE,
    local_timezone: TimeZoneLike = None,
    override: Optional[str] = None,
) -> List[str]:
    """
    Build the ordered, deduplicated day anchors to query.

    Order: local day, publishing-timezone day, UTC day, then the previous and
    next day of each frame in the same frame order.

    :param now: Current instant; naive datetimes are taken as UTC (default: now)
    :param reference_timezone: Timezone content is published in
    :param local_timezone: Caller's timezone (default: the system local zone)
    :param override: Explicit YYYY-MM-DD date; when given it is the only anchor
    :return: Anchors, highest priority first
    """
    if override:
        return [parse_anchor(override)]

    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    local_tz = _as_tz(local_timezone)
    local_now = now.astimezone(local_tz) if local_tz else now.astimezone()
    reference_now = now.astimezone(_as_tz(reference_timezone) or timezone.utc)
    utc_now = now.astimezone(timezone.utc)

    days: List[date] = [local_now.date(), reference_now.date(), utc_now.date()]

    anchors = [d.isoformat() for d in days]
    for d in days:
        anchors.append((d - timedelta(days=1)).isoformat())
        anchors.append((d + timedelta(days=1)).isoformat())

    return _dedupe(anchors)


def month_anchor(anchor: str) -> str:
    """The first day of the anchor's month ("2025-04-20" -> "2025-04-01")."""
    return parse_anchor(anchor)[:8] + "01"


def month_anchors(anchors: Iterable[str]) -> List[str]:
    """Map day anchors to month keys, keeping priority order."""
    return _dedupe(month_anchor(a) for a in anchors)
