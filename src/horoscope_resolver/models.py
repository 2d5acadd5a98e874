import json
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .resolution.hemisphere import Hemisphere
from .resolution.resolution_metadata import ResolutionDiagnostics

ANONYMOUS_CALLER = "anonymous"


def _text(value) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value if value else None


def _first(record: Mapping[str, Any], *keys: str) -> Optional[str]:
    for key in keys:
        value = _text(record.get(key))
        if value:
            return value
    return None


@dataclass(frozen=True)
class Profile:
    """
    A user's astrological designation, as stored by the app.

    Every field is free-form; the resolver never trusts any of them to be
    normalized.
    """
    primary_sign: Optional[str] = None
    secondary_sign: Optional[str] = None
    cusp_name: Optional[str] = None
    preferred_sign: Optional[str] = None
    hemisphere: Optional[str] = None
    user_id: Optional[str] = None
    email: Optional[str] = None

    @property
    def caller_identity(self) -> str:
        """Identity used to scope cached results to this caller."""
        if self.user_id:
            return f"id:{self.user_id}"
        if self.email:
            return f"email:{self.email.strip().lower()}"
        return ANONYMOUS_CALLER

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Profile":
        """
        Build a profile from a stored record.

        Accepts snake_case or camelCase keys and a nested ``cuspResult`` /
        ``cusp_result`` object (or its JSON string).
        """
        data = data or {}
        cusp = data.get("cuspResult") or data.get("cusp_result") or {}
        if isinstance(cusp, str):
            try:
                cusp = json.loads(cusp)
            except ValueError:
                cusp = {}
        if not isinstance(cusp, Mapping):
            cusp = {}

        def pick(*keys: str) -> Optional[str]:
            return _first(data, *keys) or _first(cusp, *keys)

        return cls(
            primary_sign=pick("primarySign", "primary_sign"),
            secondary_sign=pick("secondarySign", "secondary_sign"),
            cusp_name=pick("cuspName", "cusp_name"),
            preferred_sign=pick("preferredSign", "preferred_sign"),
            hemisphere=_first(data, "hemisphere"),
            user_id=_first(data, "userId", "user_id", "id"),
            email=_first(data, "email"),
        )


SIGN_COLUMNS = ("sign", "sign_label", "signLabel", "segment")
HEMISPHERE_COLUMNS = ("hemisphere", "hemisphere_label", "hemisphereLabel")
DATE_COLUMNS = ("date", "forecast_date")


@dataclass(frozen=True)
class ContentRow:
    """
    One record of the content store.

    ``fields`` holds every column other than the sign, hemisphere and date,
    exactly as stored.
    """
    sign_label: str
    hemisphere_label: str
    date: str
    fields: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "ContentRow":
        """Build a row from a raw store record (a dict of columns)."""
        consumed = set()

        def take(columns: Tuple[str, ...]) -> str:
            for column in columns:
                if column in record and record[column] is not None:
                    consumed.add(column)
                    return str(record[column])
            return ""

        sign = take(SIGN_COLUMNS)
        hemisphere = take(HEMISPHERE_COLUMNS)
        date = take(DATE_COLUMNS)
        fields = {k: v for k, v in record.items() if k not in consumed}
        return cls(sign_label=sign, hemisphere_label=hemisphere, date=date, fields=fields)


@dataclass(frozen=True)
class ContentKind:
    """
    A kind of published content and how it is keyed.

    Attributes:
        name: "daily" or "monthly"
        granularity: "day" (one row per day) or "month" (rows keyed YYYY-MM-01)
        text_aliases: Logical text name -> stored column names, first present wins
    """
    name: str
    granularity: str
    text_aliases: Mapping[str, Tuple[str, ...]]

    def has_text(self, fields: Mapping[str, Any]) -> bool:
        """True when any aliased text column holds a non-blank value."""
        for columns in self.text_aliases.values():
            for column in columns:
                value = fields.get(column)
                if value is not None and str(value).strip():
                    return True
        return False


DAILY = ContentKind(
    name="daily",
    granularity="day",
    text_aliases=MappingProxyType({
        "daily": ("daily_horoscope", "daily", "horoscope"),
        "affirmation": ("affirmation", "daily_affirmation"),
        "deeper": ("deeper_insight", "deeper"),
    }),
)

MONTHLY = ContentKind(
    name="monthly",
    granularity="month",
    text_aliases=MappingProxyType({
        "monthly": ("monthly_forecast", "forecast"),
    }),
)

CONTENT_KINDS: Dict[str, ContentKind] = {DAILY.name: DAILY, MONTHLY.name: MONTHLY}


@dataclass(frozen=True)
class ResolvedContent:
    """
    The content row resolved for a profile and date.

    ``fields`` are the matched row's columns, unmodified.
    """
    date: str
    sign: str
    hemisphere: Hemisphere
    fields: Mapping[str, Any]
    source_row: ContentRow
    kind: str = DAILY.name
    diagnostics: ResolutionDiagnostics = field(default_factory=ResolutionDiagnostics, compare=False)

    found = True

    def text(self, name: str, default: str = "") -> str:
        """
        Read a text field by logical name ("daily", "affirmation", "deeper",
        "monthly") through the stored column aliases, or by column name.
        """
        kind = CONTENT_KINDS.get(self.kind)
        columns = kind.text_aliases.get(name, (name,)) if kind else (name,)
        for column in columns:
            value = self.fields.get(column)
            if value:
                return value
        return default

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "found": True,
            "kind": self.kind,
            "date": self.date,
            "sign": self.sign,
            "hemisphere": self.hemisphere.value,
            "fields": dict(self.fields),
            "diagnostics": self.diagnostics.to_dict(),
        }


@dataclass(frozen=True)
class NotFound:
    """
    Terminal result when no anchor produced a matching row.

    Attributes:
        reason: "not_found", or "empty_sign" when the profile had no sign at all
        attempts: Lookup attempts that were tried
        anchors: Date anchors that were tried
    """
    reason: str
    attempts: List[str] = field(default_factory=list)
    anchors: List[str] = field(default_factory=list)
    kind: str = DAILY.name
    diagnostics: ResolutionDiagnostics = field(default_factory=ResolutionDiagnostics, compare=False)

    found = False

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "found": False,
            "kind": self.kind,
            "reason": self.reason,
            "attempts": list(self.attempts),
            "anchors": list(self.anchors),
            "diagnostics": self.diagnostics.to_dict(),
        }
