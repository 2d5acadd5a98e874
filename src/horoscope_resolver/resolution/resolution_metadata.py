"""
Resolution diagnostics.

Non-fatal conditions met while resolving (a label that stayed opaque, a
defaulted hemisphere, a failed fetch) are recorded here so callers can
monitor content and profile data quality.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class DiagnosticCode(str, Enum):
    """Kinds of recoverable conditions."""
    NORMALIZATION_FALLBACK = "normalization_fallback"
    HEMISPHERE_DEFAULTED = "hemisphere_defaulted"
    FETCH_FAILURE = "fetch_failure"
    SIGN_CORRECTED = "sign_corrected"


@dataclass(frozen=True)
class FetchFailure:
    """One anchor whose fetch failed or timed out."""
    anchor: str
    reason: str
    timed_out: bool = False

    def to_dict(self) -> dict:
        return {"anchor": self.anchor, "reason": self.reason, "timed_out": self.timed_out}


@dataclass
class ResolutionDiagnostics:
    """
    Metadata about one resolution, for explainability.

    Tracks:
    - Where the sign query came from and what it normalized to
    - The attempts and anchors that were tried
    - Recoverable conditions and fetch failures
    - How the final row was matched
    """
    sign_input: str = ""
    sign_source: Optional[str] = None
    sign_key: str = ""
    hemisphere_input: str = ""
    attempts: List[str] = field(default_factory=list)
    anchors: List[str] = field(default_factory=list)
    anchors_tried: List[str] = field(default_factory=list)
    codes: List[DiagnosticCode] = field(default_factory=list)
    fetch_failures: List[FetchFailure] = field(default_factory=list)
    match_strategy: Optional[str] = None
    matched_attempt: Optional[str] = None
    cache_hit: bool = False

    def flag(self, code: DiagnosticCode) -> None:
        if code not in self.codes:
            self.codes.append(code)

    def has(self, code: DiagnosticCode) -> bool:
        return code in self.codes

    def record_fetch_failure(self, failure: FetchFailure) -> None:
        self.fetch_failures.append(failure)
        self.flag(DiagnosticCode.FETCH_FAILURE)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        result = {
            "sign_input": self.sign_input,
            "sign_key": self.sign_key,
            "hemisphere_input": self.hemisphere_input,
            "attempts": list(self.attempts),
            "anchors": list(self.anchors),
            "anchors_tried": list(self.anchors_tried),
            "cache_hit": self.cache_hit,
        }

        if self.sign_source:
            result["sign_source"] = self.sign_source

        if self.codes:
            result["codes"] = [code.value for code in self.codes]

        if self.fetch_failures:
            result["fetch_failures"] = [f.to_dict() for f in self.fetch_failures]

        if self.match_strategy:
            result["match_strategy"] = self.match_strategy
            result["matched_attempt"] = self.matched_attempt

        return result
