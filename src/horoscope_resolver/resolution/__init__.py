"""
Content resolution layer.

Converts loosely-labelled profile data into canonical lookup keys and picks
the content row that answers them.

Key components:
- LabelNormalizer / SignKey: canonical sign and cusp keys
- Hemisphere resolution: two canonical values, tolerant row matching
- Date anchors: candidate calendar days across timezones
- Attempt sequencing: spellings to look up, strict about cusps
- RowMatchPolicy: exact pass, then lenient pass with the cusp guard
"""
from .semantic_resolver import SemanticResolver, ResolutionResult
from .exact_matcher import ExactSignMatcher
from .fuzzy_matcher import FuzzySignMatcher
from .resolution_policy import ResolutionPolicy
from .label_normalizer import LabelNormalizer, SignKey, key_from_signs, normalize
from .hemisphere import (
    Hemisphere,
    hemisphere_aliases,
    resolve_hemisphere,
    row_matches_hemisphere,
)
from .date_anchors import build_anchors, month_anchor, month_anchors, parse_anchor
from .attempt_sequencer import build_attempts
from .row_matchers import RowMatch, RowMatcher, ExactRowMatcher, LenientRowMatcher, loose_label
from .row_match_policy import RowMatchPolicy, pick_best_row
from .resolution_metadata import DiagnosticCode, FetchFailure, ResolutionDiagnostics

__all__ = [
    "SemanticResolver",
    "ResolutionResult",
    "ExactSignMatcher",
    "FuzzySignMatcher",
    "ResolutionPolicy",
    "LabelNormalizer",
    "SignKey",
    "key_from_signs",
    "normalize",
    "Hemisphere",
    "hemisphere_aliases",
    "resolve_hemisphere",
    "row_matches_hemisphere",
    "build_anchors",
    "month_anchor",
    "month_anchors",
    "parse_anchor",
    "build_attempts",
    "RowMatch",
    "RowMatcher",
    "ExactRowMatcher",
    "LenientRowMatcher",
    "loose_label",
    "RowMatchPolicy",
    "pick_best_row",
    "DiagnosticCode",
    "FetchFailure",
    "ResolutionDiagnostics",
]
