"""
Exact matching strategy for sign words.
"""
from typing import Sequence

from .semantic_resolver import SemanticResolver, ResolutionResult


class ExactSignMatcher(SemanticResolver):
    """
    Exact, case-insensitive match against the vocabulary.

    Used as the first strategy in escalation.
    """

    def resolve(
        self,
        query: str,
        candidates: Sequence[str],
    ) -> ResolutionResult:
        query_normalized = query.strip().lower()

        for candidate in candidates:
            if candidate.strip().lower() == query_normalized:
                return ResolutionResult(
                    canonical_value=candidate,
                    confidence=1.0,
                    strategy_used="exact",
                    original_query=query,
                )

        return ResolutionResult(
            canonical_value=None,
            confidence=0.0,
            strategy_used="exact",
            original_query=query,
        )
