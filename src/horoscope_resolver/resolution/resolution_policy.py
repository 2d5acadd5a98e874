"""
Resolution policy for matcher escalation: exact, then fuzzy.
"""
from typing import List, Optional, Sequence

from .semantic_resolver import SemanticResolver, ResolutionResult


class ResolutionPolicy:
    """
    Tries matchers in order until one returns a confident result.
    """

    def __init__(
        self,
        matchers: List[SemanticResolver],
        confidence_threshold: float = 0.85,
    ):
        """
        :param matchers: Matchers to try in order (e.g., [ExactSignMatcher, FuzzySignMatcher])
        :param confidence_threshold: Minimum confidence to accept a match
        """
        if not matchers:
            raise ValueError("At least one matcher must be provided")

        self._matchers = matchers
        self.confidence_threshold = confidence_threshold

    def resolve(
        self,
        query: str,
        candidates: Sequence[str],
    ) -> ResolutionResult:
        """
        Resolve query by trying matchers in order.

        A result below the threshold is reported as unresolved, never as
        the closest sign.
        """
        last_result: Optional[ResolutionResult] = None

        for matcher in self._matchers:
            result = matcher.resolve(query, candidates)
            if result.is_confident(self.confidence_threshold):
                return result
            last_result = result

        return ResolutionResult(
            canonical_value=None,
            confidence=0.0,
            strategy_used=last_result.strategy_used if last_result else "none",
            original_query=query,
        )
