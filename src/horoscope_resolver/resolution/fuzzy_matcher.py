"""
Fuzzy matching strategy for sign words using rapidfuzz.

Handles misspelt sign names in stored profiles and content labels
("Saggitarius", "Capricon").
"""
from typing import Sequence

from rapidfuzz import fuzz, process

from .semantic_resolver import SemanticResolver, ResolutionResult

# Shorter words produce too many accidental matches ("leo" vs "lee")
MIN_FUZZY_LENGTH = 4


class FuzzySignMatcher(SemanticResolver):
    """
    Fuzzy match strategy using rapidfuzz's process.extractOne.
    """

    def __init__(
        self,
        threshold: float = 0.85,
        scorer: str = "ratio",
    ):
        """
        Initialize fuzzy matcher.

        :param threshold: Minimum confidence score to accept a match (0.0-1.0)
        :param scorer: rapidfuzz scorer to use ("ratio", "partial_ratio", "token_sort_ratio")
        """
        if not 0.0 <= threshold <= 1.0:
            raise ValueError(f"Threshold must be between 0.0 and 1.0, got {threshold}")

        self.threshold = threshold
        self.scorer = scorer

        self._scorer_map = {
            "ratio": fuzz.ratio,
            "partial_ratio": fuzz.partial_ratio,
            "token_sort_ratio": fuzz.token_sort_ratio,
        }

        if scorer not in self._scorer_map:
            raise ValueError(
                f"Unknown scorer '{scorer}'. "
                f"Must be one of: {list(self._scorer_map.keys())}"
            )

    def resolve(
        self,
        query: str,
        candidates: Sequence[str],
    ) -> ResolutionResult:
        """
        Find best fuzzy match in candidates.

        :param query: Word to match
        :param candidates: Vocabulary entries
        :return: ResolutionResult with best match if above threshold
        """
        word = query.strip().lower()
        if not candidates or len(word) < MIN_FUZZY_LENGTH:
            return ResolutionResult(
                canonical_value=None,
                confidence=0.0,
                strategy_used="fuzzy",
                original_query=query,
            )

        result = process.extractOne(
            word,
            list(candidates),
            scorer=self._scorer_map[self.scorer],
        )

        if result:
            matched_value, score, _ = result
            # rapidfuzz scores are 0-100
            confidence = min(max(score / 100.0, 0.0), 1.0)

            if confidence >= self.threshold:
                return ResolutionResult(
                    canonical_value=matched_value,
                    confidence=confidence,
                    strategy_used="fuzzy",
                    original_query=query,
                )

        return ResolutionResult(
            canonical_value=None,
            confidence=0.0,
            strategy_used="fuzzy",
            original_query=query,
        )
