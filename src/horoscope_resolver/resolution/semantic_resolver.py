"""
Core abstractions for sign-word resolution.

A sign word is one fragment of a label ("Taurus", "saggitarius") that has to
be resolved against the closed zodiac vocabulary.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Sequence


@dataclass(frozen=True)
class ResolutionResult:
    """
    Immutable result of resolving one word against a vocabulary.

    Attributes:
        canonical_value: The resolved vocabulary entry (e.g., "sagittarius")
        confidence: Confidence score between 0.0 and 1.0
        strategy_used: Name of the matching strategy used ("exact", "fuzzy")
        original_query: The word that was resolved
    """
    canonical_value: Optional[str]
    confidence: float
    strategy_used: str
    original_query: str

    def is_confident(self, threshold: float = 0.75) -> bool:
        """Check if resolution confidence meets threshold."""
        return self.canonical_value is not None and self.confidence >= threshold

    def __post_init__(self):
        """Validate confidence score."""
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"Confidence must be between 0.0 and 1.0, got {self.confidence}")


class SemanticResolver(ABC):
    """
    Protocol for word resolution strategies.
    """

    @abstractmethod
    def resolve(
        self,
        query: str,
        candidates: Sequence[str],
    ) -> ResolutionResult:
        """
        Resolve a query against candidate vocabulary entries.

        :param query: The word to resolve
        :param candidates: Candidate canonical entries
        :return: ResolutionResult with canonical value and confidence
        """
        pass
