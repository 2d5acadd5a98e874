"""
Row match policy: strict pass, then lenient pass.
"""
from typing import TYPE_CHECKING, List, Optional, Sequence

from .label_normalizer import LabelNormalizer, SignKey, normalize
from .row_matchers import ExactRowMatcher, LenientRowMatcher, RowMatch, RowMatcher, loose_label

if TYPE_CHECKING:
    from ..models import ContentRow


class RowMatchPolicy:
    """
    Escalates through row matchers in order and returns the first match.

    Rows are put in a stable order (normalized label, loose label, raw label,
    date, then the remaining columns) before any matcher runs, so the outcome
    never depends on the order the store returned them in.
    """

    def __init__(
        self,
        matchers: Optional[List[RowMatcher]] = None,
        normalizer: Optional[LabelNormalizer] = None,
    ):
        """
        :param matchers: Matchers to try in order (default: exact, then lenient)
        :param normalizer: Label normalizer shared with the exact matcher
        """
        self._normalize = normalizer.normalize if normalizer else normalize
        self._matchers = matchers or [ExactRowMatcher(normalizer), LenientRowMatcher()]

    def pick(
        self,
        rows: Sequence["ContentRow"],
        attempts: Sequence[str],
        query_key: Optional[SignKey] = None,
        allow_single_sign_fallback: bool = False,
    ) -> Optional[RowMatch]:
        """
        Pick the single best row for the attempts.

        :return: RowMatch from the first matcher that accepts a row, or None
        """
        if not rows or not attempts:
            return None

        ordered = self._stable_order(rows)
        for matcher in self._matchers:
            result = matcher.match(ordered, attempts, query_key, allow_single_sign_fallback)
            if result is not None:
                return result
        return None

    def _stable_order(self, rows: Sequence["ContentRow"]) -> List["ContentRow"]:
        return sorted(
            rows,
            key=lambda row: (
                self._normalize(row.sign_label).key,
                loose_label(row.sign_label),
                str(row.sign_label or ""),
                str(row.date or ""),
                str(row.hemisphere_label or ""),
                tuple(sorted((str(k), str(v)) for k, v in row.fields.items())),
            ),
        )


_default_policy = RowMatchPolicy()


def pick_best_row(
    rows: Sequence["ContentRow"],
    attempts: Sequence[str],
    query_key: Optional[SignKey] = None,
    allow_single_sign_fallback: bool = False,
) -> Optional["ContentRow"]:
    """
    Pick the best row for the attempts with the default policy.

    :return: The matched row, or None when nothing matches
    """
    result = _default_policy.pick(rows, attempts, query_key, allow_single_sign_fallback)
    return result.row if result else None
