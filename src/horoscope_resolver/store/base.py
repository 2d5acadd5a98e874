"""
Content store protocol.

The resolver only ever reads: one query per (date, hemisphere) anchor.
"""
from abc import ABC, abstractmethod
from typing import List

from ..models import ContentRow
from ..resolution.hemisphere import Hemisphere


class ContentStore(ABC):
    """
    Read-only source of content rows.

    Implementations may return rows whose hemisphere is spelt differently
    from the one asked for (or even rows of the other hemisphere); the
    orchestrator filters rows tolerantly after fetching. Failures are raised
    as StoreError.
    """

    @abstractmethod
    def fetch_rows(self, date: str, hemisphere: Hemisphere) -> List[ContentRow]:
        """
        Fetch the rows published for one date and hemisphere.

        :param date: YYYY-MM-DD anchor
        :param hemisphere: Canonical hemisphere
        :return: Matching rows (possibly empty)
        :raises StoreError: If the query fails
        """
        pass
