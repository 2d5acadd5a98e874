"""
In-memory content store.
"""
from typing import Any, Iterable, List, Mapping, Union

from ..models import ContentRow
from ..resolution.hemisphere import Hemisphere, row_matches_hemisphere
from .base import ContentStore


class InMemoryContentStore(ContentStore):
    """
    Content store over a list of rows held in memory.

    Used by tests, the CSV store, and embedders that load content themselves.
    """

    def __init__(self, rows: Iterable[Union[ContentRow, Mapping[str, Any]]] = ()):
        self._rows: List[ContentRow] = []
        for row in rows:
            self.add(row)

    def add(self, row: Union[ContentRow, Mapping[str, Any]]) -> ContentRow:
        """Add a row (a ContentRow or a raw record)."""
        if not isinstance(row, ContentRow):
            row = ContentRow.from_record(row)
        self._rows.append(row)
        return row

    def fetch_rows(self, date: str, hemisphere: Hemisphere) -> List[ContentRow]:
        return [
            row for row in self._rows
            if row.date.strip()[:10] == date and row_matches_hemisphere(row.hemisphere_label, hemisphere)
        ]

    def __len__(self) -> int:
        return len(self._rows)
