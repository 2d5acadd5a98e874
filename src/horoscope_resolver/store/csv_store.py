"""
CSV-backed content store.

Reads an export of a content table (one row per sign, hemisphere and date).
"""
import csv
import logging
import threading
from typing import Dict, List, Optional

from ..exceptions import StoreError
from ..models import ContentRow
from ..resolution.hemisphere import Hemisphere
from .base import ContentStore
from .memory_store import InMemoryContentStore

logger = logging.getLogger(__name__)


class CsvContentStore(ContentStore):
    """
    Loads and serves content rows from a CSV file.

    The file is read on first use; columns other than the sign, hemisphere
    and date are passed through as row fields.
    """

    def __init__(self, csv_path: str):
        self.csv_path = csv_path
        self._store: Optional[InMemoryContentStore] = None
        self._load_lock = threading.Lock()

    def load_rows(self) -> List[ContentRow]:
        rows: List[ContentRow] = []

        try:
            with open(self.csv_path, newline="", encoding="utf-8") as f:
                reader = csv.DictReader(f)
                for record in reader:
                    row = self._parse_row(record)
                    if row:
                        rows.append(row)
        except OSError as e:
            raise StoreError(f"Could not read content CSV {self.csv_path}: {e}") from e

        logger.info(f"Loaded {len(rows)} content rows from {self.csv_path}")
        return rows

    def fetch_rows(self, date: str, hemisphere: Hemisphere) -> List[ContentRow]:
        if self._store is None:
            with self._load_lock:
                if self._store is None:
                    self._store = InMemoryContentStore(self.load_rows())
        return self._store.fetch_rows(date, hemisphere)

    def _parse_row(self, record: Dict[str, Optional[str]]) -> Optional[ContentRow]:
        # DictReader puts surplus cells under the None key
        cleaned = {
            key.strip(): self._clean_text(value)
            for key, value in record.items()
            if key is not None
        }
        row = ContentRow.from_record(cleaned)
        if not row.sign_label or not row.date:
            return None
        return row

    def _clean_text(self, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        return value if value else None
