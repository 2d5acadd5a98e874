"""
Supabase-backed content store.

Queries the published content tables (``horoscope_cache`` for daily rows,
``monthly_forecasts`` for monthly rows) through supabase-py.
"""
import logging
from typing import Any, List, Optional

from supabase import Client, create_client

from ..exceptions import ConfigurationError, StoreError
from ..models import ContentRow
from ..resolution.hemisphere import Hemisphere, hemisphere_aliases
from .base import ContentStore

logger = logging.getLogger(__name__)


def create_supabase_client(url: Optional[str], key: Optional[str]) -> Client:
    """
    Create a Supabase client.

    :raises ConfigurationError: If the URL or key is not configured
    """
    if not url or not key:
        raise ConfigurationError(
            "Supabase URL and key must be configured. "
            "Set SUPABASE_URL and SUPABASE_ANON_KEY in .env"
        )

    client = create_client(url, key)
    logger.info("Supabase client initialized successfully")
    return client


class SupabaseContentStore(ContentStore):
    """
    Content store over one Supabase table.

    The hemisphere is pushed down as an ``in`` filter over its stored
    spellings ("Southern", "SH", "Southern Hemisphere", ...) because the
    tables are not consistent about which one they use.
    """

    def __init__(
        self,
        table: str,
        client: Optional[Client] = None,
        url: Optional[str] = None,
        key: Optional[str] = None,
    ):
        """
        :param table: Table name
        :param client: Existing client; created lazily from url/key otherwise
        """
        self.table = table
        self._client = client
        self._url = url
        self._key = key

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = create_supabase_client(self._url, self._key)
        return self._client

    def fetch_rows(self, date: str, hemisphere: Hemisphere) -> List[ContentRow]:
        try:
            response = (
                self.client.table(self.table)
                .select("*")
                .eq("date", date)
                .in_("hemisphere", hemisphere_aliases(hemisphere))
                .execute()
            )
        except ConfigurationError:
            raise
        except Exception as e:
            raise StoreError(f"Query on {self.table} for {date}/{hemisphere.value} failed: {e}") from e

        records: List[Any] = getattr(response, "data", None) or []
        logger.debug(f"{self.table}: {len(records)} rows for {date}/{hemisphere.value}")
        return [ContentRow.from_record(record) for record in records if isinstance(record, dict)]
