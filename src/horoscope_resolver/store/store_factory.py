"""
Factory for creating content stores from configuration.
"""
from typing import Optional

from ..config import ResolverConfig
from ..exceptions import ConfigurationError
from ..models import ContentKind, DAILY
from .base import ContentStore
from .csv_store import CsvContentStore
from .memory_store import InMemoryContentStore
from .supabase_store import SupabaseContentStore


def create_content_store(
    config: ResolverConfig,
    kind: ContentKind = DAILY,
) -> Optional[ContentStore]:
    """
    Create the content store for one content kind.

    Returns None when the configured backend has no source for this kind
    (e.g. a csv backend with only a daily export).

    :param config: ResolverConfig instance
    :param kind: DAILY or MONTHLY
    :return: ContentStore or None
    """
    daily = kind.name == DAILY.name

    if config.store_backend == "memory":
        return InMemoryContentStore()

    if config.store_backend == "csv":
        path = config.daily_csv_path if daily else config.monthly_csv_path
        return CsvContentStore(path) if path else None

    if config.store_backend == "supabase":
        return SupabaseContentStore(
            table=config.daily_table if daily else config.monthly_table,
            url=config.supabase_url,
            key=config.supabase_key,
        )

    raise ConfigurationError(f"Unknown store backend '{config.store_backend}'")
