"""
Content store adapters.
"""
from .base import ContentStore
from .memory_store import InMemoryContentStore
from .csv_store import CsvContentStore
from .supabase_store import SupabaseContentStore, create_supabase_client
from .store_factory import create_content_store

__all__ = [
    "ContentStore",
    "InMemoryContentStore",
    "CsvContentStore",
    "SupabaseContentStore",
    "create_supabase_client",
    "create_content_store",
]
