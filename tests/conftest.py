"""
Shared fixtures for resolver tests.
"""
from datetime import datetime, timezone

import pytest

from horoscope_resolver import ContentRow, ResolverConfig
from horoscope_resolver.store import InMemoryContentStore

# 12:00 in Sydney, 02:00 UTC: every frame agrees it is 2025-04-20
FIXED_NOW = datetime(2025, 4, 20, 2, 0, tzinfo=timezone.utc)


def make_row(sign, date="2025-04-20", hemisphere="Southern", **fields):
    """Build a content row the way a store would return it."""
    return ContentRow(sign_label=sign, hemisphere_label=hemisphere, date=date, fields=fields)


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def config():
    """Resolver config pinned to UTC as the caller's local timezone."""
    return ResolverConfig(local_timezone="UTC", fetch_timeout_seconds=1.0)


@pytest.fixture
def cusp_store():
    return InMemoryContentStore([
        {"sign": "aries-taurus", "hemisphere": "Southern", "date": "2025-04-20", "daily": "X"},
    ])
