"""
Horoscope content resolution engine.

Finds the daily or monthly content row published for a user's sign or cusp,
hemisphere and date in a loosely-labelled content store.
"""
from .config import ResolverConfig
from .exceptions import (
    ConfigurationError,
    HoroscopeResolverError,
    InvalidDateError,
    StoreError,
)
from .models import (
    DAILY,
    MONTHLY,
    ContentKind,
    ContentRow,
    NotFound,
    Profile,
    ResolvedContent,
)
from .memory import CacheKey, ResolutionCache
from .orchestration import ResolutionOrchestrator
from .resolution import Hemisphere, SignKey, normalize, resolve_hemisphere
from .service import HoroscopeService

__all__ = [
    "ResolverConfig",
    "ConfigurationError",
    "HoroscopeResolverError",
    "InvalidDateError",
    "StoreError",
    "DAILY",
    "MONTHLY",
    "ContentKind",
    "ContentRow",
    "NotFound",
    "Profile",
    "ResolvedContent",
    "CacheKey",
    "ResolutionCache",
    "ResolutionOrchestrator",
    "Hemisphere",
    "SignKey",
    "normalize",
    "resolve_hemisphere",
    "HoroscopeService",
]
