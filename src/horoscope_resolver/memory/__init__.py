"""
In-process memory for resolved content.
"""
from .resolution_cache import CacheKey, ResolutionCache

__all__ = [
    "CacheKey",
    "ResolutionCache",
]
