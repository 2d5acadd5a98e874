"""
Resolution cache.

Memoizes resolved content per caller, sign, hemisphere, anchor and content
kind. One instance may be shared by concurrent resolutions.
"""
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Optional

if TYPE_CHECKING:
    from ..models import ResolvedContent


@dataclass(frozen=True)
class CacheKey:
    """Composite cache key. Always scoped to one caller identity."""
    caller_identity: str
    sign: str
    hemisphere: str
    anchor: str
    kind: str = "daily"


class ResolutionCache:
    """
    Last-write-wins map of resolved content.

    Key traits:
    - No expiry; callers wanting fresh content pass ``force_fresh`` to the
      orchestrator instead
    - Entries are replaced wholesale, never patched
    - Lock-guarded for concurrent use
    """

    def __init__(self):
        self._entries: Dict[CacheKey, "ResolvedContent"] = {}
        self._lock = threading.Lock()

    def get(self, key: CacheKey) -> Optional["ResolvedContent"]:
        """
        Look up a resolved result.

        :param key: Composite cache key
        :return: Cached ResolvedContent or None on a miss
        """
        with self._lock:
            return self._entries.get(key)

    def put(self, key: CacheKey, value: "ResolvedContent") -> None:
        """Store a resolved result, replacing any previous entry for the key."""
        with self._lock:
            self._entries[key] = value

    def invalidate(self, caller_identity: str) -> int:
        """
        Drop every entry of one caller (e.g. on logout or profile change).

        :return: Number of entries removed
        """
        with self._lock:
            stale = [k for k in self._entries if k.caller_identity == caller_identity]
            for key in stale:
                del self._entries[key]
            return len(stale)

    def clear(self) -> None:
        """Clear all entries (useful for testing)."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: CacheKey) -> bool:
        with self._lock:
            return key in self._entries
