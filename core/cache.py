# core/cache.py

"""
In-memory TTL cache for permission lookups.

Only database-backed lookups go through here; resolution over the static
registries needs no caching beyond the resolver's own closure memo.
"""

from typing import Optional, Any
from datetime import datetime, timedelta
from threading import Lock
from core.logging_config import logger


class CacheEntry:
    """A cached value and the moment it stops being valid."""

    def __init__(self, value: Any, ttl_seconds: int):
        self.value = value
        self.expires_at = datetime.now() + timedelta(seconds=ttl_seconds)

    def is_expired(self) -> bool:
        return datetime.now() >= self.expires_at


class PermissionCache:
    """
    Thread-safe TTL cache keyed by string.

    Keys are namespaced ("perms:<user_id>:<role>") so one user's entries
    can be dropped with ``delete_prefix``.
    """

    def __init__(self):
        self._entries: dict[str, CacheEntry] = {}
        self._lock = Lock()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None

            if entry.is_expired():
                del self._entries[key]
                return None

            return entry.value

    def set(self, key: str, value: Any, ttl_seconds: int = 60):
        if ttl_seconds <= 0:
            return
        with self._lock:
            self._entries[key] = CacheEntry(value, ttl_seconds)

    def delete(self, key: str):
        with self._lock:
            self._entries.pop(key, None)

    def delete_prefix(self, prefix: str) -> int:
        """Drop every key starting with ``prefix``; returns how many went."""
        with self._lock:
            doomed = [k for k in self._entries if k.startswith(prefix)]
            for key in doomed:
                del self._entries[key]
        if doomed:
            logger.debug(f"Cache invalidated {len(doomed)} entries under '{prefix}'")
        return len(doomed)

    def clear(self):
        with self._lock:
            self._entries.clear()

    def size(self) -> int:
        with self._lock:
            return len(self._entries)


# Global cache instance
_cache = PermissionCache()


def get_cache() -> PermissionCache:
    return _cache


def cache_get(key: str) -> Optional[Any]:
    return _cache.get(key)


def cache_set(key: str, value: Any, ttl_seconds: int = 60):
    _cache.set(key, value, ttl_seconds)


def cache_delete_prefix(prefix: str) -> int:
    return _cache.delete_prefix(prefix)


def cache_clear():
    """Clear all cache entries."""
    _cache.clear()
