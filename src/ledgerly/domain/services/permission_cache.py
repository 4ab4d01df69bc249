"""Permission snapshot cache with TTL support.

Provides in-memory caching of per-role permission snapshots with a
configurable TTL. Thread-safe implementation for concurrent access.
"""

import threading
import time
from dataclasses import dataclass

from ledgerly.domain.entities.permission import PermissionSnapshot


@dataclass
class CacheEntry:
    """Cache entry with TTL support.

    Attributes:
        value: The cached snapshot.
        expires_at: Unix timestamp when this entry expires.
    """

    value: PermissionSnapshot
    expires_at: float


class PermissionSnapshotCache:
    """Thread-safe TTL-based cache of permission snapshots, keyed by role name."""

    def __init__(self, ttl_seconds: int = 300):
        """Initialize the cache.

        Args:
            ttl_seconds: Time-to-live for cache entries in seconds (default: 5 minutes).
        """
        self.ttl_seconds = ttl_seconds
        self._cache: dict[str, CacheEntry] = {}
        self._lock = threading.RLock()

    def get(self, role: str) -> PermissionSnapshot | None:
        """Get the cached snapshot for a role.

        Returns:
            Cached snapshot if found and not expired, None otherwise.
        """
        with self._lock:
            entry = self._cache.get(role)
            if entry is None:
                return None

            if time.time() > entry.expires_at:
                del self._cache[role]
                return None

            return entry.value

    def set(self, role: str, snapshot: PermissionSnapshot) -> None:
        """Store a role's snapshot."""
        expires_at = time.time() + self.ttl_seconds
        with self._lock:
            self._cache[role] = CacheEntry(value=snapshot, expires_at=expires_at)

    def invalidate_role(self, role: str) -> None:
        with self._lock:
            self._cache.pop(role, None)

    def invalidate_all(self) -> None:
        """Clear entire cache."""
        with self._lock:
            self._cache.clear()

    def cleanup_expired(self) -> int:
        """Remove all expired entries from cache.

        Returns:
            Number of entries removed.
        """
        with self._lock:
            current_time = time.time()
            expired = [
                role for role, entry in self._cache.items()
                if current_time > entry.expires_at
            ]
            for role in expired:
                del self._cache[role]
            return len(expired)

    def size(self) -> int:
        with self._lock:
            return len(self._cache)
