"""
In-memory LRU cache for lookup results
"""

import copy
from collections import OrderedDict
from typing import Any, Optional

from .errors import ConfigurationError


# Bump to invalidate every entry written by an older record layout
CACHE_KEY_VERSION = "1"


def cache_key(ip: str) -> str:
    """Versioned cache key for an address"""
    return f"{ip}:{CACHE_KEY_VERSION}"


class LRUCache:
    """
    Bounded least-recently-used cache.

    Capacity is fixed at construction. Entries never expire on their own;
    the least recently read or written entry is evicted once the cache
    grows past its capacity. Records are copied on the way in and on the
    way out so callers can never mutate a cached entry.
    """

    def __init__(self, capacity: int):
        if capacity <= 0:
            raise ConfigurationError(f"cache capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._data: OrderedDict[str, Any] = OrderedDict()

    @property
    def capacity(self) -> int:
        return self._capacity

    def get(self, key: str) -> Optional[Any]:
        """
        Get a copy of the cached record and mark it recently used.

        Args:
            key: Cache key (see cache_key)

        Returns:
            Record copy or None on a miss
        """
        if key not in self._data:
            return None
        self._data.move_to_end(key)
        return copy.deepcopy(self._data[key])

    def put(self, key: str, record: Any):
        """
        Insert or refresh a record, evicting the LRU entry when over capacity.

        Args:
            key: Cache key (see cache_key)
            record: Record to store
        """
        self._data[key] = copy.deepcopy(record)
        self._data.move_to_end(key)
        while len(self._data) > self._capacity:
            self._data.popitem(last=False)

    def clear(self):
        """Drop every entry"""
        self._data.clear()

    def __contains__(self, key: str) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)
