"""
Per-query-kind result cache for TreeStore.

Every query kind owns one mapping from normalized identifier to the result
of that kind. Entries are added lazily and never invalidated, which is only
correct because the node index never changes after construction.

Supports three optional behaviours:
- Known-absent markers for lookups that found nothing (off by default)
- Per-kind capacity bound with LRU eviction via cachetools
- One lock per query kind for multi-threaded callers
"""

import logging
import threading
from contextlib import nullcontext
from enum import Enum
from typing import Any, Dict, Optional

from cachetools import LRUCache

logger = logging.getLogger(__name__)


class QueryKind(Enum):
    """The four memoized query operations."""
    ITEM = "get_item"
    CHILDREN = "get_children"
    ALL_CHILDREN = "get_all_children"
    ALL_PARENTS = "get_all_parents"


class _KnownAbsent:
    """Marker stored for lookups that resolved to no node."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "KNOWN_ABSENT"

    def __bool__(self) -> bool:
        return False


KNOWN_ABSENT = _KnownAbsent()


class ResultCache:
    """
    Lazily populated memo keyed by (query kind, identifier).

    ``get`` returns None when nothing is stored. ``set`` skips values that
    are None, so a query for a missing identifier is recomputed on every
    call unless ``cache_misses`` is enabled, in which case the miss is
    stored as ``KNOWN_ABSENT``.
    """

    def __init__(self,
                 cache_misses: bool = False,
                 max_entries: Optional[int] = None,
                 thread_safe: bool = False):
        """
        Initialize one empty mapping per query kind.

        Args:
            cache_misses: Store ``KNOWN_ABSENT`` instead of skipping None
            max_entries: Per-kind entry limit (None = unbounded)
            thread_safe: Guard each kind's mapping with its own lock
        """
        self.cache_misses = cache_misses
        self.max_entries = max_entries
        self.thread_safe = thread_safe

        self._maps: Dict[QueryKind, Any] = {kind: self._new_map() for kind in QueryKind}
        self._locks = {
            kind: threading.RLock() if thread_safe else nullcontext()
            for kind in QueryKind
        }

        self.hits: Dict[QueryKind, int] = {kind: 0 for kind in QueryKind}
        self.misses: Dict[QueryKind, int] = {kind: 0 for kind in QueryKind}

    def _new_map(self):
        if self.max_entries is None:
            return {}
        return LRUCache(maxsize=self.max_entries)

    def get(self, kind: QueryKind, key: Optional[str]) -> Optional[Any]:
        """
        Look up a stored result.

        Args:
            kind: Query kind whose mapping to consult
            key: Normalized identifier

        Returns:
            The stored value (possibly an empty tuple or ``KNOWN_ABSENT``),
            or None if nothing is stored
        """
        with self._locks[kind]:
            value = self._maps[kind].get(key)
            if value is None:
                self.misses[kind] += 1
            else:
                self.hits[kind] += 1
            return value

    def set(self, kind: QueryKind, key: Optional[str], value: Any) -> bool:
        """
        Store a result in place.

        Args:
            kind: Query kind whose mapping to update
            key: Normalized identifier
            value: Result to store; None means "no node found"

        Returns:
            True if stored, False if skipped
        """
        if value is None:
            if not self.cache_misses:
                return False
            value = KNOWN_ABSENT

        with self._locks[kind]:
            self._maps[kind][key] = value
        return True

    def contains(self, kind: QueryKind, key: Optional[str]) -> bool:
        """Check for a stored entry without touching statistics."""
        with self._locks[kind]:
            return key in self._maps[kind]

    def entries(self, kind: QueryKind) -> Dict[Optional[str], Any]:
        """Snapshot of one kind's mapping."""
        with self._locks[kind]:
            return dict(self._maps[kind])

    def clear(self) -> None:
        """Drop every entry and reset statistics."""
        for kind in QueryKind:
            with self._locks[kind]:
                self._maps[kind] = self._new_map()
                self.hits[kind] = 0
                self.misses[kind] = 0
        logger.debug("Result cache cleared")

    def get_stats(self) -> Dict[str, Dict[str, Any]]:
        """
        Get cache statistics per query kind.

        Returns:
            Mapping of query kind name to entries, hits, misses and hit rate
        """
        stats = {}
        for kind in QueryKind:
            with self._locks[kind]:
                hits = self.hits[kind]
                misses = self.misses[kind]
                total = hits + misses
                stats[kind.value] = {
                    'entries': len(self._maps[kind]),
                    'hits': hits,
                    'misses': misses,
                    'hit_rate': hits / total if total > 0 else 0,
                }
        return stats
