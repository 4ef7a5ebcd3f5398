"""Test fixtures for TreeStore consumers.

These fixtures provide controlled access to cache state for testing purposes
without exposing implementation details as part of the public API.
"""

from typing import Any, Dict, List

from ..core.cache import KNOWN_ABSENT, QueryKind
from ..core.node import Identifier, normalize_id
from ..store import TreeStore


class CacheTestHelper:
    """Public test fixture for cache verification.

    Example:
        store = TreeStore(items)
        testable = CacheTestHelper(store)

        store.get_children(1)
        assert testable.was_cached(QueryKind.CHILDREN, 1)
        assert testable.get_summary()['get_children'] == 1
    """

    def __init__(self, store: TreeStore):
        """Initialize with the store under test.

        Args:
            store: TreeStore whose cache should be inspected
        """
        self._store = store

    def get_summary(self) -> Dict[str, int]:
        """Returns the number of cached entries per query kind."""
        return {
            kind.value: len(self._store.cache.entries(kind))
            for kind in QueryKind
        }

    def was_cached(self, kind: QueryKind, id: Identifier) -> bool:
        """Check whether a result for ``id`` is stored under ``kind``."""
        return self._store.cache.contains(kind, normalize_id(id))

    def is_known_absent(self, id: Identifier) -> bool:
        """Check whether ``id`` is cached as a lookup that found nothing."""
        entries = self._store.cache.entries(QueryKind.ITEM)
        return entries.get(normalize_id(id)) is KNOWN_ABSENT

    def cached_keys(self, kind: QueryKind) -> List[Any]:
        """List the normalized identifiers cached under ``kind``."""
        return list(self._store.cache.entries(kind))
