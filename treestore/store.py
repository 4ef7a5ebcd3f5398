"""Query engine for TreeStore.

TreeStore answers hierarchical queries over a flat, parent-referencing
collection without building an explicit tree. Each query kind is memoized
per identifier; because the collection never changes after construction,
cached results never need invalidating.

Example:
    store = TreeStore([
        {"id": 1, "parent": "root"},
        {"id": 2, "parent": 1, "type": "test"},
    ])
    store.get_children(1)     # [TreeItem(id=2, parent=1, type='test')]
    store.get_all_parents(2)  # [TreeItem(id=1, parent='root', type=None)]
"""

import logging
from typing import Any, Dict, List, NamedTuple, Optional, Sequence, Tuple

from .config import StoreConfig
from .core.cache import KNOWN_ABSENT, QueryKind, ResultCache
from .core.index import ItemInput, NodeIndex
from .core.node import Identifier, TreeItem, normalize_id
from .errors import CycleDetectedError, StoreConfigError, TraversalDepthError

logger = logging.getLogger(__name__)

Trail = Tuple[Optional[str], ...]


class Subtree(NamedTuple):
    """Cached ``get_all_children`` result.

    Attributes:
        items: Descendants in query order
        height: Levels of recursion needed below the subtree root
    """
    items: Tuple[TreeItem, ...]
    height: int


class TreeStore:
    """Memoizing query engine over a fixed collection of TreeItems.

    All four queries consult the result cache first, fall back to scanning
    the node index (or recursing into sub-queries) on a miss, and store
    what they computed.

    Identifiers are normalized before comparison, so ``7`` and ``"7"``
    refer to the same node. Missing identifiers never raise: ``get_item``
    returns None and the sequence queries return an empty list.

    With the default configuration there is no cycle detection; a cyclic
    parent chain ends in ``RecursionError``. Use ``StoreConfig.hardened()``
    to get ``CycleDetectedError`` / ``TraversalDepthError`` instead.
    """

    def __init__(self, items: Sequence[ItemInput], config: Optional[StoreConfig] = None):
        """Index the items and set up an empty cache.

        Args:
            items: TreeItems or ``{"id", "parent", "type"?}`` mappings
            config: Store configuration (defaults to StoreConfig())

        Raises:
            StoreConfigError: If the configuration is invalid
        """
        self.config = config or StoreConfig()

        config_errors = self.config.validate()
        if config_errors:
            raise StoreConfigError(
                f"Invalid configuration: {'; '.join(config_errors)}"
            )

        self._index = NodeIndex(items)
        self._cache = ResultCache(
            cache_misses=self.config.cache_misses,
            max_entries=self.config.max_cache_entries,
            thread_safe=self.config.thread_safe,
        )
        self._root_key = normalize_id(self.config.root_sentinel)

        logger.info("TreeStore created with %d nodes", len(self._index))

    @property
    def index(self) -> NodeIndex:
        return self._index

    @property
    def cache(self) -> ResultCache:
        return self._cache

    def get_all(self) -> List[TreeItem]:
        """Return the original collection, in original order.

        This is the backing list itself; mutating it breaks the cache.
        """
        return self._index.get_all()

    def get_item(self, id: Identifier) -> Optional[TreeItem]:
        """Return the first node whose id equals ``id``.

        Args:
            id: Identifier to look up

        Returns:
            Matching TreeItem, or None if no node has this id
        """
        key = normalize_id(id)

        cached = self._cache.get(QueryKind.ITEM, key)
        if cached is not None:
            return None if cached is KNOWN_ABSENT else cached

        result = None
        for item_key, _, item in self._index.entries():
            if item_key == key:
                result = item
                break

        if result is None:
            logger.debug("get_item(%r): not found", key)
        self._cache.set(QueryKind.ITEM, key, result)
        return result

    def get_children(self, id: Identifier) -> List[TreeItem]:
        """Return the direct children of ``id`` in original order.

        Args:
            id: Identifier of the parent

        Returns:
            List of children (empty if none)
        """
        return list(self._children(normalize_id(id)))

    def get_all_children(self, id: Identifier) -> List[TreeItem]:
        """Return every descendant of ``id``.

        The order is: all direct children first, then for each direct child
        that itself has children (in original order) that child's own
        ``get_all_children`` result. With the tree 1 -> {2, 3},
        2 -> {4, 5, 6}, 4 -> {7, 8}, ``get_all_children(2)`` is
        ``[4, 5, 6, 7, 8]``.

        Args:
            id: Identifier of the subtree root

        Returns:
            List of descendants (empty if none)

        Raises:
            CycleDetectedError: If cycle detection is enabled and the
                descendants of ``id`` loop back onto themselves
            TraversalDepthError: If the subtree is deeper than max_depth
        """
        return list(self._all_children(normalize_id(id), ()).items)

    def get_all_parents(self, id: Identifier) -> List[TreeItem]:
        """Return the ancestor chain of ``id``, nearest first.

        The node itself and the root sentinel are excluded. An ancestor
        reference that cannot be resolved ends the chain.

        Args:
            id: Identifier of the node

        Returns:
            List of ancestors (empty for roots and unknown ids)

        Raises:
            CycleDetectedError: If cycle detection is enabled and the
                parent chain loops
            TraversalDepthError: If the chain is longer than max_depth
        """
        return list(self._all_parents(normalize_id(id), ()))

    def get_cache_stats(self) -> Dict[str, Dict[str, Any]]:
        """Get per-query-kind cache statistics for monitoring and debugging."""
        return self._cache.get_stats()

    def clear_cache(self) -> None:
        """Drop all memoized results."""
        self._cache.clear()

    def _children(self, key: Optional[str]) -> Tuple[TreeItem, ...]:
        cached = self._cache.get(QueryKind.CHILDREN, key)
        if cached is not None:
            return cached

        result = tuple(
            item for _, parent_key, item in self._index.entries()
            if parent_key == key
        )

        logger.debug("get_children(%r): %d nodes", key, len(result))
        self._cache.set(QueryKind.CHILDREN, key, result)
        return result

    def _has_children(self, key: Optional[str]) -> bool:
        return any(parent_key == key for _, parent_key, _ in self._index.entries())

    def _all_children(self, key: Optional[str], trail: Trail) -> Subtree:
        cached = self._cache.get(QueryKind.ALL_CHILDREN, key)
        if cached is not None:
            self._check_trail(key, trail, cached.height)
            return cached

        self._check_trail(key, trail)

        direct = self._children(key)
        descendants: List[TreeItem] = []
        height = 0
        for child in direct:
            child_key = normalize_id(child.id)
            if not self._has_children(child_key):
                continue
            subtree = self._all_children(child_key, trail + (key,))
            descendants.extend(subtree.items)
            height = max(height, subtree.height + 1)

        result = Subtree(direct + tuple(descendants), height)

        logger.debug("get_all_children(%r): %d nodes", key, len(result.items))
        self._cache.set(QueryKind.ALL_CHILDREN, key, result)
        return result

    def _all_parents(self, key: Optional[str], trail: Trail) -> Tuple[TreeItem, ...]:
        cached = self._cache.get(QueryKind.ALL_PARENTS, key)
        if cached is not None:
            # Each ancestor is one more level of recursion
            self._check_trail(key, trail, len(cached))
            return cached

        self._check_trail(key, trail)

        result: Tuple[TreeItem, ...] = ()
        item = self.get_item(key)
        parent_key = normalize_id(item.parent) if item is not None else None

        if parent_key is not None and parent_key != self._root_key:
            parent = self.get_item(parent_key)
            # Dangling parent reference: the chain stops here
            if parent is not None:
                result = (parent,) + self._all_parents(parent_key, trail + (key,))

        logger.debug("get_all_parents(%r): %d nodes", key, len(result))
        self._cache.set(QueryKind.ALL_PARENTS, key, result)
        return result

    def _check_trail(self, key: Optional[str], trail: Trail, height: int = 0) -> None:
        """Apply the cycle and depth guards.

        ``height`` is how many more levels a cached result stands for, so a
        cache hit is held to the same limit as a fresh computation.
        """
        if self.config.detect_cycles and key in trail:
            raise CycleDetectedError(key, trail)
        max_depth = self.config.max_depth
        if max_depth is not None and len(trail) + height > max_depth:
            raise TraversalDepthError(trail[0] if trail else key, max_depth)
