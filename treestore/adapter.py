"""Navigation adapter and traversal over a TreeStore.

The adapter exposes a TreeStore through the familiar node-navigation
interface (children, parent, depth, siblings) so callers building UI
trees, menus or org charts can walk the flat collection as a tree. All
lookups go through the store and therefore share its cache.
"""

from collections import deque
from enum import Enum
from typing import Deque, Iterator, List, Optional, Set, Tuple

from .core.node import TreeItem, normalize_id
from .store import TreeStore


class TraversalStrategy(Enum):
    """How to walk the tree."""
    BREADTH_FIRST = "bfs"           # Level by level
    DEPTH_FIRST_PRE = "dfs_pre"     # Parent before children


class TreeStoreAdapter:
    """Navigate a TreeStore node by node.

    The store is read-only, so the adapter never supports modification.
    Orphans (nodes whose parent id is not in the collection) behave like
    roots for ``get_parent`` and ``get_depth``.
    """

    def __init__(self, store: TreeStore):
        """Initialize adapter with a store.

        Args:
            store: TreeStore providing the nodes
        """
        self.store = store

    def get_roots(self) -> List[TreeItem]:
        """Return every node whose parent is the root sentinel."""
        return self.store.get_children(self.store.config.root_sentinel)

    def get_children(self, node: TreeItem) -> Iterator[TreeItem]:
        """Get an iterator of child nodes for the given node.

        Args:
            node: The parent node

        Returns:
            Iterator yielding child TreeItems in original order
        """
        return iter(self.store.get_children(node.id))

    def get_parent(self, node: TreeItem) -> Optional[TreeItem]:
        """Get the parent node of the given node.

        Args:
            node: The child node

        Returns:
            Parent TreeItem or None if node is a root or an orphan
        """
        parent_key = normalize_id(node.parent)
        if parent_key is None or parent_key == normalize_id(self.store.config.root_sentinel):
            return None
        return self.store.get_item(parent_key)

    def get_depth(self, node: TreeItem) -> int:
        """Calculate the depth of a node in the tree.

        Args:
            node: The node to get depth for

        Returns:
            Depth where root = 0
        """
        return len(self.store.get_all_parents(node.id))

    def get_siblings(self, node: TreeItem) -> Iterator[TreeItem]:
        """Get siblings of the given node (excluding the node itself).

        Roots are siblings of each other.

        Args:
            node: The node to get siblings for

        Returns:
            Iterator yielding sibling TreeItems
        """
        parent_key = normalize_id(node.parent)
        if parent_key is None:
            return

        node_key = normalize_id(node.id)
        for sibling in self.store.get_children(parent_key):
            if normalize_id(sibling.id) != node_key:
                yield sibling

    def is_leaf(self, node: TreeItem) -> bool:
        """Check if this node has no children."""
        return not self.store.get_children(node.id)

    def estimated_size(self, node: TreeItem) -> int:
        """Count the nodes in the subtree rooted at ``node``, itself included."""
        return len(self.store.get_all_children(node.id)) + 1

    def supports_modification(self) -> bool:
        """TreeStore collections are fixed at construction."""
        return False


def traverse(adapter: TreeStoreAdapter,
             root: TreeItem,
             strategy: TraversalStrategy = TraversalStrategy.DEPTH_FIRST_PRE,
             max_depth: Optional[int] = None) -> Iterator[Tuple[TreeItem, int]]:
    """Walk the subtree under ``root``.

    Already visited ids are skipped, so a cyclic collection cannot make the
    walk loop forever.

    Args:
        adapter: Adapter over the store
        root: Starting node
        strategy: Breadth-first or depth-first pre-order
        max_depth: Deepest level to yield (None = unlimited)

    Yields:
        Tuples of (node, depth) where depth is relative to root
    """
    visited: Set[Optional[str]] = set()

    if strategy == TraversalStrategy.BREADTH_FIRST:
        queue: Deque[Tuple[TreeItem, int]] = deque([(root, 0)])
        while queue:
            node, depth = queue.popleft()
            node_key = normalize_id(node.id)
            if node_key in visited:
                continue
            visited.add(node_key)

            yield (node, depth)

            if max_depth is None or depth < max_depth:
                for child in adapter.get_children(node):
                    queue.append((child, depth + 1))
        return

    # Explicit stack instead of recursion; children pushed in reverse
    stack: List[Tuple[TreeItem, int]] = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        node_key = normalize_id(node.id)
        if node_key in visited:
            continue
        visited.add(node_key)

        yield (node, depth)

        if max_depth is None or depth < max_depth:
            children = list(adapter.get_children(node))
            for child in reversed(children):
                stack.append((child, depth + 1))
