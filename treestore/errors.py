"""Exceptions raised by TreeStore.

Queries never raise for identifiers that are missing from the collection;
these errors cover invalid configuration and the opt-in guards against
malformed parent chains.
"""

from typing import Optional, Sequence


class TreeStoreError(Exception):
    """Base class for all TreeStore errors."""
    pass


class StoreConfigError(TreeStoreError):
    """Raised when a StoreConfig fails validation."""
    pass


class CycleDetectedError(TreeStoreError):
    """Raised when a recursive query revisits an identifier on its own path."""

    def __init__(self, node_id: Optional[str], path: Sequence[Optional[str]]):
        self.node_id = node_id
        self.path = list(path)
        chain = " -> ".join(str(p) for p in [*self.path, node_id])
        super().__init__(f"Cycle detected at {node_id!r}: {chain}")


class TraversalDepthError(TreeStoreError):
    """Raised when a recursive query goes deeper than the configured limit."""

    def __init__(self, node_id: Optional[str], max_depth: int):
        self.node_id = node_id
        self.max_depth = max_depth
        super().__init__(
            f"Traversal from {node_id!r} exceeded max_depth={max_depth}"
        )
