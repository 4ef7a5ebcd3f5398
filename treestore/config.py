"""Configuration system for TreeStore.

This module defines how callers tune the store: the root sentinel, the
caching policy, the opt-in guards against cyclic parent chains and
locking for multi-threaded use.
"""

from dataclasses import dataclass
from typing import List, Optional

from .core.node import ROOT


@dataclass
class StoreConfig:
    """Complete configuration for a TreeStore.

    The defaults reproduce the plain behaviour: misses are not cached, the
    cache is unbounded, no cycle detection and no locking.
    """

    # Parent reference marking a top-level node
    root_sentinel: str = ROOT

    # Caching
    cache_misses: bool = False                # Store KNOWN_ABSENT for lookups that found nothing
    max_cache_entries: Optional[int] = None   # Per query kind; None = unbounded

    # Guards for malformed input
    detect_cycles: bool = False               # Raise CycleDetectedError on revisits
    max_depth: Optional[int] = None           # Raise TraversalDepthError past this depth

    # Concurrency
    thread_safe: bool = False                 # One lock per query kind

    @classmethod
    def default(cls) -> 'StoreConfig':
        """Create the plain configuration."""
        return cls()

    @classmethod
    def hardened(cls, max_depth: int = 500) -> 'StoreConfig':
        """Create config that guards against malformed parent chains.

        Args:
            max_depth: Deepest recursion allowed before giving up

        Returns:
            StoreConfig with cycle detection, a depth limit and miss caching
        """
        return cls(
            cache_misses=True,
            detect_cycles=True,
            max_depth=max_depth,
        )

    @classmethod
    def concurrent(cls, max_cache_entries: Optional[int] = None) -> 'StoreConfig':
        """Create config for stores shared between threads.

        Args:
            max_cache_entries: Optional per-kind cache bound

        Returns:
            StoreConfig with locking enabled
        """
        return cls(
            thread_safe=True,
            max_cache_entries=max_cache_entries,
        )

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not isinstance(self.root_sentinel, str) or not self.root_sentinel:
            errors.append("root_sentinel must be a non-empty string")

        if self.max_cache_entries is not None and self.max_cache_entries <= 0:
            errors.append("max_cache_entries must be positive")

        if self.max_depth is not None and self.max_depth <= 0:
            errors.append("max_depth must be positive")

        return errors
