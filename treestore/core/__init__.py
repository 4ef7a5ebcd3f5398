"""Core components of TreeStore: the node model, the index and the cache.

This internal package must NEVER import from the store or adapter modules
to avoid circular dependencies.
"""

from .node import TreeItem, Identifier, ROOT, normalize_id
from .index import NodeIndex
from .cache import ResultCache, QueryKind, KNOWN_ABSENT

__all__ = [
    'TreeItem',
    'Identifier',
    'ROOT',
    'normalize_id',
    'NodeIndex',
    'ResultCache',
    'QueryKind',
    'KNOWN_ABSENT',
]
