"""TreeStore - Memoized hierarchical queries over flat parent-referencing records.

TreeStore indexes a flat list of ``{id, parent, type}`` records and answers
tree-shaped queries over it without building an explicit tree:

    from treestore import TreeStore

    store = TreeStore(items)
    store.get_item(7)
    store.get_children(4)
    store.get_all_children(2)
    store.get_all_parents(7)

Results are cached per query kind and identifier for the lifetime of the
store. For walking the collection node by node see ``TreeStoreAdapter``.
"""

__version__ = "0.1.0"

from .core import TreeItem, ROOT, normalize_id, QueryKind, KNOWN_ABSENT
from .config import StoreConfig
from .errors import (
    TreeStoreError,
    StoreConfigError,
    CycleDetectedError,
    TraversalDepthError,
)
from .store import TreeStore
from .adapter import TreeStoreAdapter, TraversalStrategy, traverse

__all__ = [
    "__version__",
    # Core
    'TreeItem',
    'ROOT',
    'normalize_id',
    'QueryKind',
    'KNOWN_ABSENT',
    # Store
    'TreeStore',
    'StoreConfig',
    # Errors
    'TreeStoreError',
    'StoreConfigError',
    'CycleDetectedError',
    'TraversalDepthError',
    # Navigation
    'TreeStoreAdapter',
    'TraversalStrategy',
    'traverse',
]
