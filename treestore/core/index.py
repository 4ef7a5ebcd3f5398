"""Node index: the immutable, ordered ground truth every query scans."""

import logging
from typing import Any, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from .node import TreeItem, normalize_id

logger = logging.getLogger(__name__)

ItemInput = Union[TreeItem, Mapping[str, Any]]


class NodeIndex:
    """Ordered collection of TreeItems fixed at construction.

    A list of TreeItems is stored by reference, not copied. Mappings are
    converted once into a new list. Nothing is validated: duplicate ids,
    dangling parents and cycles are all accepted as given.

    The collection returned by ``get_all()`` is the same object the index
    scans, so callers must not mutate it.
    """

    def __init__(self, items: Sequence[ItemInput]):
        """Build the index.

        Args:
            items: TreeItems or ``{"id", "parent", "type"?}`` mappings,
                in the order queries should report them
        """
        if isinstance(items, list) and all(isinstance(i, TreeItem) for i in items):
            self._items: List[TreeItem] = items
        else:
            self._items = [
                i if isinstance(i, TreeItem) else TreeItem.from_mapping(i)
                for i in items
            ]

        self._entries: List[Tuple[Optional[str], Optional[str], TreeItem]] = [
            (normalize_id(item.id), normalize_id(item.parent), item)
            for item in self._items
        ]
        logger.debug("Indexed %d nodes", len(self._entries))

    def get_all(self) -> List[TreeItem]:
        """Return the full collection in original order."""
        return self._items

    def entries(self) -> List[Tuple[Optional[str], Optional[str], TreeItem]]:
        """Return ``(key, parent_key, item)`` triples in original order."""
        return self._entries

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[TreeItem]:
        return iter(self._items)
