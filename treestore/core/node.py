"""TreeItem record for TreeStore.

A TreeItem is a plain data container: an identifier, a reference to its
parent and an optional type tag. All navigation is done by the TreeStore,
which scans the flat collection of items.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

Identifier = Union[str, int]

# Parent reference marking a top-level node
ROOT = "root"


def normalize_id(value: Any) -> Optional[str]:
    """Map an identifier to its canonical comparable form.

    Integers (and integral floats) become their decimal string, strings are
    kept as-is, ``None`` stays ``None``. After normalization ``7`` and ``"7"``
    name the same node.

    Args:
        value: Raw identifier or parent reference

    Returns:
        Normalized string key, or None if value is None
    """
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


@dataclass(frozen=True)
class TreeItem:
    """A single node of a flat parent-referencing collection.

    Attributes:
        id: Identifier of this node (string or integer)
        parent: Identifier of the parent node, ``"root"`` for top-level
            nodes, or None when the node has no parent reference at all
        type: Optional free-form type tag
    """

    id: Identifier
    parent: Optional[Identifier] = ROOT
    type: Optional[str] = None

    @property
    def key(self) -> Optional[str]:
        """Normalized identifier."""
        return normalize_id(self.id)

    @property
    def parent_key(self) -> Optional[str]:
        """Normalized parent reference."""
        return normalize_id(self.parent)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> 'TreeItem':
        """Build an item from a ``{"id", "parent"?, "type"?}`` mapping.

        A missing ``parent`` key makes the item a root, as with the
        dataclass default. An explicit ``None`` keeps it parentless.

        Args:
            data: Mapping with at least an ``id`` key

        Returns:
            New TreeItem
        """
        return cls(
            id=data["id"],
            parent=data.get("parent", ROOT),
            type=data.get("type"),
        )

    def __str__(self) -> str:
        return str(self.id)
