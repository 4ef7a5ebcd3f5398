"""Shared fixtures for the TreeStore test suite."""

import pytest

from treestore import TreeItem, TreeStore


def make_items():
    """Build the sample forest.

    1
    ├── 2
    │   ├── 4
    │   │   ├── 7
    │   │   └── 8
    │   ├── 5
    │   └── 6
    └── 3
    """
    return [
        TreeItem(id=1, parent="root"),
        TreeItem(id=2, parent=1, type="test"),
        TreeItem(id=3, parent=1, type="test"),
        TreeItem(id=4, parent=2, type="test"),
        TreeItem(id=5, parent=2, type="test"),
        TreeItem(id=6, parent=2, type="test"),
        TreeItem(id=7, parent=4, type=None),
        TreeItem(id=8, parent=4, type=None),
    ]


@pytest.fixture
def items():
    return make_items()


@pytest.fixture
def store(items):
    return TreeStore(items)


@pytest.fixture
def node(items):
    """Look up a sample item by id without going through the store."""
    by_id = {item.id: item for item in items}
    return lambda node_id: by_id[node_id]
