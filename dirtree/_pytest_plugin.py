"""pytest fixture plugin.

Usage::

    # conftest.py
    pytest_plugins = ["dirtree._pytest_plugin"]

This makes the ``dtree`` and ``sample_tree`` fixtures available::

    def test_something(dtree):
        dtree.make_directory("/docs")
        assert dtree.get_node_by_path("/docs").data.is_dir
"""

import pytest

from ._dirtree import DirectoryTree


@pytest.fixture
def dtree() -> DirectoryTree:
    """An empty :class:`DirectoryTree` rooted at ``/``.

    Provides an independent instance per test (function scope).
    """
    return DirectoryTree()


@pytest.fixture
def sample_tree() -> DirectoryTree:
    """A small populated tree::

        /
        ├── docs/
        │   ├── notes.txt
        │   └── drafts/
        └── readme.md
    """
    tree = DirectoryTree()
    tree.make_directory("/docs")
    tree.make_file("/docs/notes.txt", 120)
    tree.make_directory("/docs/drafts")
    tree.make_file("/readme.md", 40)
    return tree
