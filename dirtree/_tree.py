from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import Generic, TypeVar

from ._node import TreeNode

T = TypeVar("T")


class AbstractTree(ABC, Generic[T]):
    """Read-only queries and traversals shared by every tree variant.

    Subclasses provide the structural primitives (``root``, ``parent``,
    ``children``, ``num_children``, ``size``); everything else is derived.
    Traversals use an explicit stack, so a degenerate search tree is safe
    to walk at any depth.
    """

    @abstractmethod
    def root(self) -> TreeNode[T] | None: ...

    @abstractmethod
    def parent(self, node: TreeNode[T]) -> TreeNode[T] | None: ...

    @abstractmethod
    def children(self, node: TreeNode[T]) -> list[TreeNode[T]]: ...

    @abstractmethod
    def num_children(self, node: TreeNode[T]) -> int: ...

    @abstractmethod
    def size(self) -> int: ...

    # -- derived queries --

    def is_empty(self) -> bool:
        return self.size() == 0

    def is_root(self, node: TreeNode[T]) -> bool:
        return self.parent(node) is None and node is self.root()

    def is_internal(self, node: TreeNode[T]) -> bool:
        return self.num_children(node) > 0

    def is_external(self, node: TreeNode[T]) -> bool:
        return self.num_children(node) == 0

    def depth(self, node: TreeNode[T]) -> int:
        """Number of parent hops from *node* up to the root (root is 0)."""
        depth = 0
        current = self.parent(node)
        while current is not None:
            depth += 1
            current = current.parent
        return depth

    def height(self, node: TreeNode[T] | None = None) -> int:
        """Longest downward path from *node* (default: root) to a leaf.

        A leaf has height 0. An empty tree has height 0 as well.
        """
        if node is None:
            node = self.root()
            if node is None:
                return 0
        heights: dict[int, int] = {}
        for current in self._postorder_from(node):
            kids = self.children(current)
            heights[id(current)] = (
                1 + max(heights[id(c)] for c in kids) if kids else 0
            )
        return heights[id(node)]

    # -- traversals --

    def preorder(self, node: TreeNode[T] | None = None) -> list[TreeNode[T]]:
        """Nodes of the tree (or of the subtree at *node*), parents first."""
        if node is None:
            node = self.root()
            if node is None:
                return []
        return self._preorder_from(node)

    def postorder(self, node: TreeNode[T] | None = None) -> list[TreeNode[T]]:
        """Nodes of the tree (or of the subtree at *node*), children first."""
        if node is None:
            node = self.root()
            if node is None:
                return []
        return self._postorder_from(node)

    def _preorder_from(self, node: TreeNode[T]) -> list[TreeNode[T]]:
        snap: list[TreeNode[T]] = []
        stack = [node]
        while stack:
            current = stack.pop()
            snap.append(current)
            stack.extend(reversed(self.children(current)))
        return snap

    def _postorder_from(self, node: TreeNode[T]) -> list[TreeNode[T]]:
        snap: list[TreeNode[T]] = []
        stack: list[tuple[TreeNode[T], bool]] = [(node, False)]
        while stack:
            current, expanded = stack.pop()
            if expanded:
                snap.append(current)
                continue
            stack.append((current, True))
            for child in reversed(self.children(current)):
                stack.append((child, False))
        return snap

    def __len__(self) -> int:
        return self.size()

    def __iter__(self) -> Iterator[T]:
        for node in self.preorder():
            yield node.data
