from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from ._exceptions import DTInvalidNodeError, DTStructureError
from ._node import BinaryTreeNode, GeneralTreeNode, SearchTreeNode, TreeNode
from ._tree import AbstractTree

T = TypeVar("T")


# ---------------------------------------------------------------------------
#  Shared binary queries
# ---------------------------------------------------------------------------


class AbstractBinaryTree(AbstractTree[T]):
    def _validate(self, node: TreeNode[T]) -> BinaryTreeNode[T]:
        if not isinstance(node, BinaryTreeNode):
            raise DTInvalidNodeError(f"Not a binary tree node: {node!r}")
        if node.detached:
            raise DTInvalidNodeError(f"Node is no longer in the tree: {node!r}")
        if node.owner is not self:
            raise DTInvalidNodeError(f"Node belongs to another tree: {node!r}")
        return node

    def parent(self, node: TreeNode[T]) -> BinaryTreeNode[T] | None:
        return self._validate(node).parent  # type: ignore[return-value]

    def left(self, node: TreeNode[T]) -> BinaryTreeNode[T] | None:
        return self._validate(node).left

    def right(self, node: TreeNode[T]) -> BinaryTreeNode[T] | None:
        return self._validate(node).right

    def sibling(self, node: TreeNode[T]) -> BinaryTreeNode[T] | None:
        parent = self.parent(node)
        if parent is None:
            return None
        if node is parent.left:
            return parent.right
        return parent.left

    def children(self, node: TreeNode[T]) -> list[BinaryTreeNode[T]]:
        bnode = self._validate(node)
        return [c for c in (bnode.left, bnode.right) if c is not None]

    def num_children(self, node: TreeNode[T]) -> int:
        return len(self.children(node))

    def inorder(self) -> list[BinaryTreeNode[T]]:
        snap: list[BinaryTreeNode[T]] = []
        stack: list[BinaryTreeNode[T]] = []
        current = self.root()
        while stack or current is not None:
            while current is not None:
                stack.append(current)  # type: ignore[arg-type]
                current = current.left  # type: ignore[union-attr]
            current = stack.pop()
            snap.append(current)
            current = current.right
        return snap


# ---------------------------------------------------------------------------
#  LinkedBinaryTree
# ---------------------------------------------------------------------------


class LinkedBinaryTree(AbstractBinaryTree[T]):
    def __init__(self) -> None:
        self._root: BinaryTreeNode[T] | None = None
        self._size: int = 0

    def root(self) -> BinaryTreeNode[T] | None:
        return self._root

    def size(self) -> int:
        return self._size

    def add_root(self, value: T) -> BinaryTreeNode[T]:
        if not self.is_empty():
            raise DTStructureError("Tree already has a root.")
        self._root = BinaryTreeNode(value, owner=self)
        self._size = 1
        return self._root

    def add_left(self, node: TreeNode[T], value: T) -> BinaryTreeNode[T]:
        parent = self._validate(node)
        if parent.left is not None:
            raise DTStructureError(f"Node already has a left child: {parent!r}")
        child = BinaryTreeNode(value, parent, owner=self)
        parent.left = child
        self._size += 1
        return child

    def add_right(self, node: TreeNode[T], value: T) -> BinaryTreeNode[T]:
        parent = self._validate(node)
        if parent.right is not None:
            raise DTStructureError(f"Node already has a right child: {parent!r}")
        child = BinaryTreeNode(value, parent, owner=self)
        parent.right = child
        self._size += 1
        return child

    def set(self, node: TreeNode[T], value: T) -> T:
        bnode = self._validate(node)
        old = bnode.data
        bnode.data = value
        return old

    def attach(
        self,
        node: TreeNode[T],
        left: LinkedBinaryTree[T],
        right: LinkedBinaryTree[T],
    ) -> None:
        """Splice the roots of *left* and *right* under the leaf *node*.

        Both donor trees are left empty.
        """
        bnode = self._validate(node)
        if self.is_internal(bnode):
            raise DTStructureError(f"Node must be a leaf: {bnode!r}")
        if left is self or right is self or (left is right and not left.is_empty()):
            raise DTStructureError("Cannot attach a tree to itself.")
        self._size += left.size() + right.size()
        for donor in (left, right):
            for n in donor.preorder():
                n.owner = self
        if left._root is not None:
            left._root.parent = bnode
            bnode.left = left._root
            left._root = None
            left._size = 0
        if right._root is not None:
            right._root.parent = bnode
            bnode.right = right._root
            right._root = None
            right._size = 0

    def remove(self, node: TreeNode[T]) -> T:
        """Remove a node with at most one child, splicing that child up."""
        bnode = self._validate(node)
        if bnode.left is not None and bnode.right is not None:
            raise DTStructureError(f"Node has two children: {bnode!r}")
        child = bnode.left if bnode.left is not None else bnode.right
        parent = bnode.parent
        if child is not None:
            child.parent = parent
        if bnode is self._root:
            self._root = child
        elif parent is not None:
            if bnode is parent.left:  # type: ignore[attr-defined]
                parent.left = child  # type: ignore[attr-defined]
            else:
                parent.right = child  # type: ignore[attr-defined]
        self._size -= 1
        value = bnode.data
        bnode.data = None  # type: ignore[assignment]
        bnode.left = None
        bnode.right = None
        bnode.parent = None
        bnode.detached = True
        return value


# ---------------------------------------------------------------------------
#  BinarySearchTree
# ---------------------------------------------------------------------------


class BinarySearchTree(AbstractBinaryTree[T]):
    """Unbalanced binary search tree ordered by ``key(payload)``.

    Keys compare with strict ``<`` / ``>``; inserting an equal key is ignored.
    The shape depends entirely on insertion order.

    Trees built with :meth:`from_subtree` are disposable snapshots: each
    entry remembers the general-tree node it was copied from, which is what
    :meth:`search_result` follows to build a path.
    """

    def __init__(self, key: Callable[[T], Any] | None = None) -> None:
        self._root: SearchTreeNode[T] | None = None
        self._size: int = 0
        self._key: Callable[[T], Any] = key if key is not None else _identity

    @classmethod
    def from_subtree(
        cls,
        tree: AbstractTree[T],
        node: TreeNode[T],
        key: Callable[[T], Any] | None = None,
    ) -> BinarySearchTree[T]:
        if node is None:
            raise DTInvalidNodeError("Subtree root cannot be None.")
        if not isinstance(node, GeneralTreeNode):
            raise DTInvalidNodeError(f"Not a general tree node: {node!r}")
        snap = tree.preorder(node)
        bst: BinarySearchTree[T] = cls(key=key)
        bst._root = SearchTreeNode(node.data, source=node, owner=bst)
        bst._size = 1
        for entry in snap[1:]:
            bst.insert(entry.data, source=entry)
        return bst

    def root(self) -> SearchTreeNode[T] | None:
        return self._root

    def size(self) -> int:
        return self._size

    def insert(self, value: T, source: Any = None) -> SearchTreeNode[T] | None:
        """Insert *value*; return the new node, or None if its key is present."""
        if self._root is None:
            self._root = SearchTreeNode(value, source=source, owner=self)
            self._size = 1
            return self._root
        key = self._key(value)
        current = self._root
        while True:
            current_key = self._key(current.data)
            if key < current_key:
                if current.left is None:
                    current.left = SearchTreeNode(value, current, source, owner=self)
                    self._size += 1
                    return current.left  # type: ignore[return-value]
                current = current.left  # type: ignore[assignment]
            elif key > current_key:
                if current.right is None:
                    current.right = SearchTreeNode(value, current, source, owner=self)
                    self._size += 1
                    return current.right  # type: ignore[return-value]
                current = current.right  # type: ignore[assignment]
            else:
                return None

    def search(self, key: Any) -> SearchTreeNode[T] | None:
        current = self._root
        while current is not None:
            current_key = self._key(current.data)
            if key < current_key:
                current = current.left  # type: ignore[assignment]
            elif key > current_key:
                current = current.right  # type: ignore[assignment]
            else:
                return current
        return None

    def search_result(self, key: Any, stop_node: TreeNode[T]) -> str | None:
        """Return the display path from *stop_node* down to the entry for *key*.

        Payload string forms are concatenated top-down. Returns None when
        *key* is absent; raises ``DTInvalidNodeError`` when *stop_node* is not
        an ancestor of the entry found.
        """
        found = self.search(key)
        if found is None:
            return None
        chain: list[TreeNode[T]] = []
        current: TreeNode[T] | None = found.source if found.source is not None else found
        while current is not stop_node:
            if current is None:
                raise DTInvalidNodeError(f"Not an ancestor of the match: {stop_node!r}")
            chain.append(current)
            current = current.parent
        chain.append(stop_node)
        return "".join(str(n.data) for n in reversed(chain))


def _identity(value: Any) -> Any:
    return value
