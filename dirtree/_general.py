from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from ._exceptions import DTInvalidNodeError, DTStructureError
from ._format import render_tree
from ._node import GeneralTreeNode, TreeNode
from ._tree import AbstractTree

T = TypeVar("T")


class LinkedGeneralTree(AbstractTree[T]):
    """A tree whose nodes own any number of children, in insertion order."""

    def __init__(self) -> None:
        self._root: GeneralTreeNode[T] | None = None
        self._size: int = 0
        # subtrees unlinked by detach(), keyed by id(), pending graft()
        self._pending: dict[int, GeneralTreeNode[T]] = {}

    def _create_node(
        self, value: T, parent: GeneralTreeNode[T] | None
    ) -> GeneralTreeNode[T]:
        return GeneralTreeNode(value, parent, owner=self)

    def _validate(self, node: TreeNode[T]) -> GeneralTreeNode[T]:
        if not isinstance(node, GeneralTreeNode):
            raise DTInvalidNodeError(f"Not a general tree node: {node!r}")
        if node.detached:
            raise DTInvalidNodeError(f"Node is no longer in the tree: {node!r}")
        if node.owner is not self:
            raise DTInvalidNodeError(f"Node belongs to another tree: {node!r}")
        return node

    # -- queries --

    def root(self) -> GeneralTreeNode[T] | None:
        return self._root

    def size(self) -> int:
        return self._size

    def parent(self, node: TreeNode[T]) -> GeneralTreeNode[T] | None:
        return self._validate(node).parent  # type: ignore[return-value]

    def children(self, node: TreeNode[T]) -> list[GeneralTreeNode[T]]:
        return list(self._validate(node).children)

    def num_children(self, node: TreeNode[T]) -> int:
        return len(self._validate(node).children)

    def subtree_size(self, node: TreeNode[T]) -> int:
        """Number of nodes in the subtree rooted at *node*, *node* included."""
        return len(self._preorder_from(self._validate(node)))

    # -- mutation --

    def add_root(self, value: T) -> GeneralTreeNode[T]:
        if not self.is_empty():
            raise DTStructureError("Tree already has a root.")
        self._root = self._create_node(value, None)
        self._size = 1
        return self._root

    def add_child(self, node: TreeNode[T], value: T) -> GeneralTreeNode[T]:
        parent = self._validate(node)
        child = self._create_node(value, parent)
        parent.add_child(child)
        self._size += 1
        return child

    def set(self, node: TreeNode[T], value: T) -> T:
        gnode = self._validate(node)
        old = gnode.data
        gnode.data = value
        return old

    def remove(self, node: TreeNode[T]) -> T:
        """Unlink *node* and its descendants; every removed node is tombstoned.

        The root cannot be removed.
        """
        gnode = self._validate(node)
        if gnode is self._root:
            raise DTStructureError("Cannot remove the root of a general tree.")
        removed = self._preorder_from(gnode)
        self._unlink(gnode)
        for n in removed:
            n.detached = True
            n.children.clear()  # type: ignore[attr-defined]
        self._size -= len(removed)
        return gnode.data

    def detach(self, node: TreeNode[T]) -> GeneralTreeNode[T]:
        """Unlink the subtree at *node* but keep it intact for a later ``graft``.

        Every node of the subtree is tombstoned until it is grafted back.
        """
        gnode = self._validate(node)
        if gnode is self._root:
            raise DTStructureError("Cannot detach the root of a general tree.")
        detached = self._preorder_from(gnode)
        self._unlink(gnode)
        for n in detached:
            n.detached = True
        self._pending[id(gnode)] = gnode
        self._size -= len(detached)
        return gnode

    def graft(self, node: TreeNode[T], subtree: GeneralTreeNode[T]) -> GeneralTreeNode[T]:
        """Re-attach a subtree produced by ``detach`` as the last child of *node*."""
        parent = self._validate(node)
        if self._pending.pop(id(subtree), None) is not subtree:
            raise DTInvalidNodeError(f"Only detached subtrees can be grafted: {subtree!r}")
        count = 0
        stack = [subtree]
        while stack:
            current = stack.pop()
            current.detached = False
            count += 1
            stack.extend(current.children)
        parent.add_child(subtree)
        self._size += count
        return subtree

    def reparent(self, node: TreeNode[T], new_parent: TreeNode[T]) -> GeneralTreeNode[T]:
        """Move the subtree at *node* under *new_parent*; size is unchanged."""
        gnode = self._validate(node)
        target = self._validate(new_parent)
        if gnode is self._root:
            raise DTStructureError("Cannot move the root of a general tree.")
        ancestor: GeneralTreeNode[T] | None = target
        while ancestor is not None:
            if ancestor is gnode:
                raise DTStructureError("Cannot move a node into its own subtree.")
            ancestor = ancestor.parent  # type: ignore[assignment]
        self._unlink(gnode)
        target.add_child(gnode)
        return gnode

    def _unlink(self, gnode: GeneralTreeNode[T]) -> None:
        parent = gnode.parent
        if parent is None:
            raise DTInvalidNodeError(f"Node has no parent: {gnode!r}")
        parent.children.remove(gnode)  # type: ignore[attr-defined]
        gnode.parent = None

    # -- display --

    def render(
        self,
        node: TreeNode[T] | None = None,
        key: Callable[[T], Any] | None = None,
        reverse: bool = False,
    ) -> str:
        if node is None:
            if self._root is None:
                return ""
            node = self._root
        return render_tree(self._validate(node), key=key, reverse=reverse)

    def __str__(self) -> str:
        if self._root is None:
            return "[]"
        nested: dict[int, list[Any]] = {}
        for n in self._postorder_from(self._root):
            nested[id(n)] = [n.data, *(nested.pop(id(c)) for c in n.children)]  # type: ignore[attr-defined]
        return str(nested[id(self._root)])
