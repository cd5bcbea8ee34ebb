from __future__ import annotations

from typing import Any, Generic, TypeVar

T = TypeVar("T")


class TreeNode(Generic[T]):
    """A payload slot plus a non-owning link to the parent node.

    ``owner`` is the tree that created the node, ``detached`` the tombstone
    set when the node is unlinked from it. Trees refuse to operate on
    tombstoned nodes or on nodes they do not own.
    """

    __slots__ = ("data", "parent", "detached", "owner")

    def __init__(
        self, data: T, parent: TreeNode[T] | None = None, owner: Any = None
    ) -> None:
        self.data: T = data
        self.parent: TreeNode[T] | None = parent
        self.detached: bool = False
        self.owner: Any = owner

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.data!r})"


class GeneralTreeNode(TreeNode[T]):
    __slots__ = ("children",)

    def __init__(
        self, data: T, parent: GeneralTreeNode[T] | None = None, owner: Any = None
    ) -> None:
        super().__init__(data, parent, owner)
        self.children: list[GeneralTreeNode[T]] = []

    def add_child(self, child: GeneralTreeNode[T]) -> None:
        child.parent = self
        self.children.append(child)


class BinaryTreeNode(TreeNode[T]):
    __slots__ = ("left", "right")

    def __init__(
        self,
        data: T,
        parent: BinaryTreeNode[T] | None = None,
        left: BinaryTreeNode[T] | None = None,
        right: BinaryTreeNode[T] | None = None,
        owner: Any = None,
    ) -> None:
        super().__init__(data, parent, owner)
        self.left: BinaryTreeNode[T] | None = left
        self.right: BinaryTreeNode[T] | None = right


class SearchTreeNode(BinaryTreeNode[T]):
    # general-tree node this entry was copied from, if any
    __slots__ = ("source",)

    def __init__(
        self,
        data: T,
        parent: SearchTreeNode[T] | None = None,
        source: Any = None,
        owner: Any = None,
    ) -> None:
        super().__init__(data, parent, owner=owner)
        self.source = source
