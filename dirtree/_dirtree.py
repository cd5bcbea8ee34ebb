from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any

from ._binary import BinarySearchTree
from ._entry import Directory, File, FilesystemEntry, split_filename
from ._exceptions import (
    DTDuplicateNameError,
    DTInvalidNameError,
    DTNavigationError,
    DTNodeLimitExceededError,
    DTNotADirectoryError,
    DTNotFoundError,
    DTStructureError,
)
from ._general import LinkedGeneralTree
from ._node import GeneralTreeNode
from ._path import split_path, validate_name
from ._typing import DTStatResult, DTStats

logger = logging.getLogger(__name__)

EntryNode = GeneralTreeNode[FilesystemEntry]


def _by_name(entry: FilesystemEntry) -> Any:
    return entry.name


def _by_size(entry: FilesystemEntry) -> Any:
    return entry.size


def _by_created(entry: FilesystemEntry) -> Any:
    return entry.created_at


def _by_modified(entry: FilesystemEntry) -> Any:
    return entry.modified_at


def _count_nodes(node: EntryNode) -> int:
    count = 0
    stack = [node]
    while stack:
        current = stack.pop()
        count += 1
        stack.extend(current.children)
    return count


class DirectoryTree:
    """A virtual filesystem: named directories and files in a general tree.

    The tree keeps a working-directory cursor (``wd``) that relative paths
    and most operations are anchored at, an ordered clipboard for cut/paste,
    and a display sort that only affects :meth:`generate_tree_display`.
    Children are stored in insertion order and never physically reordered.

    Sibling names are unique (compared by ``name``; a file's extension is not
    part of it). The check runs on create, rename, move and paste.
    """

    def __init__(self, root_name: str = "", max_nodes: int | None = None) -> None:
        if max_nodes is not None and max_nodes < 1:
            raise ValueError(f"Invalid max_nodes value: {max_nodes!r}. Expected None or >= 1.")
        if root_name:
            validate_name(root_name)
        self._max_nodes: int | None = max_nodes
        self._tree: LinkedGeneralTree[FilesystemEntry] = LinkedGeneralTree()
        self._root: EntryNode = self._tree.add_root(Directory(root_name))
        self._wd: EntryNode = self._root
        self._clipboard: list[EntryNode] = []
        self._sort_key: Callable[[FilesystemEntry], Any] = _by_name
        self._sort_reverse: bool = False

    # -- helpers --

    def _check_capacity(self, requested: int) -> None:
        if self._max_nodes is None:
            return
        current = self._tree.size()
        if current + requested > self._max_nodes:
            raise DTNodeLimitExceededError(current, requested, self._max_nodes)

    def _assert_unique(
        self, parent: EntryNode, name: str, ignore: EntryNode | None = None
    ) -> None:
        for child in parent.children:
            if child is not ignore and child.data.name == name:
                raise DTDuplicateNameError(name, self.get_path(parent))

    def _is_ancestor_of_wd(self, node: EntryNode) -> bool:
        current: EntryNode | None = self._wd
        while current is not None:
            if current is node:
                return True
            current = current.parent  # type: ignore[assignment]
        return False

    def _validate_entry_name(self, entry: FilesystemEntry) -> None:
        validate_name(entry.name)
        if isinstance(entry, File) and entry.extension:
            validate_name(entry.extension)

    # -- accessors --

    @property
    def root(self) -> EntryNode:
        return self._root

    @property
    def tree(self) -> LinkedGeneralTree[FilesystemEntry]:
        return self._tree

    @property
    def clipboard(self) -> list[EntryNode]:
        return list(self._clipboard)

    def get_wd(self) -> EntryNode:
        return self._wd

    def is_root(self, node: EntryNode) -> bool:
        return self._tree.is_root(node)

    def get_path(self, node: EntryNode | None = None) -> str:
        """Absolute display path of *node* (default: the working directory)."""
        if node is None:
            node = self._wd
        self._tree.parent(node)
        chain: list[EntryNode] = []
        current: EntryNode | None = node
        while current is not None:
            chain.append(current)
            current = current.parent  # type: ignore[assignment]
        return "".join(str(n.data) for n in reversed(chain))

    # -- creation / removal --

    def create(self, entry: FilesystemEntry) -> EntryNode:
        """Add *entry* as a child of the working directory."""
        self._validate_entry_name(entry)
        self._assert_unique(self._wd, entry.name)
        self._check_capacity(1)
        node = self._tree.add_child(self._wd, entry)
        self._wd.data.touch()
        logger.debug("created %s in %s", entry.full_name, self.get_path(self._wd))
        return node

    def make_directory(self, path: str) -> EntryNode:
        """Create a directory at *path*; every parent must already exist."""
        is_absolute, segments = split_path(path)
        name = segments.pop()
        parent_path = ("/" if is_absolute else "") + "/".join(segments)
        previous = self.cd(parent_path)
        try:
            return self.create(Directory(name))
        finally:
            self._wd = previous

    def make_file(self, path: str, size: int = 0) -> EntryNode:
        """Create a file at *path* (``dir/stem.ext``); parents must already exist."""
        is_absolute, segments = split_path(path)
        filename = segments.pop()
        stem, extension = split_filename(filename)
        if extension is None:
            raise DTInvalidNameError(filename, "file name must have exactly one extension")
        parent_path = ("/" if is_absolute else "") + "/".join(segments)
        previous = self.cd(parent_path)
        try:
            return self.create(File(stem, extension, size))
        finally:
            self._wd = previous

    def remove(self, node: EntryNode) -> FilesystemEntry:
        """Remove *node* and its subtree. The root cannot be removed.

        When the working directory lies inside the removed subtree the cursor
        moves to the removed node's parent.
        """
        parent = self._tree.parent(node)
        relocate = self._is_ancestor_of_wd(node)
        entry = self._tree.remove(node)
        if parent is not None:
            parent.data.touch()
            if relocate:
                self._wd = parent
        logger.debug("removed %s", entry.full_name)
        return entry

    # -- rename / move --

    def rename(self, node: EntryNode, new_name: str) -> str:
        """Rename *node* in place and return its previous name."""
        parent = self._tree.parent(node)
        validate_name(new_name)
        entry = node.data
        target = new_name
        if isinstance(entry, File):
            stem, extension = split_filename(new_name)
            if extension is not None:
                validate_name(stem)
                target = stem
        if parent is not None:
            self._assert_unique(parent, target, ignore=node)
        old = entry.rename(new_name)
        if parent is not None:
            parent.data.touch()
        logger.debug("renamed %s to %s", old, entry.full_name)
        return old

    def move(self, source: EntryNode) -> EntryNode:
        """Move *source* (with its subtree) into the working directory.

        A direct child of the working directory is left where it is.
        """
        parent = self._tree.parent(source)
        if parent is self._wd:
            return source
        if source is self._wd:
            raise DTStructureError("Cannot move the working directory.")
        if parent is None:
            raise DTStructureError("Cannot move the root directory.")
        if self._is_ancestor_of_wd(source):
            raise DTStructureError(
                f"Cannot move '{self.get_path(source)}' into its own subtree."
            )
        self._assert_unique(self._wd, source.data.name, ignore=source)
        self._tree.reparent(source, self._wd)
        parent.data.touch()
        self._wd.data.touch()
        logger.debug("moved %s to %s", source.data.full_name, self.get_path(self._wd))
        return source

    # -- clipboard --

    def cut(self, items: Iterable[EntryNode]) -> None:
        """Detach *items* from the tree and append them to the clipboard.

        Every item is validated before any is detached. Subtrees stay intact
        so :meth:`paste` can re-attach them.
        """
        selected: list[EntryNode] = []
        for item in items:
            if any(item is s for s in selected):
                continue
            if self._tree.parent(item) is None:
                raise DTStructureError("Cannot cut the root directory.")
            if self._is_ancestor_of_wd(item):
                raise DTStructureError(
                    f"Cannot cut '{self.get_path(item)}': it contains the working directory."
                )
            selected.append(item)
        for item in selected:
            ancestor = item.parent
            while ancestor is not None:
                if any(ancestor is s for s in selected):
                    raise DTStructureError(
                        f"Cannot cut '{self.get_path(item)}' together with its ancestor."
                    )
                ancestor = ancestor.parent
        for item in selected:
            parent = item.parent
            self._tree.detach(item)
            parent.data.touch()  # type: ignore[union-attr]
            self._clipboard.append(item)
            logger.debug("cut %s", item.data.full_name)

    def paste(self, indices: Iterable[int]) -> list[EntryNode]:
        """Re-attach clipboard entries, by position, to the working directory.

        Indices refer to the clipboard as it was before the call. Nothing is
        pasted if any index or name is invalid.
        """
        chosen = list(indices)
        for idx in chosen:
            if not 0 <= idx < len(self._clipboard):
                raise IndexError(f"Clipboard index out of range: {idx}")
        if len(set(chosen)) != len(chosen):
            raise ValueError(f"Duplicate clipboard indices: {chosen}")
        nodes = [self._clipboard[idx] for idx in chosen]
        seen: set[str] = set()
        for node in nodes:
            name = node.data.name
            if name in seen:
                raise DTDuplicateNameError(name, self.get_path(self._wd))
            seen.add(name)
            self._assert_unique(self._wd, name)
        self._check_capacity(sum(_count_nodes(node) for node in nodes))
        for node in nodes:
            self._tree.graft(self._wd, node)
            logger.debug("pasted %s into %s", node.data.full_name, self.get_path(self._wd))
        for idx in sorted(chosen, reverse=True):
            del self._clipboard[idx]
        if nodes:
            self._wd.data.touch()
        return nodes

    # -- navigation --

    def get_node_by_path(self, path: str) -> EntryNode:
        """Resolve *path* relative to the working directory (or the root if absolute).

        ``""`` and ``"."`` segments are no-ops, ``".."`` ascends; other
        segments select the child whose display name (``name`` for a
        directory, ``name.ext`` for a file) matches.
        """
        is_absolute, segments = split_path(path)
        current = self._root if is_absolute else self._wd
        for segment in segments:
            if segment in ("", "."):
                continue
            if segment == "..":
                if current.parent is None:
                    raise DTNavigationError(f"Cannot ascend above the root: '{path}'")
                current = current.parent  # type: ignore[assignment]
                continue
            for child in current.children:
                if child.data.full_name == segment:
                    current = child
                    break
            else:
                raise DTNotFoundError(f"No such file or directory: '{path}'")
        return current

    def cd(self, target: str | EntryNode) -> EntryNode:
        """Make *target* (a path or a node) the working directory.

        Returns the previous working directory so a caller can restore it.
        """
        if isinstance(target, str):
            node = self.get_node_by_path(target)
        else:
            self._tree.parent(target)
            node = target
        if not node.data.is_dir:
            raise DTNotADirectoryError(f"Not a directory: '{self.get_path(node)}'")
        previous = self._wd
        self._wd = node
        return previous

    # -- queries --

    def search(self, name: str) -> str:
        """Find an entry called *name* at or below the working directory.

        Returns its path anchored at the working directory. When several
        entries share the name, the first in preorder wins.
        """
        bst = BinarySearchTree.from_subtree(self._tree, self._wd, key=_by_name)
        result = bst.search_result(name, self._wd)
        if result is None:
            raise DTNotFoundError(f"No item named '{name}' under '{self.get_path()}'")
        return result

    def stat(self, node: EntryNode) -> DTStatResult:
        self._tree.parent(node)
        entry = node.data
        return DTStatResult(
            name=entry.full_name,
            path=self.get_path(node),
            is_dir=entry.is_dir,
            size=entry.size,
            extension=entry.extension if isinstance(entry, File) else None,
            item_count=len(node.children),
            created_at=entry.created_at,
            modified_at=entry.modified_at,
        )

    def stats(self) -> DTStats:
        file_count = 0
        dir_count = 0
        total = 0
        for node in self._tree.preorder():
            entry = node.data
            if entry.is_dir:
                dir_count += 1
            else:
                file_count += 1
                total += entry.size
        return DTStats(
            node_count=self._tree.size(),
            file_count=file_count,
            dir_count=dir_count,
            total_file_bytes=total,
            clipboard_count=len(self._clipboard),
        )

    # -- display ordering --

    def _set_sort(self, key: Callable[[FilesystemEntry], Any], ascending: bool) -> None:
        self._sort_key = key
        self._sort_reverse = not ascending

    def sort_by_name(self, ascending: bool = True) -> None:
        self._set_sort(_by_name, ascending)

    def sort_by_size(self, ascending: bool = True) -> None:
        self._set_sort(_by_size, ascending)

    def sort_by_created_date(self, ascending: bool = True) -> None:
        self._set_sort(_by_created, ascending)

    def sort_by_modified_date(self, ascending: bool = True) -> None:
        self._set_sort(_by_modified, ascending)

    def generate_tree_display(self, node: EntryNode | None = None) -> str:
        """Box-drawing rendering of *node*'s subtree (default: the whole tree)."""
        return self._tree.render(
            node if node is not None else self._root,
            key=self._sort_key,
            reverse=self._sort_reverse,
        )

    def __str__(self) -> str:
        return self.generate_tree_display()
