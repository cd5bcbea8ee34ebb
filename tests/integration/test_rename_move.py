from unittest.mock import patch

import pytest

from dirtree import DirectoryTree, Directory, File
from dirtree._exceptions import (
    DTDuplicateNameError,
    DTInvalidNameError,
    DTInvalidNodeError,
    DTNotFoundError,
    DTStructureError,
)
from tests.helpers.asserts import assert_tree_consistent, assert_unique_sibling_names


# ------------------------------------------------------------------
# rename()
# ------------------------------------------------------------------


def test_rename_directory(sample_tree):
    docs = sample_tree.get_node_by_path("/docs")
    assert sample_tree.rename(docs, "documents") == "docs"
    assert sample_tree.get_node_by_path("/documents") is docs
    with pytest.raises(DTNotFoundError):
        sample_tree.get_node_by_path("/docs")


def test_rename_file_with_extension(sample_tree):
    notes = sample_tree.get_node_by_path("/docs/notes.txt")
    assert sample_tree.rename(notes, "summary.md") == "notes.txt"
    assert sample_tree.get_node_by_path("/docs/summary.md") is notes


def test_rename_file_stem_only(sample_tree):
    notes = sample_tree.get_node_by_path("/docs/notes.txt")
    sample_tree.rename(notes, "todo")
    assert sample_tree.get_node_by_path("/docs/todo.txt") is notes


def test_rename_to_sibling_name_raises(sample_tree):
    notes = sample_tree.get_node_by_path("/docs/notes.txt")
    with pytest.raises(DTDuplicateNameError):
        sample_tree.rename(notes, "drafts")
    assert notes.data.full_name == "notes.txt"


def test_rename_file_stem_clash_raises(sample_tree):
    notes = sample_tree.get_node_by_path("/docs/notes.txt")
    with pytest.raises(DTDuplicateNameError):
        sample_tree.rename(notes, "drafts.txt")


def test_rename_to_own_name_is_allowed(sample_tree):
    docs = sample_tree.get_node_by_path("/docs")
    assert sample_tree.rename(docs, "docs") == "docs"


def test_rename_frees_old_name(sample_tree):
    docs = sample_tree.get_node_by_path("/docs")
    sample_tree.rename(docs, "documents")
    sample_tree.create(Directory("docs"))
    with pytest.raises(DTDuplicateNameError):
        sample_tree.create(Directory("documents"))
    assert_unique_sibling_names(sample_tree)


@pytest.mark.parametrize("new_name", ["", "a/b", ".txt"])
def test_rename_invalid_name_raises(sample_tree, new_name):
    notes = sample_tree.get_node_by_path("/docs/notes.txt")
    with pytest.raises(DTInvalidNameError):
        sample_tree.rename(notes, new_name)
    assert notes.data.full_name == "notes.txt"


def test_rename_root(sample_tree):
    sample_tree.rename(sample_tree.root, "C:")
    assert sample_tree.get_path() == "C:/"


def test_rename_refreshes_timestamps(dtree):
    with patch("time.time") as mock_time:
        mock_time.return_value = 1000.0
        node = dtree.create(File("a", "txt"))
        mock_time.return_value = 2000.0
        dtree.rename(node, "b")
    assert node.data.modified_at == 2000.0
    assert node.data.created_at == 1000.0
    assert dtree.root.data.modified_at == 2000.0


# ------------------------------------------------------------------
# move()
# ------------------------------------------------------------------


def test_move_file_into_wd(sample_tree):
    readme = sample_tree.get_node_by_path("/readme.md")
    previous = sample_tree.cd("/docs")
    assert previous is sample_tree.root
    sample_tree.move(readme)
    assert sample_tree.get_node_by_path("/docs/readme.md") is readme
    assert sample_tree.tree.size() == 5
    assert_tree_consistent(sample_tree.tree)


def test_move_directory_keeps_subtree(sample_tree):
    sample_tree.make_directory("/archive")
    docs = sample_tree.get_node_by_path("/docs")
    sample_tree.cd("/archive")
    sample_tree.move(docs)
    assert sample_tree.get_node_by_path("/archive/docs/notes.txt").data.size == 120
    assert_tree_consistent(sample_tree.tree)


def test_move_wd_raises(sample_tree):
    sample_tree.cd("/docs")
    with pytest.raises(DTStructureError):
        sample_tree.move(sample_tree.get_wd())


def test_move_root_raises(sample_tree):
    sample_tree.cd("/docs")
    with pytest.raises(DTStructureError):
        sample_tree.move(sample_tree.root)


def test_move_ancestor_into_descendant_raises(sample_tree):
    docs = sample_tree.get_node_by_path("/docs")
    sample_tree.cd("/docs/drafts")
    with pytest.raises(DTStructureError):
        sample_tree.move(docs)
    assert sample_tree.get_node_by_path("/docs/drafts") is sample_tree.get_wd()
    assert_tree_consistent(sample_tree.tree)


def test_move_detached_node_raises(sample_tree):
    readme = sample_tree.get_node_by_path("/readme.md")
    sample_tree.remove(readme)
    sample_tree.cd("/docs")
    with pytest.raises(DTInvalidNodeError):
        sample_tree.move(readme)


def test_move_name_collision_raises(sample_tree):
    sample_tree.make_file("/notes.md")
    notes = sample_tree.get_node_by_path("/notes.md")
    sample_tree.cd("/docs")
    with pytest.raises(DTDuplicateNameError):
        sample_tree.move(notes)
    assert sample_tree.get_node_by_path("/notes.md") is notes
    assert_unique_sibling_names(sample_tree)


def test_move_within_same_directory_is_allowed(sample_tree):
    readme = sample_tree.get_node_by_path("/readme.md")
    sample_tree.move(readme)
    assert [c.data.name for c in sample_tree.root.children] == ["docs", "readme"]


def test_move_touches_both_directories(sample_tree):
    readme = sample_tree.get_node_by_path("/readme.md")
    docs = sample_tree.get_node_by_path("/docs")
    with patch("time.time", return_value=5000.0):
        sample_tree.cd(docs)
        sample_tree.move(readme)
    assert docs.data.modified_at == 5000.0
    assert sample_tree.root.data.modified_at == 5000.0


def test_move_child_of_wd_keeps_order_and_timestamps(sample_tree):
    docs = sample_tree.get_node_by_path("/docs")
    stamp = sample_tree.root.data.modified_at
    with patch("time.time", return_value=stamp + 100):
        assert sample_tree.move(docs) is docs
    assert [c.data.name for c in sample_tree.root.children] == ["docs", "readme"]
    assert sample_tree.root.data.modified_at == stamp


def test_move_node_from_another_tree_raises(sample_tree):
    other = DirectoryTree()
    foreign = other.create(Directory("elsewhere"))
    with pytest.raises(DTInvalidNodeError):
        sample_tree.move(foreign)
    assert sample_tree.tree.size() == 5
    assert other.tree.size() == 2
    assert_tree_consistent(sample_tree.tree)
    assert_tree_consistent(other.tree)
