import pytest

from dirtree import LinkedBinaryTree, LinkedGeneralTree
from dirtree._exceptions import DTInvalidNodeError, DTStructureError
from tests.helpers.asserts import assert_tree_consistent


def _data(nodes):
    return [n.data for n in nodes]


def _small():
    """    2
          / \\
         1   3
    """
    t = LinkedBinaryTree()
    root = t.add_root(2)
    t.add_left(root, 1)
    t.add_right(root, 3)
    return t


def test_add_root_left_right():
    t = _small()
    root = t.root()
    assert t.size() == 3
    assert t.left(root).data == 1
    assert t.right(root).data == 3
    assert t.num_children(root) == 2
    assert_tree_consistent(t)


def test_add_root_twice_raises():
    t = _small()
    with pytest.raises(DTStructureError):
        t.add_root(5)


def test_occupied_slots_raise():
    t = _small()
    root = t.root()
    with pytest.raises(DTStructureError):
        t.add_left(root, 0)
    with pytest.raises(DTStructureError):
        t.add_right(root, 4)
    assert t.size() == 3


def test_sibling():
    t = _small()
    root = t.root()
    left, right = t.left(root), t.right(root)
    assert t.sibling(left) is right
    assert t.sibling(right) is left
    assert t.sibling(root) is None


def test_traversals():
    t = _small()
    assert _data(t.preorder()) == [2, 1, 3]
    assert _data(t.postorder()) == [1, 3, 2]
    assert _data(t.inorder()) == [1, 2, 3]


def test_inorder_empty():
    assert LinkedBinaryTree().inorder() == []


def test_set_returns_old():
    t = _small()
    assert t.set(t.root(), 20) == 2
    assert t.root().data == 20


def test_general_node_rejected():
    t = _small()
    g = LinkedGeneralTree()
    with pytest.raises(DTInvalidNodeError):
        t.left(g.add_root("x"))


def test_node_from_another_binary_tree_raises():
    t = _small()
    other = _small()
    with pytest.raises(DTInvalidNodeError):
        t.add_left(other.left(other.root()), "x")
    with pytest.raises(DTInvalidNodeError):
        t.remove(other.right(other.root()))
    assert t.size() == 3
    assert other.size() == 3
    assert_tree_consistent(t)
    assert_tree_consistent(other)


def test_attached_nodes_belong_to_receiver():
    t = LinkedBinaryTree()
    root = t.add_root("r")
    donor = _small()
    donor_root = donor.root()
    t.attach(root, donor, LinkedBinaryTree())
    t.add_left(t.left(donor_root), "leaf")
    assert t.size() == 5
    with pytest.raises(DTInvalidNodeError):
        donor.parent(donor_root)
    assert_tree_consistent(t)


# ---------------------------------------------------------------------------
# attach
# ---------------------------------------------------------------------------


def test_attach_absorbs_donor_trees():
    t = LinkedBinaryTree()
    root = t.add_root("r")
    left = _small()
    right = LinkedBinaryTree()
    right.add_root("x")
    t.attach(root, left, right)
    assert t.size() == 5
    assert left.is_empty() and left.root() is None
    assert right.is_empty() and right.root() is None
    assert _data(t.preorder()) == ["r", 2, 1, 3, "x"]
    assert t.parent(t.left(root)) is root
    assert_tree_consistent(t)


def test_attach_with_empty_donor():
    t = LinkedBinaryTree()
    root = t.add_root("r")
    t.attach(root, LinkedBinaryTree(), _small())
    assert t.left(root) is None
    assert t.right(root).data == 2
    assert t.size() == 4


def test_attach_to_internal_node_raises():
    t = _small()
    with pytest.raises(DTStructureError):
        t.attach(t.root(), LinkedBinaryTree(), LinkedBinaryTree())


# ---------------------------------------------------------------------------
# remove
# ---------------------------------------------------------------------------


def test_remove_with_two_children_raises():
    t = _small()
    with pytest.raises(DTStructureError):
        t.remove(t.root())


def test_remove_leaf():
    t = _small()
    left = t.left(t.root())
    assert t.remove(left) == 1
    assert t.left(t.root()) is None
    assert t.size() == 2
    assert_tree_consistent(t)


def test_remove_splices_single_child():
    t = LinkedBinaryTree()
    root = t.add_root("a")
    b = t.add_left(root, "b")
    c = t.add_right(b, "c")
    t.remove(b)
    assert t.left(root) is c
    assert t.parent(c) is root
    assert t.size() == 2
    assert_tree_consistent(t)


def test_remove_root_promotes_child():
    t = LinkedBinaryTree()
    root = t.add_root("a")
    child = t.add_right(root, "b")
    t.remove(root)
    assert t.root() is child
    assert t.parent(child) is None
    assert t.is_root(child)


def test_removed_node_is_cleared_and_invalid():
    t = _small()
    right = t.right(t.root())
    t.remove(right)
    assert right.data is None
    assert right.left is None and right.right is None
    with pytest.raises(DTInvalidNodeError):
        t.parent(right)
    with pytest.raises(DTInvalidNodeError):
        t.add_left(right, 9)


def test_remove_last_node_empties_tree():
    t = LinkedBinaryTree()
    t.add_root(1)
    t.remove(t.root())
    assert t.is_empty()
    assert t.root() is None
