import logging

from ._binary import AbstractBinaryTree, BinarySearchTree, LinkedBinaryTree
from ._dirtree import DirectoryTree
from ._entry import Directory, File, FilesystemEntry
from ._exceptions import (
    DTDuplicateNameError,
    DTInvalidNameError,
    DTInvalidNodeError,
    DTNavigationError,
    DTNodeLimitExceededError,
    DTNotADirectoryError,
    DTNotFoundError,
    DTStructureError,
)
from ._format import format_size
from ._general import LinkedGeneralTree
from ._node import BinaryTreeNode, GeneralTreeNode, SearchTreeNode, TreeNode
from ._tree import AbstractTree
from ._typing import DTStatResult, DTStats

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "DirectoryTree",
    "FilesystemEntry",
    "Directory",
    "File",
    "AbstractTree",
    "AbstractBinaryTree",
    "LinkedGeneralTree",
    "LinkedBinaryTree",
    "BinarySearchTree",
    "TreeNode",
    "GeneralTreeNode",
    "BinaryTreeNode",
    "SearchTreeNode",
    "DTInvalidNodeError",
    "DTStructureError",
    "DTNodeLimitExceededError",
    "DTNavigationError",
    "DTInvalidNameError",
    "DTDuplicateNameError",
    "DTNotFoundError",
    "DTNotADirectoryError",
    "DTStats",
    "DTStatResult",
    "format_size",
]
__version__ = "0.1.0"
