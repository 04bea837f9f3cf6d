"""Hierarchical index over combined data dependencies."""

from .builder import build_trie, partition_access
from .models import AccessPartition, DependentNode, DirectoryNode, FileNode, TrieRoot

__all__ = [
    "build_trie",
    "partition_access",
    "TrieRoot",
    "DirectoryNode",
    "FileNode",
    "DependentNode",
    "AccessPartition",
]
