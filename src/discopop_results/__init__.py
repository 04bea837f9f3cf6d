"""
DiscoPoP Results - Result aggregation for DiscoPoP analysis runs

Reads the artifacts a DiscoPoP run leaves in its ``.discopop`` directory
(suggestions, hotspots, static data dependencies, file and line tables,
applied-suggestion status) and joins them into consistent, query-ready views.
"""

__version__ = "0.3.0"

from .index import AccessPartition, TrieRoot, build_trie, partition_access
from .results import (
    CombinedDataDependency,
    CombinedHotspot,
    CombinedSuggestion,
    ResultManager,
)

__all__ = [
    "ResultManager",  # Main entry point
    "CombinedSuggestion",
    "CombinedHotspot",
    "CombinedDataDependency",
    "build_trie",
    "partition_access",
    "TrieRoot",
    "AccessPartition",
]
