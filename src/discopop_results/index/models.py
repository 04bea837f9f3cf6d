"""Node types of the dependent index.

The trie has three node kinds::

    TrieRoot
    ├── DirectoryNode "src"
    │   ├── FileNode "a.c"
    │   │   └── DependentNode sum : Ln 12
    │   └── DirectoryNode "lib"
    │       └── FileNode "b.c"
    │           └── DependentNode buf : Ln 3
    └── ...

Directories and files create their children maps on first insert. Children
of a directory are listed by name (directories and files interleaved);
dependents of a file by resolved line.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator, Optional, Union

from ..results.models import CombinedDataDependency

logger = logging.getLogger(__name__)


@dataclass
class DependentNode:
    """Leaf: the declaration (INIT record) of one dependent."""

    dependency: CombinedDataDependency

    @property
    def id(self) -> str:
        return self.dependency.id

    @property
    def name(self) -> str:
        return self.dependency.dependent_name

    @property
    def line(self) -> int:
        return self.dependency.mapped_line

    @property
    def label(self) -> str:
        return f"{self.name} : Ln {self.line}"


@dataclass
class FileNode:
    name: str
    _dependents: Optional[dict[str, DependentNode]] = field(default=None, repr=False)

    def add_dependent(self, dependency: CombinedDataDependency) -> bool:
        """Attach a dependent. Returns False (and logs) if its id is already present."""
        if self._dependents is None:
            self._dependents = {}
        if dependency.id in self._dependents:
            logger.warning(
                "Dependent %s (%s) already present in %s, ignoring",
                dependency.id,
                dependency.dependent_name,
                self.name,
            )
            return False
        self._dependents[dependency.id] = DependentNode(dependency)
        return True

    def get_children(self) -> list[DependentNode]:
        if not self._dependents:
            return []
        return sorted(self._dependents.values(), key=lambda node: (node.line, node.name))

    def __len__(self) -> int:
        return len(self._dependents) if self._dependents else 0


@dataclass
class DirectoryNode:
    name: str
    _children: Optional[dict[str, TrieNode]] = field(default=None, repr=False)

    def ensure_directory(self, name: str) -> Optional[DirectoryNode]:
        """Child directory ``name``, created if missing. None if a file has that name."""
        child = self._ensure(name, DirectoryNode)
        return child if isinstance(child, DirectoryNode) else None

    def ensure_file(self, name: str) -> Optional[FileNode]:
        """Child file ``name``, created if missing. None if a directory has that name."""
        child = self._ensure(name, FileNode)
        return child if isinstance(child, FileNode) else None

    def _ensure(self, name: str, kind: type) -> TrieNode:
        if self._children is None:
            self._children = {}
        child = self._children.get(name)
        if child is None:
            child = kind(name)
            self._children[name] = child
        return child

    def get_children(self) -> list[TrieNode]:
        if not self._children:
            return []
        return sorted(self._children.values(), key=lambda node: node.name)

    def iter_dependents(self, prefix: str = "") -> Iterator[tuple[str, DependentNode]]:
        """Yield ``(relative file path, dependent)`` for the whole subtree, in display order."""
        for child in self.get_children():
            path = f"{prefix}{child.name}"
            if isinstance(child, FileNode):
                for dependent in child.get_children():
                    yield path, dependent
            else:
                yield from child.iter_dependents(f"{path}/")


TrieNode = Union[DirectoryNode, FileNode]


@dataclass
class TrieRoot(DirectoryNode):
    """Top of the trie. Keeps the records that could not be placed."""

    name: str = ""
    project_root: str = ""
    rejected: list[CombinedDataDependency] = field(default_factory=list)


@dataclass
class AccessPartition:
    """All records of one dependent, split by access kind.

    ``init`` is the declaration site; ``reads`` holds RAW accesses, ``writes``
    WAW and WAR. Kinds outside those four end up in ``unrecognized`` unless
    the partition was built with ``unknown_as_write``.
    """

    init: Optional[CombinedDataDependency] = None
    reads: list[CombinedDataDependency] = field(default_factory=list)
    writes: list[CombinedDataDependency] = field(default_factory=list)
    unrecognized: list[CombinedDataDependency] = field(default_factory=list)
