"""Build the dependent index from combined data dependencies.

Two shapes are produced, both pure functions of their input:

    build_trie        directory -> file -> dependent, from INIT records
    partition_access  one dependent's records split into init / reads / writes
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import PurePosixPath

from ..artifacts.models import AccessKind
from ..logging_config import get_logger
from ..results.models import CombinedDataDependency
from .models import AccessPartition, DirectoryNode, TrieRoot

logger = get_logger(__name__)

_WRITE_KINDS = frozenset({AccessKind.WAW.value, AccessKind.WAR.value})


def build_trie(
    dependencies: Mapping[str, Iterable[CombinedDataDependency]],
    project_root: str,
) -> TrieRoot:
    """Group the declarations of all dependents by directory and file.

    Only INIT records place a dependent in the trie; the other access kinds
    describe an already declared dependent. A record whose file is not inside
    ``project_root`` (or is the root itself) is logged and kept in
    ``TrieRoot.rejected``.

    Args:
        dependencies: dependent id -> records, as in ``ResultManager.data_dependencies``
        project_root: Absolute path the file paths are made relative to

    Returns:
        The populated trie
    """
    root = TrieRoot(project_root=project_root)
    base = PurePosixPath(project_root)

    for records in dependencies.values():
        for record in records:
            if record.access != AccessKind.INIT.value:
                continue
            if not _insert(root, base, record):
                root.rejected.append(record)

    if root.rejected:
        logger.warning(
            "%d dependents could not be placed under %s", len(root.rejected), project_root
        )
    return root


def _insert(root: TrieRoot, base: PurePosixPath, record: CombinedDataDependency) -> bool:
    try:
        segments = PurePosixPath(record.file_path).relative_to(base).parts
    except ValueError:
        segments = ()

    if not segments:
        logger.warning(
            "Could not find file for dependent %s (%s): %s",
            record.dependent_name,
            record.id,
            record.file_path,
        )
        return False

    node: DirectoryNode | None = root
    for segment in segments[:-1]:
        node = node.ensure_directory(segment)
        if node is None:
            logger.warning("%s: %s is a file, not a directory", record.file_path, segment)
            return False

    file_node = node.ensure_file(segments[-1])
    if file_node is None:
        logger.warning("%s: %s is a directory, not a file", record.file_path, segments[-1])
        return False

    # A duplicate is logged by the file node; the record itself was placeable.
    file_node.add_dependent(record)
    return True


def _display_order(record: CombinedDataDependency) -> tuple[str, int]:
    return record.file_name, record.mapped_line


def partition_access(
    dependencies: Iterable[CombinedDataDependency],
    unknown_as_write: bool = False,
) -> AccessPartition:
    """Split the records of one dependent by access kind.

    Buckets are ordered by file name, then resolved line. A dependent has at
    most one declaration; if several INIT records show up, the first in that
    order is kept and the rest are logged and dropped.

    Args:
        dependencies: Records of a single dependent id
        unknown_as_write: Treat access kinds other than INIT / RAW / WAW / WAR
            as writes instead of collecting them in ``unrecognized``
    """
    partition = AccessPartition()
    inits: list[CombinedDataDependency] = []

    for record in sorted(dependencies, key=_display_order):
        if record.access == AccessKind.INIT.value:
            inits.append(record)
        elif record.access == AccessKind.RAW.value:
            partition.reads.append(record)
        elif record.access in _WRITE_KINDS or unknown_as_write:
            partition.writes.append(record)
        else:
            logger.warning(
                "Unknown access kind %r for %s at %s:%d",
                record.access,
                record.dependent_name,
                record.file_name,
                record.mapped_line,
            )
            partition.unrecognized.append(record)

    if inits:
        partition.init = inits[0]
        if len(inits) > 1:
            logger.warning(
                "Dependent %s has %d INIT records, keeping %s:%d",
                inits[0].id,
                len(inits),
                inits[0].file_name,
                inits[0].mapped_line,
            )

    return partition
