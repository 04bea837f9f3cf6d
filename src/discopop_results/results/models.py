"""Combined records: raw records joined with the file and line tables.

Records are rebuilt on every full recompute. The result manager's narrow
updates only ever rewrite the *resolved* fields (``file_path``,
``mapped_*``, ``applied``); ``file_id`` and the original line fields are
never touched after construction.
"""

from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Any


@dataclass
class CombinedSuggestion:
    pattern_id: int
    type: str
    file_id: int
    file_path: str
    original_start_line: int
    original_end_line: int
    mapped_start_line: int
    mapped_end_line: int
    applicable: bool
    applied: bool
    dot_discopop: str
    marked_for_export: bool = False
    pure_json: dict[str, Any] = field(default_factory=dict)


@dataclass
class CombinedHotspot:
    type: str  # hotness: YES / NO / MAYBE
    file_id: int
    file_path: str
    original_start_line: int
    mapped_start_line: int
    pure_json: dict[str, Any] = field(default_factory=dict)


@dataclass
class CombinedDataDependency:
    id: str  # dependent id
    dependent_name: str
    type: str
    access: str
    file_id: int
    file_path: str
    original_line: int
    mapped_line: int

    @property
    def file_name(self) -> str:
        return PurePosixPath(self.file_path).name
