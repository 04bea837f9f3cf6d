"""Raw records as read from the individual analysis artifacts.

These carry the identifiers produced by the analysis run (file ids and
original line numbers) and nothing resolved; resolution happens when the
result manager combines them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class AccessKind(str, Enum):
    """Access kind tag on a static dependency."""

    INIT = "INIT"  # initialization (declaration site)
    RAW = "RAW"  # read after write
    WAR = "WAR"  # write after read
    WAW = "WAW"  # write after write

    @classmethod
    def values(cls) -> frozenset[str]:
        return frozenset(member.value for member in cls)


class Hotness(str, Enum):
    """Hotness category of a code region."""

    YES = "YES"
    NO = "NO"
    MAYBE = "MAYBE"


@dataclass
class Suggestion:
    """One parallelization pattern from patterns.json."""

    id: int
    type: str
    file_id: int
    start_line: int
    end_line: int
    applicable: bool
    pure_json: dict[str, Any] = field(default_factory=dict)


@dataclass
class Hotspot:
    """One code region from Hotspots.json."""

    hotness: str
    file_id: int
    start_line: int
    pure_json: dict[str, Any] = field(default_factory=dict)


@dataclass
class StaticDependency:
    """One line of static_dependencies.txt."""

    dependent_name: str
    type: str
    access: str
    file_id: int
    line: int
