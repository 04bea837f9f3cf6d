"""Readers for the individual artifacts of a DiscoPoP run."""

from .applied_status import AppliedStatus
from .base import ArtifactReader
from .file_mapping import UNKNOWN_PATH, FileMapping
from .hotspots import Hotspots
from .line_mapping import LineMapping
from .models import AccessKind, Hotness, Hotspot, StaticDependency, Suggestion
from .static_dependencies import StaticDependencies
from .suggestions import Suggestions

__all__ = [
    "ArtifactReader",
    "FileMapping",
    "LineMapping",
    "AppliedStatus",
    "Suggestions",
    "Hotspots",
    "StaticDependencies",
    "UNKNOWN_PATH",
    "AccessKind",
    "Hotness",
    "Suggestion",
    "Hotspot",
    "StaticDependency",
]
