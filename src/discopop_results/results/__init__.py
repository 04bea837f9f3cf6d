"""Combined, cross-referenced views over the artifacts of a DiscoPoP run."""

from .manager import ResultManager
from .models import CombinedDataDependency, CombinedHotspot, CombinedSuggestion
from .report import LoadReport, Notice, Severity, summarize

__all__ = [
    "ResultManager",
    "CombinedSuggestion",
    "CombinedHotspot",
    "CombinedDataDependency",
    "LoadReport",
    "Notice",
    "Severity",
    "summarize",
]
