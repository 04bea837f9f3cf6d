"""Summarize what a load produced, per category.

A consumer showing results needs to tell "nothing was produced" apart from
"something is broken". ``summarize`` turns the manager's validity flags and
error message into a short list of notices a UI or CLI can print as-is.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .manager import ResultManager


class Severity(str, Enum):
    INFO = "info"  # short, transient notification
    ERROR = "error"  # persistent, needs the user's attention


@dataclass(frozen=True)
class Notice:
    severity: Severity
    message: str


@dataclass
class LoadReport:
    """Outcome of loading one .discopop directory."""

    suggestions_valid: bool
    hotspots_valid: bool
    data_dependencies_valid: bool
    suggestion_count: int = 0
    hotspot_count: int = 0
    data_dependent_count: int = 0
    error_message: Optional[str] = None
    notices: list[Notice] = field(default_factory=list)

    @property
    def all_failed(self) -> bool:
        return not (self.suggestions_valid or self.hotspots_valid or self.data_dependencies_valid)

    @property
    def has_errors(self) -> bool:
        return any(notice.severity is Severity.ERROR for notice in self.notices)


def summarize(
    manager: ResultManager,
    discopop_missing_ok: bool = False,
    hotspots_missing_ok: bool = False,
    project_missing_ok: bool = False,
    quiet_success: bool = False,
) -> LoadReport:
    """Classify the current state of ``manager`` into notices.

    Args:
        manager: Manager after ``update_all``
        discopop_missing_ok: Missing suggestions / dependencies are expected
            (e.g. only hotspot detection was run)
        hotspots_missing_ok: Missing hotspots are expected
        project_missing_ok: Missing data dependencies are expected
        quiet_success: Do not emit notices for categories that loaded fine
    """
    report = LoadReport(
        suggestions_valid=manager.valid_suggestions,
        hotspots_valid=manager.valid_hotspots,
        data_dependencies_valid=manager.valid_data_dependencies,
        suggestion_count=sum(len(records) for records in manager.suggestions.values()),
        hotspot_count=sum(len(records) for records in manager.hotspots.values()),
        data_dependent_count=len(manager.data_dependencies),
        error_message=manager.error_message,
    )
    notices = report.notices
    error = report.error_message or ""

    if report.suggestions_valid and report.hotspots_valid and report.data_dependencies_valid:
        if not quiet_success:
            notices.append(
                Notice(Severity.INFO, "Loaded suggestions, hotspots and data dependencies")
            )
        return report

    if report.all_failed:
        notices.append(Notice(Severity.ERROR, f"Failed to load results: {error}"))
        return report

    if not report.suggestions_valid:
        if discopop_missing_ok:
            notices.append(Notice(Severity.INFO, "No suggestions found"))
        else:
            notices.append(Notice(Severity.ERROR, f"No suggestions found: {error}"))
    elif not quiet_success:
        notices.append(Notice(Severity.INFO, "Loaded suggestions"))

    if not report.hotspots_valid:
        if hotspots_missing_ok:
            notices.append(Notice(Severity.INFO, "No hotspots found"))
        else:
            notices.append(Notice(Severity.ERROR, f"No hotspots found: {error}"))
    elif not quiet_success:
        notices.append(Notice(Severity.INFO, "Loaded hotspots"))

    if not report.data_dependencies_valid:
        if discopop_missing_ok or project_missing_ok:
            notices.append(Notice(Severity.INFO, "No data dependencies found"))
        else:
            notices.append(Notice(Severity.ERROR, f"No data dependencies found: {error}"))
    elif not quiet_success:
        notices.append(Notice(Severity.INFO, "Loaded data dependencies"))

    return report
