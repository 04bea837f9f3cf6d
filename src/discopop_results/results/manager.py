"""ResultManager: joins the artifacts of one .discopop directory.

The manager owns one reader per artifact and three combined collections:

    - suggestions:        pattern type  -> [CombinedSuggestion]
    - hotspots:           hotness       -> [CombinedHotspot]
    - data_dependencies:  dependent id  -> [CombinedDataDependency]

A collection is only populated while every reader it is joined from is valid:

    suggestions        FileMapping + LineMapping + AppliedStatus + Patterns
    hotspots           FileMapping + Hotspots
    data dependencies  FileMapping + LineMapping + Static dependencies

Updates are explicit. ``update_all`` re-reads everything; the six narrow
updates re-read one artifact and either rebuild the one collection built
from it or patch the fields derived from a lookup table in place.

Usage:
    from discopop_results import ResultManager

    manager = ResultManager("/path/to/project/.discopop", "/path/to/project")
    if manager.valid_suggestions:
        for pattern_type, suggestions in manager.suggestions.items():
            ...
    else:
        print(manager.error_message)

    # the patch applicator changed applied_suggestions.json and line_mapping.json
    manager.update_applied_status()
    manager.update_line_mapping()
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Optional, TypeVar

from ..artifacts import (
    AppliedStatus,
    ArtifactReader,
    FileMapping,
    Hotspots,
    LineMapping,
    StaticDependencies,
    Suggestions,
)
from ..config import DEFAULT_CONFIG, ResultsConfig
from ..exceptions import CombineError
from ..logging_config import get_logger
from .models import CombinedDataDependency, CombinedHotspot, CombinedSuggestion

logger = get_logger(__name__)

SUGGESTIONS = "suggestions"
HOTSPOTS = "hotspots"
DATA_DEPENDENCIES = "data dependencies"

R = TypeVar("R")


class ResultManager:
    """Combined, validity-tracked view over the artifacts of one analysis run.

    No public method raises: unreadable artifacts and failed joins only lower
    the matching ``valid_*`` property and show up in ``error_message``.
    """

    def __init__(
        self,
        dot_discopop: Optional[str | Path] = None,
        project_path: Optional[str | Path] = None,
        config: Optional[ResultsConfig] = None,
    ) -> None:
        self.config = config or DEFAULT_CONFIG
        self._dot_discopop = _as_str(dot_discopop)
        self._project_path = _as_str(project_path)

        self._file_mapping = FileMapping(self._dot_discopop, self.config)
        self._line_mapping = LineMapping(self._dot_discopop, self.config)
        self._applied_status = AppliedStatus(self._dot_discopop, self.config)
        self._suggestion_reader = Suggestions(self._dot_discopop, self.config)
        self._hotspot_reader = Hotspots(self._dot_discopop, self.config)
        self._static_dependencies = StaticDependencies(self._dot_discopop, self.config)

        # category -> error message of the last failed join, None if it succeeded
        self._combine_errors: dict[str, Optional[str]] = {
            SUGGESTIONS: None,
            HOTSPOTS: None,
            DATA_DEPENDENCIES: None,
        }

        self._suggestions: dict[str, list[CombinedSuggestion]] = {}
        self._hotspots: dict[str, list[CombinedHotspot]] = {}
        self._data_dependencies: dict[str, list[CombinedDataDependency]] = {}

        self._recompute_suggestions()
        self._recompute_hotspots()
        self._recompute_data_dependencies()

    # -----------------------------------------------------------------
    # State
    # -----------------------------------------------------------------

    @property
    def dot_discopop(self) -> Optional[str]:
        """The .discopop directory the results are read from."""
        return self._dot_discopop

    @property
    def project_path(self) -> Optional[str]:
        return self._project_path

    @property
    def readers(self) -> tuple[ArtifactReader, ...]:
        """All artifact readers, in error-report order."""
        return (
            self._file_mapping,
            self._line_mapping,
            self._applied_status,
            self._suggestion_reader,
            self._hotspot_reader,
            self._static_dependencies,
        )

    @property
    def suggestions(self) -> dict[str, list[CombinedSuggestion]]:
        """Combined suggestions grouped by pattern type."""
        return self._suggestions

    @property
    def hotspots(self) -> dict[str, list[CombinedHotspot]]:
        """Combined hotspots grouped by hotness (YES, NO, MAYBE)."""
        return self._hotspots

    @property
    def data_dependencies(self) -> dict[str, list[CombinedDataDependency]]:
        """Combined data dependencies grouped by dependent id."""
        return self._data_dependencies

    # -----------------------------------------------------------------
    # Validity
    # -----------------------------------------------------------------

    def _suggestion_readers_valid(self) -> bool:
        return (
            self._file_mapping.valid()
            and self._line_mapping.valid()
            and self._applied_status.valid()
            and self._suggestion_reader.valid()
        )

    def _hotspot_readers_valid(self) -> bool:
        return self._file_mapping.valid() and self._hotspot_reader.valid()

    def _data_dependency_readers_valid(self) -> bool:
        return (
            self._file_mapping.valid()
            and self._line_mapping.valid()
            and self._static_dependencies.valid()
        )

    @property
    def valid_suggestions(self) -> bool:
        return self._suggestion_readers_valid() and self._combine_errors[SUGGESTIONS] is None

    @property
    def valid_hotspots(self) -> bool:
        return self._hotspot_readers_valid() and self._combine_errors[HOTSPOTS] is None

    @property
    def valid_data_dependencies(self) -> bool:
        return (
            self._data_dependency_readers_valid()
            and self._combine_errors[DATA_DEPENDENCIES] is None
        )

    @property
    def error_message(self) -> Optional[str]:
        """One line per invalid artifact or failed join; None if all is well.

        Meant for display only, use the ``valid_*`` properties to decide.
        """
        lines = [
            f"{reader.name} invalid: {reader.error}"
            for reader in self.readers
            if not reader.valid()
        ]
        lines.extend(error for error in self._combine_errors.values() if error is not None)
        return "\n".join(lines) if lines else None

    # -----------------------------------------------------------------
    # Updates
    # -----------------------------------------------------------------

    def update_all(
        self,
        dot_discopop: Optional[str | Path] = None,
        project_path: Optional[str | Path] = None,
    ) -> None:
        """Re-read every artifact, optionally from a different directory."""
        if dot_discopop is not None:
            self._dot_discopop = _as_str(dot_discopop)
        if project_path is not None:
            self._project_path = _as_str(project_path)

        logger.info("Loading results from %s", self._dot_discopop)
        for reader in self.readers:
            reader.update(self._dot_discopop)

        self._recompute_hotspots()
        self._recompute_suggestions()
        self._recompute_data_dependencies()

    def update_suggestions(self) -> None:
        """Re-read patterns.json."""
        self._suggestion_reader.update()
        self._recompute_suggestions()

    def update_hotspots(self) -> None:
        """Re-read Hotspots.json."""
        self._hotspot_reader.update()
        self._recompute_hotspots()

    def update_data_dependencies(self) -> None:
        """Re-read static_dependencies.txt."""
        self._static_dependencies.update()
        self._recompute_data_dependencies()

    def update_file_mapping(self) -> None:
        """Re-read FileMapping.txt and re-resolve every file path."""
        self._file_mapping.update()

        if not self._file_mapping.valid():
            self._suggestions.clear()
            self._hotspots.clear()
            self._data_dependencies.clear()
            return

        get_path = self._file_mapping.get_file_path

        def patch_suggestion(record: CombinedSuggestion) -> None:
            record.file_path = get_path(record.file_id)

        def patch_hotspot(record: CombinedHotspot) -> None:
            record.file_path = get_path(record.file_id)

        def patch_dependency(record: CombinedDataDependency) -> None:
            record.file_path = get_path(record.file_id)

        self._patch(SUGGESTIONS, self._suggestions, self._recompute_suggestions, patch_suggestion)
        self._patch(HOTSPOTS, self._hotspots, self._recompute_hotspots, patch_hotspot)
        self._patch(
            DATA_DEPENDENCIES,
            self._data_dependencies,
            self._recompute_data_dependencies,
            patch_dependency,
        )

    def update_line_mapping(self) -> None:
        """Re-read line_mapping.json and re-resolve every mapped line.

        Hotspots do not depend on the line mapping being valid; their lines
        fall back to the original ones when it is not.
        """
        self._line_mapping.update()
        get_line = self._line_mapping.get_mapped_line

        def patch_hotspot(record: CombinedHotspot) -> None:
            record.mapped_start_line = get_line(record.file_id, record.original_start_line)

        if not self._line_mapping.valid():
            self._suggestions.clear()
            self._data_dependencies.clear()
            self._patch(HOTSPOTS, self._hotspots, self._recompute_hotspots, patch_hotspot)
            return

        def patch_suggestion(record: CombinedSuggestion) -> None:
            record.mapped_start_line = get_line(record.file_id, record.original_start_line)
            record.mapped_end_line = get_line(record.file_id, record.original_end_line)

        def patch_dependency(record: CombinedDataDependency) -> None:
            record.mapped_line = get_line(record.file_id, record.original_line)

        self._patch(SUGGESTIONS, self._suggestions, self._recompute_suggestions, patch_suggestion)
        self._patch(
            DATA_DEPENDENCIES,
            self._data_dependencies,
            self._recompute_data_dependencies,
            patch_dependency,
        )
        self._patch(HOTSPOTS, self._hotspots, self._recompute_hotspots, patch_hotspot)

    def update_applied_status(self) -> None:
        """Re-read applied_suggestions.json and refresh every ``applied`` flag."""
        self._applied_status.update()

        if not self._applied_status.valid():
            self._suggestions.clear()
            return

        is_applied = self._applied_status.is_applied

        def patch_suggestion(record: CombinedSuggestion) -> None:
            record.applied = is_applied(record.pattern_id)

        self._patch(SUGGESTIONS, self._suggestions, self._recompute_suggestions, patch_suggestion)

    # -----------------------------------------------------------------
    # Queries
    # -----------------------------------------------------------------

    def get_data_dependencies(self, dependent_id: str) -> list[CombinedDataDependency]:
        """All records of one dependent, empty if the id is unknown."""
        return list(self._data_dependencies.get(dependent_id, []))

    def mark_for_export(self, pattern_id: int, marked: bool = True) -> bool:
        """Set the export flag of a suggestion. Returns False if the id is unknown."""
        found = False
        for records in self._suggestions.values():
            for record in records:
                if record.pattern_id == pattern_id:
                    record.marked_for_export = marked
                    found = True
        return found

    def marked_for_export(self) -> list[int]:
        """Ids of all suggestions currently marked for export."""
        return sorted(
            record.pattern_id
            for records in self._suggestions.values()
            for record in records
            if record.marked_for_export
        )

    # -----------------------------------------------------------------
    # Joins
    # -----------------------------------------------------------------

    def _recompute_suggestions(self) -> None:
        self._rebuild(
            SUGGESTIONS,
            self._suggestions,
            self._suggestion_readers_valid,
            self._join_suggestions,
        )

    def _recompute_hotspots(self) -> None:
        self._rebuild(
            HOTSPOTS,
            self._hotspots,
            self._hotspot_readers_valid,
            self._join_hotspots,
        )

    def _recompute_data_dependencies(self) -> None:
        self._rebuild(
            DATA_DEPENDENCIES,
            self._data_dependencies,
            self._data_dependency_readers_valid,
            self._join_data_dependencies,
        )

    def _join_suggestions(self) -> dict[str, list[CombinedSuggestion]]:
        get_path = self._file_mapping.get_file_path
        get_line = self._line_mapping.get_mapped_line
        dot_discopop = self._dot_discopop or ""

        combined: dict[str, list[CombinedSuggestion]] = {}
        for pattern_type, suggestions in self._suggestion_reader.suggestions.items():
            combined[pattern_type] = [
                CombinedSuggestion(
                    pattern_id=suggestion.id,
                    type=suggestion.type,
                    file_id=suggestion.file_id,
                    file_path=get_path(suggestion.file_id),
                    original_start_line=suggestion.start_line,
                    original_end_line=suggestion.end_line,
                    mapped_start_line=get_line(suggestion.file_id, suggestion.start_line),
                    mapped_end_line=get_line(suggestion.file_id, suggestion.end_line),
                    applicable=suggestion.applicable,
                    applied=self._applied_status.is_applied(suggestion.id),
                    dot_discopop=dot_discopop,
                    pure_json=suggestion.pure_json,
                )
                for suggestion in suggestions
            ]
        return combined

    def _join_hotspots(self) -> dict[str, list[CombinedHotspot]]:
        get_path = self._file_mapping.get_file_path
        get_line = self._line_mapping.get_mapped_line

        combined: dict[str, list[CombinedHotspot]] = {}
        for hotness, hotspots in self._hotspot_reader.hotspots.items():
            combined[hotness] = [
                CombinedHotspot(
                    type=hotness,
                    file_id=hotspot.file_id,
                    file_path=get_path(hotspot.file_id),
                    original_start_line=hotspot.start_line,
                    mapped_start_line=get_line(hotspot.file_id, hotspot.start_line),
                    pure_json=hotspot.pure_json,
                )
                for hotspot in hotspots
            ]
        return combined

    def _join_data_dependencies(self) -> dict[str, list[CombinedDataDependency]]:
        get_path = self._file_mapping.get_file_path
        get_line = self._line_mapping.get_mapped_line

        combined: dict[str, list[CombinedDataDependency]] = {}
        for dependent_id, dependencies in self._static_dependencies.static_dependencies.items():
            combined[dependent_id] = [
                CombinedDataDependency(
                    id=dependent_id,
                    dependent_name=dependency.dependent_name,
                    type=dependency.type,
                    access=dependency.access,
                    file_id=dependency.file_id,
                    file_path=get_path(dependency.file_id),
                    original_line=dependency.line,
                    mapped_line=get_line(dependency.file_id, dependency.line),
                )
                for dependency in dependencies
            ]
        return combined

    def _rebuild(
        self,
        category: str,
        target: dict[str, list[R]],
        readers_valid: Callable[[], bool],
        join: Callable[[], dict[str, list[R]]],
    ) -> None:
        """Clear ``target`` and refill it from a full join if its readers are valid."""
        target.clear()
        self._combine_errors[category] = None
        if not readers_valid():
            return
        try:
            combined = join()
        except Exception as e:
            self._combine_failed(category, target, e)
            return
        target.update(combined)
        logger.debug(
            "Combined %d %s", sum(len(records) for records in target.values()), category
        )

    def _patch(
        self,
        category: str,
        target: dict[str, list[R]],
        rebuild: Callable[[], None],
        patch_record: Callable[[R], None],
    ) -> None:
        """Rewrite derived fields of every existing record in place.

        An empty collection has nothing to patch and is rebuilt with the full
        join instead, so a lookup table that becomes valid again repopulates it.
        """
        if not target:
            rebuild()
            return
        try:
            for records in target.values():
                for record in records:
                    patch_record(record)
        except Exception as e:
            self._combine_failed(category, target, e)

    def _combine_failed(self, category: str, target: dict, error: Exception) -> None:
        target.clear()
        self._combine_errors[category] = str(CombineError(category, str(error)))
        logger.error("Failed to combine %s", category, exc_info=error)


def _as_str(path: Optional[str | Path]) -> Optional[str]:
    return os.fspath(path) if path is not None else None
