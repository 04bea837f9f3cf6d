"""Reader for patterns.json: the parallelization suggestions of a run.

The optimizer writes its own patterns.json next to the explorer's; the first
location configured in ``suggestion_files`` that exists is used.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ..exceptions import ArtifactMissingError, ArtifactParseError
from .base import ArtifactReader, parse_file_line
from .models import Suggestion


class Suggestions(ArtifactReader):
    name = "Patterns"

    def _reset(self) -> None:
        self._suggestions: dict[str, list[Suggestion]] = {}

    def _locate(self, dot_discopop: Path) -> Path:
        for relative in self.config.suggestion_files:
            candidate = dot_discopop / relative
            if candidate.is_file():
                return candidate
        raise ArtifactMissingError(
            dot_discopop / Path(self.config.suggestion_files[0]).name,
            "not found in any of: " + ", ".join(self.config.suggestion_files),
        )

    def _parse(self, path: Path) -> None:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        patterns = data.get("patterns") if isinstance(data, dict) else None
        if not isinstance(patterns, dict):
            raise ArtifactParseError(path, "expected {'patterns': {<type>: [...]}}")

        for pattern_type, entries in patterns.items():
            if not isinstance(entries, list):
                raise ArtifactParseError(path, f"patterns.{pattern_type} is not a list")
            self._suggestions[pattern_type] = [
                self._to_suggestion(pattern_type, entry, path) for entry in entries
            ]

    @staticmethod
    def _to_suggestion(pattern_type: str, entry: dict[str, Any], path: Path) -> Suggestion:
        file_id, start_line = parse_file_line(entry["start_line"], path)
        end_file_id, end_line = parse_file_line(entry["end_line"], path)
        if end_file_id != file_id:
            raise ArtifactParseError(
                path, f"pattern {entry.get('pattern_id')} spans files {file_id} and {end_file_id}"
            )
        return Suggestion(
            id=int(entry["pattern_id"]),
            type=pattern_type,
            file_id=file_id,
            start_line=start_line,
            end_line=end_line,
            applicable=bool(entry.get("applicable_pattern", False)),
            pure_json=entry,
        )

    @property
    def suggestions(self) -> dict[str, list[Suggestion]]:
        """Suggestions grouped by pattern type."""
        return self._suggestions
