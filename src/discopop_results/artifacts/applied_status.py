"""Reader for applied_suggestions.json: which suggestions are applied right now."""

from __future__ import annotations

import json
from pathlib import Path

from ..exceptions import ArtifactParseError
from .base import ArtifactReader


class AppliedStatus(ArtifactReader):
    name = "AppliedStatus"

    def _reset(self) -> None:
        self._applied: set[int] = set()

    def _locate(self, dot_discopop: Path) -> Path:
        return self._require(dot_discopop, self.config.applied_status_file)

    def _parse(self, path: Path) -> None:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        applied = data.get("applied") if isinstance(data, dict) else None
        if not isinstance(applied, list):
            raise ArtifactParseError(path, "expected {'applied': [...]}")
        self._applied = {int(pattern_id) for pattern_id in applied}

    @property
    def applied(self) -> frozenset[int]:
        return frozenset(self._applied)

    def is_applied(self, pattern_id: int) -> bool:
        return pattern_id in self._applied
