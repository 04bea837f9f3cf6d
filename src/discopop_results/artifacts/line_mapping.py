"""Reader for line_mapping.json: original -> current line numbers per file.

Applying a suggestion inserts pragmas and shifts the lines below them; the
patch applicator records where every original line ended up.
"""

from __future__ import annotations

import json
from pathlib import Path

from ..exceptions import ArtifactParseError
from .base import ArtifactReader


class LineMapping(ArtifactReader):
    name = "LineMapping"

    def _reset(self) -> None:
        self._lines: dict[int, dict[int, int]] = {}

    def _locate(self, dot_discopop: Path) -> Path:
        return self._require(dot_discopop, self.config.line_mapping_file)

    def _parse(self, path: Path) -> None:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ArtifactParseError(path, "expected an object keyed by file id")

        for file_id, mapping in data.items():
            if not isinstance(mapping, dict):
                raise ArtifactParseError(path, f"file {file_id}: expected an object of lines")
            self._lines[int(file_id)] = {
                int(original): int(current) for original, current in mapping.items()
            }

    def get_mapped_line(self, file_id: int, line: int) -> int:
        """Current line of ``(file_id, line)``, or ``line`` itself if unmapped."""
        return self._lines.get(file_id, {}).get(line, line)
