"""Reader for FileMapping.txt: the table of file ids used by the analysis."""

from __future__ import annotations

from pathlib import Path

from ..exceptions import ArtifactParseError
from .base import ArtifactReader

UNKNOWN_PATH = "<unknown path>"


class FileMapping(ArtifactReader):
    """Maps the small integer file ids of one analysis run to absolute paths.

    Each non-blank line holds ``<fileId>`` and ``<path>`` separated by
    whitespace (DiscoPoP writes a tab). Paths may contain spaces.
    """

    name = "FileMapping"

    def _reset(self) -> None:
        self._paths: dict[int, str] = {}

    def _locate(self, dot_discopop: Path) -> Path:
        return self._require(dot_discopop, self.config.file_mapping_file)

    def _parse(self, path: Path) -> None:
        text = path.read_text(encoding="utf-8")
        for number, raw in enumerate(text.splitlines(), start=1):
            line = raw.strip()
            if not line:
                continue
            parts = line.split(None, 1)
            if len(parts) != 2:
                raise ArtifactParseError(path, f"line {number}: expected '<id> <path>'")
            try:
                file_id = int(parts[0])
            except ValueError:
                raise ArtifactParseError(
                    path, f"line {number}: file id {parts[0]!r} is not an integer"
                ) from None
            self._paths[file_id] = parts[1].strip()

    @property
    def paths(self) -> dict[int, str]:
        """Copy of the full fileId -> path table."""
        return dict(self._paths)

    def get_file_path(self, file_id: int) -> str:
        """Resolve a file id, falling back to UNKNOWN_PATH."""
        return self._paths.get(file_id, UNKNOWN_PATH)
