"""Reader for Hotspots.json: the output of the hotspot detection."""

from __future__ import annotations

import json
from pathlib import Path

from ..exceptions import ArtifactParseError
from .base import ArtifactReader
from .models import Hotspot, Hotness


class Hotspots(ArtifactReader):
    """Code regions grouped by hotness (YES / NO / MAYBE).

    Only the hotness categories that actually occur become keys.
    """

    name = "Hotspots"

    def _reset(self) -> None:
        self._hotspots: dict[str, list[Hotspot]] = {}

    def _locate(self, dot_discopop: Path) -> Path:
        return self._require(dot_discopop, self.config.hotspots_file)

    def _parse(self, path: Path) -> None:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        regions = data.get("code_regions") if isinstance(data, dict) else None
        if not isinstance(regions, list):
            raise ArtifactParseError(path, "expected {'code_regions': [...]}")

        known = {h.value for h in Hotness}
        for region in regions:
            hotness = str(region["hotness"]).upper()
            if hotness not in known:
                raise ArtifactParseError(path, f"unknown hotness {region['hotness']!r}")
            self._hotspots.setdefault(hotness, []).append(
                Hotspot(
                    hotness=hotness,
                    file_id=int(region["fid"]),
                    start_line=int(region["lineNum"]),
                    pure_json=region,
                )
            )

    @property
    def hotspots(self) -> dict[str, list[Hotspot]]:
        """Hotspots grouped by hotness."""
        return self._hotspots
