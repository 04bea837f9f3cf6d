"""Reader for static_dependencies.txt, written by the DiscoPoP profiler.

Each line looks like::

    1:12 NOM RAW 1:9|sum(7)

i.e. ``fileId:line type access ... name(id)``. The dependent is taken from
the last ``|``-separated piece of the last token.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..exceptions import ArtifactParseError
from .base import ArtifactReader, parse_file_line
from .models import AccessKind, StaticDependency

logger = logging.getLogger(__name__)

_KNOWN_ACCESS = AccessKind.values()


class StaticDependencies(ArtifactReader):
    """Static dependencies grouped by dependent id.

    With ``strict_access_kinds`` (the default) lines whose access kind is not
    one of INIT / RAW / WAR / WAW are skipped; without it every line is kept.
    """

    name = "Static dependencies"

    def _reset(self) -> None:
        self._dependencies: dict[str, list[StaticDependency]] = {}
        self.skipped = 0

    def _locate(self, dot_discopop: Path) -> Path:
        return self._require(dot_discopop, self.config.static_dependencies_file)

    def _parse(self, path: Path) -> None:
        ignored = set(self.config.ignored_dependents)
        text = path.read_text(encoding="utf-8")

        for number, raw in enumerate(text.splitlines(), start=1):
            line = raw.strip()
            if not line:
                continue

            parts = line.split()
            if len(parts) < 4:
                raise ArtifactParseError(path, f"line {number}: too few fields")

            dependent_name, dependent_id = _split_dependent(parts[-1], path, number)
            if dependent_name in ignored:
                continue

            access = parts[2]
            if self.config.strict_access_kinds and access not in _KNOWN_ACCESS:
                logger.debug("Skipping line %d with access kind %r", number, access)
                self.skipped += 1
                continue

            file_id, source_line = parse_file_line(parts[0], path)
            self._dependencies.setdefault(dependent_id, []).append(
                StaticDependency(
                    dependent_name=dependent_name,
                    type=parts[1],
                    access=access,
                    file_id=file_id,
                    line=source_line,
                )
            )

        if self.skipped:
            logger.info("Skipped %d static dependencies with unknown access kinds", self.skipped)

    @property
    def static_dependencies(self) -> dict[str, list[StaticDependency]]:
        """Static dependencies grouped by dependent id."""
        return self._dependencies


def _split_dependent(token: str, path: Path, number: int) -> tuple[str, str]:
    """``"1:9|sum(7)"`` -> ``("sum", "7")``."""
    last = token.split("|")[-1]
    if "(" not in last:
        raise ArtifactParseError(path, f"line {number}: expected 'name(id)', got {last!r}")
    # operator()(12) -> ("operator", "12")
    name = last.split("(", 1)[0]
    dependent_id = last.rsplit("(", 1)[1].split(")")[0]
    if not name or not dependent_id:
        raise ArtifactParseError(path, f"line {number}: expected 'name(id)', got {last!r}")
    return name, dependent_id
