"""Shared fixtures: a synthetic .discopop directory for a two-file project.

Layout of the project::

    proj/
      src/a.c          file id 1
      src/lib/b.c      file id 2

The default artifacts describe two suggestions (one applied), two hotspots,
and two dependents (``sum`` with four accesses, ``buf`` with one).
"""

import json
from pathlib import Path

import pytest

STATIC_DEPENDENCIES = """\
1:10 NOM INIT *|sum(7)
1:20 NOM RAW 1:10|sum(7)
1:21 NOM WAW 1:20|sum(7)
2:4 NOM WAR 2:3|sum(7)
2:3 NOM INIT *|buf(9)
1:5 NOM INIT *|retval(3)
1:6 NOM INIT *|this(4)
"""


class DiscopopDir:
    """Writes individual artifacts into a .discopop directory."""

    def __init__(self, root: Path, project: Path):
        self.root = root
        self.project = project
        self.root.mkdir(parents=True, exist_ok=True)

    def _write(self, relative: str, content: str) -> Path:
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    def _write_json(self, relative: str, data) -> Path:
        return self._write(relative, json.dumps(data))

    def file_mapping(self, paths: dict[int, str] | None = None) -> Path:
        if paths is None:
            paths = {
                1: str(self.project / "src" / "a.c"),
                2: str(self.project / "src" / "lib" / "b.c"),
            }
        return self._write(
            "FileMapping.txt", "".join(f"{fid}\t{path}\n" for fid, path in paths.items())
        )

    def line_mapping(self, mapping: dict | None = None) -> Path:
        if mapping is None:
            mapping = {"1": {"10": 12, "20": 23}, "2": {}}
        return self._write_json("line_mapping.json", mapping)

    def applied(self, ids: list | None = None) -> Path:
        return self._write_json(
            "patch_applicator/applied_suggestions.json", {"applied": [1] if ids is None else ids}
        )

    def patterns(self, patterns: dict | None = None, location: str = "explorer/patterns.json") -> Path:
        if patterns is None:
            patterns = {
                "do_all": [
                    {
                        "pattern_id": 1,
                        "node_id": "1:5",
                        "start_line": "1:10",
                        "end_line": "1:20",
                        "applicable_pattern": True,
                    }
                ],
                "reduction": [
                    {
                        "pattern_id": 2,
                        "node_id": "2:1",
                        "start_line": "2:3",
                        "end_line": "2:8",
                        "applicable_pattern": False,
                    }
                ],
            }
        return self._write_json(location, {"patterns": patterns})

    def hotspots(self, regions: list | None = None) -> Path:
        if regions is None:
            regions = [
                {"cu": "1:5", "fid": 1, "lineNum": 10, "hotness": "YES", "avr": 0.9},
                {"cu": "2:1", "fid": 2, "lineNum": 3, "hotness": "MAYBE", "avr": 0.2},
            ]
        return self._write_json("hotspot_detection/Hotspots.json", {"code_regions": regions})

    def static_dependencies(self, text: str = STATIC_DEPENDENCIES) -> Path:
        return self._write("profiler/static_dependencies.txt", text)

    def write_all(self) -> "DiscopopDir":
        self.file_mapping()
        self.line_mapping()
        self.applied()
        self.patterns()
        self.hotspots()
        self.static_dependencies()
        return self

    def remove(self, relative: str) -> None:
        (self.root / relative).unlink()


@pytest.fixture
def project(tmp_path) -> Path:
    path = tmp_path / "proj"
    (path / "src" / "lib").mkdir(parents=True)
    return path


@pytest.fixture
def discopop(project) -> DiscopopDir:
    """A complete, valid .discopop directory."""
    return DiscopopDir(project / ".discopop", project).write_all()


@pytest.fixture
def empty_discopop(project) -> DiscopopDir:
    """A .discopop directory with no artifacts written yet."""
    return DiscopopDir(project / ".discopop", project)


@pytest.fixture
def make_discopop():
    """Factory for additional .discopop directories."""

    def _make(root: Path, project: Path, complete: bool = True) -> DiscopopDir:
        directory = DiscopopDir(root, project)
        return directory.write_all() if complete else directory

    return _make
