"""Tests for the individual artifact readers."""

import pytest

from discopop_results.artifacts import (
    UNKNOWN_PATH,
    AppliedStatus,
    FileMapping,
    Hotspots,
    LineMapping,
    StaticDependencies,
    Suggestions,
)
from discopop_results.artifacts.base import NO_DIRECTORY_ERROR
from discopop_results.config import ResultsConfig

ALL_READERS = [FileMapping, LineMapping, AppliedStatus, Suggestions, Hotspots, StaticDependencies]


class TestReaderContract:
    """Behaviour shared by every reader."""

    @pytest.mark.parametrize("reader_cls", ALL_READERS)
    def test_no_directory_is_invalid(self, reader_cls):
        reader = reader_cls()
        assert not reader.valid()
        assert reader.error == NO_DIRECTORY_ERROR

    @pytest.mark.parametrize("reader_cls", ALL_READERS)
    def test_missing_file_is_invalid(self, reader_cls, empty_discopop):
        reader = reader_cls(empty_discopop.root)
        assert not reader.valid()
        assert "does not exist" in reader.error
        assert reader.path is None

    @pytest.mark.parametrize("reader_cls", ALL_READERS)
    def test_valid_after_parse(self, reader_cls, discopop):
        reader = reader_cls(discopop.root)
        assert reader.valid(), reader.error
        assert reader.error is None
        assert reader.path is not None

    def test_update_reuses_last_directory(self, empty_discopop):
        reader = FileMapping(empty_discopop.root)
        assert not reader.valid()

        empty_discopop.file_mapping()
        reader.update()
        assert reader.valid()
        assert reader.dot_discopop == empty_discopop.root

    def test_becoming_invalid_drops_data(self, discopop):
        reader = FileMapping(discopop.root)
        assert reader.paths

        discopop.remove("FileMapping.txt")
        reader.update()
        assert not reader.valid()
        assert reader.paths == {}

    def test_update_is_idempotent(self, discopop):
        reader = Suggestions(discopop.root)
        first = reader.suggestions
        reader.update()
        assert reader.suggestions == first


class TestFileMapping:
    def test_resolves_paths(self, discopop):
        mapping = FileMapping(discopop.root)
        assert mapping.get_file_path(1) == str(discopop.project / "src" / "a.c")
        assert mapping.get_file_path(2) == str(discopop.project / "src" / "lib" / "b.c")

    def test_unknown_id_falls_back_to_sentinel(self, discopop):
        assert FileMapping(discopop.root).get_file_path(99) == UNKNOWN_PATH

    def test_paths_with_spaces_and_blank_lines(self, empty_discopop):
        (empty_discopop.root / "FileMapping.txt").write_text("\n1\t/p/my file.c\n\n")
        mapping = FileMapping(empty_discopop.root)
        assert mapping.valid()
        assert mapping.get_file_path(1) == "/p/my file.c"

    def test_non_integer_id_is_parse_error(self, empty_discopop):
        (empty_discopop.root / "FileMapping.txt").write_text("one\t/p/a.c\n")
        mapping = FileMapping(empty_discopop.root)
        assert not mapping.valid()
        assert "Error parsing FileMapping.txt" in mapping.error


class TestLineMapping:
    def test_mapped_line(self, discopop):
        mapping = LineMapping(discopop.root)
        assert mapping.get_mapped_line(1, 10) == 12
        assert mapping.get_mapped_line(1, 20) == 23

    def test_missing_entry_falls_back_to_original(self, discopop):
        mapping = LineMapping(discopop.root)
        assert mapping.get_mapped_line(1, 11) == 11
        assert mapping.get_mapped_line(2, 3) == 3
        assert mapping.get_mapped_line(42, 7) == 7

    def test_invalid_reader_falls_back_to_original(self, empty_discopop):
        assert LineMapping(empty_discopop.root).get_mapped_line(1, 10) == 10

    def test_malformed_json(self, empty_discopop):
        (empty_discopop.root / "line_mapping.json").write_text("{not json")
        mapping = LineMapping(empty_discopop.root)
        assert not mapping.valid()
        assert "Error parsing line_mapping.json" in mapping.error


class TestAppliedStatus:
    def test_applied_ids(self, discopop):
        status = AppliedStatus(discopop.root)
        assert status.is_applied(1)
        assert not status.is_applied(2)

    def test_string_ids_are_accepted(self, empty_discopop):
        empty_discopop.applied(["3", 4])
        assert AppliedStatus(empty_discopop.root).applied == frozenset({3, 4})

    def test_wrong_shape(self, empty_discopop):
        empty_discopop._write_json("patch_applicator/applied_suggestions.json", [1, 2])
        assert not AppliedStatus(empty_discopop.root).valid()


class TestSuggestions:
    def test_grouped_by_type(self, discopop):
        suggestions = Suggestions(discopop.root).suggestions
        assert set(suggestions) == {"do_all", "reduction"}

        do_all = suggestions["do_all"][0]
        assert do_all.id == 1
        assert do_all.file_id == 1
        assert (do_all.start_line, do_all.end_line) == (10, 20)
        assert do_all.applicable is True
        assert do_all.pure_json["node_id"] == "1:5"

    def test_first_configured_location_wins(self, discopop):
        discopop.patterns({"geometric_decomposition": []}, location="optimizer/patterns.json")
        reader = Suggestions(discopop.root)
        assert set(reader.suggestions) == {"geometric_decomposition"}
        assert reader.path == discopop.root / "optimizer" / "patterns.json"

    def test_custom_location(self, discopop):
        discopop.patterns({"pipeline": []}, location="custom/p.json")
        config = ResultsConfig(suggestion_files=("custom/p.json",))
        assert set(Suggestions(discopop.root, config).suggestions) == {"pipeline"}

    def test_bad_location_string(self, empty_discopop):
        empty_discopop.patterns(
            {"do_all": [{"pattern_id": 1, "start_line": "10", "end_line": "1:20"}]}
        )
        reader = Suggestions(empty_discopop.root)
        assert not reader.valid()
        assert "fileId:line" in reader.error

    def test_missing_key(self, empty_discopop):
        empty_discopop.patterns({"do_all": [{"start_line": "1:1", "end_line": "1:2"}]})
        assert not Suggestions(empty_discopop.root).valid()


class TestHotspots:
    def test_grouped_by_hotness(self, discopop):
        hotspots = Hotspots(discopop.root).hotspots
        assert set(hotspots) == {"YES", "MAYBE"}
        assert hotspots["YES"][0].file_id == 1
        assert hotspots["YES"][0].start_line == 10
        assert hotspots["YES"][0].pure_json["avr"] == 0.9

    def test_unknown_hotness(self, empty_discopop):
        empty_discopop.hotspots([{"fid": 1, "lineNum": 1, "hotness": "VERY"}])
        reader = Hotspots(empty_discopop.root)
        assert not reader.valid()
        assert "VERY" in reader.error


class TestStaticDependencies:
    def test_grouped_by_dependent_id(self, discopop):
        dependencies = StaticDependencies(discopop.root).static_dependencies
        assert set(dependencies) == {"7", "9"}
        assert [d.access for d in dependencies["7"]] == ["INIT", "RAW", "WAW", "WAR"]

        init = dependencies["7"][0]
        assert init.dependent_name == "sum"
        assert init.type == "NOM"
        assert (init.file_id, init.line) == (1, 10)

    def test_retval_and_this_are_dropped(self, discopop):
        dependencies = StaticDependencies(discopop.root).static_dependencies
        assert "3" not in dependencies
        assert "4" not in dependencies

    def test_unknown_access_skipped_by_default(self, empty_discopop):
        empty_discopop.static_dependencies("1:1 NOM INIT *|x(1)\n1:2 NOM FOO 1:1|x(1)\n")
        reader = StaticDependencies(empty_discopop.root)
        assert reader.valid()
        assert [d.access for d in reader.static_dependencies["1"]] == ["INIT"]
        assert reader.skipped == 1

    def test_unknown_access_kept_when_lenient(self, empty_discopop):
        empty_discopop.static_dependencies("1:1 NOM INIT *|x(1)\n1:2 NOM FOO 1:1|x(1)\n")
        config = ResultsConfig(strict_access_kinds=False)
        reader = StaticDependencies(empty_discopop.root, config)
        assert [d.access for d in reader.static_dependencies["1"]] == ["INIT", "FOO"]

    def test_repeated_whitespace(self, empty_discopop):
        empty_discopop.static_dependencies("1:1  NOM   RAW  1:1|x(1)\n")
        assert StaticDependencies(empty_discopop.root).static_dependencies["1"][0].access == "RAW"

    def test_names_with_parentheses(self, empty_discopop):
        """The id is the last parenthesised group, the name what precedes the first."""
        empty_discopop.static_dependencies(
            "1:10 NOM INIT *|sum(7)\n"
            "1:12 NOM INIT *|operator()(12)\n"
            "1:14 NOM RAW 1:12|f(a)(13)\n"
        )
        reader = StaticDependencies(empty_discopop.root)
        assert reader.valid(), reader.error
        dependencies = reader.static_dependencies
        assert set(dependencies) == {"7", "12", "13"}
        assert dependencies["12"][0].dependent_name == "operator"
        assert dependencies["13"][0].dependent_name == "f"

    def test_malformed_dependent_token(self, empty_discopop):
        empty_discopop.static_dependencies("1:1 NOM INIT *|x\n")
        reader = StaticDependencies(empty_discopop.root)
        assert not reader.valid()
        assert "name(id)" in reader.error
