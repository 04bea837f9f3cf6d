"""Tests for summarize(): turning validity into notices."""

from discopop_results.results import ResultManager, Severity, summarize


class TestSummarize:
    def test_everything_loaded(self, discopop):
        report = summarize(ResultManager(discopop.root))
        assert not report.all_failed
        assert not report.has_errors
        assert report.suggestion_count == 2
        assert report.hotspot_count == 2
        assert report.data_dependent_count == 2
        assert [n.message for n in report.notices] == [
            "Loaded suggestions, hotspots and data dependencies"
        ]

    def test_quiet_success(self, discopop):
        report = summarize(ResultManager(discopop.root), quiet_success=True)
        assert report.notices == []

    def test_everything_failed(self, empty_discopop):
        report = summarize(ResultManager(empty_discopop.root))
        assert report.all_failed
        [notice] = report.notices
        assert notice.severity is Severity.ERROR
        assert notice.message.startswith("Failed to load results: FileMapping invalid")

    def test_missing_hotspots_is_error_by_default(self, discopop):
        discopop.remove("hotspot_detection/Hotspots.json")
        report = summarize(ResultManager(discopop.root))
        errors = [n for n in report.notices if n.severity is Severity.ERROR]
        assert len(errors) == 1
        assert errors[0].message.startswith("No hotspots found: Hotspots invalid")
        assert report.hotspot_count == 0

    def test_missing_hotspots_ok(self, discopop):
        discopop.remove("hotspot_detection/Hotspots.json")
        report = summarize(ResultManager(discopop.root), hotspots_missing_ok=True)
        assert not report.has_errors
        assert [n.message for n in report.notices] == [
            "Loaded suggestions",
            "No hotspots found",
            "Loaded data dependencies",
        ]

    def test_only_hotspots_available(self, discopop):
        discopop.remove("explorer/patterns.json")
        discopop.remove("profiler/static_dependencies.txt")
        report = summarize(ResultManager(discopop.root), discopop_missing_ok=True)
        assert not report.has_errors
        assert [n.message for n in report.notices] == [
            "No suggestions found",
            "Loaded hotspots",
            "No data dependencies found",
        ]
