"""Unit tests for LintFilesUseCase."""

import threading
from unittest.mock import MagicMock

from objc_style_linter.domain.config import ConfigurationLoader
from objc_style_linter.domain.engine import RuleEngine
from objc_style_linter.domain.entities import Location, Severity, Violation
from objc_style_linter.domain.registry import RuleRegistry
from objc_style_linter.use_cases.lint_files import LintFilesUseCase, ViolationCollector

CLEAN = "@interface MLSPerson : NSObject\n@end\n"
BAD = "@interface bad_name : NSObject\n@end\n"


def _engine() -> RuleEngine:
    registry = RuleRegistry.default()
    return RuleEngine(registry, ConfigurationLoader({}, registry).rule_settings)


def _filesystem(sources: dict[str, str]) -> MagicMock:
    filesystem = MagicMock()
    filesystem.exists.side_effect = lambda path: path == "src" or path in sources
    filesystem.glob_source_files.side_effect = lambda path: sorted(sources) if path == "src" else [path]
    filesystem.read_text.side_effect = lambda path: sources[path]
    return filesystem


class TestLintFilesUseCase:
    """Test LintFilesUseCase discovery, linting and error paths."""

    def test_lints_every_file(self) -> None:
        """Each discovered file is checked and its violations collected."""
        filesystem = _filesystem({"src/A.m": CLEAN, "src/B.m": BAD})
        use_case = LintFilesUseCase(_engine(), filesystem, MagicMock(), jobs=2)
        result = use_case.execute(["src"])
        assert result.files_checked == 2
        assert result.scan_error_count == 0
        assert not result.cancelled
        assert [(v.location.path, v.rule_id) for v in result.violations] == [("src/B.m", "casing")]

    def test_discover_dedupes_and_sorts(self) -> None:
        """Overlapping paths produce each file once, in sorted order."""
        filesystem = _filesystem({"src/B.m": CLEAN, "src/A.m": CLEAN})
        use_case = LintFilesUseCase(_engine(), filesystem, MagicMock())
        files, missing = use_case.discover(["src/B.m", "src", "nowhere"])
        assert files == ["src/A.m", "src/B.m"]
        assert missing == ["nowhere"]

    def test_missing_path_is_scan_error(self) -> None:
        """A path that does not exist is reported and counted as a scan error."""
        telemetry = MagicMock()
        use_case = LintFilesUseCase(_engine(), _filesystem({}), telemetry)
        result = use_case.execute(["Missing.m"])
        assert result.files_checked == 0
        assert result.scan_error_count == 1
        assert result.violations[0].rule_id == "scan-error"
        assert result.violations[0].message == "No such file or directory"
        telemetry.warning.assert_called_once_with("Path not found: Missing.m")

    def test_unreadable_file(self) -> None:
        """A read failure becomes a scan-error violation for that file only."""
        filesystem = _filesystem({"A.m": CLEAN, "B.m": BAD})
        def read(path: str) -> str:
            if path == "A.m":
                raise PermissionError("denied")
            return BAD

        filesystem.read_text.side_effect = read
        result = LintFilesUseCase(_engine(), filesystem, MagicMock()).execute(["A.m", "B.m"])
        assert result.scan_error_count == 1
        by_path = {v.location.path: v for v in result.violations}
        assert by_path["A.m"].rule_id == "scan-error"
        assert by_path["A.m"].message.startswith("Cannot read file:")
        assert by_path["B.m"].rule_id == "casing"

    def test_scan_errors_counted(self) -> None:
        """Lexical errors in a file are counted and the file is still checked."""
        filesystem = _filesystem({"A.m": 'NSString *s = @"open;\n'})
        result = LintFilesUseCase(_engine(), filesystem, MagicMock()).execute(["A.m"])
        assert result.files_checked == 1
        assert result.has_scan_errors()

    def test_cancel_before_start(self) -> None:
        """A set cancel event means no file is read."""
        filesystem = _filesystem({"A.m": BAD})
        cancel = threading.Event()
        cancel.set()
        result = LintFilesUseCase(_engine(), filesystem, MagicMock(), cancel_event=cancel).execute(["A.m"])
        assert result.cancelled
        assert result.violations == []
        filesystem.read_text.assert_not_called()

    def test_interrupt_cancels_run(self) -> None:
        """An interrupt sets the cancel event; the interrupted file contributes nothing."""
        filesystem = _filesystem({"A.m": BAD, "B.m": BAD})

        def read(path: str) -> str:
            if path == "A.m":
                raise KeyboardInterrupt
            return BAD

        filesystem.read_text.side_effect = read
        telemetry = MagicMock()
        result = LintFilesUseCase(_engine(), filesystem, telemetry, jobs=1).execute(["A.m", "B.m"])
        assert result.cancelled
        assert "A.m" not in {v.location.path for v in result.violations}
        telemetry.warning.assert_called_once()


class TestViolationCollector:
    """Test ViolationCollector bookkeeping."""

    def test_commit_and_snapshot(self) -> None:
        collector = ViolationCollector()
        violation = Violation("casing", Severity.WARNING, "m", Location("a.m", 1, 1))
        collector.commit([violation], 0)
        collector.commit([], 2, checked=False)
        violations, checked, scan_errors = collector.snapshot()
        assert violations == [violation]
        assert (checked, scan_errors) == (1, 2)

    def test_concurrent_commits(self) -> None:
        """Commits from several threads are all kept."""
        collector = ViolationCollector()
        violation = Violation("casing", Severity.WARNING, "m", Location("a.m", 1, 1))

        def work() -> None:
            for _ in range(100):
                collector.commit([violation], 0)

        workers = [threading.Thread(target=work) for _ in range(4)]
        for worker in workers:
            worker.start()
        for worker in workers:
            worker.join()
        violations, checked, _ = collector.snapshot()
        assert len(violations) == checked == 400
