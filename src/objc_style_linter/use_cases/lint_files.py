"""Use Case: Lint Files - scan and check source files concurrently."""

import logging
import os
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from objc_style_linter.domain.constants import SCAN_ERROR
from objc_style_linter.domain.engine import RuleEngine
from objc_style_linter.domain.entities import LintResult, Location, Severity, Violation
from objc_style_linter.domain.protocols import FileSystemProtocol, TelemetryPort

logger = logging.getLogger(__name__)


class ViolationCollector:
    """Append-only, lock-protected store of per-file results."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._violations: list[Violation] = []
        self._files_checked = 0
        self._scan_errors = 0

    def commit(self, violations: list[Violation], scan_errors: int, checked: bool = True) -> None:
        """Add the complete result of one file."""
        with self._lock:
            self._violations.extend(violations)
            self._files_checked += int(checked)
            self._scan_errors += scan_errors

    def snapshot(self) -> tuple[list[Violation], int, int]:
        with self._lock:
            return list(self._violations), self._files_checked, self._scan_errors


class LintFilesUseCase:
    """
    Lint every Objective-C source under the given paths.

    Each file is scanned then checked by all enabled rules on one worker
    thread; its violations are committed to the collector only once the file
    is complete. Setting `cancel_event` stops work at the next file boundary,
    and files not yet finished contribute nothing.
    """

    def __init__(
        self,
        engine: RuleEngine,
        filesystem: FileSystemProtocol,
        telemetry: TelemetryPort,
        jobs: Optional[int] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> None:
        self.engine = engine
        self.filesystem = filesystem
        self.telemetry = telemetry
        self.jobs = jobs or min(32, os.cpu_count() or 1)
        self.cancel_event = cancel_event or threading.Event()

    def discover(self, paths: list[str]) -> tuple[list[str], list[str]]:
        """Expand paths to source files. Returns (files, missing paths)."""
        files: set[str] = set()
        missing: list[str] = []
        for path in paths:
            if not self.filesystem.exists(path):
                missing.append(path)
                continue
            files.update(self.filesystem.glob_source_files(path))
        return sorted(files), missing

    def execute(self, paths: list[str]) -> LintResult:
        """Lint all files and return the collected result."""
        files, missing = self.discover(paths)
        collector = ViolationCollector()
        for path in missing:
            self.telemetry.warning(f"Path not found: {path}")
            collector.commit([self.unreadable(path, "No such file or directory")], 1, checked=False)

        self.telemetry.step(f"Linting {len(files)} file(s) with {self.jobs} worker(s)...")
        executor = ThreadPoolExecutor(max_workers=self.jobs)
        try:
            futures = [executor.submit(self._lint_file, path, collector) for path in files]
            for future in futures:
                future.result()
        except KeyboardInterrupt:
            self.cancel_event.set()
            self.telemetry.warning("Interrupted: finishing files in progress, skipping the rest.")
        finally:
            executor.shutdown(wait=True, cancel_futures=True)

        violations, files_checked, scan_errors = collector.snapshot()
        return LintResult(
            violations=violations,
            files_checked=files_checked,
            scan_error_count=scan_errors,
            cancelled=self.cancel_event.is_set(),
        )

    def _lint_file(self, path: str, collector: ViolationCollector) -> None:
        if self.cancel_event.is_set():
            return
        try:
            source = self.filesystem.read_text(path)
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Cannot read %s: %s", path, exc)
            collector.commit([self.unreadable(path, f"Cannot read file: {exc}")], 1)
            return
        logger.debug("Linting %s", path)
        violations, scan_errors = self.engine.lint_source(source, path)
        collector.commit(violations, scan_errors)

    @staticmethod
    def unreadable(path: str, reason: str) -> Violation:
        return Violation(
            rule_id=SCAN_ERROR,
            severity=Severity.ERROR,
            message=reason,
            location=Location(path, 1, 1),
        )
