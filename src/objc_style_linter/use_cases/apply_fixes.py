"""Use Case: Apply Fixes to Source Code."""

import logging
from typing import Optional

from objc_style_linter.domain.engine import RuleEngine
from objc_style_linter.domain.entities import FixResult, SuggestedFix, Violation
from objc_style_linter.domain.fixes import FixApplier
from objc_style_linter.domain.protocols import FileSystemProtocol, TelemetryPort
from objc_style_linter.domain.report import ViolationReport
from objc_style_linter.use_cases.lint_files import LintFilesUseCase

logger = logging.getLogger(__name__)


class ApplyFixesUseCase:
    """
    Apply the suggested fixes of fixable rules to source files.

    Files are processed one at a time: read, lint, rewrite. A file is only
    written when at least one fix applies, and a `.bak` copy of the original
    is made first unless backups are disabled. Files with scan errors are left
    untouched.
    """

    def __init__(
        self,
        engine: RuleEngine,
        filesystem: FileSystemProtocol,
        telemetry: TelemetryPort,
        dry_run: bool = False,
        create_backups: bool = True,
    ) -> None:
        self.engine = engine
        self.filesystem = filesystem
        self.telemetry = telemetry
        self.dry_run = dry_run
        self.create_backups = create_backups

    def execute(self, paths: list[str]) -> FixResult:
        finder = LintFilesUseCase(self.engine, self.filesystem, self.telemetry, jobs=1)
        files, missing = finder.discover(paths)
        for path in missing:
            self.telemetry.warning(f"Path not found: {path}")

        fixes_applied = 0
        skipped = 0
        scan_errors = len(missing)
        changed: list[str] = []
        for path in files:
            outcome = self._execute_one_file(path)
            if outcome is None:
                scan_errors += 1
                continue
            applied, overlaps = outcome
            skipped += overlaps
            if applied:
                fixes_applied += applied
                changed.append(path)
        return FixResult(
            fixes_applied=fixes_applied,
            files_changed=changed,
            skipped_overlaps=skipped,
            scan_error_count=scan_errors,
        )

    def fixes_for(self, violations: list[Violation]) -> list[SuggestedFix]:
        """Suggested fixes from rules that declare themselves fixable."""
        fixes = []
        for violation in ViolationReport(violations).fixable():
            if violation.rule_id not in self.engine.registry:
                continue
            if getattr(self.engine.registry.get(violation.rule_id), "fixable", False):
                fixes.append(violation.suggested_fix)
        return fixes

    def _execute_one_file(self, path: str) -> Optional[tuple[int, int]]:
        """Returns (applied, skipped) or None if the file could not be scanned."""
        try:
            source = self.filesystem.read_text(path)
        except (OSError, UnicodeDecodeError) as exc:
            self.telemetry.error(f"Cannot read {path}: {exc}")
            return None
        violations, scan_errors = self.engine.lint_source(source, path)
        if scan_errors:
            self.telemetry.warning(f"Skipping {path}: file has scan errors.")
            return None
        fixes = self.fixes_for(violations)
        if not fixes:
            return (0, 0)

        outcome = FixApplier.apply(source, fixes)
        if outcome.applied and not self.dry_run:
            if self.create_backups:
                self.filesystem.copy_file(path, path + ".bak")
            self.filesystem.write_text(path, outcome.source)
        verb = "Would apply" if self.dry_run else "Applied"
        self.telemetry.step(f"{verb} {outcome.applied} fix(es) to {path}")
        logger.debug("%s: %d applied, %d skipped", path, outcome.applied, outcome.skipped)
        return (outcome.applied, outcome.skipped)
