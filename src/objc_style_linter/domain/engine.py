"""Rule engine: run every enabled rule over a scanned file."""

import logging
from collections.abc import Mapping

from objc_style_linter.domain.constants import INTERNAL_RULE_ERROR, SCAN_ERROR
from objc_style_linter.domain.entities import Location, RuleSettings, Severity, Violation
from objc_style_linter.domain.errors import RuleEvaluationError
from objc_style_linter.domain.registry import RuleRegistry
from objc_style_linter.domain.rules import Rule
from objc_style_linter.domain.scanner import ScannedFile, StructuralScanner

logger = logging.getLogger(__name__)


class RuleEngine:
    """
    Evaluates the enabled rules of a registry against scanned files.

    Stateless between files: `lint_source` may be called from several threads
    at once. A rule that raises does not stop the others; its failure becomes
    an `internal-rule-error` violation at the start of the file.
    """

    def __init__(self, registry: RuleRegistry, settings: Mapping[str, RuleSettings]) -> None:
        self.registry = registry
        self.settings = settings

    def enabled_rules(self) -> list[Rule]:
        return [rule for rule in self.registry if self.settings[rule.code].enabled]

    def evaluate(self, scanned: ScannedFile) -> list[Violation]:
        """Violations of all enabled rules for one file, in rule order."""
        violations: list[Violation] = []
        for rule in self.enabled_rules():
            rule_settings = self.settings[rule.code]
            try:
                violations.extend(rule.check(scanned, rule_settings))
            except Exception as exc:  # noqa: BLE001
                error = RuleEvaluationError(rule.code, scanned.path, exc)
                logger.error("%s", error, exc_info=exc)
                violations.append(
                    Violation(
                        rule_id=INTERNAL_RULE_ERROR,
                        severity=Severity.ERROR,
                        message=str(error),
                        location=Location(scanned.path, 1, 1),
                    )
                )
        return violations

    @staticmethod
    def scan_error_violations(scanned: ScannedFile) -> list[Violation]:
        """One `scan-error` violation per recoverable lexical error."""
        violations = []
        for error in scanned.errors:
            logger.warning("%s: %s", scanned.path, error)
            violations.append(
                Violation(
                    rule_id=SCAN_ERROR,
                    severity=Severity.ERROR,
                    message=error.reason,
                    location=Location(scanned.path, error.line, error.column),
                )
            )
        return violations

    def lint_source(self, source: str, path: str) -> tuple[list[Violation], int]:
        """Scan and evaluate one file. Returns (violations, scan error count)."""
        scanned = StructuralScanner.scan(source, path)
        violations = self.scan_error_violations(scanned)
        violations.extend(self.evaluate(scanned))
        return violations, len(scanned.errors)
