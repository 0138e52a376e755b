"""Terminal reporter implementation: violation lines, JSON and rich summary tables."""

from typing import TYPE_CHECKING, Optional, TypedDict

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from objc_style_linter.domain.entities import FixResult, LintResult
    from objc_style_linter.domain.registry import RuleRegistry
    from objc_style_linter.domain.report import ViolationReport


class SummaryRow(TypedDict):
    """Row for the per-rule summary: rule id, count, severity of the first hit."""

    rule_id: str
    count: int
    severity: str


class TerminalLintReporter:
    """
    Prints lint results to stdout.

    Violation lines and JSON are written verbatim with typer.echo so they are
    never wrapped; the summary and rule listings are rich tables.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def report(
        self, report: "ViolationReport", result: "LintResult", output_format: str, summary: bool
    ) -> None:
        if output_format == "json":
            typer.echo(report.to_json())
            return
        for line in report.text_lines():
            typer.echo(line)
        if summary:
            self._report_summary(report, result)

    def _report_summary(self, report: "ViolationReport", result: "LintResult") -> None:
        rows = self._summary_rows(report)
        table = Table(title="Style Violations by Rule", header_style="bold blue")
        table.add_column("Rule", style="cyan")
        table.add_column("Count", justify="right", style="bold")
        table.add_column("Severity")
        for row in rows:
            table.add_row(row["rule_id"], str(row["count"]), row["severity"])
        if rows:
            self.console.print(table)
        status = "[green]clean[/]" if not rows else f"[red]{len(report)} violation(s)[/]"
        cancelled = " [yellow](cancelled)[/]" if result.cancelled else ""
        self.console.print(f"{result.files_checked} file(s) checked: {status}{cancelled}")

    @staticmethod
    def _summary_rows(report: "ViolationReport") -> list[SummaryRow]:
        severities: dict[str, str] = {}
        for violation in report.violations:
            severities.setdefault(violation.rule_id, violation.severity.value)
        return [
            SummaryRow(rule_id=rule_id, count=count, severity=severities[rule_id])
            for rule_id, count in report.counts_by_rule().items()
        ]

    def report_fixes(self, result: "FixResult", dry_run: bool) -> None:
        verb = "Would apply" if dry_run else "Applied"
        self.console.print(
            f"{verb} {result.fixes_applied} fix(es) in {len(result.files_changed)} file(s)."
        )
        for path in result.files_changed:
            typer.echo(f"  {path}")
        if result.skipped_overlaps:
            self.console.print(
                f"[yellow]{result.skipped_overlaps} overlapping fix(es) skipped; run fix again.[/]"
            )

    def report_rules(self, registry: "RuleRegistry") -> None:
        table = Table(title="Objective-C Style Rules", header_style="bold blue")
        table.add_column("Rule", style="cyan")
        table.add_column("Enabled")
        table.add_column("Severity")
        table.add_column("Fixable")
        table.add_column("Parameters")
        table.add_column("Description")
        for rule in registry:
            params = ", ".join(f"{name}={value!r}" for name, value in rule.parameters.items())
            table.add_row(
                rule.code,
                "yes" if rule.default_enabled else "no",
                rule.default_severity.value,
                "yes" if getattr(rule, "fixable", False) else "no",
                escape(params) or "-",
                rule.description,
            )
        self.console.print(table)
