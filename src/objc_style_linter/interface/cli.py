"""CLI entry points for objc-style - Thin Controller using Typer."""

import logging
import signal
import sys
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer

from objc_style_linter.domain.config import ConfigurationLoader
from objc_style_linter.domain.engine import RuleEngine
from objc_style_linter.domain.entities import LintResult
from objc_style_linter.domain.errors import ConfigError
from objc_style_linter.domain.protocols import (
    ConfigSourceProtocol,
    FileSystemProtocol,
    LintReporter,
    TelemetryPort,
)
from objc_style_linter.domain.registry import RuleRegistry
from objc_style_linter.domain.report import ViolationReport
from objc_style_linter.use_cases.apply_fixes import ApplyFixesUseCase
from objc_style_linter.use_cases.lint_files import LintFilesUseCase

EXIT_CLEAN = 0
EXIT_VIOLATIONS = 1
EXIT_ERROR = 2
EXIT_INTERRUPTED = 130

OUTPUT_FORMATS = ("text", "json")


@dataclass(frozen=True)
class CLIDependencies:
    """Explicit dependencies for the CLI. All dependencies injected at composition root."""

    registry: RuleRegistry
    config_source: ConfigSourceProtocol
    telemetry: TelemetryPort
    filesystem: FileSystemProtocol
    reporter: LintReporter


class CLIAppFactory:
    """Creates the Typer app. No top-level functions."""

    @staticmethod
    def configure_logging(verbose: bool) -> None:
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.WARNING,
            format="%(levelname)s %(name)s: %(message)s",
            force=True,
        )

    @staticmethod
    def build_engine(
        deps: CLIDependencies,
        config: Optional[Path],
        rule: Optional[list[str]],
        max_line_length: Optional[int],
    ) -> RuleEngine:
        """Load and validate the configuration. Raises ConfigError."""
        config_dict, source = deps.config_source.load(str(config) if config else None)
        if source:
            deps.telemetry.step(f"Using configuration from {source}")
        overrides = dict(ConfigurationLoader.parse_rule_override(item) for item in rule or [])
        loader = ConfigurationLoader(
            config_dict,
            deps.registry,
            rule_overrides=overrides,
            max_line_length=max_line_length,
        )
        return RuleEngine(deps.registry, loader.rule_settings)

    @staticmethod
    def exit_code(result: LintResult) -> int:
        """Worst outcome wins: interrupted, then scan errors, then violations."""
        if result.cancelled:
            return EXIT_INTERRUPTED
        if result.has_scan_errors():
            return EXIT_ERROR
        if result.has_violations():
            return EXIT_VIOLATIONS
        return EXIT_CLEAN

    @staticmethod
    def create_app(deps: CLIDependencies) -> typer.Typer:
        """Create the Typer app with explicitly injected dependencies. No Service Locator."""
        app = typer.Typer(
            name="objc-style",
            help="Objective-C style linter. Run 'objc-style lint' to check; 'objc-style fix' to apply fixes.",
            add_completion=False,
        )

        def _load_engine(
            config: Optional[Path], rule: Optional[list[str]], max_line_length: Optional[int]
        ) -> RuleEngine:
            try:
                return CLIAppFactory.build_engine(deps, config, rule, max_line_length)
            except ConfigError as exc:
                deps.telemetry.error(f"Configuration error: {exc}")
                sys.exit(EXIT_ERROR)

        @app.command()
        def lint(
            paths: list[Path] = typer.Argument(..., help="Files or directories to lint (.h, .m, .mm)."),  # noqa: B008
            config: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file (.yml, .yaml or .toml)."),  # noqa: B008
            rule: Optional[list[str]] = typer.Option(None, "--rule", "-r", help="Enable or disable a rule: ID=on|off. Repeatable."),  # noqa: B008
            max_line_length: Optional[int] = typer.Option(None, "--max-line-length", help="Override line-length max."),
            output_format: str = typer.Option("text", "--format", "-f", help="Output format: text or json."),
            jobs: Optional[int] = typer.Option(None, "--jobs", "-j", min=1, help="Worker threads (default: CPU count)."),
            summary: bool = typer.Option(True, "--summary/--no-summary", help="Per-rule summary table (text format)."),
            verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging and progress."),
        ) -> None:
            """Check files against the style rules and print violations."""
            CLIAppFactory.configure_logging(verbose)
            if output_format not in OUTPUT_FORMATS:
                raise typer.BadParameter(
                    f"must be one of {', '.join(OUTPUT_FORMATS)}", param_hint="--format"
                )
            if verbose:
                deps.telemetry.handshake()
            engine = _load_engine(config, rule, max_line_length)

            cancel_event = threading.Event()
            use_case = LintFilesUseCase(
                engine=engine,
                filesystem=deps.filesystem,
                telemetry=deps.telemetry,
                jobs=jobs,
                cancel_event=cancel_event,
            )
            result = use_case.execute([str(p) for p in paths])
            report = ViolationReport(result.violations)
            deps.reporter.report(report, result, output_format, summary)
            sys.exit(CLIAppFactory.exit_code(result))

        @app.command()
        def fix(
            paths: list[Path] = typer.Argument(..., help="Files or directories to fix."),  # noqa: B008
            config: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file (.yml, .yaml or .toml)."),  # noqa: B008
            rule: Optional[list[str]] = typer.Option(None, "--rule", "-r", help="Enable or disable a rule: ID=on|off. Repeatable."),  # noqa: B008
            max_line_length: Optional[int] = typer.Option(None, "--max-line-length", help="Override line-length max."),
            dry_run: bool = typer.Option(False, "--dry-run", help="Report fixes without writing files."),
            no_backup: bool = typer.Option(False, "--no-backup", help="Do not write .bak copies."),
            verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging and progress."),
        ) -> None:
            """Apply the suggested fixes of fixable rules in place."""
            CLIAppFactory.configure_logging(verbose)
            if verbose:
                deps.telemetry.handshake()
            engine = _load_engine(config, rule, max_line_length)
            use_case = ApplyFixesUseCase(
                engine=engine,
                filesystem=deps.filesystem,
                telemetry=deps.telemetry,
                dry_run=dry_run,
                create_backups=not no_backup,
            )
            result = use_case.execute([str(p) for p in paths])
            deps.reporter.report_fixes(result, dry_run)
            sys.exit(EXIT_ERROR if result.scan_error_count else EXIT_CLEAN)

        @app.command()
        def rules() -> None:
            """List the available rules with their defaults."""
            deps.reporter.report_rules(deps.registry)

        return app

    @staticmethod
    def install_interrupt_handler() -> None:
        """Turn SIGTERM into KeyboardInterrupt so lint runs wind down the same way as Ctrl-C."""
        if threading.current_thread() is threading.main_thread():
            signal.signal(signal.SIGTERM, signal.default_int_handler)
