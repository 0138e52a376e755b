from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from objc_style_linter.domain.entities import FixResult, LintResult
    from objc_style_linter.domain.registry import RuleRegistry
    from objc_style_linter.domain.report import ViolationReport


class TelemetryPort(Protocol):
    """Protocol for telemetry/UI updates."""

    def step(self, message: str) -> None: ...
    def error(self, message: str) -> None: ...
    def warning(self, message: str) -> None: ...
    def handshake(self) -> None: ...


class FileSystemProtocol(Protocol):
    """Protocol for filesystem operations - abstracts Path usage."""

    def exists(self, path: str) -> bool:
        """Return True if path exists (file or directory)."""
        ...

    def glob_source_files(self, path: str) -> list[str]:
        """Get all Objective-C sources (.h, .m, .mm) in path (recursive if directory)."""
        ...

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        """Read text content from a file."""
        ...

    def write_text(self, path: str, content: str, encoding: str = "utf-8") -> None:
        """Write text content to a file."""
        ...

    def copy_file(self, source: str, destination: str) -> None:
        """Copy a file, preserving metadata."""
        ...


class LintReporter(Protocol):
    """Protocol for rendering lint results."""

    def report(
        self, report: "ViolationReport", result: "LintResult", output_format: str, summary: bool
    ) -> None:
        """Print violations (and optionally a per-rule summary)."""
        ...

    def report_fixes(self, result: "FixResult", dry_run: bool) -> None:
        """Print the outcome of a fix run."""
        ...

    def report_rules(self, registry: "RuleRegistry") -> None:
        """Print the known rules with their defaults."""
        ...


class ConfigSourceProtocol(Protocol):
    """Protocol for locating and reading the rule configuration."""

    def load(self, explicit_path: Optional[str] = None) -> tuple[dict[str, object], Optional[str]]:
        """Return (config_dict, source path); ({}, None) when no config exists."""
        ...
