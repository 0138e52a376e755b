from typing import TYPE_CHECKING, Any, Optional, cast

from objc_style_linter.domain.registry import RuleRegistry
from objc_style_linter.infrastructure.config_file_loader import ConfigFileLoader
from objc_style_linter.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from objc_style_linter.infrastructure.reporters import TerminalLintReporter
from objc_style_linter.interface.telemetry import ProjectTelemetry

if TYPE_CHECKING:
    from objc_style_linter.domain.protocols import (
        ConfigSourceProtocol,
        FileSystemProtocol,
        LintReporter,
        TelemetryPort,
    )


class StyleLinterContainer:
    """Dependency Injection Container for the Objective-C style linter."""

    _instance: Optional["StyleLinterContainer"] = None

    def __init__(self) -> None:
        self._singletons: dict[str, Any] = {}
        self._register_defaults()

    @classmethod
    def get_instance(cls) -> "StyleLinterContainer":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the shared instance (tests)."""
        cls._instance = None

    def _register_defaults(self) -> None:
        """Register default implementations for protocols."""
        self.register_singleton("RuleRegistry", RuleRegistry.default())
        self.register_singleton("ConfigSource", ConfigFileLoader())
        self.register_singleton(
            "TelemetryPort", ProjectTelemetry("OBJC-STYLE", "blue", "Style Sentinel Online")
        )
        self.register_singleton("FileSystemGateway", FileSystemGateway())
        self.register_singleton("LintReporter", TerminalLintReporter())

    def register_singleton(self, key: str, instance: Any) -> None:
        """Register a singleton instance."""
        self._singletons[key] = instance

    def get(self, key: str) -> Any:
        """Retrieve a dependency by key. Prefer explicit get_* methods for type safety."""
        if key in self._singletons:
            return self._singletons[key]
        raise ValueError(f"Dependency '{key}' not registered.")

    def get_rule_registry(self) -> RuleRegistry:
        return cast(RuleRegistry, self.get("RuleRegistry"))

    def get_config_source(self) -> "ConfigSourceProtocol":
        return cast("ConfigSourceProtocol", self.get("ConfigSource"))

    def get_telemetry_port(self) -> "TelemetryPort":
        """Return the telemetry/UI port."""
        return cast("TelemetryPort", self.get("TelemetryPort"))

    def get_filesystem_gateway(self) -> "FileSystemProtocol":
        return cast("FileSystemProtocol", self.get("FileSystemGateway"))

    def get_reporter(self) -> "LintReporter":
        return cast("LintReporter", self.get("LintReporter"))
