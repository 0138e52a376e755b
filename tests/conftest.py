"""Pytest configuration and shared helpers.

Run pytest from this project's root; pythonpath in pyproject.toml puts src/
and the project root on sys.path so `tests.conftest` helpers are importable.
"""

from types import MappingProxyType
from unittest.mock import MagicMock

from objc_style_linter.domain.entities import RuleSettings, Severity
from objc_style_linter.domain.scanner import ScannedFile, StructuralScanner


def scan(source: str, path: str = "Sample.m") -> ScannedFile:
    """Scan an inline Objective-C snippet."""
    return StructuralScanner.scan(source, path)


def settings_for(rule: object, severity: Severity | None = None, **params: object) -> RuleSettings:
    """Enabled RuleSettings for `rule` with its default parameters, overridden by `params`."""
    parameters = dict(rule.parameters)  # type: ignore[attr-defined]
    parameters.update(params)
    return RuleSettings(
        enabled=True,
        severity=severity or rule.default_severity,  # type: ignore[attr-defined]
        parameters=MappingProxyType(parameters),
    )


def cli_required_deps(**overrides: object) -> dict[str, object]:
    """Return dependency mocks for CLIDependencies. Pass overrides to customize."""
    base: dict[str, object] = {
        "registry": MagicMock(),
        "config_source": MagicMock(),
        "telemetry": MagicMock(),
        "filesystem": MagicMock(),
        "reporter": MagicMock(),
    }
    base.update(overrides)
    return base
