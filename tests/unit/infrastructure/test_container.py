"""Unit tests for StyleLinterContainer."""

import pytest

from objc_style_linter.domain.registry import RuleRegistry
from objc_style_linter.infrastructure.config_file_loader import ConfigFileLoader
from objc_style_linter.infrastructure.di.container import StyleLinterContainer
from objc_style_linter.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from objc_style_linter.infrastructure.reporters import TerminalLintReporter
from objc_style_linter.interface.telemetry import ProjectTelemetry


class TestStyleLinterContainer:
    """Test default registrations and lookup."""

    def teardown_method(self) -> None:
        StyleLinterContainer.reset()

    def test_defaults(self) -> None:
        container = StyleLinterContainer()
        assert isinstance(container.get_rule_registry(), RuleRegistry)
        assert isinstance(container.get_config_source(), ConfigFileLoader)
        assert isinstance(container.get_telemetry_port(), ProjectTelemetry)
        assert isinstance(container.get_filesystem_gateway(), FileSystemGateway)
        assert isinstance(container.get_reporter(), TerminalLintReporter)

    def test_shared_instance(self) -> None:
        """get_instance returns one container until reset."""
        first = StyleLinterContainer.get_instance()
        assert StyleLinterContainer.get_instance() is first
        StyleLinterContainer.reset()
        assert StyleLinterContainer.get_instance() is not first

    def test_unknown_key(self) -> None:
        with pytest.raises(ValueError, match="not registered"):
            StyleLinterContainer().get("Nope")

    def test_register_singleton_replaces(self) -> None:
        container = StyleLinterContainer()
        registry = RuleRegistry([])
        container.register_singleton("RuleRegistry", registry)
        assert container.get_rule_registry() is registry
