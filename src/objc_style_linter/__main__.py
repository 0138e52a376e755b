"""Package entry point - composition root. Wire dependencies and run the CLI app."""

from objc_style_linter.infrastructure.di.container import StyleLinterContainer
from objc_style_linter.interface.cli import CLIAppFactory, CLIDependencies


def main() -> None:
    """Entry point: wire dependencies at composition root, create app, run."""
    container = StyleLinterContainer.get_instance()
    deps = CLIDependencies(
        registry=container.get_rule_registry(),
        config_source=container.get_config_source(),
        telemetry=container.get_telemetry_port(),
        filesystem=container.get_filesystem_gateway(),
        reporter=container.get_reporter(),
    )
    CLIAppFactory.install_interrupt_handler()
    app = CLIAppFactory.create_app(deps)
    app()


if __name__ == "__main__":
    main()
