"""Terminal telemetry: progress and diagnostics on stderr via rich."""

import logging
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.text import Text

from objc_style_linter.domain.constants import OBJC_STYLE_BANNER


class ProjectTelemetry:
    """
    TelemetryPort implementation.

    Everything goes to stderr so that stdout carries only the report and can
    be piped (e.g. `--format json`).
    """

    def __init__(
        self,
        project_name: str,
        color: str = "blue",
        welcome: str = "",
        console: Optional[Console] = None,
    ) -> None:
        self.project_name = project_name
        self.color = color
        self.welcome = welcome
        self.console = console or Console(stderr=True)
        self.logger = logging.getLogger("objc_style_linter.telemetry")

    def handshake(self) -> None:
        self.console.print(Text.from_ansi(OBJC_STYLE_BANNER))
        if self.welcome:
            self.console.print(f"[bold {self.color}]{self.project_name}[/] {self.welcome}")

    def step(self, message: str) -> None:
        self.logger.debug(message)
        self.console.print(f"[{self.color}]>[/] {escape(message)}", highlight=False)

    def warning(self, message: str) -> None:
        self.logger.debug("warning: %s", message)
        self.console.print(f"[bold yellow]Warning:[/] {escape(message)}", highlight=False)

    def error(self, message: str) -> None:
        self.logger.debug("error: %s", message)
        self.console.print(f"[bold red]Error:[/] {escape(message)}", highlight=False)
