"""Domain models for rules."""

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol

from objc_style_linter.domain.entities import RuleSettings, Severity, Violation

if TYPE_CHECKING:
    from objc_style_linter.domain.scanner import ScannedFile

__all__ = [
    "Rule",
]


# -----------------------------------------------------------------------------
# Rule protocol: every rule is a stateless object whose check() is a pure
# function of (scanned file, settings). Rules never read each other's output,
# so the engine may evaluate them in any order or in parallel.
# -----------------------------------------------------------------------------


class Rule(Protocol):
    """The fundamental unit of style governance."""

    code: str
    """Rule id used in configuration and reports (e.g. 'brace-placement')."""
    description: str
    default_severity: Severity
    default_enabled: bool
    parameters: Mapping[str, Any]
    """Parameter defaults. Also the schema: unknown names and type mismatches are config errors."""

    def check(self, scanned: "ScannedFile", settings: RuleSettings) -> list[Violation]:
        """Interrogate a scanned file for a specific style breach."""
        ...

