"""Line Length Rule (line-length) - bounded source line width."""

from types import MappingProxyType
from typing import TYPE_CHECKING

from objc_style_linter.domain.constants import DEFAULT_MAX_LINE_LENGTH
from objc_style_linter.domain.entities import RuleSettings, Severity, Violation

if TYPE_CHECKING:
    from objc_style_linter.domain.scanner import ScannedFile

_IMPORT_PREFIXES = ("#import", "#include", "@import")


class LineLengthRule:
    """Lines longer than `max` characters (line terminator excluded) are reported at column max + 1."""

    code: str = "line-length"
    description: str = "Line length: source lines must not exceed the configured maximum."
    default_severity: Severity = Severity.WARNING
    default_enabled: bool = True
    fixable: bool = False
    parameters = MappingProxyType({"max": DEFAULT_MAX_LINE_LENGTH, "ignore_imports": True})

    def check(self, scanned: "ScannedFile", settings: RuleSettings) -> list[Violation]:
        limit = settings.get("max")
        ignore_imports = settings.get("ignore_imports")
        violations: list[Violation] = []
        for number, text in enumerate(scanned.lines, start=1):
            if len(text) <= limit:
                continue
            if ignore_imports and text.lstrip().startswith(_IMPORT_PREFIXES):
                continue
            violations.append(
                Violation.at(
                    rule_id=self.code,
                    settings=settings,
                    message=f"Line is {len(text)} characters long (maximum {limit})",
                    path=scanned.path,
                    line=number,
                    column=limit + 1,
                )
            )
        return violations
