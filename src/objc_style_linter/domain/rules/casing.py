"""Casing Rule (casing) - naming conventions per declaration kind."""

import re
from types import MappingProxyType
from typing import TYPE_CHECKING, Optional

from objc_style_linter.domain.entities import (
    Declaration,
    DeclarationKind,
    RuleSettings,
    Severity,
    Violation,
)

if TYPE_CHECKING:
    from objc_style_linter.domain.scanner import ScannedFile

LOWER_CAMEL = re.compile(r"^[a-z][a-zA-Z0-9]*$")
UPPER_CAMEL = re.compile(r"^[A-Z][a-zA-Z0-9]*$")
CONSTANT = re.compile(r"^k[A-Z][a-zA-Z0-9]*$")
# Trailing underscore is tolerated for include guards (FOO_BAR_H_).
UPPER_SNAKE = re.compile(r"^[A-Z][A-Z0-9]*(?:_[A-Z0-9]+)*_?$")

_LOWER_KINDS = frozenset(
    {
        DeclarationKind.METHOD,
        DeclarationKind.PROPERTY,
        DeclarationKind.FIELD,
        DeclarationKind.VARIABLE,
    }
)
_UPPER_KINDS = frozenset(
    {
        DeclarationKind.CLASS,
        DeclarationKind.PROTOCOL,
        DeclarationKind.CATEGORY,
        DeclarationKind.ENUM,
        DeclarationKind.FUNCTION,
        DeclarationKind.NOTIFICATION,
    }
)


class CasingRule:
    """
    Rule for identifier casing.

    lowerCamelCase: methods (every selector keyword), properties, fields,
    variables. UpperCamelCase: classes, protocols, categories, enums,
    functions, notifications. Constants: k + UpperCamelCase. Macros:
    UPPER_SNAKE_CASE.
    """

    code: str = "casing"
    description: str = (
        "Casing: identifiers must be camelCase, constants k-prefixed, macros UPPER_SNAKE_CASE."
    )
    default_severity: Severity = Severity.WARNING
    default_enabled: bool = True
    fixable: bool = False
    parameters = MappingProxyType(
        {
            "accepted_abbreviations": ["ID", "URL", "HTTP", "HTTPS", "HTML", "JSON", "PDF", "UI", "XML"],
            "allow_field_underscore": True,
            # Names fixed by the platform, such as the C entry point.
            "ignore_names": ["main"],
        }
    )

    def check(self, scanned: "ScannedFile", settings: RuleSettings) -> list[Violation]:
        """One violation per non-conforming declaration."""
        violations: list[Violation] = []
        for decl in scanned.declarations:
            problem = self.problem(decl, settings)
            if problem is None:
                continue
            violations.append(
                Violation.at(
                    rule_id=self.code,
                    settings=settings,
                    message=problem,
                    path=decl.location.path,
                    line=decl.location.line,
                    column=decl.location.column,
                )
            )
        return violations

    def problem(self, decl: Declaration, settings: RuleSettings) -> Optional[str]:
        """Describe why `decl` is misnamed, or None when it conforms."""
        if decl.name in settings.get("ignore_names"):
            return None
        kind = decl.kind
        label = kind.value
        if kind is DeclarationKind.CONSTANT:
            if not CONSTANT.match(decl.name):
                return f"Constant '{decl.name}' should be 'k' followed by UpperCamelCase"
            return None
        if kind is DeclarationKind.MACRO:
            if not UPPER_SNAKE.match(decl.name):
                return f"Macro '{decl.name}' should be UPPER_SNAKE_CASE"
            return None
        if kind in _UPPER_KINDS:
            if not UPPER_CAMEL.match(decl.name):
                return f"{label.capitalize()} name '{decl.name}' should be UpperCamelCase"
            return None
        if kind is DeclarationKind.METHOD:
            for part in decl.name.split(":"):
                if part and not self.is_lower_camel(part, settings):
                    return f"Method selector part '{part}' of '{decl.name}' should be lowerCamelCase"
            return None
        if kind in _LOWER_KINDS:
            name = decl.name
            if kind is DeclarationKind.FIELD and settings.get("allow_field_underscore"):
                name = name[1:] if name.startswith("_") else name
            if not self.is_lower_camel(name, settings):
                return f"{label.capitalize()} name '{decl.name}' should be lowerCamelCase"
        return None

    @staticmethod
    def is_lower_camel(name: str, settings: RuleSettings) -> bool:
        """lowerCamelCase, or an accepted abbreviation in capitals followed by CamelCase."""
        if LOWER_CAMEL.match(name):
            return True
        for abbreviation in settings.get("accepted_abbreviations"):
            if not name.startswith(abbreviation):
                continue
            rest = name[len(abbreviation):]
            if rest == "" or UPPER_CAMEL.match(rest) or rest.isdigit():
                return True
        return False
