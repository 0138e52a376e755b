"""Prefix Rule (prefix) - project class prefix for type names."""

from fnmatch import fnmatchcase
from types import MappingProxyType
from typing import TYPE_CHECKING

from objc_style_linter.domain.entities import (
    Declaration,
    DeclarationKind,
    RuleSettings,
    Severity,
    Violation,
)

if TYPE_CHECKING:
    from objc_style_linter.domain.scanner import ScannedFile

_TYPE_KINDS = frozenset(
    {
        DeclarationKind.CLASS,
        DeclarationKind.PROTOCOL,
        DeclarationKind.CATEGORY,
        DeclarationKind.ENUM,
    }
)


class PrefixRule:
    """
    Rule for type name prefixes.

    Type names must start with the configured project prefix (e.g. MLS)
    followed by an uppercase letter. Whether a type carries business logic is
    not inferred: `allow` exempts names (MVC/GUI glue such as AppDelegate),
    and `deny` re-includes names that `allow` would otherwise exempt.
    An empty prefix turns the rule into a no-op.
    """

    code: str = "prefix"
    description: str = "Prefix: class, protocol, category and enum names carry the project prefix."
    default_severity: Severity = Severity.WARNING
    default_enabled: bool = True
    fixable: bool = False
    parameters = MappingProxyType(
        {
            "prefix": "",
            "allow": ["AppDelegate", "SceneDelegate"],
            "deny": [],
            "include_notifications": False,
        }
    )

    def check(self, scanned: "ScannedFile", settings: RuleSettings) -> list[Violation]:
        """One violation per unprefixed type declaration."""
        prefix = settings.get("prefix")
        if not prefix:
            return []
        kinds = set(_TYPE_KINDS)
        if settings.get("include_notifications"):
            kinds.add(DeclarationKind.NOTIFICATION)

        violations: list[Violation] = []
        for decl in scanned.declarations:
            if decl.kind not in kinds or not self.requires_prefix(decl.name, settings):
                continue
            if self.has_prefix(decl.name, prefix):
                continue
            violations.append(
                Violation.at(
                    rule_id=self.code,
                    settings=settings,
                    message=self._message(decl, prefix),
                    path=decl.location.path,
                    line=decl.location.line,
                    column=decl.location.column,
                )
            )
        return violations

    @staticmethod
    def has_prefix(name: str, prefix: str) -> bool:
        """`MLSPerson` has prefix MLS; `MLSperson` and `MLS` do not."""
        if not name.startswith(prefix) or len(name) == len(prefix):
            return False
        following = name[len(prefix)]
        return following.isupper() or following.isdigit()

    @staticmethod
    def requires_prefix(name: str, settings: RuleSettings) -> bool:
        """Deny patterns win over allow patterns."""
        if any(fnmatchcase(name, pattern) for pattern in settings.get("deny")):
            return True
        return not any(fnmatchcase(name, pattern) for pattern in settings.get("allow"))

    @staticmethod
    def _message(decl: Declaration, prefix: str) -> str:
        suggestion = prefix + decl.name[:1].upper() + decl.name[1:]
        return (
            f"{decl.kind.value.capitalize()} name '{decl.name}' is missing the "
            f"'{prefix}' prefix (e.g. '{suggestion}')"
        )
