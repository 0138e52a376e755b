"""Domain entities: tokens, declarations, violations and run results."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Optional


class TokenKind(Enum):
    """Lexical categories produced by the scanner."""
    IDENTIFIER = "identifier"
    KEYWORD = "keyword"
    PUNCTUATION = "punctuation"
    COMMENT = "comment"
    STRING_LITERAL = "string_literal"
    NUMBER_LITERAL = "number_literal"


class DeclarationKind(Enum):
    """Named structural units recognised from source text."""
    CLASS = "class"
    PROTOCOL = "protocol"
    CATEGORY = "category"
    METHOD = "method"
    PROPERTY = "property"
    FIELD = "field"
    CONSTANT = "constant"
    ENUM = "enum"
    MACRO = "macro"
    NOTIFICATION = "notification"
    FUNCTION = "function"
    VARIABLE = "variable"


class Severity(Enum):
    """How serious a violation is."""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class Token:
    """A single token. Lines and columns are 1-based."""
    kind: TokenKind
    text: str
    line: int
    column: int

    @property
    def end_column(self) -> int:
        """Column just past the last character (single-line tokens only)."""
        return self.column + len(self.text)

    def is_punct(self, *texts: str) -> bool:
        """True if this is a punctuation token with one of the given texts."""
        return self.kind is TokenKind.PUNCTUATION and self.text in texts

    def is_keyword(self, *texts: str) -> bool:
        """True if this is a keyword token with one of the given texts."""
        return self.kind is TokenKind.KEYWORD and self.text in texts


@dataclass(frozen=True, order=True)
class Location:
    """Position inside a source file."""
    path: str
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.path}:{self.line}:{self.column}"


@dataclass(frozen=True)
class Declaration:
    """A declaration derived from a contiguous token run."""
    kind: DeclarationKind
    name: str
    location: Location
    enclosing_type: Optional[str] = None


@dataclass(frozen=True)
class SuggestedFix:
    """
    Single-line text edit.

    Replaces the half-open column span [start_column, end_column) of `line`
    with `replacement`. The replacement may contain a newline.
    """
    description: str
    line: int
    start_column: int
    end_column: int
    replacement: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "description": self.description,
            "line": self.line,
            "start_column": self.start_column,
            "end_column": self.end_column,
            "replacement": self.replacement,
        }


@dataclass(frozen=True)
class RuleSettings:
    """Per-rule configuration. Built once per run, never mutated."""
    enabled: bool
    severity: Severity
    parameters: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def get(self, name: str) -> Any:
        """Return a parameter value; every parameter has a default, so KeyError means a bug."""
        return self.parameters[name]


@dataclass(frozen=True)
class Violation:
    """A single deviation from a configured rule."""
    rule_id: str
    severity: Severity
    message: str
    location: Location
    suggested_fix: Optional[SuggestedFix] = None

    @classmethod
    def at(
        cls,
        *,
        rule_id: str,
        settings: RuleSettings,
        message: str,
        path: str,
        line: int,
        column: int,
        suggested_fix: Optional[SuggestedFix] = None,
    ) -> "Violation":
        """Build a Violation with severity taken from the rule's settings."""
        return cls(
            rule_id=rule_id,
            severity=settings.severity,
            message=message,
            location=Location(path, line, column),
            suggested_fix=suggested_fix,
        )

    @property
    def sort_key(self) -> tuple[str, int, int, str]:
        """Stable report order: path, line, column, rule id."""
        return (self.location.path, self.location.line, self.location.column, self.rule_id)

    @property
    def dedup_key(self) -> tuple[str, Location]:
        """Identity used to collapse duplicate reports."""
        return (self.rule_id, self.location)

    def format_line(self) -> str:
        """Render as `path:line:col: [rule] message`."""
        return f"{self.location}: [{self.rule_id}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for machine-readable output."""
        return {
            "path": self.location.path,
            "line": self.location.line,
            "column": self.location.column,
            "rule_id": self.rule_id,
            "severity": self.severity.value,
            "message": self.message,
            "suggested_fix": self.suggested_fix.to_dict() if self.suggested_fix else None,
        }


@dataclass(frozen=True)
class LintResult:
    """Result of a complete lint run across all files."""
    violations: list[Violation] = field(default_factory=list)
    files_checked: int = 0
    scan_error_count: int = 0
    cancelled: bool = False

    def has_violations(self) -> bool:
        """Check if any violations were found."""
        return bool(self.violations)

    def has_scan_errors(self) -> bool:
        """Check if any file could not be scanned cleanly."""
        return self.scan_error_count > 0


@dataclass(frozen=True)
class FixResult:
    """Outcome of applying suggested fixes to a set of files."""
    fixes_applied: int = 0
    files_changed: list[str] = field(default_factory=list)
    skipped_overlaps: int = 0
    scan_error_count: int = 0
