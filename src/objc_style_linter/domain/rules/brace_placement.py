"""Brace Placement Rule (brace-placement) - block braces open on their own line."""

from types import MappingProxyType
from typing import TYPE_CHECKING

from objc_style_linter.domain.entities import (
    RuleSettings,
    Severity,
    SuggestedFix,
    Token,
    Violation,
)

if TYPE_CHECKING:
    from objc_style_linter.domain.scanner import ScannedFile

# A `{` right after one of these opens a literal or initialiser, not a block.
_LITERAL_PREDECESSORS = frozenset({"@", "=", ",", "(", "[", "{", ":", "?", "return"})


class BracePlacementRule:
    """
    Rule for block brace placement.

    The opening brace of every block (method and function bodies, control
    statements, @interface ivar blocks, enums, structs) must be the first
    non-blank character of its line. Dictionary literals, initialisers and
    block literals are not blocks.

    Auto-fix: move the brace to the next line at the statement's indentation.
    """

    code: str = "brace-placement"
    description: str = "Brace placement: the opening brace of a block begins a new line."
    default_severity: Severity = Severity.WARNING
    default_enabled: bool = True
    fixable: bool = True
    parameters = MappingProxyType({})

    def check(self, scanned: "ScannedFile", settings: RuleSettings) -> list[Violation]:
        """One violation per block brace that shares a line with code."""
        tokens = scanned.statement_tokens
        violations: list[Violation] = []
        openers: list[str] = []
        for idx, tok in enumerate(tokens):
            if tok.is_punct(")", "]", "}"):
                if openers:
                    openers.pop()
                continue
            if tok.is_punct("(", "["):
                openers.append(tok.text)
                continue
            if not tok.is_punct("{"):
                continue
            nested = bool(openers) and openers[-1] in ("(", "[")
            openers.append("{")
            line_text = scanned.lines[tok.line - 1]
            before = line_text[: tok.column - 1]
            if nested or not before.strip():
                continue
            if not self.is_block_brace(tokens, idx):
                continue
            violations.append(
                Violation.at(
                    rule_id=self.code,
                    settings=settings,
                    message="Opening brace of a block should begin a new line",
                    path=scanned.path,
                    line=tok.line,
                    column=tok.column,
                    suggested_fix=self._fix(tok, line_text),
                )
            )
        return violations

    @staticmethod
    def is_block_brace(tokens: list[Token], idx: int) -> bool:
        """Decide from the preceding tokens whether tokens[idx] opens a block."""
        if idx == 0:
            return True
        prev = tokens[idx - 1]
        if prev.text in _LITERAL_PREDECESSORS or prev.is_punct("^"):
            return False
        if prev.is_punct(")"):
            depth = 0
            for k in range(idx - 1, -1, -1):
                if tokens[k].is_punct(")"):
                    depth += 1
                elif tokens[k].is_punct("("):
                    depth -= 1
                    if depth == 0:
                        before_paren = tokens[k - 1] if k > 0 else None
                        if before_paren is None:
                            return True
                        # `^(args) {` block literal or `= (CGRect){...}` compound literal
                        return not (
                            before_paren.is_punct("^")
                            or before_paren.text in _LITERAL_PREDECESSORS
                        )
        return True

    @staticmethod
    def _fix(tok: Token, line_text: str) -> SuggestedFix:
        code_end = len(line_text[: tok.column - 1].rstrip())
        indent = line_text[: len(line_text) - len(line_text.lstrip())]
        return SuggestedFix(
            description="Move the opening brace to the next line",
            line=tok.line,
            start_column=code_end + 1,
            end_column=tok.column + 1,
            replacement="\n" + indent + "{",
        )
