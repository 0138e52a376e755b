"""Pointer Spacing Rule (pointer-spacing) - `Type *name`, never `Type* name`."""

from types import MappingProxyType
from typing import TYPE_CHECKING

from objc_style_linter.domain.constants import C_TYPE_KEYWORDS
from objc_style_linter.domain.entities import (
    RuleSettings,
    Severity,
    SuggestedFix,
    Token,
    TokenKind,
    Violation,
)
from objc_style_linter.domain.scanner.declarations import MACRO_LIKE

if TYPE_CHECKING:
    from objc_style_linter.domain.scanner import ScannedFile

# Tokens that may sit directly before a type name in a declaration.
_TYPE_CONTEXT = frozenset({"(", ",", ";", "{", "}", ")", "<"})
# Keywords that introduce an expression, so `A * b` after them is arithmetic.
_EXPRESSION_KEYWORDS = frozenset({"return", "sizeof", "case"})
# Tokens that may follow the asterisk of a pointer type.
_AFTER_STAR = frozenset({")", "*", ">", ","})
# Keywords whose parentheses hold a declaration.
_DECLARING_KEYWORDS = frozenset({"for", "@catch"})
_CLOSERS = {")": "(", "]": "[", "}": "{"}


class PointerSpacingRule:
    """
    Rule for pointer asterisk placement.

    In a declaration the asterisk is preceded by a space and attached to the
    name: `NSString *name`, `(NSString *)`, `NSError **error`. Multiplication
    is told apart from a pointer type by the surrounding tokens: the token
    before the star must look like a type name and must itself start a
    declaration rather than continue an expression.

    Auto-fix: rewrite the `Type* name` span as `Type *name`.
    """

    code: str = "pointer-spacing"
    description: str = "Pointer spacing: asterisk binds to the variable name (`NSString *name`)."
    default_severity: Severity = Severity.WARNING
    default_enabled: bool = True
    fixable: bool = True
    parameters = MappingProxyType({})

    def check(self, scanned: "ScannedFile", settings: RuleSettings) -> list[Violation]:
        """One violation per misplaced asterisk."""
        tokens = scanned.statement_tokens
        violations: list[Violation] = []
        for idx, star in enumerate(tokens):
            if not star.is_punct("*") or idx == 0 or idx + 1 >= len(tokens):
                continue
            prev, nxt = tokens[idx - 1], tokens[idx + 1]
            if not self.is_type_position(tokens, idx):
                continue

            space_missing = (
                not prev.is_punct("*")
                and prev.line == star.line
                and prev.end_column == star.column
            )
            detached = (
                self._is_name(nxt)
                and nxt.line == star.line
                and nxt.column > star.end_column
            )
            if not (space_missing or detached):
                continue
            violations.append(
                Violation.at(
                    rule_id=self.code,
                    settings=settings,
                    message=self._message(scanned.lines[star.line - 1], prev, star, nxt),
                    path=scanned.path,
                    line=star.line,
                    column=star.column,
                    suggested_fix=self._fix(prev, star, nxt, space_missing, detached),
                )
            )
        return violations

    def is_type_position(self, tokens: list[Token], idx: int) -> bool:
        """True when tokens[idx] is the star of a pointer type, not a multiplication."""
        if not self._declarator_position(tokens, idx):
            return False
        if tokens[idx + 1].kind is not TokenKind.IDENTIFIER:
            return True
        # `Type *name` inside parentheses only declares in a parameter list.
        opener = self._enclosing_paren(tokens, idx)
        return opener is None or self._opens_parameter_list(tokens, opener)

    def _declarator_position(self, tokens: list[Token], idx: int) -> bool:
        prev = tokens[idx - 1]
        nxt = tokens[idx + 1]
        if not (self._is_name(nxt) or nxt.text in _AFTER_STAR):
            return False
        if prev.is_punct("*"):
            return idx >= 2 and self._declarator_position(tokens, idx - 1)
        if prev.is_punct(">"):
            return self._closes_generic(tokens, idx - 1)
        if not self._looks_like_type(prev):
            return False
        before = tokens[idx - 2] if idx >= 2 else None
        if before is None:
            return True
        if before.kind is TokenKind.IDENTIFIER:
            return True
        if before.kind is TokenKind.KEYWORD:
            return before.text not in _EXPRESSION_KEYWORDS
        return before.text in _TYPE_CONTEXT

    @staticmethod
    def _looks_like_type(tok: Token) -> bool:
        if tok.kind is TokenKind.KEYWORD:
            return tok.text in C_TYPE_KEYWORDS or tok.text == "const"
        if tok.kind is not TokenKind.IDENTIFIER:
            return False
        if MACRO_LIKE.match(tok.text):
            return False
        return tok.text[0].isupper() or tok.text in ("id", "instancetype") or tok.text.endswith("_t")

    @staticmethod
    def _closes_generic(tokens: list[Token], close_idx: int) -> bool:
        """`NSArray<NSString *> *` - the `>` closes a `<` that follows a type name."""
        depth = 0
        for k in range(close_idx, -1, -1):
            tok = tokens[k]
            if tok.is_punct(">"):
                depth += 1
            elif tok.is_punct(">>"):
                depth += 2
            elif tok.is_punct("<"):
                depth -= 1
                if depth == 0:
                    return k > 0 and tokens[k - 1].kind is TokenKind.IDENTIFIER
            elif tok.is_punct(";", "{", "}", "="):
                return False
        return False

    @staticmethod
    def _enclosing_paren(tokens: list[Token], idx: int) -> int | None:
        """Index of the unmatched `(` around tokens[idx] within the current statement."""
        depth = 0
        for k in range(idx - 1, -1, -1):
            tok = tokens[k]
            if tok.kind is not TokenKind.PUNCTUATION:
                continue
            if tok.text in _CLOSERS:
                depth += 1
            elif tok.text in ("(", "[", "{"):
                if depth:
                    depth -= 1
                    continue
                return k if tok.text == "(" else None
            elif depth == 0 and tok.text == ";":
                return None
        return None

    @classmethod
    def _opens_parameter_list(cls, tokens: list[Token], opener: int) -> bool:
        """`f(Type *a)`, `^(Type *a)`, `(^block)(Type *a)`, `for (Type *a in b)`, `@catch (Type *e)`."""
        if opener == 0:
            return False
        before = tokens[opener - 1]
        if before.is_punct("^", ")"):
            return True
        if before.kind is TokenKind.KEYWORD:
            return before.text in _DECLARING_KEYWORDS
        if before.kind is not TokenKind.IDENTIFIER or opener < 2:
            return False
        # A function name is itself declared: `void f(`, `NSString *f(`.
        owner = tokens[opener - 2]
        return owner.is_punct("*") or cls._looks_like_type(owner)

    @staticmethod
    def _is_name(tok: Token) -> bool:
        return tok.kind is TokenKind.IDENTIFIER or tok.is_keyword("const")

    @staticmethod
    def _message(line_text: str, prev: Token, star: Token, nxt: Token) -> str:
        if prev.line == star.line == nxt.line:
            found = line_text[prev.column - 1 : nxt.end_column - 1]
            expected = prev.text + (" " if not prev.is_punct("*") else "") + "*"
            if PointerSpacingRule._is_name(nxt):
                expected += nxt.text
            else:
                expected += " " * (nxt.column - star.end_column) + nxt.text
            return f"Pointer declaration '{found}' should be written '{expected}'"
        return "Pointer asterisk should be preceded by a space and attached to the name"

    @staticmethod
    def _fix(
        prev: Token, star: Token, nxt: Token, space_missing: bool, detached: bool
    ) -> SuggestedFix:
        start = prev.column if space_missing else star.column
        end = nxt.end_column if detached else star.end_column
        replacement = (prev.text + " " if space_missing else "") + "*" + (nxt.text if detached else "")
        return SuggestedFix(
            description=f"Rewrite as '{replacement}'",
            line=star.line,
            start_column=start,
            end_column=end,
            replacement=replacement,
        )
