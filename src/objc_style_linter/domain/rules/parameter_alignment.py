"""Parameter Alignment Rule (parameter-alignment) - colon-aligned continuation lines."""

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Iterator, Optional

from objc_style_linter.domain.entities import (
    RuleSettings,
    Severity,
    SuggestedFix,
    Token,
    TokenKind,
    Violation,
)

if TYPE_CHECKING:
    from objc_style_linter.domain.scanner import ScannedFile

_OPENERS = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = frozenset(_OPENERS.values())


@dataclass(frozen=True)
class SelectorKeyword:
    """One `keyword:` part of a multi-part selector."""

    name: Token
    colon: Token
    starts_line: bool


class ParameterAlignmentRule:
    """
    Rule for multi-line method signatures and message sends.

    When a selector spans several lines, the colon of every continuation
    keyword must sit in the same column as the colon of the first keyword.

    With `standard_method_exception` enabled, a continuation keyword too long
    to align (it would start at or before the first line's indentation) may
    instead be indented `indent_width` columns past the first line.

    Auto-fix: re-indent the continuation line.
    """

    code: str = "parameter-alignment"
    description: str = "Parameter alignment: continuation lines align their colons with the first."
    default_severity: Severity = Severity.WARNING
    default_enabled: bool = True
    fixable: bool = True
    parameters = MappingProxyType({"standard_method_exception": False, "indent_width": 4})

    def check(self, scanned: "ScannedFile", settings: RuleSettings) -> list[Violation]:
        """One violation per misaligned continuation keyword."""
        tokens = scanned.statement_tokens
        violations: list[Violation] = []
        for keywords in self._selectors(tokens):
            violations.extend(self._check_selector(scanned, keywords, settings))
        return violations

    # ------------------------------------------------------------------
    # Selector discovery
    # ------------------------------------------------------------------

    def _selectors(self, tokens: list[Token]) -> Iterator[list[SelectorKeyword]]:
        """Yield the keyword list of every method signature and message send."""
        brace_depth = 0
        for idx, tok in enumerate(tokens):
            if tok.is_punct("{"):
                brace_depth += 1
            elif tok.is_punct("}"):
                brace_depth = max(brace_depth - 1, 0)
            elif tok.is_punct("-", "+") and brace_depth == 0 and self._first_on_line(tokens, idx):
                yield self._keywords(tokens, idx + 1, stop_at=(";", "{"))
            elif tok.is_punct("["):
                yield self._keywords(tokens, idx + 1, stop_at=("]",))

    @staticmethod
    def _first_on_line(tokens: list[Token], idx: int) -> bool:
        return idx == 0 or tokens[idx - 1].line != tokens[idx].line

    def _keywords(self, tokens: list[Token], start: int, stop_at: tuple[str, ...]) -> list[SelectorKeyword]:
        """Collect `name:` pairs at nesting depth zero, from `start` until a stop token."""
        keywords: list[SelectorKeyword] = []
        stack: list[str] = []
        # `?` operators at depth zero still waiting for their `:`
        open_ternaries = 0
        for idx in range(start, len(tokens)):
            tok = tokens[idx]
            if not stack and tok.kind is TokenKind.PUNCTUATION and tok.text in stop_at:
                break
            if tok.kind is TokenKind.PUNCTUATION and tok.text in _OPENERS:
                stack.append(_OPENERS[tok.text])
                continue
            if tok.kind is TokenKind.PUNCTUATION and tok.text in _CLOSERS:
                if not stack:
                    break
                stack.pop()
                continue
            if stack:
                continue
            if tok.is_punct("?"):
                open_ternaries += 1
                continue
            if not tok.is_punct(":") or idx == start:
                continue
            if open_ternaries:
                open_ternaries -= 1
                continue
            name = tokens[idx - 1]
            if name.kind not in (TokenKind.IDENTIFIER, TokenKind.KEYWORD):
                continue
            keywords.append(
                SelectorKeyword(
                    name=name,
                    colon=tok,
                    starts_line=self._first_on_line(tokens, idx - 1),
                )
            )
        return keywords

    # ------------------------------------------------------------------
    # Alignment
    # ------------------------------------------------------------------

    def _check_selector(
        self, scanned: "ScannedFile", keywords: list[SelectorKeyword], settings: RuleSettings
    ) -> list[Violation]:
        if len(keywords) < 2:
            return []
        first = keywords[0]
        first_line = scanned.lines[first.colon.line - 1]
        first_indent = len(first_line) - len(first_line.lstrip())
        anchor = first.colon.column

        violations: list[Violation] = []
        for kw in keywords[1:]:
            if not kw.starts_line or kw.colon.line == first.colon.line:
                continue
            if kw.colon.column == anchor:
                continue
            target = self.expected_start(kw, anchor, first_indent, settings)
            if target is not None and kw.name.column == target:
                continue
            violations.append(
                Violation.at(
                    rule_id=self.code,
                    settings=settings,
                    message=(
                        f"Colon of '{kw.name.text}:' at column {kw.colon.column} is not "
                        f"aligned with the first colon at column {anchor}"
                    ),
                    path=scanned.path,
                    line=kw.colon.line,
                    column=kw.colon.column,
                    suggested_fix=self._fix(kw, target),
                )
            )
        return violations

    @staticmethod
    def expected_start(
        kw: SelectorKeyword, anchor: int, first_indent: int, settings: RuleSettings
    ) -> Optional[int]:
        """Column where the continuation keyword should start, or None if no column works."""
        aligned = anchor - len(kw.name.text)
        if aligned >= first_indent + 1:
            return aligned
        if settings.get("standard_method_exception"):
            return first_indent + 1 + settings.get("indent_width")
        return aligned if aligned >= 1 else None

    @staticmethod
    def _fix(kw: SelectorKeyword, target: Optional[int]) -> Optional[SuggestedFix]:
        if target is None:
            return None
        return SuggestedFix(
            description=f"Indent '{kw.name.text}:' to align its colon",
            line=kw.name.line,
            start_column=1,
            end_column=kw.name.column,
            replacement=" " * (target - 1),
        )
