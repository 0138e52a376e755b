"""Structural scanner: tokens and declarations for one source file."""

from dataclasses import dataclass, field

from objc_style_linter.domain.entities import Declaration, Token, TokenKind
from objc_style_linter.domain.errors import ScanError
from objc_style_linter.domain.scanner.declarations import DeclarationScanner
from objc_style_linter.domain.scanner.lexer import Lexer

__all__ = [
    "DeclarationScanner",
    "Lexer",
    "ScannedFile",
    "StructuralScanner",
]


@dataclass(frozen=True)
class ScannedFile:
    """Everything the rules may look at for one file. Read-only to rules."""

    path: str
    source: str
    lines: list[str]
    tokens: list[Token]
    declarations: list[Declaration]
    errors: list[ScanError] = field(default_factory=list)
    directive_lines: frozenset[int] = frozenset()

    @property
    def code_tokens(self) -> list[Token]:
        """Tokens without comments."""
        return [t for t in self.tokens if t.kind is not TokenKind.COMMENT]

    @property
    def statement_tokens(self) -> list[Token]:
        """Code tokens not on a preprocessor line or one of its continuations."""
        return [t for t in self.code_tokens if t.line not in self.directive_lines]


class StructuralScanner:
    """Scanner -> ScannedFile. No top-level functions."""

    @staticmethod
    def scan(source: str, path: str) -> ScannedFile:
        """Tokenize `source` and derive its declarations. Never raises ScanError."""
        lexer = Lexer(source, path)
        tokens = lexer.tokenize()
        declarations = DeclarationScanner(tokens, path).scan()
        # Split on "\n" only so that line numbers agree with the lexer.
        lines = [line.rstrip("\r") for line in source.split("\n")]
        return ScannedFile(
            path=path,
            source=source,
            lines=lines,
            tokens=tokens,
            declarations=declarations,
            errors=list(lexer.errors),
            directive_lines=StructuralScanner.directive_lines(lines),
        )

    @staticmethod
    def directive_lines(lines: list[str]) -> frozenset[int]:
        """1-based numbers of `#` lines and of the lines they continue onto with a trailing backslash."""
        found: set[int] = set()
        continued = False
        for number, text in enumerate(lines, start=1):
            if continued or text.lstrip().startswith("#"):
                found.add(number)
                continued = text.rstrip().endswith("\\")
        return frozenset(found)
