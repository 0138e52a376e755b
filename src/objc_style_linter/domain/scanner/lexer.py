"""
Objective-C Lexer (Tokenizer)

Converts raw .h/.m source text into a flat stream of tokens.
Handles: identifiers, keywords, @-directives, preprocessor directives,
string/char literals, numbers, comments, punctuation.

Lexical errors never abort the scan. Each one is recorded as a ScanError and
the lexer resumes at the start of the next line.
"""

import logging
import re
from typing import List, Optional, Tuple

from objc_style_linter.domain.constants import C_KEYWORDS
from objc_style_linter.domain.entities import Token, TokenKind
from objc_style_linter.domain.errors import ScanError

logger = logging.getLogger(__name__)

_OPENERS = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = {")": "(", "]": "[", "}": "{"}

# Longest first so that "..." wins over "."
_MULTI_CHAR_PUNCT = (
    "...", "<<=", ">>=", "->", "++", "--", "==", "!=", "<=", ">=", "&&", "||",
    "<<", ">>", "+=", "-=", "*=", "/=", "%=", "&=", "|=", "^=", "::",
)

# Directives whose remaining text is free-form prose, not code.
_FREE_TEXT_DIRECTIVES = frozenset({"#pragma", "#error", "#warning"})
_OPENING_CONDITIONALS = frozenset({"if", "ifdef", "ifndef"})
_DIRECTIVE_WORD = re.compile(r"\s*#\s*(\w+)")
_COMMENTS = re.compile(r"//.*|/\*.*?\*/")


class Lexer:
    """
    Tokenizer for Objective-C source files.

    Usage:
        lexer = Lexer(source_text, "Foo.m")
        tokens = lexer.tokenize()
        errors = lexer.errors
    """

    def __init__(self, source: str, path: str = "<unknown>") -> None:
        self.source = source
        self.path = path
        self.pos = 0
        self.line = 1
        self.column = 1
        self.length = len(source)
        self.tokens: List[Token] = []
        self.errors: List[ScanError] = []
        # Open brackets with their positions.
        self._brackets: List[Tuple[str, int, int]] = []
        # Bracket stacks saved at each open #if, restored by #else and #elif.
        self._conditionals: List[List[Tuple[str, int, int]]] = []

    def _current(self) -> Optional[str]:
        """Get current character or None if at end."""
        if self.pos >= self.length:
            return None
        return self.source[self.pos]

    def _peek(self, offset: int = 1) -> Optional[str]:
        """Peek ahead by offset characters."""
        pos = self.pos + offset
        if pos >= self.length:
            return None
        return self.source[pos]

    def _advance(self) -> Optional[str]:
        """Advance one character and return it."""
        ch = self._current()
        if ch is not None:
            self.pos += 1
            if ch == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
        return ch

    def _rewind(self, pos: int, line: int, column: int) -> None:
        self.pos = pos
        self.line = line
        self.column = column

    def _emit(self, kind: TokenKind, start: int, line: int, column: int) -> None:
        self.tokens.append(Token(kind, self.source[start:self.pos], line, column))

    def _skip_to_next_line(self) -> None:
        """Recovery heuristic: drop the rest of the current line."""
        while True:
            ch = self._advance()
            if ch is None or ch == "\n":
                return

    def _at_line_start(self) -> bool:
        """True if only whitespace precedes the cursor on this line."""
        line_start = self.source.rfind("\n", 0, self.pos) + 1
        return not self.source[line_start:self.pos].strip()

    def tokenize(self) -> List[Token]:
        """Scan the whole source in a single forward pass."""
        self.pos, self.line, self.column = 0, 1, 1
        self.tokens = []
        self.errors = []
        self._brackets = []
        self._conditionals = []

        while self._current() is not None:
            try:
                self._scan_token()
            except ScanError as err:
                logger.debug("%s: %s", self.path, err)
                self.errors.append(err)
                self._skip_to_next_line()

        for opener, line, column in self._brackets:
            self.errors.append(ScanError(f"Unclosed '{opener}'", line, column))
        self._brackets = []
        return self.tokens

    def _scan_token(self) -> None:
        ch = self._current()
        assert ch is not None
        start, line, column = self.pos, self.line, self.column

        if ch in " \t\r\n\f\v":
            self._advance()
            return

        if ch == "/" and self._peek() == "/":
            while self._current() not in (None, "\n"):
                self._advance()
            self._emit(TokenKind.COMMENT, start, line, column)
            return

        if ch == "/" and self._peek() == "*":
            self._read_block_comment()
            self._emit(TokenKind.COMMENT, start, line, column)
            return

        if ch == '"' or (ch == "@" and self._peek() == '"'):
            if ch == "@":
                self._advance()
            self._read_quoted('"', "string literal", line, column)
            self._emit(TokenKind.STRING_LITERAL, start, line, column)
            return

        if ch == "'":
            self._read_quoted("'", "character literal", line, column)
            self._emit(TokenKind.STRING_LITERAL, start, line, column)
            return

        if ch == "#" and self._at_line_start():
            self._read_directive()
            return

        if ch == "@" and self._is_ident_start(self._peek()):
            self._advance()
            self._read_identifier()
            self._emit(TokenKind.KEYWORD, start, line, column)
            return

        if self._is_ident_start(ch):
            self._read_identifier()
            text = self.source[start:self.pos]
            kind = TokenKind.KEYWORD if text in C_KEYWORDS else TokenKind.IDENTIFIER
            self._emit(kind, start, line, column)
            return

        if ch.isdigit() or (ch == "." and (self._peek() or "").isdigit()):
            self._read_number()
            self._emit(TokenKind.NUMBER_LITERAL, start, line, column)
            return

        if ch in _OPENERS:
            self._brackets.append((ch, line, column))
        elif ch in _CLOSERS:
            self._close_bracket(ch, line, column)

        for punct in _MULTI_CHAR_PUNCT:
            if self.source.startswith(punct, self.pos):
                for _ in punct:
                    self._advance()
                self._emit(TokenKind.PUNCTUATION, start, line, column)
                return

        self._advance()
        self._emit(TokenKind.PUNCTUATION, start, line, column)

    @staticmethod
    def _is_ident_start(ch: Optional[str]) -> bool:
        return ch is not None and (ch == "_" or ch == "$" or ch.isalpha())

    def _read_identifier(self) -> None:
        while True:
            ch = self._current()
            if ch is None or not (ch.isalnum() or ch in "_$"):
                return
            self._advance()

    def _read_number(self) -> None:
        prev = ""
        while True:
            ch = self._current()
            if ch is None:
                return
            if ch.isalnum() or ch == "." or (ch in "+-" and prev in ("e", "E", "p", "P")):
                prev = ch
                self._advance()
                continue
            return

    def _read_quoted(self, quote: str, what: str, line: int, column: int) -> None:
        """Read a quoted literal, handling escapes. The cursor is on the opening quote."""
        self._advance()
        while True:
            ch = self._current()
            if ch is None or ch == "\n":
                raise ScanError(f"Unterminated {what}", line, column)
            if ch == "\\":
                self._advance()
                if self._current() is None:
                    raise ScanError(f"Unterminated {what}", line, column)
                self._advance()
                continue
            self._advance()
            if ch == quote:
                return

    def _read_block_comment(self) -> None:
        start, line, column = self.pos, self.line, self.column
        self._advance()
        self._advance()
        while self._current() is not None:
            if self._current() == "*" and self._peek() == "/":
                self._advance()
                self._advance()
                return
            self._advance()
        # Resume right after the line that opened the comment.
        self._rewind(start, line, column)
        raise ScanError("Unterminated block comment", line, column)

    def _read_directive(self) -> None:
        """Read `#word` as a keyword; free-text directives keep their prose as a comment."""
        start, line, column = self.pos, self.line, self.column
        self._advance()
        while self._current() in (" ", "\t"):
            self._advance()
        word_start = self.pos
        self._read_identifier()
        word = self.source[word_start:self.pos]
        if not word:
            self._emit(TokenKind.PUNCTUATION, start, line, column)
            return
        self.tokens.append(Token(TokenKind.KEYWORD, "#" + word, line, column))

        if word in _OPENING_CONDITIONALS:
            self._conditionals.append(list(self._brackets))
            if word == "if" and self._rest_of_line().strip() == "0":
                self._skip_disabled_branch()
            return
        if word in ("else", "elif"):
            # Each branch starts from the brackets open at its #if.
            if self._conditionals:
                self._brackets = list(self._conditionals[-1])
            return
        if word == "endif":
            if self._conditionals:
                self._conditionals.pop()
            return

        if "#" + word in _FREE_TEXT_DIRECTIVES:
            while self._current() in (" ", "\t"):
                self._advance()
            rest_start, rest_column = self.pos, self.column
            while self._current() not in (None, "\n"):
                self._advance()
            if self.pos > rest_start:
                self._emit(TokenKind.COMMENT, rest_start, line, rest_column)

    def _rest_of_line(self) -> str:
        end = self.source.find("\n", self.pos)
        text = self.source[self.pos:] if end == -1 else self.source[self.pos:end]
        return _COMMENTS.sub("", text)

    def _skip_disabled_branch(self) -> None:
        """Drop the lines of an `#if 0` branch. Stops at the #else, #elif or #endif that ends it."""
        depth = 0
        self._skip_to_next_line()
        while self._current() is not None:
            end = self.source.find("\n", self.pos)
            text = self.source[self.pos:] if end == -1 else self.source[self.pos:end]
            match = _DIRECTIVE_WORD.match(text)
            if match:
                word = match.group(1)
                if word in _OPENING_CONDITIONALS:
                    depth += 1
                elif word == "endif" and depth:
                    depth -= 1
                elif word in ("else", "elif", "endif"):
                    return
            self._skip_to_next_line()

    def _close_bracket(self, closer: str, line: int, column: int) -> None:
        opener = _CLOSERS[closer]
        if self._brackets and self._brackets[-1][0] == opener:
            self._brackets.pop()
            return
        if any(entry[0] == opener for entry in self._brackets):
            # Openers left dangling inside this pair are reported, the pair still matches.
            while self._brackets[-1][0] != opener:
                dangling, d_line, d_column = self._brackets.pop()
                self.errors.append(ScanError(f"Unclosed '{dangling}'", d_line, d_column))
            self._brackets.pop()
            return
        raise ScanError(f"Unbalanced '{closer}'", line, column)
