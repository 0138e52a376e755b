"""
Declaration scanner: derives named declarations from the token stream.

Works on lexical shape only. Tokens are grouped into statements (split on
`;`, `{` and `}` outside parentheses) inside a stack of brace frames, and each
finished statement is classified by its frame: file scope, instance variable
block, function/method body, enum body or literal.
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional

from objc_style_linter.domain.constants import (
    C_TYPE_KEYWORDS,
    CONTROL_KEYWORDS,
    ENUM_MACROS,
    STORAGE_QUALIFIERS,
)
from objc_style_linter.domain.entities import (
    Declaration,
    DeclarationKind,
    Location,
    Token,
    TokenKind,
)

MACRO_LIKE = re.compile(r"^[A-Z][A-Z0-9]*_[A-Z0-9_]*$")

# Frame kinds
FILE = "file"
OTHER = "other"
IVARS = "ivars"
BODY = "body"
BLOCK = "block"
ENUM = "enum"
AGGREGATE = "aggregate"
LITERAL = "literal"

_TOP_LEVEL = (FILE, OTHER)
_BODY_LIKE = (BODY, BLOCK)

# Keywords that always begin a new top-level statement.
_FLUSHING_KEYWORDS = frozenset(
    {
        "@interface", "@implementation", "@protocol", "@end", "@property", "@class",
        "@synthesize", "@dynamic", "@private", "@public", "@protected", "@package",
        "@optional", "@required",
    }
)

# A `{` after one of these opens a literal, not a block.
_LITERAL_BRACE_PREDECESSORS = frozenset({"@", "=", ",", "(", "[", "{", ":", "?", "return"})

_TYPEOF = frozenset({"typeof", "__typeof", "__typeof__"})

_NULLABILITY = frozenset(
    {"_Nullable", "_Nonnull", "_Null_unspecified", "__nullable", "__nonnull", "__kindof"}
)


@dataclass
class _Frame:
    kind: str
    statement: List[Token] = field(default_factory=list)
    paren_depth: int = 0


class DeclarationScanner:
    """
    Collect declarations from a comment-free token stream.

    Usage:
        declarations = DeclarationScanner(tokens, "Foo.m").scan()
    """

    def __init__(self, tokens: List[Token], path: str) -> None:
        self.tokens = [t for t in tokens if t.kind is not TokenKind.COMMENT]
        self.path = path
        self.declarations: List[Declaration] = []
        self._frames: List[_Frame] = [_Frame(FILE)]
        self._current_type: Optional[str] = None
        self._prev: Optional[Token] = None

    @property
    def _frame(self) -> _Frame:
        return self._frames[-1]

    def _add(self, kind: DeclarationKind, name_token: Token, name: Optional[str] = None) -> None:
        self.declarations.append(
            Declaration(
                kind=kind,
                name=name if name is not None else name_token.text,
                location=Location(self.path, name_token.line, name_token.column),
                enclosing_type=self._current_type,
            )
        )

    def scan(self) -> List[Declaration]:
        """Single forward pass over the tokens."""
        i = 0
        n = len(self.tokens)
        while i < n:
            tok = self.tokens[i]
            if tok.kind is TokenKind.KEYWORD and tok.text.startswith("#"):
                i = self._directive(i)
                continue
            self._visit(tok)
            self._prev = tok
            i += 1
        self._flush(None)
        return self.declarations

    # -- token dispatch -----------------------------------------------------

    def _visit(self, tok: Token) -> None:
        frame = self._frame
        starts_line = self._prev is None or self._prev.line != tok.line

        if frame.kind in _TOP_LEVEL or frame.kind == IVARS:
            if tok.kind is TokenKind.KEYWORD and tok.text in _FLUSHING_KEYWORDS:
                self._flush(None)
                if tok.text == "@end":
                    self._current_type = None
                    return
            elif (
                starts_line
                and tok.is_punct("-", "+")
                and frame.kind in _TOP_LEVEL
                and frame.paren_depth == 0
                and self._statement_complete(frame.statement)
            ):
                self._flush(None)
            elif starts_line and frame.paren_depth == 0 and self._is_bare_macro(frame.statement):
                frame.statement = []

        if tok.is_punct("(", "["):
            frame.paren_depth += 1
            frame.statement.append(tok)
        elif tok.is_punct(")", "]"):
            frame.paren_depth = max(0, frame.paren_depth - 1)
            frame.statement.append(tok)
        elif tok.is_punct("{"):
            self._open_brace(tok)
        elif tok.is_punct("}"):
            self._close_brace(tok)
        elif tok.is_punct(";") and frame.paren_depth == 0:
            self._flush(";")
        else:
            frame.statement.append(tok)

    def _directive(self, i: int) -> int:
        """Handle a preprocessor line; return the index of the first token after it."""
        tok = self.tokens[i]
        if tok.text == "#define" and i + 1 < len(self.tokens):
            name = self.tokens[i + 1]
            if name.line == tok.line and name.kind in (TokenKind.IDENTIFIER, TokenKind.KEYWORD):
                self._add(DeclarationKind.MACRO, name)
        line = tok.line
        j = i + 1
        while j < len(self.tokens) and self.tokens[j].line == line:
            if self.tokens[j].is_punct("\\") and (
                j + 1 >= len(self.tokens) or self.tokens[j + 1].line != line
            ):
                line += 1
            j += 1
        return j

    @staticmethod
    def _statement_complete(statement: List[Token]) -> bool:
        """False while the statement visibly continues (ends in an operator)."""
        if not statement:
            return True
        last = statement[-1]
        return last.kind is not TokenKind.PUNCTUATION or last.text in (")", "]", ">")

    @staticmethod
    def _is_bare_macro(statement: List[Token]) -> bool:
        """A line like NS_ASSUME_NONNULL_BEGIN or API_AVAILABLE(ios(13)) with no terminator."""
        if not statement or statement[0].kind is not TokenKind.IDENTIFIER:
            return False
        if not MACRO_LIKE.match(statement[0].text):
            return False
        depth = 0
        for tok in statement[1:]:
            if tok.is_punct("("):
                depth += 1
            elif tok.is_punct(")"):
                depth -= 1
            elif depth == 0:
                return False
        return depth == 0

    def _open_brace(self, tok: Token) -> None:
        frame = self._frame
        stmt = frame.statement
        last = stmt[-1] if stmt else None

        if self._is_block_literal_brace(stmt):
            kind = BLOCK if frame.kind in _BODY_LIKE else LITERAL
            self._frames.append(_Frame(kind))
            return
        if frame.paren_depth > 0 or frame.kind in (LITERAL, ENUM) or (
            last is not None and last.text in _LITERAL_BRACE_PREDECESSORS
        ):
            self._frames.append(_Frame(LITERAL))
            return

        head = stmt[0] if stmt else None
        texts = {t.text for t in stmt}
        if head is not None and head.is_keyword("@interface", "@implementation"):
            self._type_header(stmt)
            kind = IVARS
        elif head is not None and head.is_punct("-", "+") and frame.kind in _TOP_LEVEL:
            self._method(stmt)
            kind = BODY
        elif "enum" in texts or texts & ENUM_MACROS:
            # The enclosing statement continues after the enumerators.
            self._frames.append(_Frame(ENUM))
            return
        elif "struct" in texts or "union" in texts:
            self._frames.append(_Frame(AGGREGATE))
            return
        elif frame.kind in _BODY_LIKE:
            kind = BODY
        elif frame.kind in _TOP_LEVEL and self._function(stmt):
            kind = BODY
        else:
            kind = OTHER
        frame.statement = []
        self._frames.append(_Frame(kind))

    @staticmethod
    def _is_block_literal_brace(stmt: List[Token]) -> bool:
        """`^{` or `^(args) {`."""
        if not stmt:
            return False
        if stmt[-1].is_punct("^"):
            return True
        if not stmt[-1].is_punct(")"):
            return False
        depth = 0
        for idx in range(len(stmt) - 1, -1, -1):
            if stmt[idx].is_punct(")"):
                depth += 1
            elif stmt[idx].is_punct("("):
                depth -= 1
                if depth == 0:
                    return idx > 0 and stmt[idx - 1].is_punct("^")
        return False

    def _close_brace(self, tok: Token) -> None:
        if len(self._frames) == 1:
            return
        closed = self._frames.pop()
        if closed.kind in (ENUM, AGGREGATE, LITERAL, BLOCK):
            # The enclosing statement continues after the braces.
            self._frame.statement.append(tok)

    # -- statement classification ------------------------------------------

    def _flush(self, terminator: Optional[str]) -> None:
        frame = self._frame
        stmt = frame.statement
        frame.statement = []
        frame.paren_depth = 0
        if not stmt:
            return
        if frame.kind in _TOP_LEVEL:
            self._top_level(stmt, terminator)
        elif frame.kind == IVARS:
            if terminator == ";":
                self._field(stmt)
        elif frame.kind in _BODY_LIKE:
            if terminator == ";":
                self._variable(stmt)

    def _top_level(self, stmt: List[Token], terminator: Optional[str]) -> None:
        head = stmt[0]
        if head.is_keyword("@interface", "@implementation"):
            self._type_header(stmt)
        elif head.is_keyword("@protocol"):
            self._protocol(stmt, terminator)
        elif head.is_keyword("@property"):
            self._property(stmt)
        elif head.is_punct("-", "+") and self._current_type is not None:
            self._method(stmt)
        elif head.kind is TokenKind.KEYWORD and head.text.startswith("@"):
            return
        elif terminator != ";":
            return
        elif self._enum(stmt):
            return
        elif head.is_keyword("typedef"):
            return
        elif self._function(stmt):
            return
        else:
            self._constant(stmt)

    def _type_header(self, stmt: List[Token]) -> None:
        if len(stmt) < 2 or stmt[1].kind is not TokenKind.IDENTIFIER:
            return
        name = stmt[1]
        is_interface = stmt[0].text == "@interface"
        self._current_type = name.text
        if len(stmt) > 2 and stmt[2].is_punct("("):
            category = stmt[3] if len(stmt) > 3 else None
            if is_interface and category is not None and category.kind is TokenKind.IDENTIFIER:
                self._add(DeclarationKind.CATEGORY, category)
            return
        if is_interface:
            self._current_type = None
            self._add(DeclarationKind.CLASS, name)
            self._current_type = name.text

    def _protocol(self, stmt: List[Token], terminator: Optional[str]) -> None:
        if len(stmt) < 2 or stmt[1].kind is not TokenKind.IDENTIFIER:
            return
        if terminator == ";" and all(
            t.kind is TokenKind.IDENTIFIER or t.is_punct(",") for t in stmt[1:]
        ):
            # Forward declaration.
            return
        self._current_type = None
        self._add(DeclarationKind.PROTOCOL, stmt[1])
        self._current_type = stmt[1].text

    def _property(self, stmt: List[Token]) -> None:
        rest = stmt[1:]
        if rest and rest[0].is_punct("("):
            rest = rest[self._matching_paren(rest, 0) + 1:]
        name = self._declarator_name(rest)
        if name is not None:
            self._add(DeclarationKind.PROPERTY, name)

    def _field(self, stmt: List[Token]) -> None:
        while stmt and stmt[0].kind is TokenKind.KEYWORD and stmt[0].text.startswith("@"):
            stmt = stmt[1:]
        if len(stmt) < 2:
            return
        name = self._declarator_name(stmt)
        if name is not None:
            self._add(DeclarationKind.FIELD, name)

    def _method(self, stmt: List[Token]) -> None:
        """Assemble the selector of a method signature."""
        j = 1
        if j < len(stmt) and stmt[j].is_punct("("):
            j = self._matching_paren(stmt, j) + 1
        if j >= len(stmt) or stmt[j].kind not in (TokenKind.IDENTIFIER, TokenKind.KEYWORD):
            return
        first = stmt[j]
        if j + 1 >= len(stmt) or not stmt[j + 1].is_punct(":"):
            self._add(DeclarationKind.METHOD, first)
            return

        parts: List[str] = []
        while j + 1 < len(stmt) and stmt[j + 1].is_punct(":"):
            parts.append(stmt[j].text)
            j += 2
            if j < len(stmt) and stmt[j].is_punct("("):
                j = self._matching_paren(stmt, j) + 1
            # argument name
            j += 1
            if j >= len(stmt) or stmt[j].kind not in (TokenKind.IDENTIFIER, TokenKind.KEYWORD):
                break
        self._add(DeclarationKind.METHOD, first, name="".join(p + ":" for p in parts))

    def _function(self, stmt: List[Token]) -> bool:
        """`[qualifiers] Type *Name(...)` at file scope."""
        open_idx = next((k for k, t in enumerate(stmt) if t.is_punct("(")), None)
        if open_idx is None or open_idx < 2:
            return False
        prefix = stmt[:open_idx]
        if prefix[0].is_keyword("typedef") or prefix[0].text in CONTROL_KEYWORDS:
            return False
        if not all(
            t.kind in (TokenKind.IDENTIFIER, TokenKind.KEYWORD) or t.is_punct("*") for t in prefix
        ):
            return False
        name = prefix[-1]
        if name.kind is not TokenKind.IDENTIFIER:
            return False
        self._add(DeclarationKind.FUNCTION, name)
        return True

    def _enum(self, stmt: List[Token]) -> bool:
        """NS_ENUM(Type, Name), `typedef enum Tag {..} Name` or `enum Name {..}`."""
        for k, tok in enumerate(stmt):
            if tok.text in ENUM_MACROS and k + 1 < len(stmt) and stmt[k + 1].is_punct("("):
                close = self._matching_paren(stmt, k + 1)
                args = [t for t in stmt[k + 2:close] if t.kind is TokenKind.IDENTIFIER]
                if args:
                    self._add(DeclarationKind.ENUM, args[-1])
                return True
            if tok.is_keyword("enum"):
                typedef_name = None
                if stmt[0].is_keyword("typedef"):
                    closing = [idx for idx, t in enumerate(stmt) if t.is_punct("}")]
                    after = stmt[closing[-1] + 1:] if closing else stmt[k + 2:]
                    typedef_name = next(
                        (t for t in after if t.kind is TokenKind.IDENTIFIER), None
                    )
                tag = stmt[k + 1] if k + 1 < len(stmt) else None
                if typedef_name is not None:
                    self._add(DeclarationKind.ENUM, typedef_name)
                elif tag is not None and tag.kind is TokenKind.IDENTIFIER:
                    self._add(DeclarationKind.ENUM, tag)
                return True
        return False

    def _constant(self, stmt: List[Token]) -> None:
        """File-scope `const` declarations; `...Notification` names are notifications."""
        end = next((k for k, t in enumerate(stmt) if t.is_punct("=")), len(stmt))
        head = stmt[:end]
        if not any(t.is_keyword("const") for t in head):
            return
        name = self._declarator_name(head)
        if name is None:
            return
        kind = (
            DeclarationKind.NOTIFICATION
            if name.text.endswith("Notification")
            else DeclarationKind.CONSTANT
        )
        self._add(kind, name)

    def _variable(self, stmt: List[Token]) -> None:
        """`[qualifiers] Type [<..>] [*...] name (= ...)` inside a body."""
        j = 0
        n = len(stmt)
        while j < n and stmt[j].text in STORAGE_QUALIFIERS:
            j += 1
        if j >= n:
            return
        type_tok = stmt[j]
        if type_tok.kind is TokenKind.KEYWORD:
            if type_tok.text not in C_TYPE_KEYWORDS:
                return
            while j < n and stmt[j].text in C_TYPE_KEYWORDS:
                j += 1
        elif type_tok.kind is TokenKind.IDENTIFIER:
            j += 1
            if type_tok.text in _TYPEOF and j < n and stmt[j].is_punct("("):
                j = self._matching_paren(stmt, j) + 1
            elif j < n and stmt[j].is_punct("<"):
                j = self._matching_angle(stmt, j) + 1
        else:
            return
        while j < n and (stmt[j].is_punct("*") or stmt[j].text in STORAGE_QUALIFIERS
                         or stmt[j].text in _NULLABILITY):
            j += 1
        if j >= n or stmt[j].kind is not TokenKind.IDENTIFIER:
            return
        name = stmt[j]
        follow = stmt[j + 1] if j + 1 < n else None
        if follow is None or follow.is_punct("=", ",", "["):
            self._add(DeclarationKind.VARIABLE, name)

    # -- helpers --------------------------------------------------------------

    def _declarator_name(self, tokens: List[Token]) -> Optional[Token]:
        """Name being declared: block declarator `(^name)` or last plain identifier."""
        for k in range(len(tokens) - 2):
            if (
                tokens[k].is_punct("(")
                and tokens[k + 1].is_punct("^")
                and tokens[k + 2].kind is TokenKind.IDENTIFIER
            ):
                return tokens[k + 2]
        depth = 0
        candidate: Optional[Token] = None
        for k, tok in enumerate(tokens):
            if tok.is_punct("(", "["):
                depth += 1
            elif tok.is_punct(")", "]"):
                depth -= 1
            elif depth == 0 and tok.kind is TokenKind.IDENTIFIER:
                followed_by_call = k + 1 < len(tokens) and tokens[k + 1].is_punct("(")
                if not followed_by_call and not MACRO_LIKE.match(tok.text):
                    candidate = tok
        return candidate

    @staticmethod
    def _matching_paren(tokens: List[Token], open_idx: int) -> int:
        depth = 0
        for k in range(open_idx, len(tokens)):
            if tokens[k].is_punct("("):
                depth += 1
            elif tokens[k].is_punct(")"):
                depth -= 1
                if depth == 0:
                    return k
        return len(tokens) - 1

    @staticmethod
    def _matching_angle(tokens: List[Token], open_idx: int) -> int:
        depth = 0
        for k in range(open_idx, len(tokens)):
            if tokens[k].is_punct("<"):
                depth += 1
            elif tokens[k].is_punct(">"):
                depth -= 1
                if depth == 0:
                    return k
            elif tokens[k].is_punct(">>"):
                depth -= 2
                if depth <= 0:
                    return k
        return len(tokens) - 1
