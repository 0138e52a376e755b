"""
Objective-C Style Linter: shared constants
"""

_BLUE: str = "\033[34m"
_RESET: str = "\033[0m"
_OBJC_STYLE_ART: str = r"""
   ____  ___      _______    _____ __        __
  / __ \/ _ )__ _/ ___/ /   / ___// /___  __/ /__
 / /_/ / _  / // / /__/ /__ \__ \/ __/ / / / / -_)
 \____/____/\___/\___/____/___/ /\__/\_, /_/\__/
                          /____/    /___/
"""
OBJC_STYLE_BANNER = _BLUE + _OBJC_STYLE_ART + _RESET

SOURCE_EXTENSIONS: frozenset[str] = frozenset({".h", ".m", ".mm"})

DEFAULT_MAX_LINE_LENGTH: int = 100

# Pseudo rule ids for violations not produced by a configured rule.
INTERNAL_RULE_ERROR: str = "internal-rule-error"
SCAN_ERROR: str = "scan-error"

C_KEYWORDS: frozenset[str] = frozenset(
    {
        "auto", "break", "case", "char", "const", "continue", "default", "do",
        "double", "else", "enum", "extern", "float", "for", "goto", "if",
        "inline", "int", "long", "register", "return", "short", "signed",
        "sizeof", "static", "struct", "switch", "typedef", "union", "unsigned",
        "void", "volatile", "while",
    }
)

# Keywords that name a built-in type and can therefore precede a pointer star.
C_TYPE_KEYWORDS: frozenset[str] = frozenset(
    {"char", "double", "float", "int", "long", "short", "signed", "unsigned", "void"}
)

STORAGE_QUALIFIERS: frozenset[str] = frozenset(
    {
        "const", "static", "extern", "volatile", "__block", "__weak", "__strong",
        "__unsafe_unretained", "__autoreleasing", "register",
    }
)

CONTROL_KEYWORDS: frozenset[str] = frozenset(
    {"if", "else", "for", "while", "do", "switch", "case", "default", "return", "goto", "sizeof"}
)

ENUM_MACROS: frozenset[str] = frozenset(
    {"NS_ENUM", "NS_OPTIONS", "NS_CLOSED_ENUM", "NS_ERROR_ENUM", "CF_ENUM", "CF_OPTIONS"}
)

OBJC_TYPE_BLOCKS: frozenset[str] = frozenset({"@interface", "@implementation", "@protocol"})
