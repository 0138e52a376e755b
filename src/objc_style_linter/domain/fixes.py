"""Apply suggested fixes to source text."""

from dataclasses import dataclass

from objc_style_linter.domain.entities import SuggestedFix


@dataclass(frozen=True)
class FixOutcome:
    """New source text plus how many fixes were applied or skipped."""
    source: str
    applied: int
    skipped: int


class FixApplier:
    """
    Applies single-line span edits to a source string.

    Fixes are applied bottom-up and right-to-left so that earlier columns and
    lines stay valid. A fix whose span overlaps one already applied is
    skipped; a second `fix` run picks it up.
    """

    @staticmethod
    def apply(source: str, fixes: list[SuggestedFix]) -> FixOutcome:
        lines = source.split("\n")
        unique = sorted(
            set(fixes), key=lambda f: (f.line, f.start_column, f.end_column), reverse=True
        )
        applied = 0
        skipped = 0
        # line -> leftmost start column already rewritten on that line
        claimed: dict[int, int] = {}
        for fix in unique:
            if fix.line < 1 or fix.line > len(lines):
                skipped += 1
                continue
            raw = lines[fix.line - 1]
            crlf = raw.endswith("\r")
            text = raw[:-1] if crlf else raw
            start, end = fix.start_column - 1, fix.end_column - 1
            if start < 0 or end < start or end > len(text):
                skipped += 1
                continue
            if fix.line in claimed and end > claimed[fix.line]:
                skipped += 1
                continue
            replacement = fix.replacement.replace("\n", "\r\n") if crlf else fix.replacement
            lines[fix.line - 1] = text[:start] + replacement + text[end:] + ("\r" if crlf else "")
            claimed[fix.line] = start
            applied += 1
        return FixOutcome("\n".join(lines), applied, skipped)
