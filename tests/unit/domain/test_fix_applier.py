"""Unit tests for FixApplier."""

from objc_style_linter.domain.entities import SuggestedFix
from objc_style_linter.domain.fixes import FixApplier


def _fix(line: int, start: int, end: int, replacement: str) -> SuggestedFix:
    return SuggestedFix("edit", line, start, end, replacement)


class TestFixApplier:
    """Test span edits, overlap handling and line endings."""

    def test_single_fix(self) -> None:
        """A span is replaced in place."""
        outcome = FixApplier.apply("Person* p;\n", [_fix(1, 1, 10, "Person *p")])
        assert outcome.source == "Person *p;\n"
        assert (outcome.applied, outcome.skipped) == (1, 0)

    def test_non_overlapping_fixes_on_one_line(self) -> None:
        """Right-to-left application keeps earlier columns valid."""
        outcome = FixApplier.apply("abcdefgh", [_fix(1, 1, 3, "X"), _fix(1, 5, 7, "Y")])
        assert outcome.source == "XcdYgh"
        assert outcome.applied == 2

    def test_overlapping_fix_is_skipped(self) -> None:
        """Only one of two overlapping spans is applied."""
        outcome = FixApplier.apply("abcdefghij", [_fix(1, 1, 5, "X"), _fix(1, 3, 8, "Y")])
        assert outcome.source == "abYhij"
        assert (outcome.applied, outcome.skipped) == (1, 1)

    def test_duplicate_fixes_apply_once(self) -> None:
        """Identical fixes collapse."""
        fix = _fix(1, 1, 2, "B")
        outcome = FixApplier.apply("a\n", [fix, fix])
        assert outcome.source == "B\n"
        assert (outcome.applied, outcome.skipped) == (1, 0)

    def test_multiline_replacement_with_crlf(self) -> None:
        """Inserted newlines follow the file's CRLF endings."""
        source = "- (void)run {\r\n}\r\n"
        outcome = FixApplier.apply(source, [_fix(1, 12, 14, "\n{")])
        assert outcome.source == "- (void)run\r\n{\r\n}\r\n"

    def test_fixes_on_several_lines(self) -> None:
        """Bottom-up application keeps line numbers valid after a line is split."""
        source = "if (a) {\nif (b) {\n"
        outcome = FixApplier.apply(source, [_fix(1, 7, 9, "\n{"), _fix(2, 7, 9, "\n{")])
        assert outcome.source == "if (a)\n{\nif (b)\n{\n"

    def test_out_of_range_fix_is_skipped(self) -> None:
        """Fixes that point past the text are not applied."""
        outcome = FixApplier.apply("abc", [_fix(5, 1, 2, "x"), _fix(1, 2, 9, "x")])
        assert outcome.source == "abc"
        assert outcome.skipped == 2
