"""Unit tests for BracePlacementRule (brace-placement)."""

from objc_style_linter.domain.rules.brace_placement import BracePlacementRule
from tests.conftest import scan, settings_for


class TestBracePlacementRule:
    """Test BracePlacementRule detection and fixes."""

    def setup_method(self) -> None:
        self.rule = BracePlacementRule()
        self.settings = settings_for(self.rule)

    def _check(self, source: str):
        return self.rule.check(scan(source), self.settings)

    def test_brace_on_signature_line(self) -> None:
        """A method body brace on the signature line is one violation."""
        violations = self._check("@implementation A\n- (void)run {\n}\n@end\n")
        assert len(violations) == 1
        assert (violations[0].location.line, violations[0].location.column) == (2, 13)

    def test_brace_on_next_line(self) -> None:
        """The same method with its brace on the next line is clean."""
        assert self._check("@implementation A\n- (void)run\n{\n}\n@end\n") == []

    def test_control_statements(self) -> None:
        """if/else blocks are blocks too."""
        source = (
            "- (void)run\n"
            "{\n"
            "    if (ready) {\n"
            "        go();\n"
            "    } else {\n"
            "        stop();\n"
            "    }\n"
            "}\n"
        )
        violations = self._check(source)
        assert [v.location.line for v in violations] == [3, 5]

    def test_literals_are_not_blocks(self) -> None:
        """Dictionary literals, initialisers, nested braces and block literals are ignored."""
        source = (
            "- (void)run\n"
            "{\n"
            "    NSDictionary *d = @{@\"a\": @1};\n"
            "    CGPoint p = {0, 0};\n"
            "    CGRect r = (CGRect){0};\n"
            "    [UIView animateWithDuration:0.3 animations:^{\n"
            "        self.alpha = 0;\n"
            "    }];\n"
            "    dispatch_async(queue, ^(void) {\n"
            "        work();\n"
            "    });\n"
            "    void (^handler)(BOOL) = ^(BOOL ok) {\n"
            "        done(ok);\n"
            "    };\n"
            "}\n"
        )
        assert self._check(source) == []

    def test_interface_ivar_block(self) -> None:
        """The @interface ivar brace is a block brace."""
        violations = self._check("@interface A : NSObject {\n    int _x;\n}\n@end\n")
        assert len(violations) == 1
        assert violations[0].location.line == 1

    def test_fix_moves_brace_to_next_line(self) -> None:
        """The fix replaces ' {' with a newline, the line's indentation and the brace."""
        violations = self._check("- (void)run\n{\n    if (ready) {\n    }\n}\n")
        fix = violations[0].suggested_fix
        assert fix is not None
        assert fix.line == 3
        assert (fix.start_column, fix.end_column) == (15, 17)
        assert fix.replacement == "\n    {"

    def test_preprocessor_lines_ignored(self) -> None:
        """Braces inside macro definitions are not checked."""
        assert self._check("#define WRAP(x) do { x; } while (0)\n") == []

    def test_macro_continuation_lines_ignored(self) -> None:
        """Lines continued with a backslash belong to the macro; code after it is still checked."""
        source = (
            "#define WEAKIFY(x) \\\n"
            "    do { \\\n"
            "        x; \\\n"
            "    } while (0)\n"
            "- (void)run {\n"
            "}\n"
        )
        violations = self._check(source)
        assert [(v.location.line, v.location.column) for v in violations] == [(5, 13)]
