"""Unit tests for PrefixRule (prefix)."""

from objc_style_linter.domain.rules.prefix import PrefixRule
from tests.conftest import scan, settings_for

SOURCE = """\
extern NSString *const PersonDidChangeNotification;

typedef NS_ENUM(NSInteger, Gender) {
    GenderUnknown,
};

@protocol MLSGreeting
@end

@interface Person : NSObject
@end

@interface MLSPerson (Formatting)
@end

@interface AppDelegate : UIResponder
@end
"""


class TestPrefixRule:
    """Test PrefixRule type-name checks."""

    def setup_method(self) -> None:
        self.rule = PrefixRule()

    def test_empty_prefix_disables_rule(self) -> None:
        """With no prefix configured nothing is reported."""
        assert self.rule.check(scan(SOURCE), settings_for(self.rule)) == []

    def test_unprefixed_types_are_reported(self) -> None:
        """Class, category and enum names without the prefix are reported; allowed names are not."""
        violations = self.rule.check(scan(SOURCE), settings_for(self.rule, prefix="MLS"))
        reported = sorted(v.message.split("'")[1] for v in violations)
        assert reported == ["Formatting", "Gender", "Person"]

    def test_message_suggests_prefixed_name(self) -> None:
        """The message names the prefix and a suggestion."""
        scanned = scan("@interface Person : NSObject\n@end\n")
        violations = self.rule.check(scanned, settings_for(self.rule, prefix="MLS"))
        assert len(violations) == 1
        assert "'MLS' prefix" in violations[0].message
        assert "MLSPerson" in violations[0].message
        assert (violations[0].location.line, violations[0].location.column) == (1, 12)

    def test_notifications_opt_in(self) -> None:
        """Notification names are only checked when include_notifications is set."""
        settings = settings_for(self.rule, prefix="MLS", include_notifications=True)
        violations = self.rule.check(scan(SOURCE), settings)
        assert any("PersonDidChangeNotification" in v.message for v in violations)

    def test_deny_overrides_allow(self) -> None:
        """A name matching both allow and deny must carry the prefix."""
        settings = settings_for(self.rule, prefix="MLS", deny=["App*"])
        violations = self.rule.check(scan(SOURCE), settings)
        assert any("AppDelegate" in v.message for v in violations)

    def test_allow_glob(self) -> None:
        """Allow patterns are globs."""
        settings = settings_for(self.rule, prefix="MLS", allow=["*"])
        assert self.rule.check(scan(SOURCE), settings) == []

    def test_has_prefix_requires_uppercase_after_prefix(self) -> None:
        """MLSPerson has the prefix; MLSperson and MLS alone do not."""
        assert PrefixRule.has_prefix("MLSPerson", "MLS")
        assert PrefixRule.has_prefix("MLS2Person", "MLS")
        assert not PrefixRule.has_prefix("MLSperson", "MLS")
        assert not PrefixRule.has_prefix("MLS", "MLS")
