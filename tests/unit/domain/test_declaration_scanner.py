"""Unit tests for DeclarationScanner via StructuralScanner."""

from objc_style_linter.domain.entities import DeclarationKind
from tests.conftest import scan

HEADER = """\
#import <UIKit/UIKit.h>

#define MLS_MAX_RETRIES 3

NS_ASSUME_NONNULL_BEGIN

extern NSString *const kMLSDefaultName;
extern NSString *const MLSPersonDidChangeNotification;

typedef NS_ENUM(NSInteger, MLSGender) {
    MLSGenderUnknown,
    MLSGenderFemale,
};

@protocol MLSPersonDelegate;

@protocol MLSGreeting <NSObject>
- (NSString *)greeting;
@end

@interface MLSPerson : NSObject <MLSGreeting>
{
    NSInteger _age;
}
@property (nonatomic, copy) NSString *name;
@property (nonatomic, copy, nullable) void (^completion)(BOOL finished);
- (instancetype)initWithName:(NSString *)name
                         age:(NSInteger)age;
+ (instancetype)personWithName:(NSString *)name;
@end

@interface MLSPerson (Formatting)
- (NSString *)formattedName;
@end

NS_ASSUME_NONNULL_END
"""

IMPLEMENTATION = """\
#import "MLSPerson.h"

static NSString *const kMLSGreetingFormat = @"Hello, %@";

NSString *MLSDescribePerson(MLSPerson *person)
{
    return person.name;
}

@implementation MLSPerson

- (void)updateWithValues:(NSDictionary *)values
{
    NSString *newName = values[@"name"];
    NSInteger count = 0, total = 1;
    void (^handler)(void) = ^{
        NSString *inner = @"x";
    };
    if (newName) {
        self.name = newName;
    }
}

@end
"""


def _by_kind(declarations, kind):
    return [d.name for d in declarations if d.kind is kind]


class TestHeaderDeclarations:
    """Declarations found in a typical header."""

    def setup_method(self) -> None:
        self.scanned = scan(HEADER, "MLSPerson.h")
        self.decls = self.scanned.declarations

    def test_no_scan_errors(self) -> None:
        """The header is well formed."""
        assert self.scanned.errors == []

    def test_macro(self) -> None:
        """#define names are macros."""
        assert _by_kind(self.decls, DeclarationKind.MACRO) == ["MLS_MAX_RETRIES"]

    def test_constants_and_notifications(self) -> None:
        """Const globals are constants unless named ...Notification."""
        assert _by_kind(self.decls, DeclarationKind.CONSTANT) == ["kMLSDefaultName"]
        assert _by_kind(self.decls, DeclarationKind.NOTIFICATION) == ["MLSPersonDidChangeNotification"]

    def test_enum(self) -> None:
        """NS_ENUM(Type, Name) declares Name."""
        assert _by_kind(self.decls, DeclarationKind.ENUM) == ["MLSGender"]

    def test_protocol_forward_declaration_is_skipped(self) -> None:
        """`@protocol X;` is not a declaration; `@protocol X <...>` is."""
        assert _by_kind(self.decls, DeclarationKind.PROTOCOL) == ["MLSGreeting"]

    def test_class_and_category(self) -> None:
        """@interface Name declares a class; @interface Name (Cat) a category."""
        assert _by_kind(self.decls, DeclarationKind.CLASS) == ["MLSPerson"]
        assert _by_kind(self.decls, DeclarationKind.CATEGORY) == ["Formatting"]

    def test_field(self) -> None:
        """Ivars inside the @interface braces are fields."""
        assert _by_kind(self.decls, DeclarationKind.FIELD) == ["_age"]

    def test_properties(self) -> None:
        """Property names, including block properties."""
        assert _by_kind(self.decls, DeclarationKind.PROPERTY) == ["name", "completion"]

    def test_methods_are_selectors(self) -> None:
        """Multi-part selectors are joined with colons."""
        assert _by_kind(self.decls, DeclarationKind.METHOD) == [
            "greeting",
            "initWithName:age:",
            "personWithName:",
            "formattedName",
        ]

    def test_enclosing_type(self) -> None:
        """Members know the type they belong to."""
        prop = next(d for d in self.decls if d.name == "name")
        assert prop.enclosing_type == "MLSPerson"

    def test_location_points_at_name(self) -> None:
        """The class declaration is located at its name token."""
        cls = next(d for d in self.decls if d.kind is DeclarationKind.CLASS)
        assert (cls.location.line, cls.location.column) == (21, 12)


class TestImplementationDeclarations:
    """Declarations found in an implementation file."""

    def setup_method(self) -> None:
        self.scanned = scan(IMPLEMENTATION, "MLSPerson.m")
        self.decls = self.scanned.declarations

    def test_static_constant(self) -> None:
        """`static NSString *const k... = @"..."` is a constant."""
        assert _by_kind(self.decls, DeclarationKind.CONSTANT) == ["kMLSGreetingFormat"]

    def test_function(self) -> None:
        """A file-scope C function with a body."""
        assert _by_kind(self.decls, DeclarationKind.FUNCTION) == ["MLSDescribePerson"]

    def test_method_with_body(self) -> None:
        """Method definitions are found from their signature."""
        assert _by_kind(self.decls, DeclarationKind.METHOD) == ["updateWithValues:"]

    def test_local_variables(self) -> None:
        """Locals in method bodies and nested block bodies are variables."""
        assert _by_kind(self.decls, DeclarationKind.VARIABLE) == [
            "newName",
            "count",
            "inner",
        ]

    def test_statements_are_not_declarations(self) -> None:
        """Assignments and message sends declare nothing."""
        names = {d.name for d in self.decls}
        assert "self" not in names
        assert "person" not in names


class TestDirectiveLines:
    """Preprocessor lines, including backslash continuations."""

    def test_continuations_belong_to_the_directive(self) -> None:
        """A #define continued over three lines covers all three; the next line is code."""
        scanned = scan(
            "#import <Foundation/Foundation.h>\n"
            "#define SWAP(a, b) do { \\\n"
            "    id t = a; a = b; \\\n"
            "    b = t; } while (0)\n"
            "static int x = 1;\n"
        )
        assert scanned.directive_lines == frozenset({1, 2, 3, 4})
        assert {t.line for t in scanned.statement_tokens} == {5}
