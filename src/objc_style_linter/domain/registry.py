"""Rule registry: the set of rules known to the linter, keyed by rule id."""

from collections.abc import Iterator

from objc_style_linter.domain.rules import Rule
from objc_style_linter.domain.rules.brace_placement import BracePlacementRule
from objc_style_linter.domain.rules.casing import CasingRule
from objc_style_linter.domain.rules.line_length import LineLengthRule
from objc_style_linter.domain.rules.parameter_alignment import ParameterAlignmentRule
from objc_style_linter.domain.rules.pointer_spacing import PointerSpacingRule
from objc_style_linter.domain.rules.prefix import PrefixRule


class RuleRegistry:
    """
    Ordered, read-only collection of rules.

    Registration order is the order rules run in and the order `rules` lists
    them; report order does not depend on it.
    """

    def __init__(self, rules: list[Rule]) -> None:
        self._rules: dict[str, Rule] = {}
        for rule in rules:
            if rule.code in self._rules:
                raise ValueError(f"Duplicate rule id '{rule.code}'.")
            self._rules[rule.code] = rule

    @classmethod
    def default(cls) -> "RuleRegistry":
        """Registry with every built-in rule."""
        return cls(
            [
                CasingRule(),
                PrefixRule(),
                BracePlacementRule(),
                PointerSpacingRule(),
                LineLengthRule(),
                ParameterAlignmentRule(),
            ]
        )

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules.values())

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._rules

    def get(self, rule_id: str) -> Rule:
        """Look up a rule; KeyError for an unknown id."""
        return self._rules[rule_id]

    @property
    def rule_ids(self) -> list[str]:
        return list(self._rules)
