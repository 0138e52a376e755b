"""Violation report: deduplicated, deterministically ordered output."""

import json
from collections import Counter
from collections.abc import Iterable

from objc_style_linter.domain.entities import Violation


class ViolationReport:
    """
    Canonical view of a run's violations.

    Duplicates (same rule id and location) collapse to the first one seen and
    the rest are sorted by (path, line, column, rule id), so the rendered
    output for identical input is byte-identical however the files were
    scheduled.
    """

    def __init__(self, violations: Iterable[Violation]) -> None:
        unique: dict[tuple, Violation] = {}
        for violation in violations:
            unique.setdefault(violation.dedup_key, violation)
        self.violations: list[Violation] = sorted(unique.values(), key=lambda v: v.sort_key)

    def __len__(self) -> int:
        return len(self.violations)

    def text_lines(self) -> list[str]:
        return [v.format_line() for v in self.violations]

    def to_text(self) -> str:
        """Newline-terminated `path:line:col: [rule] message` lines."""
        lines = self.text_lines()
        return "\n".join(lines) + "\n" if lines else ""

    def to_json(self) -> str:
        """JSON list of violation records."""
        return json.dumps([v.to_dict() for v in self.violations], indent=2)

    def counts_by_rule(self) -> dict[str, int]:
        """Violation count per rule id, sorted by rule id."""
        counts = Counter(v.rule_id for v in self.violations)
        return dict(sorted(counts.items()))

    def fixable(self) -> list[Violation]:
        """Violations that carry a suggested fix."""
        return [v for v in self.violations if v.suggested_fix is not None]
