"""Linter exceptions."""


class ScanError(Exception):
    """Recoverable lexical error: unterminated literal, comment or bracket."""

    def __init__(self, message: str, line: int, column: int) -> None:
        self.line = line
        self.column = column
        self.reason = message
        super().__init__(f"Scan error at line {line}, column {column}: {message}")


class ConfigError(Exception):
    """Invalid configuration. Fatal: the run aborts before scanning."""


class RuleEvaluationError(Exception):
    """A rule raised on input it did not anticipate."""

    def __init__(self, rule_id: str, path: str, cause: BaseException) -> None:
        self.rule_id = rule_id
        self.path = path
        self.cause = cause
        super().__init__(f"Rule '{rule_id}' failed on {path}: {type(cause).__name__}: {cause}")
