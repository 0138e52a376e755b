"""Configuration for linter settings. Immutable value object created by Infrastructure."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Optional

from objc_style_linter.domain.entities import RuleSettings, Severity
from objc_style_linter.domain.errors import ConfigError
from objc_style_linter.domain.registry import RuleRegistry

_UNSET = object()
_SETTING_KEYS = frozenset({"enabled", "severity", "parameters"})
_ON = frozenset({"on", "true", "yes", "1", "enable", "enabled"})
_OFF = frozenset({"off", "false", "no", "0", "disable", "disabled"})


class ConfigurationLoader:
    """
    Immutable run configuration: one RuleSettings per registered rule.

    Created from (config_dict, registry) at the composition root; Domain does
    not read the filesystem. Every problem is a ConfigError raised from the
    constructor, so an invalid configuration never reaches the scanner.

    Accepted per-rule forms:

        line-length: false
        line-length:
          enabled: true
          severity: error
          parameters: {max: 120}
    """

    def __init__(
        self,
        config_dict: Mapping[str, object],
        registry: RuleRegistry,
        rule_overrides: Optional[Mapping[str, bool]] = None,
        max_line_length: Optional[int] = None,
    ) -> None:
        """Validate and freeze settings. CLI overrides apply after the file."""
        if not isinstance(config_dict, Mapping):
            raise ConfigError(
                f"Configuration must be a mapping of rule id to settings, got {type(config_dict).__name__}."
            )
        self._registry = registry

        unknown = sorted(str(key) for key in config_dict if key not in registry)
        if unknown:
            raise ConfigError(
                f"Unknown rule id(s): {', '.join(unknown)}. "
                f"Known rules: {', '.join(registry.rule_ids)}."
            )

        settings: dict[str, RuleSettings] = {}
        for rule in registry:
            settings[rule.code] = self.build_settings(
                rule.code,
                config_dict.get(rule.code, _UNSET),
                rule.default_enabled,
                rule.default_severity,
                rule.parameters,
            )

        for rule_id, enabled in (rule_overrides or {}).items():
            if rule_id not in registry:
                raise ConfigError(f"Unknown rule id '{rule_id}' in --rule override.")
            current = settings[rule_id]
            settings[rule_id] = RuleSettings(enabled, current.severity, current.parameters)

        if max_line_length is not None:
            if isinstance(max_line_length, bool) or not isinstance(max_line_length, int) or max_line_length < 1:
                raise ConfigError(f"--max-line-length must be a positive integer, got {max_line_length!r}.")
            current = settings["line-length"]
            parameters = dict(current.parameters)
            parameters["max"] = max_line_length
            settings["line-length"] = RuleSettings(
                current.enabled, current.severity, MappingProxyType(parameters)
            )

        self._settings: Mapping[str, RuleSettings] = MappingProxyType(settings)

    @staticmethod
    def build_settings(
        rule_id: str,
        raw: object,
        default_enabled: bool,
        default_severity: Severity,
        schema: Mapping[str, Any],
    ) -> RuleSettings:
        """Turn one rule's raw config value into RuleSettings."""
        enabled = default_enabled
        severity = default_severity
        given: Mapping[str, object] = {}

        if raw is _UNSET:
            pass
        elif raw is True:
            enabled = True
        elif raw is False:
            enabled = False
        elif isinstance(raw, Mapping):
            extra = sorted(str(k) for k in raw if k not in _SETTING_KEYS)
            if extra:
                raise ConfigError(
                    f"Rule '{rule_id}': unknown setting(s) {', '.join(extra)}; "
                    f"expected one of enabled, parameters, severity."
                )
            if "enabled" in raw:
                if not isinstance(raw["enabled"], bool):
                    raise ConfigError(f"Rule '{rule_id}': 'enabled' must be true or false.")
                enabled = raw["enabled"]
            if "severity" in raw:
                severity = ConfigurationLoader.parse_severity(rule_id, raw["severity"])
            if "parameters" in raw:
                if not isinstance(raw["parameters"], Mapping):
                    raise ConfigError(f"Rule '{rule_id}': 'parameters' must be a mapping.")
                given = raw["parameters"]
        else:
            raise ConfigError(
                f"Rule '{rule_id}': expected true, false or a mapping, got {raw!r}."
            )

        parameters: dict[str, Any] = {}
        for name, default in schema.items():
            value = given[name] if name in given else default
            if name in given:
                ConfigurationLoader.check_parameter(rule_id, name, value, default)
            parameters[name] = tuple(value) if isinstance(value, list) else value
        unknown = sorted(str(k) for k in given if k not in schema)
        if unknown:
            known = ", ".join(schema) or "none"
            raise ConfigError(
                f"Rule '{rule_id}': unknown parameter(s) {', '.join(unknown)}; known: {known}."
            )
        return RuleSettings(enabled, severity, MappingProxyType(parameters))

    @staticmethod
    def parse_severity(rule_id: str, value: object) -> Severity:
        if isinstance(value, str):
            for severity in Severity:
                if severity.value == value.lower():
                    return severity
        allowed = ", ".join(s.value for s in Severity)
        raise ConfigError(f"Rule '{rule_id}': invalid severity {value!r}; expected one of {allowed}.")

    @staticmethod
    def check_parameter(rule_id: str, name: str, value: object, default: object) -> None:
        """Type-check a parameter against its default value."""
        where = f"Rule '{rule_id}' parameter '{name}'"
        if isinstance(default, bool):
            if not isinstance(value, bool):
                raise ConfigError(f"{where} must be true or false, got {value!r}.")
        elif isinstance(default, int):
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"{where} must be an integer, got {value!r}.")
            if value < 0 or (name == "max" and value == 0):
                raise ConfigError(f"{where} must be positive, got {value!r}.")
        elif isinstance(default, str):
            if not isinstance(value, str):
                raise ConfigError(f"{where} must be a string, got {value!r}.")
        elif isinstance(default, (list, tuple)):
            if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
                raise ConfigError(f"{where} must be a list of strings, got {value!r}.")

    @staticmethod
    def parse_rule_override(text: str) -> tuple[str, bool]:
        """Parse a `--rule ID=on|off` value."""
        rule_id, sep, state = text.partition("=")
        rule_id = rule_id.strip()
        state = state.strip().lower()
        if not sep or not rule_id:
            raise ConfigError(f"Invalid --rule value {text!r}; expected ID=on or ID=off.")
        if state in _ON:
            return rule_id, True
        if state in _OFF:
            return rule_id, False
        raise ConfigError(f"Invalid --rule state {state!r} for '{rule_id}'; expected on or off.")

    @property
    def registry(self) -> RuleRegistry:
        return self._registry

    @property
    def rule_settings(self) -> Mapping[str, RuleSettings]:
        """Read-only mapping of rule id to its settings."""
        return self._settings

    def settings_for(self, rule_id: str) -> RuleSettings:
        return self._settings[rule_id]
