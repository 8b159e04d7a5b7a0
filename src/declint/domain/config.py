"""Rule configuration value objects. Validated once at construction, read-only afterwards."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import ClassVar

from declint.domain.errors import ConfigurationError
from declint.domain.rules import Severity
from declint.domain.versions import PlatformThresholds, Version


class _Options:
    """Helpers shared by the per-rule configuration parsers."""

    @staticmethod
    def check_keys(options: Mapping[str, object], allowed: frozenset[str], rule: str) -> None:
        unknown = sorted(str(key) for key in options if key not in allowed)
        if unknown:
            raise ConfigurationError(f"{rule}: unknown option(s) {', '.join(unknown)}")

    @staticmethod
    def severity(value: object, rule: str) -> Severity:
        if isinstance(value, str):
            try:
                return Severity(value.strip().lower())
            except ValueError:
                pass
        raise ConfigurationError(f"{rule}: severity must be 'warning' or 'error', got {value!r}")


@dataclass(frozen=True)
class SeverityConfiguration:
    severity: Severity

    @classmethod
    def from_options(
        cls, options: Mapping[str, object], default: Severity, rule: str
    ) -> SeverityConfiguration:
        _Options.check_keys(options, frozenset({"severity"}), rule)
        if "severity" not in options:
            return cls(default)
        return cls(_Options.severity(options["severity"], rule))


@dataclass(frozen=True)
class DeploymentTargetConfiguration:
    """Minimum OS versions the project deploys to."""

    ios: Version = field(default_factory=lambda: Version(7, 0))
    macos: Version = field(default_factory=lambda: Version(10, 9))
    tvos: Version = field(default_factory=lambda: Version(9, 0))
    watchos: Version = field(default_factory=lambda: Version(1, 0))
    severity: Severity = Severity.WARNING

    OPTION_KEYS: ClassVar[dict[str, str]] = {
        "iOS_deployment_target": "ios",
        "macOS_deployment_target": "macos",
        "tvOS_deployment_target": "tvos",
        "watchOS_deployment_target": "watchos",
    }

    @classmethod
    def from_options(cls, options: Mapping[str, object]) -> DeploymentTargetConfiguration:
        """Build from a mapping such as {'iOS_deployment_target': '9.0', 'severity': 'error'}."""
        rule = "deployment_target"
        _Options.check_keys(options, frozenset(cls.OPTION_KEYS) | {"severity"}, rule)
        values: dict[str, object] = {}
        for key, attribute in cls.OPTION_KEYS.items():
            if key in options:
                values[attribute] = Version.from_config(options[key], f"{rule}.{key}")
        if "severity" in options:
            values["severity"] = _Options.severity(options["severity"], rule)
        return cls(**values)  # type: ignore[arg-type]

    @property
    def thresholds(self) -> PlatformThresholds:
        return PlatformThresholds(
            {
                "iOS": self.ios,
                "macOS": self.macos,
                "tvOS": self.tvos,
                "watchOS": self.watchos,
            }
        )


class ConfigurationLoader:
    """
    Immutable project configuration built from a parsed config mapping.

    Infrastructure reads the file (ConfigFileLoader) and constructs this at
    the composition root; the domain never touches the filesystem.
    """

    _TOP_LEVEL_KEYS: ClassVar[frozenset[str]] = frozenset({"opt_in_rules", "disabled_rules"})

    def __init__(self, config_dict: Mapping[str, object], known_rules: frozenset[str]) -> None:
        self._config = dict(config_dict)
        self._known_rules = known_rules
        self._opt_in_rules = self._rule_list("opt_in_rules")
        self._disabled_rules = self._rule_list("disabled_rules")
        for key, value in self._config.items():
            if key in self._TOP_LEVEL_KEYS:
                continue
            if key not in known_rules:
                raise ConfigurationError(f"unknown rule or option '{key}'")
            if not isinstance(value, Mapping):
                raise ConfigurationError(f"{key}: options must be a mapping, got {value!r}")

    def _rule_list(self, key: str) -> frozenset[str]:
        raw = self._config.get(key, [])
        if raw is None:
            return frozenset()
        if not isinstance(raw, list) or not all(isinstance(item, str) for item in raw):
            raise ConfigurationError(f"{key}: expected a list of rule identifiers")
        unknown = sorted(set(raw) - self._known_rules)
        if unknown:
            raise ConfigurationError(f"{key}: unknown rule(s) {', '.join(unknown)}")
        return frozenset(raw)

    @property
    def opt_in_rules(self) -> frozenset[str]:
        return self._opt_in_rules

    @property
    def disabled_rules(self) -> frozenset[str]:
        return self._disabled_rules

    def rule_options(self, identifier: str) -> Mapping[str, object]:
        """Options mapping for one rule; empty when the rule is not configured."""
        raw = self._config.get(identifier, {})
        return raw if isinstance(raw, Mapping) else {}
