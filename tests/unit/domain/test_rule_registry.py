"""Unit tests for RuleRegistry."""

import pytest

from declint.domain.config import ConfigurationLoader
from declint.domain.errors import ConfigurationError
from declint.domain.rule_registry import RuleRegistry
from declint.domain.rules import RuleKind, Severity
from declint.domain.rules.deployment_target import DeploymentTargetRule
from declint.domain.rules.no_extension_access_modifier import NoExtensionAccessModifierRule


class TestRuleRegistry:
    """Enabled rules honour opt-in and disabled lists."""

    def _config(self, config: dict) -> ConfigurationLoader:
        return ConfigurationLoader(config, RuleRegistry.identifiers())

    def test_metadata(self) -> None:
        descriptions = {d.identifier: d for d in RuleRegistry.descriptions()}
        assert descriptions["deployment_target"].kind is RuleKind.LINT
        assert descriptions["deployment_target"].default_severity is Severity.WARNING
        assert descriptions["no_extension_access_modifier"].kind is RuleKind.IDIOMATIC
        assert descriptions["no_extension_access_modifier"].opt_in

    def test_defaults_exclude_opt_in_rules(self) -> None:
        rules = RuleRegistry.enabled_rules(self._config({}))
        assert [type(rule) for rule in rules] == [DeploymentTargetRule]

    def test_opt_in_and_disable(self) -> None:
        rules = RuleRegistry.enabled_rules(
            self._config(
                {
                    "opt_in_rules": ["no_extension_access_modifier"],
                    "disabled_rules": ["deployment_target"],
                    "no_extension_access_modifier": {"severity": "warning"},
                }
            )
        )
        assert len(rules) == 1
        assert isinstance(rules[0], NoExtensionAccessModifierRule)
        assert rules[0].configuration.severity is Severity.WARNING

    def test_rule_options_are_applied(self) -> None:
        [rule] = RuleRegistry.enabled_rules(
            self._config({"deployment_target": {"iOS_deployment_target": "11.0"}})
        )
        assert str(rule.configuration.ios) == "11.0.0"

    def test_invalid_options_fail_at_construction(self) -> None:
        with pytest.raises(ConfigurationError):
            RuleRegistry.create("deployment_target", {"iOS_deployment_target": "x"})
