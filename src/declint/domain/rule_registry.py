"""Registry of available rules and construction of the enabled set from configuration."""

from collections.abc import Callable, Mapping
from typing import ClassVar

from declint.domain.config import (
    ConfigurationLoader,
    DeploymentTargetConfiguration,
    SeverityConfiguration,
)
from declint.domain.rules import Rule, RuleDescription
from declint.domain.rules.deployment_target import DeploymentTargetRule
from declint.domain.rules.no_extension_access_modifier import NoExtensionAccessModifierRule


class RuleRegistry:
    """Maps rule identifiers to factories taking that rule's option mapping."""

    _FACTORIES: ClassVar[dict[str, Callable[[Mapping[str, object]], Rule]]] = {
        DeploymentTargetRule.description.identifier: lambda options: DeploymentTargetRule(
            DeploymentTargetConfiguration.from_options(options)
        ),
        NoExtensionAccessModifierRule.description.identifier: lambda options: NoExtensionAccessModifierRule(
            SeverityConfiguration.from_options(
                options,
                NoExtensionAccessModifierRule.description.default_severity,
                NoExtensionAccessModifierRule.description.identifier,
            )
        ),
    }

    _DESCRIPTIONS: ClassVar[tuple[RuleDescription, ...]] = (
        DeploymentTargetRule.description,
        NoExtensionAccessModifierRule.description,
    )

    @classmethod
    def identifiers(cls) -> frozenset[str]:
        return frozenset(cls._FACTORIES)

    @classmethod
    def descriptions(cls) -> list[RuleDescription]:
        """All rule descriptions, sorted by identifier."""
        return sorted(cls._DESCRIPTIONS, key=lambda description: description.identifier)

    @classmethod
    def create(cls, identifier: str, options: Mapping[str, object] | None = None) -> Rule:
        """Construct one rule; ConfigurationError surfaces here, never in validate()."""
        return cls._FACTORIES[identifier](options or {})

    @classmethod
    def enabled_rules(cls, config: ConfigurationLoader) -> list[Rule]:
        """Default rules not disabled, plus opt-in rules listed in opt_in_rules."""
        rules: list[Rule] = []
        for description in cls.descriptions():
            identifier = description.identifier
            if identifier in config.disabled_rules:
                continue
            if description.opt_in and identifier not in config.opt_in_rules:
                continue
            rules.append(cls.create(identifier, config.rule_options(identifier)))
        return rules
