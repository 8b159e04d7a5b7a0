from pathlib import Path
from typing import Any, cast

from declint.domain.config import ConfigurationLoader
from declint.domain.protocols import StructureProviderProtocol
from declint.domain.rule_registry import RuleRegistry
from declint.domain.rules import Rule
from declint.infrastructure.config_file_loader import ConfigFileLoader
from declint.infrastructure.gateways.sourcekitten_gateway import SourceKittenGateway


class DeclintContainer:
    """Dependency Injection Container for declint. Config is loaded lazily so --config can override it."""

    def __init__(self, config_path: Path | None = None) -> None:
        self._config_path = config_path
        self._singletons: dict[str, Any] = {}
        self.register_singleton("StructureProvider", SourceKittenGateway())

    def register_singleton(self, name: str, instance: Any) -> None:
        self._singletons[name] = instance

    def get(self, name: str) -> Any:
        if name not in self._singletons:
            raise KeyError(f"No provider registered for {name}")
        return self._singletons[name]

    def get_config_loader(self) -> ConfigurationLoader:
        """Load and validate configuration on first use; raises ConfigurationError."""
        if "ConfigurationLoader" not in self._singletons:
            if self._config_path is not None:
                config_dict = ConfigFileLoader.load_yaml(self._config_path)
            else:
                config_dict = ConfigFileLoader.load_config_from_fs()
            self.register_singleton(
                "ConfigurationLoader", ConfigurationLoader(config_dict, RuleRegistry.identifiers())
            )
        return cast(ConfigurationLoader, self.get("ConfigurationLoader"))

    def get_rules(self) -> list[Rule]:
        if "Rules" not in self._singletons:
            self.register_singleton("Rules", RuleRegistry.enabled_rules(self.get_config_loader()))
        return cast(list[Rule], self.get("Rules"))

    def get_structure_provider(self) -> StructureProviderProtocol:
        return cast(StructureProviderProtocol, self.get("StructureProvider"))
