"""Load .declint.yml, or [tool.declint] from pyproject.toml. Infrastructure I/O only."""

import tomllib
from pathlib import Path

import yaml

from declint.domain.constants import CONFIG_FILE_NAME, PYPROJECT_TOOL_SECTION
from declint.domain.errors import ConfigurationError


class ConfigFileLoader:
    """
    Finds and parses the project configuration. No top-level functions.

    Discovery walks from the start directory up to the filesystem root; the
    nearest .declint.yml wins, then the nearest pyproject.toml that has a
    [tool.declint] table.
    """

    @staticmethod
    def load_config_from_fs(start: Path | None = None) -> dict[str, object]:
        current_path = (start or Path.cwd()).resolve()
        for directory in (current_path, *current_path.parents):
            config_file = directory / CONFIG_FILE_NAME
            if config_file.is_file():
                return ConfigFileLoader.load_yaml(config_file)
            pyproject = directory / "pyproject.toml"
            if pyproject.is_file():
                section = ConfigFileLoader.load_pyproject_section(pyproject)
                if section is not None:
                    return section
        return {}

    @staticmethod
    def load_yaml(config_file: Path) -> dict[str, object]:
        try:
            with config_file.open(encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"{config_file}: invalid YAML: {exc}") from exc
        except OSError as exc:
            raise ConfigurationError(f"{config_file}: {exc.strerror or exc}") from exc
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"{config_file}: top level must be a mapping")
        return data

    @staticmethod
    def load_pyproject_section(pyproject: Path) -> dict[str, object] | None:
        """Return [tool.declint] or None when the table is absent."""
        try:
            with pyproject.open("rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigurationError(f"{pyproject}: invalid TOML: {exc}") from exc
        except OSError as exc:
            raise ConfigurationError(f"{pyproject}: {exc.strerror or exc}") from exc
        section = data.get("tool", {}).get(PYPROJECT_TOOL_SECTION)
        return section if isinstance(section, dict) else None
