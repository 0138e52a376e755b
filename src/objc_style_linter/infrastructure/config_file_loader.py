"""Load the rule configuration from YAML or TOML files. Infrastructure I/O only."""

import logging
import tomllib
from pathlib import Path
from typing import Optional

import yaml

from objc_style_linter.domain.errors import ConfigError

logger = logging.getLogger(__name__)

TOOL_SECTION = "objc-style"
CONFIG_FILE_NAMES = (".objc-style.yml", ".objc-style.yaml")


class ConfigFileLoader:
    """
    Loads config from `.objc-style.yml` or `pyproject.toml`. No top-level functions.
    """

    def load(self, explicit_path: Optional[str] = None) -> tuple[dict[str, object], Optional[str]]:
        """`--config` file when given, otherwise the nearest config above the working directory."""
        if explicit_path:
            return ConfigFileLoader.load_file(explicit_path), explicit_path
        return ConfigFileLoader.load_config_from_fs()

    @staticmethod
    def load_config_from_fs(start: Optional[str] = None) -> tuple[dict[str, object], Optional[str]]:
        """
        Walk up from `start` (default: cwd) to the first directory holding a config.

        In each directory `.objc-style.yml` / `.objc-style.yaml` win over a
        `pyproject.toml`, and a pyproject without a [tool.objc-style] table is
        skipped. Returns (config_dict, path) or ({}, None) when nothing is found.
        """
        current_path = Path(start).resolve() if start else Path.cwd()
        for directory in (current_path, *current_path.parents):
            for name in CONFIG_FILE_NAMES:
                candidate = directory / name
                if candidate.is_file():
                    return ConfigFileLoader.load_file(str(candidate)), str(candidate)
            pyproject = directory / "pyproject.toml"
            if pyproject.is_file():
                data = ConfigFileLoader.read_toml(pyproject)
                tool_section = data.get("tool", {}) or {}
                if TOOL_SECTION in tool_section:
                    return ConfigFileLoader.as_mapping(tool_section[TOOL_SECTION], pyproject), str(pyproject)
        return {}, None

    @staticmethod
    def load_file(path: str) -> dict[str, object]:
        """Load an explicitly named config file (.yml, .yaml or .toml)."""
        config_path = Path(path)
        if not config_path.is_file():
            raise ConfigError(f"Config file not found: {path}")
        suffix = config_path.suffix.lower()
        if suffix in (".yml", ".yaml"):
            try:
                with config_path.open(encoding="utf-8") as f:
                    data = yaml.safe_load(f)
            except yaml.YAMLError as exc:
                raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
            except OSError as exc:
                raise ConfigError(f"Cannot read {path}: {exc}") from exc
            return ConfigFileLoader.as_mapping(data if data is not None else {}, config_path)
        if suffix == ".toml":
            data = ConfigFileLoader.read_toml(config_path)
            if config_path.name == "pyproject.toml":
                data = (data.get("tool", {}) or {}).get(TOOL_SECTION, {})
            return ConfigFileLoader.as_mapping(data, config_path)
        raise ConfigError(f"Unsupported config file type '{suffix}' for {path}; use .yml, .yaml or .toml.")

    @staticmethod
    def read_toml(path: Path) -> dict[str, object]:
        try:
            with path.open("rb") as f:
                return tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc
        except OSError as exc:
            raise ConfigError(f"Cannot read {path}: {exc}") from exc

    @staticmethod
    def as_mapping(data: object, path: Path) -> dict[str, object]:
        if not isinstance(data, dict):
            raise ConfigError(f"{path}: top level must be a mapping of rule id to settings.")
        logger.debug("Loaded configuration from %s", path)
        return data
