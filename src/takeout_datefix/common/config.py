"""Layered TOML configuration loading."""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Generic, Optional, Type, TypeVar

import platformdirs
import toml
from pydantic import BaseModel, ValidationError

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

T = TypeVar('T', bound=BaseModel)

# Nested keys in environment overrides are separated by a double underscore:
#   TAKEOUT_DATEFIX_EXIFTOOL__TIMEOUT_SECONDS=60 -> exiftool.timeout_seconds
ENV_NESTING_SEPARATOR = "__"


class ConfigLoader(Generic[T]):
    """Loads configuration from multiple sources, later sources winning.

    Order:
        1. explicit file passed to ``load()`` (or ``./config/defaults.toml``)
        2. system config (``/etc/<app>/config.toml`` or ``%PROGRAMDATA%``)
        3. user config (``platformdirs.user_config_dir(<app>)/config.toml``)
        4. ``<APP>_*`` environment variables
    """

    def __init__(self, config_class: Type[T], app_name: str = "takeout-datefix") -> None:
        self.app_name = app_name
        self.config_class = config_class
        self.env_prefix = f"{app_name.upper().replace('-', '_')}_"

    def load(self, config_path: Optional[Path] = None) -> T:
        """Load and validate configuration from all sources.

        Raises:
            ConfigurationError: If a file cannot be parsed or validation fails
        """
        config_dict = self._load_defaults(config_path)

        for layer in (self._load_system_config(), self._load_user_config()):
            if layer:
                config_dict = self._deep_merge(config_dict, layer)

        config_dict = self._apply_env_overrides(config_dict)

        try:
            return self.config_class(**config_dict)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}", app=self.app_name) from e

    def _read_toml(self, path: Path) -> Dict[str, Any]:
        logger.debug(f"Loading config file: {{'path': {str(path)!r}}}")
        try:
            return toml.load(path)
        except (toml.TomlDecodeError, OSError) as e:
            raise ConfigurationError(f"Cannot read config file {path}: {e}", path=str(path)) from e

    def _load_defaults(self, config_path: Optional[Path]) -> Dict[str, Any]:
        if config_path is not None:
            if not config_path.exists():
                raise ConfigurationError(f"Config file not found: {config_path}", path=str(config_path))
            return self._read_toml(config_path)

        defaults = Path.cwd() / "config" / "defaults.toml"
        if defaults.exists():
            return self._read_toml(defaults)
        return {}

    def _load_system_config(self) -> Optional[Dict[str, Any]]:
        if os.name == "nt":
            system_path = (
                Path(os.environ.get("PROGRAMDATA", "C:\\ProgramData"))
                / self.app_name
                / "config.toml"
            )
        else:
            system_path = Path(f"/etc/{self.app_name}/config.toml")

        if system_path.exists():
            return self._read_toml(system_path)
        return None

    def _load_user_config(self) -> Optional[Dict[str, Any]]:
        user_config_dir = platformdirs.user_config_dir(appname=self.app_name, appauthor=False)
        user_config_path = Path(user_config_dir) / "config.toml"

        if user_config_path.exists():
            return self._read_toml(user_config_path)

        logger.debug(f"User config not found: {{'path': {str(user_config_path)!r}}}")
        return None

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def _apply_env_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        for env_key, env_value in os.environ.items():
            if not env_key.startswith(self.env_prefix):
                continue

            key_path = env_key[len(self.env_prefix):].lower().split(ENV_NESTING_SEPARATOR)

            current = config
            for part in key_path[:-1]:
                current = current.setdefault(part, {})

            current[key_path[-1]] = self._convert_env_value(env_value)

        return config

    def _convert_env_value(self, value: str) -> Any:
        """Convert an environment string to bool, int, float or leave it as str."""
        if value.lower() in ("true", "yes"):
            return True
        if value.lower() in ("false", "no"):
            return False

        try:
            if "." in value:
                return float(value)
            return int(value)
        except ValueError:
            return value
