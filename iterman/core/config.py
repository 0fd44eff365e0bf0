"""Configuration management for iterman.

Standardizes on ``iterman.toml``. Search order (first match wins):

1. Explicit path passed to :class:`Config`
2. Current directory
3. ~/.config/iterman/
4. /etc/iterman/
"""

import copy
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import toml

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "iterman.toml"

DEFAULT_CONFIG: Dict[str, Any] = {
    "defaults": {
        "encoding": "utf-8",
        "round_robin": False,
    },
    "logging": {
        "level": "INFO",
        "file": "",
    },
    "lists": {},
}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_MISSING = object()


def _find_config_file(filename: str = CONFIG_FILENAME) -> Optional[Path]:
    """Find configuration file using the standard search order."""
    search_locations = [
        Path.cwd(),
        Path.home() / ".config" / "iterman",
        Path("/etc/iterman"),
    ]

    for location in search_locations:
        config_path = location / filename
        if config_path.exists() and config_path.is_file():
            return config_path

    return None


def _merge_config(base: Dict[str, Any], override: Dict[str, Any]) -> None:
    """Recursively merge ``override`` into ``base``."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _merge_config(base[key], value)
        else:
            base[key] = value


class Config:
    """Configuration loaded from toml and merged over defaults."""

    def __init__(
        self, config_path: Union[str, Path, None] = None, search: bool = True
    ) -> None:
        """Load configuration.

        Args:
            config_path: Explicit file to load; must exist when given
            search: Whether to look in the standard locations when no path
                is given. With ``search=False`` only defaults are used.
        """
        self._config = copy.deepcopy(DEFAULT_CONFIG)
        self.path: Optional[Path] = None

        if config_path is not None:
            config_path = Path(config_path)
            if not config_path.is_file():
                raise ConfigurationError(f"Configuration file not found: {config_path}")
        elif search:
            config_path = _find_config_file()

        if config_path is None:
            logger.debug(f"Using default configuration (no {CONFIG_FILENAME} found)")
            return

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                loaded_config = toml.load(f)
        except (OSError, toml.TomlDecodeError) as e:
            raise ConfigurationError(
                f"Failed to load config from {config_path}: {e}",
                {"path": str(config_path)},
            ) from e

        _merge_config(self._config, loaded_config)
        self.path = config_path
        logger.info(f"Configuration loaded from {config_path}")

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> "Config":
        """Build a configuration from a dictionary instead of a file."""
        config = cls(search=False)
        _merge_config(config._config, copy.deepcopy(values))
        return config

    def get(self, section: str, key: str, default: Any = _MISSING) -> Any:
        """Get a configuration value."""
        try:
            return self._config[section][key]
        except KeyError:
            if default is not _MISSING:
                return default
            raise ConfigurationError(f"Configuration key '{section}.{key}' not found")

    def get_section(self, section: str) -> Dict[str, Any]:
        """Get an entire configuration section."""
        try:
            return self._config[section]
        except KeyError:
            raise ConfigurationError(f"Configuration section '{section}' not found")

    @property
    def defaults(self) -> Dict[str, Any]:
        return self.get_section("defaults")

    @property
    def logging(self) -> Dict[str, Any]:
        return self.get_section("logging")

    @property
    def lists(self) -> Dict[str, Dict[str, Any]]:
        return self.get_section("lists")

    @property
    def config(self) -> Dict[str, Any]:
        """Get the full configuration dictionary."""
        return self._config

    def validate(self) -> None:
        """Validate configuration completeness and correctness."""
        level = str(self.get("logging", "level")).upper()
        if level not in LOG_LEVELS:
            raise ConfigurationError(f"Unknown logging level: {level}")

        if not isinstance(self.get("defaults", "round_robin"), bool):
            raise ConfigurationError("defaults.round_robin must be true or false")

        for name, declaration in self.lists.items():
            if not isinstance(declaration, dict):
                raise ConfigurationError(f"List '{name}' must be a table")

            has_items = "items" in declaration
            has_path = "path" in declaration
            if has_items == has_path:
                raise ConfigurationError(
                    f"List '{name}' must declare exactly one of 'items' or 'path'"
                )
            if has_items and not isinstance(declaration["items"], list):
                raise ConfigurationError(f"lists.{name}.items must be an array")
            if "round_robin" in declaration and not isinstance(
                declaration["round_robin"], bool
            ):
                raise ConfigurationError(f"lists.{name}.round_robin must be true or false")


def manager_from_config(config: Config, base_dir: Union[str, Path, None] = None):
    """Build a ListManager holding every list declared under ``[lists]``.

    Relative paths are resolved against ``base_dir``, falling back to the
    directory of the loaded config file and then the current directory.
    """
    from ..lists.list_factory import ListFactory
    from ..manager import ListManager
    from .logging_config import LogContext

    config.validate()

    if base_dir is None:
        base_dir = config.path.parent if config.path is not None else Path.cwd()
    base_dir = Path(base_dir)

    encoding = config.get("defaults", "encoding")
    default_round_robin = config.get("defaults", "round_robin")

    manager = ListManager()
    with LogContext("build lists"):
        for name, declaration in config.lists.items():
            round_robin = declaration.get("round_robin", default_round_robin)
            list_encoding = declaration.get("encoding", encoding)

            if "items" in declaration:
                source = list(declaration["items"])
            else:
                source = Path(declaration["path"]).expanduser()
                if not source.is_absolute():
                    source = base_dir / source

            try:
                items = ListFactory.create_list(
                    source, round_robin=round_robin, encoding=list_encoding
                )
            except Exception:
                manager.close()
                raise
            manager.add_list(name, items)
    return manager
