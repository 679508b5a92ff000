"""
Configuration System

Optional YAML configuration for the scaffolder. Features:
- Built-in defaults so the tool works with no config file at all
- Single-file YAML loading, deep-merged over the defaults
- Environment variable resolution (${VAR}, ${VAR:-default}, $VAR)
- Dotted-path access with a cached default builder

Lookup order for the config file:
1. Explicit path (``--config``)
2. ``ATPL_CONFIG`` environment variable
3. ``./atpl.yml`` in the current working directory
4. ``~/.config/atpl/config.yml``
"""

import copy
import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from atpl.errors import ConfigError

# Use standard logging (not get_logger) to avoid circular imports with logger.py
logger = logging.getLogger("CONFIG")

CONFIG_ENV_VAR = "ATPL_CONFIG"
CONFIG_FILENAME = "atpl.yml"
USER_CONFIG_PATH = Path("~/.config/atpl/config.yml")

DEFAULT_CONFIG: dict[str, Any] = {
    "templates": {
        # auto | local | remote
        "source": "auto",
        "local_root": None,
    },
    "remote": {
        "repo": "soundstep/app-templates",
        "branch": "main",
        "api_url": "https://api.github.com",
        "path": "templates",
        "timeout": 30,
        "token": None,
        "strict": False,
    },
    "logging": {
        "level": "WARNING",
    },
    "cli": {
        "theme": "default",
    },
}


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def find_config_file(config_path: str | None = None) -> Path | None:
    """Locate the configuration file to load, if any.

    Args:
        config_path: Explicit path; wins over every other location

    Returns:
        Path to an existing config file, or None when defaults should be used

    Raises:
        ConfigError: If an explicitly requested file does not exist
    """
    explicit = config_path or os.environ.get(CONFIG_ENV_VAR)
    if explicit:
        path = Path(explicit).expanduser()
        if not path.is_file():
            raise ConfigError(f"Configuration file not found: {path}")
        return path

    for candidate in (Path.cwd() / CONFIG_FILENAME, USER_CONFIG_PATH.expanduser()):
        if candidate.is_file():
            return candidate

    return None


class ConfigBuilder:
    """
    Configuration builder layering an optional YAML file over defaults.

    Attributes:
        config_path: File the values were loaded from (None for pure defaults)
        raw_config: Merged configuration with environment variables resolved
    """

    def __init__(self, config_path: str | None = None):
        """
        Initialize configuration builder.

        Args:
            config_path: Path to a YAML config file. If None, the standard
                lookup order is used and missing files fall back to defaults.

        Raises:
            ConfigError: If the file cannot be parsed or is not a mapping
        """
        # Make tokens in a project-local .env visible to ${VAR} resolution
        dotenv_path = Path.cwd() / ".env"
        if dotenv_path.exists():
            load_dotenv(dotenv_path, override=False)
            logger.debug(f"Loaded .env file from {dotenv_path}")

        self.config_path = find_config_file(config_path)
        file_config = self._load_yaml_file(self.config_path) if self.config_path else {}
        merged = _deep_merge(DEFAULT_CONFIG, file_config)
        self.raw_config = self._resolve_env_vars(merged)

    def _load_yaml_file(self, file_path: Path) -> dict[str, Any]:
        """Load and validate a YAML configuration file."""
        try:
            with open(file_path) as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Error parsing YAML configuration {file_path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Cannot read configuration file {file_path}: {e}") from e

        if config is None:
            logger.warning(f"Configuration file is empty: {file_path}")
            return {}

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a mapping: {file_path}")

        logger.debug(f"Loaded configuration from {file_path}")
        return config

    def _resolve_env_vars(self, data: Any) -> Any:
        """Recursively resolve environment variables in configuration data.

        Supports both simple and bash-style default value syntax:
        - ${VAR_NAME} - simple substitution
        - ${VAR_NAME:-default_value} - with default value
        - $VAR_NAME - simple substitution without braces
        """
        if isinstance(data, dict):
            return {key: self._resolve_env_vars(value) for key, value in data.items()}
        elif isinstance(data, list):
            return [self._resolve_env_vars(item) for item in data]
        elif isinstance(data, str):

            def replace_env_var(match):
                if match.group(1):
                    var_name = match.group(1)
                    default_value = match.group(2)
                else:
                    var_name = match.group(3)
                    default_value = None

                env_value = os.environ.get(var_name)
                if env_value is None:
                    if default_value is not None:
                        return default_value
                    logger.debug(f"Environment variable '{var_name}' not found, keeping it as is")
                    return match.group(0)
                return env_value

            pattern = r"\$\{([^}:]+)(?::-(.*?))?\}|\$([A-Za-z_][A-Za-z0-9_]*)"
            return re.sub(pattern, replace_env_var, data)
        else:
            return data

    def get(self, path: str, default: Any = None) -> Any:
        """Get configuration value using dot notation path."""
        keys = path.split(".")
        value = self.raw_config

        try:
            for key in keys:
                value = value[key]
        except (KeyError, TypeError):
            return default
        return default if value is None else value


# =============================================================================
# GLOBAL CONFIGURATION
# =============================================================================

_default_config: ConfigBuilder | None = None

# Per-path config cache for explicit config paths
_config_cache: dict[str, ConfigBuilder] = {}


def get_config(config_path: str | None = None) -> ConfigBuilder:
    """Get the configuration builder, loading it on first use.

    Args:
        config_path: Optional explicit config file; cached per resolved path

    Returns:
        ConfigBuilder for the default lookup or the explicit path
    """
    global _default_config

    if config_path is None:
        if _default_config is None:
            _default_config = ConfigBuilder()
        return _default_config

    resolved_path = str(Path(config_path).expanduser().resolve())
    if resolved_path not in _config_cache:
        _config_cache[resolved_path] = ConfigBuilder(resolved_path)
    return _config_cache[resolved_path]


def use_config(config_path: str | None) -> ConfigBuilder:
    """Load a configuration and make it the default for later lookups."""
    global _default_config
    _default_config = get_config(config_path) if config_path else ConfigBuilder()
    return _default_config


def reset_config() -> None:
    """Drop cached configuration so the next lookup reloads from disk."""
    global _default_config
    _default_config = None
    _config_cache.clear()


def get_config_value(path: str, default: Any = None, config_path: str | None = None) -> Any:
    """
    Get a specific configuration value by dot-separated path.

    Args:
        path: Dot-separated configuration path (e.g., "remote.branch")
        default: Default value to return if path is not found
        config_path: Optional explicit path to configuration file

    Returns:
        The configuration value at the specified path, or default if not found

    Raises:
        ValueError: If path is empty or None

    Examples:
        >>> get_config_value("remote.repo")
        'soundstep/app-templates'
        >>> get_config_value("remote.timeout", 30)
        30
    """
    if not path:
        raise ValueError("Configuration path cannot be empty or None")

    return get_config(config_path).get(path, default)
