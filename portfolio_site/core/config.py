"""
Configuration management for the portfolio site builder.

This module provides the `ConfigurationManager` class to load and access
configuration settings from YAML files. It supports environment-specific
configurations (e.g., development, production) and allows easy access to
nested configuration values.

Key Features:
- Loads settings from YAML files based on the APP_ENV environment variable.
- Defaults to 'development' environment if APP_ENV is not set.
- Supports dot notation for accessing nested keys (e.g., "components.skills.max_skills").
- Custom exceptions for configuration-related errors.
"""
import os
import yaml
from typing import Any, Dict, Optional

from portfolio_site.core.exceptions import ConfigurationError

# CONFIG_DIR: Path to the directory containing configuration YAML files
# (development.yaml, production.yaml, ...), shipped inside the package.
CONFIG_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "config")

# DEFAULT_ENV: The default environment to use if APP_ENV is not set.
DEFAULT_ENV = "development"


class ConfigError(ConfigurationError):
    """Base class for errors raised while loading configuration files."""
    pass


class ConfigFileNotFoundError(ConfigError):
    """Raised when a specific configuration file (e.g., development.yaml) cannot be found."""
    pass


class InvalidYamlError(ConfigError):
    """Raised when a configuration file contains invalid YAML syntax or is not a dictionary."""
    pass


class ConfigurationManager:
    """
    Manages loading and accessing configuration settings from YAML files.

    Each instance owns its settings; callers create one at startup (see
    `load_configuration`) and pass it to the components that need it.
    """

    def __init__(self, env: Optional[str] = None, config_dir: Optional[str] = None, autoload: bool = True):
        """
        Args:
            env (Optional[str]): Environment to load. If None, uses APP_ENV or DEFAULT_ENV.
            config_dir (Optional[str]): Directory holding the YAML files. Defaults to CONFIG_DIR.
            autoload (bool): Load the configuration immediately. Defaults to True.

        Raises:
            ConfigFileNotFoundError: If autoload is set and the YAML file is missing.
            InvalidYamlError: If autoload is set and the YAML file is malformed.
        """
        self.config_dir = config_dir or CONFIG_DIR
        self._config: Dict[str, Any] = {}
        self._current_env: str = ""
        if autoload:
            self.load_config(env)

    def load_config(self, env: Optional[str] = None) -> None:
        """
        Loads configuration from a YAML file corresponding to the specified environment.

        The environment is determined in the following order of precedence:
        1. The `env` parameter passed to this method.
        2. The `APP_ENV` environment variable.
        3. `DEFAULT_ENV` (if neither of the above is set).

        Args:
            env (Optional[str]): The specific environment name (e.g., "production") to load.

        Raises:
            ConfigFileNotFoundError: If the YAML file for the target environment is not found.
            InvalidYamlError: If the YAML file is malformed or not a dictionary.
        """
        self._current_env = env or os.getenv("APP_ENV", DEFAULT_ENV)
        config_file_path = os.path.join(self.config_dir, f"{self._current_env}.yaml")

        try:
            with open(config_file_path, "r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f)
        except FileNotFoundError:
            raise ConfigFileNotFoundError(
                f"Configuration file not found for environment '{self._current_env}' at '{config_file_path}'. "
                f"Ensure '{self._current_env}.yaml' exists in the '{self.config_dir}' directory."
            )
        except yaml.YAMLError as e:
            raise InvalidYamlError(
                f"Error parsing YAML in configuration file '{config_file_path}': {e}"
            )
        if not isinstance(loaded, dict):
            raise InvalidYamlError(
                f"Configuration file '{config_file_path}' does not contain a valid YAML dictionary."
            )
        self._config = loaded

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        """
        Retrieves a configuration value for the given key.

        Supports accessing nested values using dot notation (e.g., "content.url").
        If the key is not found, returns the provided default value.

        Args:
            key (str): The configuration key to retrieve.
            default (Optional[Any]): The value to return if the key is not found.

        Returns:
            Any: The configuration value if found, otherwise the default value.
        """
        value: Any = self._config
        for k_part in key.split("."):
            if not isinstance(value, dict) or k_part not in value:
                return default
            value = value[k_part]
        return value

    def reload_config(self, env: Optional[str] = None) -> None:
        """
        Reloads the configuration, potentially for a different environment.

        Args:
            env (Optional[str]): The environment to reload. If None, reloads the
                                 currently active environment.
        """
        self.load_config(env or self._current_env or None)

    @property
    def current_environment(self) -> str:
        """The name of the currently loaded configuration environment."""
        return self._current_env

    @property
    def is_loaded(self) -> bool:
        return bool(self._config)


def load_configuration(env: Optional[str] = None, config_dir: Optional[str] = None) -> ConfigurationManager:
    """
    Creates and loads a `ConfigurationManager`.

    Args:
        env (Optional[str]): Environment name; APP_ENV or DEFAULT_ENV when omitted.
        config_dir (Optional[str]): Alternative directory of YAML files.

    Returns:
        ConfigurationManager: The loaded configuration.
    """
    return ConfigurationManager(env=env, config_dir=config_dir)
