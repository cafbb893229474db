"""Configuration management for the application."""
from __future__ import annotations
import copy
import json
import logging
import os
from typing import Dict, Any, Optional

import yaml
from pydantic import ValidationError

from src.config.defaults import CONFIG_FILE_ENV_VAR, DEFAULT_CONFIG, ENV_OVERRIDES
from src.config.schemas import AppConfig
from src.config.utils.env_expansion import expand_config_env_vars
from src.domain.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def _deep_update(target: Dict[str, Any], source: Dict[str, Any]) -> None:
    for key, value in source.items():
        if key in target and isinstance(target[key], dict) and isinstance(value, dict):
            _deep_update(target[key], value)
        else:
            target[key] = value


class ConfigurationManager:
    """
    Manages application configuration with defaults and overrides.

    Sources, lowest priority first:
    - Built-in defaults
    - Configuration file (JSON or YAML), from ``config_file`` or $ASG_AGE_CONFIG
    - Environment variables (ASG_AGE_REGION, ASG_AGE_LOG_LEVEL, ...)
    - Explicit overrides, usually command line flags

    ``$VAR`` / ``${VAR:default}`` references in values are expanded before
    the result is validated into an AppConfig.
    """

    def __init__(self, config_file: Optional[str] = None):
        self._config_file = config_file or os.environ.get(CONFIG_FILE_ENV_VAR)
        self._config: Dict[str, Any] = copy.deepcopy(DEFAULT_CONFIG)
        self._app_config: Optional[AppConfig] = None

        if self._config_file:
            self._load_config_file(self._config_file)
        self._load_env_vars()

    def _load_config_file(self, config_path: str) -> None:
        """Load configuration from file."""
        if not os.path.exists(config_path):
            raise ConfigurationError(f"Configuration file not found: {config_path}")
        try:
            with open(config_path, 'r') as f:
                if config_path.endswith(('.yml', '.yaml')):
                    user_config = yaml.safe_load(f) or {}
                else:
                    user_config = json.load(f)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to load configuration: {str(e)}")
        if not isinstance(user_config, dict):
            raise ConfigurationError(f"Configuration file must contain a mapping: {config_path}")
        logger.debug(f"Loaded configuration from {config_path}")
        _deep_update(self._config, user_config)

    def _load_env_vars(self) -> None:
        """Load and apply environment variable overrides."""
        for env_var, path in ENV_OVERRIDES.items():
            if env_var in os.environ:
                self._set_nested_value(path, os.environ[env_var])

    def _set_nested_value(self, path: tuple, value: Any) -> None:
        current = self._config
        for key in path[:-1]:
            current = current.setdefault(key, {})
        current[path[-1]] = value

    def apply_overrides(self, overrides: Dict[str, Any]) -> None:
        """
        Apply explicit overrides on top of every other source.

        Args:
            overrides: Nested configuration dictionary; None values are ignored
        """
        def prune(data: Dict[str, Any]) -> Dict[str, Any]:
            return {
                k: prune(v) if isinstance(v, dict) else v
                for k, v in data.items() if v is not None
            }

        _deep_update(self._config, prune(overrides))
        self._app_config = None

    def get_config(self) -> Dict[str, Any]:
        """Get the merged configuration with environment references expanded."""
        return expand_config_env_vars(self._config)

    @property
    def app_config(self) -> AppConfig:
        """Validated application configuration."""
        if self._app_config is None:
            try:
                self._app_config = AppConfig.from_dict(self.get_config())
            except ValidationError as e:
                raise ConfigurationError(f"Invalid configuration: {e}")
        return self._app_config
