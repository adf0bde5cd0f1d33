"""Configuration manager for stepshell."""

from typing import Dict, Any, Optional
from pathlib import Path
import os

import yaml

from ..constants import (
    CONFIG_DIR, DEFAULT_API_KEY_ENV,
    DEFAULT_DENIAL_POLICY, DEFAULT_REQUEST_TIMEOUT, DEFAULT_ENABLE_DEBUG, DENIAL_POLICIES
)
from ..core.errors import ConfigurationError
from ..utils.logging import logger
from ..utils.helpers import safe_file_write
from .templates import CONFIG_TEMPLATE, PAYLOAD_TEMPLATE


class ConfigManager:
    """Manages configuration loading, validation, and setup for stepshell."""

    REQUIRED_FIELDS = ["endpoint", "model", "response_path", "system_prompt"]

    def __init__(self, config_dir: Optional[Path] = None):
        """Initialize the configuration manager.

        Args:
            config_dir: Custom configuration directory path
        """
        self.config_dir = config_dir or CONFIG_DIR
        self.config_file = self.config_dir / "config.yaml"
        self.payload_file = self.config_dir / "payload.json"

        self._config: Optional[Dict[str, Any]] = None

    def initialize(self) -> bool:
        """Initialize configuration by setting up files and loading config.

        Returns:
            True if initialization successful, False if setup files were created
        """
        if not self._perform_initial_setup():
            return False

        self._config = self._load_config()
        return True

    def _perform_initial_setup(self) -> bool:
        """Creates config directory and default files if they don't exist.

        Returns:
            True if no setup was needed, False if files were created
        """
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConfigurationError(f"Cannot create config directory {self.config_dir}: {e}") from e

        missing_setup_file = False
        for path, template, description in [
            (self.config_file, CONFIG_TEMPLATE, "config template"),
            (self.payload_file, PAYLOAD_TEMPLATE, "payload template"),
        ]:
            if path.exists():
                continue
            if not safe_file_write(path, template, description):
                raise ConfigurationError(f"Could not write {path}")
            missing_setup_file = True

        if missing_setup_file:
            logger.system(f"Configuration templates generated in: {self.config_dir}")
            logger.system("Required files:")
            logger.system(f"  • {self.config_file}")
            logger.system(f"  • {self.payload_file}")
            logger.system("Please review and configure them before running stepshell again.")
            return False

        return True

    def _load_config(self) -> Dict[str, Any]:
        """Load and validate the configuration file."""
        try:
            with open(self.config_file, 'r') as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Error parsing YAML file {self.config_file}: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Could not read {self.config_file}: {e}") from e

        if not isinstance(config_data, dict):
            raise ConfigurationError(f"{self.config_file} is not a valid YAML dictionary.")

        for field in self.REQUIRED_FIELDS:
            if field not in config_data:
                raise ConfigurationError(f"Required key '.{field}' missing in {self.config_file}.")
            if not config_data[field]:
                raise ConfigurationError(f"Required key '.{field}' is null/empty in {self.config_file}.")

        enable_debug = config_data.get("enable_debug", DEFAULT_ENABLE_DEBUG)
        if not isinstance(enable_debug, bool):
            logger.warning(f"enable_debug in {self.config_file} must be true/false. Defaulting to false.")
            enable_debug = DEFAULT_ENABLE_DEBUG
        config_data["enable_debug"] = enable_debug

        policy = config_data.get("denial_policy", DEFAULT_DENIAL_POLICY)
        if policy not in DENIAL_POLICIES:
            raise ConfigurationError(
                f"denial_policy in {self.config_file} must be one of {DENIAL_POLICIES}, got '{policy}'."
            )
        config_data["denial_policy"] = policy

        timeout = config_data.get("request_timeout", DEFAULT_REQUEST_TIMEOUT)
        if not (isinstance(timeout, int) and not isinstance(timeout, bool) and timeout >= 0):
            raise ConfigurationError(
                f"request_timeout ('{timeout}') in {self.config_file} must be a non-negative integer."
            )
        config_data["request_timeout"] = timeout

        if not str(config_data["response_path"]).startswith('.'):
            raise ConfigurationError(f"response_path in {self.config_file} must start with '.'.")

        config_data["api_key"] = self._resolve_api_key(config_data)

        logger.debug(f"Configuration loaded successfully from {self.config_file}")
        return config_data

    @staticmethod
    def _resolve_api_key(config_data: Dict[str, Any]) -> Optional[str]:
        """Prefer an explicit api_key, else the environment variable named by api_key_env."""
        if config_data.get("api_key"):
            return str(config_data["api_key"])
        env_name = config_data.get("api_key_env") or DEFAULT_API_KEY_ENV
        api_key = os.environ.get(env_name)
        if not api_key:
            logger.debug(f"No API key configured and ${env_name} is unset; sending requests without one.")
        return api_key

    @property
    def config(self) -> Dict[str, Any]:
        """Get the current configuration."""
        if self._config is None:
            raise RuntimeError("Configuration not loaded. Call initialize() first.")
        return self._config.copy()

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        if self._config is None:
            raise RuntimeError("Configuration not loaded. Call initialize() first.")
        return self._config.get(key, default)

    def is_initialized(self) -> bool:
        """Check if the configuration has been initialized."""
        return self._config is not None


def create_config_manager(config_dir: Optional[Path] = None) -> Optional[ConfigManager]:
    """Create and initialize a configuration manager.

    Args:
        config_dir: Custom configuration directory path

    Returns:
        Initialized ConfigManager instance, or None when templates were just
        generated and the user has to review them first
    """
    manager = ConfigManager(config_dir)
    if not manager.initialize():
        logger.system("Configuration setup required. Please configure the generated files and run again.")
        return None
    return manager
