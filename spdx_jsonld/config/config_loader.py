"""
spdx-jsonld Configuration Loader

This module loads spdx-jsonld configuration from YAML files. It searches a
list of default locations when no path is given, applies environment variable
overrides (optionally read from a .env file) and falls back to built-in
defaults for missing sections.
"""

import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
import logging

from dotenv import load_dotenv

from spdx_jsonld.model import spdx_constants as sc

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_LOCATIONS = [
    "spdx-jsonld-config.yaml",
    "~/.spdx_jsonld/spdx-jsonld-config.yaml",
    "/etc/spdx_jsonld/spdx-jsonld-config.yaml",
]

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

TRUE_VALUES = ("1", "true", "yes", "on")


class ConfigurationError(Exception):
    """Raised when there are configuration loading or validation errors."""
    pass


class SpdxJsonLdConfig:
    """
    spdx-jsonld configuration loader and manager.

    Loads configuration from YAML files and provides access to configuration
    sections with environment overrides and default values.
    """

    def __init__(self, config_path: Optional[str] = None, env_file: Optional[str] = None):
        """
        Initialize the configuration loader.

        Args:
            config_path: Path to configuration file. If None, the default
                locations are searched and built-in defaults used if none exists.
            env_file: Optional .env file loaded before environment overrides apply
        """
        self.config_data: Dict[str, Any] = {}
        self.config_path: Optional[str] = None

        if env_file:
            load_dotenv(env_file)

        if config_path:
            self.load_config(config_path)
        else:
            self._load_from_default_locations()

    def load_config(self, config_path: str) -> None:
        """
        Load configuration from a specific file path.

        Args:
            config_path: Path to the YAML configuration file

        Raises:
            ConfigurationError: If the file cannot be loaded or parsed
        """
        config_file = Path(config_path).expanduser()

        if not config_file.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Error parsing YAML configuration: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Error loading configuration file: {e}") from e

        if not isinstance(loaded, dict):
            raise ConfigurationError(f"Configuration root must be a mapping: {config_path}")

        self.config_data = loaded
        self.config_path = str(config_file.absolute())
        logger.info(f"Loaded configuration from: {self.config_path}")

    def _load_from_default_locations(self) -> None:
        for location in DEFAULT_CONFIG_LOCATIONS:
            if Path(location).expanduser().exists():
                self.load_config(location)
                return
        logger.debug("No configuration file found, using built-in defaults")
        self.config_data = self._get_default_config()

    def _get_default_config(self) -> Dict[str, Any]:
        """
        Get the default configuration values.

        Returns:
            Dictionary containing default configuration values
        """
        return {
            'spec': {
                'latest_version': sc.LATEST_SPEC_VERSION,
                'resource_dir': None
            },
            'serializer': {
                'pretty': True,
                'use_external_listed_elements': False,
                'generated_id_prefix': sc.GENERATED_SERIALIZED_ID_PREFIX
            },
            'deserializer': {
                'document_uri_prefix': sc.DOCUMENT_URI_PREFIX
            },
            'app': {
                'log_level': 'INFO'
            }
        }

    def _get_section(self, name: str) -> Dict[str, Any]:
        defaults = self._get_default_config()[name]
        section = self.config_data.get(name) or {}
        # Merge with defaults
        return {**defaults, **section}

    def get_spec_config(self) -> Dict[str, Any]:
        """
        Get spec configuration section.

        Supports environment variable overrides:
        - SPDX_JSONLD_LATEST_VERSION: Override the latest supported spec version
        - SPDX_JSONLD_RESOURCE_DIR: Override the schema resource directory

        Returns:
            Dictionary containing spec configuration
        """
        config = self._get_section('spec')
        config['latest_version'] = os.getenv('SPDX_JSONLD_LATEST_VERSION', config['latest_version'])
        config['resource_dir'] = os.getenv('SPDX_JSONLD_RESOURCE_DIR', config['resource_dir'])
        return config

    def get_serializer_config(self) -> Dict[str, Any]:
        """
        Get serializer configuration section.

        Supports environment variable override SPDX_JSONLD_PRETTY.

        Returns:
            Dictionary containing serializer configuration
        """
        config = self._get_section('serializer')
        pretty = os.getenv('SPDX_JSONLD_PRETTY')
        if pretty is not None:
            config['pretty'] = pretty.strip().lower() in TRUE_VALUES
        return config

    def get_deserializer_config(self) -> Dict[str, Any]:
        """
        Get deserializer configuration section.

        Returns:
            Dictionary containing deserializer configuration
        """
        return self._get_section('deserializer')

    def get_app_config(self) -> Dict[str, Any]:
        """
        Get application configuration section.

        Supports environment variable override SPDX_JSONLD_LOG_LEVEL.

        Returns:
            Dictionary containing app configuration
        """
        config = self._get_section('app')
        config['log_level'] = os.getenv('SPDX_JSONLD_LOG_LEVEL', config['log_level'])
        return config

    def get_latest_version(self) -> str:
        return str(self.get_spec_config()['latest_version'])

    def get_resource_dir(self) -> Optional[str]:
        return self.get_spec_config()['resource_dir']

    def validate_config(self) -> None:
        """
        Validate the loaded configuration.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        latest_version = self.get_latest_version()
        if not latest_version or latest_version.count('.') != 2:
            raise ConfigurationError(f"Invalid latest spec version: {latest_version}")

        resource_dir = self.get_resource_dir()
        if resource_dir and not Path(resource_dir).expanduser().is_dir():
            raise ConfigurationError(f"Schema resource directory not found: {resource_dir}")

        serializer_config = self.get_serializer_config()
        prefix = serializer_config.get('generated_id_prefix')
        if not prefix or not isinstance(prefix, str):
            raise ConfigurationError("Generated id prefix must be a non-empty string")

        log_level = str(self.get_app_config().get('log_level', '')).upper()
        if log_level not in VALID_LOG_LEVELS:
            raise ConfigurationError(f"Invalid log level: {log_level}")

        logger.info("Configuration validation passed")

    def __str__(self) -> str:
        """String representation of the configuration."""
        return f"SpdxJsonLdConfig(path={self.config_path}, sections={list(self.config_data.keys())})"


def configure_logging(config: SpdxJsonLdConfig) -> None:
    """Apply the configured log level to the spdx_jsonld package logger."""
    log_level = str(config.get_app_config().get('log_level', 'INFO')).upper()
    logging.getLogger('spdx_jsonld').setLevel(getattr(logging, log_level, logging.INFO))
    logger.info(f"Logging level set to {log_level}")


# Global configuration instance
_config_instance: Optional[SpdxJsonLdConfig] = None


def get_config(config_path: Optional[str] = None) -> SpdxJsonLdConfig:
    """
    Get the global configuration instance.

    Args:
        config_path: Optional path to configuration file. Only used on first call.

    Returns:
        SpdxJsonLdConfig instance
    """
    global _config_instance

    if _config_instance is None:
        _config_instance = SpdxJsonLdConfig(config_path)
        _config_instance.validate_config()

    return _config_instance


def reload_config(config_path: Optional[str] = None, env_file: Optional[str] = None) -> SpdxJsonLdConfig:
    """
    Reload the global configuration instance.

    Args:
        config_path: Optional path to configuration file
        env_file: Optional .env file with environment overrides

    Returns:
        New SpdxJsonLdConfig instance
    """
    global _config_instance

    _config_instance = SpdxJsonLdConfig(config_path, env_file)
    _config_instance.validate_config()

    return _config_instance
