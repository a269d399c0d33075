"""
Configuration loader for schema generation runs.

Handles loading from multiple sources with proper priority:
CLI Args > Environment Variables > Config File > Defaults
"""

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import structlog
import yaml
from pydantic import ValidationError

from ..exceptions import ConfigurationError
from .models import GeneratorConfig

logger = structlog.get_logger(__name__)


def format_validation_error(error: ValidationError) -> str:
    """Flatten a pydantic validation error into a single line."""
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'config'}: {err['msg']}"
        for err in error.errors()
    )


class ConfigLoader:
    """
    Loads and merges configuration from multiple sources.

    Priority order (highest to lowest):
    1. CLI arguments (passed to load())
    2. Environment variables (PUBSUBSCHEMA_GEN_*)
    3. Configuration file
    4. Default values
    """

    ENV_PREFIX = "PUBSUBSCHEMA_GEN_"
    CONFIG_PATH_ENV = "PUBSUBSCHEMA_GEN_CONFIG"

    def __init__(
        self,
        config_path: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        """
        Initialize configuration loader.

        Args:
            config_path: Path to a YAML configuration file. If None, the
                PUBSUBSCHEMA_GEN_CONFIG environment variable is consulted; with
                neither set no file is read.
            environ: Environment to read from, os.environ by default
        """
        self.environ = os.environ if environ is None else environ
        self.config_path = config_path or self._get_config_path_from_env()

    def _get_config_path_from_env(self) -> Optional[Path]:
        env_path = self.environ.get(self.CONFIG_PATH_ENV)
        if env_path:
            return Path(env_path).expanduser()
        return None

    def load(self, overrides: Optional[Mapping[str, Any]] = None) -> GeneratorConfig:
        """
        Load configuration from all sources and merge.

        Args:
            overrides: Values given on the command line; None values are
                treated as not given

        Returns:
            Validated GeneratorConfig object

        Raises:
            ConfigurationError: If a source cannot be read or the merged
                configuration is invalid
        """
        config_dict: Dict[str, Any] = {}

        if self.config_path is not None:
            config_dict.update(self._load_file(self.config_path))

        config_dict.update(self._load_from_env())

        if overrides:
            config_dict.update({k: v for k, v in overrides.items() if v is not None})

        try:
            config = GeneratorConfig.model_validate(config_dict)
        except ValidationError as e:
            raise ConfigurationError(
                f"Configuration validation failed: {format_validation_error(e)}",
                cause=e,
            ) from e

        logger.debug(
            "Loaded configuration",
            config_file=str(self.config_path) if self.config_path else None,
            pubsub_dir=str(config.pubsub_dir),
            glob=config.glob,
        )
        return config

    def _load_file(self, path: Path) -> Dict[str, Any]:
        """
        Load configuration from YAML file.

        Raises:
            ConfigurationError: If file cannot be read or parsed
        """
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in {path}: {' '.join(str(e).split())}",
                setting="config",
                cause=e,
            ) from e
        except OSError as e:
            raise ConfigurationError(
                f"Cannot read config file {path}: {e}", setting="config", cause=e
            ) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Config file {path} must contain a mapping", setting="config"
            )
        # YAML keys follow the flag spelling (pubsub-dir), the model uses pubsub_dir
        return {str(k).replace("-", "_"): v for k, v in data.items()}

    def _load_from_env(self) -> Dict[str, Any]:
        """
        Load configuration from environment variables.

        Environment variable format:
        - PUBSUBSCHEMA_GEN_PUBSUB_DIR
        - PUBSUBSCHEMA_GEN_GLOB
        - PUBSUBSCHEMA_GEN_OUTPUT_DIR
        - PUBSUBSCHEMA_GEN_STRICT_NAMES
        - PUBSUBSCHEMA_GEN_LOG_LEVEL

        Other PUBSUBSCHEMA_GEN_* variables are not settings and are ignored.
        Empty values are ignored. Values stay strings; the model converts them.
        """
        config: Dict[str, Any] = {}

        for field_name in GeneratorConfig.model_fields:
            value = self.environ.get(self.ENV_PREFIX + field_name.upper())
            if value:
                config[field_name] = value

        return config


def load_config(
    config_path: Optional[Path] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> GeneratorConfig:
    """Load configuration using the default loader."""
    return ConfigLoader(config_path).load(overrides)
