"""Factory helpers for building GraphConfig instances.

Wraps pydantic validation errors in ConfigurationError so callers only
deal with graph-kit exceptions.
"""

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .exceptions import ConfigurationError
from .models.config import GraphConfig

logger = logging.getLogger(__name__)


class ConfigFactory:
    """Create GraphConfig from explicit values, dicts, or the environment."""

    @staticmethod
    def create(**kwargs: Any) -> GraphConfig:
        """Create a config from keyword arguments.

        Raises:
            ConfigurationError: If any value fails validation
        """
        try:
            return GraphConfig(**kwargs)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    @staticmethod
    def from_dict(config_dict: dict[str, Any]) -> GraphConfig:
        """Create a config from a dictionary."""
        return ConfigFactory.create(**config_dict)

    @staticmethod
    def from_environment_only() -> GraphConfig:
        """Create a config from ``GRAPH_*`` environment variables only."""
        try:
            return GraphConfig(_env_file=None)  # type: ignore[call-arg]
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    @staticmethod
    def from_env_file(env_file: str | Path, required: bool = False) -> GraphConfig:
        """Create a config from a specific .env file.

        Args:
            env_file: Path to the .env file
            required: Raise if the file does not exist

        Raises:
            ConfigurationError: If the file is required but missing, or invalid
        """
        path = Path(env_file)
        if not path.exists():
            if required:
                raise ConfigurationError(f".env file not found: {path}")
            logger.debug(f".env file {path} not found, using environment only")
            return ConfigFactory.from_environment_only()

        try:
            return GraphConfig(_env_file=path)  # type: ignore[call-arg]
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    @staticmethod
    def from_env(search_paths: Sequence[str | Path] | None = None) -> GraphConfig:
        """Create a config from the first .env file found in search_paths."""
        for candidate in search_paths or [".env"]:
            if Path(candidate).exists():
                logger.info(f"Loading configuration from {candidate}")
                return ConfigFactory.from_env_file(candidate, required=True)

        return ConfigFactory.from_environment_only()


def create_config(**kwargs: Any) -> GraphConfig:
    """Shortcut for ConfigFactory.create."""
    return ConfigFactory.create(**kwargs)


def load_config(env_file: str | Path | None = None) -> GraphConfig:
    """Load config from an optional .env file and the environment."""
    if env_file is None:
        return ConfigFactory.from_env()
    return ConfigFactory.from_env_file(env_file, required=True)
