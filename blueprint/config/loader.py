"""
Configuration loader module for the blueprint build tool.

This module provides utilities for loading and validating configuration files.
"""

from pathlib import Path
from typing import Any, Dict, Type, TypeVar

import structlog
import yaml
from pydantic import BaseModel, ValidationError

from blueprint.config.models import BookConfig
from blueprint.exceptions import ConfigurationError

logger = structlog.get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _read_config_file(config_file: Path) -> Dict[str, Any]:
    """Parse a TOML or YAML file into a dictionary."""
    if config_file.suffix in (".yaml", ".yml"):
        with open(config_file, encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    with open(config_file, "rb") as f:
        # Use tomllib if available (Python 3.11+), otherwise fall back to toml
        try:
            import tomllib

            return tomllib.load(f)
        except ImportError:
            import toml

            return toml.loads(f.read().decode("utf-8"))


def load_config(config_path: str, config_model: Type[ModelT]) -> ModelT:
    """
    Load and validate configuration from a TOML or YAML file using a Pydantic model.

    Args:
        config_path: Path to the configuration file.
        config_model: Pydantic model class to use for validation.

    Returns:
        Validated configuration object.

    Raises:
        ConfigurationError: If the configuration file doesn't exist or is invalid.
    """
    config_file = Path(config_path).resolve()
    if not config_file.exists():
        raise ConfigurationError(
            f"Configuration file not found: {config_path}", config_file=str(config_file)
        )

    try:
        config_dict = _read_config_file(config_file)
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.error("Error parsing configuration file", config_file=str(config_file), error=str(e))
        raise ConfigurationError(
            f"Invalid configuration: {e}", config_file=str(config_file)
        ) from e

    try:
        return config_model(**config_dict)
    except ValidationError as e:
        logger.error("Configuration failed validation", config_file=str(config_file), error=str(e))
        raise ConfigurationError(
            f"Invalid configuration: {e}", config_file=str(config_file)
        ) from e


def load_book_config(config_path: str) -> BookConfig:
    """
    Load the book configuration and anchor its root at the config file's directory.

    Args:
        config_path: Path to the book configuration file.

    Returns:
        Validated book configuration with an absolute ``book.root``.
    """
    config = load_config(config_path, BookConfig)
    root = Path(config.book.root)
    if not root.is_absolute():
        root = Path(config_path).resolve().parent / root
    config.book.root = str(root.resolve())
    return config
