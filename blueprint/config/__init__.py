"""
Configuration module for the blueprint build tool.

This module provides configuration models and utilities for loading and validating configuration.
"""

from blueprint.config.loader import load_book_config, load_config
from blueprint.config.models import (
    BookConfig,
    BookSection,
    ChunkingConfig,
    CombinedConfig,
    CoversConfig,
    LoggingConfig,
    MergeConfig,
    StyleProfile,
    TocConfig,
    ToolchainConfig,
    VariantConfig,
)

__all__ = [
    "BookConfig",
    "BookSection",
    "ChunkingConfig",
    "CombinedConfig",
    "CoversConfig",
    "LoggingConfig",
    "MergeConfig",
    "StyleProfile",
    "TocConfig",
    "ToolchainConfig",
    "VariantConfig",
    "load_book_config",
    "load_config",
]
