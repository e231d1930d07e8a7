"""
Utilities module for the blueprint build tool.

This module provides logging, console and timing helpers.
"""

from blueprint.utils.console import BlueprintConsole
from blueprint.utils.logging import get_logger, setup_logging
from blueprint.utils.timing import timed_section

__all__ = [
    "BlueprintConsole",
    "get_logger",
    "setup_logging",
    "timed_section",
]
