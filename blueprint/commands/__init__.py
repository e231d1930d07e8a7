"""
Command handlers for the blueprint build tool.

This module provides one handler per build target.
"""

from blueprint.commands.build import build_command, chunked_command, combined_command
from blueprint.commands.clean import clean_command
from blueprint.commands.enrich import add_cover_command, toc_command

__all__ = [
    "add_cover_command",
    "build_command",
    "chunked_command",
    "clean_command",
    "combined_command",
    "toc_command",
]
