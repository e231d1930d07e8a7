"""
Shared setup for command handlers.
"""

from pathlib import Path

from blueprint.config import BookConfig, load_book_config
from blueprint.core import BuildPlan, PandocCompiler, PipelineDriver, create_merge_tool
from blueprint.utils import BlueprintConsole, get_logger

logger = get_logger(__name__)
console = BlueprintConsole()


def create_driver(config: BookConfig) -> PipelineDriver:
    """
    Wire a pipeline driver from a validated book configuration.

    Args:
        config: Book configuration with an absolute ``book.root``.

    Returns:
        Driver using the configured compiler runner and merge tool.
    """
    plan = BuildPlan(config)
    compiler = PandocCompiler(config.toolchain, Path(config.book.root))
    return PipelineDriver(plan, compiler, create_merge_tool(config.merge))


def load_driver(config_path: str) -> PipelineDriver:
    """Load the book configuration at ``config_path`` and wire a driver for it."""
    logger.info("Loading configuration", config_file=str(config_path))
    return create_driver(load_book_config(config_path))
