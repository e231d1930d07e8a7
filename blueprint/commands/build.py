"""
Build command handlers.

This module provides the handlers for the single-pass, chunked and
chapter-by-chapter build targets.
"""

from typing import Optional

from blueprint.commands.base import console, load_driver
from blueprint.core import Artifact
from blueprint.core.merge import pdf_page_count


def _report(title: str, artifact: Artifact) -> None:
    size_mb = artifact.path.stat().st_size / (1024 * 1024)
    console.process_complete(
        title,
        {
            "Output": str(artifact.path),
            "Pages": str(pdf_page_count(artifact.path)),
            "Size": f"{size_mb:.1f}MB",
        },
    )


def build_command(config_path: str, variant: Optional[str] = None) -> Artifact:
    """
    Build one variant of the book in a single compiler run.

    Args:
        config_path: Path to the book configuration file.
        variant: Variant name; the configured default when omitted.

    Returns:
        The produced artifact.

    Raises:
        ConfigurationError: If the configuration or variant is invalid.
        CompilerError: If the document compiler fails.
    """
    driver = load_driver(config_path)
    name = variant or driver.plan.config.default_variant
    config = driver.plan.variant(name)

    console.process_start(f"Building {name} variant", f"{len(config.documents)} documents")
    artifact = driver.build(config)
    _report(f"Built {name} variant", artifact)
    return artifact


def chunked_command(config_path: str, size: Optional[int] = None) -> Artifact:
    """
    Build the book in contiguous chunks and concatenate them in order.

    Args:
        config_path: Path to the book configuration file.
        size: Documents per chunk; the configured chunk size when omitted.

    Raises:
        MergeError: If a chunk fails to build or the chunks cannot be combined.
    """
    driver = load_driver(config_path)
    chunks = driver.plan.chunks(size)

    console.process_start("Building in chunks", f"{len(chunks)} chunks")
    for chunk in chunks:
        console.process_item(f"{chunk.name}: {', '.join(chunk.paths)}")
    artifact = driver.build_chunked(chunks, driver.layout.book)
    _report("Complete book generated", artifact)
    return artifact


def combined_command(config_path: str) -> Artifact:
    """
    Build the title page and every chapter separately, then combine them.

    Raises:
        MergeError: If a chapter fails to build or the parts cannot be combined.
    """
    driver = load_driver(config_path)
    parts = driver.plan.combined()

    console.process_start("Building individual chapters", f"{len(parts)} parts")
    artifact = driver.build_chunked(parts, driver.plan.combined_output)
    _report("Combined build complete", artifact)
    return artifact
