"""
Enrichment command handlers.

This module provides the handlers for the table-of-contents and cover targets.
Both steps are optional: when their inputs are unavailable the book is left
as it was and the command still succeeds.
"""

from blueprint.commands.base import console, load_driver
from blueprint.core import Artifact, Enriched


def toc_command(config_path: str) -> Artifact:
    """
    Build the combined book and prepend a generated table of contents.

    When the table of contents cannot be generated the combined book is
    published unchanged as the final book.

    Raises:
        MergeError: If the combined build itself fails.
    """
    driver = load_driver(config_path)
    combined = driver.build_chunked(driver.plan.combined(), driver.plan.combined_output)

    console.process_start("Generating table of contents")
    result = driver.merge_toc(combined)
    if isinstance(result, Enriched):
        console.success("Final PDF with table of contents", str(result.artifact.path))
    else:
        console.warning("Table of contents generation failed, using combined PDF", result.reason)
    return driver.publish(result)


def add_cover_command(config_path: str) -> Artifact:
    """
    Add the configured front and back covers to the finished book.

    The default variant is rebuilt first, so covers always wrap a fresh
    cover-free book and rerunning the target gives the same result.

    Raises:
        CompilerError: If building the book fails.
    """
    driver = load_driver(config_path)
    plan = driver.plan
    book = plan.variant(plan.config.default_variant)

    console.process_start("Building book before adding covers", book.name)
    artifact = driver.build(book)

    front, back = plan.cover_paths()
    result = driver.add_cover(artifact, front, back)
    if isinstance(result, Enriched):
        console.success("Covers added successfully!", str(result.artifact.path))
    else:
        console.warning("Cover files not found, skipping cover addition...", result.reason)
    return result.artifact
