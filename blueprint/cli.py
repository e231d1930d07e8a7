"""
Main CLI entry point for the blueprint build tool.

Each command is one build target. Settings such as the container memory
limit or the toolchain image come from the configuration file, never from
the command line.
"""

import sys
from pathlib import Path
from typing import Any, Callable, Optional

import typer

from blueprint import __version__
from blueprint.commands import (
    add_cover_command,
    build_command,
    chunked_command,
    clean_command,
    combined_command,
    toc_command,
)
from blueprint.config import load_book_config
from blueprint.exceptions import BlueprintError, ConfigurationError
from blueprint.utils import BlueprintConsole, get_logger, setup_logging

logger = get_logger(__name__)
console = BlueprintConsole()

app = typer.Typer(
    help="Build 'The Blue Print' manuscript into a PDF.",
    no_args_is_help=True,
    add_completion=False,
)

TARGETS = {
    "build": "Build a variant in one pass (full by default; also simple, test)",
    "chunked": "Build in chunks to stay under the compiler's memory limit, then combine",
    "combined": "Build the title page and each chapter separately, then combine",
    "toc": "Build the combined book and prepend a table of contents",
    "add-cover": "Add front and back covers to the finished book",
    "clean": "Remove the build directory",
    "targets": "List available targets",
}


def _configure_logging(config_path: str, log_level: Optional[str]) -> None:
    """Set up logging from the configuration file, falling back to defaults."""
    level = "INFO"
    structured = False
    if Path(config_path).exists():
        try:
            config = load_book_config(config_path)
            level = config.logging.level
            structured = config.logging.structured
        except ConfigurationError:
            # The command reports the configuration error itself
            pass
    setup_logging(level=(log_level or level).upper(), structured=structured)


def _run(handler: Callable[..., Any], *args: Any) -> None:
    """Run a command handler and map blueprint errors to exit codes."""
    try:
        handler(*args)
    except ConfigurationError as e:
        logger.error("Configuration error", error=e.message)
        console.error("Configuration error", e.message)
        raise typer.Exit(code=e.exit_code) from e
    except BlueprintError as e:
        logger.error("Build failed", error=e.message, exit_code=e.exit_code)
        console.error("Build failed", e.message)
        raise typer.Exit(code=e.exit_code) from e


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"blueprint v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    config: str = typer.Option("book.toml", "--config", "-c", help="Path to the book configuration file."),
    log_level: Optional[str] = typer.Option(None, "--log-level", "-l", help="Override the configured log level."),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show the version and exit."
    ),
) -> None:
    """Build 'The Blue Print' manuscript into a PDF."""
    try:
        _configure_logging(config, log_level)
    except ValueError as e:
        console.error("Invalid log level", str(e))
        raise typer.Exit(code=2) from e
    ctx.obj = config


@app.command("build")
def build(
    ctx: typer.Context,
    variant: Optional[str] = typer.Argument(None, help="Variant to build (default: the configured default)."),
) -> None:
    """Build a variant of the book in a single compiler run."""
    _run(build_command, ctx.obj, variant)


@app.command("chunked")
def chunked(ctx: typer.Context) -> None:
    """Build the book in chunks and combine them in order."""
    _run(chunked_command, ctx.obj)


@app.command("combined")
def combined(ctx: typer.Context) -> None:
    """Build the title page and every chapter separately, then combine them."""
    _run(combined_command, ctx.obj)


@app.command("toc")
def toc(ctx: typer.Context) -> None:
    """Build the combined book and prepend a table of contents."""
    _run(toc_command, ctx.obj)


@app.command("add-cover")
def add_cover(ctx: typer.Context) -> None:
    """Add front and back covers to the finished book, if both exist."""
    _run(add_cover_command, ctx.obj)


@app.command("clean")
def clean(ctx: typer.Context) -> None:
    """Remove every generated artifact."""
    _run(clean_command, ctx.obj)


@app.command("targets")
def targets() -> None:
    """List the available targets."""
    typer.echo("Available targets:")
    for name, description in TARGETS.items():
        typer.echo(f"  {name:<10} - {description}")


def main() -> None:
    """Console script entry point."""
    try:
        app()
    except KeyboardInterrupt:
        print("Operation cancelled by user", file=sys.stderr)
        sys.exit(130)


if __name__ == "__main__":
    main()
