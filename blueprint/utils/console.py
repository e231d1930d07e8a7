"""Utility module for consistent color and styling in console output."""

from typing import Dict, Optional

from rich.console import Console
from rich.theme import Theme

BLUEPRINT_THEME = Theme(
    {
        "info": "blue",
        "success": "green",
        "warning": "yellow",
        "error": "red",
        "header": "bold white",
        "path": "cyan",
        "stats": "bold white",
        "value": "white",
        "detail": "dim white",
    }
)


class BlueprintConsole:
    """Console wrapper for consistent styling."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console(theme=BLUEPRINT_THEME)

    def process_start(self, name: str, detail: Optional[str] = None) -> None:
        """Start a process with a header."""
        self.console.print(f"\n► {name}", style="header")
        if detail:
            self.console.print(f"  {detail}", style="detail")

    def process_item(self, message: str) -> None:
        self.console.print(f"  {message}", style="value")

    def process_complete(self, name: str, stats: Dict[str, str]) -> None:
        """Complete a process with statistics."""
        self.console.print(f"\n✓ {name}", style="success")
        for key, value in stats.items():
            self.console.print(f"  {key}: ", style="stats", end="")
            self.console.print(value, style="value")

    def error(self, message: str, detail: Optional[str] = None) -> None:
        self.console.print(f"✗ {message}", style="error")
        if detail:
            self.console.print(f"  {detail}", style="detail")

    def success(self, message: str, detail: Optional[str] = None) -> None:
        self.console.print(f"✓ {message}", style="success")
        if detail:
            self.console.print(f"  {detail}", style="detail")

    def warning(self, message: str, detail: Optional[str] = None) -> None:
        self.console.print(f"! {message}", style="warning")
        if detail:
            self.console.print(f"  {detail}", style="detail")
