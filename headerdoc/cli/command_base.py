"""Base class for CLI commands."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from rich.console import Console

from headerdoc.cli.console import ErrorRenderer, get_console
from headerdoc.core.logging import get_logger

logger = get_logger(__name__)


class HeaderDocCommand(ABC):
    """Abstract base class for headerdoc CLI commands.

    Subclasses implement execute() and return an exit code; the typer
    wrapper turns a non-zero code into ``typer.Exit``.

    Example:
        class MyCommand(HeaderDocCommand):
            def execute(self, files: List[Path]) -> int:
                return 0
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        """Initialize command.

        Args:
            console: Rich console (for testing, inject one that records)
        """
        self.console = console or get_console()

    @abstractmethod
    def execute(self, *args: Any, **kwargs: Any) -> int:
        """Execute the command.

        Returns:
            Exit code (0 = success, non-zero = error)
        """

    # === Output Methods ===

    def print_success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {message}")

    def print_error(self, message: str) -> None:
        self.console.print(f"[red]✗[/red] {message}")

    def print_warning(self, message: str) -> None:
        self.console.print(f"[yellow]![/yellow] {message}")

    def print_info(self, message: str) -> None:
        self.console.print(f"[cyan]i[/cyan] {message}")

    # === Error Handling ===

    def handle_error(self, error: Exception, context: str = "") -> int:
        """Render an error panel and return the exit code.

        Does not exit; the caller decides.
        """
        logger.error("Command failed", context=context, error=str(error))
        ErrorRenderer.render(error, context=context)
        return 1
