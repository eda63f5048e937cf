"""Console output helpers.

Provides consistent formatting for CLI output messages, including the
ErrorRenderer used for every user-facing failure.
"""

from __future__ import annotations

import traceback
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

# Shared console instance
_console: Console | None = None

# Verbose mode flag (set by CLI --verbose flag)
_verbose_mode: bool = False


def get_console() -> Console:
    """Get shared console instance (lazy-loaded).

    Returns:
        Rich Console instance
    """
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_verbose_mode(enabled: bool) -> None:
    """Enable or disable verbose mode for error display.

    When verbose mode is enabled, full tracebacks are shown.
    """
    global _verbose_mode
    _verbose_mode = enabled


def is_verbose_mode() -> bool:
    return _verbose_mode


def tip(message: str) -> None:
    """Display a tip message in dim styling.

    Example:
        tip("Use --include-private to document private members")
    """
    get_console().print(f"  [dim]Tip: {message}[/dim]")


class ErrorRenderer:
    """Renders error messages with "Why" and "How to fix" sections.

    Example
    -------
        try:
            build_unit(path, config)
        except HeaderDocError as e:
            ErrorRenderer.render(e, context=f"While documenting {path}")
            raise typer.Exit(1)

        # Outputs:
        # +-----------------------+
        # |  Error: HD-PARSE-001  |
        # +-----------------------+
        # | could not parse ...   |
        # |                       |
        # | Why it happened:      |
        # | The parser could not  |
        # | build a syntax tree   |
        # |                       |
        # | How to fix:           |
        # | - Check that the file |
        # +-----------------------+
    """

    @staticmethod
    def render(
        exc: BaseException,
        context: str = "",
        show_traceback: Optional[bool] = None,
    ) -> None:
        """Render an exception as an error panel.

        Args:
            exc: Exception to render
            context: Optional context message (e.g., "While documenting vec.h")
            show_traceback: Override for verbose mode (None = use global setting)
        """
        from headerdoc.core.exceptions import get_error_info, get_root_cause

        console = get_console()

        error_info = get_error_info(exc)
        error_code = error_info.get("error_code", "HD-ERR-999")
        why = error_info.get("why_it_happened", "An unexpected error occurred")
        how_to_fix = error_info.get("how_to_fix", ["Check the error message"])

        # Root cause for chained exceptions
        root_cause = get_root_cause(exc)
        root_message = str(root_cause) if root_cause is not exc else None

        content = ErrorRenderer._build_error_content(
            message=str(exc),
            context=context,
            why=why,
            how_to_fix=how_to_fix,
            root_message=root_message,
        )

        panel = Panel(
            content,
            title=f"[bold red]Error: {error_code}[/bold red]",
            border_style="red",
            padding=(1, 2),
        )
        console.print(panel)

        should_show_traceback = (
            show_traceback if show_traceback is not None else is_verbose_mode()
        )
        if should_show_traceback:
            ErrorRenderer._render_traceback(exc)

    @staticmethod
    def _build_error_content(
        message: str,
        context: str,
        why: str,
        how_to_fix: List[str],
        root_message: Optional[str],
    ) -> Text:
        """Build the error panel content."""
        text = Text()

        if context:
            text.append(f"{context}\n", style="dim")
            text.append("\n")

        text.append(message, style="bold red")
        text.append("\n\n")

        if root_message and root_message != message:
            text.append("Root cause: ", style="bold yellow")
            text.append(root_message, style="yellow")
            text.append("\n\n")

        text.append("Why it happened:\n", style="bold cyan")
        text.append(f"  {why}\n", style="cyan")
        text.append("\n")

        text.append("How to fix:\n", style="bold green")
        for fix in how_to_fix:
            text.append(f"  - {fix}\n", style="green")

        return text

    @staticmethod
    def _render_traceback(exc: BaseException) -> None:
        console = get_console()
        console.print()
        console.print("[dim]--- Traceback (--verbose mode) ---[/dim]")

        tb_lines = traceback.format_exception(type(exc), exc, exc.__traceback__)
        # markup=False: tracebacks can contain '[' from C++ array syntax
        console.print("".join(tb_lines), style="dim", markup=False)
