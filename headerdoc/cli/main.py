"""headerdoc CLI - Main application entry point.

Registers the commands:

    headerdoc build FILES... [-o DIR] [-v] [--include-private] [--no-toc]
                             [--trim-path PREFIX] [--config FILE]
                             [--provider NAME] [-j N]
    headerdoc version
"""

from __future__ import annotations

import typer

from headerdoc.cli import build
from headerdoc.cli.console import get_console

app = typer.Typer(
    name="headerdoc",
    help="Generate markdown API documentation from C/C++ header comments.",
    no_args_is_help=True,
    add_completion=False,
)


@app.callback()
def main_callback() -> None:
    """headerdoc - markdown API documents from C/C++ headers."""


app.command("build")(build.command)


@app.command("version")
def version_command() -> None:
    """Show the installed headerdoc version."""
    from headerdoc import __version__

    get_console().print(f"headerdoc {__version__}")


def cli_main() -> None:
    """Entry point for console_scripts.

    This function is called when running 'headerdoc' command.
    """
    app()


if __name__ == "__main__":
    cli_main()
