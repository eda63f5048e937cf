"""Command-line interface."""

from headerdoc.cli.main import app, cli_main

__all__ = ["app", "cli_main"]
