"""Build command - Generate markdown API documents from C/C++ headers.

Each input file becomes one markdown file in the output directory. A file
that cannot be read or parsed is reported and skipped; the others are still
documented and the command exits with status 1.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from rich.table import Table

from headerdoc.cli.command_base import HeaderDocCommand
from headerdoc.cli.console import ErrorRenderer, set_verbose_mode, tip
from headerdoc.core.config import MAX_WORKERS, Config, apply_overrides, load_config
from headerdoc.core.exceptions import ConfigValidationError, HeaderDocError
from headerdoc.core.logging import configure_logging
from headerdoc.pipeline.runner import UnitResult, build_units


class BuildCommand(HeaderDocCommand):
    """Document a list of header files."""

    def execute(
        self,
        files: List[Path],
        output_dir: Optional[Path] = None,
        verbose: bool = False,
        include_private: bool = False,
        no_toc: bool = False,
        trim_path: Optional[str] = None,
        config_file: Optional[Path] = None,
        provider: Optional[str] = None,
        jobs: Optional[int] = None,
    ) -> int:
        """Generate documents for ``files``.

        Returns:
            0 when every file was documented, 1 otherwise
        """
        set_verbose_mode(verbose)

        try:
            config = self._load_config(
                config_file,
                output_dir=output_dir,
                include_private=include_private,
                no_toc=no_toc,
                trim_path=trim_path,
                provider=provider,
                jobs=jobs,
                verbose=verbose,
            )
        except HeaderDocError as e:
            return self.handle_error(e, "Could not load configuration")

        configure_logging(level=config.log_level)

        results = build_units([str(path) for path in files], config)
        self._display_results(results)

        failures = [result for result in results if not result.success]
        for result in failures:
            ErrorRenderer.render(result.error, context=f"While documenting {result.source}")

        if failures:
            self.print_error(f"{len(failures)} of {len(results)} files failed")
            return 1

        self.print_success(f"Documented {len(results)} files into {config.output_path}")
        if not config.render.include_private:
            tip("Use --include-private to document private members")
        return 0

    def _load_config(
        self,
        config_file: Optional[Path],
        *,
        output_dir: Optional[Path],
        include_private: bool,
        no_toc: bool,
        trim_path: Optional[str],
        provider: Optional[str],
        jobs: Optional[int],
        verbose: bool,
    ) -> Config:
        """Configuration file and environment, then command-line flags on top.

        Boolean flags only override when set, so a config file can still
        turn them on.
        """
        config = load_config(config_file)
        config = apply_overrides(
            config,
            include_private=True if include_private else None,
            build_toc=False if no_toc else None,
            provider=provider,
            output_dir=str(output_dir) if output_dir is not None else None,
            trim_path_prefix=trim_path,
            log_level="DEBUG" if verbose else None,
            jobs=jobs,
        )

        # -o is checked by typer; a directory from the config file is checked here
        if not config.output_path.is_dir():
            raise ConfigValidationError(
                f"Output directory '{config.output_path}' does not exist",
                field="output.output_dir",
                value=str(config.output_path),
            )
        return config

    def _display_results(self, results: List[UnitResult]) -> None:
        table = Table(title="Documentation Summary")
        table.add_column("Source", style="cyan")
        table.add_column("Output", style="green")
        table.add_column("Declarations", justify="right")
        table.add_column("Status")

        for result in results:
            status = "[green]ok[/green]" if result.success else "[red]failed[/red]"
            output = str(result.output_path) if result.success else "-"
            table.add_row(result.source, output, str(result.declarations), status)

        self.console.print(table)


# Typer command wrapper
def command(
    files: List[Path] = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        readable=True,
        help="C/C++ header files to document",
    ),
    output_dir: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        exists=True,
        file_okay=False,
        dir_okay=True,
        help="Existing directory for the generated markdown files",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log every declaration found"
    ),
    include_private: bool = typer.Option(
        False, "--include-private", help="Document private members too"
    ),
    no_toc: bool = typer.Option(
        False, "--no-toc", help="Do not start each document with a table of contents"
    ),
    trim_path: Optional[str] = typer.Option(
        None,
        "--trim-path",
        help="Prefix removed from input paths when naming output files",
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        exists=True,
        dir_okay=False,
        help="Configuration file (default: headerdoc.yaml in the current directory)",
    ),
    provider: Optional[str] = typer.Option(
        None, "--provider", "-p", help="Parser backend: clang or tree-sitter"
    ),
    jobs: Optional[int] = typer.Option(
        None,
        "--jobs",
        "-j",
        min=1,
        max=MAX_WORKERS,
        help="Number of files documented in parallel",
    ),
) -> None:
    """Generate markdown API documents from C/C++ headers.

    Examples:
        # Document two headers into docs/
        headerdoc build include/vec.h include/mat.h -o docs

        # Name outputs without the include/ prefix, keep private members
        headerdoc build include/vec.h -o docs --trim-path include/ --include-private
    """
    cmd = BuildCommand()
    exit_code = cmd.execute(
        files,
        output_dir=output_dir,
        verbose=verbose,
        include_private=include_private,
        no_toc=no_toc,
        trim_path=trim_path,
        config_file=config_file,
        provider=provider,
        jobs=jobs,
    )
    if exit_code != 0:
        raise typer.Exit(code=exit_code)
