"""
Per-unit documentation pipeline.

One input unit (a header file) goes through four stages:

    read     LineStore.from_file
    parse    AstProvider.parse           -> declaration events
    build    DeclarationTreeBuilder      -> declaration tree
    render   MarkdownRenderer            -> markdown written to the output file

Units share nothing, so ``build_units`` can run them on a thread pool.
Failures are reported per unit; one bad file never stops the others.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from headerdoc.core.config import MAX_WORKERS, Config
from headerdoc.core.exceptions import HeaderDocError, ProcessingError
from headerdoc.core.logging import UnitLogger, get_logger
from headerdoc.declarations.tree_builder import BuildStats, DeclarationTreeBuilder
from headerdoc.providers import AstProvider, get_provider
from headerdoc.render.markdown import MarkdownRenderer
from headerdoc.source.line_store import LineStore

logger = get_logger(__name__)

OUTPUT_SUFFIX = ".md"


@dataclass
class UnitResult:
    """Outcome of documenting one input unit."""

    source: str
    output_path: Optional[Path] = None
    success: bool = False
    error: Optional[HeaderDocError] = None
    declarations: int = 0
    stats: BuildStats = field(default_factory=BuildStats)

    @property
    def error_message(self) -> str:
        return str(self.error) if self.error else ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source,
            "output_path": str(self.output_path) if self.output_path else None,
            "success": self.success,
            "error": self.error_message or None,
            "declarations": self.declarations,
        }


def output_name(path: str, trim_prefix: str = "") -> str:
    """
    File name of the document generated for ``path``.

    Path separators become underscores. ``trim_prefix`` is cut out at the
    position where it first occurs in ``path``.

    Example:
        output_name("src/engine/vec.h", "src/")  # "engine_vec.h.md"
    """
    name = path.replace("/", "_").replace("\\", "_")
    if trim_prefix:
        position = path.find(trim_prefix)
        if position != -1:
            name = name[:position] + name[position + len(trim_prefix) :]
    return name + OUTPUT_SUFFIX


def output_path_for(path: str, config: Config) -> Path:
    return config.output_path / output_name(path, config.output.trim_path_prefix)


def render_unit(
    path: str,
    lines: LineStore,
    config: Config,
    provider: AstProvider,
    unit_logger: Optional[UnitLogger] = None,
) -> Tuple[str, DeclarationTreeBuilder]:
    """Parse, build and render one unit already in memory."""
    unit_logger = unit_logger or UnitLogger(path)

    unit_logger.start_stage("parse")
    events = provider.parse(Path(path), lines)

    unit_logger.start_stage("build")
    builder = DeclarationTreeBuilder(lines)
    roots = builder.ingest_all(events)

    unit_logger.start_stage("render")
    document = MarkdownRenderer(lines, config.render).render(path, roots)
    return document.text, builder


def build_unit(path: str, config: Config, provider: Optional[AstProvider] = None) -> UnitResult:
    """
    Document one input unit and write its markdown file.

    Args:
        path: Input path as given by the user; also the document title
        config: Full configuration
        provider: AST provider; defaults to the configured one

    Returns:
        UnitResult; failures carry the HeaderDocError that stopped the unit
    """
    unit_logger = UnitLogger(path)
    result = UnitResult(source=path, output_path=output_path_for(path, config))
    logger.info("Documenting unit", unit=path, provider=config.parser.provider)

    try:
        provider = provider or get_provider(config.parser)

        unit_logger.start_stage("read")
        lines = LineStore.from_file(Path(path), strip_directives=config.parser.strip_directives)

        text, builder = render_unit(path, lines, config, provider, unit_logger)

        unit_logger.start_stage("write")
        _write_document(result.output_path, text)
    except HeaderDocError as e:
        result.error = e
        unit_logger.finish(success=False, error=str(e))
        return result
    except Exception as e:
        logger.exception("Unexpected error while documenting unit", unit=path)
        result.error = ProcessingError(f"Unexpected error while documenting {path}: {e}")
        result.error.__cause__ = e
        unit_logger.finish(success=False, error=str(result.error))
        return result

    result.success = True
    result.declarations = len(builder)
    result.stats = builder.stats
    unit_logger.finish(success=True, declarations=result.declarations)
    return result


def _write_document(output_path: Path, text: str) -> None:
    try:
        output_path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise ProcessingError(f"Could not write {output_path}: {e}") from e


def build_units(
    paths: Sequence[str],
    config: Config,
    provider: Optional[AstProvider] = None,
    jobs: Optional[int] = None,
) -> List[UnitResult]:
    """
    Document several units, optionally in parallel.

    Results are returned in input order regardless of completion order.
    """
    jobs = min(jobs or config.jobs, MAX_WORKERS)
    if jobs <= 1 or len(paths) <= 1:
        return [build_unit(path, config, provider) for path in paths]

    with ThreadPoolExecutor(max_workers=jobs) as executor:
        futures = [executor.submit(build_unit, path, config, provider) for path in paths]
        return [future.result() for future in futures]
