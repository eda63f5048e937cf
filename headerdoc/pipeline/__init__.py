"""Unit pipeline: read, parse, build, render, write."""

from headerdoc.pipeline.runner import (
    UnitResult,
    build_unit,
    build_units,
    output_name,
    render_unit,
)

__all__ = ["UnitResult", "build_unit", "build_units", "output_name", "render_unit"]
