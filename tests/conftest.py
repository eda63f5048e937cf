"""
Shared pytest fixtures and configuration for headerdoc tests.

This file is automatically discovered by pytest and provides fixtures
that can be used across all test files.

Fixture Organization
--------------------
- **temp_dir**: Temporary directory for file operations
- **output_config**: Config writing documents into temp_dir
- **line_store**: Builds a LineStore from header text
- **make_event**: DeclarationEvent factory with sensible defaults
- **sample_***: A small documented header, its events and a provider
  replaying them (see tests.fixtures.headers)

The sample events let tree, renderer, pipeline and CLI tests run without a
native C++ parser installed.
"""

import tempfile
from pathlib import Path
from typing import Callable, Generator, List

import pytest

from headerdoc.core.config import Config, OutputConfig
from headerdoc.declarations.models import DeclarationEvent
from headerdoc.source.line_store import LineStore
from tests.fixtures.headers import SAMPLE_HEADER, StaticProvider, event, sample_events


# ============================================================================
# Path and Directory Fixtures
# ============================================================================


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory (cleaned up after test)

    Example:
        def test_file_creation(temp_dir):
            test_file = temp_dir / "vec.h"
            test_file.write_text("struct Vec3;")
            assert test_file.exists()
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def output_config(temp_dir: Path) -> Config:
    """Default Config writing documents into temp_dir."""
    return Config(output=OutputConfig(output_dir=str(temp_dir)))


# ============================================================================
# Source Fixtures
# ============================================================================


@pytest.fixture
def line_store() -> Callable[..., LineStore]:
    """Factory building a LineStore from header text.

    Example:
        def test_lines(line_store):
            store = line_store("// doc\\nint x;\\n")
            assert store.line(2) == "int x;"
    """

    def _make(text: str, strip_directives: bool = True) -> LineStore:
        return LineStore.from_text(text, strip_directives=strip_directives)

    return _make


@pytest.fixture
def make_event() -> Callable[..., DeclarationEvent]:
    """Factory for DeclarationEvent (see tests.fixtures.headers.event)."""
    return event


@pytest.fixture
def sample_header() -> str:
    return SAMPLE_HEADER


@pytest.fixture
def sample_lines() -> LineStore:
    return LineStore.from_text(SAMPLE_HEADER)


@pytest.fixture
def sample_events_list() -> List[DeclarationEvent]:
    return sample_events()


@pytest.fixture
def static_provider() -> StaticProvider:
    """Provider replaying the sample header's events."""
    return StaticProvider(sample_events())


@pytest.fixture
def sample_file(temp_dir: Path) -> Path:
    """SAMPLE_HEADER written to temp_dir/include/vec.h."""
    path = temp_dir / "include" / "vec.h"
    path.parent.mkdir(parents=True)
    path.write_text(SAMPLE_HEADER, encoding="utf-8")
    return path
