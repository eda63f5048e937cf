"""
Configuration sections for rendering, parsing and output naming.

Each section is a plain dataclass with defaults, so zero-config operation
reproduces the classic behaviour: public API only, table of contents on,
libclang parser, output next to the working directory.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class RenderConfig:
    """Markdown rendering switches."""

    include_private: bool = False
    build_toc: bool = True


@dataclass
class ParserConfig:
    """AST provider selection and arguments."""

    provider: str = "clang"  # clang, tree-sitter
    clang_args: List[str] = field(default_factory=list)  # appended to -x c++
    library_file: Optional[str] = None  # explicit path to libclang.so
    strip_directives: bool = True  # drop '#' lines before parsing


@dataclass
class OutputConfig:
    """Where rendered documents are written."""

    output_dir: str = ""
    trim_path_prefix: str = ""
