"""
Tests for provider selection.

Test Strategy
-------------
- get_provider only constructs providers; no parser is loaded
- Unavailable backends are simulated by hiding their modules

Organization
------------
- TestGetProvider: backend selection by name
- TestAvailability: is_available() with the backend module hidden
"""

import sys

import pytest

from headerdoc.core.config import ParserConfig
from headerdoc.core.exceptions import ConfigValidationError, ProviderUnavailableError
from headerdoc.providers import ClangProvider, TreeSitterProvider, get_provider


class TestGetProvider:
    """Tests for get_provider()."""

    def test_default_is_clang(self):
        provider = get_provider()

        assert isinstance(provider, ClangProvider)
        assert provider.name == "clang"

    def test_clang_receives_config(self):
        config = ParserConfig(provider="clang", clang_args=["-std=c++17"])

        provider = get_provider(config)

        assert provider.args == ["-x", "c++", "-std=c++17"]

    def test_tree_sitter(self):
        provider = get_provider(ParserConfig(provider="tree-sitter"))

        assert isinstance(provider, TreeSitterProvider)

    def test_unknown_provider(self):
        with pytest.raises(ConfigValidationError) as exc_info:
            get_provider(ParserConfig(provider="gcc-xml"))

        assert exc_info.value.field == "parser.provider"
        assert "gcc-xml" in str(exc_info.value)


class TestAvailability:
    """Tests for is_available() and the errors raised when a backend is missing."""

    def test_clang_unavailable(self, monkeypatch):
        monkeypatch.setitem(sys.modules, "clang", None)
        provider = ClangProvider()

        assert provider.is_available() is False
        with pytest.raises(ProviderUnavailableError):
            provider._load_cindex()

    def test_tree_sitter_unavailable(self, monkeypatch):
        monkeypatch.setitem(sys.modules, "tree_sitter_languages", None)
        provider = TreeSitterProvider()

        assert provider.is_available() is False
        with pytest.raises(ProviderUnavailableError):
            provider._get_parser()

    def test_unavailable_error_explains_fix(self, monkeypatch):
        monkeypatch.setitem(sys.modules, "clang", None)

        with pytest.raises(ProviderUnavailableError) as exc_info:
            ClangProvider()._load_cindex()

        assert exc_info.value.how_to_fix
