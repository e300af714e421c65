"""
Pytest configuration and shared fixtures for jqloader tests.

Building the LALR tables is the expensive part of the loader, so one parser
is shared by the whole session and injected into every loader.
"""

import sys
import pytest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
from jqloader.frontend.parser import Parser
from jqloader.module_system.module_loader import ModuleLoader


@pytest.fixture(scope="session")
def session_parser(tmp_path_factory):
    """Session-scoped parser; its grammar cache lives in a private temp dir."""
    cache_file = tmp_path_factory.mktemp("lark") / "grammar.cache"
    return Parser(cache_file=str(cache_file))


@pytest.fixture
def parser(session_parser):
    return session_parser


@pytest.fixture
def make_loader(session_parser):
    """Factory: make_loader([root, ...]) -> ModuleLoader sharing the session parser."""
    def _make_loader(paths):
        return ModuleLoader([str(p) for p in paths], parser=session_parser)
    return _make_loader


@pytest.fixture
def write_file():
    """Factory: write_file(path, text) creates parent directories and returns path."""
    def _write_file(path: Path, text: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path
    return _write_file
