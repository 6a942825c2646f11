"""Pytest configuration and fixtures for todolint tests."""

import sys
from pathlib import Path
import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from todolint.linter import Linter  # noqa: E402


@pytest.fixture
def test_data_dir():
    """Return the path to the test data directory."""
    return Path(__file__).parent / "test_data"


@pytest.fixture
def clean_test_file(test_data_dir):
    """Return path to test file whose markers all cite a reference."""
    return str(test_data_dir / "clean.txt")


@pytest.fixture
def violation_test_file(test_data_dir):
    """Return path to test file with dangling markers."""
    return str(test_data_dir / "violations.txt")


@pytest.fixture
def examples_dir(test_data_dir):
    """Return path to the multilingual example tree."""
    return str(test_data_dir / "examples")


@pytest.fixture
def linter():
    """Create a Linter with built-in defaults."""
    return Linter()


@pytest.fixture
def make_file(tmp_path):
    """Return a factory writing files below tmp_path."""

    def _make_file(relative, content):
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
        return path

    return _make_file
