"""Pytest configuration and shared fixtures for the office2site test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import logging
from pathlib import Path
from typing import Generator

import pytest
from utils import SlideDeckBuilder, cleanup_test_dir, create_test_temp_dir, create_two_slide_deck


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "e2e: End-to-end tests - full pipeline tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for test files.

    Yields
    ------
    Path
        Temporary directory path that will be cleaned up after test.

    """
    temp_path = create_test_temp_dir()
    try:
        yield temp_path
    finally:
        cleanup_test_dir(temp_path)


@pytest.fixture
def site_dirs(temp_dir: Path) -> tuple[Path, Path]:
    """Provide an existing input directory and a not-yet-created output directory."""
    root = temp_dir.resolve()
    input_dir = root / "input"
    input_dir.mkdir()
    return input_dir, root / "docs"


@pytest.fixture
def two_slide_deck() -> bytes:
    """Deck with a titled first slide and an untitled second slide with notes."""
    return create_two_slide_deck()


@pytest.fixture
def deck_builder() -> SlideDeckBuilder:
    """Provide an empty hand-assembled deck with a 4:3 slide size."""
    return SlideDeckBuilder()


@pytest.fixture(autouse=True)
def reset_root_logging() -> Generator[None, None, None]:
    """Restore root logger handlers changed by CLI tests."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
