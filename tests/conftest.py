"""
Pytest Configuration and Fixtures

This module provides shared fixtures and configuration for all tests.
Every fixture is rooted in pytest's per-test ``tmp_path`` directory.
"""

import json
from pathlib import Path

import pytest

from kvdisk.engine.content_store import ContentStore
from kvdisk.engine.key_index import KeyIndex
from kvdisk.engine.store import Store
from kvdisk.protocol.parser import ProtocolParser


# ============================================================================
# Storage Fixtures
# ============================================================================

@pytest.fixture
def store_dir(tmp_path: Path) -> Path:
    """An absolute storage root that does not exist yet."""
    return tmp_path / "kvdisk"


@pytest.fixture
def content_store(store_dir: Path) -> ContentStore:
    """Create a ContentStore rooted at store_dir."""
    return ContentStore(store_dir)


@pytest.fixture
def key_index(store_dir: Path) -> KeyIndex:
    """Create a KeyIndex rooted at store_dir."""
    return KeyIndex(store_dir)


@pytest.fixture
def store(store_dir: Path) -> Store:
    """Create a fresh Store rooted at store_dir."""
    return Store(store_dir)


@pytest.fixture
def read_index(store_dir: Path):
    """
    Helper returning the parsed contents of the index file on disk.

    Usage:
        def test_something(read_index):
            assert read_index() == {"a": "..."}
    """
    def reader() -> dict:
        return json.loads((store_dir / "index").read_text(encoding="utf-8"))
    return reader


# ============================================================================
# Protocol Fixtures
# ============================================================================

@pytest.fixture
def parser() -> ProtocolParser:
    """Create a ProtocolParser instance."""
    return ProtocolParser()


# ============================================================================
# Pytest Configuration
# ============================================================================

def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
