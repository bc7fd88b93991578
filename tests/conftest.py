"""
Pytest configuration and shared fixtures for mrkl tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_common = importlib.import_module("fixtures.common")

NAMES = _common.NAMES
make_names_tree = _common.make_names_tree
make_numeric_items = _common.make_numeric_items
make_numeric_tree = _common.make_numeric_tree
write_items_file = _common.write_items_file

from mrkl.config.runtime import set_default_config


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture(autouse=True)
def _reset_default_config(monkeypatch):
    """Isolate every test from MRKL_* variables and the cached default config."""
    for name in (
        "MRKL_FAIL_FAST",
        "MRKL_CHECK_LEAF_DIGESTS",
        "MRKL_CHECK_ORDERING",
        "MRKL_LOG_LEVEL",
        "MRKL_LOG_FILE",
    ):
        monkeypatch.delenv(name, raising=False)
    set_default_config(None)
    yield
    set_default_config(None)


@pytest.fixture
def names_tree():
    """Provide the five-name tree."""
    return make_names_tree()


@pytest.fixture
def numeric_tree():
    """Provide a tree over the integers 0..20."""
    return make_numeric_tree(21)


@pytest.fixture
def items_file(tmp_path):
    """Provide an items file holding the five names."""
    return write_items_file(tmp_path, NAMES)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
