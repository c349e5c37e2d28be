"""
Pytest configuration and shared fixtures for toolfs tests.
"""

import pytest

# Import test fixtures to make them available to all tests
# These imports register the fixtures with pytest's fixture discovery system
# ruff: noqa: F401
from tests.fixtures.directories import workspace
from tests.fixtures.servers import http_server

from toolfs.core.platform import clear_platform_cache
from toolfs.tools.dirstack import clear_base_dir_cache
from toolfs.tools.registry import clear_registry_cache


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="run integration tests that spawn real curl/wget/md5sum",
    )


def pytest_collection_modifyitems(config, items):
    """
    Skip integration tests unless --integration flag is provided.
    """
    if not config.getoption("--integration"):
        skip_integration = pytest.mark.skip(reason="need --integration option to run")
        for item in items:
            if "integration" in item.keywords:
                item.add_marker(skip_integration)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests (requires --integration)",
    )
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def reset_process_caches():
    """Drop process-wide memoized state around every test."""
    clear_base_dir_cache()
    clear_registry_cache()
    clear_platform_cache()
    yield
    clear_base_dir_cache()
    clear_registry_cache()
    clear_platform_cache()


@pytest.fixture
def isolated_env(monkeypatch):
    """Remove TOOLFS_* variables inherited from the developer's shell."""
    import os

    for key in list(os.environ):
        if key.startswith("TOOLFS_"):
            monkeypatch.delenv(key)

