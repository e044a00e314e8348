"""Pytest configuration and shared fixtures."""

import pytest

from tests.fixtures import DATA_DIR, create_sample_controller


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "scenario: end-to-end page scenarios"
    )
    config.addinivalue_line(
        "markers", "integration: tests spanning several components"
    )
    config.addinivalue_line(
        "markers", "cli_coverage: tests that verify CLI commands"
    )
    config.addinivalue_line(
        "markers", "critical: tests that must pass for production"
    )


@pytest.fixture
def data_dir():
    """Directory holding the sample collections."""
    return DATA_DIR


@pytest.fixture
def controller():
    """Page controller initialised from the sample collections."""
    return create_sample_controller()
