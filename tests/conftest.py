"""
Pytest configuration and shared fixtures for all tests.
"""

import sys
from pathlib import Path

import pytest

# Add the project root to sys.path so we can import from src
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


ENVIRONMENT_VARIABLES = (
    "LOCATION_FORMAT_CONFIG",
    "LOCATION_FORMAT_PATTERN",
    "LOCATION_FORMAT_LOG_LEVEL",
    "LOCATION_FORMAT_LOG_FILE",
)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run without location format environment variables and outside the project root."""
    for name in ENVIRONMENT_VARIABLES:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def sample_location():
    """Location used throughout the format tables."""
    from src.location_format.models import Location
    return Location.of(23.987635, -65.234275, -65.234275)


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as integration test running the command line"
    )
    config.addinivalue_line(
        "markers", "unit: mark test as unit test (no external dependencies)"
    )
