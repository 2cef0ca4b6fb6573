# ABOUTME: pytest configuration for action middleware tests
# ABOUTME: Configures timeouts, quiet logging and settings isolation between tests

import pytest
from loguru import logger

from action_middleware.config import get_settings


def pytest_configure(config):
    """Configure pytest for action middleware tests."""
    config.addinivalue_line("markers", "unit: Unit tests with 20-second timeout")
    config.addinivalue_line("markers", "integration: Integration tests with 60-second timeout")
    config.addinivalue_line("markers", "config: Configuration tests")
    config.addinivalue_line("markers", "benchmark: Benchmark tests with 60-second timeout")


def pytest_collection_modifyitems(config, items):
    """Modify test items to add appropriate timeouts based on test type."""
    for item in items:
        # Check for existing timeout marker - if it exists, respect it
        existing_timeout = item.get_closest_marker("timeout")
        if existing_timeout:
            continue

        if item.get_closest_marker("unit"):
            item.add_marker(pytest.mark.timeout(20))
        elif any(item.get_closest_marker(mark) for mark in ["integration", "benchmark"]):
            item.add_marker(pytest.mark.timeout(60))


@pytest.fixture(autouse=True)
def fresh_settings():
    """Reload settings for every test so environment patches take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def captured_logs():
    """Collect formatted loguru messages emitted while the test runs."""
    messages = []
    handler_id = logger.add(messages.append, level="DEBUG", format="{level} | {message}")
    yield messages
    logger.remove(handler_id)
