# ABOUTME: Benchmark test configuration for the composition engine
# ABOUTME: Marks benchmark tests and runs coroutines synchronously for pytest-benchmark

import asyncio

import pytest


def pytest_collection_modifyitems(config, items):
    """Add benchmark marker to all tests in benchmark directory."""
    for item in items:
        if "benchmark" in str(item.path):
            item.add_marker(pytest.mark.benchmark)


@pytest.fixture
def event_loop_runner():
    """Run coroutines on a dedicated loop so pytest-benchmark can call them synchronously."""
    loop = asyncio.new_event_loop()
    yield loop.run_until_complete
    loop.close()
