"""
Pytest configuration for Django tests.

Settings come from ``DJANGO_SETTINGS_MODULE`` in pyproject.toml (pytest-django).
"""


def pytest_collection_modifyitems(config, items):
    """Mark tests for parallel execution compatibility."""
    # These tests start real threads or depend on wall-clock timing
    parallel_unsafe_tests = [
        "SchedulerThreadTests",
        "test_overlapping_tick_is_skipped",
    ]

    for item in items:
        if any(pattern in item.nodeid for pattern in parallel_unsafe_tests):
            item.add_marker("parallel_unsafe")
