"""
Root pytest configuration.
"""

from __future__ import annotations

from collections.abc import Generator

import pytest

# Register logship testing fixtures for all tests
pytest_plugins = ("logship.testing.fixtures",)


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line(
        "markers",
        "critical: Tests that must never fail - core functionality",
    )
    config.addinivalue_line(
        "markers",
        "integration: Tests wiring several components together",
    )
    config.addinivalue_line(
        "markers",
        "property: Property-based tests (may be slow)",
    )


@pytest.fixture(autouse=True)
def reset_diagnostics_cache() -> Generator[None, None, None]:
    """Reset the diagnostics module cache before each test.

    The diagnostics module caches the `internal_logging_enabled` setting
    at first access. Resetting it keeps tests from inheriting the cached
    state of a previous test; the warning rate limiter is cleared too.
    """
    import logship.core.diagnostics as diag

    diag._internal_logging_enabled = None
    diag._reset_rate_limits()
    yield
    diag._internal_logging_enabled = None
    diag._reset_rate_limits()
