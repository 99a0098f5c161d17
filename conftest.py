"""
Root pytest configuration.
"""

from __future__ import annotations

from collections.abc import Generator

import pytest

# Register ddlogs_sink testing fixtures for all tests
pytest_plugins = ("ddlogs_sink.testing.fixtures",)


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line(
        "markers",
        "critical: Tests that must never fail - core functionality",
    )
    config.addinivalue_line(
        "markers",
        "standard: Default risk category for typical unit tests",
    )
    config.addinivalue_line(
        "markers",
        "property: Property-based tests (may be slow)",
    )
    config.addinivalue_line(
        "markers",
        "integration: Tests that open real sockets",
    )


@pytest.fixture(autouse=True)
def reset_diagnostics_writer() -> Generator[None, None, None]:
    """Restore the default diagnostics writer around each test."""
    import ddlogs_sink.core.diagnostics as diag

    diag._reset_for_tests()
    yield
    diag._reset_for_tests()


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep DDLOGS_* variables from the developer's shell out of tests."""
    import os

    for name in list(os.environ):
        if name.upper().startswith("DDLOGS_"):
            monkeypatch.delenv(name, raising=False)
