"""
Pytest fixtures for ddlogs-sink.

Register with ``pytest_plugins = ("ddlogs_sink.testing.fixtures",)``.
"""

from __future__ import annotations

from typing import Any, Iterator

import pytest

from ..core import diagnostics
from ..core.settings import DatadogLogsConfig
from .intake import FakeIntake


@pytest.fixture()
def fake_intake() -> FakeIntake:
    return FakeIntake()


@pytest.fixture()
def dd_config() -> DatadogLogsConfig:
    return DatadogLogsConfig(
        ddURL="intake.test",
        ddPort=8080,
        ddAPIKey="test-api-key",
        ddMaxBatchLength=10,
    )


@pytest.fixture()
def capture_diagnostics() -> Iterator[list[dict[str, Any]]]:
    diagnostics._reset_for_tests()
    captured: list[dict[str, Any]] = []
    diagnostics.set_writer_for_tests(captured.append)
    yield captured
    diagnostics._reset_for_tests()
