"""
Testing utilities for code built on ddlogs-sink.

`FakeIntake` records every request made through an ``httpx.MockTransport``
and answers with scripted responses. Pytest fixtures live in
`ddlogs_sink.testing.fixtures`; register them with
``pytest_plugins = ("ddlogs_sink.testing.fixtures",)``.
"""

from .intake import FakeIntake, IntakeRequest

__all__ = ["FakeIntake", "IntakeRequest"]
