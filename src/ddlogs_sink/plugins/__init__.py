"""
Sink plugins built on the core batching engine.
"""

from .sinks import BaseSink
from .sinks.datadog_logs import DatadogLogsSink

__all__ = ["BaseSink", "DatadogLogsSink"]
