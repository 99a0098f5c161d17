"""
Core batching and delivery engine.
"""

from .batches import BatchStore
from .errors import (
    ConfigurationError,
    DeliveryError,
    EncodingError,
    ErrorCategory,
    SinkError,
)
from .records import SinkRecord, batch_key
from .serialization import EncodedPayload, encode_batch
from .settings import (
    DatadogLogsConfig,
    ProcessSettings,
    Settings,
    load_config,
    load_settings,
)
from .transport import DeliveryClient, build_intake_url
from .writer import LogsApiWriter

__all__ = [
    "BatchStore",
    "ConfigurationError",
    "DatadogLogsConfig",
    "DeliveryClient",
    "DeliveryError",
    "EncodedPayload",
    "EncodingError",
    "ErrorCategory",
    "LogsApiWriter",
    "ProcessSettings",
    "Settings",
    "SinkError",
    "SinkRecord",
    "batch_key",
    "build_intake_url",
    "encode_batch",
    "load_config",
    "load_settings",
]
