"""
Basic usage example for ddlogs-sink.

Ships a handful of records to a local intake. Point DDLOGS_DATADOG__DD_URL,
DDLOGS_DATADOG__DD_PORT and DDLOGS_DATADOG__DD_API_KEY at a real intake to
try it against Datadog.
"""

import logging
import sys
from pathlib import Path

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from ddlogs_sink import DeliveryError, SinkRecord, create_writer


def main() -> int:
    """Demonstrate batching and delivery."""
    logging.basicConfig(level=logging.DEBUG)

    writer = create_writer(
        {"ddURL": "localhost", "ddPort": 8080, "ddAPIKey": "example-key"},
        ddMaxBatchLength=2,
        compressionEnable=False,
    )
    records = [
        SinkRecord(topic="app-logs", value='{"msg":"started"}'),
        SinkRecord(topic="app-logs", value='{"msg":"ready"}'),
        SinkRecord(topic="app-logs", key="worker-1", value={"msg": "job done"}),
        SinkRecord(topic="app-logs", key="worker-1", value=None),
    ]
    with writer:
        try:
            writer.ingest(records)
        except DeliveryError as exc:
            print(f"Delivery failed: {exc}", file=sys.stderr)
            print(f"Still pending: {writer.pending_keys()}", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
