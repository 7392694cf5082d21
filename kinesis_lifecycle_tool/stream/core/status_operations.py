"""
Status operations for streams.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

from typing import Any

from ..models import StreamSummary
from .client import KinesisClient


def get_stream_status(client: KinesisClient, stream_name: str) -> dict[str, Any]:
    """Get stream status, ARN, shard count, mode and retention.

    Raises StreamNotFoundError when the stream is absent.
    """
    summary = StreamSummary.from_response(client.describe_stream_summary(stream_name))
    return {
        "stream": summary.name,
        "status": summary.status.value,
        "arn": summary.arn,
        "shards": summary.shard_count,
        "mode": summary.mode,
        "retention_hours": summary.retention_hours,
    }
