"""
Type models for stream lifecycle operations.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class StreamStatus(Enum):
    """Lifecycle states reported by DescribeStreamSummary."""

    CREATING = "CREATING"
    ACTIVE = "ACTIVE"
    UPDATING = "UPDATING"
    DELETING = "DELETING"


class ShardStopReason(Enum):
    """Why the reader stopped draining a shard."""

    EXHAUSTED = "exhausted"  # No next iterator, shard is closed
    CAUGHT_UP = "caught_up"  # MillisBehindLatest reached zero
    MAX_ITERATIONS = "max_iterations"


@dataclass
class StreamSummary:
    """Stream description as returned by DescribeStreamSummary."""

    name: str
    arn: str
    status: StreamStatus
    shard_count: int = 0
    mode: str | None = None
    retention_hours: int | None = None

    @classmethod
    def from_response(cls, summary: dict[str, Any]) -> "StreamSummary":
        mode_details = summary.get("StreamModeDetails") or {}
        return cls(
            name=summary["StreamName"],
            arn=summary["StreamARN"],
            status=StreamStatus(summary["StreamStatus"]),
            shard_count=summary.get("OpenShardCount", 0),
            mode=mode_details.get("StreamMode"),
            retention_hours=summary.get("RetentionPeriodHours"),
        )


@dataclass
class Shard:
    """Shard descriptor from ListShards."""

    shard_id: str
    parent_shard_id: str | None = None
    closed: bool = False

    @classmethod
    def from_response(cls, shard: dict[str, Any]) -> "Shard":
        sequence_range = shard.get("SequenceNumberRange", {})
        return cls(
            shard_id=shard["ShardId"],
            parent_shard_id=shard.get("ParentShardId"),
            closed="EndingSequenceNumber" in sequence_range,
        )


@dataclass
class Record:
    """A single record read back from a shard."""

    shard_id: str
    index: int
    partition_key: str
    data: bytes
    sequence_number: str | None = None

    @property
    def payload_text(self) -> str:
        return self.data.decode("utf-8", errors="replace")

    def to_dict(self) -> dict[str, Any]:
        return {
            "shard": self.shard_id,
            "index": self.index,
            "partition_key": self.partition_key,
            "data": self.payload_text,
            "sequence_number": self.sequence_number,
        }


@dataclass
class ShardReadResult:
    """Outcome of draining one shard."""

    shard_id: str
    records: list[Record] = field(default_factory=list)
    calls: int = 0
    stop_reason: ShardStopReason | None = None


@dataclass
class LifecycleResult:
    """Outcome of a full create/write/read/delete run."""

    stream_name: str
    stream_arn: str
    records_written: int = 0
    records: list[Record] = field(default_factory=list)
    deleted: bool = False
