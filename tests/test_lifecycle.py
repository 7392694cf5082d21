"""End-to-end lifecycle tests against moto."""

from unittest.mock import Mock

import pytest

from kinesis_lifecycle_tool.stream.core.client import KinesisClient
from kinesis_lifecycle_tool.stream.core.lifecycle import run_lifecycle
from kinesis_lifecycle_tool.stream.core.polling import PollingPolicy
from kinesis_lifecycle_tool.stream.exceptions import AWSPermissionError, StreamNotFoundError

POLICY = PollingPolicy(interval=0, timeout=None, max_attempts=10)


def test_full_round_trip(kinesis: KinesisClient) -> None:
    created: list[str] = []
    result = run_lifecycle(kinesis, "test-A", policy=POLICY, on_created=created.append)

    assert created == [result.stream_arn]
    assert result.records_written == 10
    assert [r.partition_key for r in result.records] == [str(i) for i in range(10)]
    assert [r.payload_text for r in result.records] == [str(i) for i in range(10)]
    assert result.deleted is True
    with pytest.raises(StreamNotFoundError):
        kinesis.describe_stream_summary("test-A")


def test_keep_stream_leaves_it_active(kinesis: KinesisClient) -> None:
    result = run_lifecycle(kinesis, "test-A", policy=POLICY, keep_stream=True)

    assert result.deleted is False
    summary = kinesis.describe_stream_summary("test-A")
    assert summary["StreamStatus"] == "ACTIVE"


def test_write_failure_stops_run_without_cleanup(mock_client: Mock, summary) -> None:
    mock_client.describe_stream_summary.return_value = summary("ACTIVE")
    mock_client.put_record.side_effect = AWSPermissionError("denied")

    with pytest.raises(AWSPermissionError):
        run_lifecycle(mock_client, "test-stream", policy=POLICY)

    mock_client.get_shard_iterator.assert_not_called()
    mock_client.delete_stream.assert_not_called()
