"""Tests for writing and reading records."""

import threading
from unittest.mock import Mock

import pytest

from kinesis_lifecycle_tool.stream.core.client import KinesisClient
from kinesis_lifecycle_tool.stream.core.polling import CancellationToken
from kinesis_lifecycle_tool.stream.core.provision_operations import ensure_stream
from kinesis_lifecycle_tool.stream.core.record_operations import (
    list_shards,
    read_all,
    read_shard,
    read_shards,
    write_batch,
)
from kinesis_lifecycle_tool.stream.exceptions import StreamError, WaitCancelledError
from kinesis_lifecycle_tool.stream.models import Record, ShardStopReason


@pytest.fixture
def stream_arn(kinesis: KinesisClient) -> str:
    return ensure_stream(kinesis, "test-A")


class TestWriteBatch:
    def test_writes_ten_records_keyed_by_index(self, mock_client: Mock) -> None:
        mock_client.put_record.return_value = {"ShardId": "shardId-0", "SequenceNumber": "1"}
        write_batch(mock_client, "s", "arn")

        calls = mock_client.put_record.call_args_list
        assert [c.args for c in calls] == [("s", "arn", str(i), str(i).encode()) for i in range(10)]

    def test_first_failure_aborts_batch(self, mock_client: Mock) -> None:
        mock_client.put_record.side_effect = [{}, {}, StreamError("boom"), {}]
        with pytest.raises(StreamError):
            write_batch(mock_client, "s", "arn")
        assert mock_client.put_record.call_count == 3

    def test_negative_count_rejected(self, mock_client: Mock) -> None:
        with pytest.raises(ValueError):
            write_batch(mock_client, "s", "arn", count=-1)


class TestReadAgainstMoto:
    def test_reads_back_every_written_record(self, kinesis: KinesisClient, stream_arn: str) -> None:
        write_batch(kinesis, "test-A", stream_arn)
        records = read_all(kinesis, "test-A", stream_arn, poll_interval=0)

        assert [r.partition_key for r in records] == [str(i) for i in range(10)]
        assert all(r.data == r.partition_key.encode() for r in records)
        assert [r.index for r in records] == list(range(10))

    def test_empty_stream_terminates_without_records(
        self, kinesis: KinesisClient, stream_arn: str
    ) -> None:
        results = read_shards(kinesis, "test-A", stream_arn, poll_interval=0)

        assert len(results) == 1
        assert results[0].records == []
        assert results[0].stop_reason == ShardStopReason.CAUGHT_UP

    def test_callback_sees_records_in_order(self, kinesis: KinesisClient, stream_arn: str) -> None:
        write_batch(kinesis, "test-A", stream_arn, count=3)
        seen: list[Record] = []
        read_all(kinesis, "test-A", stream_arn, poll_interval=0, on_record=seen.append)
        assert [r.payload_text for r in seen] == ["0", "1", "2"]

    def test_parallel_read_covers_all_shards(self, kinesis: KinesisClient) -> None:
        arn = ensure_stream(kinesis, "test-multi", shard_count=3)
        write_batch(kinesis, "test-multi", arn)

        results = read_shards(kinesis, "test-multi", arn, poll_interval=0, max_workers=3)

        assert [r.shard_id for r in results] == [s.shard_id for s in list_shards(kinesis, "test-multi", arn)]
        keys = sorted(int(r.partition_key) for res in results for r in res.records)
        assert keys == list(range(10))
        for res in results:
            sequence_numbers = [int(r.sequence_number) for r in res.records]
            assert sequence_numbers == sorted(sequence_numbers)


class TestReadShardTermination:
    def test_stops_when_shard_is_exhausted(self, mock_client: Mock) -> None:
        mock_client.get_shard_iterator.return_value = "it-0"
        mock_client.get_records.side_effect = [
            {"Records": [{"PartitionKey": "a", "Data": b"1"}], "NextShardIterator": "it-1",
             "MillisBehindLatest": 500},
            {"Records": [{"PartitionKey": "b", "Data": b"2"}], "MillisBehindLatest": 0},
        ]
        result = read_shard(mock_client, "s", "arn", "shardId-0", poll_interval=0)

        assert result.stop_reason == ShardStopReason.EXHAUSTED
        assert [r.partition_key for r in result.records] == ["a", "b"]
        assert [c.args[0] for c in mock_client.get_records.call_args_list] == ["it-0", "it-1"]
        mock_client.get_shard_iterator.assert_called_once_with("s", "arn", "shardId-0", "TRIM_HORIZON")

    def test_index_restarts_per_batch(self, mock_client: Mock) -> None:
        mock_client.get_shard_iterator.return_value = "it-0"
        mock_client.get_records.side_effect = [
            {"Records": [{"PartitionKey": "a", "Data": b"1"}, {"PartitionKey": "b", "Data": b"2"}],
             "NextShardIterator": "it-1", "MillisBehindLatest": 10},
            {"Records": [{"PartitionKey": "c", "Data": b"3"}], "NextShardIterator": "it-2",
             "MillisBehindLatest": 0},
        ]
        result = read_shard(mock_client, "s", "arn", "shardId-0", poll_interval=0)
        assert [r.index for r in result.records] == [0, 1, 0]
        assert result.stop_reason == ShardStopReason.CAUGHT_UP

    def test_busy_shard_is_capped(self, mock_client: Mock) -> None:
        mock_client.get_shard_iterator.return_value = "it"
        mock_client.get_records.return_value = {
            "Records": [], "NextShardIterator": "it", "MillisBehindLatest": 1000,
        }
        result = read_shard(mock_client, "s", "arn", "shardId-0", max_iterations=5, poll_interval=0)

        assert result.stop_reason == ShardStopReason.MAX_ITERATIONS
        assert result.calls == 5

    def test_cancelled_token_stops_reader(self, mock_client: Mock) -> None:
        token = CancellationToken()
        token.cancel()
        mock_client.get_shard_iterator.return_value = "it"
        with pytest.raises(WaitCancelledError):
            read_shard(mock_client, "s", "arn", "shardId-0", token=token)
        mock_client.get_records.assert_not_called()

    def test_read_failure_is_fatal(self, mock_client: Mock) -> None:
        mock_client.get_shard_iterator.return_value = "it"
        mock_client.get_records.side_effect = StreamError("expired")
        with pytest.raises(StreamError):
            read_shard(mock_client, "s", "arn", "shardId-0")


def test_list_shards_follows_next_token(mock_client: Mock) -> None:
    mock_client.list_shards.side_effect = [
        {"Shards": [{"ShardId": "shardId-0"}], "NextToken": "tok"},
        {"Shards": [{"ShardId": "shardId-1", "SequenceNumberRange": {
            "StartingSequenceNumber": "1", "EndingSequenceNumber": "9"}}]},
    ]
    shards = list_shards(mock_client, "s", "arn")

    assert [s.shard_id for s in shards] == ["shardId-0", "shardId-1"]
    assert [s.closed for s in shards] == [False, True]
    mock_client.list_shards.assert_called_with("s", next_token="tok")


class TestParallelReadFailure:
    def test_failing_shard_cancels_busy_shard(self, mock_client: Mock) -> None:
        mock_client.list_shards.return_value = {"Shards": [{"ShardId": "s0"}, {"ShardId": "s1"}]}
        mock_client.get_shard_iterator.side_effect = lambda name, arn, shard_id, position: shard_id

        def get_records(iterator, stream_arn, limit):
            if iterator == "s1":
                raise StreamError("boom")
            return {"Records": [], "NextShardIterator": "s0", "MillisBehindLatest": 1000}

        mock_client.get_records.side_effect = get_records
        token = CancellationToken()
        outcome: list[BaseException] = []

        def run() -> None:
            try:
                read_shards(mock_client, "s", "arn", poll_interval=0.01, max_workers=2, token=token)
            except BaseException as e:
                outcome.append(e)

        reader = threading.Thread(target=run, daemon=True)
        reader.start()
        reader.join(timeout=5)
        try:
            assert not reader.is_alive(), "read_shards kept polling after a shard failed"
        finally:
            token.cancel()

        assert len(outcome) == 1
        assert isinstance(outcome[0], StreamError)
        assert not isinstance(outcome[0], WaitCancelledError)
        assert str(outcome[0]) == "boom"
        assert token.cancelled
