"""
Record write and read operations.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

from collections.abc import Callable
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait

from ..constants import (
    DEFAULT_READ_WORKERS,
    DEFAULT_RECORD_COUNT,
    ITERATOR_TRIM_HORIZON,
    POLL_INTERVAL,
)
from ..exceptions import WaitCancelledError
from ..logging_config import get_logger
from ..models import Record, Shard, ShardReadResult, ShardStopReason
from .client import KinesisClient
from .polling import CancellationToken

logger = get_logger(__name__)

RecordCallback = Callable[[Record], None]


def write_batch(
    client: KinesisClient,
    stream_name: str,
    stream_arn: str | None,
    count: int = DEFAULT_RECORD_COUNT,
) -> None:
    """
    Write records 0..count-1, one PutRecord call each.

    The decimal text of the index is both partition key and payload. The
    first failing write aborts the batch.

    Args:
        client: Kinesis client
        stream_name: Stream name
        stream_arn: Stream ARN
        count: Number of records to write

    Raises:
        StreamError: If any write fails
    """
    if count < 0:
        raise ValueError("Record count cannot be negative")

    for index in range(count):
        key = str(index)
        response = client.put_record(stream_name, stream_arn, key, key.encode("utf-8"))
        logger.debug(
            f"Wrote record {key} to {response.get('ShardId')} "
            f"(sequence {response.get('SequenceNumber')})"
        )

    logger.info(f"Wrote {count} record(s) to stream '{stream_name}'")


def list_shards(
    client: KinesisClient, stream_name: str, stream_arn: str | None = None
) -> list[Shard]:
    """List every shard of a stream, following NextToken if present."""
    response = client.list_shards(stream_name, stream_arn)
    shards = [Shard.from_response(s) for s in response.get("Shards", [])]

    # Handle pagination
    while response.get("NextToken"):
        response = client.list_shards(stream_name, next_token=response["NextToken"])
        shards.extend(Shard.from_response(s) for s in response.get("Shards", []))

    logger.debug(f"Stream '{stream_name}' has {len(shards)} shard(s)")
    return shards


def read_shard(
    client: KinesisClient,
    stream_name: str,
    stream_arn: str | None,
    shard_id: str,
    limit: int | None = None,
    max_iterations: int | None = None,
    poll_interval: float = POLL_INTERVAL,
    token: CancellationToken | None = None,
    on_record: RecordCallback | None = None,
) -> ShardReadResult:
    """
    Drain one shard from TRIM_HORIZON to its current tail.

    Stops when the response carries no NextShardIterator (closed shard is
    exhausted), when MillisBehindLatest reaches zero (caught up), or after
    max_iterations GetRecords calls. An empty batch that is still behind the
    tail waits poll_interval before the next call.

    Args:
        client: Kinesis client
        stream_name: Stream name
        stream_arn: Stream ARN
        shard_id: Shard to drain
        limit: Maximum records per GetRecords call (optional)
        max_iterations: Cap on GetRecords calls (None for no cap)
        poll_interval: Delay after an empty batch, in seconds
        token: Cancellation token
        on_record: Called for every record as it is read

    Returns:
        Records in shard order plus why reading stopped

    Raises:
        WaitCancelledError: If the token is cancelled
        StreamError: If any read call fails
    """
    token = token or CancellationToken()
    result = ShardReadResult(shard_id=shard_id)
    iterator = client.get_shard_iterator(stream_name, stream_arn, shard_id, ITERATOR_TRIM_HORIZON)

    while True:
        token.raise_if_cancelled(f"reading shard {shard_id}")

        response = client.get_records(iterator, stream_arn, limit)
        result.calls += 1

        batch = response.get("Records", [])
        for index, raw in enumerate(batch):
            record = Record(
                shard_id=shard_id,
                index=index,
                partition_key=raw["PartitionKey"],
                data=raw["Data"],
                sequence_number=raw.get("SequenceNumber"),
            )
            result.records.append(record)
            if on_record:
                on_record(record)

        next_iterator = response.get("NextShardIterator")
        if not next_iterator:
            result.stop_reason = ShardStopReason.EXHAUSTED
            break
        iterator = next_iterator

        # A missing lag metric is treated as caught up
        if response.get("MillisBehindLatest", 0) == 0:
            result.stop_reason = ShardStopReason.CAUGHT_UP
            break

        if max_iterations is not None and result.calls >= max_iterations:
            logger.warning(
                f"Stopped reading shard {shard_id} after {result.calls} calls "
                f"({response.get('MillisBehindLatest')}ms behind latest)"
            )
            result.stop_reason = ShardStopReason.MAX_ITERATIONS
            break

        if not batch and token.sleep(poll_interval):
            raise WaitCancelledError(f"Cancelled while reading shard {shard_id}")

    logger.info(
        f"Read {len(result.records)} record(s) from {shard_id} "
        f"in {result.calls} call(s): {result.stop_reason.value}"
    )
    return result


def read_shards(
    client: KinesisClient,
    stream_name: str,
    stream_arn: str | None,
    limit: int | None = None,
    max_iterations: int | None = None,
    poll_interval: float = POLL_INTERVAL,
    max_workers: int = DEFAULT_READ_WORKERS,
    token: CancellationToken | None = None,
    on_record: RecordCallback | None = None,
) -> list[ShardReadResult]:
    """
    Drain every shard of a stream.

    With max_workers > 1 shards are drained concurrently. Results, and the
    on_record calls, follow ListShards order with each shard's records in
    shard order. The first failing shard cancels the others and its error
    is re-raised.
    """
    token = token or CancellationToken()
    shards = list_shards(client, stream_name, stream_arn)

    def drain(shard: Shard, callback: RecordCallback | None) -> ShardReadResult:
        return read_shard(
            client,
            stream_name,
            stream_arn,
            shard.shard_id,
            limit=limit,
            max_iterations=max_iterations,
            poll_interval=poll_interval,
            token=token,
            on_record=callback,
        )

    workers = min(max_workers, len(shards))
    if workers <= 1:
        return [drain(shard, on_record) for shard in shards]

    logger.info(f"Draining {len(shards)} shard(s) with {workers} worker(s)")
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="shard-reader") as pool:
        futures = [pool.submit(drain, shard, None) for shard in shards]
        try:
            done, _ = wait(futures, return_when=FIRST_EXCEPTION)
        except BaseException:
            token.cancel()
            raise

        # Stop the shards still polling before the pool joins them
        failed = [future for future in futures if future in done and future.exception()]
        if failed:
            token.cancel()

    if failed:
        error = failed[0].exception()
        logger.error(f"Shard reading failed, cancelled remaining shards: {error}")
        raise error  # type: ignore[misc]

    results = [future.result() for future in futures]
    if on_record:
        for result in results:
            for record in result.records:
                on_record(record)
    return results


def read_all(
    client: KinesisClient,
    stream_name: str,
    stream_arn: str | None,
    limit: int | None = None,
    max_iterations: int | None = None,
    poll_interval: float = POLL_INTERVAL,
    max_workers: int = DEFAULT_READ_WORKERS,
    token: CancellationToken | None = None,
    on_record: RecordCallback | None = None,
) -> list[Record]:
    """
    Read every record of every shard, starting at TRIM_HORIZON.

    Args:
        client: Kinesis client
        stream_name: Stream name
        stream_arn: Stream ARN
        limit: Maximum records per GetRecords call (optional)
        max_iterations: Cap on GetRecords calls per shard (None for no cap)
        poll_interval: Delay after an empty batch, in seconds
        max_workers: Number of shards drained concurrently
        token: Cancellation token
        on_record: Called for every record (in shard order)

    Returns:
        All records, grouped by shard in ListShards order

    Raises:
        StreamError: If any call fails
    """
    results = read_shards(
        client,
        stream_name,
        stream_arn,
        limit=limit,
        max_iterations=max_iterations,
        poll_interval=poll_interval,
        max_workers=max_workers,
        token=token,
        on_record=on_record,
    )
    return [record for result in results for record in result.records]
