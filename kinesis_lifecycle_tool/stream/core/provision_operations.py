"""
Stream provisioning operations.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

from ..constants import DEFAULT_SHARD_COUNT, STREAM_MODE_PROVISIONED
from ..exceptions import StreamAlreadyExistsError, StreamNotFoundError, StreamStateError
from ..logging_config import get_logger
from ..models import StreamStatus, StreamSummary
from .client import KinesisClient
from .polling import CancellationToken, PollingPolicy, poll_until

logger = get_logger(__name__)


def ensure_stream(
    client: KinesisClient,
    stream_name: str,
    shard_count: int = DEFAULT_SHARD_COUNT,
    policy: PollingPolicy | None = None,
    token: CancellationToken | None = None,
) -> str:
    """
    Create a stream if absent and wait until it is no longer CREATING.

    Args:
        client: Kinesis client
        stream_name: Stream name
        shard_count: Number of shards for a new stream
        policy: Polling bounds for the wait
        token: Cancellation token for the wait

    Returns:
        Stream ARN

    Raises:
        StreamNotFoundError: If create reported the name in use but the
            stream cannot be described from this account/region
        StreamStateError: If the existing stream is being deleted
        WaitTimeoutError: If the stream stays CREATING past the deadline
        StreamError: For any other Kinesis failure
    """
    already_existed = False
    try:
        client.create_stream(stream_name, shard_count, STREAM_MODE_PROVISIONED)
        logger.info(f"Requested creation of stream '{stream_name}' ({shard_count} shard(s))")
    except StreamAlreadyExistsError:
        already_existed = True
        logger.info(f"Stream '{stream_name}' already exists, reusing it")

    def check() -> StreamSummary | None:
        try:
            summary = StreamSummary.from_response(client.describe_stream_summary(stream_name))
        except StreamNotFoundError:
            if already_existed:
                raise StreamNotFoundError(
                    f"Stream '{stream_name}' is reported as in use but is not visible "
                    f"in this account/region"
                )
            raise
        if summary.status == StreamStatus.CREATING:
            return None
        return summary

    summary = poll_until(check, f"stream '{stream_name}' to leave CREATING", policy, token)

    if summary.status == StreamStatus.DELETING:
        raise StreamStateError(f"Stream '{stream_name}' is being deleted")

    logger.info(f"Stream '{stream_name}' is {summary.status.value}: {summary.arn}")
    return summary.arn
