"""
Stream teardown operations.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

from ..exceptions import StreamNotFoundError
from ..logging_config import get_logger
from .client import KinesisClient
from .polling import CancellationToken, PollingPolicy, poll_until

logger = get_logger(__name__)


def tear_down(
    client: KinesisClient,
    stream_name: str,
    stream_arn: str | None = None,
    policy: PollingPolicy | None = None,
    token: CancellationToken | None = None,
) -> None:
    """
    Delete a stream and wait until it is gone.

    The only success signal is DescribeStreamSummary failing with
    ResourceNotFoundException.

    Args:
        client: Kinesis client
        stream_name: Stream name
        stream_arn: Stream ARN (optional)
        policy: Polling bounds for the wait
        token: Cancellation token for the wait

    Raises:
        WaitTimeoutError: If the stream is still present past the deadline
        StreamError: For delete failures and unexpected describe failures
    """
    client.delete_stream(stream_name, stream_arn)
    logger.info(f"Requested deletion of stream '{stream_name}'")

    def check() -> bool | None:
        try:
            client.describe_stream_summary(stream_name)
        except StreamNotFoundError:
            return True
        return None

    poll_until(check, f"stream '{stream_name}' to be deleted", policy, token)
    logger.info(f"Stream '{stream_name}' deleted")
