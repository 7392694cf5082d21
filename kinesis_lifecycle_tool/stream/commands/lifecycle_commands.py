"""
Lifecycle command: create, write, read back and delete in one run.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

import click

from ..constants import (
    DEFAULT_READ_WORKERS,
    DEFAULT_RECORD_COUNT,
    DEFAULT_SHARD_COUNT,
    DEFAULT_STREAM_NAME,
    POLL_INTERVAL,
    POLL_TIMEOUT,
)
from ..core.client import KinesisClient
from ..core.lifecycle import run_lifecycle
from ..core.polling import PollingPolicy
from ..exceptions import StreamError, StreamNotFoundError, StreamStateError, WaitTimeoutError
from ..logging_config import get_logger, setup_logging
from ..models import Record
from ..utils import (
    error_json,
    error_text,
    format_record_line,
    output_json,
    output_text,
    validate_stream_name,
)

logger = get_logger(__name__)


@click.command("run")
@click.option(
    "--stream",
    envvar="KINESIS_STREAM",
    default=DEFAULT_STREAM_NAME,
    help="Kinesis stream name",
)
@click.option(
    "--shards",
    type=click.IntRange(min=1),
    default=DEFAULT_SHARD_COUNT,
    help="Shard count for a new stream (default: 1)",
)
@click.option(
    "--count",
    type=click.IntRange(min=0),
    default=DEFAULT_RECORD_COUNT,
    help="Number of records to write (default: 10)",
)
@click.option(
    "--max-iterations",
    type=click.IntRange(min=1),
    help="Stop a shard after this many GetRecords calls",
)
@click.option(
    "--workers",
    type=click.IntRange(min=1),
    default=DEFAULT_READ_WORKERS,
    help="Shards drained concurrently (default: 1)",
)
@click.option(
    "--poll-interval",
    type=click.FloatRange(min=0),
    default=POLL_INTERVAL,
    help="Initial seconds between status polls",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0),
    default=POLL_TIMEOUT,
    help="Seconds to wait for each create/delete transition (0 waits without a deadline)",
)
@click.option("--keep", is_flag=True, help="Leave the stream in place after reading")
@click.option("--region", envvar="AWS_REGION", help="AWS region")
@click.option("--profile", envvar="AWS_PROFILE", help="AWS profile")
@click.option(
    "--endpoint-url",
    envvar="AWS_ENDPOINT_URL",
    help="Kinesis endpoint (e.g. LocalStack)",
)
@click.option("--text", is_flag=True, help="Output as human-readable text")
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (-v INFO, -vv DEBUG, -vvv TRACE)",
)
@click.pass_context
def run_command(
    ctx: click.Context,
    stream: str,
    shards: int,
    count: int,
    max_iterations: int | None,
    workers: int,
    poll_interval: float,
    timeout: float,
    keep: bool,
    region: str | None,
    profile: str | None,
    endpoint_url: str | None,
    text: bool,
    verbose: int,
) -> None:
    """Create a stream, write records, read them back and delete it.

    Phases run strictly in order. On failure the run stops at once and
    leaves whatever was created in place.

    Examples:

    \b
        # Full round trip against the default stream
        kinesis-lifecycle-tool stream run --text

    \b
        # Against LocalStack
        kinesis-lifecycle-tool stream run --endpoint-url http://localhost:4566

    \b
    Output Format:
        Text mode prints the narrative:
        CREATED: arn:aws:kinesis:...
        ITEM: 0 - 0 0
        ...
        DELETED
        ============
        JSON mode returns a summary:
        {"stream": "...", "arn": "...", "written": 10, "read": 10,
         "records": [...], "deleted": true}
    """
    setup_logging(verbose)

    def on_created(arn: str) -> None:
        if text:
            output_text(f"CREATED: {arn}")

    def on_record(record: Record) -> None:
        if text:
            output_text(format_record_line(record.index, record.partition_key, record.payload_text))

    try:
        validate_stream_name(stream)
        logger.info(f"Running lifecycle against '{stream}'")

        client = KinesisClient(region, profile, endpoint_url)
        result = run_lifecycle(
            client,
            stream,
            shard_count=shards,
            record_count=count,
            policy=PollingPolicy.from_options(poll_interval, timeout),
            max_iterations=max_iterations,
            max_workers=workers,
            keep_stream=keep,
            on_created=on_created,
            on_record=on_record,
        )

        if text:
            if result.deleted:
                output_text("DELETED")
            output_text("============")
        else:
            output_json(
                {
                    "stream": result.stream_name,
                    "arn": result.stream_arn,
                    "written": result.records_written,
                    "read": len(result.records),
                    "records": [record.to_dict() for record in result.records],
                    "deleted": result.deleted,
                }
            )

    except ValueError as e:
        if text:
            click.echo(error_text(str(e), "Use a valid stream name"), err=True)
        else:
            click.echo(error_json(str(e), "Use a valid stream name", 2), err=True)
        ctx.exit(2)

    except (StreamNotFoundError, StreamStateError) as e:
        solution = "Check the stream is not owned or being deleted elsewhere"
        if text:
            click.echo(error_text(str(e), solution), err=True)
        else:
            click.echo(error_json(str(e), solution, 1), err=True)
        ctx.exit(1)

    except WaitTimeoutError as e:
        solution = (
            f"Increase --timeout; the stream may still exist, check with "
            f"'kinesis-lifecycle-tool stream status --stream {stream}'"
        )
        if text:
            click.echo(error_text(str(e), solution), err=True)
        else:
            click.echo(error_json(str(e), "Increase --timeout", 3), err=True)
        ctx.exit(3)

    except StreamError as e:
        if text:
            click.echo(error_text(str(e), "Check AWS credentials and permissions"), err=True)
        else:
            click.echo(error_json(str(e), "Check AWS credentials and permissions", 3), err=True)
        ctx.exit(3)
