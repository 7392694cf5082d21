"""
Record commands: write a batch, read every shard back.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

import click

from ..constants import (
    DEFAULT_READ_WORKERS,
    DEFAULT_RECORD_COUNT,
    DEFAULT_STREAM_NAME,
    POLL_INTERVAL,
)
from ..core.client import KinesisClient
from ..core.record_operations import read_all, write_batch
from ..exceptions import StreamError, StreamNotFoundError
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


@click.command("write")
@click.option(
    "--stream",
    envvar="KINESIS_STREAM",
    default=DEFAULT_STREAM_NAME,
    help="Kinesis stream name",
)
@click.option("--arn", help="Stream ARN (optional)")
@click.option(
    "--count",
    type=click.IntRange(min=0),
    default=DEFAULT_RECORD_COUNT,
    help="Number of records to write (default: 10)",
)
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
def write_command(
    ctx: click.Context,
    stream: str,
    arn: str | None,
    count: int,
    region: str | None,
    profile: str | None,
    endpoint_url: str | None,
    text: bool,
    verbose: int,
) -> None:
    """Write records 0..COUNT-1 to a stream.

    Each record uses the decimal text of its index as both partition key
    and payload. The first failed write aborts the batch.

    Examples:

    \b
        kinesis-lifecycle-tool stream write --stream my-stream

    \b
        kinesis-lifecycle-tool stream write --stream my-stream --count 100

    \b
    Output Format:
        {"stream": "my-stream", "written": 10}
    """
    setup_logging(verbose)

    try:
        validate_stream_name(stream)
        logger.info(f"Writing {count} record(s) to '{stream}'")

        client = KinesisClient(region, profile, endpoint_url)
        write_batch(client, stream, arn, count)

        if text:
            output_text(f"✅ Wrote {count} record(s) to '{stream}'")
        else:
            output_json({"stream": stream, "written": count})

    except ValueError as e:
        if text:
            click.echo(error_text(str(e), "Use a valid stream name"), err=True)
        else:
            click.echo(error_json(str(e), "Use a valid stream name", 2), err=True)
        ctx.exit(2)

    except StreamNotFoundError as e:
        if text:
            click.echo(
                error_text(str(e), "Create it with 'kinesis-lifecycle-tool stream create'"),
                err=True,
            )
        else:
            click.echo(error_json(str(e), "Stream not found", 1), err=True)
        ctx.exit(1)

    except StreamError as e:
        if text:
            click.echo(error_text(str(e), "Check stream status and AWS credentials"), err=True)
        else:
            click.echo(error_json(str(e), "Check stream status and credentials", 3), err=True)
        ctx.exit(3)


@click.command("read")
@click.option(
    "--stream",
    envvar="KINESIS_STREAM",
    default=DEFAULT_STREAM_NAME,
    help="Kinesis stream name",
)
@click.option("--arn", help="Stream ARN (optional)")
@click.option(
    "--limit",
    type=click.IntRange(min=1, max=10000),
    help="Maximum records per GetRecords call",
)
@click.option(
    "--max-iterations",
    type=click.IntRange(min=1),
    help="Stop a shard after this many GetRecords calls",
)
@click.option(
    "--poll-interval",
    type=click.FloatRange(min=0),
    default=POLL_INTERVAL,
    help="Seconds to wait after an empty batch that is still behind the tail",
)
@click.option(
    "--workers",
    type=click.IntRange(min=1),
    default=DEFAULT_READ_WORKERS,
    help="Shards drained concurrently (default: 1)",
)
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
def read_command(
    ctx: click.Context,
    stream: str,
    arn: str | None,
    limit: int | None,
    max_iterations: int | None,
    poll_interval: float,
    workers: int,
    region: str | None,
    profile: str | None,
    endpoint_url: str | None,
    text: bool,
    verbose: int,
) -> None:
    """Read every shard of a stream from TRIM_HORIZON to its tail.

    A shard is done when it is closed and exhausted, or when the reader has
    caught up (MillisBehindLatest is zero).

    Examples:

    \b
        # Print every record
        kinesis-lifecycle-tool stream read --stream my-stream --text

    \b
        # Drain shards in parallel, bounded per shard
        kinesis-lifecycle-tool stream read --workers 4 --max-iterations 100

    \b
    Output Format:
        One JSON object per record:
        {"shard": "shardId-000000000000", "index": 0, "partition_key": "0",
         "data": "0", "sequence_number": "..."}
    """
    setup_logging(verbose)

    def emit(record: Record) -> None:
        if text:
            output_text(format_record_line(record.index, record.partition_key, record.payload_text))
        else:
            output_json(record.to_dict())

    try:
        validate_stream_name(stream)
        logger.info(f"Reading stream '{stream}'")
        logger.debug(f"Limit: {limit}, Max iterations: {max_iterations}, Workers: {workers}")

        client = KinesisClient(region, profile, endpoint_url)
        records = read_all(
            client,
            stream,
            arn,
            limit=limit,
            max_iterations=max_iterations,
            poll_interval=poll_interval,
            max_workers=workers,
            on_record=emit,
        )
        logger.info(f"Read {len(records)} record(s) from '{stream}'")

    except ValueError as e:
        if text:
            click.echo(error_text(str(e), "Use a valid stream name"), err=True)
        else:
            click.echo(error_json(str(e), "Use a valid stream name", 2), err=True)
        ctx.exit(2)

    except StreamNotFoundError as e:
        if text:
            click.echo(
                error_text(str(e), "Create it with 'kinesis-lifecycle-tool stream create'"),
                err=True,
            )
        else:
            click.echo(error_json(str(e), "Stream not found", 1), err=True)
        ctx.exit(1)

    except StreamError as e:
        if text:
            click.echo(error_text(str(e), "Check stream status and AWS credentials"), err=True)
        else:
            click.echo(error_json(str(e), "Check stream status and credentials", 3), err=True)
        ctx.exit(3)
