"""
Stream management commands: create, delete, status.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

import click

from ..constants import DEFAULT_SHARD_COUNT, DEFAULT_STREAM_NAME, POLL_INTERVAL, POLL_TIMEOUT
from ..core.client import KinesisClient
from ..core.polling import PollingPolicy
from ..core.provision_operations import ensure_stream
from ..core.status_operations import get_stream_status
from ..core.teardown_operations import tear_down
from ..exceptions import StreamError, StreamNotFoundError, StreamStateError, WaitTimeoutError
from ..logging_config import get_logger, setup_logging
from ..utils import error_json, error_text, output_json, output_text, validate_stream_name

logger = get_logger(__name__)


@click.command("create")
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
    "--poll-interval",
    type=click.FloatRange(min=0),
    default=POLL_INTERVAL,
    help="Initial seconds between status polls",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0),
    default=POLL_TIMEOUT,
    help="Seconds to wait for the stream to become usable (0 waits without a deadline)",
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
def create_stream_command(
    ctx: click.Context,
    stream: str,
    shards: int,
    poll_interval: float,
    timeout: float,
    region: str | None,
    profile: str | None,
    endpoint_url: str | None,
    text: bool,
    verbose: int,
) -> None:
    """Create a provisioned stream and wait until it is usable.

    Creating a stream that already exists is not an error: the existing
    stream is reused once it has left the CREATING state.

    Examples:

    \b
        # Create the default stream
        kinesis-lifecycle-tool stream create

    \b
        # Create a custom stream with two shards
        kinesis-lifecycle-tool stream create --stream my-stream --shards 2

    \b
    Output Format:
        Returns JSON with stream details:
        {"stream": "...", "arn": "arn:aws:kinesis:..."}
    """
    setup_logging(verbose)

    try:
        validate_stream_name(stream)
        logger.info(f"Ensuring stream '{stream}'")
        logger.debug(f"Region: {region}, Shards: {shards}, Timeout: {timeout}")

        client = KinesisClient(region, profile, endpoint_url)
        policy = PollingPolicy.from_options(poll_interval, timeout)
        arn = ensure_stream(client, stream, shards, policy)

        if text:
            output_text(f"✅ Stream '{stream}' is ready")
            output_text(f"ARN: {arn}")
        else:
            output_json({"stream": stream, "arn": arn})

    except ValueError as e:
        if text:
            click.echo(error_text(str(e), "Use a valid stream name"), err=True)
        else:
            click.echo(error_json(str(e), "Use a valid stream name", 2), err=True)
        ctx.exit(2)

    except (StreamNotFoundError, StreamStateError) as e:
        solution = "Wait for the pending deletion or use a different stream name"
        if text:
            click.echo(error_text(str(e), solution), err=True)
        else:
            click.echo(error_json(str(e), solution, 1), err=True)
        ctx.exit(1)

    except WaitTimeoutError as e:
        if text:
            click.echo(
                error_text(str(e), "Increase --timeout or check the stream in the console"),
                err=True,
            )
        else:
            click.echo(error_json(str(e), "Increase --timeout", 3), err=True)
        ctx.exit(3)

    except StreamError as e:
        if text:
            click.echo(error_text(str(e), "Check AWS credentials and permissions"), err=True)
        else:
            click.echo(error_json(str(e), "Check AWS credentials and permissions", 3), err=True)
        ctx.exit(3)


@click.command("delete")
@click.option(
    "--stream",
    envvar="KINESIS_STREAM",
    default=DEFAULT_STREAM_NAME,
    help="Kinesis stream name",
)
@click.option("--arn", help="Stream ARN (optional)")
@click.option(
    "--approve",
    is_flag=True,
    help="Required flag to confirm stream deletion",
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
    help="Seconds to wait for the stream to disappear (0 waits without a deadline)",
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
def delete_stream_command(
    ctx: click.Context,
    stream: str,
    arn: str | None,
    approve: bool,
    poll_interval: float,
    timeout: float,
    region: str | None,
    profile: str | None,
    endpoint_url: str | None,
    text: bool,
    verbose: int,
) -> None:
    """Delete a stream and wait until it is gone.

    WARNING: This permanently deletes the stream and ALL records.

    Examples:

    \b
        # Attempt without approval (shows warning)
        kinesis-lifecycle-tool stream delete

    \b
        # Delete with approval
        kinesis-lifecycle-tool stream delete --stream my-stream --approve

    \b
    Output Format:
        Returns JSON with confirmation:
        {"stream": "...", "status": "DELETED"}
    """
    setup_logging(verbose)

    if not approve:
        cmd = f"kinesis-lifecycle-tool stream delete --stream {stream} --approve"
        if text:
            click.echo("⚠️  WARNING: Stream deletion requires approval", err=True)
            click.echo(
                f"\nThis will permanently delete stream '{stream}' and ALL records.",
                err=True,
            )
            click.echo(f"\nTo proceed, use: {cmd}", err=True)
        else:
            click.echo(
                error_json(
                    "Stream deletion requires approval",
                    f"Add --approve flag to confirm: {cmd}",
                    2,
                ),
                err=True,
            )
        ctx.exit(2)

    try:
        validate_stream_name(stream)
        logger.info(f"Deleting stream '{stream}'")
        logger.debug(f"Region: {region}, ARN: {arn}, Timeout: {timeout}")

        client = KinesisClient(region, profile, endpoint_url)
        policy = PollingPolicy.from_options(poll_interval, timeout)
        tear_down(client, stream, arn, policy)

        if text:
            output_text(f"✅ Stream '{stream}' deleted")
        else:
            output_json({"stream": stream, "status": "DELETED"})

    except ValueError as e:
        if text:
            click.echo(error_text(str(e), "Use a valid stream name"), err=True)
        else:
            click.echo(error_json(str(e), "Use a valid stream name", 2), err=True)
        ctx.exit(2)

    except StreamNotFoundError as e:
        if text:
            click.echo(error_text(str(e), "Check stream name with the 'status' command"), err=True)
        else:
            click.echo(error_json(str(e), "Check stream name", 1), err=True)
        ctx.exit(1)

    except StreamStateError as e:
        if text:
            click.echo(error_text(str(e), "Wait for the stream to become ACTIVE"), err=True)
        else:
            click.echo(error_json(str(e), "Wait for the stream to become ACTIVE", 1), err=True)
        ctx.exit(1)

    except StreamError as e:
        if text:
            click.echo(error_text(str(e), "Check AWS credentials and permissions"), err=True)
        else:
            click.echo(error_json(str(e), "Check AWS credentials and permissions", 3), err=True)
        ctx.exit(3)


@click.command("status")
@click.option(
    "--stream",
    envvar="KINESIS_STREAM",
    default=DEFAULT_STREAM_NAME,
    help="Kinesis stream name",
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
def status_command(
    ctx: click.Context,
    stream: str,
    region: str | None,
    profile: str | None,
    endpoint_url: str | None,
    text: bool,
    verbose: int,
) -> None:
    """Show stream status, ARN, shard count and mode.

    Examples:

    \b
        kinesis-lifecycle-tool stream status --stream my-stream

    \b
    Output Format:
        {"stream": "...", "status": "ACTIVE", "arn": "...", "shards": 1,
         "mode": "PROVISIONED", "retention_hours": 24}
    """
    setup_logging(verbose)

    try:
        validate_stream_name(stream)
        client = KinesisClient(region, profile, endpoint_url)
        result = get_stream_status(client, stream)

        if text:
            output_text(f"Stream: {result['stream']}")
            output_text(f"Status: {result['status']}")
            output_text(f"ARN: {result['arn']}")
            output_text(f"Shards: {result['shards']}")
            if result["mode"]:
                output_text(f"Mode: {result['mode']}")
            if result["retention_hours"]:
                output_text(f"Retention: {result['retention_hours']} hours")
        else:
            output_json(result)

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
            click.echo(error_text(str(e), "Check AWS credentials and permissions"), err=True)
        else:
            click.echo(error_json(str(e), "Check AWS credentials and permissions", 3), err=True)
        ctx.exit(3)
