"""CLI entry point for kinesis-lifecycle-tool.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

import click

from kinesis_lifecycle_tool.stream.commands.lifecycle_commands import run_command
from kinesis_lifecycle_tool.stream.commands.record_commands import read_command, write_command
from kinesis_lifecycle_tool.stream.commands.stream_commands import (
    create_stream_command,
    delete_stream_command,
    status_command,
)


@click.group()
@click.version_option(version="0.1.0")
def main() -> None:
    """A CLI that exercises the full lifecycle of a Kinesis data stream"""
    pass


@main.group("stream")
def stream() -> None:
    """Provision, write, read back and tear down a Kinesis stream"""
    pass


# Register stream management commands
stream.add_command(create_stream_command)
stream.add_command(delete_stream_command)
stream.add_command(status_command)

# Register record commands
stream.add_command(write_command)
stream.add_command(read_command)

# Register lifecycle command
stream.add_command(run_command)

if __name__ == "__main__":
    main()
