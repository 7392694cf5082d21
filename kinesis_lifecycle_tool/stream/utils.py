"""
Utility functions for stream commands.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

import json
import re
from typing import Any

STREAM_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9_.-]+$")


def output_json(data: dict[str, Any], quiet: bool = False) -> None:
    """
    Output JSON to stdout.

    Args:
        data: Data to output as JSON
        quiet: If True, suppress output
    """
    if not quiet:
        print(json.dumps(data))


def output_text(message: str, quiet: bool = False) -> None:
    """
    Output text to stdout.

    Args:
        message: Message to output
        quiet: If True, suppress output
    """
    if not quiet:
        print(message)


def error_json(error: str, solution: str, exit_code: int) -> str:
    """
    Format error as a JSON string.

    Args:
        error: Error message
        solution: Solution suggestion
        exit_code: Exit code

    Returns:
        Serialized error object
    """
    return json.dumps({"error": error, "solution": solution, "exit_code": exit_code})


def error_text(error: str, solution: str) -> str:
    """
    Format error as human-readable text.

    Args:
        error: Error message
        solution: Solution suggestion

    Returns:
        Formatted error message
    """
    return f"❌ Error: {error}\n\n💡 Solution: {solution}"


def format_record_line(index: int, partition_key: str, payload: str) -> str:
    """Format one record for the console narrative."""
    return f"ITEM: {index} - {partition_key} {payload}"


def validate_stream_name(stream_name: str) -> bool:
    """
    Validate Kinesis stream name.

    Args:
        stream_name: Stream name to validate

    Returns:
        True if valid

    Raises:
        ValueError: If stream name is invalid
    """
    if not stream_name:
        raise ValueError("Stream name cannot be empty")
    if len(stream_name) > 128:
        raise ValueError("Stream name cannot exceed 128 characters")
    if not STREAM_NAME_PATTERN.match(stream_name):
        raise ValueError(
            "Stream name can only contain alphanumeric characters, hyphens, underscores, and periods"
        )
    return True
