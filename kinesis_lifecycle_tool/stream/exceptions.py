"""
Custom exceptions for stream lifecycle operations.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""


class StreamError(Exception):
    """Base exception for stream operations."""

    pass


class StreamAlreadyExistsError(StreamError):
    """Stream with this name already exists."""

    pass


class StreamNotFoundError(StreamError):
    """Stream (or shard) does not exist."""

    pass


class StreamStateError(StreamError):
    """Stream exists but is in a state that cannot be used."""

    pass


class AWSThrottlingError(StreamError):
    """Kinesis throttling occurred."""

    pass


class AWSPermissionError(StreamError):
    """AWS permission denied."""

    pass


class WaitTimeoutError(StreamError):
    """Polling deadline or attempt budget exhausted."""

    pass


class WaitCancelledError(StreamError):
    """Polling was cancelled through a cancellation token."""

    pass
