"""
Constants for stream lifecycle operations.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

# Default stream name
DEFAULT_STREAM_NAME = "persistence-test"

# Stream shape
DEFAULT_SHARD_COUNT = 1
STREAM_MODE_PROVISIONED = "PROVISIONED"

# Record batch
DEFAULT_RECORD_COUNT = 10

# Shard iterator positions
ITERATOR_TRIM_HORIZON = "TRIM_HORIZON"

# Kinesis error codes
ERROR_RESOURCE_IN_USE = "ResourceInUseException"
ERROR_RESOURCE_NOT_FOUND = "ResourceNotFoundException"
ERROR_ACCESS_DENIED = "AccessDeniedException"
THROTTLING_ERROR_CODES = frozenset(
    {
        "ProvisionedThroughputExceededException",
        "LimitExceededException",
        "ThrottlingException",
    }
)

# Polling behavior
POLL_INTERVAL = 1.0  # Start with 1 second
POLL_INTERVAL_MAX = 10.0  # Max 10 seconds between polls
POLL_BACKOFF_FACTOR = 1.5  # Exponential backoff factor
POLL_TIMEOUT = 300.0  # 5 minutes default deadline for create/delete waits

# Reader behavior
DEFAULT_READ_WORKERS = 1  # Sequential shard draining
