"""
Kinesis client wrapper with error handling.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

from typing import Any

import boto3
from botocore.exceptions import ClientError

from ..constants import (
    ERROR_ACCESS_DENIED,
    ERROR_RESOURCE_IN_USE,
    ERROR_RESOURCE_NOT_FOUND,
    STREAM_MODE_PROVISIONED,
    THROTTLING_ERROR_CODES,
)
from ..exceptions import (
    AWSPermissionError,
    AWSThrottlingError,
    StreamAlreadyExistsError,
    StreamError,
    StreamNotFoundError,
    StreamStateError,
)


class KinesisClient:
    """Kinesis client wrapper with error handling."""

    def __init__(
        self,
        region: str | None = None,
        profile: str | None = None,
        endpoint_url: str | None = None,
    ):
        """
        Initialize Kinesis client.

        Args:
            region: AWS region (optional, uses SDK default)
            profile: AWS profile (optional, uses SDK default)
            endpoint_url: Alternative endpoint, e.g. LocalStack (optional)
        """
        session = boto3.Session(profile_name=profile, region_name=region)
        self.client = session.client("kinesis", endpoint_url=endpoint_url)
        self.region = session.region_name

    def create_stream(
        self, stream_name: str, shard_count: int, mode: str = STREAM_MODE_PROVISIONED
    ) -> None:
        """
        Request stream creation. Returns as soon as the stream is CREATING.

        Raises:
            StreamAlreadyExistsError: If the stream name is already in use
            StreamError: For other Kinesis errors
        """
        try:
            self.client.create_stream(
                StreamName=stream_name,
                ShardCount=shard_count,
                StreamModeDetails={"StreamMode": mode},
            )
        except ClientError as e:
            if e.response["Error"]["Code"] == ERROR_RESOURCE_IN_USE:
                raise StreamAlreadyExistsError(f"Stream '{stream_name}' already exists") from e
            self._handle_error(e, stream_name)

    def describe_stream_summary(self, stream_name: str) -> dict[str, Any]:
        """
        Describe stream summary.

        Returns:
            The StreamDescriptionSummary structure

        Raises:
            StreamNotFoundError: If the stream does not exist
            StreamError: For other Kinesis errors
        """
        try:
            response = self.client.describe_stream_summary(StreamName=stream_name)
            return response["StreamDescriptionSummary"]  # type: ignore[no-any-return]
        except ClientError as e:
            self._handle_error(e, stream_name)
            raise  # For type checker

    def delete_stream(self, stream_name: str, stream_arn: str | None = None) -> None:
        """Request stream deletion. Returns as soon as the stream is DELETING."""
        try:
            kwargs: dict[str, Any] = {"StreamName": stream_name}
            if stream_arn:
                kwargs["StreamARN"] = stream_arn
            self.client.delete_stream(**kwargs)
        except ClientError as e:
            self._handle_error(e, stream_name)

    def put_record(
        self, stream_name: str, stream_arn: str | None, partition_key: str, data: bytes
    ) -> dict[str, Any]:
        """
        Put a single record.

        Returns:
            Response with ShardId and SequenceNumber
        """
        try:
            kwargs: dict[str, Any] = {
                "StreamName": stream_name,
                "PartitionKey": partition_key,
                "Data": data,
            }
            if stream_arn:
                kwargs["StreamARN"] = stream_arn
            return self.client.put_record(**kwargs)  # type: ignore[no-any-return]
        except ClientError as e:
            self._handle_error(e, stream_name)
            raise  # For type checker

    def list_shards(
        self,
        stream_name: str,
        stream_arn: str | None = None,
        next_token: str | None = None,
    ) -> dict[str, Any]:
        """
        List one page of shards.

        A continuation call carries only the token; Kinesis rejects a stream
        name alongside NextToken.
        """
        try:
            kwargs: dict[str, Any]
            if next_token:
                kwargs = {"NextToken": next_token}
            else:
                kwargs = {"StreamName": stream_name}
                if stream_arn:
                    kwargs["StreamARN"] = stream_arn
            return self.client.list_shards(**kwargs)  # type: ignore[no-any-return]
        except ClientError as e:
            self._handle_error(e, stream_name)
            raise  # For type checker

    def get_shard_iterator(
        self,
        stream_name: str,
        stream_arn: str | None,
        shard_id: str,
        iterator_type: str,
    ) -> str:
        """Get an iterator for a shard at the given position."""
        try:
            kwargs: dict[str, Any] = {
                "StreamName": stream_name,
                "ShardId": shard_id,
                "ShardIteratorType": iterator_type,
            }
            if stream_arn:
                kwargs["StreamARN"] = stream_arn
            response = self.client.get_shard_iterator(**kwargs)
            return response["ShardIterator"]  # type: ignore[no-any-return]
        except ClientError as e:
            self._handle_error(e, stream_name)
            raise  # For type checker

    def get_records(
        self, shard_iterator: str, stream_arn: str | None = None, limit: int | None = None
    ) -> dict[str, Any]:
        """
        Fetch a batch of records.

        Returns:
            Response with Records, NextShardIterator (optional) and
            MillisBehindLatest
        """
        try:
            kwargs: dict[str, Any] = {"ShardIterator": shard_iterator}
            if stream_arn:
                kwargs["StreamARN"] = stream_arn
            if limit:
                kwargs["Limit"] = limit
            return self.client.get_records(**kwargs)  # type: ignore[no-any-return]
        except ClientError as e:
            self._handle_error(e, stream_arn or "")
            raise  # For type checker

    def _handle_error(self, error: ClientError, stream_name: str) -> None:
        """
        Convert boto3 errors to stream exceptions.

        Args:
            error: ClientError from boto3
            stream_name: Stream the failing call referred to

        Raises:
            StreamStateError: If the stream is not in a usable state
            StreamNotFoundError: If stream or shard not found
            AWSThrottlingError: If throttled
            AWSPermissionError: If permission denied
            StreamError: For other errors
        """
        code = error.response["Error"]["Code"]

        if code == ERROR_RESOURCE_IN_USE:
            raise StreamStateError(f"Stream '{stream_name}' is busy: {error}") from error
        elif code == ERROR_RESOURCE_NOT_FOUND:
            raise StreamNotFoundError(f"Stream '{stream_name}' not found") from error
        elif code in THROTTLING_ERROR_CODES:
            raise AWSThrottlingError("Kinesis throttling - retry with backoff") from error
        elif code == ERROR_ACCESS_DENIED:
            raise AWSPermissionError("AWS permission denied") from error
        else:
            raise StreamError(f"Kinesis error: {error}") from error
