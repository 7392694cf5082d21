"""Shared fixtures: fake AWS credentials, moto-backed client, mock client."""

from collections.abc import Iterator
from typing import Any
from unittest.mock import Mock

import pytest
from moto import mock_aws

from kinesis_lifecycle_tool.stream.core.client import KinesisClient
from kinesis_lifecycle_tool.stream.core.polling import PollingPolicy

REGION = "us-east-1"
ACCOUNT = "123456789012"


@pytest.fixture(autouse=True)
def aws_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep every test away from real credentials and endpoints."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", REGION)
    monkeypatch.delenv("AWS_PROFILE", raising=False)
    monkeypatch.delenv("AWS_ENDPOINT_URL", raising=False)
    monkeypatch.delenv("KINESIS_STREAM", raising=False)


@pytest.fixture
def mocked_aws() -> Iterator[None]:
    with mock_aws():
        yield


@pytest.fixture
def kinesis(mocked_aws: None) -> KinesisClient:
    """KinesisClient talking to moto's in-process Kinesis."""
    return KinesisClient(region=REGION)


@pytest.fixture
def fast_policy() -> PollingPolicy:
    """Back-to-back polling with a small attempt budget."""
    return PollingPolicy(interval=0, timeout=None, max_attempts=5)


@pytest.fixture
def mock_client() -> Mock:
    return Mock(spec=KinesisClient)


def stream_summary(status: str, name: str = "test-stream") -> dict[str, Any]:
    """DescribeStreamSummary payload for mock clients."""
    return {
        "StreamName": name,
        "StreamARN": f"arn:aws:kinesis:{REGION}:{ACCOUNT}:stream/{name}",
        "StreamStatus": status,
        "OpenShardCount": 1,
        "StreamModeDetails": {"StreamMode": "PROVISIONED"},
        "RetentionPeriodHours": 24,
    }


@pytest.fixture
def summary() -> Any:
    """Factory for DescribeStreamSummary payloads."""
    return stream_summary
