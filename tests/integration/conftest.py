"""Integration test fixtures: LocalStack SQS."""

from __future__ import annotations

import os
import uuid

import boto3
import pytest

# Default LocalStack endpoint
LOCALSTACK_URL = os.environ.get("LOCALSTACK_URL", "http://localhost:4566")
REGION = "us-east-1"


def _localstack_available() -> bool:
    """Check if LocalStack is reachable."""
    try:
        client = boto3.client("sqs", region_name=REGION, endpoint_url=LOCALSTACK_URL)
        client.list_queues()
        return True
    except Exception:
        return False


skip_no_localstack = pytest.mark.skipif(
    not _localstack_available(),
    reason="LocalStack not available",
)


@pytest.fixture
def localstack_sqs():
    """SQS client pointing at LocalStack."""
    return boto3.client("sqs", region_name=REGION, endpoint_url=LOCALSTACK_URL)


@pytest.fixture
def localstack_queue(localstack_sqs):
    """A throwaway queue, deleted after the test."""
    url = localstack_sqs.create_queue(QueueName=f"queueops-it-{uuid.uuid4().hex[:8]}")["QueueUrl"]
    yield url
    localstack_sqs.delete_queue(QueueUrl=url)
