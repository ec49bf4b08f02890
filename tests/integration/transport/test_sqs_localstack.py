"""Integration tests for a full orchestrator run against LocalStack SQS."""

from __future__ import annotations

import json

import pytest

from queueops.core.config import RunConfiguration
from queueops.core.exceptions import HandlerError
from queueops.models.results import FailureKind
from queueops.worker import QueueOrchestrator
from tests.integration.conftest import LOCALSTACK_URL, REGION, skip_no_localstack


@skip_no_localstack
class TestOrchestratorIntegration:
    @pytest.fixture
    def config(self, localstack_queue):
        return RunConfiguration(
            region=REGION,
            queue_url=localstack_queue,
            endpoint_url=LOCALSTACK_URL,
            batch_size=5,
            concurrency=3,
            wait_time_seconds=0,
        )

    @pytest.mark.asyncio
    async def test_run_handles_and_deletes_messages(self, config, localstack_sqs):
        for i in range(8):
            localstack_sqs.send_message(QueueUrl=config.queue_url, MessageBody=json.dumps({"n": i}))

        async def handler(body):
            return body["n"]

        result = await QueueOrchestrator(config, handler).run()

        assert result.errors == []
        assert len(result.responses) == 8
        attrs = localstack_sqs.get_queue_attributes(
            QueueUrl=config.queue_url,
            AttributeNames=["ApproximateNumberOfMessages", "ApproximateNumberOfMessagesNotVisible"],
        )["Attributes"]
        assert attrs["ApproximateNumberOfMessages"] == "0"
        assert attrs["ApproximateNumberOfMessagesNotVisible"] == "0"

    @pytest.mark.asyncio
    async def test_failed_messages_stay_in_flight(self, config, localstack_sqs):
        localstack_sqs.send_message(QueueUrl=config.queue_url, MessageBody=json.dumps({"n": 1}))

        async def handler(body):
            raise HandlerError("downstream unavailable")

        result = await QueueOrchestrator(config, handler).run()

        assert [e.kind for e in result.errors] == [FailureKind.HANDLER]
        attrs = localstack_sqs.get_queue_attributes(
            QueueUrl=config.queue_url, AttributeNames=["ApproximateNumberOfMessagesNotVisible"],
        )["Attributes"]
        assert attrs["ApproximateNumberOfMessagesNotVisible"] == "1"
