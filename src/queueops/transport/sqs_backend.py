"""SQS transport backend implementing IQueueTransport."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from queueops.core.exceptions import TransportError
from queueops.models.message import QueueMessage

logger = logging.getLogger(__name__)


def _parse_attributes(raw: dict[str, Any]) -> dict[str, Any]:
    """Flatten SQS MessageAttributes to their String/Binary values."""
    out: dict[str, Any] = {}
    for name, attr in raw.items():
        if "StringValue" in attr:
            out[name] = attr["StringValue"]
        elif "BinaryValue" in attr:
            out[name] = attr["BinaryValue"]
    return out


class SQSTransport:
    """Production IQueueTransport backed by SQS.

    boto3 clients block, so every call is pushed to a worker thread. The
    client is thread-safe and shared by all concurrent batches of a run.
    """

    def __init__(self, queue_url: str, region: str = "us-east-1",
                 endpoint_url: str | None = None) -> None:
        self._queue_url = queue_url
        self._region = region
        self._endpoint_url = endpoint_url
        kwargs: dict = {"region_name": region}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        self._client = boto3.client("sqs", **kwargs)

    @property
    def queue_url(self) -> str:
        return self._queue_url

    async def receive(
        self, max_messages: int, wait_time_seconds: int, visibility_timeout_seconds: int
    ) -> list[QueueMessage]:
        logger.debug(
            "Receiving up to %d messages from %s", max_messages, self._queue_url
        )
        try:
            resp = await asyncio.to_thread(
                self._client.receive_message,
                QueueUrl=self._queue_url,
                MaxNumberOfMessages=max_messages,
                WaitTimeSeconds=wait_time_seconds,
                VisibilityTimeout=visibility_timeout_seconds,
                MessageAttributeNames=["All"],
            )
        except (ClientError, BotoCoreError) as exc:
            raise TransportError("receive", f"{self._queue_url}: {exc}") from exc

        return [
            QueueMessage(
                message_id=m["MessageId"],
                receipt_handle=m["ReceiptHandle"],
                body=m.get("Body", ""),
                attributes=_parse_attributes(m.get("MessageAttributes", {})),
            )
            for m in resp.get("Messages", [])
        ]

    async def delete(self, receipt_handle: str) -> None:
        logger.debug("Deleting message from %s", self._queue_url)
        try:
            await asyncio.to_thread(
                self._client.delete_message,
                QueueUrl=self._queue_url,
                ReceiptHandle=receipt_handle,
            )
        except (ClientError, BotoCoreError) as exc:
            raise TransportError("delete", f"{self._queue_url}: {exc}") from exc
