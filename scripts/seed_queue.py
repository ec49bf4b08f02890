"""Create an SQS queue and fill it with sample JSON messages.

Usage:
    python scripts/seed_queue.py --endpoint-url http://localhost:4566 --count 25
"""

from __future__ import annotations

import argparse
import json
from typing import Any

import boto3

DEFAULT_QUEUE_NAME = "queueops-dev"
QUEUE_ATTRIBUTES = {
    "VisibilityTimeout": "30",
    "MessageRetentionPeriod": "86400",  # 24 hours
}


def create_queue(client: Any, name: str = DEFAULT_QUEUE_NAME) -> str:
    """Create the queue (idempotent) and return its URL."""
    return client.create_queue(QueueName=name, Attributes=QUEUE_ATTRIBUTES)["QueueUrl"]


def seed_messages(client: Any, queue_url: str, count: int) -> int:
    """Send ``count`` sample messages in batches of 10."""
    sent = 0
    for start in range(0, count, 10):
        entries = [
            {"Id": str(i), "MessageBody": json.dumps({"sequence": i, "kind": "sample"})}
            for i in range(start, min(start + 10, count))
        ]
        resp = client.send_message_batch(QueueUrl=queue_url, Entries=entries)
        sent += len(resp.get("Successful", []))
    return sent


def main() -> None:
    parser = argparse.ArgumentParser(description="Create and seed an SQS queue for queueops")
    parser.add_argument("--endpoint-url", default=None, help="SQS endpoint (e.g. http://localhost:4566)")
    parser.add_argument("--queue-name", default=DEFAULT_QUEUE_NAME, help="Queue name")
    parser.add_argument("--count", type=int, default=20, help="Number of sample messages")
    parser.add_argument("--region", default="us-east-1", help="AWS region")
    args = parser.parse_args()

    kwargs: dict[str, Any] = {"region_name": args.region}
    if args.endpoint_url:
        kwargs["endpoint_url"] = args.endpoint_url

    client = boto3.client("sqs", **kwargs)

    print("Creating queue...")
    queue_url = create_queue(client, args.queue_name)
    print(f"  {queue_url}")

    print("Seeding messages...")
    sent = seed_messages(client, queue_url, args.count)
    print(f"  Sent {sent} messages")

    print("Done!")


if __name__ == "__main__":
    main()
