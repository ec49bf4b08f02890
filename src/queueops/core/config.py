"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings


class SQSConfig(BaseSettings):
    """SQS queue configuration."""

    model_config = {"env_prefix": "QUEUEOPS_SQS_"}

    region: str = "us-east-1"
    queue_url: str = ""
    endpoint_url: str | None = None  # LocalStack override
    wait_time_seconds: int = 1
    visibility_timeout_seconds: int = 30


class WorkerConfig(BaseSettings):
    """Batch size and parallelism of one orchestrator run."""

    model_config = {"env_prefix": "QUEUEOPS_WORKER_"}

    batch_size: int = 10
    concurrency: int = 1
    include_details: bool = True


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = {"env_prefix": "QUEUEOPS_"}

    environment: Literal["dev", "uat", "prod"] = "dev"
    log_level: str = "INFO"

    # Read from the environment at instantiation, not at import.
    sqs: SQSConfig = Field(default_factory=SQSConfig)
    worker: WorkerConfig = Field(default_factory=WorkerConfig)


class RunConfiguration(BaseModel):
    """Immutable configuration bound to one orchestrator instance."""

    model_config = {"frozen": True}

    region: str
    queue_url: str
    endpoint_url: str | None = None
    batch_size: int = Field(default=10, ge=1, le=10)  # SQS caps a receive at 10
    concurrency: int = Field(default=1, ge=1)
    include_details: bool = True
    wait_time_seconds: int = Field(default=1, ge=0, le=20)
    visibility_timeout_seconds: int = Field(default=30, ge=0)

    @classmethod
    def from_settings(cls, settings: AppSettings) -> RunConfiguration:
        return cls(
            region=settings.sqs.region,
            queue_url=settings.sqs.queue_url,
            endpoint_url=settings.sqs.endpoint_url,
            batch_size=settings.worker.batch_size,
            concurrency=settings.worker.concurrency,
            include_details=settings.worker.include_details,
            wait_time_seconds=settings.sqs.wait_time_seconds,
            visibility_timeout_seconds=settings.sqs.visibility_timeout_seconds,
        )
