"""Tests for configuration defaults and env overrides."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from queueops.core.config import AppSettings, RunConfiguration, SQSConfig, WorkerConfig


def test_default_settings():
    settings = AppSettings()
    assert settings.environment == "dev"
    assert settings.worker.batch_size == 10
    assert settings.worker.concurrency == 1


def test_sqs_config_defaults():
    config = SQSConfig()
    assert config.region == "us-east-1"
    assert config.endpoint_url is None
    assert config.wait_time_seconds == 1
    assert config.visibility_timeout_seconds == 30


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("QUEUEOPS_SQS_QUEUE_URL", "https://sqs.example/queue")
    monkeypatch.setenv("QUEUEOPS_WORKER_CONCURRENCY", "4")
    monkeypatch.setenv("QUEUEOPS_WORKER_INCLUDE_DETAILS", "false")

    settings = AppSettings()
    assert settings.sqs.queue_url == "https://sqs.example/queue"
    assert settings.worker.concurrency == 4
    assert settings.worker.include_details is False


def test_run_configuration_defaults():
    config = RunConfiguration(region="testRegion", queue_url="test")
    assert config.batch_size == 10
    assert config.concurrency == 1
    assert config.include_details is True
    assert config.queue_url == "test"
    assert config.region == "testRegion"


def test_run_configuration_explicit_values():
    config = RunConfiguration(
        region="testRegion", queue_url="test",
        batch_size=5, concurrency=10, include_details=False,
    )
    assert config.batch_size == 5
    assert config.concurrency == 10
    assert config.include_details is False


def test_run_configuration_is_immutable():
    config = RunConfiguration(region="r", queue_url="q")
    with pytest.raises(ValidationError):
        config.concurrency = 3  # type: ignore[misc]


@pytest.mark.parametrize("field,value", [
    ("batch_size", 0),
    ("batch_size", 11),
    ("concurrency", 0),
])
def test_run_configuration_rejects_out_of_range(field, value):
    with pytest.raises(ValidationError):
        RunConfiguration(region="r", queue_url="q", **{field: value})


def test_from_settings_copies_sqs_and_worker_groups():
    settings = AppSettings(
        sqs=SQSConfig(queue_url="q", region="eu-west-1", wait_time_seconds=0),
        worker=WorkerConfig(batch_size=3, concurrency=2, include_details=False),
    )
    config = RunConfiguration.from_settings(settings)
    assert config.queue_url == "q"
    assert config.region == "eu-west-1"
    assert config.wait_time_seconds == 0
    assert config.batch_size == 3
    assert config.concurrency == 2
    assert config.include_details is False
