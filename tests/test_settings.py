# tests/test_settings.py
import pytest
from pydantic import ValidationError

from lambdas.emr_notify.models import DEFAULT_FOOTER_ICON, AppSettings

ENV_KEYS = [
    "SLACK_WEBHOOK", "SLACK_WEBHOOK_SSM_PARAM", "SLACK_MONITOR_CHANNEL",
    "AWS_LAMBDA_FUNCTION_NAME", "SLACK_FOOTER_ICON", "SLACK_ATTACHMENTS_CHUNK_SIZE",
    "SLACK_TIMEOUT_SECONDS", "LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    settings = AppSettings(_env_file=None)

    assert settings.slack_webhook == ""
    assert settings.slack_monitor_channel == ""
    assert settings.function_name == "emr-notify"
    assert settings.footer_icon == DEFAULT_FOOTER_ICON
    assert settings.chunk_size == 100
    assert settings.slack_timeout_seconds == 10


def test_reads_environment(clean_env):
    clean_env.setenv("SLACK_WEBHOOK", "https://hooks.slack.com/services/T/B/X")
    clean_env.setenv("SLACK_MONITOR_CHANNEL", "#emr-alerts")
    clean_env.setenv("AWS_LAMBDA_FUNCTION_NAME", "emr-notify-prod")
    clean_env.setenv("SLACK_ATTACHMENTS_CHUNK_SIZE", "25")

    settings = AppSettings(_env_file=None)

    assert settings.slack_webhook == "https://hooks.slack.com/services/T/B/X"
    assert settings.slack_monitor_channel == "#emr-alerts"
    assert settings.function_name == "emr-notify-prod"
    assert settings.chunk_size == 25


@pytest.mark.parametrize("value", ["0", "-1", "101", "lots"])
def test_rejects_bad_chunk_size(clean_env, value):
    clean_env.setenv("SLACK_ATTACHMENTS_CHUNK_SIZE", value)
    with pytest.raises(ValidationError):
        AppSettings(_env_file=None)
