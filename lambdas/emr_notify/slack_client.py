# lambdas/emr_notify/slack_client.py
from dataclasses import dataclass

import boto3
import requests

from .log import get_logger
from .models import AppSettings, SlackPayload

logger = get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10


class SendError(RuntimeError):
    """Raised when a webhook post fails: network error, timeout or non-2xx reply."""
    pass


@dataclass(frozen=True)
class SlackResponse:
    status_code: int
    body: str

    def __str__(self) -> str:
        return f"{self.status_code} {self.body}"


class SlackClient:
    """
    Posts attachment payloads to a Slack incoming webhook.
    """

    def __init__(self, webhook_url: str, timeout: float = DEFAULT_TIMEOUT_SECONDS):
        self.webhook_url = webhook_url
        self.timeout = timeout

    def send(self, payload: SlackPayload) -> SlackResponse:
        """
        Sends one payload. A single attempt, no retries.

        Raises:
            SendError: If the webhook is not configured or the post fails.
        """
        if not self.webhook_url:
            raise SendError("Slack webhook URL is not configured.")
        try:
            response = requests.post(self.webhook_url, json=payload.to_wire(), timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise SendError(f"Could not post to Slack: {e}") from e
        return SlackResponse(status_code=response.status_code, body=response.text)


def resolve_webhook_url(settings: AppSettings, ssm_client=None) -> str:
    """
    Returns the webhook URL from SLACK_WEBHOOK, or reads it from the SSM
    parameter named by SLACK_WEBHOOK_SSM_PARAM when the former is empty.

    Raises:
        ClientError: If the SSM parameter cannot be read.
    """
    if settings.slack_webhook:
        return settings.slack_webhook
    if not settings.slack_webhook_ssm_param:
        logger.warning("Neither SLACK_WEBHOOK nor SLACK_WEBHOOK_SSM_PARAM is set.")
        return ""

    if ssm_client is None:
        ssm_client = boto3.client('ssm', region_name=settings.aws_region)
    logger.info(f"Reading Slack webhook from SSM parameter '{settings.slack_webhook_ssm_param}'")
    response = ssm_client.get_parameter(Name=settings.slack_webhook_ssm_param, WithDecryption=True)
    return response['Parameter']['Value']
