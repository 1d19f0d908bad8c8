# lambdas/emr_notify/app.py
import json
from dataclasses import dataclass
from typing import Optional

from botocore.exceptions import BotoCoreError, ClientError

from .decoder import DecodeError, parse_event
from .dispatcher import dispatch
from .formatter import build_notifications
from .log import get_logger, set_log_level
from .models import EMR_EVENT_SOURCE, AppSettings
from .slack_client import SlackClient, resolve_webhook_url

logger = get_logger(__name__)


@dataclass(frozen=True)
class NotifierConfig:
    """
    Process-wide configuration, built once before the first invocation and
    shared read-only by every invocation after that.
    """
    client: SlackClient
    channel: str
    chunk_size: int
    footer_label: str
    footer_icon: str

    @classmethod
    def from_settings(cls, settings: AppSettings, ssm_client=None) -> "NotifierConfig":
        webhook_url = resolve_webhook_url(settings, ssm_client=ssm_client)
        return cls(
            client=SlackClient(webhook_url, timeout=settings.slack_timeout_seconds),
            channel=settings.slack_monitor_channel,
            chunk_size=settings.chunk_size,
            footer_label=settings.function_name,
            footer_icon=settings.footer_icon,
        )


def _load_config() -> Optional[NotifierConfig]:
    try:
        settings = AppSettings()
        set_log_level(settings.log_level)
        return NotifierConfig.from_settings(settings)
    except (ValueError, ClientError, BotoCoreError) as e:
        logger.error(f"FATAL: Could not load notifier configuration: {e}")
        return None


# Loaded outside the handler so warm invocations reuse the client and settings.
CONFIG = _load_config()


def _ok(body: str) -> dict:
    return {"statusCode": 200, "body": body}


def handle_event(event: dict, config: NotifierConfig) -> dict:
    """
    Turns one EventBridge event into Slack posts.

    Every outcome reports success: a broken notification channel must never
    fail the pipeline that emitted the event. Problems show up in the logs only.
    """
    attachments = []
    if isinstance(event, dict) and event.get('source') == EMR_EVENT_SOURCE:
        try:
            inbound = parse_event(event)
            attachments = build_notifications(inbound, config.footer_label, config.footer_icon)
        except DecodeError as e:
            logger.error(f"Dropping event: {e}")
            return _ok("Event could not be decoded.")
        logger.info(f"Built {len(attachments)} attachment(s) for '{inbound.detail_type}' from {inbound.source}")

    report = dispatch(config.client, attachments, config.channel, config.chunk_size)
    return _ok(json.dumps({"attempted": report.attempted, "sent": report.sent, "failed": report.failed}))


def handler(event, context):
    """
    Main Lambda handler, triggered by an EventBridge rule.
    """
    if CONFIG is None:
        logger.error("Notifier is not configured correctly. Skipping event.")
        return _ok("Notifier not configured.")
    return handle_event(event, CONFIG)
