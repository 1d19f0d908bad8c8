# lambdas/emr_notify/models.py
"""
Pydantic models and settings for the EMR state-change notifier.
"""
from datetime import datetime
from enum import Enum
from typing import Any, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

EMR_EVENT_SOURCE = "aws.emr"
DEFAULT_FOOTER_ICON = "https://d1d05r7k0qlw4w.cloudfront.net/dist-cbe91c5a8477701757ff6752aae4c6f892018972/img/favicon.ico"
# Slack rejects posts with more than 100 attachments
MAX_ATTACHMENTS_PER_POST = 100


class AppSettings(BaseSettings):
    """
    Manages env vars using Pydantic BaseSettings.
    A local .env file is read too, which makes running the handler by hand easy.
    """
    model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8', extra='ignore')

    slack_webhook: str = Field("", alias='SLACK_WEBHOOK')
    slack_webhook_ssm_param: str = Field("", alias='SLACK_WEBHOOK_SSM_PARAM')
    slack_monitor_channel: str = Field("", alias='SLACK_MONITOR_CHANNEL')
    function_name: str = Field("emr-notify", alias='AWS_LAMBDA_FUNCTION_NAME')
    footer_icon: str = Field(DEFAULT_FOOTER_ICON, alias='SLACK_FOOTER_ICON')
    chunk_size: int = Field(MAX_ATTACHMENTS_PER_POST, alias='SLACK_ATTACHMENTS_CHUNK_SIZE',
                            ge=1, le=MAX_ATTACHMENTS_PER_POST)
    slack_timeout_seconds: float = Field(10, alias='SLACK_TIMEOUT_SECONDS', gt=0)
    aws_region: str = Field("us-east-1", alias='AWS_REGION')
    log_level: str = Field("INFO", alias='LOG_LEVEL')


class Color(str, Enum):
    GOOD = "good"
    DANGER = "danger"


class InboundEvent(BaseModel):
    """
    The EventBridge envelope. Only the keys we display are kept; the
    source specific payload stays opaque in `detail` until decoded.
    """
    model_config = ConfigDict(frozen=True, extra='ignore', populate_by_name=True)

    source: str = ""
    detail_type: str = Field("", alias='detail-type')
    account_id: str = Field("", alias='account')
    region: str = ""
    time: Optional[datetime] = None
    detail: Any = None

    @field_validator('source', 'detail_type', 'account_id', 'region', mode='before')
    @classmethod
    def _null_to_empty(cls, value):
        return "" if value is None else value


class EventDetail(BaseModel):
    """
    The handful of EMR detail keys we care about. Missing keys become empty strings.
    """
    model_config = ConfigDict(extra='ignore')

    severity: str = ""
    state: str = ""
    message: str = ""

    @field_validator('severity', 'state', 'message', mode='before')
    @classmethod
    def _null_to_empty(cls, value):
        return "" if value is None else value


class AttachmentField(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    value: str
    short: bool = True


class NotificationUnit(BaseModel):
    """
    One Slack attachment. Built once per matching event and never mutated.
    """
    model_config = ConfigDict(frozen=True)

    color: Color
    title: str
    text: str
    footer: str
    footer_icon: str
    ts: int
    fields: Tuple[AttachmentField, ...]


class SlackPayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    channel: str
    attachments: Tuple[NotificationUnit, ...]

    def to_wire(self) -> dict:
        """Returns the JSON-ready body for the incoming webhook."""
        return self.model_dump(mode='json')
