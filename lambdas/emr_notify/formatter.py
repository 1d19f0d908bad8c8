# lambdas/emr_notify/formatter.py
import time
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Union

from .decoder import decode_event_detail
from .models import (
    EMR_EVENT_SOURCE,
    AttachmentField,
    Color,
    EventDetail,
    InboundEvent,
    NotificationUnit,
)

ERROR_SEVERITY = "ERROR"


def format_event_time(value: Optional[datetime]) -> str:
    """
    Renders the event time as "YYYY-MM-DD HH:MM:SS +0000 UTC".
    Naive datetimes are taken to be UTC. Returns "" when there is no time.
    """
    if value is None:
        return ""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    rendered = value.strftime('%Y-%m-%d %H:%M:%S')
    if value.microsecond:
        rendered += f".{value.microsecond:06d}".rstrip('0')
    offset = value.strftime('%z')
    zone = "UTC" if value.utcoffset() == timedelta(0) else offset
    return f"{rendered} {offset} {zone}"


def _pick_color(severity: str) -> Color:
    return Color.DANGER if severity == ERROR_SEVERITY else Color.GOOD


def _epoch_seconds(now: Union[datetime, float, None]) -> int:
    if now is None:
        return int(time.time())
    if isinstance(now, datetime):
        return int(now.timestamp())
    return int(now)


def build_notification(event: InboundEvent, detail: EventDetail, footer_label: str,
                       footer_icon: str, now: Union[datetime, float, None] = None) -> NotificationUnit:
    """
    Maps a decoded EMR event onto a Slack attachment.

    The timestamp is when the notification is built, not when the event
    happened; the event time is shown in the Time field instead.
    """
    return NotificationUnit(
        color=_pick_color(detail.severity),
        title=event.detail_type,
        text=detail.message,
        footer=footer_label,
        footer_icon=footer_icon,
        ts=_epoch_seconds(now),
        fields=(
            AttachmentField(title="AccountID", value=event.account_id, short=True),
            AttachmentField(title="Region", value=event.region, short=True),
            AttachmentField(title="State", value=detail.state, short=True),
            AttachmentField(title="Time", value=format_event_time(event.time), short=True),
        ),
    )


def build_notifications(event: InboundEvent, footer_label: str, footer_icon: str,
                        now: Union[datetime, float, None] = None) -> List[NotificationUnit]:
    """
    Returns the attachments for one envelope: one for an EMR event, none otherwise.

    Raises:
        DecodeError: If the EMR detail payload is malformed.
    """
    if event.source != EMR_EVENT_SOURCE:
        return []
    detail = decode_event_detail(event)
    return [build_notification(event, detail, footer_label, footer_icon, now=now)]
