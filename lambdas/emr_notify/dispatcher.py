# lambdas/emr_notify/dispatcher.py
from dataclasses import dataclass
from typing import Iterator, List, Sequence

from .log import get_logger
from .models import MAX_ATTACHMENTS_PER_POST, NotificationUnit, SlackPayload
from .slack_client import SendError, SlackClient

logger = get_logger(__name__)


@dataclass
class DispatchReport:
    """Per-invocation tally of chunk outcomes. Only ever logged."""
    attempted: int = 0
    sent: int = 0
    failed: int = 0


def chunk_attachments(units: Sequence[NotificationUnit],
                      chunk_size: int = MAX_ATTACHMENTS_PER_POST) -> Iterator[List[NotificationUnit]]:
    """
    Yields contiguous slices of at most `chunk_size` units, in order.
    """
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be at least 1, got {chunk_size}")
    for start in range(0, len(units), chunk_size):
        yield list(units[start:start + chunk_size])


def dispatch(client: SlackClient, units: Sequence[NotificationUnit], channel: str,
             chunk_size: int = MAX_ATTACHMENTS_PER_POST) -> DispatchReport:
    """
    Sends the attachments to Slack in chunks, one post per chunk.

    A failed chunk is logged and skipped; later chunks are still sent.
    Send failures are never raised to the caller.
    """
    report = DispatchReport()
    if not units:
        logger.warning("No Slack message sent: there were no attachments to post.")
        return report

    chunks = list(chunk_attachments(units, chunk_size))
    num_chunks = len(chunks)
    for chunk_num, chunk in enumerate(chunks, start=1):
        report.attempted += 1
        payload = SlackPayload(channel=channel, attachments=tuple(chunk))
        try:
            response = client.send(payload)
        except SendError as e:
            report.failed += 1
            logger.error(f"Slack post {chunk_num}/{num_chunks} failed ({len(chunk)} attachments): {e}")
            continue
        report.sent += 1
        logger.info(f"Slack post {chunk_num}/{num_chunks} accepted ({len(chunk)} attachments): {response}")

    return report
