# tests/conftest.py
import pytest

from lambdas.emr_notify.models import NotificationUnit, AttachmentField, Color
from lambdas.emr_notify.slack_client import SendError, SlackResponse


class FakeSlackClient:
    """
    Records every payload it is asked to send. Posts whose 1-based position
    is in `fail_on` raise SendError instead.
    """

    def __init__(self, fail_on=()):
        self.fail_on = set(fail_on)
        self.payloads = []

    def send(self, payload):
        self.payloads.append(payload)
        if len(self.payloads) in self.fail_on:
            raise SendError("Could not post to Slack: 500 Server Error")
        return SlackResponse(status_code=200, body="ok")


@pytest.fixture
def fake_client() -> FakeSlackClient:
    return FakeSlackClient()


@pytest.fixture
def make_units():
    """
    Factory for lists of distinct notification units; the title carries the index.
    """
    def _make(count: int) -> list[NotificationUnit]:
        return [
            NotificationUnit(
                color=Color.GOOD,
                title=f"unit-{i}",
                text="",
                footer="emr-notify",
                footer_icon="https://example.com/icon.ico",
                ts=1700000000,
                fields=(AttachmentField(title="State", value="RUNNING", short=True),),
            )
            for i in range(count)
        ]
    return _make


@pytest.fixture
def emr_event() -> dict:
    """An EMR cluster state-change event as EventBridge delivers it."""
    return {
        "version": "0",
        "id": "999cccaa-eaaa-0000-1111-123456789012",
        "detail-type": "EMR Cluster State Change",
        "source": "aws.emr",
        "account": "123456789012",
        "time": "2024-05-01T12:30:45Z",
        "region": "us-east-1",
        "resources": [],
        "detail": {
            "severity": "ERROR",
            "stateChangeReason": "{\"code\":\"\"}",
            "name": "Development Cluster",
            "clusterId": "j-123456789ABC",
            "state": "TERMINATED",
            "message": "boom",
        },
    }
