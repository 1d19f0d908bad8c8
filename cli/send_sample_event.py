# cli/send_sample_event.py
import argparse
import json
import uuid
from datetime import datetime, timezone

from dotenv import load_dotenv

# Load environment variables from a .env file for local testing
load_dotenv()

from lambdas.emr_notify.app import CONFIG, handle_event  # noqa: E402
from lambdas.emr_notify.decoder import parse_event  # noqa: E402
from lambdas.emr_notify.formatter import build_notifications  # noqa: E402
from lambdas.emr_notify.models import SlackPayload  # noqa: E402


def create_sample_event(severity: str = "ERROR", state: str = "TERMINATED_WITH_ERRORS",
                        message: str = "Amazon EMR Cluster j-SAMPLE has terminated with errors.",
                        source: str = "aws.emr", detail_type: str = "EMR Cluster State Change",
                        account: str = "123456789012", region: str = "us-east-1") -> dict:
    """
    Builds an EventBridge envelope shaped like the ones EMR emits.
    """
    return {
        "version": "0",
        "id": str(uuid.uuid4()),
        "detail-type": detail_type,
        "source": source,
        "account": account,
        "time": datetime.now(timezone.utc).strftime('%Y-%m-%dT%H:%M:%SZ'),
        "region": region,
        "resources": [],
        "detail": {
            "severity": severity,
            "stateChangeReason": "{\"code\":\"\"}",
            "name": "sample-cluster",
            "clusterId": "j-SAMPLE",
            "state": state,
            "message": message,
        },
    }


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Runs a sample EMR state-change event through the notifier."
    )
    parser.add_argument('--severity', default="ERROR", help="EMR severity, e.g. INFO or ERROR.")
    parser.add_argument('--state', default="TERMINATED_WITH_ERRORS", help="Cluster state.")
    parser.add_argument('--message', default="Amazon EMR Cluster j-SAMPLE has terminated with errors.")
    parser.add_argument('--source', default="aws.emr", help="Event source; anything but aws.emr is ignored.")
    parser.add_argument('--dry-run', action='store_true',
                        help="Print the Slack payload instead of posting it.")
    args = parser.parse_args(argv)

    event = create_sample_event(severity=args.severity, state=args.state,
                                message=args.message, source=args.source)
    print("--- Sample Event ---")
    print(json.dumps(event, indent=4))
    print("--------------------")

    if CONFIG is None:
        print("❌ ERROR: Notifier configuration failed to load. Check your .env file.")
        return 1

    if args.dry_run:
        attachments = build_notifications(parse_event(event), CONFIG.footer_label, CONFIG.footer_icon)
        payload = SlackPayload(channel=CONFIG.channel, attachments=tuple(attachments))
        print(json.dumps(payload.to_wire(), indent=4))
        return 0

    result = handle_event(event, CONFIG)
    print(f"Handler result: {result}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
