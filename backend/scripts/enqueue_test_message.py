#!/usr/bin/env python3
"""Test Message Generator for the handoff queues.

Publishes an inbound email handoff message or an outbound release notice to
the broker so a locally running worker picks it up.

Usage:
    # Email handoff for mailbox message 42 (cached content id content-1)
    python scripts/enqueue_test_message.py email --email-id 42 \
        --content-id content-1 --file-name attachment.pdf

    # Release notice for file F1
    python scripts/enqueue_test_message.py release --file-id F1 --business-area DPS

    # Print the payload without publishing
    python scripts/enqueue_test_message.py release --file-id F1 --dry-run
"""

import argparse
import json
import sys
import uuid
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domain.handoff.models import InboundFileInfo, ReleaseNotice, WorkItem  # noqa: E402


def build_payload(args: argparse.Namespace) -> dict:
    if args.kind == "email":
        return WorkItem.from_email_id(
            transaction_id=uuid.uuid4(),
            correlation_id=args.correlation_id or str(uuid.uuid4()),
            file_info=InboundFileInfo(id=args.content_id, name=args.file_name),
            email_id=args.email_id,
        ).to_payload()
    return ReleaseNotice(file_id=args.file_id, business_area_cd=args.business_area).to_payload()


def main() -> int:
    parser = argparse.ArgumentParser(description="Publish a test message to a handoff queue")
    subparsers = parser.add_subparsers(dest="kind", required=True)

    email = subparsers.add_parser("email", help="Inbound email handoff message")
    email.add_argument("--email-id", required=True, help="Raw mailbox message id (IMAP UID)")
    email.add_argument("--content-id", required=True, help="Cached attachment content id")
    email.add_argument("--file-name", default="attachment.pdf", help="Attachment file name")
    email.add_argument("--correlation-id", help="Correlation id (random when omitted)")

    release = subparsers.add_parser("release", help="Outbound release notice")
    release.add_argument("--file-id", required=True, help="Rendered document file id")
    release.add_argument("--business-area", default="DPS", help="Business area code")

    for subparser in (email, release):
        subparser.add_argument("--dry-run", action="store_true", help="Print payload only")

    args = parser.parse_args()
    payload = build_payload(args)
    print(json.dumps(payload, indent=2))

    if args.dry_run:
        return 0

    from workers.celery_app import celery_app
    from config import get_settings

    settings = get_settings()
    if args.kind == "email":
        task_name, queue = "dps.email.handoff", settings.EMAIL_QUEUE_NAME
    else:
        task_name, queue = "dps.output.notification", settings.NOTIFICATION_QUEUE_NAME

    result = celery_app.send_task(task_name, args=[payload], queue=queue)
    print(f"Published {task_name} to {queue} (task id {result.id})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
