# src/inbox_tasks/app/run.py
from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import List, Optional

from google.oauth2.credentials import Credentials
from googleapiclient.errors import HttpError

from inbox_tasks.config.settings import Settings
from inbox_tasks.gmail.client import GmailClient
from inbox_tasks.llm.client import TextGenerator
from inbox_tasks.models import NO_SUBJECT, RawEmail, Task
from inbox_tasks.parsing.parser import extract_body_from_payload, headers_from_payload
from inbox_tasks.pipeline.orchestrator import assemble_tasks

logger = logging.getLogger(__name__)


def _recent_query(since: datetime) -> str:
    # Gmail "after:" expects seconds since epoch.
    epoch_seconds = max(0, int(since.timestamp()))
    return f"after:{epoch_seconds}"


def build_raw_email(client: GmailClient, message_id: str) -> RawEmail:
    msg = client.get_message(message_id, fmt="full")
    payload = msg.get("payload", {})
    headers = headers_from_payload(payload)

    return RawEmail(
        subject=headers.get("Subject") or NO_SUBJECT,
        body=extract_body_from_payload(payload),
    )


def fetch_recent_emails(
    client: GmailClient,
    *,
    lookback_days: int = 7,
    max_results: int = 500,
    now: Optional[datetime] = None,
) -> List[RawEmail]:
    """
    Decoded emails received in the last lookback_days, in listing order.
    Messages that disappear or fail between list and fetch are skipped.
    """
    since = (now or datetime.now().astimezone()) - timedelta(days=lookback_days)
    message_ids = client.list_messages(query=_recent_query(since), max_results=max_results)

    emails: List[RawEmail] = []
    for mid in message_ids:
        try:
            emails.append(build_raw_email(client, mid))
        except HttpError as exc:
            logger.warning("Skipping message %s: %s", mid, exc)

    logger.info("Fetched %d of %d listed emails", len(emails), len(message_ids))
    return emails


def collect_tasks(
    credentials: Credentials,
    generator: TextGenerator,
    settings: Settings,
    *,
    reference: Optional[datetime] = None,
) -> List[Task]:
    """
    One full run: connect to Gmail, fetch recent mail, build the task list.
    The reference instant is captured once and shared by every email.
    """
    reference = reference or datetime.now().astimezone()

    client = GmailClient(credentials)
    client.connect()
    emails = fetch_recent_emails(
        client,
        lookback_days=settings.lookback_days,
        max_results=settings.max_results,
        now=reference,
    )

    tasks = assemble_tasks(emails, reference, generator, max_workers=settings.max_workers)
    logger.info("Built %d tasks (reference=%s)", len(tasks), reference.isoformat())
    return tasks
