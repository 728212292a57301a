from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime
from typing import Dict, List, Sequence

from inbox_tasks.extractors.tasks import extract_fields
from inbox_tasks.llm.client import TextGenerator
from inbox_tasks.models import RawEmail, Task
from inbox_tasks.parsing.deadline import normalize_deadline
from inbox_tasks.rules.priority import classify_priority

logger = logging.getLogger(__name__)


def assemble_task(email: RawEmail, reference: datetime, generator: TextGenerator) -> Task:
    extracted = extract_fields(email.body, email.subject, generator, reference)
    # Normalizer and classifier must see the same reference instant.
    deadline = normalize_deadline(extracted.deadline_text, reference)
    priority = classify_priority(deadline, extracted.urgency, extracted.importance, reference)

    return Task(
        event_type=extracted.event_type,
        subject=extracted.subject,
        deadline=deadline,
        urgency=extracted.urgency,
        importance=extracted.importance,
        score=extracted.score,
        priority=priority,
        registration_link=extracted.registration_link,
        summary=extracted.summary,
    )


def assemble_tasks(
    emails: Sequence[RawEmail],
    reference: datetime,
    generator: TextGenerator,
    *,
    max_workers: int = 1,
) -> List[Task]:
    """
    Build one Task per email, in input order.

    max_workers <= 1 processes emails one after another. A larger value bounds
    the number of model calls in flight; results are tagged with their input
    index so completion order never leaks into the output.
    """
    if max_workers <= 1 or len(emails) <= 1:
        return [assemble_task(email, reference, generator) for email in emails]

    by_index: Dict[int, Task] = {}
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        future_to_idx = {
            pool.submit(assemble_task, email, reference, generator): idx
            for idx, email in enumerate(emails)
        }
        for future in as_completed(future_to_idx):
            by_index[future_to_idx[future]] = future.result()

    logger.info("Assembled %d tasks with %d workers", len(by_index), max_workers)
    return [by_index[idx] for idx in range(len(emails))]
