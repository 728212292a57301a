from __future__ import annotations

import logging
from datetime import datetime

from inbox_tasks.llm.client import TextGenerator
from inbox_tasks.models import ExtractedFields
from inbox_tasks.parsing.response import FIELD_LABELS, parse_response

logger = logging.getLogger(__name__)


def build_prompt(body: str, subject: str, reference: datetime) -> str:
    """
    Instruction for the model. The reference date is the run's "now",
    so relative phrases in the email resolve against the real day.
    """
    answer_format = "\n".join(f"{label}: <{name}>" for name, label in FIELD_LABELS)
    return (
        'Analyze the email and extract task details for classification into "Urgent", '
        '"Important" or "Later". '
        f"Use today's date: {reference.strftime('%d/%m/%Y')}.\n\n"
        "Answer with exactly these eight lines, in this order, and nothing else:\n"
        f"{answer_format}\n\n"
        "Rules:\n"
        "- Urgency and Importance must be one of: high, medium, low.\n"
        "- Deadline must be one of: today, tomorrow, day after tomorrow, "
        "within N hours, DD/MM/YYYY HH:MM, DD/MM/YYYY, or none.\n"
        "- Use none for any value the email does not mention.\n\n"
        f'Email subject: "{subject}"\n'
        f'Email: "{body}"\n'
    )


def extract_fields(
    body: str,
    subject: str,
    generator: TextGenerator,
    reference: datetime,
) -> ExtractedFields:
    """
    Ask the model for the task fields of one email.

    Exactly one generate() call. Any failure, from the call or from parsing,
    yields ExtractedFields.fallback(subject) instead of an exception.
    """
    try:
        text = generator.generate(build_prompt(body, subject, reference))
        return parse_response(text, subject)
    except Exception as exc:
        logger.warning(
            "Extraction failed for subject=%r, using fallback: %s: %s",
            subject,
            type(exc).__name__,
            exc,
        )
        return ExtractedFields.fallback(subject)
