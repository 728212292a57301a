from __future__ import annotations

import json
import re
from typing import Dict, List, Optional, Tuple

from inbox_tasks.models import FIELD_DEFAULTS, NO_SUBJECT, ExtractedFields, Level


# Field name and the label the model is asked to print, in prompt order.
FIELD_LABELS: Tuple[Tuple[str, str], ...] = (
    ("event_type", "Event Type"),
    ("subject", "Subject"),
    ("deadline_text", "Deadline"),
    ("urgency", "Urgency"),
    ("importance", "Importance"),
    ("score", "Score"),
    ("registration_link", "Registration Link"),
    ("summary", "Summary"),
)

# Leading list markers and markdown emphasis the model sometimes adds.
_DECORATION = re.compile(r"^[\s>*\-•#\d.)]*")


def _label_key(label: str) -> str:
    return re.sub(r"[^a-z]", "", label.lower())


_FIELD_BY_KEY: Dict[str, str] = {_label_key(label): name for name, label in FIELD_LABELS}


def _split_labeled(line: str) -> Optional[Tuple[str, str]]:
    """Return (field name, value) when the line starts with a known label."""
    head, sep, tail = line.partition(":")
    if not sep:
        return None
    field = _FIELD_BY_KEY.get(_label_key(_DECORATION.sub("", head)))
    if field is None:
        return None
    return field, tail.strip().strip("*").strip()


def _strip_fence(text: str) -> str:
    if "```" not in text:
        return text
    parts = text.split("```")
    if len(parts) < 3:
        return text
    inner = parts[1]
    if inner.lstrip().lower().startswith("json"):
        inner = inner.split("\n", 1)[-1]
    return inner.strip()


def _from_json(text: str) -> Optional[Dict[str, str]]:
    candidate = _strip_fence(text.strip())
    if not candidate.startswith("{"):
        return None
    try:
        data = json.loads(candidate)
    except json.JSONDecodeError:
        return None
    if not isinstance(data, dict):
        return None

    values: Dict[str, str] = {}
    for key, value in data.items():
        field = _FIELD_BY_KEY.get(_label_key(str(key)))
        if field is not None and value is not None:
            values[field] = str(value).strip()
    return values


def _from_lines(text: str) -> Dict[str, str]:
    lines: List[str] = [line.strip() for line in text.splitlines() if line.strip()]
    values: Dict[str, str] = {}
    unlabeled: List[Tuple[int, str]] = []

    for index, line in enumerate(lines):
        labeled = _split_labeled(line)
        if labeled is None:
            unlabeled.append((index, line))
            continue
        field, value = labeled
        # First non-empty value wins; an empty label never blocks a later one.
        if value and not values.get(field):
            values[field] = value

    # Lines without a label fill the slot they sit in, if nothing claimed it.
    for index, line in unlabeled:
        if index >= len(FIELD_LABELS):
            break
        field = FIELD_LABELS[index][0]
        if not values.get(field):
            values[field] = line

    return values


def parse_response(text: str, subject: str) -> ExtractedFields:
    """
    Turn the model's answer into ExtractedFields.

    Accepts a JSON object or "Label: value" lines in any order. Every field
    that is missing or empty takes its own default; the subject defaults to
    the email's own subject.
    """
    values = _from_json(text)
    if values is None:
        values = _from_lines(text)

    def pick(field: str, default: str) -> str:
        return values.get(field) or default

    return ExtractedFields(
        event_type=pick("event_type", FIELD_DEFAULTS["event_type"]),
        subject=pick("subject", subject.strip() or NO_SUBJECT),
        deadline_text=pick("deadline_text", FIELD_DEFAULTS["deadline_text"]),
        urgency=Level.parse(pick("urgency", FIELD_DEFAULTS["urgency"])),
        importance=Level.parse(pick("importance", FIELD_DEFAULTS["importance"])),
        score=pick("score", FIELD_DEFAULTS["score"]),
        registration_link=pick("registration_link", FIELD_DEFAULTS["registration_link"]),
        summary=pick("summary", FIELD_DEFAULTS["summary"]),
    )
