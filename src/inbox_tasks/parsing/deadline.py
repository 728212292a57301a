from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

# Unrecognized or missing deadlines are treated as far away, not as "now".
FALLBACK_DAYS = 7

_WITHIN_HOURS = re.compile(r"within (\d+) hours")

# (strptime format, carries a time of day). First format that parses wins.
ABSOLUTE_FORMATS: Tuple[Tuple[str, bool], ...] = (
    ("%d/%m/%Y %H:%M", True),
    ("%d/%m/%Y", False),
    ("%Y-%m-%d", False),
    ("%B %d, %Y", False),
    ("%d %b %Y", False),
)


def _end_of_day(value: datetime) -> datetime:
    return value.replace(hour=23, minute=59, second=59, microsecond=0)


def _is_system_local(reference: datetime) -> bool:
    # datetime.now().astimezone() carries a fixed offset; treat it as the
    # system zone so dates across a DST change get their own offset.
    return isinstance(reference.tzinfo, timezone) and (
        reference.utcoffset() == reference.astimezone().utcoffset()
    )


def _attach_zone(parsed: datetime, reference: datetime) -> datetime:
    if reference.tzinfo is None:
        return parsed
    if _is_system_local(reference):
        return parsed.astimezone()
    return parsed.replace(tzinfo=reference.tzinfo)


def _parse_absolute(text: str, reference: datetime) -> Optional[datetime]:
    for fmt, has_time in ABSOLUTE_FORMATS:
        try:
            parsed = datetime.strptime(text, fmt)
        except ValueError:
            continue
        if not has_time:
            parsed = _end_of_day(parsed)
        return _attach_zone(parsed, reference)
    return None


def _within_hours(phrase: str, reference: datetime) -> Optional[datetime]:
    match = _WITHIN_HOURS.search(phrase)
    if not match:
        return None
    # Hour counts past the datetime range fall through to the fallback.
    try:
        return reference + timedelta(hours=int(match.group(1)))
    except (OverflowError, ValueError):
        return None


def normalize_deadline(text: Optional[str], reference: datetime) -> datetime:
    """
    Resolve a free-text deadline against the reference instant.

    Recognized, in order: "today" (end of the reference day), "tomorrow",
    "day after tomorrow", "none", "within N hours", then the absolute formats
    in ABSOLUTE_FORMATS. Note that "tomorrow" keeps the reference time of day
    while "today" and date-only formats resolve to 23:59:59.
    Anything else resolves to reference + FALLBACK_DAYS; this never raises.
    """
    if not isinstance(reference, datetime):
        raise TypeError(f"reference must be a datetime, got {type(reference).__name__}")

    phrase = (text or "").strip().lower()

    if phrase == "today":
        return _end_of_day(reference)
    if phrase == "tomorrow":
        return reference + timedelta(days=1)
    if phrase == "day after tomorrow":
        return reference + timedelta(days=2)
    if phrase == "none":
        return reference + timedelta(days=FALLBACK_DAYS)

    within = _within_hours(phrase, reference)
    if within is not None:
        return within

    try:
        parsed = _parse_absolute(phrase, reference)
    except OverflowError:
        # Dates at the edge of the calendar cannot be moved into the local zone.
        parsed = None
    if parsed is not None:
        return parsed

    logger.debug("Unrecognized deadline %r, using %d-day fallback", text, FALLBACK_DAYS)
    return reference + timedelta(days=FALLBACK_DAYS)
