from __future__ import annotations

from datetime import datetime
from typing import Union

from inbox_tasks.models import Level, PriorityLabel


URGENT_WITHIN_HOURS = 24
IMPORTANT_WITHIN_HOURS = 72


def hours_between(reference: datetime, deadline: datetime) -> int:
    # Whole hours, truncated toward zero. Negative once the deadline has passed.
    return int((deadline - reference).total_seconds() / 3600)


def classify_priority(
    deadline: datetime,
    urgency: Union[Level, str],
    importance: Union[Level, str],
    reference: datetime,
) -> PriorityLabel:
    """
    Map a resolved deadline plus the model's hints onto a priority tier.
    Checks run in order and the first one that holds wins.
    """
    hours_left = hours_between(reference, deadline)

    if hours_left <= URGENT_WITHIN_HOURS or Level.parse(urgency) is Level.HIGH:
        return PriorityLabel.URGENT
    if hours_left <= IMPORTANT_WITHIN_HOURS or Level.parse(importance) is Level.HIGH:
        return PriorityLabel.IMPORTANT
    return PriorityLabel.LATER
