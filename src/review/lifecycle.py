"""Lifecycle flags derived from a note's parsed metadata.

Precedence: completion, cancellation and archiving always win.  Otherwise a
note is active when it is tagged ``#active`` or carries a review interval.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from review.parser import Metadata


@dataclass(frozen=True)
class Status:
    is_active: bool = False
    is_completed: bool = False
    is_cancelled: bool = False
    is_archived: bool = False
    is_project: bool = False
    is_goal: bool = False


def classify(meta: "Metadata") -> Status:
    is_completed = meta.completed_date is not None
    is_cancelled = "cancelled" in meta.tags or "someday" in meta.tags
    is_archived = "archive" in meta.tags
    wants_tracking = "active" in meta.tags or meta.review_interval is not None
    return Status(
        is_active=wants_tracking and not (is_completed or is_cancelled or is_archived),
        is_completed=is_completed,
        is_cancelled=is_cancelled,
        is_archived=is_archived,
        is_project="project" in meta.tags,
        is_goal="goal" in meta.tags,
    )


def is_due(is_active: bool, next_review_date: date | None, today: date) -> bool:
    """True when an active note's next review date has arrived."""
    return is_active and next_review_date is not None and next_review_date <= today
