"""Core Note dataclass."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any

from review.schedule import ReviewInterval


@dataclass
class Note:
    """A single project or goal note and everything derived from it."""

    id: int
    filename: Path
    title: str
    metadata_raw: str = ""
    start_date: date | None = None
    due_date: date | None = None
    completed_date: date | None = None
    last_reviewed_date: date | None = None
    review_interval: ReviewInterval | None = None
    #: Computed by the scheduler, never read from the file
    next_review_date: date | None = None
    is_active: bool = False
    is_completed: bool = False
    is_cancelled: bool = False
    is_archived: bool = False
    is_project: bool = False
    is_goal: bool = False
    to_review: bool = False
    open_count: int = 0
    waiting_count: int = 0
    done_count: int = 0
    #: Lines after the metadata line
    body: list[str] = field(default_factory=list)
    #: True when the file was too short to carry a title and metadata line
    is_placeholder: bool = False

    @property
    def code(self) -> str:
        """Short type marker: ``G`` for goals, ``P`` for projects."""
        if self.is_goal:
            return "G"
        if self.is_project:
            return "P"
        return ""

    @property
    def display_next_review(self) -> date | None:
        """Next review date, hidden for completed or cancelled notes."""
        if self.is_completed or self.is_cancelled:
            return None
        return self.next_review_date

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "filename": str(self.filename),
            "open": self.open_count,
            "waiting": self.waiting_count,
            "done": self.done_count,
            "start_date": self.start_date,
            "due_date": self.due_date,
            "completed_date": self.completed_date,
            "reviewed_date": self.last_reviewed_date,
            "review_interval": str(self.review_interval) if self.review_interval else None,
            "next_review_date": self.display_next_review,
            "is_active": self.is_active,
            "is_completed": self.is_completed,
            "is_cancelled": self.is_cancelled,
            "is_project": self.is_project,
            "is_goal": self.is_goal,
            "to_review": self.to_review,
        }
