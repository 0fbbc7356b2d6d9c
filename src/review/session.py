"""Interactive review of the due queue.

A session moves through three states::

    IDLE --begin()--> AWAITING_EXTERNAL_EDIT --acknowledge()--> COMMITTING --> IDLE

``begin`` hands the note's title to the viewer and returns immediately; the
operator edits the note elsewhere and calls ``acknowledge`` when finished.
No file handle is held in between, so the commit re-reads the file.

If the metadata rewrite fails the in-memory review still counts: the note
leaves the due queue and :attr:`ReviewOutcome.persisted` is ``False``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import TYPE_CHECKING

from review.external import open_in_viewer
from review.persist import rewrite_reviewed_date

if TYPE_CHECKING:
    from review.index import ReviewIndex
    from review.note import Note

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    IDLE = "idle"
    AWAITING_EXTERNAL_EDIT = "awaiting_external_edit"
    COMMITTING = "committing"


class SessionStateError(RuntimeError):
    """Raised when a session operation is called in the wrong state."""


@dataclass
class ReviewOutcome:
    note: "Note"
    persisted: bool
    #: Exit status of the post-review tool; ``None`` if not run or not startable
    tool_status: int | None = None


class ReviewSession:
    """Walks an index's due queue one note at a time."""

    def __init__(
        self,
        index: "ReviewIndex",
        *,
        viewer: Callable[[str], None] = open_in_viewer,
        post_review: Callable[[], int | None] | None = None,
        today: date | None = None,
    ) -> None:
        self.index = index
        self.viewer = viewer
        self.post_review = post_review
        self.today = today or index.today
        self.state = SessionState.IDLE
        self.current: int | None = None

    def _require(self, state: SessionState, action: str) -> None:
        if self.state is not state:
            raise SessionStateError(f"Cannot {action} while {self.state.value}")

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def next_due(self) -> "Note | None":
        """Peek at the head of the due queue."""
        if not self.index.due:
            return None
        return self.index.get(self.index.due[0])

    def begin(self, note_id: int | None = None) -> "Note | None":
        """Open *note_id* (default: head of the due queue) for editing."""
        self._require(SessionState.IDLE, "start a review")
        if note_id is None:
            if not self.index.due:
                return None
            note_id = self.index.due[0]
        note = self.index.get(note_id)
        self.current = note_id
        self.state = SessionState.AWAITING_EXTERNAL_EDIT
        self.viewer(note.title)
        return note

    def begin_matching(self, query: str) -> "Note | None":
        """Open the note whose title best matches *query*."""
        self._require(SessionState.IDLE, "start a review")
        note = self.index.find(query)
        if note is None:
            logger.warning("Couldn't find a note matching '%s'", query)
            return None
        return self.begin(note.id)

    def abandon(self) -> None:
        """Give up on the current note without recording a review."""
        self._require(SessionState.AWAITING_EXTERNAL_EDIT, "abandon a review")
        self.current = None
        self.state = SessionState.IDLE

    def acknowledge(self) -> ReviewOutcome:
        """The operator has finished editing: persist and requeue the note."""
        self._require(SessionState.AWAITING_EXTERNAL_EDIT, "commit a review")
        if self.current is None:
            raise SessionStateError("No note is open for review")
        self.state = SessionState.COMMITTING
        note_id, self.current = self.current, None
        try:
            note = self.index.get(note_id)
            persisted = rewrite_reviewed_date(note.filename, self.today)
            if not persisted:
                logger.error("Review of '%s' was not saved to %s", note.title, note.filename)
            self.index.mark_reviewed(note_id, self.today)

            tool_status = self.post_review() if self.post_review is not None else None
        finally:
            self.state = SessionState.IDLE
        logger.info("Updated '%s' note", note.title)
        return ReviewOutcome(note=note, persisted=persisted, tool_status=tool_status)
