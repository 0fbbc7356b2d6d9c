"""ReviewIndex: in-memory arena of notes plus the review work queues."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from pathlib import Path

from review.fuzzy import best_match
from review.note import Note
from review.parser import parse_note
from review.schedule import InvalidInterval, next_review_for
from review.tasks import open_lines_mentioning

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = (".txt", ".md")


@dataclass
class ActiveTotals:
    active_notes: int = 0
    open: int = 0
    waiting: int = 0
    done: int = 0
    inactive_notes: int = 0


class ReviewIndex:
    """Scans a notes directory and builds the review queues.

    Queues hold note ids; :attr:`notes` is the only owner of note state.
    """

    def __init__(
        self,
        notes_dir: Path,
        *,
        extensions: Sequence[str] = DEFAULT_EXTENSIONS,
        today: date | None = None,
    ) -> None:
        self.notes_dir = Path(notes_dir)
        self.extensions = tuple(e if e.startswith(".") else f".{e}" for e in extensions)
        self.today = today or date.today()
        self.notes: dict[int, Note] = {}
        self.due: list[int] = []
        self.active: list[int] = []
        self.completed: list[int] = []
        self.cancelled: list[int] = []
        self.inactive: list[int] = []

    # ------------------------------------------------------------------
    # Build / refresh
    # ------------------------------------------------------------------

    def build(self, today: date | None = None) -> None:
        """(Re-)scan the notes directory and rebuild every queue."""
        if today is not None:
            self.today = today
        self.notes = {}
        for path in sorted(self._note_paths()):
            note_id = len(self.notes)
            try:
                note = parse_note(path, note_id, self.today)
            except (OSError, UnicodeDecodeError) as exc:
                logger.error("Could not read %s: %s", path, exc)
                continue
            except Exception:  # noqa: BLE001
                # Skip the file rather than abandoning the whole scan
                logger.exception("Unexpected error parsing %s; skipping it", path)
                continue
            self.notes[note_id] = note
        self._build_queues()

    def _note_paths(self) -> list[Path]:
        if not self.notes_dir.is_dir():
            logger.warning("Notes directory %s does not exist", self.notes_dir)
            return []
        return [
            p for p in self.notes_dir.iterdir() if p.is_file() and p.suffix.lower() in self.extensions
        ]

    def _build_queues(self) -> None:
        self.due, self.active = [], []
        self.completed, self.cancelled, self.inactive = [], [], []
        for note_id, note in self.notes.items():
            if note.is_active:
                (self.due if note.to_review else self.active).append(note_id)
            else:
                self.inactive.append(note_id)
            if note.is_completed:
                self.completed.append(note_id)
            if note.is_cancelled:
                self.cancelled.append(note_id)

        self.due.sort(key=lambda i: self.notes[i].next_review_date or self.today)
        self.active.sort(key=lambda i: self.notes[i].title)

    # ------------------------------------------------------------------
    # Query helpers
    # ------------------------------------------------------------------

    def get(self, note_id: int) -> Note:
        return self.notes[note_id]

    def titles(self) -> list[str]:
        return [n.title for n in self.notes.values()]

    def ordered_all(self) -> list[int]:
        """Every note id by due date; undated notes sort as if due today."""
        return sorted(self.notes, key=lambda i: self.notes[i].due_date or self.today)

    def find(self, query: str) -> Note | None:
        """Return the note whose title best matches *query*."""
        title = best_match(query, self.titles())
        if title is None:
            return None
        return next(n for n in self.notes.values() if n.title == title)

    def projects(self) -> list[Note]:
        return sorted((n for n in self.notes.values() if n.is_project), key=lambda n: n.title)

    def goals(self) -> list[Note]:
        return sorted((n for n in self.notes.values() if n.is_goal), key=lambda n: n.title)

    def totals(self) -> ActiveTotals:
        result = ActiveTotals(inactive_notes=len(self.inactive))
        for note_id in self.due + self.active:
            note = self.notes[note_id]
            result.active_notes += 1
            result.open += note.open_count
            result.waiting += note.waiting_count
            result.done += note.done_count
        return result

    def waiting_tasks(self) -> list[tuple[Note, list[str]]]:
        """Open ``#waiting`` lines of every due, then other active, note."""
        return self.mentions("#waiting")

    def mentions(self, tag: str) -> list[tuple[Note, list[str]]]:
        """Open lines mentioning *tag* in every due, then other active, note."""
        result: list[tuple[Note, list[str]]] = []
        for note_id in self.due + self.active:
            note = self.notes[note_id]
            lines = open_lines_mentioning(note.body, tag)
            if lines:
                result.append((note, lines))
        return result

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def mark_reviewed(self, note_id: int, today: date | None = None) -> Note:
        """Record a review of *note_id* and move it from the due queue to active."""
        today = today or self.today
        note = self.notes[note_id]
        note.last_reviewed_date = today
        if note.is_active and note.review_interval is not None:
            try:
                note.next_review_date = next_review_for(today, note.review_interval, today)
            except InvalidInterval as exc:
                logger.warning("%s: %s", note.filename, exc)
                note.next_review_date = None
        note.to_review = False

        if note_id in self.due:
            self.due.remove(note_id)
        if note.is_active and note_id not in self.active:
            self.active.append(note_id)
        return note
