"""Title, metadata-line and task-body parser for project/goal notes.

A note file looks like::

    # Website Refresh
    #project #active @start(2021-08-01) @due(2021-12-01) @review(2w) @reviewed(2021-09-01)
    * draft sitemap
    * chase copy from Sam #waiting
    * [x] pick a theme

Every metadata field is optional and extracted independently of the others.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

from review.lifecycle import classify, is_due
from review.note import Note
from review.schedule import InvalidInterval, ReviewInterval, next_review_for
from review.tasks import scan_tasks

logger = logging.getLogger(__name__)

_DATE = r"([0-9\-./]{6,10})"

_START_RE = re.compile(rf"@start\({_DATE}\)")
# "@end(...)" is accepted as an alternate spelling of "@due(...)"
_DUE_RE = re.compile(rf"@(?:due|end)\({_DATE}\)")
_COMPLETED_RE = re.compile(rf"@(?:completed|complete|finished|finish)\({_DATE}\)")
_REVIEWED_RE = re.compile(rf"@reviewed\({_DATE}\)")
_INTERVAL_RE = re.compile(r"@review\(([0-9]+[bdwmqy])\)", re.IGNORECASE)
_ANY_INTERVAL_RE = re.compile(r"@review\(([^)]*)\)", re.IGNORECASE)
_FLAG_TAG_RE = re.compile(r"(?<![\w#])#(active|archive|project|goal|cancelled|someday)")

_DATE_TEXT_RE = re.compile(r"[0-9]+(?:[-./][0-9]+){0,2}")
_DATE_SEP_RE = re.compile(r"[-./]")


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------


@dataclass
class Metadata:
    """Fields extracted from a note's second line."""

    raw: str
    start_date: date | None = None
    due_date: date | None = None
    completed_date: date | None = None
    last_reviewed_date: date | None = None
    review_interval: ReviewInterval | None = None
    tags: set[str] = field(default_factory=set)


@dataclass
class NoteText:
    title_line: str
    metadata_line: str
    body: list[str]


# ---------------------------------------------------------------------------
# Field parsers
# ---------------------------------------------------------------------------


def parse_title(line: str) -> str:
    """Strip heading markers and surrounding whitespace from a title line."""
    return line.strip().lstrip("#").strip()


def parse_date(text: str) -> date | None:
    """Parse a loosely formatted numeric date, returning ``None`` on failure.

    A four-digit last group is read day-first (``01.09.2021``); every other
    form is year-first (``2021-09-01``, ``20210901``, ``21-09-01``), and
    two-digit years are 20yy, so ``01.09.21`` is 2001-09-21.
    """
    text = text.strip()
    if not 6 <= len(text) <= 10 or not _DATE_TEXT_RE.fullmatch(text):
        return None
    groups = _DATE_SEP_RE.split(text)
    try:
        if len(groups) == 1:
            if len(text) != 8:
                return None
            return date(int(text[:4]), int(text[4:6]), int(text[6:]))
        if len(groups) != 3:
            return None
        if len(groups[2]) == 4 and len(groups[0]) != 4:
            day_s, month_s, year_s = groups
        else:
            year_s, month_s, day_s = groups
        if len(year_s) == 2:
            year = 2000 + int(year_s)
        elif len(year_s) == 4:
            year = int(year_s)
        else:
            return None
        return date(year, int(month_s), int(day_s))
    except ValueError:
        return None


def _find_date(pattern: re.Pattern[str], line: str) -> date | None:
    # a repeated tag: the last occurrence wins
    found = pattern.findall(line)
    return parse_date(found[-1]) if found else None


def parse_interval(line: str) -> ReviewInterval | None:
    """Return the ``@review(...)`` interval of a metadata line, if valid."""
    m = _INTERVAL_RE.search(line)
    if m:
        return ReviewInterval.parse(m.group(1))
    bad = _ANY_INTERVAL_RE.search(line)
    if bad:
        logger.warning("Ignoring unrecognised review interval @review(%s)", bad.group(1))
    return None


def parse_metadata(line: str) -> Metadata:
    """Extract every known field from a metadata line; absent ones stay unset."""
    return Metadata(
        raw=line,
        start_date=_find_date(_START_RE, line),
        due_date=_find_date(_DUE_RE, line),
        completed_date=_find_date(_COMPLETED_RE, line),
        last_reviewed_date=_find_date(_REVIEWED_RE, line),
        review_interval=parse_interval(line),
        tags={m.group(1) for m in _FLAG_TAG_RE.finditer(line)},
    )


def split_note(content: str) -> NoteText | None:
    """Split raw text into title, metadata and body, or ``None`` if too short."""
    lines = content.splitlines()
    if len(lines) < 2:
        return None
    return NoteText(title_line=lines[0], metadata_line=lines[1], body=lines[2:])


# ---------------------------------------------------------------------------
# Note assembly
# ---------------------------------------------------------------------------


def build_note(content: str, path: Path, note_id: int, today: date) -> Note:
    """Turn the raw text of *path* into a fully classified :class:`Note`."""
    parts = split_note(content)
    if parts is None:
        logger.warning("%s has fewer than two lines; listing it as inactive", path.name)
        return Note(id=note_id, filename=path, title=path.stem, is_placeholder=True)

    meta = parse_metadata(parts.metadata_line)
    status = classify(meta)

    next_review: date | None = None
    if status.is_active and meta.review_interval is not None:
        try:
            next_review = next_review_for(meta.last_reviewed_date, meta.review_interval, today)
        except InvalidInterval as exc:
            logger.warning("%s: %s", path.name, exc)

    counts = scan_tasks(parts.body).counts

    return Note(
        id=note_id,
        filename=path,
        title=parse_title(parts.title_line) or path.stem,
        metadata_raw=parts.metadata_line,
        start_date=meta.start_date,
        due_date=meta.due_date,
        completed_date=meta.completed_date,
        last_reviewed_date=meta.last_reviewed_date,
        review_interval=meta.review_interval,
        next_review_date=next_review,
        is_active=status.is_active,
        is_completed=status.is_completed,
        is_cancelled=status.is_cancelled,
        is_archived=status.is_archived,
        is_project=status.is_project,
        is_goal=status.is_goal,
        to_review=is_due(status.is_active, next_review, today),
        open_count=counts.open,
        waiting_count=counts.waiting,
        done_count=counts.done,
        body=parts.body,
    )


def parse_note(path: Path, note_id: int, today: date) -> Note:
    """Read a note file and return a fully-populated :class:`Note`."""
    content = path.read_text(encoding="utf-8")
    return build_note(content, path, note_id, today)
