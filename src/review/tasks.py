"""Task-line detection in note bodies.

A note body mixes prose with task lines.  Each line is classified on its own
(case-sensitive, matched line-by-line):

- ``* [x] ship it`` / ``- [x] ...`` / ``... @done(2021-09-01)``  done
- ``* [-] dropped``                                              cancelled
- ``* call Sam #waiting``                                        waiting
- ``* draft outline`` / ``- [ ] draft outline``                  open

Cancelled lines and anything that is not a task bullet count towards nothing.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum

# ---------------------------------------------------------------------------
# Regex patterns
# ---------------------------------------------------------------------------

_DONE_RE = re.compile(r"\[x\]|@done\(", re.IGNORECASE)
_CANCELLED_RE = re.compile(r"\[-\]")
# "* task" (NotePlan-style) or "- [ ] task" / "* [ ] task" (Markdown checkbox)
_TASK_RE = re.compile(r"^\s*(?:\*\s+|[-*]\s+\[\s?\]\s*)")
_WAITING_RE = re.compile(r"#waiting\b")


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------


class TaskState(str, Enum):
    OPEN = "open"
    WAITING = "waiting"
    DONE = "done"
    CANCELLED = "cancelled"


@dataclass
class TaskLine:
    line_no: int       # 1-based, relative to the body
    state: TaskState
    raw_line: str

    @property
    def is_closed(self) -> bool:
        return self.state in (TaskState.DONE, TaskState.CANCELLED)


@dataclass
class TaskCounts:
    open: int = 0
    waiting: int = 0
    done: int = 0

    def add(self, state: TaskState) -> None:
        if state is TaskState.OPEN:
            self.open += 1
        elif state is TaskState.WAITING:
            self.waiting += 1
        elif state is TaskState.DONE:
            self.done += 1


@dataclass
class TaskScan:
    items: list[TaskLine] = field(default_factory=list)

    @property
    def counts(self) -> TaskCounts:
        counts = TaskCounts()
        for item in self.items:
            counts.add(item.state)
        return counts


# ---------------------------------------------------------------------------
# Scanner
# ---------------------------------------------------------------------------


def classify_line(line: str) -> TaskState | None:
    """Return the task state of *line*, or ``None`` if it is not a task."""
    if _DONE_RE.search(line):
        return TaskState.DONE
    if _CANCELLED_RE.search(line):
        return TaskState.CANCELLED
    if _TASK_RE.match(line):
        return TaskState.WAITING if _WAITING_RE.search(line) else TaskState.OPEN
    return None


def scan_tasks(lines: list[str]) -> TaskScan:
    """Classify every line of a note body."""
    result = TaskScan()
    for line_no, line in enumerate(lines, start=1):
        state = classify_line(line)
        if state is not None:
            result.items.append(TaskLine(line_no, state, line))
    return result


def open_lines_mentioning(lines: list[str], tag: str) -> list[str]:
    """Lines that mention *tag* and are not done or cancelled.

    Used both for ``#waiting`` lists and for ``@person`` mention lists, so
    any line counts, not only task bullets.
    """
    result: list[str] = []
    for line in lines:
        if tag not in line:
            continue
        if classify_line(line) in (TaskState.DONE, TaskState.CANCELLED):
            continue
        result.append(line)
    return result
