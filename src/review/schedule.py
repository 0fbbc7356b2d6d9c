"""Review-interval parsing and next-review date arithmetic.

Intervals are written ``<count><unit>`` inside a note's ``@review(...)`` tag:

- ``b`` business days (Monday to Friday, public holidays ignored)
- ``d`` days
- ``w`` weeks (7 days)
- ``m`` months (30 days)
- ``q`` quarters (91 days)
- ``y`` years (365 days)

The month, quarter and year lengths are fixed approximations, not calendar
arithmetic.  Existing due dates were planned against these constants.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, timedelta

# Calendar units and their length in days
UNIT_DAYS: dict[str, int] = {"d": 1, "w": 7, "m": 30, "q": 91, "y": 365}
BUSINESS_DAY = "b"
UNITS = frozenset(UNIT_DAYS) | {BUSINESS_DAY}

_INTERVAL_RE = re.compile(r"^\s*(-?[0-9]+)\s*([A-Za-z])\s*$")


class InvalidInterval(ValueError):
    """Raised when an interval expression or unit cannot be scheduled."""


@dataclass(frozen=True)
class ReviewInterval:
    """A review cadence such as ``2w`` or ``10b``."""

    count: int
    unit: str

    @classmethod
    def parse(cls, text: str) -> "ReviewInterval":
        """Parse ``"2w"``-style text (case-insensitive) into an interval."""
        m = _INTERVAL_RE.match(text)
        if not m:
            raise InvalidInterval(f"Malformed review interval {text!r}")
        unit = m.group(2).lower()
        if unit not in UNITS:
            raise InvalidInterval(f"Unknown review interval unit {unit!r} in {text!r}")
        return cls(int(m.group(1)), unit)

    def __str__(self) -> str:
        return f"{self.count}{self.unit}"


def add_business_days(reference: date, count: int) -> date:
    """Return *reference* moved by *count* business days (Mon-Fri).

    Works for negative counts as well.  A weekend *reference* is first moved
    to Friday when counting forwards, or to Monday when counting backwards,
    so Saturday + 1 business day is the following Monday.
    """
    if count == 0:
        return reference

    weekday = reference.weekday()  # Monday=0 .. Sunday=6
    if count > 0:
        if weekday > 4:
            reference -= timedelta(days=weekday - 4)
            weekday = 4
        offset = weekday
    else:
        if weekday > 4:
            reference += timedelta(days=7 - weekday)
            weekday = 0
        # mirror image: Friday=0 .. Monday=4
        offset = 4 - weekday

    steps = abs(count)
    days = steps + ((steps + offset) // 5) * 2
    return reference + timedelta(days=days if count > 0 else -days)


def compute_next_review(reference: date, interval: ReviewInterval) -> date:
    """Return the date *interval* after *reference*."""
    if interval.unit == BUSINESS_DAY:
        return add_business_days(reference, interval.count)
    try:
        per_unit = UNIT_DAYS[interval.unit]
    except KeyError:
        raise InvalidInterval(
            f"Cannot schedule from {reference.isoformat()} by {interval}: unknown unit"
        ) from None
    return reference + timedelta(days=interval.count * per_unit)


def next_review_for(
    last_reviewed: date | None,
    interval: ReviewInterval,
    today: date,
) -> date:
    """Next review date for a note; never-reviewed notes are due *today*."""
    if last_reviewed is None:
        return today
    return compute_next_review(last_reviewed, interval)
