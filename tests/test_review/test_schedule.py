"""Unit tests for review.schedule."""

from datetime import date, timedelta

import pytest

from review.schedule import (
    InvalidInterval,
    ReviewInterval,
    add_business_days,
    compute_next_review,
    next_review_for,
)

WED = date(2021, 9, 1)
SAT = date(2021, 9, 4)

# ---------------------------------------------------------------------------
# ReviewInterval.parse
# ---------------------------------------------------------------------------


class TestReviewIntervalParse:
    def test_basic(self):
        assert ReviewInterval.parse("2w") == ReviewInterval(2, "w")

    def test_upper_case_is_lowered(self):
        assert ReviewInterval.parse("3M") == ReviewInterval(3, "m")

    def test_business_days(self):
        assert ReviewInterval.parse("10b") == ReviewInterval(10, "b")

    def test_str_round_trips(self):
        assert str(ReviewInterval.parse("1Q")) == "1q"

    def test_unknown_unit_raises(self):
        with pytest.raises(InvalidInterval):
            ReviewInterval.parse("3x")

    def test_malformed_raises(self):
        with pytest.raises(InvalidInterval):
            ReviewInterval.parse("weekly")

    def test_invalid_interval_is_value_error(self):
        with pytest.raises(ValueError):
            ReviewInterval.parse("")


# ---------------------------------------------------------------------------
# Calendar units
# ---------------------------------------------------------------------------


class TestCalendarUnits:
    @pytest.mark.parametrize(
        "interval, expected",
        [
            ("1d", date(2021, 1, 2)),
            ("2w", date(2021, 1, 15)),
            ("1m", date(2021, 1, 31)),
            ("1q", date(2021, 4, 2)),
            ("1y", date(2022, 1, 1)),
        ],
    )
    def test_fixed_lengths(self, interval, expected):
        assert compute_next_review(date(2021, 1, 1), ReviewInterval.parse(interval)) == expected

    def test_month_is_thirty_days_not_calendar_month(self):
        assert compute_next_review(date(2021, 2, 1), ReviewInterval(1, "m")) == date(2021, 3, 3)

    def test_unknown_unit_raises(self):
        with pytest.raises(InvalidInterval):
            compute_next_review(WED, ReviewInterval(1, "x"))


# ---------------------------------------------------------------------------
# Business days
# ---------------------------------------------------------------------------


class TestBusinessDays:
    def test_five_business_days_skip_one_weekend(self):
        assert compute_next_review(WED, ReviewInterval(5, "b")) == date(2021, 9, 8)

    def test_saturday_plus_one_is_monday(self):
        assert compute_next_review(SAT, ReviewInterval(1, "b")) == date(2021, 9, 6)

    def test_sunday_plus_one_is_monday(self):
        assert add_business_days(date(2021, 9, 5), 1) == date(2021, 9, 6)

    def test_friday_plus_one_is_monday(self):
        assert add_business_days(date(2021, 9, 3), 1) == date(2021, 9, 6)

    def test_thursday_plus_one_is_friday(self):
        assert add_business_days(date(2021, 9, 2), 1) == date(2021, 9, 3)

    def test_two_weeks(self):
        assert add_business_days(date(2021, 9, 3), 10) == date(2021, 9, 17)

    def test_zero_is_identity(self):
        assert add_business_days(SAT, 0) == SAT

    def test_negative_monday_minus_one_is_friday(self):
        assert add_business_days(date(2021, 9, 6), -1) == date(2021, 9, 3)

    def test_negative_from_saturday(self):
        assert add_business_days(SAT, -1) == date(2021, 9, 3)

    def test_negative_five_skip_one_weekend(self):
        assert add_business_days(date(2021, 9, 8), -5) == WED

    def test_never_lands_on_weekend(self):
        for offset in range(14):
            start = date(2021, 9, 1) + timedelta(days=offset)
            for n in list(range(1, 16)) + list(range(-15, 0)):
                assert add_business_days(start, n).weekday() < 5, (start, n)


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------


class TestMonotonic:
    @pytest.mark.parametrize("unit", ["b", "d", "w", "m", "q", "y"])
    def test_larger_count_is_never_earlier(self, unit):
        for offset in range(7):
            start = WED + timedelta(days=offset)
            dates = [compute_next_review(start, ReviewInterval(n, unit)) for n in range(0, 30)]
            assert dates == sorted(dates), (unit, start)


class TestNextReviewFor:
    def test_never_reviewed_is_due_today(self):
        today = date(2021, 9, 20)
        assert next_review_for(None, ReviewInterval(3, "m"), today) == today

    def test_reviewed_adds_interval(self):
        assert next_review_for(WED, ReviewInterval(2, "w"), date(2021, 9, 20)) == date(2021, 9, 15)
