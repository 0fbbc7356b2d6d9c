"""Unit tests for review.lifecycle."""

from datetime import date
from pathlib import Path

from review.lifecycle import classify, is_due
from review.parser import build_note, parse_metadata

TODAY = date(2021, 9, 20)


class TestClassify:
    def test_review_interval_alone_makes_active(self):
        status = classify(parse_metadata("@review(2w)"))
        assert status.is_active is True
        assert status.is_completed is False
        assert status.is_cancelled is False

    def test_active_tag_alone_makes_active(self):
        assert classify(parse_metadata("#active")).is_active is True

    def test_no_tag_no_interval_is_inactive(self):
        assert classify(parse_metadata("#project @due(2021-10-01)")).is_active is False

    def test_completed_overrides_active(self):
        status = classify(parse_metadata("#active @review(1w) @completed(2020-01-01)"))
        assert status.is_completed is True
        assert status.is_active is False

    def test_cancelled_overrides_active(self):
        status = classify(parse_metadata("#active #cancelled"))
        assert status.is_cancelled is True
        assert status.is_active is False

    def test_someday_counts_as_cancelled(self):
        assert classify(parse_metadata("@review(1m) #someday")).is_cancelled is True

    def test_archive_overrides_interval(self):
        status = classify(parse_metadata("#archive @review(1w)"))
        assert status.is_archived is True
        assert status.is_active is False

    def test_completed_and_cancelled_are_independent(self):
        status = classify(parse_metadata("#cancelled @completed(2021-01-01)"))
        assert status.is_completed is True
        assert status.is_cancelled is True

    def test_project_and_goal_not_exclusive(self):
        status = classify(parse_metadata("#project #goal #active"))
        assert status.is_project is True
        assert status.is_goal is True
        assert status.is_active is True


class TestCompletedNote:
    def test_completed_note_is_never_due(self):
        note = build_note(
            "# Done\n#active @review(1w) @reviewed(2020-01-01) @completed(2020-01-01)\n",
            Path("done.txt"),
            0,
            TODAY,
        )
        assert note.is_active is False
        assert note.to_review is False
        assert note.next_review_date is None
        assert note.display_next_review is None


class TestIsDue:
    def test_due_today(self):
        assert is_due(True, TODAY, TODAY) is True

    def test_overdue(self):
        assert is_due(True, date(2021, 9, 1), TODAY) is True

    def test_future(self):
        assert is_due(True, date(2021, 9, 21), TODAY) is False

    def test_inactive_never_due(self):
        assert is_due(False, date(2021, 9, 1), TODAY) is False

    def test_no_date_never_due(self):
        assert is_due(True, None, TODAY) is False
