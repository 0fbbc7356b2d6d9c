"""Review queue for plain-text project and goal notes."""

from review.fuzzy import best_match, similarity
from review.index import ReviewIndex
from review.note import Note
from review.parser import parse_metadata, parse_note
from review.persist import rewrite_reviewed_date
from review.schedule import InvalidInterval, ReviewInterval, compute_next_review
from review.session import ReviewSession, SessionState

__version__ = "0.1.0"

__all__ = [
    "Note",
    "ReviewIndex",
    "ReviewInterval",
    "ReviewSession",
    "SessionState",
    "InvalidInterval",
    "best_match",
    "compute_next_review",
    "parse_metadata",
    "parse_note",
    "rewrite_reviewed_date",
    "similarity",
]
