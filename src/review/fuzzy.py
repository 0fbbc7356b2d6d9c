"""Approximate title matching by bigram overlap (Dice coefficient)."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable

logger = logging.getLogger(__name__)


def bigrams(text: str) -> list[str]:
    """Adjacent lower-cased character pairs of *text*, skipping any with a space."""
    lowered = text.lower()
    pairs = (lowered[i : i + 2] for i in range(len(lowered) - 1))
    return [p for p in pairs if " " not in p]


def similarity(a: str, b: str) -> float:
    """Dice coefficient of the bigram multisets of *a* and *b* (0.0 .. 1.0)."""
    grams_a = bigrams(a)
    grams_b = bigrams(b)
    total = len(grams_a) + len(grams_b)
    if total == 0:
        return 0.0
    shared = sum((Counter(grams_a) & Counter(grams_b)).values())
    return 2.0 * shared / total


def rank(query: str, candidates: Iterable[str]) -> list[tuple[str, float]]:
    """Score every candidate against *query*, best first (stable on ties)."""
    scored = [(c, similarity(query, c)) for c in candidates]
    return sorted(scored, key=lambda pair: pair[1], reverse=True)


def best_match(query: str, candidates: Iterable[str]) -> str | None:
    """Return the highest-scoring candidate, or ``None`` when nothing overlaps.

    Ties resolve to the candidate seen first.
    """
    if not query.strip():
        logger.warning("Empty search text; no title can be matched meaningfully")
    best: str | None = None
    best_score = 0.0
    for candidate in candidates:
        score = similarity(query, candidate)
        if score > best_score:
            best, best_score = candidate, score
    return best
