"""Levenshtein-based string similarity and best-match search.

Used by the property mapper for fuzzy key matching and by the token
resolver for name lookup.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

DEFAULT_MATCH_THRESHOLD = 0.6


@dataclass(frozen=True)
class FuzzyMatch:
    """A candidate string with its similarity to the target."""

    value: str
    score: float


def levenshtein_distance(a: str, b: str) -> int:
    """Compute the edit distance between two strings.

    Args:
        a: First string
        b: Second string

    Returns:
        Minimum number of single-character insertions, deletions or
        substitutions turning ``a`` into ``b``.
    """
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            cost = 0 if ca == cb else 1
            current.append(
                min(
                    previous[j] + 1,
                    current[j - 1] + 1,
                    previous[j - 1] + cost,
                )
            )
        previous = current
    return previous[-1]


def string_similarity(a: str, b: str) -> float:
    """Normalized case-insensitive similarity in [0, 1].

    Identical strings score 1.0; if either string is empty the score is 0.0.
    """
    left = a.lower()
    right = b.lower()
    if left == right:
        return 1.0
    if not left or not right:
        return 0.0

    max_len = max(len(left), len(right))
    return 1.0 - levenshtein_distance(left, right) / max_len


def find_best_match(
    target: str,
    candidates: Iterable[str],
    threshold: float = DEFAULT_MATCH_THRESHOLD,
) -> FuzzyMatch | None:
    """Find the most similar candidate at or above ``threshold``.

    Ties keep the earliest candidate.

    Args:
        target: String to match
        candidates: Strings to compare against
        threshold: Minimum similarity required

    Returns:
        Best match, or None if no candidate reaches the threshold
    """
    best: FuzzyMatch | None = None
    for candidate in candidates:
        score = string_similarity(target, candidate)
        if score >= threshold and (best is None or score > best.score):
            best = FuzzyMatch(value=candidate, score=score)
    return best
