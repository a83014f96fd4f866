"""Shared utilities for Bindery."""

from bindery.core.utils.color import delta_e, is_hex_color, normalize_hex
from bindery.core.utils.math import clamp, clamp01, mean
from bindery.core.utils.similarity import (
    FuzzyMatch,
    find_best_match,
    levenshtein_distance,
    string_similarity,
)

__all__ = [
    "FuzzyMatch",
    "clamp",
    "clamp01",
    "delta_e",
    "find_best_match",
    "is_hex_color",
    "levenshtein_distance",
    "mean",
    "normalize_hex",
    "string_similarity",
]
