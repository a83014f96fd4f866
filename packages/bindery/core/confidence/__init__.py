"""Confidence grading for generated node trees."""

from bindery.core.confidence.scorer import (
    VAGUE_TERMS,
    WEIGHTS,
    ConfidenceBreakdown,
    ConfidenceScorer,
    ambiguity_factor,
    complexity_factor,
    nesting_depth_factor,
    unknown_elements_factor,
    validation_factor,
)

__all__ = [
    "VAGUE_TERMS",
    "WEIGHTS",
    "ConfidenceBreakdown",
    "ConfidenceScorer",
    "ambiguity_factor",
    "complexity_factor",
    "nesting_depth_factor",
    "unknown_elements_factor",
    "validation_factor",
]
