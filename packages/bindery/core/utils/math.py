"""Math utilities for confidence arithmetic."""

from __future__ import annotations

import math
from collections.abc import Iterable
from typing import TypeVar

Number = TypeVar("Number", int, float)


def clamp(value: Number, min_val: Number, max_val: Number) -> Number:
    """Clamp value to range [min_val, max_val].

    Args:
        value: Value to clamp
        min_val: Minimum allowed value
        max_val: Maximum allowed value

    Returns:
        Clamped value
    """
    return max(min_val, min(max_val, value))


def clamp01(value: float) -> float:
    """Clamp a confidence-like value to [0, 1]."""
    return clamp(float(value), 0.0, 1.0)


def mean(values: Iterable[float]) -> float:
    """Arithmetic mean; 0.0 for an empty iterable."""
    items = list(values)
    if not items:
        return 0.0
    return math.fsum(items) / len(items)
