"""Tiered resolution of target nodes into construction instructions."""

from bindery.core.resolution.conflicts import (
    MONITORED_PROPERTIES,
    Preset,
    apply_conflicts,
    collect_sources,
    detect_conflict,
    resolve_all_conflicts,
    resolve_conflict,
)
from bindery.core.resolution.context import ResolutionContext
from bindery.core.resolution.engine import FALLBACK_REASONS, ResolutionEngine
from bindery.core.resolution.tracker import (
    CategorizedWarnings,
    DetailedWarning,
    ResolutionStats,
    ResolutionSummary,
    ResolutionTracker,
    TierStats,
)

__all__ = [
    "FALLBACK_REASONS",
    "MONITORED_PROPERTIES",
    "CategorizedWarnings",
    "DetailedWarning",
    "Preset",
    "ResolutionContext",
    "ResolutionEngine",
    "ResolutionStats",
    "ResolutionSummary",
    "ResolutionTracker",
    "TierStats",
    "apply_conflicts",
    "collect_sources",
    "detect_conflict",
    "resolve_all_conflicts",
    "resolve_conflict",
]
