"""Resolution statistics and warning aggregation across a run."""

from __future__ import annotations

import logging
from collections import defaultdict

from pydantic import BaseModel, Field

from bindery.core.models.enums import QualityLabel, Tier, WarningCategory, WarningSeverity
from bindery.core.models.outcome import ResolutionOutcome
from bindery.core.utils.math import mean

logger = logging.getLogger(__name__)

MAX_EXAMPLES = 3

_TIER_CATEGORY: dict[Tier, tuple[WarningCategory, WarningSeverity]] = {
    Tier.EXACT_COMPONENT: (WarningCategory.COMPONENT_MAPPING, WarningSeverity.INFO),
    Tier.STRUCTURAL_COMPONENT: (WarningCategory.COMPONENT_MAPPING, WarningSeverity.INFO),
    Tier.TOKEN_CONSTRUCTION: (WarningCategory.TOKEN_RESOLUTION, WarningSeverity.WARNING),
    Tier.PRIMITIVE_FALLBACK: (WarningCategory.APPROXIMATION, WarningSeverity.WARNING),
    Tier.SYSTEM_DEFAULT: (WarningCategory.SYSTEM_DEFAULT, WarningSeverity.CRITICAL),
}

# Checked in order; the first keyword found in the message decides
_KEYWORD_CATEGORY: tuple[tuple[tuple[str, ...], WarningCategory], ...] = (
    (("approx",), WarningCategory.APPROXIMATION),
    (("variable", "token"), WarningCategory.TOKEN_RESOLUTION),
    (("default",), WarningCategory.SYSTEM_DEFAULT),
)


def categorize_warning(message: str, tier: Tier) -> tuple[WarningCategory, WarningSeverity]:
    """Category from message keywords, falling back to the tier's category."""
    category, severity = _TIER_CATEGORY[tier]
    lowered = message.lower()
    for keywords, keyword_category in _KEYWORD_CATEGORY:
        if any(k in lowered for k in keywords):
            return keyword_category, severity
    return category, severity


def quality_label(average_confidence: float) -> QualityLabel:
    if average_confidence > 0.9:
        return QualityLabel.EXCELLENT
    if average_confidence < 0.6:
        return QualityLabel.POOR
    if average_confidence < 0.75:
        return QualityLabel.FAIR
    return QualityLabel.GOOD


class DetailedWarning(BaseModel):
    """One warning attributed to a node."""

    model_config = {"frozen": True}

    node_id: str
    tier: Tier
    category: WarningCategory
    severity: WarningSeverity
    message: str


class CategorizedWarnings(BaseModel):
    """Warning count and example messages for one category."""

    category: WarningCategory
    count: int = 0
    examples: list[str] = Field(default_factory=list)


class TierStats(BaseModel):
    tier: Tier
    count: int = 0
    average_confidence: float = 0.0


class ResolutionStats(BaseModel):
    """Per-tier counts and confidences for a run."""

    total_nodes: int = 0
    tiers: list[TierStats] = Field(default_factory=list)
    average_confidence: float = 0.0
    lowest_confidence: float | None = None
    lowest_confidence_node: str | None = None

    def tier_count(self, tier: Tier) -> int:
        return next((t.count for t in self.tiers if t.tier == tier), 0)


class ResolutionSummary(BaseModel):
    """User-facing run summary."""

    model_config = {"frozen": True}

    quality: QualityLabel
    stats: ResolutionStats
    warnings: list[CategorizedWarnings] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


class ResolutionTracker:
    """Collects outcomes as nodes resolve and summarizes them on demand."""

    def __init__(self) -> None:
        # One entry per resolved node; ids need not be unique
        self._outcomes: list[ResolutionOutcome] = []
        self._warnings: list[DetailedWarning] = []

    def record(self, outcome: ResolutionOutcome) -> None:
        self._outcomes.append(outcome)
        for message in outcome.warnings:
            category, severity = categorize_warning(message, outcome.tier)
            self._warnings.append(
                DetailedWarning(
                    node_id=outcome.node_id,
                    tier=outcome.tier,
                    category=category,
                    severity=severity,
                    message=message,
                )
            )

    def reset(self) -> None:
        self._outcomes.clear()
        self._warnings.clear()

    @property
    def outcomes(self) -> list[ResolutionOutcome]:
        return list(self._outcomes)

    @property
    def warnings(self) -> list[DetailedWarning]:
        return list(self._warnings)

    def stats(self) -> ResolutionStats:
        outcomes = self.outcomes
        if not outcomes:
            return ResolutionStats()

        by_tier: dict[Tier, list[float]] = defaultdict(list)
        for outcome in outcomes:
            by_tier[outcome.tier].append(outcome.confidence)

        lowest = min(outcomes, key=lambda o: o.confidence)
        return ResolutionStats(
            total_nodes=len(outcomes),
            tiers=[
                TierStats(tier=tier, count=len(by_tier[tier]), average_confidence=mean(by_tier[tier]))
                for tier in Tier
                if by_tier[tier]
            ],
            average_confidence=mean(o.confidence for o in outcomes),
            lowest_confidence=lowest.confidence,
            lowest_confidence_node=lowest.node_id,
        )

    def categorized_warnings(self) -> list[CategorizedWarnings]:
        grouped: dict[WarningCategory, CategorizedWarnings] = {}
        for warning in self._warnings:
            entry = grouped.setdefault(
                warning.category, CategorizedWarnings(category=warning.category)
            )
            entry.count += 1
            if warning.message not in entry.examples and len(entry.examples) < MAX_EXAMPLES:
                entry.examples.append(warning.message)
        return [grouped[c] for c in WarningCategory if c in grouped]

    def recommendations(self, stats: ResolutionStats) -> list[str]:
        if stats.total_nodes == 0:
            return []

        recommendations = []
        if stats.tier_count(Tier.SYSTEM_DEFAULT) > 0:
            recommendations.append("Add design tokens (variables) to avoid using defaults")
        if stats.tier_count(Tier.PRIMITIVE_FALLBACK) > 5:
            recommendations.append("Consider adding more semantic variables")
        if stats.tier_count(Tier.EXACT_COMPONENT) / stats.total_nodes < 0.5:
            recommendations.append("Add components to library for better consistency")
        if stats.average_confidence < 0.6:
            recommendations.append("Review generated design - low confidence overall")
        return recommendations

    def summary(self) -> ResolutionSummary:
        stats = self.stats()
        return ResolutionSummary(
            quality=quality_label(stats.average_confidence),
            stats=stats,
            warnings=self.categorized_warnings(),
            recommendations=self.recommendations(stats),
        )

    def report(self) -> str:
        """Plain-text statistics block for logs."""
        stats = self.stats()
        lines = ["=== Resolution Statistics ===", f"Total nodes: {stats.total_nodes}"]
        for tier_stats in stats.tiers:
            share = tier_stats.count / stats.total_nodes
            lines.append(
                f"  Tier {int(tier_stats.tier)}: {tier_stats.count} nodes ({share:.0%}) - "
                f"avg confidence: {tier_stats.average_confidence:.0%}"
            )
        if stats.lowest_confidence is not None:
            lines.append(
                f"Lowest confidence: {stats.lowest_confidence:.0%} "
                f"(node {stats.lowest_confidence_node})"
            )
        return "\n".join(lines)
