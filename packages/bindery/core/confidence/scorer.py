"""Post-hoc confidence grading of a generated node tree.

Five weighted factors compare the tree against the free-text request that
produced it. An externally supplied self-assessment can only lower the
result.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict, Field

from bindery.core.models.node import TargetNode
from bindery.core.models.vocabulary import APPROVED_LAYOUT_PRIMITIVES, APPROVED_SEMANTIC_ROLES
from bindery.core.utils.math import clamp01
from bindery.core.validation.models import ValidationReport

logger = logging.getLogger(__name__)

WEIGHTS: dict[str, float] = {
    "validation": 0.30,
    "ambiguity": 0.20,
    "complexity_match": 0.25,
    "unknown_elements": 0.15,
    "nesting_depth": 0.10,
}

VAGUE_TERMS = (
    "nice",
    "cool",
    "modern",
    "clean",
    "friendly",
    "professional",
    "something",
    "whatever",
    "good",
    "simple",
)


class ConfidenceBreakdown(BaseModel):
    """Factor scores, the final score and a readable trace."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    validation: float = Field(ge=0.0, le=1.0)
    ambiguity: float = Field(ge=0.0, le=1.0)
    complexity_match: float = Field(ge=0.0, le=1.0)
    unknown_elements: float = Field(ge=0.0, le=1.0)
    nesting_depth: float = Field(ge=0.0, le=1.0)
    weighted_score: float = Field(ge=0.0, le=1.0)
    self_assessment: float | None = Field(default=None, ge=0.0, le=1.0)
    final_score: float = Field(ge=0.0, le=1.0)
    trace: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Factors
# ---------------------------------------------------------------------------


def validation_factor(report: ValidationReport) -> float:
    if report.valid:
        if not report.warnings:
            return 1.0
        return max(0.5, 0.8 - 0.05 * len(report.warnings))
    return max(0.1, 0.3 - 0.1 * len(report.errors))


def _word_count(text: str) -> int:
    return len(text.split(" "))


def ambiguity_factor(request_text: str) -> float:
    lowered = request_text.lower()
    score = 1.0 - 0.1 * sum(1 for term in VAGUE_TERMS if term in lowered)
    if _word_count(request_text) < 3:
        score -= 0.3
    return clamp01(max(0.2, score))


def complexity_factor(request_text: str, tree: TargetNode) -> float:
    """Ratio of the smaller to the larger of request and tree complexity."""
    intent = min(10.0, _word_count(request_text) / 5)
    structure = min(10.0, tree.count() / 2)
    if intent == 0 or structure == 0:
        return 0.5
    return min(intent, structure) / max(intent, structure)


def unknown_elements_factor(tree: TargetNode) -> float:
    unknown_roles = 0
    unknown_primitives = 0
    for node in tree.walk():
        if node.role and node.role not in APPROVED_SEMANTIC_ROLES:
            unknown_roles += 1
        if node.layout_primitive and node.layout_primitive not in APPROVED_LAYOUT_PRIMITIVES:
            unknown_primitives += 1
    return max(0.0, 1.0 - 0.2 * unknown_roles - 0.15 * unknown_primitives)


def nesting_depth_factor(tree: TargetNode) -> float:
    depth = tree.depth()
    if depth <= 3:
        return 1.0
    if depth <= 5:
        return 0.95
    if depth <= 7:
        return 0.85
    return 0.7


# ---------------------------------------------------------------------------
# Scorer
# ---------------------------------------------------------------------------


class ConfidenceScorer:
    """Grades a whole generated tree against its originating request."""

    def __init__(self, weights: dict[str, float] | None = None) -> None:
        self.weights = weights or WEIGHTS

    def score(
        self,
        request_text: str,
        tree: TargetNode,
        validation_report: ValidationReport,
        self_assessment: float | None = None,
    ) -> ConfidenceBreakdown:
        factors = {
            "validation": validation_factor(validation_report),
            "ambiguity": ambiguity_factor(request_text),
            "complexity_match": complexity_factor(request_text, tree),
            "unknown_elements": unknown_elements_factor(tree),
            "nesting_depth": nesting_depth_factor(tree),
        }
        weighted = clamp01(sum(factors[name] * weight for name, weight in self.weights.items()))

        assessment = clamp01(self_assessment) if self_assessment is not None else None
        final = min(weighted, assessment) if assessment is not None else weighted

        logger.debug(f"Confidence for {tree.id}: weighted={weighted:.2f} final={final:.2f}")
        return ConfidenceBreakdown(
            **factors,
            weighted_score=weighted,
            self_assessment=assessment,
            final_score=final,
            trace=self._trace(factors, weighted, assessment, final),
        )

    def _trace(
        self,
        factors: dict[str, float],
        weighted: float,
        assessment: float | None,
        final: float,
    ) -> list[str]:
        labels = {
            "validation": "Validation",
            "ambiguity": "Ambiguity",
            "complexity_match": "Complexity Match",
            "unknown_elements": "Unknown Elements",
            "nesting_depth": "Nesting Depth",
        }
        lines = [f"Final Score: {final:.2f}"]
        lines.extend(
            f"{labels[name]}: {factors[name]:.2f} ({self.weights[name]:.0%})" for name in labels
        )
        if assessment is None:
            lines.append(f"Weighted Score: {weighted:.2f} (no self-assessment supplied)")
        else:
            capped = " - capped" if assessment < weighted else ""
            lines.append(
                f"Self-Assessment: {assessment:.2f} (weighted {weighted:.2f}{capped})"
            )
        return lines
