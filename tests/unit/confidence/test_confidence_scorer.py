"""Tests for post-hoc confidence grading."""

from __future__ import annotations

import pytest

from bindery.core.confidence import (
    ConfidenceScorer,
    ambiguity_factor,
    complexity_factor,
    nesting_depth_factor,
    unknown_elements_factor,
    validation_factor,
)
from bindery.core.models.node import TargetNode
from bindery.core.validation.models import ValidationIssue, ValidationReport, ValidationSeverity


def _issue(severity: ValidationSeverity) -> ValidationIssue:
    return ValidationIssue(rule="r", message="m", location="root (box)", severity=severity)


def _chain(depth: int) -> TargetNode:
    node = TargetNode(id=f"n{depth}", role="container")
    for i in range(depth - 1, 0, -1):
        node = TargetNode(id=f"n{i}", role="container", children=[node])
    return node


class TestFactors:
    """Tests for individual factors."""

    def test_validation_factor(self):
        assert validation_factor(ValidationReport()) == 1.0
        warned = ValidationReport(warnings=[_issue(ValidationSeverity.WARNING)] * 2)
        assert validation_factor(warned) == pytest.approx(0.7)
        assert validation_factor(
            ValidationReport(errors=[_issue(ValidationSeverity.ERROR)])
        ) == pytest.approx(0.2)
        assert validation_factor(
            ValidationReport(errors=[_issue(ValidationSeverity.ERROR)] * 3)
        ) == pytest.approx(0.1)

    def test_ambiguity_factor(self):
        assert ambiguity_factor("a login form with email and password") == 1.0
        assert ambiguity_factor("a nice clean modern login form") == pytest.approx(0.7)
        assert ambiguity_factor("button") == pytest.approx(0.7)
        assert ambiguity_factor(
            "nice cool modern clean friendly professional something whatever good simple"
        ) == pytest.approx(0.2)

    def test_complexity_factor(self):
        tree = TargetNode(id="root", role="button")
        assert complexity_factor("button", tree) == pytest.approx(0.4)

    def test_unknown_elements_factor(self):
        tree = TargetNode(
            id="root",
            role="container",
            layout_primitive="stack",
            children=[TargetNode(id="w", role="widget", layout_primitive="masonry")],
        )
        assert unknown_elements_factor(tree) == pytest.approx(0.65)

    @pytest.mark.parametrize(("depth", "expected"), [(3, 1.0), (4, 0.95), (7, 0.85), (8, 0.7)])
    def test_nesting_depth_factor(self, depth, expected):
        assert nesting_depth_factor(_chain(depth)) == expected


class TestConfidenceScorer:
    """Tests for the combined score."""

    @pytest.fixture
    def tree(self) -> TargetNode:
        return TargetNode(id="root", role="button", text="Go")

    def test_single_word_request(self, tree: TargetNode):
        breakdown = ConfidenceScorer().score("button", tree, ValidationReport())

        assert breakdown.validation == 1.0
        assert breakdown.ambiguity == pytest.approx(0.7)
        assert breakdown.weighted_score == pytest.approx(0.79)
        assert breakdown.final_score == pytest.approx(0.79)
        assert breakdown.self_assessment is None

    def test_self_assessment_can_only_lower(self, tree: TargetNode):
        scorer = ConfidenceScorer()

        lowered = scorer.score("button", tree, ValidationReport(), self_assessment=0.5)
        higher = scorer.score("button", tree, ValidationReport(), self_assessment=0.95)

        assert lowered.final_score == 0.5
        assert higher.final_score == pytest.approx(0.79)

    def test_self_assessment_is_clamped(self, tree: TargetNode):
        breakdown = ConfidenceScorer().score("button", tree, ValidationReport(), self_assessment=1.7)

        assert breakdown.self_assessment == 1.0
        assert breakdown.final_score == pytest.approx(0.79)

    def test_trace(self, tree: TargetNode):
        breakdown = ConfidenceScorer().score("button", tree, ValidationReport())

        assert len(breakdown.trace) == 7
        assert breakdown.trace[0] == "Final Score: 0.79"
        assert breakdown.trace[1] == "Validation: 1.00 (30%)"
        assert breakdown.trace[2] == "Ambiguity: 0.70 (20%)"
        assert breakdown.trace[-1] == "Weighted Score: 0.79 (no self-assessment supplied)"

    def test_trace_with_self_assessment(self, tree: TargetNode):
        breakdown = ConfidenceScorer().score("button", tree, ValidationReport(), self_assessment=0.5)

        assert breakdown.trace[0] == "Final Score: 0.50"
        assert breakdown.trace[-1] == "Self-Assessment: 0.50 (weighted 0.79 - capped)"
