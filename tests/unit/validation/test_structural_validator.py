"""Tests for structural validation of node trees."""

from __future__ import annotations

from bindery.core.models.node import TargetNode
from bindery.core.validation import BASIC_RULES, ValidationRule, ValidationSeverity, validate_tree


def _rules(report) -> list[str]:
    return [issue.rule for issue in [*report.errors, *report.warnings]]


class TestBasicRules:
    """Tests for each built-in rule."""

    def test_valid_form(self):
        form = TargetNode(
            id="login",
            role="form",
            children=[
                TargetNode(id="email", role="input", properties={"placeholder": "Email"}),
                TargetNode(id="submit", role="button", variant="primary", text="Sign in"),
            ],
        )

        report = validate_tree(form)

        assert report.valid
        assert report.warnings == []
        assert report.get_summary() == "No issues"

    def test_two_primary_buttons(self):
        root = TargetNode(
            id="root",
            role="container",
            children=[
                TargetNode(id="a", role="button", variant="primary", text="Save"),
                TargetNode(id="b", role="button", variant="Primary", text="Go"),
            ],
        )

        report = validate_tree(root)

        assert not report.valid
        assert report.errors[0].rule == "max-one-primary-button"
        assert report.errors[0].location == "root (container)"

    def test_form_needs_input_and_button(self):
        report = validate_tree(TargetNode(id="f", role="form"))

        assert _rules(report) == ["form-must-have-input", "form-must-have-button"]

    def test_nested_cards(self):
        root = TargetNode(id="outer", role="card", children=[TargetNode(id="inner", role="card")])

        report = validate_tree(root)

        assert report.valid
        assert _rules(report) == ["no-nested-cards"]

    def test_button_without_label(self):
        root = TargetNode(id="root", role="container", children=[TargetNode(id="b1", role="button")])

        report = validate_tree(root)

        assert report.warnings[0].rule == "button-must-have-label"
        assert report.warnings[0].location == "root > b1 (button)"

    def test_button_label_child(self):
        button = TargetNode(id="b", role="button", children=[TargetNode(id="l", role="label")])
        assert validate_tree(button).warnings == []

    def test_input_label_sibling(self):
        root = TargetNode(
            id="field",
            role="container",
            children=[TargetNode(id="l", role="label"), TargetNode(id="i", role="input")],
        )
        assert validate_tree(root).warnings == []

    def test_input_without_label(self):
        root = TargetNode(id="field", role="container", children=[TargetNode(id="i", role="input")])
        assert _rules(validate_tree(root)) == ["input-should-have-label"]

    def test_max_nesting_depth(self):
        node = TargetNode(id="n9", role="container")
        for i in range(8, 0, -1):
            node = TargetNode(id=f"n{i}", role="container", children=[node])

        report = validate_tree(node)

        assert _rules(report) == ["max-nesting-depth"]
        assert report.errors[0].location.endswith("n8 > n9 (container)")


class TestValidatorRobustness:
    def test_raising_rule_does_not_stop_others(self):
        def explode(node, parent, depth):
            raise RuntimeError("broken rule")

        broken = ValidationRule(
            id="broken",
            kind="property",
            severity=ValidationSeverity.ERROR,
            message="never reported",
            check=explode,
        )

        report = validate_tree(TargetNode(id="f", role="form"), [broken, *BASIC_RULES])

        assert "broken" not in _rules(report)
        assert "form-must-have-input" in _rules(report)

    def test_summary_lines(self):
        report = validate_tree(TargetNode(id="f", role="form"))

        lines = report.get_summary().splitlines()

        assert lines[0] == "Validation: 2 errors, 0 warnings"
        assert lines[1] == (
            "[ERROR] form-must-have-input at f (form): Forms must contain at least one input field."
        )
