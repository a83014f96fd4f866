"""Basic structural rules for target node trees.

Each rule looks at one node, its parent and its depth (root = 1) and
returns True when the node complies.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from bindery.core.models.node import TargetNode
from bindery.core.models.vocabulary import MAX_NESTING_DEPTH
from bindery.core.validation.models import ValidationSeverity

RuleCheck = Callable[[TargetNode, TargetNode | None, int], bool]


@dataclass(frozen=True)
class ValidationRule:
    id: str
    kind: str  # cardinality, cooccurrence, nesting, property
    severity: ValidationSeverity
    message: str
    check: RuleCheck


def is_primary_button(node: TargetNode) -> bool:
    if node.role != "button":
        return False
    variant = node.requested_properties().get("variant") or ""
    return variant.lower() == "primary"


def has_descendant(node: TargetNode, predicate: Callable[[TargetNode], bool]) -> bool:
    return any(predicate(child) or has_descendant(child, predicate) for child in node.children)


def has_label(node: TargetNode) -> bool:
    props = {k.lower(): v for k, v in node.properties.items()}
    if node.text or props.get("label") or props.get("text"):
        return True
    return any(child.role == "label" for child in node.children)


def _max_one_primary_button(node: TargetNode, parent: TargetNode | None, depth: int) -> bool:
    return sum(1 for child in node.children if is_primary_button(child)) <= 1


def _form_has_input(node: TargetNode, parent: TargetNode | None, depth: int) -> bool:
    if node.role != "form":
        return True
    return has_descendant(node, lambda n: n.role == "input")


def _form_has_button(node: TargetNode, parent: TargetNode | None, depth: int) -> bool:
    if node.role != "form":
        return True
    return has_descendant(node, lambda n: n.role == "button")


def _no_nested_cards(node: TargetNode, parent: TargetNode | None, depth: int) -> bool:
    if node.role != "card":
        return True
    return not any(child.role == "card" for child in node.children)


def _button_has_label(node: TargetNode, parent: TargetNode | None, depth: int) -> bool:
    if node.role != "button":
        return True
    return has_label(node)


def _input_has_label(node: TargetNode, parent: TargetNode | None, depth: int) -> bool:
    if node.role != "input":
        return True
    props = {k.lower(): v for k, v in node.properties.items()}
    if props.get("placeholder") or props.get("label"):
        return True
    return parent is not None and any(child.role == "label" for child in parent.children)


def _max_nesting_depth(node: TargetNode, parent: TargetNode | None, depth: int) -> bool:
    return depth <= MAX_NESTING_DEPTH


BASIC_RULES: list[ValidationRule] = [
    ValidationRule(
        id="max-one-primary-button",
        kind="cardinality",
        severity=ValidationSeverity.ERROR,
        message=(
            "Cannot have more than 1 primary button in the same container. "
            "Use secondary or ghost buttons for additional actions."
        ),
        check=_max_one_primary_button,
    ),
    ValidationRule(
        id="form-must-have-input",
        kind="cooccurrence",
        severity=ValidationSeverity.ERROR,
        message="Forms must contain at least one input field.",
        check=_form_has_input,
    ),
    ValidationRule(
        id="form-must-have-button",
        kind="cooccurrence",
        severity=ValidationSeverity.ERROR,
        message="Forms must have a submit button.",
        check=_form_has_button,
    ),
    ValidationRule(
        id="no-nested-cards",
        kind="nesting",
        severity=ValidationSeverity.WARNING,
        message="Cards should not contain other cards. Consider using sections or containers instead.",
        check=_no_nested_cards,
    ),
    ValidationRule(
        id="button-must-have-label",
        kind="property",
        severity=ValidationSeverity.WARNING,
        message="Buttons should have a label for accessibility.",
        check=_button_has_label,
    ),
    ValidationRule(
        id="input-should-have-label",
        kind="property",
        severity=ValidationSeverity.WARNING,
        message="Input fields should have labels for accessibility.",
        check=_input_has_label,
    ),
    ValidationRule(
        id="max-nesting-depth",
        kind="nesting",
        severity=ValidationSeverity.ERROR,
        message=f"Nesting deeper than {MAX_NESTING_DEPTH} levels.",
        check=_max_nesting_depth,
    ),
]
