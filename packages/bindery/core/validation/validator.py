"""Runs validation rules over a target node tree."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from bindery.core.models.node import TargetNode
from bindery.core.validation.models import ValidationIssue, ValidationReport
from bindery.core.validation.rules import BASIC_RULES, ValidationRule

logger = logging.getLogger(__name__)


def validate_tree(
    root: TargetNode, rules: Sequence[ValidationRule] = BASIC_RULES
) -> ValidationReport:
    """Apply every rule to every node.

    A rule that raises is logged and skipped for that node; the remaining
    rules still run.
    """
    report = ValidationReport()

    def visit(node: TargetNode, path: str, parent: TargetNode | None, depth: int) -> None:
        for rule in rules:
            try:
                ok = rule.check(node, parent, depth)
            except Exception:
                logger.warning(f"Rule {rule.id} failed on node {node.id}", exc_info=True)
                continue
            if not ok:
                report.add(
                    ValidationIssue(
                        rule=rule.id,
                        message=rule.message,
                        location=f"{path} ({node.role})",
                        severity=rule.severity,
                    )
                )
        for child in node.children:
            visit(child, f"{path} > {child.id}", node, depth + 1)

    visit(root, root.id, None, 1)
    logger.debug(
        f"Validated {root.id}: {len(report.errors)} errors, {len(report.warnings)} warnings"
    )
    return report
