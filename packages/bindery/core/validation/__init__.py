"""Structural validation of target node trees."""

from bindery.core.validation.models import ValidationIssue, ValidationReport, ValidationSeverity
from bindery.core.validation.rules import BASIC_RULES, ValidationRule
from bindery.core.validation.validator import validate_tree

__all__ = [
    "BASIC_RULES",
    "ValidationIssue",
    "ValidationReport",
    "ValidationRule",
    "ValidationSeverity",
    "validate_tree",
]
