"""Structural validation result models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ValidationSeverity(str, Enum):
    """Severity of validation issue."""

    ERROR = "error"  # Blocks generation
    WARNING = "warning"  # Advisory


class ValidationIssue(BaseModel):
    """Single rule violation."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    rule: str = Field(description="Rule identifier")
    message: str
    location: str = Field(description="Path of node ids from the root, with the node's role")
    severity: ValidationSeverity


class ValidationReport(BaseModel):
    """Result of validating a node tree."""

    model_config = ConfigDict(extra="forbid")

    errors: list[ValidationIssue] = Field(default_factory=list)
    warnings: list[ValidationIssue] = Field(default_factory=list)

    @property
    def valid(self) -> bool:
        """Only errors make a tree invalid."""
        return not self.errors

    def add(self, issue: ValidationIssue) -> None:
        if issue.severity == ValidationSeverity.ERROR:
            self.errors.append(issue)
        else:
            self.warnings.append(issue)

    def get_summary(self) -> str:
        if not self.errors and not self.warnings:
            return "No issues"
        lines = [f"Validation: {len(self.errors)} errors, {len(self.warnings)} warnings"]
        for issue in [*self.errors, *self.warnings]:
            prefix = "[ERROR]" if issue.severity == ValidationSeverity.ERROR else "[WARN]"
            lines.append(f"{prefix} {issue.rule} at {issue.location}: {issue.message}")
        return "\n".join(lines)
