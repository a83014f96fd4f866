"""Common tier result type."""

from __future__ import annotations

from dataclasses import dataclass, field

from bindery.core.models.instructions import ComponentInstructions, ContainerInstructions


@dataclass(frozen=True)
class TierResult:
    """An accepted tier attempt, before engine metadata is attached."""

    confidence: float
    instructions: ComponentInstructions | ContainerInstructions
    warnings: list[str] = field(default_factory=list)
