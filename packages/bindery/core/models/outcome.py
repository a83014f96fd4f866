"""Per-node resolution results."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from bindery.core.models.enums import ResolutionMethod, SourceKind, StyleProperty, Tier
from bindery.core.models.instructions import Instructions


class ConflictSource(BaseModel):
    """One candidate value for a monitored property."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: SourceKind
    value: Any
    priority: int = Field(ge=1, le=4)

    def formatted(self) -> str:
        if isinstance(self.value, BaseModel):
            sides = self.value.model_dump()
            return "/".join(f"{v:g}" for v in sides.values())
        if isinstance(self.value, float):
            return f"{self.value:g}"
        return str(self.value)


class Conflict(BaseModel):
    """Disagreement between sources on one property, with the chosen winner."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    property: StyleProperty
    sources: list[ConflictSource] = Field(description="Present sources, priority order")
    winner: ConflictSource
    justification: str


class ResolutionOutcome(BaseModel):
    """Final result for one node. ``success`` is always True."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    node_id: str
    success: bool = True
    tier: Tier
    method: ResolutionMethod
    confidence: float = Field(ge=0.0, le=1.0)
    instructions: Instructions
    warnings: list[str] = Field(default_factory=list)
    elapsed_ms: float = Field(default=0.0, ge=0.0)
    attempted_tiers: list[Tier] = Field(default_factory=list)
    fallback_reason: str | None = None
    conflicts: list[Conflict] = Field(default_factory=list)
