"""Request and response models for the external matching service."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from bindery.core.models.enums import PropertyCategory, TokenKind


class KnownClassification(BaseModel):
    """Property belongs to one of the fixed semantic categories."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    category: Literal[
        PropertyCategory.VARIANT,
        PropertyCategory.SIZE,
        PropertyCategory.STATE,
        PropertyCategory.STYLE,
    ]

    @property
    def semantic_key(self) -> str:
        return self.category.value


class CustomClassification(BaseModel):
    """Escape hatch for properties outside the fixed categories."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    category: Literal[PropertyCategory.CUSTOM] = PropertyCategory.CUSTOM
    key: str = Field(min_length=1, description="Semantic key, e.g. 'icon-position'")

    @property
    def semantic_key(self) -> str:
        return self.key.lower()


Classification = Annotated[
    KnownClassification | CustomClassification, Field(discriminator="category")
]


class ValueMapping(BaseModel):
    """One semantic value and the native option that realizes it."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    semantic_value: str
    native_value: str
    confidence: float = Field(ge=0.0, le=1.0)


class PropertyAnalysis(BaseModel):
    """Classification of one native component property."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    native_property: str
    classification: Classification
    values: list[ValueMapping] = Field(default_factory=list)

    @property
    def semantic_key(self) -> str:
        return self.classification.semantic_key


class ComponentMappings(BaseModel):
    """All learned property translations for one component (cache artifact)."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    component_id: str
    properties: list[PropertyAnalysis] = Field(default_factory=list)

    def value_confidences(self) -> list[float]:
        return [v.confidence for p in self.properties for v in p.values]


class PropertyAnalysisRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    component_name: str
    native_property: str
    options: list[str]


class TokenMatchRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    requested: str = Field(description="Requested token name")
    kind: TokenKind
    candidates: list[str] = Field(description="Inventory token names of the same kind")


class TokenMatchSuggestion(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    token_name: str | None = None
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    reasoning: str | None = None
