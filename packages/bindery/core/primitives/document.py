"""Explicit document snapshot handed to the primitive scanner."""

from __future__ import annotations

from collections.abc import Iterator

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bindery.core.models.enums import LayoutMode
from bindery.core.models.style import PaddingBox
from bindery.core.utils.color import normalize_hex


class CornerRadii(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    top_left: float = 0.0
    top_right: float = 0.0
    bottom_right: float = 0.0
    bottom_left: float = 0.0

    def values(self) -> list[float]:
        return [self.top_left, self.top_right, self.bottom_right, self.bottom_left]


class SceneNode(BaseModel):
    """One node of the host document, reduced to the styling the scan reads."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    name: str | None = None
    fills: list[str] = Field(default_factory=list, description="Solid fill colors (hex)")
    strokes: list[str] = Field(default_factory=list, description="Solid stroke colors (hex)")
    layout_mode: LayoutMode = LayoutMode.NONE
    padding: PaddingBox | None = None
    item_spacing: float | None = None
    corner_radius: float | CornerRadii | None = None
    children: list[SceneNode] = Field(default_factory=list)

    @field_validator("fills", "strokes")
    @classmethod
    def _normalize_colors(cls, value: list[str]) -> list[str]:
        return [normalize_hex(v) for v in value]

    def walk(self) -> Iterator[SceneNode]:
        yield self
        for child in self.children:
            yield from child.walk()


class DocumentSnapshot(BaseModel):
    """Read-only view of a document at one revision."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    document_id: str
    revision: str | None = Field(default=None, description="Host revision marker, if known")
    pages: list[SceneNode] = Field(default_factory=list, description="Page root nodes")

    def walk(self) -> Iterator[SceneNode]:
        for page in self.pages:
            yield from page.walk()

    def identity(self) -> dict[str, str | None]:
        return {"document_id": self.document_id, "revision": self.revision}
