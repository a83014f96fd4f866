"""Styling value types.

A requested style attribute is either a literal or a ``TokenRef`` (a named
reference resolved later). Resolved instructions only ever carry literals
(``StyleValues``).
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, model_validator

from bindery.core.models.enums import StyleProperty
from bindery.core.utils.color import normalize_hex

HexColor = Annotated[str, AfterValidator(normalize_hex)]


class TokenRef(BaseModel):
    """Deferred reference to a named design token."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    token: str = Field(description="Token name, e.g. 'colors/primary' or 'spacing/4'")


ColorSpec = HexColor | TokenRef
NumberSpec = float | TokenRef


def _uniform(data: Any) -> Any:
    if isinstance(data, int | float) and not isinstance(data, bool):
        return {"top": data, "right": data, "bottom": data, "left": data}
    return data


class PaddingBox(BaseModel):
    """Literal four-side padding in px."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0
    left: float = 0.0

    @model_validator(mode="before")
    @classmethod
    def _accept_uniform(cls, data: Any) -> Any:
        return _uniform(data)

    @classmethod
    def uniform(cls, value: float) -> PaddingBox:
        return cls(top=value, right=value, bottom=value, left=value)

    def sides(self) -> dict[str, float]:
        return {"top": self.top, "right": self.right, "bottom": self.bottom, "left": self.left}


class Padding(BaseModel):
    """Requested padding; each side is a literal or a token reference."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    top: NumberSpec = 0.0
    right: NumberSpec = 0.0
    bottom: NumberSpec = 0.0
    left: NumberSpec = 0.0

    @model_validator(mode="before")
    @classmethod
    def _accept_uniform(cls, data: Any) -> Any:
        return _uniform(data)

    def sides(self) -> dict[str, NumberSpec]:
        return {"top": self.top, "right": self.right, "bottom": self.bottom, "left": self.left}

    def literal_box(self) -> PaddingBox:
        """Literal sides as-is; token-referenced sides become 0."""
        return PaddingBox(
            **{side: (0.0 if isinstance(v, TokenRef) else v) for side, v in self.sides().items()}
        )

    def has_literal(self) -> bool:
        return any(not isinstance(v, TokenRef) for v in self.sides().values())


class StyleValues(BaseModel):
    """Concrete styling carried by resolved instructions."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    fill: HexColor | None = None
    stroke: HexColor | None = None
    padding: PaddingBox | None = None
    item_spacing: float | None = None
    corner_radius: float | None = None
    font_size: float | None = None
    width: float | None = None
    height: float | None = None
    text: str | None = None

    def get(self, prop: StyleProperty) -> Any:
        return getattr(self, prop.value)

    def with_value(self, prop: StyleProperty, value: Any) -> StyleValues:
        """Copy with one property replaced (validated)."""
        data = self.model_dump()
        data[prop.value] = value
        return StyleValues.model_validate(data)

    def is_empty(self) -> bool:
        return not self.model_dump(exclude_none=True)
