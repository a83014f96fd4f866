"""Target node tree: the requested UI elements to realize."""

from __future__ import annotations

from collections.abc import Iterator

from pydantic import BaseModel, ConfigDict, Field

from bindery.core.models.enums import AxisAlign, LayoutMode
from bindery.core.models.style import ColorSpec, NumberSpec, Padding, TokenRef


class TargetNode(BaseModel):
    """One element to realize.

    Produced upstream and read-only during resolution. Every styling
    attribute holds either a literal or a ``TokenRef``, never both.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = Field(description="Stable node identifier")
    name: str | None = Field(default=None, description="Display name")
    role: str = Field(description="Semantic role, e.g. 'button', 'input', 'card'")
    layout_primitive: str | None = Field(
        default=None, description="Layout primitive tag, e.g. 'stack', 'grid', 'auto-layout'"
    )

    layout_mode: LayoutMode = LayoutMode.NONE
    primary_axis_align: AxisAlign | None = None
    counter_axis_align: AxisAlign | None = None
    item_spacing: NumberSpec | None = None
    padding: Padding | None = None

    fill: ColorSpec | None = None
    stroke: ColorSpec | None = None
    corner_radius: NumberSpec | None = None
    font_size: NumberSpec | None = None
    width: float | None = Field(default=None, ge=0)
    height: float | None = Field(default=None, ge=0)

    text: str | None = Field(default=None, description="Literal text content")
    variant: str | None = Field(default=None, description="Requested variant name")
    properties: dict[str, str] = Field(
        default_factory=dict, description="Requested semantic properties (key -> value)"
    )
    style_hints: list[str] = Field(
        default_factory=list, description="Atomic style shorthands, e.g. 'bg-blue-500', 'p-4'"
    )
    children: list[TargetNode] = Field(default_factory=list)

    def requested_properties(self) -> dict[str, str]:
        """Requested properties with ``variant`` folded in."""
        props = dict(self.properties)
        if self.variant and not any(k.lower() == "variant" for k in props):
            props["variant"] = self.variant
        return props

    def literal_fill(self) -> str | None:
        return None if isinstance(self.fill, TokenRef) else self.fill

    def literal_stroke(self) -> str | None:
        return None if isinstance(self.stroke, TokenRef) else self.stroke

    def literal_number(self, value: NumberSpec | None) -> float | None:
        return None if value is None or isinstance(value, TokenRef) else float(value)

    def walk(self) -> Iterator[TargetNode]:
        """Pre-order traversal including self."""
        yield self
        for child in self.children:
            yield from child.walk()

    def depth(self) -> int:
        """Tree depth counting this node as 1."""
        if not self.children:
            return 1
        return 1 + max(child.depth() for child in self.children)

    def count(self) -> int:
        return sum(1 for _ in self.walk())
