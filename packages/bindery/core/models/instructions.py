"""Construction instructions produced by resolution.

Two shapes, discriminated by ``kind``:
- ``ComponentInstructions``: instantiate a library component, set its
  native properties, optionally override styling.
- ``ContainerInstructions``: build a generic container with explicit
  styling, recording which values came from tokens or document primitives.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from bindery.core.models.enums import AxisAlign, LayoutMode, StyleProperty
from bindery.core.models.style import StyleValues


class ComponentInstructions(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["component"] = "component"
    component_id: str
    component_name: str
    properties: dict[str, str] = Field(
        default_factory=dict, description="Native property name -> option"
    )
    overrides: StyleValues = Field(default_factory=StyleValues)

    @property
    def styling(self) -> StyleValues:
        return self.overrides


class ContainerInstructions(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["container"] = "container"
    layout_mode: LayoutMode = LayoutMode.NONE
    primary_axis_align: AxisAlign | None = None
    counter_axis_align: AxisAlign | None = None
    styling: StyleValues = Field(default_factory=StyleValues)
    token_bindings: dict[str, str] = Field(
        default_factory=dict,
        description="Style field (or 'padding.<side>') -> bound token id",
    )
    primitive_values: dict[str, str | float] = Field(
        default_factory=dict,
        description="Style field (or 'padding.<side>') -> value approximated from the document",
    )

    def design_sourced(self, prop: StyleProperty) -> bool:
        """True when ``prop`` is already backed by a token or document primitive."""
        prefix = prop.value
        return any(
            key == prefix or key.startswith(f"{prefix}.")
            for key in (*self.token_bindings, *self.primitive_values)
        )


Instructions = Annotated[
    ComponentInstructions | ContainerInstructions, Field(discriminator="kind")
]
