"""Read-only snapshot of the host document's components and tokens."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from bindery.core.models.enums import AxisAlign, LayoutMode, TokenKind
from bindery.core.models.style import PaddingBox, StyleValues


class ComponentAnatomy(BaseModel):
    """Structural summary of a component's internals."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    layout_mode: LayoutMode = LayoutMode.NONE
    primary_axis_align: AxisAlign | None = None
    counter_axis_align: AxisAlign | None = None
    descendant_count: int = Field(default=0, ge=0)
    text_node_count: int = Field(default=0, ge=0)
    has_icon: bool = False
    has_label: bool = False
    width: float | None = None
    height: float | None = None

    # Values baked into the component itself
    padding: PaddingBox | None = None
    item_spacing: float | None = None
    corner_radius: float | None = None
    font_size: float | None = None


class ComponentDescriptor(BaseModel):
    """A library component available for instantiation."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    name: str
    role: str | None = Field(default=None, description="Declared semantic role")
    anatomy: ComponentAnatomy = Field(default_factory=ComponentAnatomy)
    variant_properties: dict[str, list[str]] = Field(
        default_factory=dict, description="Native property name -> allowed options"
    )

    def literal_option(self, key: str, value: str) -> tuple[str, str] | None:
        """Find a native (property, option) pair equal to (key, value), ignoring case."""
        key_l = key.strip().lower()
        value_l = value.strip().lower()
        for native_key, options in self.variant_properties.items():
            if native_key.lower() != key_l:
                continue
            for option in options:
                if option.lower() == value_l:
                    return native_key, option
        return None

    @property
    def is_icon(self) -> bool:
        return self.anatomy.has_icon or "icon" in self.name.lower()

    @property
    def accepts_text(self) -> bool:
        return self.anatomy.has_label or self.anatomy.text_node_count > 0

    def unsafe_overrides(self, overrides: StyleValues) -> list[str]:
        """Reasons ``overrides`` cannot be applied to this component."""
        problems = []
        if overrides.text is not None and not self.accepts_text:
            problems.append("no text layer")
        if overrides.fill is not None and self.is_icon:
            problems.append("fill on icon component")
        if overrides.padding is not None and self.anatomy.layout_mode is LayoutMode.NONE:
            problems.append("padding without auto-layout")
        return problems


class TokenDescriptor(BaseModel):
    """A named design value (variable) in the document."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    name: str
    kind: TokenKind
    value: str | float = Field(description="Hex color for COLOR tokens, px for NUMBER tokens")
    scopes: list[str] = Field(default_factory=list, description="Host usage scope tags")
    usage_count: int = Field(default=0, ge=0)


class DesignInventory(BaseModel):
    """Components and tokens discovered in the host document."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    components: list[ComponentDescriptor] = Field(default_factory=list)
    tokens: list[TokenDescriptor] = Field(default_factory=list)

    def components_with_role(self, role: str) -> list[ComponentDescriptor]:
        """Components declaring ``role``, in inventory order."""
        return [c for c in self.components if c.role == role]

    def component(self, component_id: str) -> ComponentDescriptor | None:
        return next((c for c in self.components if c.id == component_id), None)

    def tokens_of_kind(self, kind: TokenKind) -> list[TokenDescriptor]:
        return [t for t in self.tokens if t.kind == kind]
