"""Cross-source conflict resolution for styling properties.

A monitored property can receive values from up to four sources, in fixed
precedence: the component's own anatomy, the user's preset, the request's
declared values and the system defaults. When two or more present sources
disagree after normalization, the highest-precedence one wins and is
spliced into the node's instructions.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bindery.core.defaults import SYSTEM_CONFLICT_DEFAULTS
from bindery.core.models.enums import SourceKind, StyleProperty
from bindery.core.models.instructions import (
    ComponentInstructions,
    ContainerInstructions,
    Instructions,
)
from bindery.core.models.inventory import DesignInventory
from bindery.core.models.node import TargetNode
from bindery.core.models.outcome import Conflict, ConflictSource
from bindery.core.models.style import PaddingBox, StyleValues
from bindery.core.tokens.hints import hint_reference_values
from bindery.core.utils.color import normalize_hex

logger = logging.getLogger(__name__)

MONITORED_PROPERTIES: tuple[StyleProperty, ...] = (
    StyleProperty.HEIGHT,
    StyleProperty.WIDTH,
    StyleProperty.PADDING,
    StyleProperty.ITEM_SPACING,
    StyleProperty.FILL,
    StyleProperty.STROKE,
    StyleProperty.CORNER_RADIUS,
    StyleProperty.FONT_SIZE,
)

_COLOR_PROPERTIES = frozenset({StyleProperty.FILL, StyleProperty.STROKE})

_JUSTIFICATIONS: dict[SourceKind, str] = {
    SourceKind.COMPONENT: (
        "Component internal logic takes precedence to preserve accessibility and brand standards"
    ),
    SourceKind.PRESET: "Preset convention takes precedence (you selected {name})",
    SourceKind.DECLARED: "Declared value used (no component or preset value specified)",
    SourceKind.SYSTEM: "System default used (no design system values available)",
}


def normalize_value(prop: StyleProperty, value: Any) -> Any:
    """Comparable form: padding as a four-side box, colors as ``#RRGGBB``, numbers as float."""
    if value is None:
        return None
    if prop is StyleProperty.PADDING:
        return value if isinstance(value, PaddingBox) else PaddingBox.model_validate(value)
    if prop in _COLOR_PROPERTIES:
        return normalize_hex(str(value))
    return float(value)


class Preset(BaseModel):
    """A named table of user-chosen style conventions."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    values: dict[StyleProperty, Any] = Field(default_factory=dict)

    @field_validator("values")
    @classmethod
    def _normalize(cls, values: dict[StyleProperty, Any]) -> dict[StyleProperty, Any]:
        return {
            prop: normalize_value(prop, value)
            for prop, value in values.items()
            if value is not None
        }


# ---------------------------------------------------------------------------
# Source collection
# ---------------------------------------------------------------------------


def _component_values(
    instructions: Instructions, inventory: DesignInventory
) -> dict[StyleProperty, Any]:
    if not isinstance(instructions, ComponentInstructions):
        return {}
    component = inventory.component(instructions.component_id)
    if component is None:
        return {}
    anatomy = component.anatomy
    return {
        StyleProperty.WIDTH: anatomy.width,
        StyleProperty.HEIGHT: anatomy.height,
        StyleProperty.PADDING: anatomy.padding,
        StyleProperty.ITEM_SPACING: anatomy.item_spacing,
        StyleProperty.CORNER_RADIUS: anatomy.corner_radius,
        StyleProperty.FONT_SIZE: anatomy.font_size,
    }


def _declared_values(node: TargetNode) -> dict[StyleProperty, Any]:
    values: dict[StyleProperty, Any] = dict(hint_reference_values(node.style_hints))
    if node.width is not None:
        values[StyleProperty.WIDTH] = node.width
    if node.height is not None:
        values[StyleProperty.HEIGHT] = node.height
    return values


def collect_sources(
    node: TargetNode,
    instructions: Instructions,
    inventory: DesignInventory,
    preset: Preset | None = None,
) -> dict[StyleProperty, list[ConflictSource]]:
    """Present sources per monitored property, in priority order."""
    tables: list[tuple[SourceKind, dict[StyleProperty, Any]]] = [
        (SourceKind.COMPONENT, _component_values(instructions, inventory)),
        (SourceKind.PRESET, dict(preset.values) if preset else {}),
        (SourceKind.DECLARED, _declared_values(node)),
        (SourceKind.SYSTEM, dict(SYSTEM_CONFLICT_DEFAULTS)),
    ]

    sources: dict[StyleProperty, list[ConflictSource]] = {}
    for prop in MONITORED_PROPERTIES:
        present = []
        for kind, table in tables:
            value = table.get(prop)
            if value is None:
                continue
            try:
                normalized = normalize_value(prop, value)
            except (TypeError, ValueError):
                logger.warning(f"Ignoring unusable {kind.value} value for {prop.value}: {value!r}")
                continue
            present.append(ConflictSource(kind=kind, value=normalized, priority=kind.priority))
        if present:
            sources[prop] = present
    return sources


# ---------------------------------------------------------------------------
# Detection and resolution
# ---------------------------------------------------------------------------


def detect_conflict(sources: list[ConflictSource]) -> bool:
    """True when at least two present sources hold unequal values."""
    if len(sources) < 2:
        return False
    first = sources[0].value
    return any(source.value != first for source in sources[1:])


def resolve_conflict(
    prop: StyleProperty, sources: list[ConflictSource], preset: Preset | None = None
) -> Conflict:
    winner = min(sources, key=lambda s: s.priority)
    justification = _JUSTIFICATIONS[winner.kind].format(name=preset.name if preset else "preset")
    return Conflict(
        property=prop,
        sources=sorted(sources, key=lambda s: s.priority),
        winner=winner,
        justification=justification,
    )


def resolve_all_conflicts(
    node: TargetNode,
    instructions: Instructions,
    inventory: DesignInventory,
    preset: Preset | None = None,
) -> list[Conflict]:
    """Conflicts for every monitored property with disagreeing sources.

    Container properties already bound to a design token or a document
    primitive are left alone. Component winners the component cannot take
    as an override (fill on an icon, padding without auto-layout) are dropped.
    """
    component = None
    if isinstance(instructions, ComponentInstructions):
        component = inventory.component(instructions.component_id)

    conflicts = []
    for prop, sources in collect_sources(node, instructions, inventory, preset).items():
        if isinstance(instructions, ContainerInstructions) and instructions.design_sourced(prop):
            continue
        if not detect_conflict(sources):
            continue
        conflict = resolve_conflict(prop, sources, preset)
        if component is not None:
            problems = component.unsafe_overrides(
                StyleValues().with_value(prop, conflict.winner.value)
            )
            if problems:
                logger.debug(
                    f"Skipping {prop.value} override on {component.name}: {', '.join(problems)}"
                )
                continue
        conflicts.append(conflict)
    return conflicts


def apply_conflicts(instructions: Instructions, conflicts: list[Conflict]) -> Instructions:
    """Splice winning values into overrides or styling; other fields untouched."""
    if not conflicts:
        return instructions

    styling = instructions.styling
    for conflict in conflicts:
        styling = styling.with_value(conflict.property, conflict.winner.value)

    if isinstance(instructions, ComponentInstructions):
        return instructions.model_copy(update={"overrides": styling})
    return instructions.model_copy(update={"styling": styling})
