"""Tier 5: generic system defaults. Always succeeds."""

from __future__ import annotations

from bindery.core.defaults import (
    DEFAULT_FILL,
    DEFAULT_FONT_SIZE,
    DEFAULT_ITEM_SPACING,
    DEFAULT_PADDING,
    DEFAULT_RADIUS,
    DEFAULT_STROKE,
)
from bindery.core.models.enums import StyleProperty
from bindery.core.models.instructions import ContainerInstructions
from bindery.core.models.node import TargetNode
from bindery.core.models.style import PaddingBox, StyleValues
from bindery.core.resolution.context import ResolutionContext
from bindery.core.resolution.tiers.base import TierResult
from bindery.core.tokens.hints import hint_reference_values

SYSTEM_DEFAULT_CONFIDENCE = 0.30
SYSTEM_DEFAULT_WARNING = "Using generic system defaults - not connected to your design system"

_DEFAULTS: dict[StyleProperty, object] = {
    StyleProperty.FILL: DEFAULT_FILL,
    StyleProperty.STROKE: DEFAULT_STROKE,
    StyleProperty.PADDING: PaddingBox.uniform(DEFAULT_PADDING),
    StyleProperty.ITEM_SPACING: DEFAULT_ITEM_SPACING,
    StyleProperty.CORNER_RADIUS: DEFAULT_RADIUS,
    StyleProperty.FONT_SIZE: DEFAULT_FONT_SIZE,
}


def requested_style_properties(node: TargetNode) -> set[StyleProperty]:
    """Style properties the node asks for, by literal, token reference or hint."""
    requested = set(hint_reference_values(node.style_hints))
    for prop in _DEFAULTS:
        if getattr(node, prop.value) is not None:
            requested.add(prop)
    return requested


def default_styling(node: TargetNode) -> StyleValues:
    values: dict[str, object] = {"text": node.text, "width": node.width, "height": node.height}
    for prop in requested_style_properties(node):
        if prop in _DEFAULTS:
            values[prop.value] = _DEFAULTS[prop]
    return StyleValues.model_validate(values)


async def system_defaults(node: TargetNode, ctx: ResolutionContext | None = None) -> TierResult:
    return TierResult(
        confidence=SYSTEM_DEFAULT_CONFIDENCE,
        instructions=ContainerInstructions(
            layout_mode=node.layout_mode,
            primary_axis_align=node.primary_axis_align,
            counter_axis_align=node.counter_axis_align,
            styling=default_styling(node),
        ),
        warnings=[SYSTEM_DEFAULT_WARNING],
    )
