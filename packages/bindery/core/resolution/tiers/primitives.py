"""Tier 4: approximate requested values with the document's most used primitives."""

from __future__ import annotations

import logging

from bindery.core.models.enums import StyleProperty
from bindery.core.models.instructions import ContainerInstructions
from bindery.core.models.node import TargetNode
from bindery.core.models.style import PaddingBox, StyleValues
from bindery.core.primitives.scanner import (
    PrimitiveInventory,
    PrimitiveKind,
    PrimitiveMatch,
    find_closest_color,
    find_closest_number,
)
from bindery.core.resolution.context import ResolutionContext
from bindery.core.resolution.tiers.base import TierResult
from bindery.core.tokens.hints import hint_reference_values
from bindery.core.utils.math import mean

logger = logging.getLogger(__name__)


def needed_values(node: TargetNode) -> dict[str, str | float]:
    """Values to approximate, keyed by style field or ``padding.<side>``.

    Literal node values come first; style hints fill in the rest.
    """
    hinted = hint_reference_values(node.style_hints)
    needed: dict[str, str | float] = {}

    fill = node.literal_fill() or hinted.get(StyleProperty.FILL)
    if fill:
        needed["fill"] = fill
    stroke = node.literal_stroke() or hinted.get(StyleProperty.STROKE)
    if stroke:
        needed["stroke"] = stroke

    padding: PaddingBox | None = None
    if node.padding is not None and node.padding.has_literal():
        padding = node.padding.literal_box()
    elif isinstance(hinted.get(StyleProperty.PADDING), PaddingBox):
        padding = hinted[StyleProperty.PADDING]
    if padding is not None:
        for side, value in padding.sides().items():
            if value > 0:
                needed[f"padding.{side}"] = value

    for prop in (StyleProperty.ITEM_SPACING, StyleProperty.CORNER_RADIUS):
        value = node.literal_number(getattr(node, prop.value))
        if value is None:
            value = hinted.get(prop)
        if value is not None and value > 0:
            needed[prop.value] = float(value)

    return needed


def match_value(
    key: str, value: str | float, inventory: PrimitiveInventory, color_limit: float
) -> PrimitiveMatch | None:
    if key in ("fill", "stroke"):
        return find_closest_color(str(value), inventory, limit=color_limit)
    if key == "corner_radius":
        return find_closest_number(float(value), inventory.radii, PrimitiveKind.RADIUS)
    return find_closest_number(float(value), inventory.spacing, PrimitiveKind.SPACING)


def build_primitive_styling(node: TargetNode, matches: dict[str, PrimitiveMatch]) -> StyleValues:
    values: dict[str, object] = {"text": node.text, "width": node.width, "height": node.height}
    padding: dict[str, float] = {}
    for key, match in matches.items():
        if key.startswith("padding."):
            padding[key.split(".", 1)[1]] = float(match.value)
        else:
            values[key] = match.value
    if padding:
        values["padding"] = PaddingBox(**padding)
    return StyleValues.model_validate(values)


async def try_primitive_fallback(node: TargetNode, ctx: ResolutionContext) -> TierResult | None:
    """Snap each needed value to its closest frequently used document value.

    Declines without a document, with an empty scan, or when nothing is
    needed. Unmatched values are reported and left out of the average.
    """
    if ctx.document is None:
        return None

    needed = needed_values(node)
    if not needed:
        logger.debug(f"Tier 4: node {node.id} requests no approximable values")
        return None

    inventory = await ctx.scanner.get_inventory(ctx.document)
    if inventory.is_empty():
        logger.debug(f"Tier 4: document {ctx.document.document_id} has no primitives")
        return None

    matches: dict[str, PrimitiveMatch] = {}
    warnings: list[str] = []
    for key, value in needed.items():
        match = match_value(key, value, inventory, ctx.settings.color_proximity_limit)
        if match is None:
            warnings.append(f"No document value close to {key} = {value}")
            continue
        matches[key] = match
        warning = match.warning()
        if warning:
            warnings.append(warning)

    if not matches:
        return None

    confidence = mean(m.confidence for m in matches.values())
    if confidence < ctx.settings.primitive_min_confidence:
        logger.debug(f"Tier 4: aggregate confidence {confidence:.2f} too low")
        return None

    return TierResult(
        confidence=confidence,
        instructions=ContainerInstructions(
            layout_mode=node.layout_mode,
            primary_axis_align=node.primary_axis_align,
            counter_axis_align=node.counter_axis_align,
            styling=build_primitive_styling(node, matches),
            primitive_values={key: m.value for key, m in matches.items()},
        ),
        warnings=warnings,
    )
