"""Tier 1: instantiate a component whose declared role matches the node."""

from __future__ import annotations

import logging

from bindery.core.models.instructions import ComponentInstructions
from bindery.core.models.node import TargetNode
from bindery.core.models.style import StyleValues
from bindery.core.resolution.context import ResolutionContext
from bindery.core.resolution.tiers.base import TierResult

logger = logging.getLogger(__name__)

NO_PROPERTIES_CONFIDENCE = 0.9


async def try_exact_component(node: TargetNode, ctx: ResolutionContext) -> TierResult | None:
    """Accept the first same-role component whose mappings are good enough.

    A node requesting no properties takes the first same-role component at
    0.9. Otherwise both the mean mapping confidence and the share of
    mappable requested keys must reach the threshold.
    """
    candidates = ctx.inventory.components_with_role(node.role)
    if not candidates:
        logger.debug(f"Tier 1: no component with role {node.role!r}")
        return None

    requested = node.requested_properties()
    threshold = ctx.settings.exact_match_threshold

    for component in candidates:
        overrides = StyleValues(text=node.text) if node.text and component.accepts_text else None

        if not requested:
            return TierResult(
                confidence=NO_PROPERTIES_CONFIDENCE,
                instructions=ComponentInstructions(
                    component_id=component.id,
                    component_name=component.name,
                    overrides=overrides or StyleValues(),
                ),
            )

        mappings = await ctx.mapper.ensure_mappings(component)
        confidence = ctx.mapper.calculate_overall_confidence(mappings)
        mappable = ctx.mapper.calculate_mappable_percentage(component, mappings, requested)
        logger.debug(
            f"Tier 1: {component.name} confidence={confidence:.2f} mappable={mappable:.2f}"
        )
        if confidence < threshold or mappable < threshold:
            continue

        applied = ctx.mapper.apply_mapping_with_warnings(component, mappings, requested)
        return TierResult(
            confidence=confidence,
            instructions=ComponentInstructions(
                component_id=component.id,
                component_name=component.name,
                properties=applied.properties,
                overrides=overrides or StyleValues(),
            ),
            warnings=applied.warnings,
        )

    return None
