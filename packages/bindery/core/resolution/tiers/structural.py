"""Tier 2: reuse a structurally similar component with style overrides."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from bindery.core.models.instructions import ComponentInstructions
from bindery.core.models.inventory import ComponentDescriptor
from bindery.core.models.node import TargetNode
from bindery.core.models.style import StyleValues
from bindery.core.resolution.context import ResolutionContext
from bindery.core.resolution.tiers.base import TierResult

logger = logging.getLogger(__name__)

FLEXIBLE_NAME = re.compile(r"base|slot|template|container|generic", re.IGNORECASE)

BASE_CONFIDENCE = 0.65
CONFIDENCE_SPAN = 0.10


@dataclass(frozen=True)
class StructuralScore:
    component: ComponentDescriptor
    score: int
    details: tuple[str, ...]

    @property
    def confidence(self) -> float:
        return BASE_CONFIDENCE + (self.score / 100) * CONFIDENCE_SPAN


def score_component(node: TargetNode, component: ComponentDescriptor) -> StructuralScore:
    """Score 0-100 from layout, alignment, naming and simplicity."""
    anatomy = component.anatomy
    score = 0
    details: list[str] = []

    if anatomy.layout_mode == node.layout_mode:
        score += 40
        details.append("layout +40")

    primary = (
        node.primary_axis_align is not None
        and anatomy.primary_axis_align == node.primary_axis_align
    )
    counter = (
        node.counter_axis_align is not None
        and anatomy.counter_axis_align == node.counter_axis_align
    )
    if primary and counter:
        score += 30
        details.append("alignment +30")
    elif primary or counter:
        score += 15
        details.append("alignment +15")

    if FLEXIBLE_NAME.search(component.name):
        score += 20
        details.append("flexible name +20")

    if anatomy.descendant_count < 5:
        score += 10
        details.append("simple +10")

    return StructuralScore(component=component, score=score, details=tuple(details))


def build_overrides(node: TargetNode) -> StyleValues:
    """Overrides from the node's literal fill, stroke, text and padding."""
    padding = None
    if node.padding is not None and node.padding.has_literal():
        padding = node.padding.literal_box()
    return StyleValues(
        fill=node.literal_fill(),
        stroke=node.literal_stroke(),
        text=node.text,
        padding=padding,
    )


async def try_structural_match(node: TargetNode, ctx: ResolutionContext) -> TierResult | None:
    candidates = [
        c for c in ctx.inventory.components if c.anatomy.layout_mode == node.layout_mode
    ]
    if not candidates:
        return None

    # sorted() is stable: equal scores keep inventory order
    ranked = sorted(
        (score_component(node, c) for c in candidates),
        key=lambda s: s.score,
        reverse=True,
    )[: ctx.settings.structural_candidates]

    overrides = build_overrides(node)
    for scored in ranked:
        problems = scored.component.unsafe_overrides(overrides)
        if problems:
            logger.debug(f"Tier 2: skipping {scored.component.name}: {', '.join(problems)}")
            continue

        return TierResult(
            confidence=scored.confidence,
            instructions=ComponentInstructions(
                component_id=scored.component.id,
                component_name=scored.component.name,
                overrides=overrides,
            ),
            warnings=[
                f'Using base component "{scored.component.name}" with overrides - '
                "styling may not match brand exactly",
                f"Match score: {scored.score}/100 ({', '.join(scored.details)})",
            ],
        )

    return None
