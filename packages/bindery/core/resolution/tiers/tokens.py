"""Tier 3: build a container whose styling is bound to design tokens."""

from __future__ import annotations

import logging

from bindery.core.models.enums import StyleProperty, TokenKind
from bindery.core.models.instructions import ContainerInstructions
from bindery.core.models.node import TargetNode
from bindery.core.models.style import PaddingBox, StyleValues
from bindery.core.resolution.context import ResolutionContext
from bindery.core.resolution.tiers.base import TierResult
from bindery.core.tokens.hints import StyleHint, parse_style_hints
from bindery.core.tokens.resolver import TokenMatch
from bindery.core.utils.math import clamp, mean

logger = logging.getLogger(__name__)

MIN_CONFIDENCE = 0.7
MAX_CONFIDENCE = 0.9


def _token_value(match: TokenMatch) -> str | float:
    if match.token.kind is TokenKind.COLOR:
        return str(match.token.value)
    return float(match.token.value)


def build_token_styling(
    node: TargetNode, resolved: list[tuple[StyleHint, TokenMatch]]
) -> tuple[StyleValues, dict[str, str]]:
    """Styling values and token bindings from resolved hints."""
    values: dict[str, object] = {"text": node.text, "width": node.width, "height": node.height}
    bindings: dict[str, str] = {}
    padding: dict[str, float] = {}

    for hint, match in resolved:
        value = _token_value(match)
        if hint.prop is StyleProperty.PADDING:
            for side in hint.sides:
                padding[side] = float(value)
        else:
            values[hint.prop.value] = value
        for key in hint.binding_keys:
            bindings[key] = match.token.id

    if padding:
        values["padding"] = PaddingBox(**padding)
    return StyleValues.model_validate(values), bindings


async def try_token_construction(node: TargetNode, ctx: ResolutionContext) -> TierResult | None:
    """Accept when enough style hints bind to tokens with high confidence.

    Unparseable hints count as unresolved. Aggregate confidence is the mean
    over accepted hints, held inside the tier's band.
    """
    if not node.style_hints:
        return None

    settings = ctx.settings
    parsed = parse_style_hints(node.style_hints)
    resolved: list[tuple[StyleHint, TokenMatch]] = []
    warnings: list[str] = []

    for raw, hint in parsed:
        match = await ctx.token_resolver.resolve_hint(hint) if hint is not None else None
        if hint is not None and match is not None and match.confidence >= settings.token_hint_confidence:
            resolved.append((hint, match))
            logger.debug(
                f"Tier 3: {raw} -> {match.token.name} ({match.method.value}, {match.confidence:.2f})"
            )
        else:
            warnings.append(f'Class "{raw}" could not be resolved to a design variable')

    coverage = len(resolved) / len(parsed)
    if coverage < settings.token_coverage:
        logger.debug(f"Tier 3: only {coverage:.0%} of hints resolved")
        return None

    styling, bindings = build_token_styling(node, resolved)
    confidence = clamp(mean(m.confidence for _, m in resolved), MIN_CONFIDENCE, MAX_CONFIDENCE)
    return TierResult(
        confidence=confidence,
        instructions=ContainerInstructions(
            layout_mode=node.layout_mode,
            primary_axis_align=node.primary_axis_align,
            counter_axis_align=node.counter_axis_align,
            styling=styling,
            token_bindings=bindings,
        ),
        warnings=warnings,
    )
