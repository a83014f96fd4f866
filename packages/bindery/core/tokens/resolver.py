"""Binding requested token names to inventory tokens.

Lookup order, first hit wins:
1. exact normalized-name match
2. alias-table match
3. external semantic match (accepted at >= 0.75)
4. perceptual proximity, colors only (distance < 10)

Non-exact matches get a small bonus for widely used tokens.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from bindery.core.matching.models import TokenMatchRequest
from bindery.core.matching.protocols import MatchService
from bindery.core.models.enums import StyleProperty, TokenKind
from bindery.core.models.inventory import DesignInventory, TokenDescriptor
from bindery.core.tokens.aliases import alias_names, normalize_token_name
from bindery.core.tokens.hints import StyleHint
from bindery.core.utils.color import delta_e, is_hex_color

logger = logging.getLogger(__name__)

EXACT_CONFIDENCE = 1.0
ALIAS_CONFIDENCE = 0.85
MAX_BONUSED_CONFIDENCE = 0.99

# Host scope tags accepted per style property; tokens without scopes fit anywhere
_ALL_SCOPES = "ALL_SCOPES"
_PROPERTY_SCOPES: dict[StyleProperty, frozenset[str]] = {
    StyleProperty.FILL: frozenset({"ALL_FILLS", "FRAME_FILL", "SHAPE_FILL"}),
    StyleProperty.STROKE: frozenset({"STROKE_COLOR"}),
    StyleProperty.PADDING: frozenset({"GAP"}),
    StyleProperty.ITEM_SPACING: frozenset({"GAP"}),
    StyleProperty.CORNER_RADIUS: frozenset({"CORNER_RADIUS"}),
    StyleProperty.FONT_SIZE: frozenset({"FONT_SIZE"}),
    StyleProperty.WIDTH: frozenset({"WIDTH_HEIGHT"}),
    StyleProperty.HEIGHT: frozenset({"WIDTH_HEIGHT"}),
}


class TokenMatchMethod(str, Enum):
    EXACT = "exact"
    ALIAS = "alias"
    SEMANTIC = "semantic"
    PROXIMITY = "proximity"


@dataclass(frozen=True)
class TokenMatch:
    """A bound token and how confidently it was bound."""

    token: TokenDescriptor
    confidence: float
    method: TokenMatchMethod
    distance: float | None = None


def usage_bonus(usage_count: int) -> float:
    """Bonus for frequently used tokens: min(0.15, log10(usage + 1) * 0.05)."""
    return min(0.15, math.log10(usage_count + 1) * 0.05)


def proximity_confidence(distance: float) -> float:
    if distance < 2:
        return 0.95
    if distance < 5:
        return 0.80
    return 0.65


class TokenResolver:
    """Resolves requested token names against one inventory snapshot."""

    def __init__(
        self,
        inventory: DesignInventory,
        match_service: MatchService | None = None,
        *,
        semantic_threshold: float = 0.75,
        proximity_limit: float = 10.0,
    ) -> None:
        self.inventory = inventory
        self.match_service = match_service
        self.semantic_threshold = semantic_threshold
        self.proximity_limit = proximity_limit

    def _candidates(self, kind: TokenKind, prop: StyleProperty | None) -> list[TokenDescriptor]:
        tokens = self.inventory.tokens_of_kind(kind)
        if prop is None:
            return tokens
        allowed = _PROPERTY_SCOPES.get(prop, frozenset())
        return [
            t
            for t in tokens
            if not t.scopes or _ALL_SCOPES in t.scopes or allowed.intersection(t.scopes)
        ]

    async def resolve_hint(self, hint: StyleHint) -> TokenMatch | None:
        return await self.resolve(
            hint.token_names,
            hint.kind,
            reference=hint.reference,
            prop=hint.prop,
        )

    async def resolve(
        self,
        names: Sequence[str],
        kind: TokenKind,
        *,
        reference: str | float | None = None,
        prop: StyleProperty | None = None,
    ) -> TokenMatch | None:
        """Bind any of ``names`` (canonical first) to an inventory token.

        Args:
            names: Requested token names
            kind: Token kind to search
            reference: Expected concrete value (hex for colors) for proximity search
            prop: Style property, used to respect token scopes

        Returns:
            Best match, or None
        """
        candidates = self._candidates(kind, prop)
        if not candidates or not names:
            return None

        wanted = {normalize_token_name(n) for n in names}
        for token in candidates:
            if normalize_token_name(token.name) in wanted:
                return TokenMatch(token, EXACT_CONFIDENCE, TokenMatchMethod.EXACT)

        aliases = alias_names(list(names))
        if aliases:
            for token in candidates:
                if normalize_token_name(token.name) in aliases:
                    return self._bonused(token, ALIAS_CONFIDENCE, TokenMatchMethod.ALIAS)

        semantic = await self._semantic_match(names[0], kind, candidates)
        if semantic is not None:
            return semantic

        if kind is TokenKind.COLOR and isinstance(reference, str) and is_hex_color(reference):
            return self._proximity_match(reference, candidates)

        return None

    def _bonused(
        self,
        token: TokenDescriptor,
        confidence: float,
        method: TokenMatchMethod,
        distance: float | None = None,
    ) -> TokenMatch:
        boosted = min(MAX_BONUSED_CONFIDENCE, confidence + usage_bonus(token.usage_count))
        return TokenMatch(token, boosted, method, distance)

    async def _semantic_match(
        self, requested: str, kind: TokenKind, candidates: list[TokenDescriptor]
    ) -> TokenMatch | None:
        if self.match_service is None:
            return None

        try:
            suggestion = await self.match_service.match_token(
                TokenMatchRequest(
                    requested=requested, kind=kind, candidates=[t.name for t in candidates]
                )
            )
        except Exception:
            logger.warning(f"Semantic token match failed for {requested!r}", exc_info=True)
            return None

        if suggestion.token_name is None or suggestion.confidence < self.semantic_threshold:
            return None

        token = next((t for t in candidates if t.name == suggestion.token_name), None)
        if token is None:
            logger.debug(f"Semantic match suggested unknown token {suggestion.token_name!r}")
            return None
        return self._bonused(token, suggestion.confidence, TokenMatchMethod.SEMANTIC)

    def _proximity_match(
        self, reference: str, candidates: list[TokenDescriptor]
    ) -> TokenMatch | None:
        best: tuple[float, TokenDescriptor] | None = None
        for token in candidates:
            if not isinstance(token.value, str) or not is_hex_color(token.value):
                continue
            distance = delta_e(reference, token.value)
            if best is None or distance < best[0]:
                best = (distance, token)

        if best is None or best[0] >= self.proximity_limit:
            return None
        distance, token = best
        return self._bonused(
            token, proximity_confidence(distance), TokenMatchMethod.PROXIMITY, distance
        )
