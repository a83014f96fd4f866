"""Five-tier resolution engine.

Each node is resolved by trying tiers in fixed order, highest fidelity
first, and keeping the first one that accepts:

1. exact component match
2. structurally similar component with overrides
3. container built from design tokens
4. container built from the document's most used raw values
5. generic system defaults (always accepts)

Conflict resolution then runs on the accepted instructions. The engine
never raises: tier failures count as a declined tier and the conflict pass
falls back to the unpatched outcome.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable

from bindery.core.caching import Cache
from bindery.core.config.models import ResolutionSettings
from bindery.core.mapping.property_mapper import PropertyMapper
from bindery.core.matching.protocols import MatchService
from bindery.core.models.enums import ResolutionMethod, Tier
from bindery.core.models.instructions import ContainerInstructions
from bindery.core.models.inventory import DesignInventory
from bindery.core.models.node import TargetNode
from bindery.core.models.outcome import ResolutionOutcome
from bindery.core.primitives.document import DocumentSnapshot
from bindery.core.primitives.scanner import PrimitiveScanner
from bindery.core.resolution.conflicts import Preset, apply_conflicts, resolve_all_conflicts
from bindery.core.resolution.context import ResolutionContext
from bindery.core.resolution.tiers import (
    TierResult,
    system_defaults,
    try_exact_component,
    try_primitive_fallback,
    try_structural_match,
    try_token_construction,
)
from bindery.core.resolution.tiers.defaults import SYSTEM_DEFAULT_CONFIDENCE, SYSTEM_DEFAULT_WARNING
from bindery.core.resolution.tracker import ResolutionSummary, ResolutionTracker
from bindery.core.tokens.resolver import TokenResolver

logger = logging.getLogger(__name__)

TierFn = Callable[[TargetNode, ResolutionContext], Awaitable[TierResult | None]]

TIERS: tuple[tuple[Tier, ResolutionMethod, TierFn], ...] = (
    (Tier.EXACT_COMPONENT, ResolutionMethod.EXACT_MATCH, try_exact_component),
    (Tier.STRUCTURAL_COMPONENT, ResolutionMethod.STRUCTURAL_MATCH, try_structural_match),
    (Tier.TOKEN_CONSTRUCTION, ResolutionMethod.TOKEN_CONSTRUCTION, try_token_construction),
    (Tier.PRIMITIVE_FALLBACK, ResolutionMethod.PRIMITIVE_FALLBACK, try_primitive_fallback),
)

FALLBACK_REASONS: dict[Tier, str] = {
    Tier.STRUCTURAL_COMPONENT: (
        "No exact component match found (no matching semantic role). "
        "Using structurally similar component."
    ),
    Tier.TOKEN_CONSTRUCTION: "No matching components found. Building from scratch with design tokens.",
    Tier.PRIMITIVE_FALLBACK: (
        "Insufficient design tokens. Using closest available colors/spacing from file."
    ),
    Tier.SYSTEM_DEFAULT: "Using system defaults",
}


class ResolutionEngine:
    """Resolves target nodes against one design inventory.

    Args:
        inventory: Components and tokens available in the host document.
        match_service: Optional external classifier for property and token matching.
        cache: Optional cache shared by the property mapper and primitive scanner.
        document: Optional document snapshot for the primitive fallback.
        preset: Optional user style preset for conflict resolution.
        settings: Tier thresholds.
        scanner: Shared primitive scanner (built from ``cache`` when omitted).
        mapper: Shared property mapper (built from ``match_service`` and ``cache`` when omitted).
        tracker: Statistics collector (a fresh one when omitted).
    """

    def __init__(
        self,
        inventory: DesignInventory,
        *,
        match_service: MatchService | None = None,
        cache: Cache | None = None,
        document: DocumentSnapshot | None = None,
        preset: Preset | None = None,
        settings: ResolutionSettings | None = None,
        scanner: PrimitiveScanner | None = None,
        mapper: PropertyMapper | None = None,
        tracker: ResolutionTracker | None = None,
    ) -> None:
        settings = settings or ResolutionSettings()
        self.tracker = tracker or ResolutionTracker()
        self.context = ResolutionContext(
            inventory=inventory,
            settings=settings,
            mapper=mapper
            or PropertyMapper(match_service, cache, fuzzy_threshold=settings.fuzzy_threshold),
            token_resolver=TokenResolver(
                inventory,
                match_service,
                semantic_threshold=settings.semantic_match_threshold,
                proximity_limit=settings.color_proximity_limit,
            ),
            scanner=scanner or PrimitiveScanner(cache),
            document=document,
            preset=preset,
        )

    async def resolve_node(self, node: TargetNode) -> ResolutionOutcome:
        """Resolve one node. Never raises."""
        start = time.perf_counter()
        try:
            outcome = await self._resolve(node, start)
        except Exception:
            logger.error(f"Resolution failed for node {node.id}; using system defaults", exc_info=True)
            outcome = await self._emergency_outcome(node, start)

        try:
            self.tracker.record(outcome)
        except Exception:
            logger.warning(f"Could not record outcome for node {node.id}", exc_info=True)
        return outcome

    async def resolve_tree(self, root: TargetNode) -> list[ResolutionOutcome]:
        """Resolve every node of the tree concurrently; results in pre-order."""
        nodes = list(root.walk())
        return list(await asyncio.gather(*(self.resolve_node(n) for n in nodes)))

    def summary(self) -> ResolutionSummary:
        return self.tracker.summary()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _resolve(self, node: TargetNode, start: float) -> ResolutionOutcome:
        attempted: list[Tier] = []
        for tier, method, attempt in TIERS:
            attempted.append(tier)
            try:
                result = await attempt(node, self.context)
            except Exception:
                logger.warning(f"Tier {int(tier)} failed for node {node.id}", exc_info=True)
                continue
            if result is not None:
                logger.debug(f"Node {node.id} resolved at tier {int(tier)} ({result.confidence:.2f})")
                return self._finish(node, tier, method, result, attempted, start)

        attempted.append(Tier.SYSTEM_DEFAULT)
        result = await system_defaults(node, self.context)
        logger.debug(f"Node {node.id} resolved with system defaults")
        return self._finish(
            node, Tier.SYSTEM_DEFAULT, ResolutionMethod.SYSTEM_DEFAULTS, result, attempted, start
        )

    def _finish(
        self,
        node: TargetNode,
        tier: Tier,
        method: ResolutionMethod,
        result: TierResult,
        attempted: list[Tier],
        start: float,
    ) -> ResolutionOutcome:
        outcome = ResolutionOutcome(
            node_id=node.id,
            tier=tier,
            method=method,
            confidence=result.confidence,
            instructions=result.instructions,
            warnings=list(result.warnings),
            attempted_tiers=attempted,
            fallback_reason=FALLBACK_REASONS.get(tier),
        )
        outcome = self._apply_conflicts(node, outcome)
        elapsed_ms = (time.perf_counter() - start) * 1000
        return outcome.model_copy(update={"elapsed_ms": elapsed_ms})

    def _apply_conflicts(self, node: TargetNode, outcome: ResolutionOutcome) -> ResolutionOutcome:
        try:
            conflicts = resolve_all_conflicts(
                node, outcome.instructions, self.context.inventory, self.context.preset
            )
            if not conflicts:
                return outcome
            instructions = apply_conflicts(outcome.instructions, conflicts)
        except Exception:
            logger.warning(f"Conflict resolution failed for node {node.id}", exc_info=True)
            return outcome

        warnings = [
            *outcome.warnings,
            *(
                f"Conflict: {c.property.value} resolved to {c.winner.kind.value} "
                f"({c.winner.formatted()})"
                for c in conflicts
            ),
        ]
        return outcome.model_copy(
            update={"instructions": instructions, "warnings": warnings, "conflicts": conflicts}
        )

    async def _emergency_outcome(self, node: TargetNode, start: float) -> ResolutionOutcome:
        try:
            result = await system_defaults(node)
        except Exception:
            logger.error(f"System defaults failed for node {node.id}", exc_info=True)
            result = TierResult(
                confidence=SYSTEM_DEFAULT_CONFIDENCE,
                instructions=ContainerInstructions(),
                warnings=[SYSTEM_DEFAULT_WARNING],
            )
        return ResolutionOutcome(
            node_id=node.id,
            tier=Tier.SYSTEM_DEFAULT,
            method=ResolutionMethod.SYSTEM_DEFAULTS,
            confidence=result.confidence,
            instructions=result.instructions,
            warnings=list(result.warnings),
            elapsed_ms=(time.perf_counter() - start) * 1000,
            attempted_tiers=[Tier.SYSTEM_DEFAULT],
            fallback_reason=FALLBACK_REASONS[Tier.SYSTEM_DEFAULT],
        )
