"""Primitive frequency scanner.

One pass over a document snapshot collects how often each raw color,
spacing value and corner radius is used. Nearest-value searches then prefer
common values over marginally closer rare ones by ranking candidates on
``distance / ln(frequency + 2)``.
"""

from __future__ import annotations

import asyncio
import logging
import math
import time
from collections import Counter
from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from bindery.core.caching import Cache, CacheKey, compute_fingerprint
from bindery.core.models.enums import LayoutMode
from bindery.core.primitives.document import CornerRadii, DocumentSnapshot
from bindery.core.utils.color import delta_e, normalize_hex

logger = logging.getLogger(__name__)

SCAN_STEP_ID = "primitives.scan"
SCAN_STEP_VERSION = "1"

COLOR_DISTANCE_LIMIT = 10.0
HIGH_FREQUENCY = 20


class PrimitiveKind(str, Enum):
    COLOR = "color"
    SPACING = "spacing"
    RADIUS = "radius"


class PrimitiveInventory(BaseModel):
    """Frequency maps of raw values found in a document."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    colors: dict[str, int] = Field(default_factory=dict, description="#RRGGBB -> count")
    spacing: dict[int, int] = Field(default_factory=dict, description="px -> count")
    radii: dict[int, int] = Field(default_factory=dict, description="px -> count")

    def is_empty(self) -> bool:
        return not (self.colors or self.spacing or self.radii)


@dataclass(frozen=True)
class PrimitiveMatch:
    """Closest document value for a requested one."""

    kind: PrimitiveKind
    requested: str | float
    value: str | float
    distance: float
    frequency: int
    confidence: float

    @property
    def exact(self) -> bool:
        return self.distance == 0

    def warning(self) -> str | None:
        if self.exact and self.value == self.requested:
            return None
        if self.kind is PrimitiveKind.COLOR:
            return (
                f"Color approximated: using {self.value} instead of {self.requested} "
                f"(ΔE = {self.distance:.1f}, used {self.frequency} times)"
            )
        label = "Spacing" if self.kind is PrimitiveKind.SPACING else "Radius"
        return (
            f"{label} approximated: using {self.value:g}px instead of {self.requested:g}px "
            f"(used {self.frequency} times)"
        )


# ---------------------------------------------------------------------------
# Scanning
# ---------------------------------------------------------------------------


def scan_document(snapshot: DocumentSnapshot) -> PrimitiveInventory:
    """Count colors, spacing and radii across every node of the snapshot.

    Spacing is read from padding and item spacing of auto-layout nodes
    only. Zero values are ignored. Output maps are key-sorted so equal
    documents produce identical inventories.
    """
    colors: Counter[str] = Counter()
    spacing: Counter[int] = Counter()
    radii: Counter[int] = Counter()

    for node in snapshot.walk():
        colors.update(node.fills)
        colors.update(node.strokes)

        if node.layout_mode is not LayoutMode.NONE:
            values = list(node.padding.sides().values()) if node.padding else []
            if node.item_spacing is not None:
                values.append(node.item_spacing)
            spacing.update(round(v) for v in values if round(v) > 0)

        if isinstance(node.corner_radius, CornerRadii):
            radii.update(round(v) for v in node.corner_radius.values() if round(v) > 0)
        elif node.corner_radius is not None and round(node.corner_radius) > 0:
            radii[round(node.corner_radius)] += 1

    return PrimitiveInventory(
        colors=dict(sorted(colors.items())),
        spacing=dict(sorted(spacing.items())),
        radii=dict(sorted(radii.items())),
    )


class PrimitiveScanner:
    """Scans each document snapshot at most once and shares the result.

    Results are memoised per document identity and persisted through the
    optional cache. A re-scan replaces the stored inventory in one step.
    """

    def __init__(self, cache: Cache | None = None) -> None:
        self.cache = cache
        self._inventories: dict[str, PrimitiveInventory] = {}
        self._lock = asyncio.Lock()
        self.scan_count = 0

    @staticmethod
    def cache_key(snapshot: DocumentSnapshot) -> CacheKey:
        return CacheKey(
            step_id=SCAN_STEP_ID,
            step_version=SCAN_STEP_VERSION,
            input_fingerprint=compute_fingerprint(snapshot.identity()),
        )

    async def get_inventory(self, snapshot: DocumentSnapshot) -> PrimitiveInventory:
        """Inventory for ``snapshot``; scans only on the first request."""
        key = self.cache_key(snapshot)
        slot = key.input_fingerprint
        if slot in self._inventories:
            return self._inventories[slot]

        async with self._lock:
            if slot in self._inventories:
                return self._inventories[slot]

            inventory = None
            if self.cache is not None:
                try:
                    inventory = await self.cache.load(key, PrimitiveInventory)
                except Exception:
                    logger.warning(f"Primitive cache read failed for {key}", exc_info=True)

            if inventory is None:
                inventory = await self._scan_and_store(snapshot, key)

            self._inventories[slot] = inventory
            return inventory

    async def rescan(self, snapshot: DocumentSnapshot) -> PrimitiveInventory:
        """Force a fresh scan and replace the stored inventory."""
        key = self.cache_key(snapshot)
        async with self._lock:
            inventory = await self._scan_and_store(snapshot, key)
            self._inventories[key.input_fingerprint] = inventory
            return inventory

    async def invalidate(self, snapshot: DocumentSnapshot) -> None:
        key = self.cache_key(snapshot)
        async with self._lock:
            self._inventories.pop(key.input_fingerprint, None)
            if self.cache is not None:
                await self.cache.invalidate(key)

    async def _scan_and_store(
        self, snapshot: DocumentSnapshot, key: CacheKey
    ) -> PrimitiveInventory:
        start = time.perf_counter()
        inventory = scan_document(snapshot)
        elapsed_ms = (time.perf_counter() - start) * 1000
        self.scan_count += 1
        logger.debug(
            f"Scanned {snapshot.document_id}: {len(inventory.colors)} colors, "
            f"{len(inventory.spacing)} spacing values, {len(inventory.radii)} radii "
            f"in {elapsed_ms:.1f}ms"
        )

        if self.cache is not None:
            try:
                await self.cache.store(key, inventory, compute_ms=elapsed_ms)
            except Exception:
                logger.warning(f"Primitive cache write failed for {key}", exc_info=True)
        return inventory


# ---------------------------------------------------------------------------
# Nearest-value search
# ---------------------------------------------------------------------------


def weighted_distance(distance: float, frequency: int) -> float:
    return distance / math.log(frequency + 2)


def _is_most_frequent(frequency: int, counts: dict) -> bool:
    top = max(counts.values(), default=0)
    return top > 1 and frequency == top


def color_confidence(distance: float, frequency: int, most_frequent: bool) -> float:
    if distance < 2:
        confidence = 0.80
    elif distance < 5:
        confidence = 0.60
    else:
        confidence = 0.40
    if frequency >= HIGH_FREQUENCY:
        confidence += 0.05
    if most_frequent:
        confidence += 0.10
    return min(1.0, confidence)


def number_confidence(distance: float, frequency: int, most_frequent: bool) -> float:
    if distance == 0:
        confidence = 0.90
    elif distance <= 4:
        confidence = 0.70
    elif distance <= 8:
        confidence = 0.50
    else:
        confidence = 0.30
    if frequency >= HIGH_FREQUENCY:
        confidence += 0.05
    if most_frequent:
        confidence += 0.05
    return min(1.0, confidence)


def find_closest_color(
    target: str,
    inventory: PrimitiveInventory,
    limit: float = COLOR_DISTANCE_LIMIT,
) -> PrimitiveMatch | None:
    """Best document color for ``target``; candidates at distance >= limit are rejected."""
    target = normalize_hex(target)
    best: tuple[float, float, str, int] | None = None
    for color, frequency in inventory.colors.items():
        distance = delta_e(target, color)
        if distance >= limit:
            continue
        score = weighted_distance(distance, frequency)
        if best is None or score < best[0]:
            best = (score, distance, color, frequency)

    if best is None:
        return None
    _, distance, color, frequency = best
    return PrimitiveMatch(
        kind=PrimitiveKind.COLOR,
        requested=target,
        value=color,
        distance=distance,
        frequency=frequency,
        confidence=color_confidence(
            distance, frequency, _is_most_frequent(frequency, inventory.colors)
        ),
    )


def find_closest_number(
    target: float, counts: dict[int, int], kind: PrimitiveKind
) -> PrimitiveMatch | None:
    """Best document spacing/radius value for ``target`` (absolute difference)."""
    best: tuple[float, float, int, int] | None = None
    for value, frequency in counts.items():
        distance = abs(target - value)
        score = weighted_distance(distance, frequency)
        if best is None or score < best[0]:
            best = (score, distance, value, frequency)

    if best is None:
        return None
    _, distance, value, frequency = best
    return PrimitiveMatch(
        kind=kind,
        requested=float(target),
        value=float(value),
        distance=distance,
        frequency=frequency,
        confidence=number_confidence(distance, frequency, _is_most_frequent(frequency, counts)),
    )
