"""Semantic <-> native property translation for library components.

For each component the mapper holds a ``ComponentMappings``: every native
property classified into a semantic category, with (semantic value,
native value, confidence) triples. Mappings are learned lazily through the
match service and persisted through the cache interface.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

from bindery.core.caching import Cache, CacheKey, compute_fingerprint
from bindery.core.matching.models import (
    ComponentMappings,
    CustomClassification,
    KnownClassification,
    PropertyAnalysis,
    PropertyAnalysisRequest,
    ValueMapping,
)
from bindery.core.matching.protocols import MatchService
from bindery.core.models.enums import PropertyCategory
from bindery.core.models.inventory import ComponentDescriptor
from bindery.core.utils.math import mean
from bindery.core.utils.similarity import find_best_match

logger = logging.getLogger(__name__)

MAPPINGS_STEP_ID = "mapping.component"
MAPPINGS_STEP_VERSION = "1"

# Native property names that reveal their category without classification
_NAME_HEURISTICS: dict[str, PropertyCategory] = {
    "variant": PropertyCategory.VARIANT,
    "type": PropertyCategory.VARIANT,
    "size": PropertyCategory.SIZE,
}


@dataclass(frozen=True)
class AppliedMapping:
    """Native properties to set, plus what could not be mapped."""

    properties: dict[str, str] = field(default_factory=dict)
    skipped: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def heuristic_category(native_property: str) -> PropertyCategory | None:
    return _NAME_HEURISTICS.get(native_property.strip().lower())


def identity_mappings(component: ComponentDescriptor) -> ComponentMappings:
    """Mappings that take the component's own vocabulary as the semantic one.

    Used when no match service is configured.
    """
    properties = []
    for native_property, options in component.variant_properties.items():
        category = heuristic_category(native_property)
        classification: KnownClassification | CustomClassification
        if category is not None:
            classification = KnownClassification(category=category)
        else:
            classification = CustomClassification(key=native_property.lower())
        properties.append(
            PropertyAnalysis(
                native_property=native_property,
                classification=classification,
                values=[
                    ValueMapping(semantic_value=o.lower(), native_value=o, confidence=1.0)
                    for o in options
                ],
            )
        )
    return ComponentMappings(component_id=component.id, properties=properties)


class PropertyMapper:
    """Per-component cache of learned property translations."""

    def __init__(
        self,
        match_service: MatchService | None = None,
        cache: Cache | None = None,
        *,
        fuzzy_threshold: float = 0.6,
        min_value_confidence: float = 0.7,
        summary_threshold: float = 0.7,
    ) -> None:
        self.match_service = match_service
        self.cache = cache
        self.fuzzy_threshold = fuzzy_threshold
        self.min_value_confidence = min_value_confidence
        self.summary_threshold = summary_threshold
        self._mappings: dict[str, ComponentMappings] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    # ------------------------------------------------------------------
    # Learning
    # ------------------------------------------------------------------

    def _cache_key(self, component: ComponentDescriptor) -> CacheKey:
        return CacheKey(
            step_id=MAPPINGS_STEP_ID,
            step_version=MAPPINGS_STEP_VERSION,
            input_fingerprint=compute_fingerprint(
                {"id": component.id, "variant_properties": component.variant_properties}
            ),
        )

    async def ensure_mappings(self, component: ComponentDescriptor) -> ComponentMappings:
        """Return the component's mappings, learning them on first use.

        Never raises: classification failures leave the affected property
        without mappings.
        """
        if component.id in self._mappings:
            return self._mappings[component.id]

        lock = self._locks.setdefault(component.id, asyncio.Lock())
        async with lock:
            if component.id in self._mappings:
                return self._mappings[component.id]

            key = self._cache_key(component)
            mappings = None
            if self.cache is not None:
                try:
                    mappings = await self.cache.load(key, ComponentMappings)
                except Exception:
                    logger.warning(f"Mapping cache read failed for {component.name}", exc_info=True)

            if mappings is None:
                mappings = await self._learn(component)
                if self.cache is not None:
                    try:
                        await self.cache.store(key, mappings)
                    except Exception:
                        logger.warning(
                            f"Mapping cache write failed for {component.name}", exc_info=True
                        )

            self._mappings[component.id] = mappings
            return mappings

    async def _learn(self, component: ComponentDescriptor) -> ComponentMappings:
        if self.match_service is None:
            return identity_mappings(component)

        properties: list[PropertyAnalysis] = []
        for native_property, options in component.variant_properties.items():
            try:
                analysis = await self.match_service.analyze_property(
                    PropertyAnalysisRequest(
                        component_name=component.name,
                        native_property=native_property,
                        options=options,
                    )
                )
            except Exception:
                logger.warning(
                    f"Property classification failed for {component.name}.{native_property}",
                    exc_info=True,
                )
                continue

            kept = [v for v in analysis.values if v.confidence >= self.min_value_confidence]
            properties.append(
                analysis.model_copy(update={"native_property": native_property, "values": kept})
            )

        logger.debug(f"Learned {len(properties)} property mappings for {component.name}")
        return ComponentMappings(component_id=component.id, properties=properties)

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    @staticmethod
    def calculate_overall_confidence(mappings: ComponentMappings) -> float:
        """Mean confidence across all value triples; 0.0 when none."""
        return mean(mappings.value_confidences())

    def _semantic_keys(
        self, component: ComponentDescriptor, mappings: ComponentMappings
    ) -> dict[str, str]:
        """semantic key -> native property name."""
        keys: dict[str, str] = {}
        for native_property in component.variant_properties:
            category = heuristic_category(native_property)
            if category is not None:
                keys.setdefault(category.value, native_property)
        for analysis in mappings.properties:
            keys.setdefault(analysis.semantic_key, analysis.native_property)
        return keys

    def _native_property_for(
        self, key: str, component: ComponentDescriptor, mappings: ComponentMappings
    ) -> str | None:
        key_l = key.strip().lower()
        for native_property in component.variant_properties:
            if native_property.lower() == key_l:
                return native_property

        semantic = self._semantic_keys(component, mappings)
        if key_l in semantic:
            return semantic[key_l]

        names = [*component.variant_properties, *semantic]
        match = find_best_match(key_l, names, self.fuzzy_threshold)
        if match is None:
            return None
        return semantic.get(match.value, match.value)

    def calculate_mappable_percentage(
        self,
        component: ComponentDescriptor,
        mappings: ComponentMappings,
        requested: dict[str, str],
    ) -> float:
        """Fraction of requested keys that resolve to a native property.

        Checked in order: literal native name, name heuristic, stored
        classification, fuzzy key match.
        """
        if not requested:
            return 1.0
        mappable = sum(
            1 for key in requested if self._native_property_for(key, component, mappings)
        )
        return mappable / len(requested)

    # ------------------------------------------------------------------
    # Application
    # ------------------------------------------------------------------

    def _native_value_for(
        self,
        native_property: str,
        value: str,
        component: ComponentDescriptor,
        mappings: ComponentMappings,
    ) -> str | None:
        value_l = value.strip().lower()
        options = component.variant_properties.get(native_property, [])

        analysis = next(
            (a for a in mappings.properties if a.native_property == native_property), None
        )
        if analysis is not None:
            for mapping in analysis.values:
                if mapping.semantic_value.lower() == value_l:
                    return mapping.native_value

        for option in options:
            if option.lower() == value_l:
                return option

        candidates: dict[str, str] = {o.lower(): o for o in options}
        if analysis is not None:
            candidates.update({m.semantic_value.lower(): m.native_value for m in analysis.values})
        match = find_best_match(value_l, candidates, self.fuzzy_threshold)
        return candidates[match.value] if match else None

    def apply_mapping_with_warnings(
        self,
        component: ComponentDescriptor,
        mappings: ComponentMappings,
        requested: dict[str, str],
    ) -> AppliedMapping:
        """Translate requested semantic properties into native ones.

        A requested (key, value) pair that literally names a native
        property/option (ignoring case) is used verbatim.
        """
        result = AppliedMapping()

        for key, value in requested.items():
            literal = component.literal_option(key, value)
            if literal is not None:
                result.properties[literal[0]] = literal[1]
                continue

            native_property = self._native_property_for(key, component, mappings)
            native_value = (
                self._native_value_for(native_property, value, component, mappings)
                if native_property
                else None
            )
            if native_property is None or native_value is None:
                result.skipped.append(key)
                result.warnings.append(
                    f'Property "{key}={value}" could not be mapped on component "{component.name}"'
                )
                continue
            result.properties[native_property] = native_value

        confidence = self.calculate_overall_confidence(mappings)
        mappable = self.calculate_mappable_percentage(component, mappings, requested)
        if requested and (confidence < self.summary_threshold or mappable < self.summary_threshold):
            result.warnings.append(
                f'Low mapping quality for "{component.name}": '
                f"{confidence:.0%} confidence, {mappable:.0%} of properties mappable"
            )
        return result
