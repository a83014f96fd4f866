"""Shared, read-only state for resolving the nodes of one request."""

from __future__ import annotations

from dataclasses import dataclass

from bindery.core.config.models import ResolutionSettings
from bindery.core.mapping.property_mapper import PropertyMapper
from bindery.core.models.inventory import DesignInventory
from bindery.core.primitives.document import DocumentSnapshot
from bindery.core.primitives.scanner import PrimitiveScanner
from bindery.core.resolution.conflicts import Preset
from bindery.core.tokens.resolver import TokenResolver


@dataclass(frozen=True)
class ResolutionContext:
    """Everything a tier may consult. Nodes share it; none of it is mutated per node."""

    inventory: DesignInventory
    settings: ResolutionSettings
    mapper: PropertyMapper
    token_resolver: TokenResolver
    scanner: PrimitiveScanner
    document: DocumentSnapshot | None = None
    preset: Preset | None = None
