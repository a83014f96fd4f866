"""Component property mapping."""

from bindery.core.mapping.property_mapper import (
    AppliedMapping,
    PropertyMapper,
    heuristic_category,
    identity_mappings,
)

__all__ = ["AppliedMapping", "PropertyMapper", "heuristic_category", "identity_mappings"]
