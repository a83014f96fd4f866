"""Resolution tiers, highest fidelity first."""

from bindery.core.resolution.tiers.base import TierResult
from bindery.core.resolution.tiers.defaults import system_defaults
from bindery.core.resolution.tiers.exact import try_exact_component
from bindery.core.resolution.tiers.primitives import try_primitive_fallback
from bindery.core.resolution.tiers.structural import try_structural_match
from bindery.core.resolution.tiers.tokens import try_token_construction

__all__ = [
    "TierResult",
    "system_defaults",
    "try_exact_component",
    "try_primitive_fallback",
    "try_structural_match",
    "try_token_construction",
]
