"""Document primitive scanning and nearest-value search."""

from bindery.core.primitives.document import CornerRadii, DocumentSnapshot, SceneNode
from bindery.core.primitives.scanner import (
    PrimitiveInventory,
    PrimitiveKind,
    PrimitiveMatch,
    PrimitiveScanner,
    find_closest_color,
    find_closest_number,
    scan_document,
)

__all__ = [
    "CornerRadii",
    "DocumentSnapshot",
    "PrimitiveInventory",
    "PrimitiveKind",
    "PrimitiveMatch",
    "PrimitiveScanner",
    "SceneNode",
    "find_closest_color",
    "find_closest_number",
    "scan_document",
]
