"""Domain models for Bindery."""

from bindery.core.models.enums import (
    AxisAlign,
    LayoutMode,
    PropertyCategory,
    QualityLabel,
    ResolutionMethod,
    SourceKind,
    StyleProperty,
    Tier,
    TokenKind,
    WarningCategory,
    WarningSeverity,
)
from bindery.core.models.instructions import (
    ComponentInstructions,
    ContainerInstructions,
    Instructions,
)
from bindery.core.models.inventory import (
    ComponentAnatomy,
    ComponentDescriptor,
    DesignInventory,
    TokenDescriptor,
)
from bindery.core.models.node import TargetNode
from bindery.core.models.outcome import Conflict, ConflictSource, ResolutionOutcome
from bindery.core.models.style import Padding, PaddingBox, StyleValues, TokenRef

__all__ = [
    "AxisAlign",
    "ComponentAnatomy",
    "ComponentDescriptor",
    "ComponentInstructions",
    "Conflict",
    "ConflictSource",
    "ContainerInstructions",
    "DesignInventory",
    "Instructions",
    "LayoutMode",
    "Padding",
    "PaddingBox",
    "PropertyCategory",
    "QualityLabel",
    "ResolutionMethod",
    "ResolutionOutcome",
    "SourceKind",
    "StyleProperty",
    "StyleValues",
    "TargetNode",
    "Tier",
    "TokenDescriptor",
    "TokenKind",
    "TokenRef",
    "WarningCategory",
    "WarningSeverity",
]
