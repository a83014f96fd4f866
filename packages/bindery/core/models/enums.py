"""Closed vocabularies shared across the resolution engine.

Using enums (not free-form strings) keeps tier dispatch, conflict priority
and warning categorization exhaustive.
"""

from enum import Enum, IntEnum


class Tier(IntEnum):
    """Resolution tiers, tried in ascending order."""

    EXACT_COMPONENT = 1
    STRUCTURAL_COMPONENT = 2
    TOKEN_CONSTRUCTION = 3
    PRIMITIVE_FALLBACK = 4
    SYSTEM_DEFAULT = 5


class ResolutionMethod(str, Enum):
    """How a node was realized."""

    EXACT_MATCH = "exact_match"
    STRUCTURAL_MATCH = "structural_match"
    TOKEN_CONSTRUCTION = "token_construction"
    PRIMITIVE_FALLBACK = "primitive_fallback"
    SYSTEM_DEFAULTS = "system_defaults"


class LayoutMode(str, Enum):
    HORIZONTAL = "HORIZONTAL"
    VERTICAL = "VERTICAL"
    NONE = "NONE"


class AxisAlign(str, Enum):
    MIN = "MIN"
    CENTER = "CENTER"
    MAX = "MAX"
    SPACE_BETWEEN = "SPACE_BETWEEN"
    BASELINE = "BASELINE"


class PropertyCategory(str, Enum):
    """Semantic category of a native component property.

    Attributes:
        VARIANT: Visual emphasis (primary, secondary, ghost...).
        SIZE: Scale (sm, md, lg...).
        STATE: Interaction state (default, hover, disabled...).
        STYLE: Cosmetic switches (outline, rounded...).
        CUSTOM: Anything else; carries its own semantic key.
    """

    VARIANT = "variant"
    SIZE = "size"
    STATE = "state"
    STYLE = "style"
    CUSTOM = "custom"


class TokenKind(str, Enum):
    COLOR = "color"
    NUMBER = "number"


class StyleProperty(str, Enum):
    """Styling properties monitored for cross-source conflicts.

    Values double as field names on ``StyleValues``.
    """

    HEIGHT = "height"
    WIDTH = "width"
    PADDING = "padding"
    ITEM_SPACING = "item_spacing"
    FILL = "fill"
    STROKE = "stroke"
    CORNER_RADIUS = "corner_radius"
    FONT_SIZE = "font_size"


class SourceKind(str, Enum):
    """Where a conflicting value came from."""

    COMPONENT = "component"
    PRESET = "preset"
    DECLARED = "declared"
    SYSTEM = "system"

    @property
    def priority(self) -> int:
        """Fixed precedence; lower wins."""
        return _SOURCE_PRIORITY[self]


_SOURCE_PRIORITY = {
    SourceKind.COMPONENT: 1,
    SourceKind.PRESET: 2,
    SourceKind.DECLARED: 3,
    SourceKind.SYSTEM: 4,
}


class WarningCategory(str, Enum):
    COMPONENT_MAPPING = "component_mapping"
    TOKEN_RESOLUTION = "token_resolution"
    APPROXIMATION = "approximation"
    SYSTEM_DEFAULT = "system_default"


class WarningSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


class QualityLabel(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"
