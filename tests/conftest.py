"""Shared pytest fixtures for bindery tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from bindery.core.matching.models import (
    KnownClassification,
    PropertyAnalysis,
    PropertyAnalysisRequest,
    TokenMatchRequest,
    TokenMatchSuggestion,
    ValueMapping,
)
from bindery.core.models.enums import LayoutMode, PropertyCategory, TokenKind
from bindery.core.models.inventory import (
    ComponentAnatomy,
    ComponentDescriptor,
    DesignInventory,
    TokenDescriptor,
)
from bindery.core.primitives.document import DocumentSnapshot, SceneNode

# ============================================================================
# Path Fixtures
# ============================================================================


@pytest.fixture
def project_root() -> Path:
    """Get project root directory."""
    return Path(__file__).parent.parent


# ============================================================================
# Match Service Fakes
# ============================================================================


class FakeMatchService:
    """Deterministic match service driven by lookup tables."""

    def __init__(
        self,
        analyses: dict[str, PropertyAnalysis] | None = None,
        suggestions: dict[str, TokenMatchSuggestion] | None = None,
    ) -> None:
        self.analyses = analyses or {}
        self.suggestions = suggestions or {}
        self.analyze_calls: list[PropertyAnalysisRequest] = []
        self.match_calls: list[TokenMatchRequest] = []

    async def analyze_property(self, request: PropertyAnalysisRequest) -> PropertyAnalysis:
        self.analyze_calls.append(request)
        return self.analyses[request.native_property]

    async def match_token(self, request: TokenMatchRequest) -> TokenMatchSuggestion:
        self.match_calls.append(request)
        return self.suggestions.get(request.requested, TokenMatchSuggestion())


class FailingMatchService:
    """Match service whose every call raises."""

    def __init__(self) -> None:
        self.calls = 0

    async def analyze_property(self, request: PropertyAnalysisRequest) -> PropertyAnalysis:
        self.calls += 1
        raise RuntimeError("classification service unavailable")

    async def match_token(self, request: TokenMatchRequest) -> TokenMatchSuggestion:
        self.calls += 1
        raise RuntimeError("matching service unavailable")


@pytest.fixture
def failing_match_service() -> FailingMatchService:
    return FailingMatchService()


@pytest.fixture
def variant_analysis() -> PropertyAnalysis:
    """Classification of a button's ``Type`` property."""
    return PropertyAnalysis(
        native_property="Type",
        classification=KnownClassification(category=PropertyCategory.VARIANT),
        values=[
            ValueMapping(semantic_value="primary", native_value="Filled", confidence=0.95),
            ValueMapping(semantic_value="secondary", native_value="Outlined", confidence=0.9),
            ValueMapping(semantic_value="ghost", native_value="Text", confidence=0.85),
        ],
    )


@pytest.fixture
def fake_match_service(variant_analysis: PropertyAnalysis) -> FakeMatchService:
    return FakeMatchService(analyses={"Type": variant_analysis})


# ============================================================================
# Inventory Fixtures
# ============================================================================


@pytest.fixture
def button_component() -> ComponentDescriptor:
    return ComponentDescriptor(
        id="cmp-button",
        name="Button",
        role="button",
        anatomy=ComponentAnatomy(
            layout_mode=LayoutMode.HORIZONTAL,
            descendant_count=2,
            text_node_count=1,
            has_label=True,
        ),
        variant_properties={"Type": ["Filled", "Outlined", "Text"], "Size": ["Small", "Large"]},
    )


@pytest.fixture
def base_container_component() -> ComponentDescriptor:
    return ComponentDescriptor(
        id="cmp-base",
        name="Base Container",
        anatomy=ComponentAnatomy(layout_mode=LayoutMode.VERTICAL, descendant_count=1),
    )


@pytest.fixture
def design_tokens() -> list[TokenDescriptor]:
    return [
        TokenDescriptor(
            id="tok-blue-500",
            name="colors/blue/500",
            kind=TokenKind.COLOR,
            value="#3B82F6",
            usage_count=12,
        ),
        TokenDescriptor(
            id="tok-primary",
            name="primary",
            kind=TokenKind.COLOR,
            value="#2563EB",
            usage_count=40,
        ),
        TokenDescriptor(
            id="tok-space-4", name="spacing/4", kind=TokenKind.NUMBER, value=16, usage_count=30
        ),
        TokenDescriptor(
            id="tok-radius-lg", name="radius/lg", kind=TokenKind.NUMBER, value=8, usage_count=5
        ),
    ]


@pytest.fixture
def inventory(
    button_component: ComponentDescriptor,
    base_container_component: ComponentDescriptor,
    design_tokens: list[TokenDescriptor],
) -> DesignInventory:
    return DesignInventory(
        components=[button_component, base_container_component], tokens=design_tokens
    )


@pytest.fixture
def empty_inventory() -> DesignInventory:
    return DesignInventory()


# ============================================================================
# Document Fixtures
# ============================================================================


@pytest.fixture
def document() -> DocumentSnapshot:
    """Document where #FE0101 appears 40 times and 16px spacing dominates."""
    frames = [
        SceneNode(
            id=f"frame-{i}",
            fills=["#FE0101"],
            layout_mode=LayoutMode.VERTICAL,
            padding=16,
            item_spacing=8,
            corner_radius=6,
        )
        for i in range(40)
    ]
    return DocumentSnapshot(
        document_id="doc-1",
        revision="r1",
        pages=[
            SceneNode(
                id="page-1",
                fills=["#FFFFFF", "#00FF00"],
                strokes=["#E5E7EB"],
                children=frames,
            )
        ],
    )
