"""Tests for individual resolution tiers."""

from __future__ import annotations

import pytest

from bindery.core.models.enums import AxisAlign, LayoutMode, StyleProperty
from bindery.core.models.inventory import ComponentAnatomy, ComponentDescriptor, DesignInventory
from bindery.core.models.node import TargetNode
from bindery.core.models.style import PaddingBox, StyleValues, TokenRef
from bindery.core.resolution.engine import ResolutionEngine
from bindery.core.resolution.tiers import (
    system_defaults,
    try_primitive_fallback,
    try_structural_match,
    try_token_construction,
)
from bindery.core.resolution.tiers.defaults import default_styling, requested_style_properties
from bindery.core.resolution.tiers.primitives import needed_values
from bindery.core.resolution.tiers.structural import score_component


class TestStructuralScoring:
    """Tests for tier 2 candidate scoring."""

    def test_full_score(self):
        component = ComponentDescriptor(
            id="c",
            name="Slot Template",
            anatomy=ComponentAnatomy(
                layout_mode=LayoutMode.HORIZONTAL,
                primary_axis_align=AxisAlign.CENTER,
                counter_axis_align=AxisAlign.MIN,
                descendant_count=0,
            ),
        )
        node = TargetNode(
            id="n",
            role="row",
            layout_mode=LayoutMode.HORIZONTAL,
            primary_axis_align=AxisAlign.CENTER,
            counter_axis_align=AxisAlign.MIN,
        )

        scored = score_component(node, component)

        assert scored.score == 100
        assert scored.confidence == pytest.approx(0.75)

    def test_partial_alignment(self, button_component: ComponentDescriptor):
        component = button_component.model_copy(
            update={
                "anatomy": button_component.anatomy.model_copy(
                    update={"primary_axis_align": AxisAlign.CENTER, "descendant_count": 9}
                )
            }
        )
        node = TargetNode(
            id="n",
            role="row",
            layout_mode=LayoutMode.HORIZONTAL,
            primary_axis_align=AxisAlign.CENTER,
            counter_axis_align=AxisAlign.MAX,
        )

        scored = score_component(node, component)

        assert scored.score == 55
        assert scored.details == ("layout +40", "alignment +15")


class TestStructuralSafety:
    """Overrides that would break a component are refused."""

    def test_text_needs_text_layer(self, base_container_component: ComponentDescriptor):
        problems = base_container_component.unsafe_overrides(StyleValues(text="Hello"))
        assert problems == ["no text layer"]

    def test_fill_on_icon(self):
        icon = ComponentDescriptor(id="i", name="Icon/Check")
        assert icon.unsafe_overrides(StyleValues(fill="#000000")) == ["fill on icon component"]

    def test_padding_needs_auto_layout(self):
        static = ComponentDescriptor(id="s", name="Static Frame")
        problems = static.unsafe_overrides(StyleValues(padding=PaddingBox.uniform(8)))
        assert problems == ["padding without auto-layout"]

    async def test_unsafe_candidates_are_skipped(self, base_container_component):
        engine = ResolutionEngine(DesignInventory(components=[base_container_component]))
        node = TargetNode(id="n", role="text", layout_mode=LayoutMode.VERTICAL, text="Hello")

        assert await try_structural_match(node, engine.context) is None


class TestTokenConstructionTier:
    """Tests for tier 3."""

    async def test_declines_without_hints(self, inventory: DesignInventory):
        engine = ResolutionEngine(inventory)
        assert await try_token_construction(TargetNode(id="n", role="box"), engine.context) is None

    async def test_declines_below_coverage(self, inventory: DesignInventory):
        engine = ResolutionEngine(inventory)
        node = TargetNode(id="n", role="box", style_hints=["bg-notacolor", "p-4"])

        assert await try_token_construction(node, engine.context) is None

    async def test_bindings_and_clamped_confidence(self, inventory: DesignInventory):
        engine = ResolutionEngine(inventory)
        node = TargetNode(id="n", role="box", style_hints=["px-4", "rounded-lg"])

        result = await try_token_construction(node, engine.context)

        assert result is not None
        assert result.confidence == pytest.approx(0.9)
        assert result.instructions.token_bindings == {
            "padding.left": "tok-space-4",
            "padding.right": "tok-space-4",
            "corner_radius": "tok-radius-lg",
        }
        assert result.instructions.styling.padding == PaddingBox(left=16, right=16)
        assert result.instructions.styling.corner_radius == 8

    async def test_stroke_binding(self, inventory: DesignInventory):
        engine = ResolutionEngine(inventory)
        node = TargetNode(id="n", role="box", style_hints=["border-blue-500"])

        result = await try_token_construction(node, engine.context)

        assert result is not None
        assert result.instructions.token_bindings == {"stroke": "tok-blue-500"}


class TestPrimitiveFallbackTier:
    """Tests for tier 4."""

    def test_needed_values_from_literals_and_hints(self):
        node = TargetNode(
            id="n",
            role="box",
            fill="#FF0000",
            padding={"top": 10, "right": TokenRef(token="spacing/4"), "bottom": 10, "left": 0},
            item_spacing=6,
            style_hints=["border-gray-200", "rounded-md"],
        )

        assert needed_values(node) == {
            "fill": "#FF0000",
            "stroke": "#E5E7EB",
            "padding.top": 10.0,
            "padding.bottom": 10.0,
            "item_spacing": 6.0,
            "corner_radius": 6.0,
        }

    async def test_declines_without_document(self, empty_inventory: DesignInventory):
        engine = ResolutionEngine(empty_inventory)
        node = TargetNode(id="n", role="box", fill="#FF0000")

        assert await try_primitive_fallback(node, engine.context) is None

    async def test_spacing_and_radius_snap(self, empty_inventory, document):
        engine = ResolutionEngine(empty_inventory, document=document)
        node = TargetNode(id="n", role="box", padding=15, corner_radius=6)

        result = await try_primitive_fallback(node, engine.context)

        assert result is not None
        assert result.instructions.styling.padding == PaddingBox.uniform(16)
        assert result.instructions.styling.corner_radius == 6
        assert "Spacing approximated: using 16px instead of 15px (used 160 times)" in result.warnings

    async def test_unmatched_values_are_reported(self, empty_inventory, document):
        engine = ResolutionEngine(empty_inventory, document=document)
        node = TargetNode(id="n", role="box", fill="#FF0000", stroke="#0000FF")

        result = await try_primitive_fallback(node, engine.context)

        assert result is not None
        assert result.instructions.primitive_values == {"fill": "#FE0101"}
        assert "No document value close to stroke = #0000FF" in result.warnings


class TestSystemDefaultsTier:
    """Tests for tier 5."""

    def test_only_requested_properties(self):
        node = TargetNode(id="n", role="box", fill="#123456", style_hints=["p-2"], width=120)

        assert requested_style_properties(node) == {StyleProperty.FILL, StyleProperty.PADDING}
        styling = default_styling(node)
        assert styling.fill == "#3B82F6"
        assert styling.padding == PaddingBox.uniform(16)
        assert styling.corner_radius is None
        assert styling.width == 120

    async def test_always_accepts(self):
        result = await system_defaults(TargetNode(id="n", role="box"))

        assert result.confidence == 0.30
        assert result.instructions.styling.is_empty()
