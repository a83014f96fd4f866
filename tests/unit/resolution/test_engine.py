"""Tests for the tiered resolution engine."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from bindery.core.models.enums import LayoutMode, ResolutionMethod, SourceKind, StyleProperty, Tier
from bindery.core.models.instructions import ComponentInstructions, ContainerInstructions
from bindery.core.models.inventory import ComponentAnatomy, ComponentDescriptor, DesignInventory
from bindery.core.models.node import TargetNode
from bindery.core.primitives.document import DocumentSnapshot
from bindery.core.resolution import engine as engine_module
from bindery.core.resolution.engine import FALLBACK_REASONS, ResolutionEngine
from bindery.core.resolution.tiers.defaults import SYSTEM_DEFAULT_WARNING


class TestExactComponentTier:
    """Tests for tier 1 resolution."""

    async def test_role_match_without_properties(self, inventory: DesignInventory):
        engine = ResolutionEngine(inventory)

        outcome = await engine.resolve_node(TargetNode(id="n1", role="button"))

        assert outcome.success
        assert outcome.tier == Tier.EXACT_COMPONENT
        assert outcome.method == ResolutionMethod.EXACT_MATCH
        assert outcome.confidence == pytest.approx(0.9)
        assert outcome.warnings == []
        assert outcome.attempted_tiers == [Tier.EXACT_COMPONENT]
        assert outcome.fallback_reason is None
        assert isinstance(outcome.instructions, ComponentInstructions)
        assert outcome.instructions.component_id == "cmp-button"

    async def test_requested_variant_is_mapped(self, inventory, fake_match_service):
        engine = ResolutionEngine(inventory, match_service=fake_match_service)
        node = TargetNode(id="n1", role="button", variant="primary", text="Save")

        outcome = await engine.resolve_node(node)

        assert outcome.tier == Tier.EXACT_COMPONENT
        assert outcome.confidence == pytest.approx(0.9)
        assert outcome.instructions.properties == {"Type": "Filled"}
        assert outcome.instructions.overrides.text == "Save"
        assert outcome.warnings == []

    async def test_identity_mapping_without_match_service(self, inventory: DesignInventory):
        engine = ResolutionEngine(inventory)
        node = TargetNode(id="n1", role="button", properties={"size": "large"})

        outcome = await engine.resolve_node(node)

        assert outcome.tier == Tier.EXACT_COMPONENT
        assert outcome.confidence == pytest.approx(1.0)
        assert outcome.instructions.properties == {"Size": "Large"}


class TestFallbackTiers:
    """Tests for tiers 2-5 through the engine."""

    async def test_structural_match(self, inventory: DesignInventory):
        engine = ResolutionEngine(inventory)
        node = TargetNode(id="card", role="card", layout_mode=LayoutMode.VERTICAL, fill="#FFFFFF")

        outcome = await engine.resolve_node(node)

        assert outcome.tier == Tier.STRUCTURAL_COMPONENT
        assert outcome.confidence == pytest.approx(0.72)
        assert outcome.instructions.component_id == "cmp-base"
        assert outcome.instructions.overrides.fill == "#FFFFFF"
        assert outcome.attempted_tiers == [Tier.EXACT_COMPONENT, Tier.STRUCTURAL_COMPONENT]
        assert outcome.fallback_reason == FALLBACK_REASONS[Tier.STRUCTURAL_COMPONENT]
        assert outcome.warnings[0].startswith('Using base component "Base Container"')
        assert outcome.warnings[1] == "Match score: 70/100 (layout +40, flexible name +20, simple +10)"

    async def test_token_construction(self, inventory: DesignInventory):
        engine = ResolutionEngine(inventory)
        node = TargetNode(id="panel", role="panel", style_hints=["bg-blue-500", "p-4"])

        outcome = await engine.resolve_node(node)

        assert outcome.tier == Tier.TOKEN_CONSTRUCTION
        assert outcome.confidence == pytest.approx(0.9)
        assert outcome.warnings == []
        assert isinstance(outcome.instructions, ContainerInstructions)
        assert outcome.instructions.styling.fill == "#3B82F6"
        assert outcome.instructions.styling.padding.top == 16
        assert outcome.instructions.token_bindings["fill"] == "tok-blue-500"
        assert outcome.instructions.token_bindings["padding.left"] == "tok-space-4"
        assert outcome.fallback_reason == FALLBACK_REASONS[Tier.TOKEN_CONSTRUCTION]

    async def test_token_construction_reports_unresolved_hints(self, inventory: DesignInventory):
        engine = ResolutionEngine(inventory)
        node = TargetNode(
            id="panel",
            role="panel",
            style_hints=["bg-blue-500", "p-4", "rounded-lg", "bg-notacolor"],
        )

        outcome = await engine.resolve_node(node)

        assert outcome.tier == Tier.TOKEN_CONSTRUCTION
        assert outcome.warnings == [
            'Class "bg-notacolor" could not be resolved to a design variable'
        ]

    async def test_primitive_fallback(
        self, empty_inventory: DesignInventory, document: DocumentSnapshot
    ):
        engine = ResolutionEngine(empty_inventory, document=document)
        node = TargetNode(id="box", role="box", fill="#FF0000")

        outcome = await engine.resolve_node(node)

        assert outcome.tier == Tier.PRIMITIVE_FALLBACK
        assert outcome.confidence == pytest.approx(0.95)
        assert outcome.instructions.styling.fill == "#FE0101"
        assert outcome.instructions.primitive_values == {"fill": "#FE0101"}
        assert len(outcome.warnings) == 1
        assert outcome.warnings[0].startswith(
            "Color approximated: using #FE0101 instead of #FF0000"
        )
        assert outcome.attempted_tiers == [
            Tier.EXACT_COMPONENT,
            Tier.STRUCTURAL_COMPONENT,
            Tier.TOKEN_CONSTRUCTION,
            Tier.PRIMITIVE_FALLBACK,
        ]

    async def test_system_defaults(self, empty_inventory: DesignInventory):
        engine = ResolutionEngine(empty_inventory)

        outcome = await engine.resolve_node(TargetNode(id="box", role="box", fill="#FF0000"))

        assert outcome.tier == Tier.SYSTEM_DEFAULT
        assert outcome.method == ResolutionMethod.SYSTEM_DEFAULTS
        assert outcome.confidence == 0.30
        assert outcome.warnings == [SYSTEM_DEFAULT_WARNING]
        assert outcome.fallback_reason == "Using system defaults"
        assert outcome.attempted_tiers == list(Tier)

    async def test_conflict_applied_to_defaults(self, empty_inventory: DesignInventory):
        engine = ResolutionEngine(empty_inventory)
        node = TargetNode(id="box", role="box", style_hints=["rounded-lg"])

        outcome = await engine.resolve_node(node)

        assert outcome.tier == Tier.SYSTEM_DEFAULT
        assert outcome.instructions.styling.corner_radius == 8
        assert len(outcome.conflicts) == 1
        conflict = outcome.conflicts[0]
        assert conflict.property == StyleProperty.CORNER_RADIUS
        assert conflict.winner.kind == SourceKind.DECLARED
        assert "Conflict: corner_radius resolved to declared (8)" in outcome.warnings

    async def test_conflict_does_not_add_unsafe_component_overrides(self):
        icon = ComponentDescriptor(
            id="cmp-icon",
            name="Icon Button",
            anatomy=ComponentAnatomy(layout_mode=LayoutMode.HORIZONTAL, has_icon=True),
        )
        engine = ResolutionEngine(DesignInventory(components=[icon]))
        node = TargetNode(
            id="tool",
            role="toolbar",
            layout_mode=LayoutMode.HORIZONTAL,
            style_hints=["bg-red-500"],
        )

        outcome = await engine.resolve_node(node)

        assert outcome.tier == Tier.STRUCTURAL_COMPONENT
        assert outcome.instructions.component_id == "cmp-icon"
        assert outcome.instructions.overrides.fill is None
        assert outcome.conflicts == []


class TestEngineRobustness:
    """The engine always produces an outcome."""

    async def test_failing_match_service(self, inventory, failing_match_service):
        engine = ResolutionEngine(inventory, match_service=failing_match_service)
        node = TargetNode(id="n1", role="button", variant="primary")

        outcome = await engine.resolve_node(node)

        assert outcome.success
        assert outcome.tier == Tier.SYSTEM_DEFAULT
        assert failing_match_service.calls > 0

    async def test_raising_tier_is_skipped(self, inventory: DesignInventory):
        engine = ResolutionEngine(inventory)
        engine.context.mapper.ensure_mappings = AsyncMock(side_effect=RuntimeError("boom"))
        node = TargetNode(
            id="n1", role="button", variant="primary", layout_mode=LayoutMode.HORIZONTAL
        )

        outcome = await engine.resolve_node(node)

        assert outcome.tier == Tier.STRUCTURAL_COMPONENT
        assert outcome.instructions.component_id == "cmp-button"
        assert outcome.confidence == pytest.approx(0.70)

    async def test_failing_conflict_pass_keeps_outcome(self, empty_inventory, monkeypatch):
        monkeypatch.setattr(
            engine_module, "resolve_all_conflicts", MagicMock(side_effect=RuntimeError("boom"))
        )
        engine = ResolutionEngine(empty_inventory)
        node = TargetNode(id="box", role="box", style_hints=["rounded-lg"])

        outcome = await engine.resolve_node(node)

        assert outcome.tier == Tier.SYSTEM_DEFAULT
        assert outcome.conflicts == []
        assert outcome.instructions.styling.corner_radius == 6

    async def test_total_failure_uses_emergency_defaults(self, inventory, monkeypatch):
        engine = ResolutionEngine(inventory)
        monkeypatch.setattr(engine, "_resolve", AsyncMock(side_effect=RuntimeError("boom")))

        outcome = await engine.resolve_node(TargetNode(id="n1", role="button"))

        assert outcome.tier == Tier.SYSTEM_DEFAULT
        assert outcome.confidence == 0.30
        assert outcome.attempted_tiers == [Tier.SYSTEM_DEFAULT]
        assert engine.tracker.stats().total_nodes == 1

    async def test_failing_defaults_still_produce_outcome(self, inventory, monkeypatch):
        engine = ResolutionEngine(inventory)
        monkeypatch.setattr(engine, "_resolve", AsyncMock(side_effect=RuntimeError("boom")))
        monkeypatch.setattr(
            engine_module, "system_defaults", AsyncMock(side_effect=RuntimeError("defaults"))
        )

        outcome = await engine.resolve_node(TargetNode(id="n1", role="button"))

        assert outcome.success
        assert outcome.tier == Tier.SYSTEM_DEFAULT
        assert outcome.confidence == 0.30
        assert outcome.instructions == ContainerInstructions()
        assert outcome.warnings == [SYSTEM_DEFAULT_WARNING]

    async def test_failing_tracker_does_not_raise(self, inventory, monkeypatch):
        engine = ResolutionEngine(inventory)
        monkeypatch.setattr(
            engine.tracker, "record", MagicMock(side_effect=RuntimeError("tracker"))
        )

        outcome = await engine.resolve_node(TargetNode(id="n1", role="button"))

        assert outcome.tier == Tier.EXACT_COMPONENT


class TestResolveTree:
    """Tests for whole-tree resolution."""

    async def test_pre_order_results_and_summary(self, inventory: DesignInventory):
        engine = ResolutionEngine(inventory)
        root = TargetNode(
            id="root",
            role="panel",
            children=[
                TargetNode(id="a", role="button"),
                TargetNode(id="b", role="box", children=[TargetNode(id="c", role="button")]),
            ],
        )

        outcomes = await engine.resolve_tree(root)

        assert [o.node_id for o in outcomes] == ["root", "a", "b", "c"]
        assert outcomes[1].tier == Tier.EXACT_COMPONENT
        summary = engine.summary()
        assert summary.stats.total_nodes == 4
        assert summary.stats.tier_count(Tier.EXACT_COMPONENT) == 2
        assert summary.stats.tier_count(Tier.SYSTEM_DEFAULT) == 2

    async def test_shared_ids_counted_per_node(self, inventory: DesignInventory):
        engine = ResolutionEngine(inventory)
        root = TargetNode(
            id="list",
            role="panel",
            children=[TargetNode(id="item", role="button"), TargetNode(id="item", role="button")],
        )

        outcomes = await engine.resolve_tree(root)

        assert len(outcomes) == 3
        stats = engine.summary().stats
        assert stats.total_nodes == 3
        assert stats.tier_count(Tier.EXACT_COMPONENT) == 2
