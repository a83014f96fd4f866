"""Tests for hex parsing and perceptual color distance."""

from __future__ import annotations

import pytest

from bindery.core.utils.color import (
    delta_e,
    hex_to_lab,
    hex_to_rgb,
    is_hex_color,
    normalize_hex,
)


class TestNormalizeHex:
    """Tests for hex normalization."""

    def test_expands_short_form(self):
        assert normalize_hex("#fa0") == "#FFAA00"

    def test_adds_hash_and_uppercases(self):
        assert normalize_hex("3b82f6") == "#3B82F6"

    def test_invalid_raises(self):
        with pytest.raises(ValueError, match="Invalid hex color"):
            normalize_hex("blue")

    def test_is_hex_color(self):
        assert is_hex_color("#FFFFFF")
        assert not is_hex_color("#GGGGGG")


class TestConversions:
    """Tests for RGB and Lab conversion."""

    def test_hex_to_rgb(self):
        assert hex_to_rgb("#FF8000") == (255.0, 128.0, 0.0)

    def test_white_lab(self):
        lightness, a, b = hex_to_lab("#FFFFFF")
        assert lightness == pytest.approx(100.0, abs=0.01)
        assert a == pytest.approx(0.0, abs=0.1)
        assert b == pytest.approx(0.0, abs=0.1)


class TestDeltaE:
    """Tests for the CIE76 difference."""

    def test_identical_colors(self):
        assert delta_e("#3B82F6", "#3b82f6") == 0.0

    def test_near_colors_are_close(self):
        assert delta_e("#FF0000", "#FE0101") < 2.0

    def test_black_white_far_apart(self):
        assert delta_e("#000000", "#FFFFFF") == pytest.approx(100.0, abs=0.01)
