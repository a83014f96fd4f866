"""Parsing of atomic style hints (``bg-blue-500``, ``p-4``, ``rounded-lg``...).

Each recognized hint becomes a ``StyleHint``: the style property it sets,
the token names it should bind to (canonical first), and the reference
value from the system scales.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass

from bindery.core.defaults import FONT_SIZE_SCALE, RADIUS_SCALE, SPACING_SCALE, palette_color
from bindery.core.models.enums import StyleProperty, TokenKind
from bindery.core.models.style import PaddingBox

logger = logging.getLogger(__name__)

ALL_SIDES = ("top", "right", "bottom", "left")

_PADDING_SIDES: dict[str, tuple[str, ...]] = {
    "p": ALL_SIDES,
    "px": ("left", "right"),
    "py": ("top", "bottom"),
    "pt": ("top",),
    "pr": ("right",),
    "pb": ("bottom",),
    "pl": ("left",),
}

_PADDING_RE = re.compile(r"^(p|px|py|pt|pr|pb|pl)-([0-9.]+|px)$")
_SPACING_RE = re.compile(r"^(gap|w|h)-([0-9.]+|px)$")
_COLOR_RE = re.compile(r"^(bg|border)-([a-z]+(?:-\d{2,3})?)$")
_RADIUS_RE = re.compile(r"^rounded(?:-([a-z0-9]+))?$")
_TEXT_RE = re.compile(r"^text-([a-z0-9]+)$")


@dataclass(frozen=True)
class StyleHint:
    """A parsed style hint."""

    raw: str
    prop: StyleProperty
    kind: TokenKind
    token_names: tuple[str, ...]
    reference: str | float
    sides: tuple[str, ...] = ()

    @property
    def binding_keys(self) -> tuple[str, ...]:
        """Keys used in container ``token_bindings``."""
        if self.prop is StyleProperty.PADDING:
            return tuple(f"padding.{side}" for side in self.sides)
        return (self.prop.value,)


def _spacing_hint(
    raw: str, prop: StyleProperty, key: str, sides: tuple[str, ...] = ()
) -> StyleHint | None:
    px = SPACING_SCALE.get(key)
    if px is None:
        return None
    return StyleHint(
        raw=raw,
        prop=prop,
        kind=TokenKind.NUMBER,
        token_names=(f"spacing/{key}", f"space-{key}"),
        reference=float(px),
        sides=sides,
    )


def parse_style_hint(hint: str) -> StyleHint | None:
    """Parse one hint; None when the hint is not a recognized shorthand."""
    raw = hint.strip()

    if m := _PADDING_RE.match(raw):
        return _spacing_hint(raw, StyleProperty.PADDING, m.group(2), _PADDING_SIDES[m.group(1)])

    if m := _SPACING_RE.match(raw):
        prop = {
            "gap": StyleProperty.ITEM_SPACING,
            "w": StyleProperty.WIDTH,
            "h": StyleProperty.HEIGHT,
        }[m.group(1)]
        return _spacing_hint(raw, prop, m.group(2))

    if m := _COLOR_RE.match(raw):
        name = m.group(2)
        hex_value = palette_color(name)
        if hex_value is None:
            return None
        prop = StyleProperty.FILL if m.group(1) == "bg" else StyleProperty.STROKE
        return StyleHint(
            raw=raw,
            prop=prop,
            kind=TokenKind.COLOR,
            token_names=(f"colors/{name.replace('-', '/')}", name),
            reference=hex_value,
        )

    if m := _RADIUS_RE.match(raw):
        key = m.group(1) or "DEFAULT"
        px = RADIUS_SCALE.get(key)
        if px is None:
            return None
        label = key.lower()
        return StyleHint(
            raw=raw,
            prop=StyleProperty.CORNER_RADIUS,
            kind=TokenKind.NUMBER,
            token_names=(f"radius/{label}", raw),
            reference=float(px),
        )

    if m := _TEXT_RE.match(raw):
        key = m.group(1)
        px = FONT_SIZE_SCALE.get(key)
        if px is None:
            return None
        return StyleHint(
            raw=raw,
            prop=StyleProperty.FONT_SIZE,
            kind=TokenKind.NUMBER,
            token_names=(f"font-size/{key}", raw),
            reference=float(px),
        )

    return None


def parse_style_hints(hints: Iterable[str]) -> list[tuple[str, StyleHint | None]]:
    """Parse hints in order, keeping unrecognized ones as ``None``."""
    parsed = []
    for hint in hints:
        result = parse_style_hint(hint)
        if result is None:
            logger.debug(f"Unrecognized style hint: {hint!r}")
        parsed.append((hint, result))
    return parsed


def hint_reference_values(hints: Iterable[str]) -> dict[StyleProperty, str | float | PaddingBox]:
    """Reference values declared by hints, one per property.

    Padding hints merge per side; later hints win.
    """
    values: dict[StyleProperty, str | float | PaddingBox] = {}
    padding: dict[str, float] = {}
    for _, hint in parse_style_hints(hints):
        if hint is None:
            continue
        if hint.prop is StyleProperty.PADDING:
            for side in hint.sides:
                padding[side] = float(hint.reference)
        else:
            values[hint.prop] = hint.reference
    if padding:
        values[StyleProperty.PADDING] = PaddingBox(**padding)
    return values
