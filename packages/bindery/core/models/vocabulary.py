"""Approved node vocabulary and structural limits."""

from __future__ import annotations

MAX_NESTING_DEPTH = 8

APPROVED_SEMANTIC_ROLES: frozenset[str] = frozenset(
    {
        "button",
        "input",
        "label",
        "card",
        "form",
        "container",
        "header",
        "footer",
        "navigation",
        "nav",
        "list",
        "list-item",
        "image",
        "text",
        "icon",
        "link",
        "section",
        "article",
        "main",
        "aside",
        "dialog",
        "modal",
        "alert",
        "badge",
        "chip",
        "divider",
        "avatar",
        "toolbar",
        "menu",
        "menu-item",
        "tab",
        "tab-panel",
        "accordion",
        "tooltip",
        "popover",
        "dropdown",
    }
)

APPROVED_LAYOUT_PRIMITIVES: frozenset[str] = frozenset(
    {"auto-layout", "stack", "grid", "absolute", "wrap", "flex", "inline", "block"}
)
