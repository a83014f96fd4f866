"""Hand-maintained synonym table for design token names.

Keys are canonical token names; values are names commonly used for the
same concept in other design systems. Names are compared after
``normalize_token_name``.
"""

from __future__ import annotations

import re

SEMANTIC_ALIASES: dict[str, list[str]] = {
    # Primary / brand
    "colors/primary": [
        "brand-primary",
        "primary-color",
        "sys-color-primary",
        "color-primary",
        "brand-500",
        "blue-500",
        "primary-500",
        "brand-main",
        "action-primary",
    ],
    "colors/primary/foreground": [
        "primary-foreground",
        "on-primary",
        "text-on-primary",
        "content-on-primary",
        "brand-contrast",
    ],
    # Secondary / accent
    "colors/secondary": [
        "brand-secondary",
        "secondary-color",
        "sys-color-secondary",
        "accent",
        "accent-color",
        "secondary-500",
        "purple-500",
    ],
    "colors/secondary/foreground": ["secondary-foreground", "on-secondary"],
    # State
    "colors/success": [
        "color-success",
        "sys-color-success",
        "feedback-success",
        "green-500",
        "success-500",
    ],
    "colors/warning": [
        "color-warning",
        "sys-color-warning",
        "feedback-warning",
        "yellow-500",
        "warning-500",
        "orange-500",
    ],
    "colors/error": [
        "color-error",
        "sys-color-error",
        "feedback-error",
        "destructive",
        "red-500",
        "danger",
        "error-500",
    ],
    "colors/info": ["color-info", "sys-color-info", "feedback-info", "blue-400", "info-500"],
    # Neutrals
    "colors/background": [
        "sys-color-background",
        "bg-default",
        "surface-primary",
        "canvas",
        "body-bg",
        "white",
    ],
    "colors/surface": ["sys-color-surface", "bg-surface", "surface-card", "panel-bg", "white"],
    "colors/foreground": [
        "sys-color-foreground",
        "text-primary",
        "content-primary",
        "black",
        "gray-900",
    ],
    "colors/border": [
        "border-color",
        "sys-color-border",
        "stroke-default",
        "gray-200",
        "neutral-200",
    ],
    "colors/blue/500": ["blue-500", "brand-blue", "primary-blue"],
    "colors/slate/500": ["slate-500", "gray-500", "neutral-500"],
    # Spacing
    "spacing/0": ["space-0", "spacing-none", "0"],
    "spacing/1": ["space-1", "spacing-xs", "space-4px", "4px", "gap-xs"],
    "spacing/2": ["space-2", "spacing-sm", "space-8px", "8px", "gap-sm"],
    "spacing/3": ["space-3", "spacing-md-sm", "space-12px", "12px"],
    "spacing/4": ["space-4", "spacing-md", "space-16px", "16px", "gap-md", "gap-default"],
    "spacing/5": ["space-5", "spacing-lg-sm", "space-20px", "20px"],
    "spacing/6": ["space-6", "spacing-lg", "space-24px", "24px", "gap-lg"],
    "spacing/8": ["space-8", "spacing-xl", "space-32px", "32px", "gap-xl"],
    "spacing/10": ["space-10", "spacing-2xl", "space-40px", "40px"],
    "spacing/12": ["space-12", "spacing-3xl", "space-48px", "48px"],
    # Radius
    "radius/sm": ["radius-sm", "rounded-sm", "corner-sm", "2px"],
    "radius/md": ["radius-md", "rounded-md", "corner-md", "4px", "default-radius"],
    "radius/lg": ["radius-lg", "rounded-lg", "corner-lg", "8px"],
    "radius/full": ["radius-full", "rounded-full", "circle", "9999px"],
}

_SEPARATORS = re.compile(r"[/\s_.]+")
_INVALID = re.compile(r"[^a-z0-9-]")


def normalize_token_name(name: str) -> str:
    """Lowercase; ``/``, whitespace, ``_`` and ``.`` become ``-``; drop other symbols."""
    cleaned = _SEPARATORS.sub("-", name.strip().lower())
    cleaned = _INVALID.sub("", cleaned)
    return re.sub(r"-{2,}", "-", cleaned).strip("-")


def _build_groups() -> list[frozenset[str]]:
    groups = []
    for canonical, synonyms in SEMANTIC_ALIASES.items():
        names = {normalize_token_name(canonical)}
        names.update(normalize_token_name(s) for s in synonyms)
        groups.append(frozenset(names))
    return groups


_ALIAS_GROUPS = _build_groups()


def alias_names(names: list[str]) -> set[str]:
    """All normalized synonyms of any of ``names`` (excluding the names themselves)."""
    wanted = {normalize_token_name(n) for n in names}
    related: set[str] = set()
    for group in _ALIAS_GROUPS:
        if group & wanted:
            related.update(group)
    return related - wanted
