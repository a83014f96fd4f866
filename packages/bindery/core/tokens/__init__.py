"""Design token lookup: aliases, style hints and resolution."""

from bindery.core.tokens.aliases import SEMANTIC_ALIASES, alias_names, normalize_token_name
from bindery.core.tokens.hints import (
    StyleHint,
    hint_reference_values,
    parse_style_hint,
    parse_style_hints,
)
from bindery.core.tokens.resolver import TokenMatch, TokenMatchMethod, TokenResolver

__all__ = [
    "SEMANTIC_ALIASES",
    "StyleHint",
    "TokenMatch",
    "TokenMatchMethod",
    "TokenResolver",
    "alias_names",
    "hint_reference_values",
    "normalize_token_name",
    "parse_style_hint",
    "parse_style_hints",
]
