"""Prompt templates for the LLM-backed match service (Jinja2)."""

from __future__ import annotations

from typing import Any

from jinja2 import Environment, StrictUndefined

_env = Environment(undefined=StrictUndefined, trim_blocks=True, lstrip_blocks=True)

PROPERTY_ANALYSIS_SYSTEM = """\
You classify properties of UI components from a design library.
Categories: variant (visual emphasis), size (scale), state (interaction state),
style (cosmetic switches), custom (anything else; give a short kebab-case key).
Map every option to a lowercase semantic value with a confidence between 0 and 1.
Respond with JSON only:
{"category": "...", "key": "<custom only>", "values": [
  {"semantic_value": "...", "native_value": "...", "confidence": 0.0}
]}
"""

PROPERTY_ANALYSIS_USER = """\
Component: {{ component_name }}
Property: {{ native_property }}
Options:
{% for option in options %}
- {{ option }}
{% endfor %}
"""

TOKEN_MATCH_SYSTEM = """\
You match a requested design token name to the closest variable in a design system.
Only answer with a name from the candidate list, or null if none fits.
Respond with JSON only: {"token_name": "..." | null, "confidence": 0.0, "reasoning": "..."}
"""

TOKEN_MATCH_USER = """\
Requested {{ kind }} token: {{ requested }}
Candidates:
{% for name in candidates %}
- {{ name }}
{% endfor %}
"""


def render(template: str, **variables: Any) -> str:
    """Render a template; missing variables raise ``jinja2.UndefinedError``."""
    return _env.from_string(template).render(**variables)
