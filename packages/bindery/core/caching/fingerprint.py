"""Stable input fingerprints for cache keys."""

from __future__ import annotations

import hashlib
import json
from typing import Any

from pydantic import BaseModel


def _canonical(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, dict):
        return {str(k): _canonical(v) for k, v in value.items()}
    if isinstance(value, list | tuple):
        return [_canonical(v) for v in value]
    return value


def compute_fingerprint(inputs: Any) -> str:
    """SHA256 of the canonical JSON encoding of ``inputs``.

    Args:
        inputs: JSON-compatible value or pydantic model (nested allowed)

    Returns:
        Hex digest, stable across runs and key ordering
    """
    canonical = json.dumps(
        _canonical(inputs),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
