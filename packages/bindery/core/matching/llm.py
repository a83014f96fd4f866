"""Match service backed by a JSON-mode LLM provider."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from bindery.core.matching.models import (
    PropertyAnalysis,
    PropertyAnalysisRequest,
    TokenMatchRequest,
    TokenMatchSuggestion,
)
from bindery.core.matching.prompts import (
    PROPERTY_ANALYSIS_SYSTEM,
    PROPERTY_ANALYSIS_USER,
    TOKEN_MATCH_SYSTEM,
    TOKEN_MATCH_USER,
    render,
)
from bindery.core.providers.base import LLMProvider
from bindery.core.providers.errors import LLMProviderError

logger = logging.getLogger(__name__)


class LLMMatchService:
    """``MatchService`` implementation that asks an LLM.

    Raises ``LLMProviderError`` for transport failures and malformed
    replies; callers treat either as a miss.
    """

    def __init__(
        self, provider: LLMProvider, *, model: str, temperature: float | None = 0.0
    ) -> None:
        self.provider = provider
        self.model = model
        self.temperature = temperature

    async def _ask(self, system: str, user: str) -> dict[str, Any]:
        response = await self.provider.generate_json_async(
            messages=[
                {"role": "developer", "content": system},
                {"role": "user", "content": user},
            ],
            model=self.model,
            temperature=self.temperature,
        )
        if not isinstance(response.content, dict):
            raise LLMProviderError(f"Expected JSON object, got {type(response.content).__name__}")
        return response.content

    async def analyze_property(self, request: PropertyAnalysisRequest) -> PropertyAnalysis:
        content = await self._ask(
            PROPERTY_ANALYSIS_SYSTEM,
            render(PROPERTY_ANALYSIS_USER, **request.model_dump()),
        )

        classification: dict[str, Any] = {"category": content.get("category")}
        if classification["category"] == "custom":
            classification["key"] = content.get("key") or request.native_property.lower()

        try:
            return PropertyAnalysis.model_validate(
                {
                    "native_property": request.native_property,
                    "classification": classification,
                    "values": content.get("values", []),
                }
            )
        except ValidationError as e:
            logger.debug(f"Malformed property analysis for {request.native_property}: {e}")
            raise LLMProviderError(f"Malformed property analysis: {e}") from e

    async def match_token(self, request: TokenMatchRequest) -> TokenMatchSuggestion:
        content = await self._ask(
            TOKEN_MATCH_SYSTEM,
            render(
                TOKEN_MATCH_USER,
                requested=request.requested,
                kind=request.kind.value,
                candidates=request.candidates,
            ),
        )
        try:
            return TokenMatchSuggestion.model_validate(content)
        except ValidationError as e:
            raise LLMProviderError(f"Malformed token match: {e}") from e
