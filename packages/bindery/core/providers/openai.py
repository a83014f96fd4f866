"""OpenAI provider implementation."""

from __future__ import annotations

import json
import logging
import threading
from typing import TYPE_CHECKING, Any

from openai import AsyncOpenAI
from pydantic import BaseModel

from bindery.core.caching.fingerprint import compute_fingerprint
from bindery.core.caching.models import CacheKey
from bindery.core.providers.base import (
    LLMResponse,
    ProviderType,
    ResponseMetadata,
    TokenUsage,
)
from bindery.core.providers.errors import LLMProviderError

if TYPE_CHECKING:
    from bindery.core.caching import Cache

logger = logging.getLogger(__name__)

# Short-lived cache for deduplicating identical calls
LLM_CACHE_TTL_SECONDS = 3600.0


class CachedLLMResponse(BaseModel):
    """Cacheable LLM response wrapper."""

    content: dict[str, Any]
    response_id: str | None = None
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0
    model: str


class OpenAIProvider:
    """Async OpenAI provider with JSON-mode responses.

    Responsibilities:
    - JSON-mode calls through the Responses API
    - Thread-safe token tracking
    - Optional transparent deduplication through a Cache
    """

    def __init__(
        self,
        *,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float = 60.0,
        llm_cache: Cache | None = None,
    ):
        """Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key (uses env var if not provided)
            base_url: Optional API base URL
            timeout: Request timeout in seconds
            llm_cache: Optional short-lived cache for call deduplication
        """
        self._async_client = AsyncOpenAI(api_key=api_key, base_url=base_url, timeout=timeout)
        self.llm_cache = llm_cache

        self._token_lock = threading.Lock()
        self._total_tokens = TokenUsage()

    @property
    def provider_type(self) -> ProviderType:
        """Provider type identifier."""
        return ProviderType.OPENAI

    def get_token_usage(self) -> TokenUsage:
        """Get cumulative token usage (thread-safe)."""
        with self._token_lock:
            return self._total_tokens

    def reset_token_tracking(self) -> None:
        """Reset token tracking (thread-safe)."""
        with self._token_lock:
            self._total_tokens = TokenUsage()

    def _update_token_usage(self, usage: TokenUsage) -> None:
        with self._token_lock:
            self._total_tokens = self._total_tokens + usage

    def _cache_key(
        self, messages: list[dict[str, str]], model: str, temperature: float | None
    ) -> CacheKey:
        return CacheKey(
            step_id="llm.openai.json",
            step_version="1",
            input_fingerprint=compute_fingerprint(
                {"messages": messages, "model": model, "temperature": temperature}
            ),
        )

    async def generate_json_async(
        self,
        messages: list[dict[str, str]],
        model: str,
        temperature: float | None = None,
        **kwargs: Any,
    ) -> LLMResponse:
        """Generate JSON response asynchronously with transparent caching.

        Args:
            messages: List of message dicts with 'role' and 'content'
            model: Model identifier
            temperature: Sampling temperature
            **kwargs: Extra Responses API parameters

        Returns:
            LLMResponse with parsed JSON content and metadata

        Raises:
            LLMProviderError: On unrecoverable errors
        """
        cache_key = self._cache_key(messages, model, temperature)

        if self.llm_cache is not None:
            try:
                cached = await self.llm_cache.load(
                    cache_key, CachedLLMResponse, ttl_seconds=LLM_CACHE_TTL_SECONDS
                )
            except Exception as e:
                logger.warning(f"LLM cache check failed: {e}")
                cached = None
            if cached is not None:
                logger.debug(f"LLM cache hit (model={model}, temp={temperature})")
                usage = TokenUsage(
                    prompt_tokens=cached.prompt_tokens,
                    completion_tokens=cached.completion_tokens,
                    total_tokens=cached.total_tokens,
                )
                self._update_token_usage(usage)
                return LLMResponse(
                    content=cached.content,
                    metadata=ResponseMetadata(
                        response_id=cached.response_id, token_usage=usage, model=cached.model
                    ),
                )

        try:
            request_params: dict[str, Any] = {
                "model": model,
                "input": messages,
                "text": {"format": {"type": "json_object"}},
                **kwargs,
            }
            # Reasoning "mini" models reject temperature
            if temperature is not None and "mini" not in model.lower():
                request_params["temperature"] = temperature

            response = await self._async_client.responses.create(**request_params)

            content = response.output_text
            if not content:
                raise LLMProviderError("Empty response from OpenAI API")

            try:
                response_data = json.loads(content)
            except json.JSONDecodeError as e:
                logger.error(f"Failed to parse JSON response: {e}")
                raise LLMProviderError(f"Failed to parse JSON response: {e}") from e

            token_usage = TokenUsage()
            if getattr(response, "usage", None):
                token_usage = TokenUsage(
                    prompt_tokens=getattr(response.usage, "input_tokens", 0) or 0,
                    completion_tokens=getattr(response.usage, "output_tokens", 0) or 0,
                    total_tokens=getattr(response.usage, "total_tokens", 0) or 0,
                )
                self._update_token_usage(token_usage)

            llm_response = LLMResponse(
                content=response_data,
                metadata=ResponseMetadata(
                    response_id=getattr(response, "id", None),
                    token_usage=token_usage,
                    model=model,
                ),
            )
        except LLMProviderError:
            raise
        except Exception as e:
            logger.error(f"OpenAI provider error: {e}")
            raise LLMProviderError(f"Provider error: {e}") from e

        if self.llm_cache is not None and isinstance(response_data, dict):
            try:
                await self.llm_cache.store(
                    cache_key,
                    CachedLLMResponse(
                        content=response_data,
                        response_id=llm_response.metadata.response_id,
                        prompt_tokens=token_usage.prompt_tokens,
                        completion_tokens=token_usage.completion_tokens,
                        total_tokens=token_usage.total_tokens,
                        model=model,
                    ),
                    ttl_seconds=LLM_CACHE_TTL_SECONDS,
                )
            except Exception as e:
                logger.warning(f"LLM cache store failed: {e}")

        return llm_response
