"""LLM provider abstraction."""

from bindery.core.providers.base import (
    LLMProvider,
    LLMResponse,
    ProviderType,
    ResponseMetadata,
    TokenUsage,
)
from bindery.core.providers.errors import LLMProviderError
from bindery.core.providers.openai import OpenAIProvider

__all__ = [
    "LLMProvider",
    "LLMProviderError",
    "LLMResponse",
    "OpenAIProvider",
    "ProviderType",
    "ResponseMetadata",
    "TokenUsage",
]
