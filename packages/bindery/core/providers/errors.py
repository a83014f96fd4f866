"""Errors raised by LLM providers."""


class LLMProviderError(Exception):
    """Unrecoverable provider failure (transport, empty or non-JSON response)."""
