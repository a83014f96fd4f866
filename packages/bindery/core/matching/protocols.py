"""Protocol for the asynchronous classification / matching collaborator."""

from __future__ import annotations

from typing import Protocol

from bindery.core.matching.models import (
    PropertyAnalysis,
    PropertyAnalysisRequest,
    TokenMatchRequest,
    TokenMatchSuggestion,
)


class MatchService(Protocol):
    """External service that classifies properties and suggests token matches.

    Implementations may fail; every caller contains the failure and
    degrades to the next strategy.
    """

    async def analyze_property(self, request: PropertyAnalysisRequest) -> PropertyAnalysis:
        """Classify a native property and map its options to semantic values."""
        ...

    async def match_token(self, request: TokenMatchRequest) -> TokenMatchSuggestion:
        """Pick the candidate token that best matches the requested name."""
        ...
