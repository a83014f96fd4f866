"""External classification / matching collaborator."""

from bindery.core.matching.llm import LLMMatchService
from bindery.core.matching.models import (
    Classification,
    ComponentMappings,
    CustomClassification,
    KnownClassification,
    PropertyAnalysis,
    PropertyAnalysisRequest,
    TokenMatchRequest,
    TokenMatchSuggestion,
    ValueMapping,
)
from bindery.core.matching.protocols import MatchService

__all__ = [
    "Classification",
    "ComponentMappings",
    "CustomClassification",
    "KnownClassification",
    "LLMMatchService",
    "MatchService",
    "PropertyAnalysis",
    "PropertyAnalysisRequest",
    "TokenMatchRequest",
    "TokenMatchSuggestion",
    "ValueMapping",
]
