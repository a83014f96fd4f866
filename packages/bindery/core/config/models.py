"""Configuration models for Bindery."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = Field(default=False, description="Emit JSON lines")
    filename: str | None = Field(default=None, description="Log file; stdout when unset")


class LLMConfig(BaseModel):
    """Matching service LLM configuration."""

    enabled: bool = Field(default=False, description="Use the LLM for classification/matching")
    provider: str = Field(default="openai", pattern="^(openai)$")
    model: str = Field(default="gpt-4.1-mini", description="LLM model name")
    temperature: float = Field(default=0.0, ge=0.0, le=2.0)
    timeout_seconds: float = Field(default=60.0, gt=0, description="Timeout for LLM API call")
    api_key: str | None = Field(default=None, description="Falls back to OPENAI_API_KEY")
    base_url: str | None = None


class CacheConfig(BaseModel):
    """Cache backend selection."""

    backend: str = Field(default="memory", pattern="^(memory|fs|none)$")
    root: str = Field(default=".bindery_cache", description="Root directory for the fs backend")
    ttl_seconds: float | None = Field(default=None, gt=0)


class ResolutionSettings(BaseModel):
    """Thresholds for the tiered resolution engine."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    fuzzy_threshold: float = Field(
        default=0.6, ge=0.0, le=1.0, description="Minimum key similarity for fuzzy matches"
    )
    exact_match_threshold: float = Field(
        default=0.7, ge=0.0, le=1.0, description="Tier 1 gate on confidence and mappability"
    )
    structural_candidates: int = Field(default=3, ge=1, description="Tier 2 ranked candidates")
    token_hint_confidence: float = Field(
        default=0.8, ge=0.0, le=1.0, description="Per-hint confidence needed in Tier 3"
    )
    token_coverage: float = Field(
        default=0.7, ge=0.0, le=1.0, description="Share of hints that must resolve in Tier 3"
    )
    semantic_match_threshold: float = Field(default=0.75, ge=0.0, le=1.0)
    color_proximity_limit: float = Field(
        default=10.0, gt=0, description="Maximum perceptual distance for color fallback"
    )
    primitive_min_confidence: float = Field(default=0.35, ge=0.0, le=1.0)


class AppConfig(BaseModel):
    """Application-level configuration."""

    model_config = ConfigDict(extra="ignore")

    logging: LoggingConfig = LoggingConfig()
    llm: LLMConfig = LLMConfig()
    cache: CacheConfig = CacheConfig()
    resolution: ResolutionSettings = ResolutionSettings()

    @classmethod
    def default_path(cls) -> Path:
        """Default path for application config."""
        return Path("bindery.yaml")
