"""Configuration loading utilities with JSON and YAML support."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

import yaml

from bindery.core.config.models import AppConfig

logger = logging.getLogger(__name__)


def detect_format(file_path: Path | str) -> str:
    """Detect config file format from extension.

    Args:
        file_path: Path to config file

    Returns:
        Format string: "json" or "yaml"

    Raises:
        ValueError: If format cannot be determined

    Example:
        >>> detect_format("bindery.json")
        'json'
        >>> detect_format("bindery.yml")
        'yaml'
    """
    suffix = Path(file_path).suffix.lower()

    if suffix == ".json":
        return "json"
    elif suffix in [".yaml", ".yml"]:
        return "yaml"
    else:
        raise ValueError(f"Unsupported config format: {suffix}")


def load_config(path: str | Path) -> dict[str, Any]:
    """Load and return a raw configuration (or input document) dictionary.

    Args:
        path: Path to a .json, .yaml or .yml file

    Returns:
        Raw dictionary

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the format is unsupported or the content is invalid
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Config file does not exist: {path}")

    fmt = detect_format(path)

    if fmt == "json":
        try:
            with path.open("r", encoding="utf-8") as f:
                content = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e
    else:
        try:
            with path.open("r", encoding="utf-8") as f:
                content = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e
        # safe_load returns None for empty files
        if content is None:
            content = {}

    if not isinstance(content, dict):
        raise ValueError(f"Expected a mapping at the top level of {path}")
    return content


def load_app_config(path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration.

    Missing files fall back to defaults. The OpenAI API key is read from
    ``OPENAI_API_KEY`` when the file does not set one.

    Args:
        path: Path to app config; defaults to ``AppConfig.default_path()``

    Returns:
        Validated AppConfig

    Raises:
        ValidationError: If config is invalid
    """
    if path is None:
        path = AppConfig.default_path()

    if Path(path).exists():
        config = AppConfig.model_validate(load_config(path))
    else:
        logger.debug(f"No config at {path}, using defaults")
        config = AppConfig()

    return _load_env_vars_into_config(config)


def get_openai_api_key() -> str | None:
    """Get OpenAI API key from environment."""
    return os.getenv("OPENAI_API_KEY")


def _load_env_vars_into_config(config: AppConfig) -> AppConfig:
    if config.llm.api_key is None:
        api_key = get_openai_api_key()
        if api_key:
            logger.debug("Loaded OPENAI_API_KEY from environment")
            llm = config.llm.model_copy(update={"api_key": api_key})
            return config.model_copy(update={"llm": llm})
    return config
