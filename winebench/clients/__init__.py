"""API clients for the model services under comparison."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .base import BaseVLMClient
from .gemini import GeminiClient
from .openai import OpenAIClient

if TYPE_CHECKING:
    from winebench.config import BenchmarkConfig
    from winebench.types import ModelSpec

__all__ = ["BaseVLMClient", "GeminiClient", "OpenAIClient", "create_client"]


def create_client(model: ModelSpec, config: BenchmarkConfig) -> BaseVLMClient:
    """Create the client for a model's backend from the benchmark config."""
    if model.backend == "gemini":
        return GeminiClient(
            model=model.identifier,
            api_key=config.gemini_api_key,
            max_tokens=config.max_tokens,
            temperature=config.temperature,
        )
    return OpenAIClient(
        model=model.identifier,
        api_key=config.api_key,
        base_url=config.base_url,
        max_tokens=config.max_tokens,
        temperature=config.temperature,
    )
