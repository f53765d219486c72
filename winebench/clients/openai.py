"""
OpenAI-compatible VLM API client for wine label extraction.
Works with any chat-completions endpoint that accepts base64 image parts:
Anthropic's OpenAI SDK compatibility layer (default), OpenAI and OpenRouter.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import openai
from openai import OpenAI

from winebench.exceptions import (
    APIAuthenticationError,
    APIClientError,
    APIError,
    APIRateLimitError,
    APITimeoutError,
)

from .base import BaseVLMClient

if TYPE_CHECKING:
    from winebench.types import PreparedImage

logger = logging.getLogger(__name__)


class OpenAIClient(BaseVLMClient):
    """Chat-completions client for vision models"""

    PROVIDER_NAME = "openai"

    def __init__(
        self,
        model: str,
        api_key: str | None,
        base_url: str | None = None,
        max_tokens: int = 1500,
        temperature: float | None = None,
    ):
        """
        Initialize OpenAI-compatible API client

        Args:
            model: Model identifier (e.g. 'claude-haiku-4-5-20251001', 'openai/gpt-4o')
            api_key: API key for the endpoint
            base_url: Base URL of the endpoint (None for api.openai.com)
            max_tokens: Reply token limit
            temperature: Sampling temperature, or None for the service default
        """
        super().__init__(model, max_tokens, temperature)
        self.api_key = api_key
        self.base_url = base_url
        self.client = self._setup_client()

    def _setup_client(self) -> OpenAI | None:
        """Setup OpenAI API client"""
        if not self.api_key:
            logger.warning("No API key configured for %s", self.model)
            return None

        client_kwargs: dict[str, Any] = {"api_key": self.api_key, "max_retries": 0}
        if self.base_url:
            client_kwargs["base_url"] = self.base_url

        try:
            client = OpenAI(**client_kwargs)
        except (TypeError, ValueError) as e:
            logger.error("Failed to initialize OpenAI API client (invalid config): %s", e)
            return None

        logger.info("OpenAI API client initialized (model=%s, base_url=%s)", self.model, self.base_url or "default")
        return client

    def _build_messages(self, image: PreparedImage, prompt: str) -> list[dict[str, Any]]:
        return [
            {
                "role": "user",
                "content": [
                    {"type": "image_url", "image_url": {"url": image.to_data_url()}},
                    {"type": "text", "text": prompt},
                ],
            }
        ]

    def generate(self, image: PreparedImage, prompt: str) -> str:
        """
        Send the label image with the extraction prompt

        Args:
            image: Prepared image
            prompt: Extraction prompt

        Returns:
            Reply text (may be empty)

        Raises:
            APIError: Subclass matching the failure
        """
        client = self.client
        if client is None:
            raise APIClientError(
                f"OpenAI API client not initialized (model={self.model})", error_code="client_unavailable"
            )

        request: dict[str, Any] = {
            "model": self.model,
            "messages": self._build_messages(image, prompt),
            "max_tokens": self.max_tokens,
        }
        if self.temperature is not None:
            request["temperature"] = self.temperature

        logger.info("Requesting completion (model=%s, base_url=%s)", self.model, self.base_url or "default")
        try:
            response = client.chat.completions.create(**request)
        except openai.RateLimitError as e:
            raise APIRateLimitError(str(e), error_code="openai_rate_limit") from e
        except openai.AuthenticationError as e:
            raise APIAuthenticationError(str(e), error_code="openai_authentication_error") from e
        except (openai.APIConnectionError, openai.APITimeoutError) as e:
            raise APITimeoutError(str(e), error_code="openai_connection_error") from e
        except openai.APIStatusError as e:
            raise APIError(f"{e.status_code}: {e.message}", error_code="openai_api_error") from e
        except openai.APIError as e:
            raise APIError(str(e), error_code="openai_api_error") from e

        if not response.choices:
            raise APIError(f"Empty response from {self.model}", error_code="empty_response")
        return response.choices[0].message.content or ""
