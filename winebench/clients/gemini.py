"""
Google Gemini VLM API client for wine label extraction.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from winebench.exceptions import (
    APIAuthenticationError,
    APIClientError,
    APIError,
    APIRateLimitError,
)

from .base import BaseVLMClient

if TYPE_CHECKING:
    from winebench.types import PreparedImage

logger = logging.getLogger(__name__)

HTTP_UNAUTHORIZED = 401
HTTP_FORBIDDEN = 403
HTTP_TOO_MANY_REQUESTS = 429


class GeminiClient(BaseVLMClient):
    """Google Gemini VLM API client."""

    PROVIDER_NAME = "gemini"

    def __init__(
        self,
        model: str = "gemini-2.5-flash",
        api_key: str | None = None,
        max_tokens: int = 1500,
        temperature: float | None = None,
    ):
        super().__init__(model, max_tokens, temperature)
        self.api_key = api_key
        self.client = self._setup_client()

    def _setup_client(self) -> genai.Client | None:
        """Setup Gemini API client."""
        if not self.api_key:
            logger.warning("GEMINI_API_KEY not configured for %s", self.model)
            return None
        try:
            client = genai.Client(api_key=self.api_key)
        except (TypeError, ValueError) as e:
            logger.error("Failed to initialize Gemini client with invalid configuration: %s", e)
            return None

        logger.info("Gemini API client initialized (model=%s)", self.model)
        return client

    def _generation_config(self) -> types.GenerateContentConfig:
        kwargs: dict[str, Any] = {"max_output_tokens": self.max_tokens}
        if self.temperature is not None:
            kwargs["temperature"] = self.temperature
        return types.GenerateContentConfig(**kwargs)

    def generate(self, image: PreparedImage, prompt: str) -> str:
        """Send the label image with the extraction prompt and return the reply text."""
        client = self.client
        if client is None:
            raise APIClientError(
                f"Gemini API client not initialized (model={self.model})", error_code="client_unavailable"
            )

        contents = [
            types.Part.from_bytes(data=image.data, mime_type=image.media_type.value),
            prompt,
        ]

        logger.info("Requesting Gemini generate_content (model=%s)", self.model)
        try:
            response = client.models.generate_content(
                model=self.model,
                contents=contents,
                config=self._generation_config(),
            )
        except genai_errors.ClientError as e:
            if e.code == HTTP_TOO_MANY_REQUESTS:
                raise APIRateLimitError(str(e), error_code="gemini_rate_limit") from e
            if e.code in (HTTP_UNAUTHORIZED, HTTP_FORBIDDEN):
                raise APIAuthenticationError(str(e), error_code="gemini_authentication_error") from e
            raise APIError(str(e), error_code="gemini_api_error") from e
        except genai_errors.APIError as e:
            raise APIError(str(e), error_code="gemini_api_error") from e

        return response.text or ""
