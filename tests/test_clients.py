"""Tests for the VLM API clients."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import openai
import pytest
from google.genai import errors as genai_errors

from winebench.clients import GeminiClient, OpenAIClient, create_client
from winebench.config import BenchmarkConfig, resolve_model
from winebench.exceptions import (
    APIAuthenticationError,
    APIClientError,
    APIError,
    APIRateLimitError,
    APITimeoutError,
)


class TestOpenAIClient:
    """Tests for the OpenAI-compatible client."""

    def test_client_initialization_with_api_key(self):
        client = OpenAIClient(model="claude-haiku-4-5-20251001", api_key="test-key", base_url="https://example.test/v1/")

        assert client.is_available()
        assert client.client.max_retries == 0
        assert str(client.client.base_url).startswith("https://example.test/v1")

    def test_client_initialization_without_api_key(self):
        client = OpenAIClient(model="gpt-4o", api_key=None)

        assert not client.is_available()

    def test_generate_without_client_raises(self, prepared_image):
        client = OpenAIClient(model="gpt-4o", api_key=None)

        with pytest.raises(APIClientError, match="not initialized"):
            client.generate(prepared_image, "prompt")

    def test_generate_sends_image_and_returns_reply_verbatim(self, prepared_image, chat_response_factory):
        client = OpenAIClient(model="gpt-4o", api_key="test-key", max_tokens=1500)

        with patch.object(client, "client") as mock_client:
            mock_client.chat.completions.create.return_value = chat_response_factory('  {"name": "x"}  ')

            text = client.generate(prepared_image, "Extract wine info")

        assert text == '  {"name": "x"}  '
        kwargs = mock_client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o"
        assert kwargs["max_tokens"] == 1500
        assert "temperature" not in kwargs
        content = kwargs["messages"][0]["content"]
        assert content[0]["image_url"]["url"] == prepared_image.to_data_url()
        assert content[0]["image_url"]["url"].startswith("data:image/jpeg;base64,")
        assert content[1] == {"type": "text", "text": "Extract wine info"}

    def test_generate_passes_temperature(self, prepared_image, chat_response_factory):
        client = OpenAIClient(model="gpt-4o", api_key="test-key", temperature=0.0)

        with patch.object(client, "client") as mock_client:
            mock_client.chat.completions.create.return_value = chat_response_factory(None)

            assert client.generate(prepared_image, "p") == ""

        assert mock_client.chat.completions.create.call_args.kwargs["temperature"] == 0.0

    def test_empty_choices_raise(self, prepared_image):
        client = OpenAIClient(model="gpt-4o", api_key="test-key")
        response = MagicMock()
        response.choices = []

        with patch.object(client, "client") as mock_client:
            mock_client.chat.completions.create.return_value = response
            with pytest.raises(APIError, match="Empty response"):
                client.generate(prepared_image, "p")


class TestOpenAIErrorTranslation:
    """SDK exceptions map onto the benchmark's API error hierarchy."""

    def _generate_with_error(self, prepared_image, error: Exception):
        client = OpenAIClient(model="gpt-4o", api_key="test-key")
        with patch.object(client, "client") as mock_client:
            mock_client.chat.completions.create.side_effect = error
            client.generate(prepared_image, "p")

    def test_rate_limit(self, prepared_image):
        mock_response = MagicMock()
        mock_response.status_code = 429
        error = openai.RateLimitError(message="Rate limit exceeded", response=mock_response, body=None)

        with pytest.raises(APIRateLimitError) as exc_info:
            self._generate_with_error(prepared_image, error)
        assert exc_info.value.error_code == "openai_rate_limit"

    def test_authentication(self, prepared_image):
        mock_response = MagicMock()
        mock_response.status_code = 401
        error = openai.AuthenticationError(message="invalid x-api-key", response=mock_response, body=None)

        with pytest.raises(APIAuthenticationError):
            self._generate_with_error(prepared_image, error)

    def test_connection_error(self, prepared_image):
        error = openai.APIConnectionError(message="Connection failed", request=MagicMock())

        with pytest.raises(APITimeoutError) as exc_info:
            self._generate_with_error(prepared_image, error)
        assert exc_info.value.error_code == "openai_connection_error"

    def test_server_error(self, prepared_image):
        mock_response = MagicMock()
        mock_response.status_code = 500
        error = openai.InternalServerError(message="Internal server error", response=mock_response, body=None)

        with pytest.raises(APIError, match="500") as exc_info:
            self._generate_with_error(prepared_image, error)
        assert exc_info.value.error_code == "openai_api_error"


class TestGeminiClient:
    """Tests for the Gemini client."""

    def test_client_initialization_without_api_key(self):
        client = GeminiClient(model="gemini-2.5-flash", api_key=None)

        assert not client.is_available()

    def test_generate_returns_text_verbatim(self, prepared_image):
        client = GeminiClient(model="gemini-2.5-flash", api_key="test-key", max_tokens=800)

        with patch.object(client, "client") as mock_client:
            mock_client.models.generate_content.return_value = MagicMock(text=" [] \n")

            assert client.generate(prepared_image, "Extract") == " [] \n"

        kwargs = mock_client.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-2.5-flash"
        assert kwargs["config"].max_output_tokens == 800
        assert kwargs["contents"][1] == "Extract"

    def test_rate_limit(self, prepared_image):
        client = GeminiClient(model="gemini-2.5-flash", api_key="test-key")

        with patch.object(client, "client") as mock_client:
            mock_client.models.generate_content.side_effect = genai_errors.ClientError(
                429, {"error": {"message": "Resource exhausted", "status": "RESOURCE_EXHAUSTED"}}
            )
            with pytest.raises(APIRateLimitError):
                client.generate(prepared_image, "Extract")

    def test_server_error(self, prepared_image):
        client = GeminiClient(model="gemini-2.5-flash", api_key="test-key")

        with patch.object(client, "client") as mock_client:
            mock_client.models.generate_content.side_effect = genai_errors.ServerError(
                503, {"error": {"message": "Unavailable", "status": "UNAVAILABLE"}}
            )
            with pytest.raises(APIError) as exc_info:
                client.generate(prepared_image, "Extract")
        assert exc_info.value.error_code == "gemini_api_error"


class TestCreateClient:
    def test_openai_backend(self):
        config = BenchmarkConfig(api_key="sk-test", base_url="https://example.test/v1/", max_tokens=321)

        client = create_client(config.first_model, config)

        assert isinstance(client, OpenAIClient)
        assert client.model == "claude-haiku-4-5-20251001"
        assert client.base_url == "https://example.test/v1/"
        assert client.max_tokens == 321

    def test_gemini_backend(self):
        config = BenchmarkConfig(api_key="sk-test", gemini_api_key="g-test")

        client = create_client(resolve_model("gemini-2.5-flash"), config)

        assert isinstance(client, GeminiClient)
        assert client.api_key == "g-test"
