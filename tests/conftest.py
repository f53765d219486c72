"""Pytest configuration and shared fixtures for winebench tests.

This module provides:
- Image file fixtures written with Pillow
- A validated BenchmarkConfig that never reads the real environment
- Fake clients and chat-completion responses
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest
from PIL import Image

# Ensure project root is importable when running tests via python -m pytest
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from winebench.clients.base import BaseVLMClient  # noqa: E402
from winebench.config import BenchmarkConfig  # noqa: E402
from winebench.types import MediaType, PreparedImage  # noqa: E402

SINGLE_WINE_REPLY = """Here is what I can read on the label:

```json
{
  "name": "Château Margaux",
  "producer": "Château Margaux",
  "vintage": 2015,
  "region": "Margaux, Bordeaux",
  "type": "Red",
  "variety": "Cabernet Sauvignon blend",
  "confidence_level": 9
}
```
"""

MULTI_WINE_REPLY = """[
  {"name": "Sancerre", "producer": "Henri Bourgeois", "vintage": 2021, "type": "White", "confidence_level": 8},
  {"name": "Barolo", "producer": "Vietti", "vintage": null, "type": "Red", "confidence_level": 5},
  {"name": "Cava Brut", "producer": "Freixenet", "vintage": null, "type": "Sparkling", "confidence_level": 5}
]"""


# ==================== Image Fixtures ====================


def write_image(path: Path, size: tuple[int, int] = (64, 48), fmt: str = "JPEG", mode: str = "RGB") -> Path:
    """Write a solid-color image to ``path`` and return it."""
    color: Any = (120, 30, 60) if mode == "RGB" else (120, 30, 60, 200)
    Image.new(mode, size, color).save(path, format=fmt)
    return path


@pytest.fixture
def jpeg_path(tmp_path: Path) -> Path:
    return write_image(tmp_path / "label.jpg")


@pytest.fixture
def png_path(tmp_path: Path) -> Path:
    return write_image(tmp_path / "label.png", fmt="PNG")


@pytest.fixture
def prepared_image() -> PreparedImage:
    data = b"\xff\xd8\xff\xe0fake-jpeg"
    return PreparedImage(data=data, media_type=MediaType.JPEG, size_bytes=len(data))


# ==================== Config Fixtures ====================


@pytest.fixture
def benchmark_config() -> BenchmarkConfig:
    """Config with a fake credential and default models."""
    config = BenchmarkConfig(api_key="sk-test")
    config.validate()
    return config


# ==================== Client Fixtures ====================


class FakeClient(BaseVLMClient):
    """Client returning a canned reply or raising a canned error."""

    PROVIDER_NAME = "fake"

    def __init__(self, model: str = "fake-model", reply: str = "", error: Exception | None = None):
        super().__init__(model, max_tokens=100)
        self.reply = reply
        self.error = error
        self.calls: list[tuple[PreparedImage, str]] = []
        self.client = self._setup_client()

    def _setup_client(self) -> Any:
        return object()

    def generate(self, image: PreparedImage, prompt: str) -> str:
        self.calls.append((image, prompt))
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def fake_client_factory():
    return FakeClient


def make_chat_response(content: str | None) -> MagicMock:
    """Build an object shaped like an OpenAI chat completion."""
    response = MagicMock()
    response.choices = [MagicMock()]
    response.choices[0].message.content = content
    return response


@pytest.fixture
def chat_response_factory():
    return make_chat_response


@pytest.fixture
def single_wine_reply() -> str:
    return SINGLE_WINE_REPLY


@pytest.fixture
def multi_wine_reply() -> str:
    return MULTI_WINE_REPLY


@pytest.fixture
def image_writer():
    return write_image
