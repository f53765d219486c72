"""Base class for VLM API clients.

Every provider exposes the same small surface: ``generate`` sends one
image plus prompt and returns the reply text, raising an ``APIError``
subclass on any transport or service failure.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from winebench.types import PreparedImage

logger = logging.getLogger(__name__)


class BaseVLMClient(ABC):
    """Abstract base class for VLM API clients.

    Attributes:
        model: The model identifier sent to the service
        client: The underlying SDK client, or None if setup failed
    """

    PROVIDER_NAME: str = "base"

    def __init__(self, model: str, max_tokens: int, temperature: float | None = None):
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.client: Any = None

    @abstractmethod
    def _setup_client(self) -> Any:
        """Set up and return the SDK client, or None if setup fails."""
        ...

    def is_available(self) -> bool:
        """Check if the SDK client is initialized."""
        return self.client is not None

    @abstractmethod
    def generate(self, image: PreparedImage, prompt: str) -> str:
        """Send the image and prompt and return the reply text.

        Raises:
            APIError: On any transport or service failure
        """
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(model={self.model!r}, available={self.is_available()})"
