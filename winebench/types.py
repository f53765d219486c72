"""Data types for the wine label benchmark.

Every value here is created, consumed and discarded within a single run.

Normalized model replies are one of three shapes:
    ParsedRecord      - the reply held a single JSON object
    ParsedRecordList  - the reply held a JSON array (several wines)
    RawText           - no parseable JSON; the reply text as-is

An invocation outcome is either ``Success`` (carrying normalized content)
or ``Failure`` (carrying the error message).
"""

from __future__ import annotations

import base64
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

__all__ = [
    "MediaType",
    "PreparedImage",
    "ModelSpec",
    "ExtractionRequest",
    "WineRecord",
    "ParsedRecord",
    "ParsedRecordList",
    "RawText",
    "NormalizedContent",
    "Success",
    "Failure",
    "Outcome",
    "ExtractionResult",
    "ConfidenceDistribution",
    "LatencyComparison",
]


class MediaType(str, Enum):
    """Image MIME types accepted by the model services."""

    JPEG = "image/jpeg"
    PNG = "image/png"
    GIF = "image/gif"
    WEBP = "image/webp"

    @classmethod
    def from_extension(cls, extension: str) -> MediaType:
        """Map a file extension (with or without dot) to a media type.

        Unknown extensions fall back to JPEG.
        """
        ext = extension.lower().lstrip(".")
        return _EXTENSION_MEDIA_TYPES.get(ext, cls.JPEG)


_EXTENSION_MEDIA_TYPES = {
    "jpg": MediaType.JPEG,
    "jpeg": MediaType.JPEG,
    "png": MediaType.PNG,
    "gif": MediaType.GIF,
    "webp": MediaType.WEBP,
}


@dataclass(frozen=True)
class PreparedImage:
    """Encoded image bytes ready to send to a model."""

    data: bytes
    media_type: MediaType
    size_bytes: int
    resized: bool = False
    original_size_bytes: int | None = None

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("utf-8")

    def to_data_url(self) -> str:
        """Return a ``data:`` URL as used by OpenAI-compatible image parts."""
        return f"data:{self.media_type.value};base64,{self.to_base64()}"


@dataclass(frozen=True)
class ModelSpec:
    """A model to benchmark.

    Attributes:
        identifier: Model name sent to the service
        display_name: Name shown in the report
        backend: "openai" (OpenAI-compatible chat completions) or "gemini"
    """

    identifier: str
    display_name: str
    backend: str = "openai"


@dataclass(frozen=True)
class ExtractionRequest:
    model: ModelSpec
    prompt: str
    image: PreparedImage


@dataclass(frozen=True)
class WineRecord:
    """Wine metadata as reported by a model.

    Models are asked for every field but frequently omit or mistype some, so
    ``from_dict`` keeps whatever is present and leaves the rest as ``None``.
    """

    name: str | None = None
    producer: str | None = None
    vintage: int | None = None
    region: str | None = None
    type: str | None = None
    variety: str | None = None
    confidence_level: int | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> WineRecord:
        return cls(
            name=_optional_str(data.get("name")),
            producer=_optional_str(data.get("producer")),
            vintage=_optional_int(data.get("vintage")),
            region=_optional_str(data.get("region")),
            type=_optional_str(data.get("type")),
            variety=_optional_str(data.get("variety")),
            confidence_level=_optional_int(data.get("confidence_level")),
        )

    def summary(self) -> str:
        """One-line description, e.g. ``Opus One (Opus One Winery, 2018) - Red``."""
        details = [part for part in (self.producer, str(self.vintage) if self.vintage else None) if part]
        text = self.name or "Unnamed wine"
        if details:
            text += f" ({', '.join(details)})"
        if self.type:
            text += f" - {self.type}"
        return text


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


def _optional_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


# ============================================================================
# Normalized content
# ============================================================================


@dataclass(frozen=True)
class ParsedRecord:
    """A single JSON object extracted from a reply."""

    data: dict[str, Any]


@dataclass(frozen=True)
class ParsedRecordList:
    """A JSON array extracted from a reply."""

    items: list[Any]


@dataclass(frozen=True)
class RawText:
    """Reply text that did not contain parseable JSON."""

    text: str


NormalizedContent = ParsedRecord | ParsedRecordList | RawText


# ============================================================================
# Invocation outcome
# ============================================================================


@dataclass(frozen=True)
class Success:
    content: NormalizedContent
    raw_text: str = ""


@dataclass(frozen=True)
class Failure:
    message: str
    error_code: str = "api_error"


Outcome = Success | Failure


@dataclass(frozen=True)
class ExtractionResult:
    """Latency and outcome of one model invocation."""

    model: ModelSpec
    latency_ms: int
    outcome: Outcome

    @property
    def succeeded(self) -> bool:
        return isinstance(self.outcome, Success)

    @property
    def failed(self) -> bool:
        return isinstance(self.outcome, Failure)


# ============================================================================
# Report values
# ============================================================================


@dataclass(frozen=True)
class ConfidenceDistribution:
    """Read-only mapping of ``"level{N}"`` to the number of wines at that level."""

    counts: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "counts", MappingProxyType(dict(self.counts)))

    def to_dict(self) -> dict[str, int]:
        return dict(self.counts)

    def __len__(self) -> int:
        return len(self.counts)

    def __getitem__(self, key: str) -> int:
        return self.counts[key]


@dataclass(frozen=True)
class LatencyComparison:
    """Second model latency minus first, and that delta as a share of the second."""

    delta_ms: int
    percent: float
