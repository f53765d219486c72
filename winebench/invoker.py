"""Single-shot model invocation with latency measurement."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from .exceptions import APIError
from .misc import elapsed_ms
from .normalizer import normalize
from .types import ExtractionRequest, ExtractionResult, Failure, Success

if TYPE_CHECKING:
    from .clients import BaseVLMClient

logger = logging.getLogger(__name__)


def invoke(client: BaseVLMClient, request: ExtractionRequest) -> ExtractionResult:
    """Send one extraction request and capture the outcome as data.

    Latency is wall-clock time around the service call, on success and on
    failure. Errors never propagate; they become a ``Failure`` so the other
    model can still be measured.

    Args:
        client: Client for the request's model backend
        request: Model, prompt and prepared image

    Returns:
        ExtractionResult with latency in milliseconds
    """
    start = time.perf_counter()
    try:
        raw_text = client.generate(request.image, request.prompt)
    except APIError as e:
        latency = elapsed_ms(start)
        logger.error("%s failed after %dms (%s): %s", request.model.display_name, latency, e.error_code, e)
        return ExtractionResult(request.model, latency, Failure(str(e), e.error_code))
    except Exception as e:  # noqa: BLE001 - any failure is reported, not raised
        latency = elapsed_ms(start)
        logger.error("Unexpected error from %s after %dms: %s", request.model.display_name, latency, e, exc_info=True)
        return ExtractionResult(request.model, latency, Failure(str(e) or type(e).__name__, "unexpected_error"))

    latency = elapsed_ms(start)
    logger.debug("%s replied in %dms (%d chars)", request.model.display_name, latency, len(raw_text))
    return ExtractionResult(request.model, latency, Success(normalize(raw_text), raw_text))
