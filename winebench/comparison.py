"""Run the two-model comparison from image to results."""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from .clients import create_client
from .image import prepare_image
from .invoker import invoke
from .prompt import load_prompt
from .types import ExtractionRequest, ExtractionResult, Failure

if TYPE_CHECKING:
    from .clients import BaseVLMClient
    from .config import BenchmarkConfig

logger = logging.getLogger(__name__)


def run_comparison(
    config: BenchmarkConfig,
    image_path: str | Path,
    clients: Sequence[BaseVLMClient] | None = None,
) -> tuple[ExtractionResult, ExtractionResult]:
    """Prepare the image and query both models, one after the other.

    Args:
        config: Validated benchmark configuration
        image_path: Label photo to send
        clients: Clients for the first and second model; built from config if None

    Returns:
        Results for the first and second model, in that order

    Raises:
        ImageNotFoundError: If the image path is not a readable file
        FileFormatError: If the image needs resizing and cannot be decoded
        InvalidConfigError: If a configured prompt file is unusable
    """
    prompt = load_prompt(config.prompt_path)
    image = prepare_image(
        image_path,
        max_bytes=config.max_image_bytes,
        target_bytes=config.target_image_bytes,
        quality=config.jpeg_quality,
    )

    if clients is None:
        clients = [create_client(model, config) for model in config.models]
    if len(clients) != len(config.models):
        raise ValueError(f"Expected {len(config.models)} clients, got {len(clients)}")

    print("Running tests...\n")
    results: list[ExtractionResult] = []
    for model, client in zip(config.models, clients, strict=True):
        print(f"Testing with {model.display_name}...")
        request = ExtractionRequest(model=model, prompt=prompt, image=image)
        result = invoke(client, request)
        if isinstance(result.outcome, Failure):
            print(f"  Error: {result.outcome.message}", file=sys.stderr)
        print(f"  Completed in {result.latency_ms}ms\n")
        results.append(result)

    logger.info(
        "Comparison finished: %s=%dms, %s=%dms",
        results[0].model.display_name,
        results[0].latency_ms,
        results[1].model.display_name,
        results[1].latency_ms,
    )
    return results[0], results[1]
