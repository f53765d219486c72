"""Extraction prompt for wine labels.

The built-in prompt can be replaced by a YAML file with a top-level
``prompt`` key (see ``prompt_path`` in the benchmark config).
"""

from __future__ import annotations

import logging
import textwrap
from pathlib import Path

import yaml

from .exceptions import InvalidConfigError

logger = logging.getLogger(__name__)

WINE_EXTRACTION_PROMPT = textwrap.dedent(
    """\
    Extract wine information from this bottle image. Return JSON (or JSON array if multiple wines visible).

    IMPORTANT: Make your best guess even if uncertain. If you're unsure about a field, provide your best estimate and reflect the uncertainty in the confidence_level (1-10).
    - Don't say "Unknown" or "Not visible"
    - If you can't read something clearly, make an educated guess based on what you can see
    - Use the confidence_level to indicate how certain you are (10 = very certain, 1 = just guessing)

    Required fields for each wine:
    - name: Wine name (guess if unclear)
    - producer: Producer/winery name (guess if unclear)
    - vintage: Year (null if truly not visible)
    - region: Wine region (guess based on label clues)
    - type: Red/White/Sparkling/Rosé/Dessert (guess from bottle color/shape)
    - variety: Grape variety (guess based on region/label)
    - confidence_level: 1-10 (how confident you are in this extraction)"""
)


def load_prompt(prompt_path: str | Path | None = None) -> str:
    """Return the extraction prompt, optionally read from a YAML file.

    Args:
        prompt_path: YAML file with a ``prompt`` string; None for the built-in prompt

    Raises:
        InvalidConfigError: If the file cannot be read or has no usable ``prompt``
    """
    if prompt_path is None:
        return WINE_EXTRACTION_PROMPT

    path = Path(prompt_path)
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise InvalidConfigError(f"Failed to load prompt file {path}: {e}") from e

    prompt = data.get("prompt") if isinstance(data, dict) else None
    if not isinstance(prompt, str) or not prompt.strip():
        raise InvalidConfigError(f"Prompt file {path} has no 'prompt' text")

    logger.debug("Loaded extraction prompt from %s", path)
    return prompt.strip()
