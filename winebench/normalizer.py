"""Turn free-text model replies into JSON values.

Models are asked for JSON but often wrap it in a markdown fence or add
prose around it. ``normalize`` digs the JSON out when it can and otherwise
hands back the reply unchanged; it never raises.
"""

from __future__ import annotations

import json
import logging
import re

from .types import NormalizedContent, ParsedRecord, ParsedRecordList, RawText

logger = logging.getLogger(__name__)

FENCED_BLOCK_PATTERN = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```")
# Greedy: from the first opening bracket to the last closing one
JSON_SPAN_PATTERN = re.compile(r"[\{\[][\s\S]*[\}\]]")


def extract_json_candidate(text: str) -> str | None:
    """Return the widest bracketed span, looking inside a fenced block first."""
    fenced = FENCED_BLOCK_PATTERN.search(text)
    candidate = fenced.group(1) if fenced else text

    span = JSON_SPAN_PATTERN.search(candidate)
    return span.group(0) if span else None


def normalize(raw_text: str) -> NormalizedContent:
    """Parse the JSON embedded in a model reply.

    Args:
        raw_text: Reply text from the model

    Returns:
        ParsedRecord for an object, ParsedRecordList for an array,
        or RawText holding ``raw_text`` unchanged when nothing parses

    Example:
        >>> normalize('```json\\n{"name": "Test", "confidence_level": 7}\\n```')
        ParsedRecord(data={'name': 'Test', 'confidence_level': 7})
    """
    candidate = extract_json_candidate(raw_text)
    if candidate is None:
        logger.debug("No JSON found in reply (%d chars)", len(raw_text))
        return RawText(raw_text)

    try:
        parsed = json.loads(candidate)
    except (ValueError, RecursionError) as e:
        logger.debug("Reply JSON did not parse: %s", e)
        return RawText(raw_text)

    if isinstance(parsed, dict):
        return ParsedRecord(parsed)
    if isinstance(parsed, list):
        return ParsedRecordList(parsed)
    return RawText(raw_text)
