"""Comparison report for two extraction results.

The statistics helpers are pure; ``render_report`` builds the text and
``print_report`` writes it to stdout.
"""

from __future__ import annotations

import json
from collections import Counter
from collections.abc import Iterable
from typing import Any

from .constants import COST_SAVINGS_NOTE
from .types import (
    ConfidenceDistribution,
    ExtractionResult,
    Failure,
    LatencyComparison,
    NormalizedContent,
    ParsedRecord,
    ParsedRecordList,
    RawText,
    Success,
    WineRecord,
)

__all__ = [
    "wine_count",
    "wine_records",
    "confidence_distribution",
    "compare_latency",
    "render_report",
    "print_report",
]


def _items(content: NormalizedContent) -> list[Any]:
    if isinstance(content, ParsedRecordList):
        return list(content.items)
    if isinstance(content, ParsedRecord):
        return [content.data]
    return []


def wine_count(content: NormalizedContent) -> int:
    """Number of wines in a reply: array length, 1 for an object, 0 for raw text."""
    if isinstance(content, ParsedRecordList):
        return len(content.items)
    if isinstance(content, ParsedRecord):
        return 1
    return 0


def wine_records(content: NormalizedContent) -> list[WineRecord]:
    """Typed view of the wines in a reply; non-object array items are skipped."""
    return [WineRecord.from_dict(item) for item in _items(content) if isinstance(item, dict)]


def _level_key(level: Any) -> str:
    if isinstance(level, float) and level.is_integer():
        level = int(level)
    return f"level{level}"


def confidence_distribution(content: NormalizedContent) -> ConfidenceDistribution:
    """Count wines per ``confidence_level``.

    Records without a confidence level (missing, null or 0) are skipped.

    Example:
        >>> items = [{"confidence_level": 5}, {"confidence_level": 5}, {"confidence_level": 9}]
        >>> confidence_distribution(ParsedRecordList(items)).to_dict()
        {'level5': 2, 'level9': 1}
    """
    counts: Counter[str] = Counter()
    for item in _items(content):
        if not isinstance(item, dict):
            continue
        level = item.get("confidence_level")
        if level:
            counts[_level_key(level)] += 1
    return ConfidenceDistribution(counts)


def compare_latency(first_ms: int, second_ms: int) -> LatencyComparison:
    """Latency delta (second minus first) and its percentage of the second.

    Example:
        >>> compare_latency(800, 1200)
        LatencyComparison(delta_ms=400, percent=33.3)
    """
    delta = second_ms - first_ms
    percent = round(delta / second_ms * 100, 1) if second_ms else 0.0
    return LatencyComparison(delta_ms=delta, percent=percent)


def _result_section(result: ExtractionResult) -> list[str]:
    lines = [f"{result.model.display_name.upper()}:", f"  Latency: {result.latency_ms}ms"]
    outcome = result.outcome

    if isinstance(outcome, Failure):
        lines.append(f"  Error: {outcome.message}")
        return lines

    content = outcome.content
    if isinstance(content, RawText):
        lines.append("  Response was not JSON:")
        lines.extend(f"    {line}" for line in content.text.splitlines() or [""])
        return lines

    lines.append(f"  Wines detected: {wine_count(content)}")
    lines.append("  Confidence distribution:")
    lines.append(json.dumps(confidence_distribution(content).to_dict(), indent=2))
    for record in wine_records(content):
        level = f" [confidence {record.confidence_level}]" if record.confidence_level else ""
        lines.append(f"  - {record.summary()}{level}")
    return lines


def _comparison_section(first: ExtractionResult, second: ExtractionResult) -> list[str]:
    latency = compare_latency(first.latency_ms, second.latency_ms)
    faster = first.model.display_name if latency.delta_ms >= 0 else second.model.display_name
    first_dist = _distribution_of(first)
    second_dist = _distribution_of(second)
    width = max(len(first.model.display_name), len(second.model.display_name)) + 1

    return [
        "COMPARISON:",
        f"  Latency delta ({second.model.display_name} - {first.model.display_name}): "
        f"{latency.delta_ms}ms ({latency.percent:.1f}% of {second.model.display_name})",
        f"  Faster model: {faster}",
        f"  Cost savings: {COST_SAVINGS_NOTE}",
        "",
        "  Confidence Quality:",
        f"    {(first.model.display_name + ':').ljust(width)} {json.dumps(first_dist.to_dict())}",
        f"    {(second.model.display_name + ':').ljust(width)} {json.dumps(second_dist.to_dict())}",
    ]


def _distribution_of(result: ExtractionResult) -> ConfidenceDistribution:
    if isinstance(result.outcome, Success):
        return confidence_distribution(result.outcome.content)
    return ConfidenceDistribution()


def render_report(first: ExtractionResult, second: ExtractionResult) -> str:
    """Build the printed summary for both results.

    Each model's section is always present; the comparison section only
    when both invocations succeeded.
    """
    sections: Iterable[list[str]] = [
        ["RESULTS", "=========="],
        _result_section(first),
        _result_section(second),
    ]
    if first.succeeded and second.succeeded:
        sections = [*sections, _comparison_section(first, second)]

    return "\n\n".join("\n".join(section) for section in sections) + "\n"


def print_report(first: ExtractionResult, second: ExtractionResult) -> None:
    print(render_report(first, second))
