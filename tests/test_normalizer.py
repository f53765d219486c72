"""Tests for reply normalization."""

from __future__ import annotations

import pytest

from winebench.normalizer import extract_json_candidate, normalize
from winebench.types import ParsedRecord, ParsedRecordList, RawText


def test_fenced_json_block_parsed():
    raw = '```json\n{"name":"Test","confidence_level":7}\n```'

    result = normalize(raw)

    assert result == ParsedRecord({"name": "Test", "confidence_level": 7})


def test_fence_without_language_tag(single_wine_reply: str):
    result = normalize(single_wine_reply.replace("```json", "```"))

    assert isinstance(result, ParsedRecord)
    assert result.data["vintage"] == 2015


def test_json_surrounded_by_prose():
    raw = 'Sure! {"name": "Rioja", "confidence_level": 6} Let me know if you need more.'

    assert normalize(raw) == ParsedRecord({"name": "Rioja", "confidence_level": 6})


def test_array_reply_becomes_record_list(multi_wine_reply: str):
    result = normalize(multi_wine_reply)

    assert isinstance(result, ParsedRecordList)
    assert len(result.items) == 3
    assert result.items[0]["name"] == "Sancerre"


def test_text_without_brackets_returned_unchanged():
    raw = "I could not read the label on this bottle."

    assert normalize(raw) == RawText(raw)


@pytest.mark.parametrize(
    "raw",
    [
        '{"name": "Broken", "confidence_level": }',
        "Levels {high} and [low]",
        '```json\n{"unterminated": "value\n```',
        "",
    ],
)
def test_unparseable_reply_falls_back_to_raw_text(raw: str):
    assert normalize(raw) == RawText(raw)


def test_fallback_keeps_original_not_fenced_text():
    raw = "Result:\n```\nnot json at all { really\n```"

    assert normalize(raw) == RawText(raw)


def test_widest_span_is_used():
    # Two separate objects make the greedy span invalid JSON
    raw = '{"a": 1} and {"b": 2}'

    assert extract_json_candidate(raw) == raw
    assert normalize(raw) == RawText(raw)


def test_only_first_fenced_block_considered():
    raw = '```json\n{"first": true}\n```\ntext\n```json\n{"second": true}\n```'

    assert normalize(raw) == ParsedRecord({"first": True})
