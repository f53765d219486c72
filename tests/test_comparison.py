"""Tests for the end-to-end comparison run."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from winebench.comparison import run_comparison
from winebench.exceptions import APITimeoutError, ImageNotFoundError
from winebench.report import render_report
from winebench.types import Failure, ParsedRecord, ParsedRecordList, Success


def test_models_run_in_order(
    benchmark_config, jpeg_path: Path, fake_client_factory, single_wine_reply, multi_wine_reply
):
    first_client = fake_client_factory(reply=multi_wine_reply)
    second_client = fake_client_factory(reply=single_wine_reply)

    first, second = run_comparison(benchmark_config, jpeg_path, clients=[first_client, second_client])

    assert first.model == benchmark_config.first_model
    assert second.model == benchmark_config.second_model
    assert isinstance(first.outcome, Success)
    assert isinstance(first.outcome.content, ParsedRecordList)
    assert isinstance(second.outcome, Success)
    assert isinstance(second.outcome.content, ParsedRecord)

    # Both calls receive the same prepared image and the extraction prompt
    (first_image, first_prompt), = first_client.calls
    (second_image, second_prompt), = second_client.calls
    assert first_image is second_image
    assert first_image.data == jpeg_path.read_bytes()
    assert first_prompt == second_prompt
    assert first_prompt.startswith("Extract wine information")


def test_first_failure_does_not_stop_second(
    benchmark_config, jpeg_path: Path, fake_client_factory, single_wine_reply, capsys: pytest.CaptureFixture[str]
):
    clients = [
        fake_client_factory(error=APITimeoutError("Connection error.")),
        fake_client_factory(reply=single_wine_reply),
    ]

    first, second = run_comparison(benchmark_config, jpeg_path, clients=clients)

    assert first.outcome == Failure("Connection error.", "connection_error")
    assert second.succeeded
    captured = capsys.readouterr()
    assert "Testing with Haiku 4.5..." in captured.out
    assert "Testing with Sonnet 4.5..." in captured.out
    assert "  Error: Connection error." in captured.err
    assert "  Completed in" in captured.out

    report = render_report(first, second)
    assert "Wines detected: 1" in report
    assert "Château Margaux (Château Margaux, 2015) - Red [confidence 9]" in report


def test_clients_built_from_config(benchmark_config, jpeg_path: Path, fake_client_factory):
    def build(model, config):
        return fake_client_factory(reply="{}")

    with patch("winebench.comparison.create_client", side_effect=build) as factory:
        run_comparison(benchmark_config, jpeg_path)

    assert [call.args[0] for call in factory.call_args_list] == list(benchmark_config.models)
    assert all(call.args[1] is benchmark_config for call in factory.call_args_list)


def test_missing_image_raises_before_any_call(benchmark_config, tmp_path: Path, fake_client_factory):
    client = fake_client_factory(reply="{}")

    with pytest.raises(ImageNotFoundError):
        run_comparison(benchmark_config, tmp_path / "missing.jpg", clients=[client, client])
    assert client.calls == []


def test_wrong_number_of_clients(benchmark_config, jpeg_path: Path, fake_client_factory):
    with pytest.raises(ValueError, match="Expected 2 clients"):
        run_comparison(benchmark_config, jpeg_path, clients=[fake_client_factory()])
