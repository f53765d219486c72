"""
winebench - compare vision language models on wine label extraction.

Sends one bottle photo to two models, normalizes their JSON replies and
reports latency and self-reported confidence side by side.
"""

from __future__ import annotations

from .comparison import run_comparison
from .config import BenchmarkConfig, resolve_model
from .image import prepare_image
from .invoker import invoke
from .normalizer import normalize
from .report import compare_latency, confidence_distribution, print_report, render_report, wine_count

__version__ = "0.1.0"

__all__ = [
    "BenchmarkConfig",
    "compare_latency",
    "confidence_distribution",
    "invoke",
    "normalize",
    "prepare_image",
    "print_report",
    "render_report",
    "resolve_model",
    "run_comparison",
    "wine_count",
]
