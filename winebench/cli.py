"""Command-line interface for winebench.

Compares two vision language models on extracting wine metadata from a bottle photo.
"""

from __future__ import annotations

import argparse
import logging
import sys
import textwrap
from pathlib import Path

from dotenv import load_dotenv

from .comparison import run_comparison
from .config import BenchmarkConfig
from .exceptions import ConfigurationError, FileError, MissingConfigError
from .misc import tz_now
from .report import print_report

USAGE = textwrap.dedent(
    """\
    Usage: python main.py <path-to-wine-image>
    Example: python main.py ~/Downloads/wine-bottle.jpg"""
)


def setup_logging(level: str = "WARNING") -> None:
    """Setup logging configuration with timestamped log files.

    Log records go to stderr and ``.logs/``; stdout is reserved for the report.
    """
    logs_dir = Path(".logs")
    logs_dir.mkdir(exist_ok=True)

    timestamp = tz_now().strftime("%Y-%m-%d_%H-%M-%S")
    log_filename = logs_dir / f"{timestamp}_winebench.log"

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr), logging.FileHandler(log_filename, encoding="utf-8")],
        force=True,
    )


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Compare two vision language models on wine label extraction",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent(
            """
            Examples:
              # Default comparison (Haiku 4.5 vs Sonnet 4.5)
              export ANTHROPIC_API_KEY=your-api-key-here
              python main.py ~/Downloads/wine-bottle.jpg

              # Other models
              python main.py label.jpg --first-model claude-haiku-4-5-20251001 --second-model gemini-2.5-flash

              # Settings from a YAML file
              python main.py label.jpg --config settings/benchmark.yaml
            """
        ),
    )

    parser.add_argument("image", nargs="?", help="Path to the wine bottle image")
    parser.add_argument("--first-model", type=str, help="Model identifier tested first (default: Haiku 4.5)")
    parser.add_argument("--second-model", type=str, help="Model identifier tested second (default: Sonnet 4.5)")
    parser.add_argument("--config", type=str, help="YAML config file (default: settings/benchmark.yaml if present)")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    load_dotenv()

    parser = _build_argument_parser()
    args = parser.parse_args(argv)

    if not args.image:
        print(USAGE)
        return 1

    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    return _execute_command(args, logger)


def _execute_command(args: argparse.Namespace, logger: logging.Logger) -> int:
    try:
        config = BenchmarkConfig.load(
            args.config,
            first_model=args.first_model,
            second_model=args.second_model,
        )
        config.validate()
    except MissingConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        if exc.env_var:
            print("\nSet your API key:")
            print(f"  export {exc.env_var}=your-api-key-here")
        return 1
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    image_path = Path(args.image).expanduser()
    if not image_path.is_file():
        print(f"Error: Image file not found: {args.image}", file=sys.stderr)
        return 1

    first, second = config.models
    title = f"Testing {first.display_name} vs {second.display_name} OCR Performance"
    print(title)
    print("=" * len(title))
    print(f"Image: {image_path}\n")

    try:
        first_result, second_result = run_comparison(config, image_path)
    except (FileError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        logger.info("Process interrupted by user")
        return 1
    except Exception as exc:  # noqa: BLE001 - retain broad logging for CLI
        logger.error("Unexpected error: %s", exc, exc_info=True)
        return 1

    print_report(first_result, second_result)
    return 0
