"""Benchmark configuration module.

This module provides:
- BenchmarkConfig: Dataclass for all benchmark options
- resolve_model: Build a ModelSpec from a model identifier

Configuration Sources (in order of precedence):
1. CLI overrides passed to ``load()``
2. Environment variables (``.env`` is loaded by the CLI)
3. YAML configuration file (``settings/benchmark.yaml`` by default)
4. Default values

The config is built once at startup and handed to every component that
needs it.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .constants import (
    BASE_URL_ENV,
    DEFAULT_API_KEY_ENV,
    DEFAULT_BASE_URL,
    DEFAULT_CONFIG_PATH,
    DEFAULT_FIRST_MODEL,
    DEFAULT_MAX_TOKENS,
    DEFAULT_SECOND_MODEL,
    GEMINI_API_KEY_ENV,
    MAX_IMAGE_BYTES,
    MODEL_DISPLAY_NAMES,
    RESIZE_JPEG_QUALITY,
    TARGET_IMAGE_BYTES,
)
from .exceptions import InvalidConfigError, MissingConfigError
from .types import ModelSpec

logger = logging.getLogger(__name__)

BACKENDS = ("openai", "gemini")


def _load_yaml_config(config_path: Path) -> dict[str, Any]:
    """Load YAML configuration file.

    Args:
        config_path: Path to YAML config file

    Returns:
        Configuration dict, or empty dict if the file does not exist

    Raises:
        InvalidConfigError: If the file exists but cannot be parsed
    """
    if not config_path.exists():
        logger.debug("Config file not found: %s", config_path)
        return {}
    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise InvalidConfigError(f"Failed to parse config file {config_path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise InvalidConfigError(f"Failed to read config file {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise InvalidConfigError(f"Config file {config_path} must contain a mapping")
    return data


def resolve_model(identifier: str, display_name: Any = None, backend: str | None = None) -> ModelSpec:
    """Build a ModelSpec, inferring display name and backend when not given.

    Identifiers starting with ``gemini`` use the Gemini backend; everything
    else goes through the OpenAI-compatible client. A display name read from
    YAML may be a number (``name: 2024``) and is kept as text.

    Example:
        >>> resolve_model("claude-haiku-4-5-20251001")
        ModelSpec(identifier='claude-haiku-4-5-20251001', display_name='Haiku 4.5', backend='openai')
    """
    if backend is None:
        backend = "gemini" if identifier.lower().startswith("gemini") else "openai"
    if backend not in BACKENDS:
        raise InvalidConfigError(f"Unknown backend '{backend}' for model {identifier}. Expected one of {BACKENDS}")
    if display_name is None or display_name == "":
        display_name = MODEL_DISPLAY_NAMES.get(identifier, identifier)
    return ModelSpec(
        identifier=identifier,
        display_name=str(display_name),
        backend=backend,
    )


def _section(file_config: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    """Return a top-level config section, which must be a mapping if present."""
    section = file_config.get(name)
    if section is None:
        return {}
    if not isinstance(section, Mapping):
        raise InvalidConfigError(f"'{name}' section must be a mapping, got {type(section).__name__}")
    return section


def _number(value: Any, kind: type[int] | type[float], name: str) -> Any:
    """Coerce a numeric option read from YAML, so ``"1500"`` becomes ``1500``.

    Example:
        >>> _number("1500", int, "max_tokens")
        1500
        >>> _number(0.2, float, "temperature")
        0.2
    """
    if isinstance(value, bool):
        raise InvalidConfigError(f"{name} must be a number, got {value!r}")
    if kind is int and isinstance(value, float) and not value.is_integer():
        raise InvalidConfigError(f"{name} must be an integer, got {value!r}")
    try:
        return kind(value)
    except (TypeError, ValueError) as e:
        expected = "an integer" if kind is int else "a number"
        raise InvalidConfigError(f"{name} must be {expected}, got {value!r}") from e


def _model_from_config(value: Any, default: str) -> ModelSpec:
    if value is None:
        return resolve_model(default)
    if isinstance(value, str):
        return resolve_model(value)
    if isinstance(value, Mapping) and value.get("id"):
        return resolve_model(str(value["id"]), value.get("name"), value.get("backend"))
    raise InvalidConfigError(f"Invalid model entry: {value!r}")


@dataclass
class BenchmarkConfig:
    """All options for a benchmark run.

    Example:
        >>> config = BenchmarkConfig(api_key="sk-test")
        >>> config.validate()
        >>> config.first_model.display_name
        'Haiku 4.5'
    """

    # ==================== Credentials ====================
    api_key: str | None = field(default=None, repr=False)
    api_key_env: str = DEFAULT_API_KEY_ENV
    base_url: str | None = DEFAULT_BASE_URL
    gemini_api_key: str | None = field(default=None, repr=False)

    # ==================== Models ====================
    first_model: ModelSpec = field(default_factory=lambda: resolve_model(DEFAULT_FIRST_MODEL))
    second_model: ModelSpec = field(default_factory=lambda: resolve_model(DEFAULT_SECOND_MODEL))

    # ==================== Request Options ====================
    max_tokens: int = DEFAULT_MAX_TOKENS
    temperature: float | None = None
    prompt_path: Path | None = None

    # ==================== Image Options ====================
    max_image_bytes: int = MAX_IMAGE_BYTES
    target_image_bytes: int = TARGET_IMAGE_BYTES
    jpeg_quality: int = RESIZE_JPEG_QUALITY

    def __post_init__(self) -> None:
        if isinstance(self.prompt_path, str):
            self.prompt_path = Path(self.prompt_path)

    @property
    def models(self) -> tuple[ModelSpec, ModelSpec]:
        return (self.first_model, self.second_model)

    @property
    def backends(self) -> set[str]:
        return {model.backend for model in self.models}

    @classmethod
    def load(
        cls,
        config_path: str | Path | None = None,
        environ: Mapping[str, str] | None = None,
        **overrides: Any,
    ) -> BenchmarkConfig:
        """Build the configuration from file, environment and overrides.

        Args:
            config_path: YAML file; defaults to ``settings/benchmark.yaml`` if present
            environ: Environment mapping (defaults to ``os.environ``)
            **overrides: Values that win over everything else; ``None`` values are ignored.
                ``first_model``/``second_model`` may be given as identifier strings.

        Raises:
            InvalidConfigError: If the file or a value is malformed
        """
        env = os.environ if environ is None else environ
        explicit_path = config_path is not None
        path = Path(config_path) if explicit_path else Path(DEFAULT_CONFIG_PATH)
        if explicit_path and not path.exists():
            raise InvalidConfigError(f"Config file not found: {path}")
        file_config = _load_yaml_config(path)

        api_config = _section(file_config, "api")
        models_config = _section(file_config, "models")
        request_config = _section(file_config, "request")
        image_config = _section(file_config, "image")

        api_key_env = str(api_config.get("api_key_env", DEFAULT_API_KEY_ENV))
        temperature = request_config.get("temperature")
        prompt_path = request_config.get("prompt_path")
        if prompt_path is not None and not isinstance(prompt_path, str):
            raise InvalidConfigError(f"prompt_path must be a string, got {prompt_path!r}")
        values: dict[str, Any] = {
            "api_key_env": api_key_env,
            "api_key": env.get(api_key_env),
            "base_url": env.get(BASE_URL_ENV) or api_config.get("base_url", DEFAULT_BASE_URL),
            "gemini_api_key": env.get(GEMINI_API_KEY_ENV),
            "first_model": _model_from_config(models_config.get("first"), DEFAULT_FIRST_MODEL),
            "second_model": _model_from_config(models_config.get("second"), DEFAULT_SECOND_MODEL),
            "max_tokens": _number(request_config.get("max_tokens", DEFAULT_MAX_TOKENS), int, "max_tokens"),
            "temperature": None if temperature is None else _number(temperature, float, "temperature"),
            "prompt_path": prompt_path,
            "max_image_bytes": _number(image_config.get("max_bytes", MAX_IMAGE_BYTES), int, "max_bytes"),
            "target_image_bytes": _number(image_config.get("target_bytes", TARGET_IMAGE_BYTES), int, "target_bytes"),
            "jpeg_quality": _number(image_config.get("jpeg_quality", RESIZE_JPEG_QUALITY), int, "jpeg_quality"),
        }

        for key, value in overrides.items():
            if value is None:
                continue
            if key in ("first_model", "second_model") and isinstance(value, str):
                value = resolve_model(value)
            values[key] = value

        logger.debug("Loaded benchmark config (file=%s, exists=%s)", path, path.exists())
        return cls(**values)

    def validate(self) -> None:
        """Check credentials and numeric options.

        Raises:
            MissingConfigError: If a credential needed by a selected model is missing
            InvalidConfigError: If a numeric option has the wrong type or is out of range
        """
        if "openai" in self.backends and not self.api_key:
            raise MissingConfigError(f"{self.api_key_env} environment variable is required", env_var=self.api_key_env)
        if "gemini" in self.backends and not self.gemini_api_key:
            raise MissingConfigError(
                f"{GEMINI_API_KEY_ENV} environment variable is required for Gemini models",
                env_var=GEMINI_API_KEY_ENV,
            )

        for name in ("max_tokens", "max_image_bytes", "target_image_bytes", "jpeg_quality"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise InvalidConfigError(f"{name} must be an integer, got {value!r}")
        if self.temperature is not None and (
            not isinstance(self.temperature, (int, float)) or isinstance(self.temperature, bool)
        ):
            raise InvalidConfigError(f"temperature must be a number, got {self.temperature!r}")

        if self.max_tokens <= 0:
            raise InvalidConfigError(f"max_tokens must be positive, got {self.max_tokens}")
        if self.temperature is not None and not 0.0 <= self.temperature <= 2.0:  # noqa: PLR2004
            raise InvalidConfigError(f"temperature must be between 0.0 and 2.0, got {self.temperature}")
        if not 0 < self.target_image_bytes <= self.max_image_bytes:
            raise InvalidConfigError(
                f"target_image_bytes ({self.target_image_bytes}) must be positive and "
                f"not exceed max_image_bytes ({self.max_image_bytes})"
            )
        if not 1 <= self.jpeg_quality <= 100:  # noqa: PLR2004
            raise InvalidConfigError(f"jpeg_quality must be between 1 and 100, got {self.jpeg_quality}")
