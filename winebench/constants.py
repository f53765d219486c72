"""Shared constants for the wine label benchmark."""

# =============================================================================
# Image Limits
# =============================================================================
MEGABYTE = 1024 * 1024
"""Bytes in one MiB."""

MAX_IMAGE_BYTES = 5 * MEGABYTE
"""Largest image accepted by the model service without resizing."""

TARGET_IMAGE_BYTES = int(4.5 * MEGABYTE)
"""Byte budget aimed for when an image has to be downscaled."""

RESIZE_JPEG_QUALITY = 85
"""JPEG quality used when re-encoding a downscaled image."""

# =============================================================================
# API Defaults (used when config file is unavailable)
# =============================================================================
DEFAULT_MAX_TOKENS = 1500
"""Default max_tokens for a label extraction request."""

DEFAULT_BASE_URL = "https://api.anthropic.com/v1/"
"""OpenAI-compatible endpoint used for the default models."""

DEFAULT_API_KEY_ENV = "ANTHROPIC_API_KEY"
"""Environment variable holding the credential for the default endpoint."""

GEMINI_API_KEY_ENV = "GEMINI_API_KEY"
"""Environment variable holding the Gemini credential."""

BASE_URL_ENV = "WINEBENCH_BASE_URL"
"""Environment variable overriding the OpenAI-compatible base URL."""

# =============================================================================
# Models
# =============================================================================
DEFAULT_FIRST_MODEL = "claude-haiku-4-5-20251001"
DEFAULT_SECOND_MODEL = "claude-sonnet-4-5-20250929"

MODEL_DISPLAY_NAMES = {
    "claude-haiku-4-5-20251001": "Haiku 4.5",
    "claude-sonnet-4-5-20250929": "Sonnet 4.5",
    "gemini-2.5-flash": "Gemini 2.5 Flash",
    "gemini-2.5-pro": "Gemini 2.5 Pro",
}
"""Human-readable names for well-known model identifiers."""

# =============================================================================
# Report
# =============================================================================
COST_SAVINGS_NOTE = "~75-90% (the faster model is significantly cheaper)"
"""Static annotation printed with the comparison, not derived from pricing data."""

DEFAULT_CONFIG_PATH = "settings/benchmark.yaml"
