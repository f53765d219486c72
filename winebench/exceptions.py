"""Custom exception classes for the wine label benchmark.

Exception Hierarchy:
    BenchmarkError (base)
    ├── ConfigurationError
    │   ├── InvalidConfigError
    │   └── MissingConfigError
    ├── APIError
    │   ├── APIClientError
    │   ├── APIAuthenticationError
    │   ├── APIRateLimitError
    │   └── APITimeoutError
    └── FileError
        ├── FileLoadError
        │   └── ImageNotFoundError
        └── FileFormatError

Usage:
    try:
        text = client.generate(image, prompt)
    except APIRateLimitError as e:
        logger.warning("Rate limit exceeded: %s", e)
    except APIError as e:
        logger.error("API error: %s", e)
"""

from __future__ import annotations


class BenchmarkError(Exception):
    """Base exception for all benchmark errors."""


# ============================================================================
# Configuration Errors
# ============================================================================


class ConfigurationError(BenchmarkError):
    """Base exception for configuration-related errors."""


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid or malformed.

    Examples:
        - Unknown backend name
        - Non-positive max_tokens
        - Malformed YAML
    """


class MissingConfigError(ConfigurationError):
    """Raised when required configuration is missing.

    Attributes:
        env_var: Environment variable the user should set, if any
    """

    def __init__(self, message: str, env_var: str | None = None):
        super().__init__(message)
        self.env_var = env_var


# ============================================================================
# API Errors
# ============================================================================


class APIError(BenchmarkError):
    """Base exception for errors talking to a model service.

    Attributes:
        error_code: Machine-readable code (e.g. "openai_rate_limit")
    """

    error_code = "api_error"

    def __init__(self, message: str, error_code: str | None = None):
        super().__init__(message)
        if error_code is not None:
            self.error_code = error_code


class APIClientError(APIError):
    """Raised when the client is unavailable or the request was rejected."""

    error_code = "client_error"


class APIAuthenticationError(APIError):
    """Raised when the service rejects the credential."""

    error_code = "authentication_error"


class APIRateLimitError(APIError):
    """Raised when the service reports a rate limit."""

    error_code = "rate_limit"


class APITimeoutError(APIError):
    """Raised on network failures and timeouts."""

    error_code = "connection_error"


# ============================================================================
# File Errors
# ============================================================================


class FileError(BenchmarkError):
    """Base exception for file operation errors."""


class FileLoadError(FileError):
    """Raised when loading a file fails."""


class ImageNotFoundError(FileLoadError):
    """Raised when the image path does not point at a readable file."""

    def __init__(self, path: object):
        super().__init__(f"Image file not found: {path}")
        self.path = path


class FileFormatError(FileError):
    """Raised when an image cannot be decoded for resizing."""
