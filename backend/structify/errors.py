"""
Error taxonomy for the JSON generation service.

Fatal errors (input validation, unsupported shape kinds) abort a request
before any model call. Retryable errors are raised inside a single
generation attempt and consumed by the retry loop.
"""

from typing import Any, Dict, List, Optional


class StructifyError(Exception):
    """Base exception for all service errors."""


class ConfigurationError(StructifyError):
    """Missing API key, unknown provider or other bad process config."""


class InputValidationError(StructifyError):
    """Inbound body does not satisfy the data/format contract."""

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        self.errors = errors or []
        super().__init__(message)


class UnsupportedTypeError(StructifyError):
    """Shape descriptor names a kind the synthesizer cannot build."""

    def __init__(self, kind: Any):
        self.kind = kind
        super().__init__(f"Unsupported data type: {kind}")


# ------------------------------------------------------------
# Retryable (raised inside one generation attempt)
# ------------------------------------------------------------

class RetryableGenerationError(StructifyError):
    """Base for failures that trigger another generation attempt."""


class GenerationTransportError(RetryableGenerationError):
    """The generation capability call itself failed."""


class GenerationRateLimitError(GenerationTransportError):
    """Quota or rate limit hit (HTTP 429)."""


class ResponseParseError(RetryableGenerationError):
    """Model output is not valid JSON."""

    def __init__(self, message: str, raw_text: str):
        self.raw_text = raw_text
        super().__init__(message)


class SchemaValidationError(RetryableGenerationError):
    """Parsed model output does not conform to the synthesized validator."""

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        self.errors = errors or []
        super().__init__(message)


class RetryBudgetExhaustedError(StructifyError):
    """Every attempt failed; wraps the last retryable error."""

    def __init__(self, attempts: int, last_error: RetryableGenerationError):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            f"Generation failed after {attempts} attempts: "
            f"{type(last_error).__name__}: {last_error}"
        )
