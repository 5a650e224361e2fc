"""
Error hierarchy for the study assistant API.

Every domain error carries:
- message: human-readable description, safe to show to the client
- error_code: stable machine-readable kind (e.g. "NOT_AUTHORIZED")
- status_code: HTTP status the handlers translate it to
- context: optional structured metadata, logged but never returned
"""

from typing import Optional, Dict, Any


class AppError(Exception):
    """Base class; anything else escaping a handler becomes INTERNAL_ERROR."""

    status_code = 500
    error_code = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        if error_code:
            self.error_code = error_code
        self.context = context or {}
        super().__init__(message)


class ValidationError(AppError):
    status_code = 400
    error_code = "VALIDATION_ERROR"


class UnauthenticatedError(AppError):
    status_code = 401
    error_code = "UNAUTHENTICATED"


class NotAuthorizedError(AppError):
    status_code = 403
    error_code = "NOT_AUTHORIZED"


class NotFoundError(AppError):
    status_code = 404
    error_code = "NOT_FOUND"


class ConflictError(AppError):
    status_code = 409
    error_code = "CONFLICT"


class UnsupportedMediaTypeError(AppError):
    status_code = 400
    error_code = "UNSUPPORTED_MEDIA_TYPE"


class ExtractionError(AppError):
    """Document could not be turned into text. Parser details stay in the logs."""

    status_code = 400
    error_code = "EXTRACTION_FAILED"


class GenerationError(AppError):
    """Base for everything that goes wrong talking to the text-generation backend."""

    status_code = 502
    error_code = "GENERATION_FAILED"


class GenerationFailedError(GenerationError):
    """Upstream answered with an error; usually transient."""


class GenerationUnavailableError(GenerationError):
    """Backend misconfigured (missing credential, unknown provider) or unreachable."""

    status_code = 503
    error_code = "GENERATION_UNAVAILABLE"


class MalformedGenerationOutputError(GenerationError):
    error_code = "MALFORMED_GENERATION_OUTPUT"


class GenerationTimeoutError(GenerationError):
    status_code = 504
    error_code = "GENERATION_TIMEOUT"


class InvariantViolationError(AppError):
    error_code = "INVARIANT_VIOLATION"
