"""Custom exception classes for aitomics.

Every error raised by the package derives from ``AitomicsError`` and carries an
``ErrorCode``, a human-readable message and a dictionary of structured details,
so callers can branch on the code and log the details without parsing text.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from aitomics.error_enums import ErrorCode


class AitomicsError(Exception):
    """Base exception for aitomics.

    All package exceptions inherit from this class to ensure consistent error
    handling with error codes and structured details.
    """

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        details: dict[str, Any] | None = None,
        timestamp: datetime | None = None,
    ) -> None:
        """Initialize the base aitomics error.

        Args:
            error_code: The ErrorCode enum value for categorization
            message: Human-readable error message
            details: Optional dictionary of additional error context
            timestamp: Optional error timestamp (defaults to current UTC time)
        """
        self.error_code = error_code
        self.message = message
        self.details = details or {}
        self.timestamp = timestamp or datetime.now(UTC)
        super().__init__(message)


class ValidationError(AitomicsError):
    """Malformed constructor or run arguments."""

    def __init__(self, message: str, field: str | None = None, value: Any = None) -> None:
        super().__init__(
            error_code=ErrorCode.VALIDATION_ERROR,
            message=message,
            details={"field": field, "value": value},
        )


class DuplicateIdError(AitomicsError):
    """A caller id is already registered."""

    def __init__(self, caller_id: str) -> None:
        self.caller_id = caller_id
        super().__init__(
            error_code=ErrorCode.DUPLICATE_ID,
            message=f"Duplicate Caller entry ({caller_id})",
            details={"caller_id": caller_id},
        )


class IllegalInputType(AitomicsError):
    """Content of the wrong type was passed to a caller."""

    def __init__(self, content: Any, caller_id: str | None = None) -> None:
        super().__init__(
            error_code=ErrorCode.ILLEGAL_INPUT_TYPE,
            message=f"Illegal input type '{type(content).__name__}' ({content!r})",
            details={"caller_id": caller_id, "input_type": type(content).__name__},
        )


class MismatchedInputError(AitomicsError):
    """Two responses do not share the same root input."""

    def __init__(self, root_a: Any, root_b: Any) -> None:
        super().__init__(
            error_code=ErrorCode.MISMATCHED_INPUT,
            message="Mismatch in comparison, not comparing same input",
            details={"root_input_a": root_a, "root_input_b": root_b},
        )


class WrongModelKindError(AitomicsError):
    """A pairwise model was used for a multi-item comparison or vice versa."""

    def __init__(self, message: str, model_name: str | None = None) -> None:
        super().__init__(
            error_code=ErrorCode.WRONG_MODEL_KIND,
            message=message,
            details={"model": model_name},
        )


class NoMatchError(AitomicsError):
    """Two response lists share no root input."""

    def __init__(self, size_a: int, size_b: int) -> None:
        super().__init__(
            error_code=ErrorCode.NO_MATCH,
            message="No matching responses found between the two lists",
            details={"size_a": size_a, "size_b": size_b},
        )


class InvalidFormatError(AitomicsError):
    """A response snapshot is malformed or carries the wrong header."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(
            error_code=ErrorCode.INVALID_FORMAT,
            message=f"Invalid file format: {message}",
            details={"path": path},
        )


class TransformationError(AitomicsError):
    """A wrapped function or backend call failed while producing a response.

    The root input of the chain and the id of the failing caller are kept so a
    failure deep inside a composed chain can be traced back to its origin.
    """

    def __init__(self, message: str, caller_id: str, root_input: Any) -> None:
        self.caller_id = caller_id
        self.root_input = root_input
        super().__init__(
            error_code=ErrorCode.TRANSFORMATION_ERROR,
            message=message,
            details={"caller_id": caller_id, "root_input": root_input},
        )


class FetchError(AitomicsError):
    """The text-generation backend could not be reached or answered badly."""

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
        error_code: ErrorCode = ErrorCode.EXTERNAL_SERVICE_ERROR,
    ) -> None:
        self.status_code = status_code
        super().__init__(
            error_code=error_code,
            message=message,
            details={"url": url, "status_code": status_code},
        )


class ConfigurationError(AitomicsError):
    """Settings or prompt files failed validation."""

    def __init__(self, message: str, source: str | None = None) -> None:
        super().__init__(
            error_code=ErrorCode.CONFIGURATION_ERROR,
            message=message,
            details={"source": source},
        )
