"""
aitomics.error_enums - Centralized error code definitions.
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    DUPLICATE_ID = "DUPLICATE_ID"
    ILLEGAL_INPUT_TYPE = "ILLEGAL_INPUT_TYPE"
    MISMATCHED_INPUT = "MISMATCHED_INPUT"
    WRONG_MODEL_KIND = "WRONG_MODEL_KIND"
    NO_MATCH = "NO_MATCH"
    INVALID_FORMAT = "INVALID_FORMAT"
    TRANSFORMATION_ERROR = "TRANSFORMATION_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    # Errors raised while talking to the text-generation backend
    CONNECTION_ERROR = "CONNECTION_ERROR"
    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"
    INVALID_RESPONSE = "INVALID_RESPONSE"
