"""
aitomics - response lineage tracking and agreement statistics for chained
LLM and programmatic transformations.
"""

# callers must be imported before response (response depends on callers.base)
from aitomics.callers import (
    IDENTITY_CALLER_ID,
    Caller,
    IdentityCaller,
    LLMCaller,
    ProgrammaticCaller,
    UnresolvedCaller,
    content_hash,
)
from aitomics.callers.factory import create_caller, identity_caller
from aitomics.comparators import (
    UNDEFINED_AGREEMENT,
    CohensComparisonModel,
    Comparator,
    ComparisonModel,
    DistanceComparisonModel,
    EqualComparisonModel,
    KrippendorffsComparisonModel,
    UndefinedAgreement,
)
from aitomics.config import FetcherSettings, GenerationSettings, get_settings, load_settings
from aitomics.error_enums import ErrorCode
from aitomics.exceptions import (
    AitomicsError,
    ConfigurationError,
    DuplicateIdError,
    FetchError,
    IllegalInputType,
    InvalidFormatError,
    MismatchedInputError,
    NoMatchError,
    TransformationError,
    ValidationError,
    WrongModelKindError,
)
from aitomics.fetch import ChatCompletionFetcher
from aitomics.logging_utils import configure_logging
from aitomics.prompts import parse_categorization_prompt
from aitomics.registry import CallerRegistry, PendingLookups
from aitomics.response import GeneratingType, Response
from aitomics.serialization import FILE_HEADER, read_responses, write_responses
from aitomics.standard_library import CallerChain, StandardLibrary, UtilityAnalysisCaller

__all__ = [
    "IDENTITY_CALLER_ID",
    "Caller",
    "IdentityCaller",
    "LLMCaller",
    "ProgrammaticCaller",
    "UnresolvedCaller",
    "content_hash",
    "create_caller",
    "identity_caller",
    "UNDEFINED_AGREEMENT",
    "CohensComparisonModel",
    "Comparator",
    "ComparisonModel",
    "DistanceComparisonModel",
    "EqualComparisonModel",
    "KrippendorffsComparisonModel",
    "UndefinedAgreement",
    "FetcherSettings",
    "GenerationSettings",
    "get_settings",
    "load_settings",
    "ErrorCode",
    "AitomicsError",
    "ConfigurationError",
    "DuplicateIdError",
    "FetchError",
    "IllegalInputType",
    "InvalidFormatError",
    "MismatchedInputError",
    "NoMatchError",
    "TransformationError",
    "ValidationError",
    "WrongModelKindError",
    "ChatCompletionFetcher",
    "configure_logging",
    "parse_categorization_prompt",
    "CallerRegistry",
    "PendingLookups",
    "GeneratingType",
    "Response",
    "FILE_HEADER",
    "read_responses",
    "write_responses",
    "CallerChain",
    "StandardLibrary",
    "UtilityAnalysisCaller",
]
