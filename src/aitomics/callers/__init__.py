from aitomics.callers.base import Caller, UnresolvedCaller, content_hash
from aitomics.callers.identity import IDENTITY_CALLER_ID, IdentityCaller
from aitomics.callers.llm import LLMCaller
from aitomics.callers.programmatic import ProgrammaticCaller

__all__ = [
    "Caller",
    "UnresolvedCaller",
    "content_hash",
    "IDENTITY_CALLER_ID",
    "IdentityCaller",
    "LLMCaller",
    "ProgrammaticCaller",
]
