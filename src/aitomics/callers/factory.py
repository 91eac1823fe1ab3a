"""Shortcut for creating and registering callers."""

from __future__ import annotations

from typing import Any

from aitomics.callers.base import Caller
from aitomics.callers.identity import IDENTITY_CALLER_ID, IdentityCaller
from aitomics.callers.llm import LLMCaller
from aitomics.callers.programmatic import ProgrammaticCaller
from aitomics.exceptions import ValidationError
from aitomics.protocols import Fetcher
from aitomics.registry import CallerRegistry


def identity_caller(registry: CallerRegistry) -> Caller:
    """Return the registry's identity caller, registering it on first use."""
    existing = registry.get(IDENTITY_CALLER_ID)
    if existing is not None:
        return existing
    return registry.add(IdentityCaller())


def create_caller(
    registry: CallerRegistry,
    content: Any = None,
    caller_id: str | None = None,
    fetcher: Fetcher | None = None,
) -> Caller:
    """Create a caller from ``content`` and register it.

    Args:
        registry: Registry the new caller is added to
        content: None for the identity caller, a prompt string or list of
            prompts for an LLMCaller, a function for a ProgrammaticCaller
        caller_id: Optional explicit id (defaults to a content hash)
        fetcher: Backend used by LLM callers

    Returns:
        The registered caller.

    Raises:
        DuplicateIdError: If the id is already registered
        ValidationError: If ``content`` maps to no caller variant
    """
    if content is None:
        return identity_caller(registry)
    if isinstance(content, (str, list, tuple)):
        if fetcher is None:
            raise ValidationError("An LLM caller requires a fetcher", field="fetcher")
        context = list(content) if isinstance(content, tuple) else content
        return registry.add(LLMCaller(context, fetcher, caller_id))
    if callable(content):
        return registry.add(ProgrammaticCaller(content, caller_id))
    raise ValidationError(
        f"Cannot build a caller from {type(content).__name__}", field="content", value=content
    )
