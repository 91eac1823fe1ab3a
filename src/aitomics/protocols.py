"""Protocols for collaborators supplied from outside the core."""

from __future__ import annotations

from typing import Protocol


class Fetcher(Protocol):
    """Sends a user message plus system context to a text-generation backend."""

    async def __call__(self, content: str, context: list[dict[str, str]]) -> str:
        """Return the generated text.

        Args:
            content: The user message
            context: Role-tagged messages sent before the user message

        Raises:
            FetchError: If the backend cannot be reached or answers badly
        """
        ...
