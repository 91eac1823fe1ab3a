"""LLM caller: sends the input to a text-generation backend."""

from __future__ import annotations

import json
from typing import Any

from loguru import logger

from aitomics.callers.base import Caller, content_hash
from aitomics.exceptions import IllegalInputType, TransformationError, ValidationError
from aitomics.protocols import Fetcher
from aitomics.response import Response


class LLMCaller(Caller):
    """Calls the backend with the input as user message and ``context`` as system messages.

    ``context`` is a single prompt string or a list of them; each becomes one
    system-role message.
    """

    def __init__(
        self,
        context: str | list[str],
        fetcher: Fetcher,
        caller_id: str | None = None,
    ) -> None:
        contexts = [context] if isinstance(context, str) else list(context)
        if not contexts or not all(isinstance(c, str) for c in contexts):
            raise ValidationError(
                "LLMCaller context must be a string or a non-empty list of strings",
                field="context",
                value=context,
            )
        super().__init__(caller_id if caller_id is not None else content_hash(contexts))
        self.context = contexts
        self.fetcher = fetcher

    @property
    def system_context(self) -> list[dict[str, str]]:
        return [{"role": "system", "content": c} for c in self.context]

    async def run(self, content: Any) -> Response:
        if isinstance(content, Response):
            value = content.output
        elif isinstance(content, (str, int, float)) and not isinstance(content, bool):
            value = content
        else:
            raise IllegalInputType(content, self.id)

        prompt = value if isinstance(value, str) else json.dumps(value, default=str)
        logger.debug(f"Caller '{self.id[:16]}' sending {len(prompt)} characters to backend")
        try:
            output = await self.fetcher(prompt, self.system_context)
        except Exception as e:
            root = content.root_input() if isinstance(content, Response) else content
            raise TransformationError(
                f"Failed executing '{self.id}' for (root) input '{root}': {e}",
                caller_id=self.id,
                root_input=root,
            ) from e
        return Response(output, self, content)

    def tokens(self) -> int:
        """Total character length of the prompt context."""
        return sum(len(c) for c in self.context)
