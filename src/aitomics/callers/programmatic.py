"""Programmatic caller: applies a Python function to the input."""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any

from loguru import logger

from aitomics.callers.base import Caller, content_hash
from aitomics.exceptions import IllegalInputType, TransformationError, ValidationError
from aitomics.response import Response


class ProgrammaticCaller(Caller):
    """Wraps a sync or async function ``fn(value) -> output``.

    When no id is given the function's content hash is used, so registering the
    same function twice in one registry is rejected as a duplicate.
    """

    def __init__(self, fn: Callable[[Any], Any], caller_id: str | None = None) -> None:
        if not callable(fn):
            raise ValidationError("ProgrammaticCaller requires a callable", field="fn", value=fn)
        super().__init__(caller_id if caller_id is not None else content_hash(fn))
        self.fn = fn

    async def run(self, content: Any) -> Response:
        if isinstance(content, Response):
            value = content.output
        elif isinstance(content, str):
            value = content
        else:
            raise IllegalInputType(content, self.id)

        try:
            result = self.fn(value)
            if inspect.isawaitable(result):
                result = await result
        except Exception as e:
            root = content.root_input() if isinstance(content, Response) else content
            logger.warning(f"Caller '{self.id}' failed for root input {root!r}: {e}")
            raise TransformationError(
                f"Failed executing '{self.id}' for (root) input '{root}': {e}",
                caller_id=self.id,
                root_input=root,
            ) from e

        # The function already produced a response (e.g. it ran another caller)
        if isinstance(result, Response):
            return result
        return Response(result, self, content)
