"""Identity caller: wraps input in a response without transforming it."""

from __future__ import annotations

from typing import Any

from aitomics.callers.base import Caller
from aitomics.response import GeneratingType, Response

IDENTITY_CALLER_ID = "aitomics.identityCaller"


class IdentityCaller(Caller):
    """Rewraps or wraps the input in a response marked as ``GeneratingType.INPUT``."""

    def __init__(self, caller_id: str = IDENTITY_CALLER_ID) -> None:
        super().__init__(caller_id)

    async def run(self, content: Any) -> Response:
        value = content.output if isinstance(content, Response) else content
        return Response(value, self, content, GeneratingType.INPUT)

    def wrap(self, output: Any, input_value: Any) -> Response:
        """Import externally produced data as a ``GeneratingType.CUSTOM`` response."""
        return Response(output, self, input_value, GeneratingType.CUSTOM)
