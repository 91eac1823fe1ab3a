"""Base classes shared by every caller variant."""

from __future__ import annotations

import hashlib
import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from aitomics.exceptions import ValidationError

if TYPE_CHECKING:
    from aitomics.response import Response


def content_hash(content: Any) -> str:
    """Generate a SHA-256 hash identifying a function or a prompt context.

    Functions are hashed by their bytecode, constants and names so that two
    definitions of the same function body map to the same id.
    """
    code = getattr(content, "__code__", None)
    if code is not None:
        rendering = repr((code.co_code, code.co_consts, code.co_names, code.co_varnames))
    elif callable(content):
        rendering = repr(content)
    else:
        rendering = json.dumps(content, sort_keys=True, default=str)
    return hashlib.sha256(rendering.encode()).hexdigest()


class Caller(ABC):
    """A named transformation unit mapping an input to a Response.

    Callers compare equal when they are the same variant with the same id.
    """

    def __init__(self, caller_id: str) -> None:
        if not isinstance(caller_id, str) or not caller_id:
            raise ValidationError(
                "Caller id must be a non-empty string", field="caller_id", value=caller_id
            )
        self.id = caller_id

    @abstractmethod
    async def run(self, content: Any) -> Response:
        """Execute the transformation and return a Response."""

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and self.id == other.id  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.id))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"


@dataclass(frozen=True)
class UnresolvedCaller:
    """Placeholder for a caller id read from a snapshot but not registered yet.

    It only carries the id; it cannot run. Responses holding one are rebound to
    the real Caller once a caller with this id is registered.
    """

    id: str

    def __str__(self) -> str:
        return self.id
