"""Caller registry and the pending caller lookups of loaded snapshots.

A registry is an explicit object handed to whatever creates, registers or
deserializes callers; there is no process-wide default instance.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from aitomics.callers.base import Caller
from aitomics.exceptions import DuplicateIdError, ValidationError

if TYPE_CHECKING:
    from aitomics.response import Response


class PendingLookups:
    """Responses loaded with an unknown caller id, grouped by that id."""

    def __init__(self) -> None:
        self._pending: dict[str, set[Response]] = {}

    def add(self, caller_id: str, response: Response) -> None:
        self._pending.setdefault(caller_id, set()).add(response)

    def link(self, caller: Caller) -> int:
        """Bind every response waiting for ``caller.id`` to ``caller``.

        The entry is cleared afterwards. Returns the number of responses linked.
        """
        responses = self._pending.pop(caller.id, None)
        if not responses:
            return 0
        for response in responses:
            response.rebind_caller(caller)
        logger.info(f"Linked {len(responses)} pending response(s) to caller '{caller.id}'")
        return len(responses)

    def waiting_for(self, caller_id: str) -> set[Response]:
        return set(self._pending.get(caller_id, ()))

    def pending_ids(self) -> list[str]:
        return list(self._pending)

    def __contains__(self, caller_id: object) -> bool:
        return caller_id in self._pending

    def __len__(self) -> int:
        return len(self._pending)


class CallerRegistry:
    """Maps caller ids to callers; ids are unique within one registry."""

    def __init__(self) -> None:
        self._callers: dict[str, Caller] = {}
        self.pending = PendingLookups()

    def register(self, caller_id: str, caller: Caller) -> Caller:
        """Store ``caller`` under ``caller_id`` and link pending responses.

        Raises:
            DuplicateIdError: If ``caller_id`` is already registered
            ValidationError: If ``caller`` is not a Caller or has another id
        """
        if not isinstance(caller, Caller):
            raise ValidationError(f"Not a proper caller type: {caller!r}", field="caller")
        if caller_id != caller.id:
            raise ValidationError(
                f"Registration id '{caller_id}' differs from caller id '{caller.id}'",
                field="caller_id",
                value=caller_id,
            )
        if caller_id in self._callers:
            raise DuplicateIdError(caller_id)

        self._callers[caller_id] = caller
        logger.debug(f"Registered {type(caller).__name__} '{caller_id}'")
        self.pending.link(caller)
        return caller

    def add(self, caller: Caller) -> Caller:
        """Register ``caller`` under its own id."""
        return self.register(caller.id, caller)

    def exists(self, caller_id: str) -> bool:
        return caller_id in self._callers

    def get(self, caller_id: str) -> Caller | None:
        return self._callers.get(caller_id)

    def ids(self) -> list[str]:
        return list(self._callers)

    def __contains__(self, caller_id: object) -> bool:
        return caller_id in self._callers

    def __len__(self) -> int:
        return len(self._callers)
