"""Response lineage nodes.

A Response records one transformation step: the produced output, the caller
that produced it and the input it was produced from. The input is either the
seed value of the chain or the previous Response, so every Response is the head
of a finite, singly-linked chain ending in the root input.
"""

from __future__ import annotations

from collections.abc import Iterator
from enum import Enum
from typing import TYPE_CHECKING, Any

from aitomics.callers.base import Caller, UnresolvedCaller
from aitomics.exceptions import ValidationError

if TYPE_CHECKING:
    from aitomics.comparators.comparator import Comparator


class GeneratingType(str, Enum):
    """How the output of a response came about."""

    PROGRAMMATIC = "programmatic"
    INPUT = "input"
    CUSTOM = "custom"


class Response:
    """A response to track previous transformations applied through callers.

    Responses are immutable once built. The one exception is ``rebind_caller``,
    which replaces an ``UnresolvedCaller`` loaded from a snapshot with the
    registered Caller of the same id.
    """

    __slots__ = ("_output", "_caller", "_input", "_generator", "_root", "_level")

    def __init__(
        self,
        output: Any,
        caller: Caller | UnresolvedCaller,
        input_value: Any,
        generator: GeneratingType = GeneratingType.PROGRAMMATIC,
    ) -> None:
        if not isinstance(caller, (Caller, UnresolvedCaller)):
            raise ValidationError(
                f"Not a proper caller type: {caller!r}", field="caller", value=caller
            )
        if not isinstance(generator, GeneratingType):
            raise ValidationError(
                f"Unknown generating type: {generator!r}", field="generator", value=generator
            )

        self._output = output
        self._caller = caller
        self._input = input_value
        self._generator = generator

        match input_value:
            case Response(level=parent_level):
                self._root = False
                self._level = parent_level + 1
            case _:
                self._root = True
                self._level = 1

    @property
    def output(self) -> Any:
        return self._output

    @property
    def caller(self) -> Caller | UnresolvedCaller:
        return self._caller

    @property
    def input(self) -> Any:
        return self._input

    @property
    def generator(self) -> GeneratingType:
        return self._generator

    @property
    def root(self) -> bool:
        """True if this is the first transformation applied to the seed value."""
        return self._root

    @property
    def level(self) -> int:
        """Number of transformations in the chain up to and including this one."""
        return self._level

    @property
    def is_resolved(self) -> bool:
        """Whether the caller is a live Caller rather than a snapshot placeholder."""
        return isinstance(self._caller, Caller)

    def rebind_caller(self, caller: Caller) -> None:
        """Replace an unresolved caller placeholder with the registered Caller."""
        if not isinstance(caller, Caller):
            raise ValidationError(
                f"Not a proper caller type: {caller!r}", field="caller", value=caller
            )
        if caller.id != self._caller.id:
            raise ValidationError(
                f"Cannot bind caller '{caller.id}' to a response of '{self._caller.id}'",
                field="caller",
                value=caller.id,
            )
        if self.is_resolved and self._caller is not caller:
            raise ValidationError(
                f"Response of '{caller.id}' is already bound to a caller",
                field="caller",
                value=caller.id,
            )
        self._caller = caller

    def iter_lineage(self) -> Iterator[Response]:
        """Yield this response and every previous one, most recent first."""
        node: Any = self
        while True:
            match node:
                case Response():
                    yield node
                    node = node.input
                case _:
                    return

    def root_input(self) -> Any:
        """Retrieve the seed value at the start of the chain."""
        node: Any = self
        while isinstance(node, Response):
            node = node.input
        return node

    def get(self, hops: int) -> Response:
        """Return the response ``hops`` steps back in the chain (0 is this one)."""
        if hops < 0:
            raise ValidationError("hops must not be negative", field="hops", value=hops)
        node = self
        for _ in range(hops):
            previous = node.input
            if not isinstance(previous, Response):
                raise ValidationError(
                    f"No response {hops} steps back from level {self._level}",
                    field="hops",
                    value=hops,
                )
            node = previous
        return node

    def compare(self, other: Response) -> Comparator:
        """Create a comparator between this and another response."""
        from aitomics.comparators.comparator import Comparator

        return Comparator(self, other)

    def iter_expanded(self) -> Iterator[str]:
        """Yield the string form of every step, most recent first."""
        for node in self.iter_lineage():
            yield str(node)

    def to_string_expanded(self, newline: bool = True) -> str:
        """Render all nested responses, one step per line by default."""
        separator = "\n" if newline else ""
        return "".join(line + separator for line in self.iter_expanded())

    def to_json(self) -> dict[str, Any]:
        """Plain structure for JSON, with the caller reduced to its id."""
        match self._input:
            case Response() as previous:
                input_json = previous.to_json()
            case seed:
                input_json = seed
        return {
            "output": self._output,
            "caller": self._caller.id,
            "input": input_json,
            "root": self._root,
            "level": self._level,
            "generator": self._generator.value,
        }

    def __str__(self) -> str:
        return f"[{self._caller.id}]: '{self._output}' ({self._level})"

    def __repr__(self) -> str:
        return (
            f"Response(caller={self._caller.id!r}, level={self._level}, "
            f"output={self._output!r})"
        )
