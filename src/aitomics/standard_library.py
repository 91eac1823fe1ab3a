"""Ready-made callers and caller composition."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any, Protocol

from loguru import logger

from aitomics.callers.base import Caller
from aitomics.callers.programmatic import ProgrammaticCaller
from aitomics.exceptions import IllegalInputType, TransformationError, ValidationError
from aitomics.protocols import Fetcher
from aitomics.registry import CallerRegistry
from aitomics.response import Response

PREFIX = "aitomics"

CONFIDENCE_PROMPT = (
    "Rate the confidence (i.e., how certain are you that the response follows from the "
    "input) of the response given as input, on a scale from '1-10' (1 being no necessary "
    "truth, 10 being certain objective truth) only return the number (1-10) no other signs."
)
INFERENCE_PROMPT = (
    "Rate the inference (i.e., how well does the response follow from the input) of the "
    "response given as input, on a scale from '1-10' (10 being multiple steps of inference "
    "others wouldnt be able to follow, 1 being no steps of inference) only return the "
    "number (1-10) no other signs."
)


class Runnable(Protocol):
    async def run(self, content: Any) -> Any: ...


class CallerChain:
    """Runs callers one after another, feeding each response into the next."""

    def __init__(self, *callers: Runnable) -> None:
        for caller in callers:
            if not callable(getattr(caller, "run", None)):
                raise ValidationError(f"Cannot compose {caller!r}", field="callers", value=caller)
        self.callers = list(callers)

    async def run(self, content: Any) -> Any:
        result = content
        for caller in self.callers:
            result = await caller.run(result)
        return result

    def __repr__(self) -> str:
        return f"CallerChain({', '.join(repr(c) for c in self.callers)})"


class UtilityAnalysisCaller(Caller):
    """Asks the LLM to rate the previous response of a chain.

    The output is the previous output under ``"output"`` plus the rating under
    ``variable``. A dict output (e.g. from an earlier analysis) is extended
    instead, so analyses can be stacked.
    """

    def __init__(self, name: str, variable: str, prompt: str, fetcher: Fetcher) -> None:
        super().__init__(name)
        self.variable = variable
        self.prompt = prompt
        self.fetcher = fetcher

    def _describe(self, previous: Response) -> str:
        previous_input = previous.input
        if isinstance(previous_input, Response):
            previous_input = previous_input.output
        context = getattr(previous.caller, "context", None)
        output = previous.output
        if isinstance(output, dict) and "output" in output:
            output = output["output"]
        return (
            f"Previous task: You responded with '{output}' given the input "
            f"'{previous_input}' by using the prompt '{context}'"
        )

    async def run(self, content: Any) -> Response:
        if not isinstance(content, Response):
            raise IllegalInputType(content, self.id)

        try:
            rating = await self.fetcher(
                self._describe(content), [{"role": "system", "content": self.prompt}]
            )
        except Exception as e:
            root = content.root_input()
            raise TransformationError(
                f"Failed executing '{self.id}' for (root) input '{root}': {e}",
                caller_id=self.id,
                root_input=root,
            ) from e

        previous = content.output
        output = dict(previous) if isinstance(previous, dict) else {"output": previous}
        output[self.variable] = rating.strip()
        return Response(output, self, content)


class StandardLibrary:
    """Standard callers registered in ``registry``.

    Building a second library on the same registry reuses the callers already
    registered under the standard ids.
    """

    def __init__(self, registry: CallerRegistry, fetcher: Fetcher | None = None) -> None:
        self.registry = registry
        self.fetcher = fetcher

        self.string_to_json = self._programmatic(json.loads, f"{PREFIX}.stringToJSON")
        self.json_to_string = self._programmatic(json.dumps, f"{PREFIX}.JSONToString")
        self.lower_case = self._programmatic(str.lower, f"{PREFIX}.lowerCase")
        self.upper_case = self._programmatic(str.upper, f"{PREFIX}.upperCase")
        self.identity = self._programmatic(lambda value: value, f"{PREFIX}.id")

    def _programmatic(self, fn: Callable[[Any], Any], caller_id: str) -> Caller:
        existing = self.registry.get(caller_id)
        if existing is not None:
            return existing
        return self.registry.add(ProgrammaticCaller(fn, caller_id))

    def extract(self, field: str) -> Caller:
        """Caller returning ``output[field]`` of the previous response."""
        return self._programmatic(lambda value: value[field], f"extract.{field}")

    @staticmethod
    def compose(*callers: Runnable) -> CallerChain:
        return CallerChain(*callers)

    def _utility(self, name: str, variable: str, prompt: str) -> Caller:
        caller_id = f"{PREFIX}.{name}"
        existing = self.registry.get(caller_id)
        if existing is not None:
            return existing
        if self.fetcher is None:
            raise ValidationError(f"The {name} caller requires a fetcher", field="fetcher")
        logger.debug(f"Creating utility analysis caller '{caller_id}'")
        return self.registry.add(UtilityAnalysisCaller(caller_id, variable, prompt, self.fetcher))

    @property
    def confidence(self) -> Caller:
        """Rates how certain the previous response follows from its input (1-10)."""
        return self._utility("confidence", "confidence", CONFIDENCE_PROMPT)

    @property
    def inference(self) -> Caller:
        """Rates how many inference steps the previous response took (1-10)."""
        return self._utility("inference", "inference", INFERENCE_PROMPT)
