"""Pairs responses that share a root input and runs comparison models on them."""

from __future__ import annotations

import json
from collections.abc import Hashable, Iterable, Sequence
from typing import Any

from loguru import logger

from aitomics.comparators.base import AgreementScore, ComparisonModel, as_list
from aitomics.exceptions import (
    MismatchedInputError,
    NoMatchError,
    ValidationError,
    WrongModelKindError,
)
from aitomics.response import Response


def _root_key(value: Any) -> Hashable:
    try:
        hash(value)
    except TypeError:
        return ("json", json.dumps(value, sort_keys=True, default=str))
    return ("value", value)


def _index_by_root_input(responses: Iterable[Any], side: str) -> dict[Hashable, Response]:
    index: dict[Hashable, Response] = {}
    for position, response in enumerate(responses):
        if not isinstance(response, Response):
            raise ValidationError(
                f"Element at index {position} in {side} list is not a Response",
                field=side,
                value=response,
            )
        index[_root_key(response.root_input())] = response
    return index


def _ensure_model(model: Any) -> ComparisonModel:
    if not isinstance(model, ComparisonModel):
        raise ValidationError(f"Not a comparison model: {model!r}", field="model", value=model)
    return model


class Comparator:
    """Compares two responses that have the same root input."""

    def __init__(self, a: Response, b: Response) -> None:
        if not isinstance(a, Response) or not isinstance(b, Response):
            raise ValidationError("Mismatch in comparison, requires two responses")
        root_a, root_b = a.root_input(), b.root_input()
        if root_a != root_b:
            raise MismatchedInputError(root_a, root_b)
        self.a = a
        self.b = b

    def run(self, model: ComparisonModel) -> AgreementScore:
        """Compare the two outputs with a pairwise model."""
        _ensure_model(model)
        if model.is_multiple_comparison:
            raise WrongModelKindError(
                "This model is designed for multiple comparisons, use compare_multiple instead",
                model_name=type(model).__name__,
            )
        return model.run(as_list(self.a.output), as_list(self.b.output))

    @staticmethod
    def match(responses_a: Sequence[Response], responses_b: Sequence[Response]) -> list[Comparator]:
        """Pair responses of both lists by root input.

        Responses without a partner in the other list are dropped. When a list
        holds several responses for one root input the last one is used.
        """
        index_a = _index_by_root_input(responses_a, "first")
        index_b = _index_by_root_input(responses_b, "second")
        pairs = [Comparator(index_a[key], index_b[key]) for key in index_a if key in index_b]

        dropped = len(index_a) + len(index_b) - 2 * len(pairs)
        if dropped:
            logger.debug(f"Matched {len(pairs)} response pair(s), {dropped} without a partner")
        return pairs

    @staticmethod
    def compare_multiple(
        responses_a: Sequence[Response],
        responses_b: Sequence[Response],
        model: ComparisonModel,
    ) -> AgreementScore:
        """Compare two lists of responses with a multi-item model.

        Raises:
            WrongModelKindError: If ``model`` is a pairwise model
            NoMatchError: If the lists share no root input
        """
        _ensure_model(model)
        if not model.is_multiple_comparison:
            raise WrongModelKindError(
                "This model is not designed for multiple comparisons, use run instead",
                model_name=type(model).__name__,
            )

        pairs = Comparator.match(responses_a, responses_b)
        if not pairs:
            raise NoMatchError(len(responses_a), len(responses_b))

        outputs_a = [pair.a.output for pair in pairs]
        outputs_b = [pair.b.output for pair in pairs]
        return model.run(outputs_a, outputs_b)
