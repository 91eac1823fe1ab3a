"""Distance-weighted agreement over an ordered scale."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from aitomics.comparators.base import ComparisonModel, as_list
from aitomics.exceptions import ValidationError

WeightFn = Callable[[Any, Any], float]


class DistanceComparisonModel(ComparisonModel):
    """Similarity of two outputs based on positions in an ordered list of values.

    By default identical values weigh 1.0, values at most ``distance`` positions
    apart in ``ordered_list`` weigh 0.5 and anything else 0.0. Each element of
    the longer output takes its best unused partner in the shorter one; the
    result is the mean weight over the longer output, so surplus elements count
    as mismatches.

    Based on Barany et al. (2024), "ChatGPT for Education Research: Exploring
    the Potential of Large Language Models for Qualitative Codebook
    Development", AIED 2024, pp. 134-149.
    """

    def __init__(
        self,
        distance: int,
        ordered_list: Sequence[Any],
        weight_fn: WeightFn | None = None,
    ) -> None:
        if distance < 0:
            raise ValidationError("distance must not be negative", field="distance", value=distance)
        self.distance = distance
        self.ordered_list = list(ordered_list)
        self.weight_fn: WeightFn = weight_fn or self.default_weight

    def default_weight(self, k: Any, l: Any) -> float:  # noqa: E741
        if k == l:
            return 1.0
        try:
            k_index = self.ordered_list.index(k)
            l_index = self.ordered_list.index(l)
        except ValueError:
            return 0.0
        return 0.5 if abs(k_index - l_index) <= self.distance else 0.0

    def run(self, outputs_a: Sequence[Any], outputs_b: Sequence[Any]) -> float:
        a = as_list(outputs_a)
        b = as_list(outputs_b)
        if not a and not b:
            return 1.0

        longer, shorter = (a, b) if len(a) >= len(b) else (b, a)
        consumed: set[int] = set()
        total = 0.0
        for item in longer:
            best_weight = 0.0
            best_index: int | None = None
            for index, candidate in enumerate(shorter):
                if index in consumed:
                    continue
                weight = self.weight_fn(item, candidate)
                if weight > best_weight:
                    best_weight = weight
                    best_index = index
            if best_index is not None:
                consumed.add(best_index)
            total += best_weight
        return total / len(longer)

    def __repr__(self) -> str:
        return f"DistanceComparisonModel(distance={self.distance}, ordered_list={self.ordered_list!r})"
