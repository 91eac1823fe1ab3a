"""Exact-match agreement between two outputs."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from aitomics.comparators.base import ComparisonModel, as_list


class EqualComparisonModel(ComparisonModel):
    """Share of exact matches among all elements of both outputs.

    Elements of A found in B form the intersection; elements found on only one
    side count as disagreements:
    ``intersection / (only_a + only_b + intersection)``. Nested lists match by
    value.
    """

    def run(self, outputs_a: Sequence[Any], outputs_b: Sequence[Any]) -> float:
        a = as_list(outputs_a)
        b = as_list(outputs_b)
        if not a and not b:
            return 1.0

        intersection = sum(1 for item in a if item in b)
        only_a = len(a) - intersection
        only_b = sum(1 for item in b if item not in a)
        return intersection / (only_a + only_b + intersection)
