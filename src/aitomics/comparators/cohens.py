"""Cohen's kappa for the presence of one label."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from aitomics.comparators.base import ComparisonModel


class CohensComparisonModel(ComparisonModel):
    """Chance-corrected agreement of two raters on whether ``label_value`` applies.

    Each item is reduced to presence or absence of the label (membership for
    list outputs, equality for scalar outputs). Items are paired by position;
    surplus items of the longer list are ignored.
    """

    is_multiple_comparison = True

    def __init__(self, label_value: Any) -> None:
        self.label_value = label_value

    def _has_label(self, item: Any) -> bool:
        if isinstance(item, (list, tuple, set, frozenset)):
            return self.label_value in item
        return item == self.label_value

    def run(self, outputs_a: Sequence[Any], outputs_b: Sequence[Any]) -> float:
        tp = tn = fp = fn = 0
        for item_a, item_b in zip(outputs_a, outputs_b):
            in_a = self._has_label(item_a)
            in_b = self._has_label(item_b)
            if in_a and in_b:
                tp += 1
            elif not in_a and not in_b:
                tn += 1
            elif in_a:
                fn += 1
            else:
                fp += 1

        n = tp + tn + fp + fn
        # No items means nothing to disagree on
        if n == 0:
            return 1.0

        p0 = (tp + tn) / n
        pe = ((tp + fn) * (tp + fp) + (tn + fn) * (tn + fp)) / (n * n)
        if pe == 1:
            return 1.0 if p0 == 1 else 0.0
        return (p0 - pe) / (1 - pe)

    def __repr__(self) -> str:
        return f"CohensComparisonModel(label_value={self.label_value!r})"
