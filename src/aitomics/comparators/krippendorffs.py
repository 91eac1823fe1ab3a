"""Krippendorff's alpha for single- and multi-label ratings.

Based on the k-alpha calculator (https://github.com/davide-marchiori/k-alpha).

Single-label data uses the nominal Krippendorff calculation, with an optional
weight function for partial agreement between labels (ordinal or numeric
scales). As soon as any rater gives more than one label for an item the data is
treated as multi-label: observed agreement becomes the mean Jaccard index of the
raters' label sets per item and the weight function is ignored.

Expected agreement in the multi-label path is the sum of squared pooled label
frequencies. This does not match the textbook multi-label extensions, so alpha
for multi-label data is an approximation. Existing fixtures depend on this exact
formula; keep it.
"""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Callable, Sequence
from itertools import combinations
from typing import Any

from aitomics.comparators.base import UNDEFINED_AGREEMENT, AgreementScore, ComparisonModel
from aitomics.exceptions import ValidationError

WeightFn = Callable[[str, str], float]

# One entry per rater, one label list per item
RaterLabels = list[list[list[str]]]


def nominal_weight(k: str, l: str) -> float:  # noqa: E741
    return 1.0 if k == l else 0.0


def jaccard(labels_a: Sequence[str], labels_b: Sequence[str]) -> float:
    set_a, set_b = set(labels_a), set(labels_b)
    union = set_a | set_b
    if not union:
        return 1.0
    return len(set_a & set_b) / len(union)


class KrippendorffsComparisonModel(ComparisonModel):
    """Krippendorff's alpha between two raters over matched items.

    Args:
        labels: The possible labels; values are compared by their string form
        weight_fn: Agreement weight ``(k, l) -> [0, 1]`` between two labels,
            used for single-label data only. Defaults to nominal (1 if equal).
    """

    is_multiple_comparison = True

    def __init__(self, labels: Sequence[Any], weight_fn: WeightFn | None = None) -> None:
        if isinstance(labels, (str, bytes)) or not labels:
            raise ValidationError(
                "labels must be a non-empty sequence of labels", field="labels", value=labels
            )
        self.labels = list(dict.fromkeys(str(label) for label in labels))
        self.weight_fn: WeightFn = weight_fn or nominal_weight

    def run(self, outputs_a: Sequence[Any], outputs_b: Sequence[Any]) -> AgreementScore:
        return self.calculate_alpha([self._valid_labels(outputs_a), self._valid_labels(outputs_b)])

    def _valid_labels(self, outputs: Sequence[Any]) -> list[list[str]]:
        items: list[list[str]] = []
        for item in outputs:
            values = item if isinstance(item, (list, tuple)) else [item]
            items.append(
                [str(value) for value in values if value is not None and str(value) in self.labels]
            )
        return items

    def calculate_alpha(self, raters: RaterLabels) -> AgreementScore:
        """Alpha for preprocessed ratings, truncated toward zero at three decimals.

        Returns ``UNDEFINED_AGREEMENT`` when no item has two contributing raters,
        or when expected agreement is 1 without perfect observed agreement.
        """
        if len(raters) < 2:
            return UNDEFINED_AGREEMENT

        item_count = max(len(rater) for rater in raters)
        padded = [rater + [[]] * (item_count - len(rater)) for rater in raters]
        is_multi_label = any(len(item) > 1 for rater in padded for item in rater)

        # Drop items where fewer than 2 raters contributed a valid label
        items = [
            list(column)
            for column in zip(*padded)
            if sum(1 for labels in column if labels) >= 2
        ]
        if not items:
            return UNDEFINED_AGREEMENT

        if is_multi_label:
            p_a, p_e = self._multi_label_agreement(items)
        else:
            p_a, p_e = self._single_label_agreement(items)

        if 1 - p_e == 0:
            return 1.0 if p_a == 1 else UNDEFINED_AGREEMENT

        alpha = (p_a - p_e) / (1 - p_e)
        # Strip float noise before truncating so 0.7 does not become 0.699
        return math.trunc(round(alpha * 1000, 6)) / 1000

    def _multi_label_agreement(self, items: list[list[list[str]]]) -> tuple[float, float]:
        observed = 0.0
        for column in items:
            pairs = list(combinations(column, 2))
            observed += sum(jaccard(a, b) for a, b in pairs) / len(pairs)
        p_a = observed / len(items)

        pooled = Counter(label for column in items for labels in column for label in labels)
        total = sum(pooled.values())
        p_e = sum((pooled[label] / total) ** 2 for label in self.labels) if total else 0.0
        return p_a, p_e

    def _single_label_agreement(self, items: list[list[list[str]]]) -> tuple[float, float]:
        observed = 0.0
        pooled: Counter[str] = Counter()
        for column in items:
            counts = Counter(labels[0] for labels in column if labels)
            pooled.update(counts)
            assigned = sum(counts.values())
            if assigned >= 2:
                observed += self._weighted_pairs(counts) / (assigned * (assigned - 1))
        p_a = observed / len(items)

        total = sum(pooled.values())
        total_pairs = total * (total - 1)
        p_e = self._weighted_pairs(pooled) / total_pairs if total_pairs > 0 else 0.0
        return p_a, p_e

    def _weighted_pairs(self, counts: Counter[str]) -> float:
        """Weighted count of ordered label pairs within ``counts``."""
        agreement = 0.0
        for k_index, label_k in enumerate(self.labels):
            count_k = counts[label_k]
            agreement += count_k * (count_k - 1) * self.weight_fn(label_k, label_k)
            for label_l in self.labels[k_index + 1 :]:
                agreement += count_k * counts[label_l] * self.weight_fn(label_k, label_l) * 2
        return agreement

    def __repr__(self) -> str:
        return f"KrippendorffsComparisonModel(labels={self.labels!r})"
