"""Common contract of the comparison models."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from enum import Enum
from typing import Any, ClassVar


class UndefinedAgreement(Enum):
    """Marker for an agreement statistic that is undefined for the given data."""

    UNDEFINED = "undefined"


UNDEFINED_AGREEMENT = UndefinedAgreement.UNDEFINED

AgreementScore = float | UndefinedAgreement


def as_list(value: Any) -> list[Any]:
    """Wrap a scalar output into a one-element list."""
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


class ComparisonModel(ABC):
    """Reduces aligned outputs of two raters to an agreement score.

    Pairwise models (``is_multiple_comparison = False``) compare the outputs of
    two single responses. Multi-item models compare two lists of outputs, one
    entry per matched root input.
    """

    is_multiple_comparison: ClassVar[bool] = False

    @abstractmethod
    def run(self, outputs_a: Sequence[Any], outputs_b: Sequence[Any]) -> AgreementScore:
        """Execute a comparison between the outputs of two raters."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
