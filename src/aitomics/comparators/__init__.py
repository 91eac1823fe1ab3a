from aitomics.comparators.base import (
    UNDEFINED_AGREEMENT,
    AgreementScore,
    ComparisonModel,
    UndefinedAgreement,
)
from aitomics.comparators.cohens import CohensComparisonModel
from aitomics.comparators.comparator import Comparator
from aitomics.comparators.distance import DistanceComparisonModel
from aitomics.comparators.equal import EqualComparisonModel
from aitomics.comparators.krippendorffs import KrippendorffsComparisonModel

__all__ = [
    "UNDEFINED_AGREEMENT",
    "AgreementScore",
    "ComparisonModel",
    "UndefinedAgreement",
    "CohensComparisonModel",
    "Comparator",
    "DistanceComparisonModel",
    "EqualComparisonModel",
    "KrippendorffsComparisonModel",
]
