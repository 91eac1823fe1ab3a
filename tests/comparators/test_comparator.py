"""Tests for pairing responses and running comparison models on them."""

import pytest

from aitomics.callers import IdentityCaller, ProgrammaticCaller
from aitomics.comparators import (
    CohensComparisonModel,
    Comparator,
    EqualComparisonModel,
    KrippendorffsComparisonModel,
)
from aitomics.exceptions import (
    MismatchedInputError,
    NoMatchError,
    ValidationError,
    WrongModelKindError,
)
from aitomics.response import Response

RATER_A = IdentityCaller("rater.a")
RATER_B = IdentityCaller("rater.b")


def rated(caller: IdentityCaller, root: str, output: object) -> Response:
    return caller.wrap(output, root)


class TestComparator:
    def test_end_to_end_overlap(self) -> None:
        a = rated(RATER_A, "review 1", ["quality", "price"])
        b = rated(RATER_B, "review 1", ["quality", "price", "design"])
        assert a.compare(b).run(EqualComparisonModel()) == pytest.approx(0.667, abs=1e-3)

    def test_requires_same_root_input(self) -> None:
        a = rated(RATER_A, "review 1", "positive")
        b = rated(RATER_B, "review 2", "positive")
        with pytest.raises(MismatchedInputError):
            Comparator(a, b)

    def test_requires_responses(self) -> None:
        with pytest.raises(ValidationError):
            Comparator(rated(RATER_A, "x", "y"), "not a response")  # type: ignore[arg-type]

    def test_compares_across_chain_depths(self) -> None:
        upper = ProgrammaticCaller(str.upper, "cmp.upper")
        deep = Response("POSITIVE", upper, rated(RATER_A, "review", "positive"))
        shallow = rated(RATER_B, "review", "POSITIVE")
        assert Comparator(deep, shallow).run(EqualComparisonModel()) == 1.0

    def test_run_rejects_multi_item_model(self) -> None:
        comparator = Comparator(rated(RATER_A, "x", "a"), rated(RATER_B, "x", "a"))
        with pytest.raises(WrongModelKindError):
            comparator.run(CohensComparisonModel("a"))

    def test_run_rejects_non_model(self) -> None:
        comparator = Comparator(rated(RATER_A, "x", "a"), rated(RATER_B, "x", "a"))
        with pytest.raises(ValidationError):
            comparator.run("equal")  # type: ignore[arg-type]


class TestMatch:
    def test_pairs_by_root_input_and_drops_unmatched(self) -> None:
        list_a = [rated(RATER_A, "r1", "a1"), rated(RATER_A, "r2", "a2")]
        list_b = [rated(RATER_B, "r2", "b2"), rated(RATER_B, "r3", "b3")]

        pairs = Comparator.match(list_a, list_b)

        assert len(pairs) == 1
        assert pairs[0].a.output == "a2"
        assert pairs[0].b.output == "b2"

    def test_order_follows_first_list(self) -> None:
        list_a = [rated(RATER_A, "r1", "a1"), rated(RATER_A, "r2", "a2")]
        list_b = [rated(RATER_B, "r2", "b2"), rated(RATER_B, "r1", "b1")]
        pairs = Comparator.match(list_a, list_b)
        assert [pair.a.root_input() for pair in pairs] == ["r1", "r2"]

    def test_last_duplicate_wins(self) -> None:
        list_a = [rated(RATER_A, "r1", "first"), rated(RATER_A, "r1", "second")]
        list_b = [rated(RATER_B, "r1", "b")]
        assert Comparator.match(list_a, list_b)[0].a.output == "second"

    def test_unhashable_root_inputs(self) -> None:
        list_a = [rated(RATER_A, ["a", "b"], "x")]  # type: ignore[arg-type]
        list_b = [rated(RATER_B, ["a", "b"], "y")]  # type: ignore[arg-type]
        assert len(Comparator.match(list_a, list_b)) == 1

    def test_rejects_non_responses(self) -> None:
        with pytest.raises(ValidationError):
            Comparator.match([rated(RATER_A, "r1", "a")], ["r1"])  # type: ignore[list-item]


class TestCompareMultiple:
    def test_uses_aligned_outputs_of_matched_pairs(self) -> None:
        list_a = [
            rated(RATER_A, "r1", "positive"),
            rated(RATER_A, "r2", "negative"),
            rated(RATER_A, "only-a", "positive"),
        ]
        list_b = [
            rated(RATER_B, "r2", "negative"),
            rated(RATER_B, "r1", "positive"),
            rated(RATER_B, "only-b", "negative"),
        ]
        result = Comparator.compare_multiple(list_a, list_b, CohensComparisonModel("positive"))
        assert result == 1.0

    def test_krippendorff_over_matched_lists(self) -> None:
        roots = ["r1", "r2", "r3", "r4"]
        labels = ["positive", "negative", "positive", "negative"]
        list_a = [rated(RATER_A, root, label) for root, label in zip(roots, labels)]
        list_b = [rated(RATER_B, root, label) for root, label in zip(reversed(roots), reversed(labels))]
        model = KrippendorffsComparisonModel(["positive", "negative"])
        assert Comparator.compare_multiple(list_a, list_b, model) == 1.0

    def test_rejects_pairwise_model(self) -> None:
        list_a = [rated(RATER_A, "r1", "a")]
        list_b = [rated(RATER_B, "r1", "a")]
        with pytest.raises(WrongModelKindError):
            Comparator.compare_multiple(list_a, list_b, EqualComparisonModel())

    def test_no_shared_root_input(self) -> None:
        list_a = [rated(RATER_A, "r1", "a")]
        list_b = [rated(RATER_B, "r2", "a")]
        with pytest.raises(NoMatchError):
            Comparator.compare_multiple(list_a, list_b, CohensComparisonModel("a"))
