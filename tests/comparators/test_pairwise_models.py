"""Tests for the pairwise comparison models."""

import pytest

from aitomics.comparators import DistanceComparisonModel, EqualComparisonModel
from aitomics.exceptions import ValidationError


class TestEqualComparisonModel:
    def test_both_empty_is_full_agreement(self) -> None:
        assert EqualComparisonModel().run([], []) == 1.0

    def test_identical_outputs(self) -> None:
        assert EqualComparisonModel().run(["a", "b"], ["a", "b"]) == 1.0

    def test_disjoint_outputs(self) -> None:
        assert EqualComparisonModel().run(["a"], ["b", "c"]) == 0.0

    def test_one_side_empty(self) -> None:
        assert EqualComparisonModel().run(["a"], []) == 0.0

    def test_partial_overlap(self) -> None:
        result = EqualComparisonModel().run(["quality", "price"], ["quality", "price", "design"])
        assert result == pytest.approx(2 / 3)

    def test_nested_lists_match_by_value(self) -> None:
        result = EqualComparisonModel().run([["a", "b"], "c"], [["a", "b"]])
        assert result == 0.5

    def test_scalar_outputs_are_wrapped(self) -> None:
        assert EqualComparisonModel().run("a", "a") == 1.0  # type: ignore[arg-type]

    def test_is_pairwise(self) -> None:
        assert EqualComparisonModel.is_multiple_comparison is False


class TestDistanceComparisonModel:
    @pytest.fixture
    def model(self) -> DistanceComparisonModel:
        return DistanceComparisonModel(1, ["neg", "neu", "pos"])

    @pytest.mark.parametrize(
        "a, b, expected",
        [
            (["pos"], ["neu"], 0.5),
            (["pos"], ["neg"], 0.0),
            (["pos"], ["pos"], 1.0),
            ([], [], 1.0),
        ],
    )
    def test_scale_positions(
        self, model: DistanceComparisonModel, a: list, b: list, expected: float
    ) -> None:
        assert model.run(a, b) == expected

    def test_surplus_elements_count_as_mismatch(self, model: DistanceComparisonModel) -> None:
        assert model.run(["neu", "pos"], ["neu"]) == 0.5

    def test_shorter_elements_used_once(self, model: DistanceComparisonModel) -> None:
        assert model.run(["pos"], ["pos", "pos"]) == 0.5

    def test_longer_side_may_be_second(self, model: DistanceComparisonModel) -> None:
        assert model.run(["neu"], ["neu", "pos"]) == 0.5

    def test_unknown_values_only_match_exactly(self, model: DistanceComparisonModel) -> None:
        assert model.run(["maybe"], ["neu"]) == 0.0
        assert model.run(["maybe"], ["maybe"]) == 1.0

    def test_custom_weight_function(self) -> None:
        model = DistanceComparisonModel(0, [], weight_fn=lambda k, l: 0.25)
        assert model.run(["x", "y"], ["z", "w"]) == 0.25

    def test_wider_distance(self) -> None:
        model = DistanceComparisonModel(2, ["neg", "neu", "pos"])
        assert model.run(["pos"], ["neg"]) == 0.5

    def test_negative_distance_rejected(self) -> None:
        with pytest.raises(ValidationError):
            DistanceComparisonModel(-1, ["a"])
