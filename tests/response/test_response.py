"""Tests for response lineage chains."""

import pytest

from aitomics.callers import ProgrammaticCaller, UnresolvedCaller
from aitomics.comparators import Comparator
from aitomics.exceptions import ValidationError
from aitomics.response import GeneratingType, Response


class TestLineage:
    def test_root_response(self) -> None:
        response = Response("OUT", ProgrammaticCaller(str.upper, "u"), "out")
        assert response.root
        assert response.level == 1
        assert response.root_input() == "out"
        assert response.generator is GeneratingType.PROGRAMMATIC

    def test_levels_follow_the_chain(self, three_step_chain: Response) -> None:
        for node in three_step_chain.iter_lineage():
            if node.root:
                assert node.level == 1
            else:
                assert node.level == node.input.level + 1

    def test_root_input_of_chain(self, three_step_chain: Response) -> None:
        assert three_step_chain.level == 3
        assert three_step_chain.root_input() == "Some Text String"

    def test_lineage_length_equals_level(self, three_step_chain: Response) -> None:
        assert len(list(three_step_chain.iter_lineage())) == three_step_chain.level

    def test_get_walks_back(self, three_step_chain: Response) -> None:
        assert three_step_chain.get(0) is three_step_chain
        assert three_step_chain.get(1).output == "SOME TEXT STRING"
        assert three_step_chain.get(2).caller.id == "aitomics.identityCaller"

    @pytest.mark.parametrize("hops", [-1, 3])
    def test_get_out_of_range(self, three_step_chain: Response, hops: int) -> None:
        with pytest.raises(ValidationError):
            three_step_chain.get(hops)

    def test_seed_may_be_any_value(self) -> None:
        caller = ProgrammaticCaller(len, "len")
        response = Response(3, caller, {"text": "abc"})
        assert response.root
        assert response.root_input() == {"text": "abc"}

    def test_rejects_non_caller(self) -> None:
        with pytest.raises(ValidationError):
            Response("out", "caller-id", "in")  # type: ignore[arg-type]

    def test_rejects_unknown_generator(self) -> None:
        with pytest.raises(ValidationError):
            Response("out", ProgrammaticCaller(str.upper, "u"), "in", "input")  # type: ignore[arg-type]

    def test_output_is_read_only(self, three_step_chain: Response) -> None:
        with pytest.raises(AttributeError):
            three_step_chain.output = "changed"  # type: ignore[misc]


class TestRendering:
    def test_str(self) -> None:
        response = Response("OUT", ProgrammaticCaller(str.upper, "u"), "out")
        assert str(response) == "[u]: 'OUT' (1)"

    def test_to_string_expanded(self, three_step_chain: Response) -> None:
        assert three_step_chain.to_string_expanded() == (
            "[chain.split]: '['SOME', 'TEXT', 'STRING']' (3)\n"
            "[chain.upper]: 'SOME TEXT STRING' (2)\n"
            "[aitomics.identityCaller]: 'Some Text String' (1)\n"
        )

    def test_to_string_expanded_without_newlines(self, three_step_chain: Response) -> None:
        text = three_step_chain.to_string_expanded(newline=False)
        assert "\n" not in text
        assert text.endswith("'Some Text String' (1)")

    def test_to_json_nests_previous_steps(self, three_step_chain: Response) -> None:
        data = three_step_chain.to_json()
        assert data["caller"] == "chain.split"
        assert data["level"] == 3
        assert data["root"] is False
        assert data["generator"] == "programmatic"
        assert data["input"]["caller"] == "chain.upper"
        assert data["input"]["input"]["input"] == "Some Text String"
        assert data["input"]["input"]["root"] is True


class TestCallerBinding:
    def test_unresolved_response(self) -> None:
        response = Response("out", UnresolvedCaller("later"), "in")
        assert not response.is_resolved
        assert str(response) == "[later]: 'out' (1)"

    def test_rebind_caller(self) -> None:
        response = Response("out", UnresolvedCaller("later"), "in")
        caller = ProgrammaticCaller(str.upper, "later")
        response.rebind_caller(caller)
        assert response.is_resolved
        assert response.caller is caller

    def test_rebind_requires_same_id(self) -> None:
        response = Response("out", UnresolvedCaller("later"), "in")
        with pytest.raises(ValidationError):
            response.rebind_caller(ProgrammaticCaller(str.upper, "other"))

    def test_rebind_refuses_to_replace_bound_caller(self) -> None:
        response = Response("out", ProgrammaticCaller(str.upper, "u"), "in")
        with pytest.raises(ValidationError):
            response.rebind_caller(ProgrammaticCaller(str.lower, "u"))

    def test_compare_creates_comparator(self, three_step_chain: Response) -> None:
        other = Response(["x"], ProgrammaticCaller(str.split, "s"), "Some Text String")
        comparator = three_step_chain.compare(other)
        assert isinstance(comparator, Comparator)
        assert comparator.b is other
