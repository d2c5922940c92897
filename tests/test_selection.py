"""Tests for the selection model (gallery_tool/selection.py).

Covers:
- global_position arithmetic and its input contract
- parse_selection_count validation
- SelectionModel mutations, invariants and derived values
"""

import pytest

from gallery_tool.errors import InvalidArgument
from gallery_tool.selection import (
    SelectionModel,
    SelectionSnapshot,
    global_position,
    parse_selection_count,
)


class TestGlobalPosition:

    def test_first_item_of_first_page(self):
        assert global_position(1, 12, 0) == 0

    def test_last_item_of_first_page(self):
        assert global_position(1, 12, 11) == 11

    def test_second_page_starts_after_first(self):
        assert global_position(2, 12, 0) == 12
        assert global_position(2, 12, 4) == 16

    def test_large_page_number(self):
        assert global_position(1000, 25, 3) == 999 * 25 + 3

    @pytest.mark.parametrize("page_number, page_size, offset", [
        (0, 12, 0),
        (1, 0, 0),
        (1, 12, -1),
        (1, 12, 12),
    ])
    def test_contract_violations_raise(self, page_number, page_size, offset):
        with pytest.raises(ValueError):
            global_position(page_number, page_size, offset)


class TestParseSelectionCount:

    def test_plain_number(self):
        assert parse_selection_count("15") == 15

    def test_surrounding_whitespace(self):
        assert parse_selection_count("  7 ") == 7

    def test_zero_is_valid(self):
        assert parse_selection_count("0") == 0

    def test_int_passes_through(self):
        assert parse_selection_count(42) == 42

    @pytest.mark.parametrize("value", ["", "   ", "abc", "1.5", "-3", "+5", "1_000", "\u0661\u0662", "12abc", None, 2.0, True])
    def test_invalid_values(self, value):
        with pytest.raises(InvalidArgument):
            parse_selection_count(value)

    def test_negative_int(self):
        with pytest.raises(InvalidArgument):
            parse_selection_count(-1)

    def test_invalid_argument_is_value_error(self):
        with pytest.raises(ValueError):
            parse_selection_count("nope")


class TestSelectionModel:

    @pytest.fixture
    def model(self):
        return SelectionModel()

    def test_initial_state(self, model):
        assert model.baseline == 0
        assert model.include == set()
        assert model.exclude == set()
        assert model.effective_count() == 0

    def test_set_baseline_sets_count_and_clears_overrides(self, model):
        model.mark_included("a")
        model.mark_excluded("b")

        model.set_baseline(20)

        assert model.baseline == 20
        assert model.include == set()
        assert model.exclude == set()
        assert model.effective_count() == 20

    @pytest.mark.parametrize("k", [0, 1, 12, 15, 10_000])
    def test_effective_count_equals_baseline_after_set(self, model, k):
        model.mark_included("x")
        model.set_baseline(k)
        assert model.effective_count() == k

    @pytest.mark.parametrize("bad", [-1, "5", 3.0, None, True])
    def test_set_baseline_rejects_invalid_and_keeps_state(self, model, bad):
        model.set_baseline(5)
        model.mark_included("kept")
        before = model.snapshot()

        with pytest.raises(InvalidArgument):
            model.set_baseline(bad)

        assert model.snapshot() == before

    def test_mark_included_removes_from_exclude(self, model):
        model.mark_excluded("a")
        model.mark_included("a")
        assert "a" in model.include
        assert "a" not in model.exclude

    def test_mark_excluded_removes_from_include(self, model):
        model.mark_included("a")
        model.mark_excluded("a")
        assert "a" in model.exclude
        assert "a" not in model.include

    def test_marks_are_idempotent(self, model):
        model.mark_included("a")
        model.mark_included("a")
        model.mark_excluded("b")
        model.mark_excluded("b")
        assert model.include == {"a"}
        assert model.exclude == {"b"}

    def test_unmark_missing_is_noop(self, model):
        model.unmark_included("ghost")
        model.unmark_excluded("ghost")
        assert model.snapshot() == SelectionModel().snapshot()

    def test_effective_selected_rule_only(self, model):
        model.set_baseline(3)
        assert model.effective_selected("p0", 0)
        assert model.effective_selected("p2", 2)
        assert not model.effective_selected("p3", 3)

    def test_exclude_overrides_rule(self, model):
        model.set_baseline(3)
        model.mark_excluded("p1")
        assert not model.effective_selected("p1", 1)

    def test_include_overrides_rule(self, model):
        model.set_baseline(3)
        model.mark_included("p7")
        assert model.effective_selected("p7", 7)

    def test_count_formula_with_overrides(self, model):
        model.set_baseline(10)
        model.mark_excluded("low-1")
        model.mark_excluded("low-2")
        model.mark_included("high-1")
        assert model.effective_count() == 10 + 1 - 2

    def test_snapshot_is_immutable_copy(self, model):
        model.mark_included("a")
        snap = model.snapshot()
        model.mark_included("b")
        assert isinstance(snap, SelectionSnapshot)
        assert snap.include == frozenset({"a"})
        assert snap.effective_count == 1

    def test_equality(self, model):
        other = SelectionModel()
        model.mark_included(1)
        other.mark_included(1)
        assert model == other
        other.mark_excluded(2)
        assert model != other
