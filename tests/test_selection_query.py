"""Tests for SelectionQuery (gallery_tool/selection_query.py)."""

import pytest

from gallery_tool.errors import UnknownIdentifier
from gallery_tool.reconciler import SelectionReconciler
from gallery_tool.selection_query import PageCheckState, SelectionQuery


@pytest.fixture
def reconciler():
    return SelectionReconciler()


@pytest.fixture
def query(reconciler):
    return SelectionQuery(reconciler.model)


class TestItemStates:

    def test_page_states_follow_baseline(self, reconciler, query, page_two):
        reconciler.replace_baseline(15)
        states = query.page_states(page_two)
        assert [item_id for item_id, _ in states] == list(range(13, 25))
        assert [selected for _, selected in states] == [True] * 3 + [False] * 9

    def test_is_selected_with_overrides(self, reconciler, query, page_one):
        reconciler.replace_baseline(2)
        reconciler.toggle_item(page_one, 1, False)
        reconciler.toggle_item(page_one, 10, True)
        assert not query.is_selected(page_one, 1)
        assert query.is_selected(page_one, 2)
        assert not query.is_selected(page_one, 3)
        assert query.is_selected(page_one, 10)

    def test_is_selected_unknown_identifier(self, query, page_one):
        with pytest.raises(UnknownIdentifier):
            query.is_selected(page_one, 500)

    def test_selected_ids_on_page(self, reconciler, query, page_one):
        reconciler.replace_baseline(3)
        reconciler.toggle_item(page_one, 12, True)
        assert query.selected_ids_on_page(page_one) == [1, 2, 3, 12]

    def test_overrides_survive_navigation(self, reconciler, query, page_one, page_two):
        reconciler.toggle_item(page_one, 4, True)
        # Move to page 2 and back: the page is rebuilt, the override remains
        assert query.selected_ids_on_page(page_two) == []
        assert query.selected_ids_on_page(page_one) == [4]


class TestPageCheckState:

    def test_unchecked_when_nothing_selected(self, query, page_one):
        assert query.page_check_state(page_one) == PageCheckState.UNCHECKED

    def test_checked_when_all_selected(self, reconciler, query, page_one):
        reconciler.replace_baseline(15)
        assert query.page_check_state(page_one) == PageCheckState.CHECKED

    def test_partial_when_some_selected(self, reconciler, query, page_two):
        reconciler.replace_baseline(15)
        assert query.page_check_state(page_two) == PageCheckState.PARTIAL

    def test_checked_after_select_all(self, reconciler, query, page_two):
        reconciler.toggle_all_on_page(page_two, True)
        assert query.page_check_state(page_two) == PageCheckState.CHECKED

    def test_empty_page_is_unchecked(self, query, page_factory):
        assert query.page_check_state(page_factory(4, ids=[])) == PageCheckState.UNCHECKED


class TestEffectiveCount:

    def test_count_tracks_model(self, reconciler, query, page_two):
        reconciler.replace_baseline(15)
        reconciler.toggle_item(page_two, 13, False)
        reconciler.toggle_item(page_two, 24, True)
        assert query.effective_count() == 15

    def test_count_matches_visible_states_on_single_page_collection(self, reconciler, query, page_one):
        reconciler.replace_baseline(12)
        reconciler.toggle_item(page_one, 5, False)
        reconciler.toggle_item(page_one, 6, False)
        assert query.effective_count() == len(query.selected_ids_on_page(page_one)) == 10
