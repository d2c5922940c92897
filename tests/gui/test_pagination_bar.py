"""Tests for the PaginationBar widget."""

import pytest

from gallery_tool.browser_session import BrowserSession
from gui.pagination_bar import PaginationBar


@pytest.fixture
def bar(qapp, qtbot):
    widget = PaginationBar()
    qtbot.addWidget(widget)
    return widget


@pytest.fixture
def session(page_factory):
    session = BrowserSession(page_size=12)
    session.request_page(10)
    session.apply_page_response(10, page_factory(10))
    return session


def test_initial_state(bar):
    assert bar.showing_label.text() == "Showing 0 to 0 of 0 entries"
    assert not bar.prev_btn.isEnabled()
    assert not bar.next_btn.isEnabled()
    assert bar.page_buttons == []


def test_update_pagination(bar, session):
    bar.update_pagination(session.pagination_summary())

    assert bar.showing_label.text() == "Showing 109 to 120 of 1000 entries"
    assert [b.text() for b in bar.page_buttons] == ["8", "9", "10", "11", "12"]
    assert [b.isChecked() for b in bar.page_buttons] == [False, False, True, False, False]
    assert bar.prev_btn.isEnabled()
    assert bar.next_btn.isEnabled()


def test_previous_and_next(bar, session, qtbot):
    bar.update_pagination(session.pagination_summary())
    with qtbot.waitSignal(bar.page_requested, timeout=1000) as blocker:
        bar.prev_btn.click()
    assert blocker.args == [9]
    with qtbot.waitSignal(bar.page_requested, timeout=1000) as blocker:
        bar.next_btn.click()
    assert blocker.args == [11]


def test_numbered_button(bar, session, qtbot):
    bar.update_pagination(session.pagination_summary())
    with qtbot.waitSignal(bar.page_requested, timeout=1000) as blocker:
        bar.page_buttons[-1].click()
    assert blocker.args == [12]


def test_last_page_disables_next(bar, page_factory):
    session = BrowserSession(page_size=12)
    session.request_page(84)
    session.apply_page_response(84, page_factory(84, ids=[997, 998, 999, 1000]))
    bar.update_pagination(session.pagination_summary())
    assert not bar.next_btn.isEnabled()
    assert bar.showing_label.text() == "Showing 997 to 1000 of 1000 entries"
