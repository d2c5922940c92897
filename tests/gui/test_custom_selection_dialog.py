"""Tests for CustomSelectionDialog input validation."""

import pytest

from gui.custom_selection_dialog import CustomSelectionDialog


@pytest.fixture
def dialog(qapp, qtbot):
    widget = CustomSelectionDialog()
    qtbot.addWidget(widget)
    return widget


def test_valid_count_is_emitted(dialog, qtbot):
    dialog.count_input.setText(" 15 ")
    counts = []
    dialog.countSelected.connect(counts.append)
    with qtbot.waitSignal(dialog.accepted, timeout=1000):
        dialog.select_btn.click()
    assert counts == [15]
    assert dialog.count_input.text() == ""


@pytest.mark.parametrize("text", ["", "abc", "-4", "2.5", "+5", "1_000"])
def test_invalid_count_keeps_dialog_open(dialog, qtbot, text):
    dialog.count_input.setText(text)
    with qtbot.assertNotEmitted(dialog.countSelected):
        dialog.select_btn.click()
    assert dialog.error_label.text() == "Please enter a valid number"
    assert not dialog.error_label.isHidden()
    assert dialog.count_input.text() == text


def test_error_cleared_after_valid_input(dialog):
    dialog.count_input.setText("x")
    dialog.on_select_clicked()
    dialog.count_input.setText("0")
    dialog.on_select_clicked()
    assert dialog.error_label.isHidden()


@pytest.mark.parametrize("text, expected", [("3000000000", 3000000000), ("4294967301", 4294967301)])
def test_large_count_is_emitted_intact(dialog, qtbot, text, expected):
    dialog.count_input.setText(text)
    with qtbot.waitSignal(dialog.countSelected, timeout=1000) as blocker:
        dialog.select_btn.click()
    assert blocker.args == [expected]
