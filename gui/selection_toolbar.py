"""Selection toolbar for the artworks table.

This module provides the SelectionToolbar widget: the running selection
counter, the page-level select-all checkbox and the buttons that replace the
bulk selection rule.
"""

from PySide6.QtWidgets import QWidget, QHBoxLayout, QLabel, QPushButton, QCheckBox
from PySide6.QtCore import Qt, Signal

from gallery_tool.selection_query import PageCheckState


class PageCheckBox(QCheckBox):
    """Tri-state display checkbox whose clicks only toggle checked/unchecked.

    A click on a partially checked box selects the whole page.
    """

    def __init__(self, text="", parent=None):
        super().__init__(text, parent)
        self.setTristate(True)

    def nextCheckState(self):
        if self.checkState() == Qt.CheckState.Checked:
            self.setCheckState(Qt.CheckState.Unchecked)
        else:
            self.setCheckState(Qt.CheckState.Checked)


class SelectionToolbar(QWidget):
    """Toolbar for selection controls.

    Signals:
        page_toggled(bool): Emitted when the page checkbox is clicked
            True = select every row on the page, False = unselect them
        custom_selection_clicked: Emitted when Custom Row Selection is clicked
        clear_selection_clicked: Emitted when Clear is clicked
    """

    page_toggled = Signal(bool)
    custom_selection_clicked = Signal()
    clear_selection_clicked = Signal()

    _CHECK_STATES = {
        PageCheckState.CHECKED: Qt.CheckState.Checked,
        PageCheckState.PARTIAL: Qt.CheckState.PartiallyChecked,
        PageCheckState.UNCHECKED: Qt.CheckState.Unchecked,
    }

    def __init__(self, parent=None):
        """Initialize the selection toolbar.

        Args:
            parent: Optional parent widget
        """
        super().__init__(parent)
        self._setup_ui()

    def _setup_ui(self):
        """Initialize UI components."""
        layout = QHBoxLayout(self)
        layout.setContentsMargins(5, 5, 5, 5)
        layout.setSpacing(10)

        self.page_checkbox = PageCheckBox("Select page")
        self.page_checkbox.setToolTip("Select or unselect every row on this page")
        self.page_checkbox.clicked.connect(self._on_page_checkbox_clicked)
        layout.addWidget(self.page_checkbox)

        self.selection_label = QLabel("Selected: 0 rows")
        self.selection_label.setStyleSheet("font-weight: bold; color: #2196F3;")
        layout.addWidget(self.selection_label)

        layout.addStretch()

        self.custom_selection_btn = QPushButton("Custom Row Selection")
        self.custom_selection_btn.setToolTip("Select the first N rows across all pages")
        self.custom_selection_btn.clicked.connect(self.custom_selection_clicked.emit)
        layout.addWidget(self.custom_selection_btn)

        self.clear_btn = QPushButton("Clear")
        self.clear_btn.setToolTip("Clear all selections")
        self.clear_btn.clicked.connect(self.clear_selection_clicked.emit)
        layout.addWidget(self.clear_btn)

    def _on_page_checkbox_clicked(self):
        self.page_toggled.emit(self.page_checkbox.checkState() == Qt.CheckState.Checked)

    def update_selection_count(self, count: int):
        """Update selection counter label.

        Args:
            count: Effective number of selected rows across all pages
        """
        self.selection_label.setText(f"Selected: {count} rows")

    def set_page_state(self, state: PageCheckState, enabled: bool = True):
        """Show the page checkbox state without emitting page_toggled.

        Args:
            state: Tri-state computed for the displayed page
            enabled: False disables the checkbox (e.g. empty page)
        """
        self.page_checkbox.blockSignals(True)
        self.page_checkbox.setCheckState(self._CHECK_STATES[state])
        self.page_checkbox.blockSignals(False)
        self.page_checkbox.setEnabled(enabled)
