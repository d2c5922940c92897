"""Page navigator shown under the artworks table."""

from PySide6.QtWidgets import QWidget, QHBoxLayout, QLabel, QPushButton
from PySide6.QtCore import Signal

from gallery_tool.browser_session import PaginationSummary


class PaginationBar(QWidget):
    """Previous/next buttons, a window of numbered page buttons and a label.

    Signals:
        page_requested(int): Emitted with the page number the user picked
    """

    page_requested = Signal(int)

    def __init__(self, parent=None):
        super().__init__(parent)
        self._current_page = 1
        self._page_buttons = []

        layout = QHBoxLayout(self)
        layout.setContentsMargins(5, 5, 5, 5)

        self.showing_label = QLabel("Showing 0 to 0 of 0 entries")
        layout.addWidget(self.showing_label)
        layout.addStretch()

        self.prev_btn = QPushButton("<")
        self.prev_btn.setToolTip("Previous page")
        self.prev_btn.clicked.connect(lambda: self.page_requested.emit(self._current_page - 1))
        layout.addWidget(self.prev_btn)

        self._buttons_layout = QHBoxLayout()
        layout.addLayout(self._buttons_layout)

        self.next_btn = QPushButton(">")
        self.next_btn.setToolTip("Next page")
        self.next_btn.clicked.connect(lambda: self.page_requested.emit(self._current_page + 1))
        layout.addWidget(self.next_btn)

        self.prev_btn.setEnabled(False)
        self.next_btn.setEnabled(False)

    @property
    def page_buttons(self):
        return list(self._page_buttons)

    def update_pagination(self, summary: PaginationSummary):
        """Rebuild the navigator from a session's pagination summary."""
        self._current_page = summary.current_page
        self.showing_label.setText(summary.label)
        self.prev_btn.setEnabled(summary.has_previous)
        self.next_btn.setEnabled(summary.has_next)

        for button in self._page_buttons:
            self._buttons_layout.removeWidget(button)
            button.deleteLater()
        self._page_buttons = []

        for page_number in summary.page_numbers:
            button = QPushButton(str(page_number))
            button.setCheckable(True)
            button.setChecked(page_number == summary.current_page)
            button.clicked.connect(lambda checked=False, n=page_number: self.page_requested.emit(n))
            self._buttons_layout.addWidget(button)
            self._page_buttons.append(button)
