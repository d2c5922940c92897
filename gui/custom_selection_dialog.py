from PySide6.QtWidgets import QDialog, QVBoxLayout, QHBoxLayout, QLabel, QLineEdit, QPushButton
from PySide6.QtCore import Signal

from gallery_tool.errors import InvalidArgument
from gallery_tool.selection import parse_selection_count


class CustomSelectionDialog(QDialog):
    """A small dialog asking how many leading rows to select.

    Input is validated before anything is emitted: an empty, non-numeric or
    negative value shows an inline message and keeps the dialog open.

    Signals:
        countSelected (int): Emitted with the validated row count when the
                             user presses Select. Declared as object so
                             counts past the 32-bit range arrive intact.
    """

    countSelected = Signal(object)

    def __init__(self, parent=None):
        """Initializes the CustomSelectionDialog.

        Args:
            parent (QWidget, optional): The parent widget. Defaults to None.
        """
        super().__init__(parent)
        self.setWindowTitle("Select Custom Number of Rows")
        self.setMinimumWidth(320)

        layout = QVBoxLayout(self)

        title = QLabel("Select Custom Number of Rows")
        title.setStyleSheet("font-weight: bold;")
        layout.addWidget(title)

        controls = QHBoxLayout()
        self.count_input = QLineEdit()
        self.count_input.setPlaceholderText("Enter number")
        self.count_input.returnPressed.connect(self.on_select_clicked)
        controls.addWidget(self.count_input)

        self.select_btn = QPushButton("Select")
        self.select_btn.clicked.connect(self.on_select_clicked)
        controls.addWidget(self.select_btn)
        layout.addLayout(controls)

        self.error_label = QLabel("")
        self.error_label.setStyleSheet("color: #B22222;")
        self.error_label.setVisible(False)
        layout.addWidget(self.error_label)

    def on_select_clicked(self):
        """Validates the input, emits countSelected and closes on success."""
        try:
            count = parse_selection_count(self.count_input.text())
        except InvalidArgument:
            self.error_label.setText("Please enter a valid number")
            self.error_label.setVisible(True)
            return

        self.error_label.setVisible(False)
        self.count_input.clear()
        self.countSelected.emit(count)
        self.accept()
