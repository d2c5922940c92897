import copy
import logging

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QTableView, QLabel,
    QPushButton, QPlainTextEdit, QMessageBox, QHeaderView, QAbstractItemView
)
from PySide6.QtCore import QSortFilterProxyModel, Qt

from gallery_tool.browser_session import BrowserSession
from gallery_tool.config import DEFAULT_CONFIG, ConfigError, load_config
from gallery_tool.errors import InvalidArgument
from gallery_tool.page import Page
from gallery_tool.page_provider import ArtworkPageProvider
from gui.background_worker import PageFetchWorker
from gui.custom_selection_dialog import CustomSelectionDialog
from gui.log_handler import QtLogHandler
from gui.page_table_model import CHECKBOX_COLUMN, PageTableModel
from gui.pagination_bar import PaginationBar
from gui.selection_toolbar import SelectionToolbar

logger = logging.getLogger("GalleryToolLogger")


class MainWindow(QMainWindow):
    """The main window of the Artwork Selection Browser.

    The window displays one page of artworks at a time. All selection
    changes go through the BrowserSession; widgets only emit intents and
    re-render from the session afterwards.

    Attributes:
        config (dict): Application configuration.
        session (BrowserSession): Page and selection state.
        provider: Page provider used by fetch workers.
        fetch_worker (PageFetchWorker): Worker for the requested page, if any.
        table_model (PageTableModel): Model behind the artworks table.
        proxy_model (QSortFilterProxyModel): Sorts the current page for display.
    """

    def __init__(self, config=None, provider=None, auto_load=True):
        """Initializes the MainWindow.

        Args:
            config (dict, optional): Configuration; loaded from disk if None.
            provider (optional): Page provider; an ArtworkPageProvider built
                from the configuration if None.
            auto_load (bool): Request page 1 immediately.
        """
        super().__init__()
        self.setWindowTitle("Artwork Selection Browser")
        self.setGeometry(100, 100, 1200, 800)
        self.statusBar().showMessage("Ready")

        self.config = config if config is not None else self._load_config()
        self.session = BrowserSession(page_size=self.config["page_size"])
        self.provider = provider or ArtworkPageProvider(
            api_url=self.config["api_url"],
            timeout=self.config["request_timeout"],
            fields=self.config["fields"],
        )
        self.fetch_worker = None
        # Superseded workers stay referenced until their thread finishes
        self._retired_workers = []

        self.create_widgets()
        self.connect_signals()
        self.setup_logging()
        self.refresh_views()

        if auto_load:
            self.load_page(1)

    def _load_config(self):
        try:
            return load_config()
        except ConfigError as e:
            logger.error(f"Invalid configuration: {e}")
            QMessageBox.warning(self, "Configuration Error", f"{e}\n\nDefault settings will be used.")
            return copy.deepcopy(DEFAULT_CONFIG)

    def create_widgets(self):
        """Builds the toolbar, table, error row, pagination bar and log panel."""
        central = QWidget()
        layout = QVBoxLayout(central)

        self.toolbar = SelectionToolbar()
        layout.addWidget(self.toolbar)

        self.table_model = PageTableModel()
        self.table_view = QTableView()
        self.proxy_model = QSortFilterProxyModel()
        self.proxy_model.setSourceModel(self.table_model)
        self.table_view.setModel(self.proxy_model)
        self.table_view.setSelectionMode(QAbstractItemView.SelectionMode.NoSelection)
        self.table_view.setAlternatingRowColors(True)
        header = self.table_view.horizontalHeader()
        header.setSectionResizeMode(QHeaderView.ResizeMode.Stretch)
        header.setSectionResizeMode(CHECKBOX_COLUMN, QHeaderView.ResizeMode.ResizeToContents)
        # Sorting reorders the loaded page only; start in API order
        header.setSortIndicator(-1, Qt.SortOrder.AscendingOrder)
        self.table_view.setSortingEnabled(True)
        layout.addWidget(self.table_view, stretch=1)

        error_row = QHBoxLayout()
        self.error_label = QLabel("")
        self.error_label.setStyleSheet("color: #B22222; font-weight: bold;")
        error_row.addWidget(self.error_label)
        self.retry_btn = QPushButton("Retry")
        error_row.addWidget(self.retry_btn)
        error_row.addStretch()
        layout.addLayout(error_row)

        self.pagination_bar = PaginationBar()
        layout.addWidget(self.pagination_bar)

        self.execution_log_edit = QPlainTextEdit()
        self.execution_log_edit.setReadOnly(True)
        self.execution_log_edit.setMaximumHeight(120)
        layout.addWidget(self.execution_log_edit)

        self.setCentralWidget(central)

    def connect_signals(self):
        """Connects widget signals to the session intents."""
        self.table_model.item_toggled.connect(self.on_item_toggled)
        self.toolbar.page_toggled.connect(self.on_page_toggled)
        self.toolbar.custom_selection_clicked.connect(self.show_custom_selection_dialog)
        self.toolbar.clear_selection_clicked.connect(self.clear_selection)
        self.pagination_bar.page_requested.connect(self.load_page)
        self.retry_btn.clicked.connect(self.retry_current_page)

    def setup_logging(self):
        """Mirrors application log records into the log panel."""
        self.log_handler = QtLogHandler()
        self.log_handler.setFormatter(logging.Formatter("%(asctime)s - %(levelname)s - %(message)s"))
        self.log_handler.setLevel(logging.INFO)
        logger.addHandler(self.log_handler)
        self.log_handler.log_message_received.connect(self.execution_log_edit.appendPlainText)

    # ------------------------------------------------------------------
    # Page loading
    # ------------------------------------------------------------------

    def load_page(self, page_number: int):
        """Requests a page; results of any earlier request are discarded."""
        try:
            self.session.request_page(page_number)
        except ValueError as e:
            logger.warning(f"Ignoring page request: {e}")
            return

        self._retire_fetch_worker()

        self.statusBar().showMessage(f"Loading page {page_number}...")
        self.pagination_bar.update_pagination(self.session.pagination_summary())

        worker = PageFetchWorker(self.provider, page_number, self.session.page_size)
        worker.finished_with_data.connect(self.on_page_loaded)
        worker.page_failed.connect(self.on_page_failed)
        self.fetch_worker = worker
        worker.start()

    def retry_current_page(self):
        self.load_page(self.session.requested_page)

    def _retire_fetch_worker(self):
        worker = self.fetch_worker
        self.fetch_worker = None
        if worker is None:
            return
        worker.cancel()
        worker.disconnect_signals()
        if worker.isRunning():
            worker.finished.connect(self._release_retired_workers)
            self._retired_workers.append(worker)
        else:
            worker.deleteLater()

    def _release_retired_workers(self):
        still_running = []
        for worker in self._retired_workers:
            if worker.isRunning():
                still_running.append(worker)
            else:
                worker.deleteLater()
        self._retired_workers = still_running

    def on_page_loaded(self, page: Page):
        if not self.session.apply_page_response(page.page_number, page):
            return
        self.statusBar().showMessage(f"Page {page.page_number} loaded", 3000)
        self.refresh_views()

    def on_page_failed(self, page_number: int, message: str):
        if not self.session.apply_page_failure(page_number, message):
            return
        self.statusBar().showMessage(f"Error loading page {page_number}")
        self.refresh_views()

    # ------------------------------------------------------------------
    # Selection intents
    # ------------------------------------------------------------------

    def on_item_toggled(self, item_id, desired: bool):
        self.session.toggle_item(item_id, desired)
        self.refresh_selection()

    def on_page_toggled(self, checked: bool):
        self.session.toggle_all_on_page(checked)
        self.refresh_selection()

    def show_custom_selection_dialog(self):
        dialog = CustomSelectionDialog(self)
        dialog.countSelected.connect(self.apply_custom_selection)
        dialog.exec()

    def clear_selection(self):
        self.apply_custom_selection(0)

    def apply_custom_selection(self, count):
        """Replaces the bulk rule with "the first ``count`` rows are selected"."""
        try:
            value = self.session.replace_baseline(count)
        except InvalidArgument as e:
            QMessageBox.warning(self, "Invalid Number", f"Please enter a valid number.\n\n{e}")
            return
        self.statusBar().showMessage(f"Selected first {value} rows", 3000)
        self.refresh_selection()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def refresh_selection(self):
        """Re-renders checkboxes, the page checkbox and the counter."""
        self.table_model.set_selection_states(self.session.row_states())
        page = self.session.current_page
        self.toolbar.set_page_state(self.session.header_state(), enabled=not page.is_empty)
        self.toolbar.update_selection_count(self.session.selected_count())

    def refresh_views(self):
        """Re-renders the whole window from the session."""
        page = self.session.current_page
        self.table_model.set_page(page.records, self.session.row_states())

        error = self.session.last_error
        self.error_label.setText(error or "")
        self.error_label.setVisible(bool(error))
        self.retry_btn.setVisible(bool(error))

        self.pagination_bar.update_pagination(self.session.pagination_summary())
        self.refresh_selection()

    def closeEvent(self, event):
        """Stops pending fetches and detaches the log handler."""
        workers = self._retired_workers + ([self.fetch_worker] if self.fetch_worker else [])
        for worker in workers:
            worker.cancel()
            worker.cleanup()
        self.fetch_worker = None
        self._retired_workers = []
        logger.removeHandler(self.log_handler)
        event.accept()
