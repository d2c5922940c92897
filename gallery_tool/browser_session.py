"""Browsing session: current page, pending request and selection state.

The session is driven from the GUI thread only. Page fetches happen
elsewhere; their outcome is handed back through ``apply_page_response`` or
``apply_page_failure`` and is applied only if it answers the page most
recently requested.
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Hashable, Iterable, List, Optional, Tuple

from gallery_tool import pagination
from gallery_tool.logger_config import log_with_context
from gallery_tool.page import Page
from gallery_tool.reconciler import SelectionReconciler
from gallery_tool.selection import SelectionModel, parse_selection_count
from gallery_tool.selection_query import PageCheckState, SelectionQuery

logger = logging.getLogger("GalleryToolLogger")


@dataclass(frozen=True)
class PaginationSummary:
    """What the page navigator needs to render itself."""

    current_page: int
    total_pages: int
    total_records: int
    showing: Tuple[int, int]
    page_numbers: List[int]
    has_previous: bool
    has_next: bool
    label: str


class BrowserSession:
    """State of one browsing session.

    Attributes:
        page_size: Fixed page size for the whole session
        session_id: Random identifier used in structured logs
        current_page: Page currently displayed
        requested_page: Page number of the latest request
        total_records: Total records last reported by the provider
        last_error: Message of the last failed fetch, or None
    """

    def __init__(self, page_size: int = 12, model: Optional[SelectionModel] = None):
        if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size < 1:
            raise ValueError(f"page_size must be a positive integer, got {page_size!r}")
        self.page_size = page_size
        self.session_id = uuid.uuid4().hex[:8]
        self._model = model if model is not None else SelectionModel()
        self._reconciler = SelectionReconciler(self._model)
        self.query = SelectionQuery(self._model)
        self.current_page = Page.empty(1, page_size)
        self.requested_page = 1
        self.total_records = 0
        self.last_error: Optional[str] = None

    @property
    def selection(self) -> SelectionModel:
        """The selection model; mutate it only through the session's intents."""
        return self._model

    @property
    def is_loading(self) -> bool:
        return self.requested_page != self.current_page.page_number

    # ------------------------------------------------------------------
    # Page lifecycle
    # ------------------------------------------------------------------

    def request_page(self, page_number: int) -> int:
        """Record ``page_number`` as the page the user wants to see.

        Any response for another page arriving afterwards is discarded.

        Returns:
            The requested page number
        """
        if isinstance(page_number, bool) or not isinstance(page_number, int) or page_number < 1:
            raise ValueError(f"page_number must be a positive integer, got {page_number!r}")
        self.requested_page = page_number
        log_with_context(logger, logging.DEBUG, f"Requested page {page_number}",
                         session_id=self.session_id, page_number=page_number)
        return page_number

    def _is_current_request(self, page_number: int) -> bool:
        if page_number != self.requested_page:
            log_with_context(
                logger, logging.INFO,
                f"Discarding stale response for page {page_number} (requested {self.requested_page})",
                session_id=self.session_id, page_number=page_number,
            )
            return False
        return True

    def apply_page_response(self, page_number: int, page: Page) -> bool:
        """Install a fetched page if it answers the latest request.

        Returns:
            True if the page was applied, False if it was stale
        """
        if not self._is_current_request(page_number):
            return False
        if page.page_size != self.page_size or page.page_number != page_number:
            raise ValueError(
                f"Page {page.page_number} (size {page.page_size}) does not match "
                f"request {page_number} (size {self.page_size})"
            )
        self.current_page = page
        self.total_records = page.total_count
        self.last_error = None
        return True

    def apply_page_failure(self, page_number: int, error) -> bool:
        """Show an empty page with an error message; selection is kept.

        Returns:
            True if the failure was applied, False if it was stale
        """
        if not self._is_current_request(page_number):
            return False
        self.current_page = Page.empty(page_number, self.page_size, self.total_records)
        self.last_error = str(error)
        log_with_context(logger, logging.WARNING, f"Page {page_number} failed to load: {error}",
                         session_id=self.session_id, page_number=page_number)
        return True

    # ------------------------------------------------------------------
    # Intents
    # ------------------------------------------------------------------

    def toggle_item(self, item_id: Hashable, desired: bool) -> bool:
        return self._reconciler.toggle_item(self.current_page, item_id, desired)

    def toggle_all_on_page(self, checked: bool) -> int:
        return self._reconciler.toggle_all_on_page(self.current_page, checked)

    def sync_page_selection(self, selected_ids: Iterable[Hashable]) -> int:
        return self._reconciler.sync_page_selection(self.current_page, selected_ids)

    def replace_baseline(self, count) -> int:
        """Apply a "select first N rows" command.

        Args:
            count: An int or the raw text typed by the user

        Returns:
            The new baseline

        Raises:
            InvalidArgument: If count is not a non-negative integer; the
                selection is left unchanged
        """
        value = parse_selection_count(count)
        self._reconciler.replace_baseline(value)
        return value

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def selected_count(self) -> int:
        return self.query.effective_count()

    def row_states(self) -> List[Tuple[Hashable, bool]]:
        return self.query.page_states(self.current_page)

    def header_state(self) -> PageCheckState:
        return self.query.page_check_state(self.current_page)

    def pagination_summary(self) -> PaginationSummary:
        page_number = self.requested_page
        page_count = pagination.total_pages(self.total_records, self.page_size)
        return PaginationSummary(
            current_page=page_number,
            total_pages=page_count,
            total_records=self.total_records,
            showing=pagination.showing_range(page_number, self.page_size, self.total_records),
            page_numbers=pagination.visible_page_numbers(page_number, page_count),
            has_previous=page_number > 1,
            has_next=page_number < page_count,
            label=pagination.showing_label(page_number, self.page_size, self.total_records),
        )
