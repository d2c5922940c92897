"""Read-only view of a SelectionModel for one page."""

from enum import Enum
from typing import Hashable, List, Tuple

from gallery_tool.page import Page
from gallery_tool.selection import SelectionModel


class PageCheckState(Enum):
    """State of the page-level "select all" checkbox."""

    UNCHECKED = "unchecked"
    PARTIAL = "partial"
    CHECKED = "checked"


class SelectionQuery:
    """Answers selection questions without mutating the model."""

    def __init__(self, model: SelectionModel):
        self.model = model

    def is_selected(self, page: Page, item_id: Hashable) -> bool:
        """Return the effective state of an item on ``page``.

        Raises:
            UnknownIdentifier: If the identifier is not on the page
        """
        return self.model.effective_selected(item_id, page.position_of(item_id))

    def page_states(self, page: Page) -> List[Tuple[Hashable, bool]]:
        """Return ``(identifier, selected)`` for every item in display order."""
        model = self.model
        return [(item_id, model.effective_selected(item_id, position)) for item_id, position in page.positions()]

    def selected_ids_on_page(self, page: Page) -> List[Hashable]:
        return [item_id for item_id, selected in self.page_states(page) if selected]

    def page_check_state(self, page: Page) -> PageCheckState:
        """Return the tri-state of the header checkbox.

        An empty page is never CHECKED.
        """
        states = [selected for _item_id, selected in self.page_states(page)]
        if states and all(states):
            return PageCheckState.CHECKED
        if any(states):
            return PageCheckState.PARTIAL
        return PageCheckState.UNCHECKED

    def effective_count(self) -> int:
        return self.model.effective_count()
