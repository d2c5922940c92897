"""Selection reconciler: the single writer of a SelectionModel.

Every intent is applied against the page passed into the call. The reconciler
never infers the position of an identifier it cannot see on that page.
"""

import logging
from typing import Hashable, Iterable

from gallery_tool.errors import UnknownIdentifier
from gallery_tool.page import Page
from gallery_tool.selection import SelectionModel

logger = logging.getLogger("GalleryToolLogger")


class SelectionReconciler:
    """Translates user intents into SelectionModel mutations.

    Attributes:
        model: The SelectionModel owned by this reconciler
    """

    def __init__(self, model: SelectionModel = None):
        self.model = model if model is not None else SelectionModel()

    def _apply(self, item_id: Hashable, position: int, desired: bool) -> None:
        model = self.model
        below_baseline = position < model.baseline
        if desired:
            if below_baseline:
                model.unmark_excluded(item_id)
            else:
                model.mark_included(item_id)
        else:
            if below_baseline:
                model.mark_excluded(item_id)
            else:
                model.unmark_included(item_id)

    def _prune(self, page: Page) -> None:
        # Drop overrides that sit on the wrong side of the baseline; they no
        # longer change the effective state but would skew the count.
        model = self.model
        for item_id, position in page.positions():
            if position < model.baseline:
                model.unmark_included(item_id)
            else:
                model.unmark_excluded(item_id)

    def toggle_item(self, page: Page, item_id: Hashable, desired: bool) -> bool:
        """Set one item's effective selection.

        Args:
            page: The page currently displayed
            item_id: Identifier of the toggled item
            desired: True to select, False to deselect

        Returns:
            True if applied, False if the identifier is not on the page
        """
        try:
            position = page.position_of(item_id)
        except UnknownIdentifier as e:
            logger.debug(f"Ignoring toggle: {e}")
            return False
        self._apply(item_id, position, bool(desired))
        self._prune(page)
        return True

    def toggle_all_on_page(self, page: Page, checked: bool) -> int:
        """Select or deselect every item on the page.

        Returns:
            Number of items the intent was applied to
        """
        for item_id, position in page.positions():
            self._apply(item_id, position, bool(checked))
        self._prune(page)
        logger.info(
            f"{'Selected' if checked else 'Unselected'} all {len(page)} items on page {page.page_number}"
        )
        return len(page)

    def sync_page_selection(self, page: Page, selected_ids: Iterable[Hashable]) -> int:
        """Make the page's effective selection equal ``selected_ids``.

        Items on the page that are missing from ``selected_ids`` are
        deselected. Identifiers not on the page are ignored.

        Returns:
            Number of items the intent was applied to
        """
        wanted = set(selected_ids)
        unknown = wanted.difference(page.item_ids)
        if unknown:
            logger.debug(f"Ignoring {len(unknown)} identifiers not on page {page.page_number}")
        for item_id, position in page.positions():
            self._apply(item_id, position, item_id in wanted)
        self._prune(page)
        return len(page)

    def replace_baseline(self, count: int) -> None:
        """Replace the bulk rule; discards all manual overrides.

        Raises:
            InvalidArgument: If count is not a non-negative integer
        """
        self.model.set_baseline(count)
