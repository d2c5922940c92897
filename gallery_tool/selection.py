"""Selection model for a paginated, never fully loaded collection.

Selection is stored as a bulk rule plus two exception sets:

    baseline: items whose virtual position is below it are selected
    include:  identifiers force-selected at or beyond the baseline
    exclude:  identifiers force-deselected below the baseline

The two sets are always disjoint, which keeps the effective count equal to
``baseline + len(include) - len(exclude)``.
"""

import logging
from dataclasses import dataclass
from typing import Hashable, FrozenSet, Set

from gallery_tool.errors import InvalidArgument

logger = logging.getLogger("GalleryToolLogger")

def global_position(page_number: int, page_size: int, offset: int) -> int:
    """Map a page-local row to its position in the virtual collection.

    Args:
        page_number: 1-based page number
        page_size: Fixed number of items per page
        offset: 0-based row offset within the page

    Returns:
        0-based virtual position

    Raises:
        ValueError: If any argument is outside its contract
    """
    if page_number < 1:
        raise ValueError(f"page_number must be >= 1, got {page_number}")
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")
    if not 0 <= offset < page_size:
        raise ValueError(f"offset must be in [0, {page_size}), got {offset}")
    return (page_number - 1) * page_size + offset

def _validate_count(count) -> int:
    # bool is an int subclass but never a meaningful count
    if isinstance(count, bool) or not isinstance(count, int):
        raise InvalidArgument(f"Selection count must be an integer, got {count!r}")
    if count < 0:
        raise InvalidArgument(f"Selection count must be non-negative, got {count}")
    return count

def parse_selection_count(text) -> int:
    """Parse user input for the "select N rows" command.

    Accepts ints directly and strings made only of ASCII digits (surrounding
    whitespace allowed; no sign, separator or decimal point).

    Args:
        text: Raw value from the input field

    Returns:
        The parsed non-negative count

    Raises:
        InvalidArgument: If the value is empty, non-numeric or negative
    """
    if isinstance(text, int) and not isinstance(text, bool):
        return _validate_count(text)
    if not isinstance(text, str) or not text.strip():
        raise InvalidArgument("Please enter a valid number")
    digits = text.strip()
    # Plain ASCII digits only: int() would also take signs, underscores and
    # non-ASCII numerals
    if not (digits.isascii() and digits.isdigit()):
        raise InvalidArgument(f"Please enter a valid number (got {text!r})")
    return _validate_count(int(digits, 10))

@dataclass(frozen=True)
class SelectionSnapshot:
    """Immutable copy of a SelectionModel's state."""

    baseline: int
    include: FrozenSet[Hashable]
    exclude: FrozenSet[Hashable]

    @property
    def effective_count(self) -> int:
        return self.baseline + len(self.include) - len(self.exclude)

class SelectionModel:
    """Compact representation of the effective selection.

    Attributes:
        baseline: Count of leading items selected by the bulk rule
        include: Identifiers selected despite position >= baseline
        exclude: Identifiers deselected despite position < baseline
    """

    def __init__(self):
        self.baseline: int = 0
        self.include: Set[Hashable] = set()
        self.exclude: Set[Hashable] = set()

    def set_baseline(self, count: int) -> None:
        """Replace the bulk rule and drop every manual override.

        Args:
            count: New baseline, a non-negative integer

        Raises:
            InvalidArgument: If count is not a non-negative integer. The model
                is left unchanged.
        """
        count = _validate_count(count)
        dropped = len(self.include) + len(self.exclude)
        self.baseline = count
        self.include.clear()
        self.exclude.clear()
        logger.info(f"Baseline set to {count} ({dropped} manual overrides cleared)")

    def mark_included(self, item_id: Hashable) -> None:
        self.exclude.discard(item_id)
        self.include.add(item_id)

    def unmark_included(self, item_id: Hashable) -> None:
        self.include.discard(item_id)

    def mark_excluded(self, item_id: Hashable) -> None:
        self.include.discard(item_id)
        self.exclude.add(item_id)

    def unmark_excluded(self, item_id: Hashable) -> None:
        self.exclude.discard(item_id)

    def effective_selected(self, item_id: Hashable, position: int) -> bool:
        """Return whether the item at ``position`` is selected."""
        if item_id in self.exclude:
            return False
        if item_id in self.include:
            return True
        return position < self.baseline

    def effective_count(self) -> int:
        """Return the number of selected items across the whole collection."""
        return self.baseline + len(self.include) - len(self.exclude)

    def snapshot(self) -> SelectionSnapshot:
        return SelectionSnapshot(self.baseline, frozenset(self.include), frozenset(self.exclude))

    def __eq__(self, other):
        if not isinstance(other, SelectionModel):
            return NotImplemented
        return self.snapshot() == other.snapshot()

    def __repr__(self):
        return (
            f"SelectionModel(baseline={self.baseline}, "
            f"include={sorted(self.include, key=repr)}, exclude={sorted(self.exclude, key=repr)})"
        )
