"""Pagination arithmetic for the page navigator."""

import math
from typing import List, Tuple


def total_pages(total_records: int, page_size: int) -> int:
    """Return the number of pages needed for ``total_records``."""
    if total_records <= 0:
        return 0
    return math.ceil(total_records / page_size)


def showing_range(page_number: int, page_size: int, total_records: int) -> Tuple[int, int]:
    """Return the 1-based ``(first, last)`` record numbers shown on a page.

    Returns ``(0, 0)`` when there is nothing to show.
    """
    if total_records <= 0:
        return (0, 0)
    first = (page_number - 1) * page_size + 1
    last = min(page_number * page_size, total_records)
    if first > last:
        return (0, 0)
    return (first, last)


def visible_page_numbers(current_page: int, page_count: int, window: int = 5) -> List[int]:
    """Return the numbered page buttons to display.

    The window starts at page 1 while the current page is within the first
    three pages, otherwise it starts two pages before the current one.

    Args:
        current_page: The page being displayed
        page_count: Total number of pages
        window: Maximum number of buttons

    Returns:
        Ascending page numbers, never beyond ``page_count``
    """
    start = 1 if current_page <= 3 else current_page - 2
    return [n for n in range(start, start + min(window, page_count)) if n <= page_count]


def showing_label(page_number: int, page_size: int, total_records: int) -> str:
    first, last = showing_range(page_number, page_size, total_records)
    return f"Showing {first} to {last} of {total_records} entries"
