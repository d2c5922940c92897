"""
GUI package for the Artwork Selection Browser.

Contains all user interface components including:
- Main window
- Page table model with the selection checkbox column
- Selection toolbar and custom selection dialog
- Pagination bar
- Background page fetch worker
"""

from gui.main_window import MainWindow

__all__ = [
    'MainWindow',
]
