"""Exception hierarchy for the Artwork Selection Browser."""


class GalleryToolError(Exception):
    """Base exception for all gallery tool errors."""
    pass


class InvalidArgument(GalleryToolError, ValueError):
    """Raised when a baseline count is not a non-negative integer."""
    pass


class UnknownIdentifier(GalleryToolError, KeyError):
    """Raised when an identifier is not present on the supplied page."""

    def __init__(self, item_id, page_number=None):
        self.item_id = item_id
        self.page_number = page_number
        super().__init__(item_id)

    def __str__(self):
        return f"Identifier {self.item_id!r} is not on page {self.page_number}"
