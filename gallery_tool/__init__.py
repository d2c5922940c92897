"""
Artwork Selection Browser

Version: 1.0.0
"""

__version__ = "1.0.0"

from .browser_session import BrowserSession
from .errors import GalleryToolError, InvalidArgument, UnknownIdentifier
from .page import Page
from .page_provider import ArtworkPageProvider, DecodeError, NetworkError, ProviderFailure
from .reconciler import SelectionReconciler
from .selection import SelectionModel, global_position, parse_selection_count
from .selection_query import PageCheckState, SelectionQuery
