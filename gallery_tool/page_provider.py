"""Remote page source for the Art Institute of Chicago artworks API.

Pages are requested with an explicit ``limit`` equal to the session page
size, so virtual positions computed locally match the server's paging.
"""

import logging
from typing import Iterable, Optional

import requests

from gallery_tool.errors import GalleryToolError
from gallery_tool.page import DISPLAY_COLUMNS, ID_COLUMN, Page

logger = logging.getLogger("GalleryToolLogger")

DEFAULT_API_URL = "https://api.artic.edu/api/v1"
DEFAULT_FIELDS = [ID_COLUMN] + list(DISPLAY_COLUMNS)


class ProviderFailure(GalleryToolError):
    """Base exception for page fetch failures."""
    pass


class NetworkError(ProviderFailure):
    """Raised when the API cannot be reached or answers with an error status."""
    pass


class DecodeError(ProviderFailure):
    """Raised when the API response is not the expected JSON document."""
    pass


class ArtworkPageProvider:
    """Fetches pages of artworks over HTTP.

    Attributes:
        api_url: Base URL of the API (without trailing slash)
        timeout: Request timeout in seconds
        fields: API fields requested for each artwork
        session: requests.Session used for all calls
    """

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 10,
        fields: Optional[Iterable[str]] = None,
        session: Optional[requests.Session] = None,
    ):
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.fields = list(fields) if fields else list(DEFAULT_FIELDS)
        if ID_COLUMN not in self.fields:
            self.fields.insert(0, ID_COLUMN)
        self.session = session or requests.Session()
        self.session.headers.update({
            "Accept": "application/json",
            "User-Agent": "ArtworkSelectionBrowser/1.0",
        })

    def fetch_page(self, page_number: int, page_size: int) -> Page:
        """Fetch one page of artworks.

        Args:
            page_number: 1-based page number
            page_size: Number of records per page

        Returns:
            The fetched Page

        Raises:
            NetworkError: On connection errors, timeouts and HTTP error status
            DecodeError: When the body is not JSON or lacks ``data`` /
                ``pagination.total``
        """
        url = f"{self.api_url}/artworks"
        params = {
            "page": page_number,
            "limit": page_size,
            "fields": ",".join(self.fields),
        }
        logger.info(f"Fetching page {page_number} (limit={page_size}) from {url}")

        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Failed to fetch page {page_number}: {e}")
            raise NetworkError(f"Could not load page {page_number}: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            logger.error(f"Page {page_number} response is not valid JSON: {e}")
            raise DecodeError(f"Invalid JSON for page {page_number}") from e

        return self._parse_payload(payload, page_number, page_size)

    def _parse_payload(self, payload, page_number: int, page_size: int) -> Page:
        if not isinstance(payload, dict):
            raise DecodeError(f"Unexpected response type for page {page_number}: {type(payload).__name__}")

        records = payload.get("data")
        pagination = payload.get("pagination")
        if not isinstance(records, list) or not isinstance(pagination, dict):
            raise DecodeError(f"Response for page {page_number} lacks 'data' or 'pagination'")

        total = pagination.get("total")
        if isinstance(total, bool) or not isinstance(total, int):
            raise DecodeError(f"Response for page {page_number} has no integer 'pagination.total'")

        if any(not isinstance(r, dict) or r.get(ID_COLUMN) is None for r in records):
            raise DecodeError(f"Response for page {page_number} contains records without an id")

        if len(records) > page_size:
            logger.warning(
                f"Server returned {len(records)} records for limit {page_size}; extra records dropped"
            )
            records = records[:page_size]

        try:
            page = Page.from_records(page_number, page_size, records, total)
        except ValueError as e:
            raise DecodeError(f"Invalid page {page_number}: {e}") from e

        logger.info(f"Loaded page {page_number}: {len(page)} records of {total}")
        return page
