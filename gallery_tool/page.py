"""Page context: the one page of the remote collection currently on screen."""

from dataclasses import dataclass, field
from typing import Dict, Hashable, Iterator, List, Optional, Tuple

import pandas as pd

from gallery_tool.errors import UnknownIdentifier
from gallery_tool.selection import global_position

# API field -> (column header, placeholder for missing values)
DISPLAY_COLUMNS: Dict[str, Tuple[str, str]] = {
    "title": ("Title", "Untitled"),
    "place_of_origin": ("Place of Origin", ""),
    "artist_display": ("Artist", "Unknown Artist"),
    "inscriptions": ("Inscriptions", "N/A"),
    "date_start": ("Start Date", "-"),
    "date_end": ("End Date", "-"),
}

ID_COLUMN = "id"


def _display_value(value) -> str:
    # Integer columns with gaps come back from pandas as float64
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return value if isinstance(value, str) else str(value)


def records_to_frame(records: List[dict]) -> pd.DataFrame:
    """Build the display DataFrame for a page of raw API records.

    The frame keeps the API field names as columns, in DISPLAY_COLUMNS order,
    preceded by the identifier column. Missing or empty values are replaced
    with the column placeholder.

    Args:
        records: Raw records as returned by the API

    Returns:
        DataFrame with one row per record, in page order
    """
    columns = [ID_COLUMN] + list(DISPLAY_COLUMNS)
    df = pd.DataFrame(records, columns=columns)
    for name, (_header, placeholder) in DISPLAY_COLUMNS.items():
        column = df[name].astype(object)
        column = column.where(column.notna() & (column != ""), placeholder)
        df[name] = column.map(_display_value)
    return df.reset_index(drop=True)


@dataclass(frozen=True)
class Page:
    """An ordered page of identifiers and its display records.

    Attributes:
        page_number: 1-based page number
        page_size: Session-wide page size (not the number of rows here)
        item_ids: Identifiers in display order
        total_count: Total records reported by the provider
        records: Display DataFrame, one row per identifier
    """

    page_number: int
    page_size: int
    item_ids: Tuple[Hashable, ...]
    total_count: int = 0
    records: Optional[pd.DataFrame] = field(default=None, compare=False, repr=False)
    _offsets: Dict[Hashable, int] = field(default_factory=dict, init=False, compare=False, repr=False)

    def __post_init__(self):
        if self.page_number < 1:
            raise ValueError(f"page_number must be >= 1, got {self.page_number}")
        if self.page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {self.page_size}")
        ids = tuple(self.item_ids)
        if len(ids) > self.page_size:
            raise ValueError(
                f"Page {self.page_number} holds {len(ids)} items, more than page size {self.page_size}"
            )
        offsets = {item_id: offset for offset, item_id in enumerate(ids)}
        if len(offsets) != len(ids):
            raise ValueError(f"Page {self.page_number} contains duplicate identifiers")
        object.__setattr__(self, "item_ids", ids)
        object.__setattr__(self, "_offsets", offsets)

    @classmethod
    def from_records(cls, page_number: int, page_size: int, records: List[dict], total_count: int) -> "Page":
        """Create a page from raw API records (each must carry an ``id``)."""
        frame = records_to_frame(records)
        return cls(
            page_number=page_number,
            page_size=page_size,
            item_ids=tuple(record[ID_COLUMN] for record in records),
            total_count=total_count,
            records=frame,
        )

    @classmethod
    def empty(cls, page_number: int, page_size: int, total_count: int = 0) -> "Page":
        return cls(page_number, page_size, (), total_count, records_to_frame([]))

    def __len__(self):
        return len(self.item_ids)

    def __contains__(self, item_id):
        return item_id in self._offsets

    @property
    def is_empty(self) -> bool:
        return not self.item_ids

    def position_of(self, item_id: Hashable) -> int:
        """Return the virtual position of an identifier on this page.

        Raises:
            UnknownIdentifier: If the identifier is not on this page
        """
        try:
            offset = self._offsets[item_id]
        except KeyError:
            raise UnknownIdentifier(item_id, self.page_number) from None
        return global_position(self.page_number, self.page_size, offset)

    def positions(self) -> Iterator[Tuple[Hashable, int]]:
        """Yield ``(identifier, virtual position)`` in display order."""
        for offset, item_id in enumerate(self.item_ids):
            yield item_id, global_position(self.page_number, self.page_size, offset)
