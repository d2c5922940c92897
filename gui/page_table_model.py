from typing import Hashable, Iterable, List, Optional, Tuple

from PySide6.QtCore import QAbstractTableModel, Qt, QModelIndex, Signal
import pandas as pd

from gallery_tool.page import DISPLAY_COLUMNS, ID_COLUMN

CHECKBOX_COLUMN = 0


class PageTableModel(QAbstractTableModel):
    """A Qt model showing one page of artworks with a selection checkbox column.

    Column 0 is the checkbox column; the remaining columns come from
    DISPLAY_COLUMNS. The model never changes the selection itself: checking
    or unchecking a row emits ``item_toggled`` and the owner pushes the new
    effective states back with ``set_selection_states``.

    Attributes:
        item_toggled (Signal): Emits (item_id, desired_selected) when the user
            clicks a row checkbox.
        _dataframe (pd.DataFrame): Display records of the current page.
        _selected (List[bool]): Effective selection per row.
    """

    item_toggled = Signal(object, bool)

    def __init__(self, dataframe: Optional[pd.DataFrame] = None, parent=None):
        """Initializes the PageTableModel.

        Args:
            dataframe (pd.DataFrame, optional): Display records with an ``id``
                column. Defaults to an empty page.
            parent (QObject, optional): The parent object. Defaults to None.
        """
        super().__init__(parent)
        self._columns = list(DISPLAY_COLUMNS)
        self._dataframe = self._normalize(dataframe)
        self._ids = self._dataframe[ID_COLUMN].tolist()
        self._selected: List[bool] = [False] * len(self._dataframe)

    def _normalize(self, dataframe: Optional[pd.DataFrame]) -> pd.DataFrame:
        if dataframe is None:
            return pd.DataFrame(columns=[ID_COLUMN] + self._columns)
        return dataframe.reset_index(drop=True)

    def set_page(self, dataframe: Optional[pd.DataFrame], states: Iterable[Tuple[Hashable, bool]]):
        """Replace the displayed page and its selection states."""
        self.beginResetModel()
        self._dataframe = self._normalize(dataframe)
        self._ids = self._dataframe[ID_COLUMN].tolist()
        self._selected = self._states_for_rows(states)
        self.endResetModel()

    def set_selection_states(self, states: Iterable[Tuple[Hashable, bool]]):
        """Refresh the checkbox column from ``(item_id, selected)`` pairs."""
        self._selected = self._states_for_rows(states)
        if self.rowCount() > 0:
            self.dataChanged.emit(
                self.index(0, CHECKBOX_COLUMN),
                self.index(self.rowCount() - 1, CHECKBOX_COLUMN),
                [Qt.ItemDataRole.CheckStateRole],
            )

    def _states_for_rows(self, states) -> List[bool]:
        by_id = dict(states)
        return [bool(by_id.get(item_id, False)) for item_id in self._ids]

    def item_id(self, row: int):
        """Returns the identifier shown in ``row``."""
        return self._ids[row]

    def is_row_checked(self, row: int) -> bool:
        return self._selected[row]

    def rowCount(self, parent=QModelIndex()) -> int:
        """Returns the number of rows in the model."""
        if parent.isValid():
            return 0
        return len(self._dataframe)

    def columnCount(self, parent=QModelIndex()) -> int:
        """Returns the number of columns in the model (checkbox included)."""
        if parent.isValid():
            return 0
        return len(self._columns) + 1

    def data(self, index: QModelIndex, role=Qt.ItemDataRole.DisplayRole):
        """Returns the data for a given index and role.

        The checkbox column answers CheckStateRole only; data columns answer
        DisplayRole and ToolTipRole with the cell text.

        Args:
            index (QModelIndex): The index of the item to retrieve data for.
            role (Qt.ItemDataRole): The role for which data is requested.

        Returns:
            Any: The data for the given index and role, or None if invalid.
        """
        if not index.isValid():
            return None

        row = index.row()
        column = index.column()

        if column == CHECKBOX_COLUMN:
            if role == Qt.ItemDataRole.CheckStateRole:
                return Qt.CheckState.Checked if self._selected[row] else Qt.CheckState.Unchecked
            return None

        if role in (Qt.ItemDataRole.DisplayRole, Qt.ItemDataRole.ToolTipRole):
            try:
                value = self._dataframe.iloc[row][self._columns[column - 1]]
            except (IndexError, KeyError):
                return None
            if pd.isna(value):
                return ""
            return str(value)

        return None

    def setData(self, index: QModelIndex, value, role=Qt.ItemDataRole.EditRole) -> bool:
        """Turns a checkbox click into an ``item_toggled`` request.

        The checkbox state itself is updated later by set_selection_states.
        """
        if not index.isValid() or index.column() != CHECKBOX_COLUMN:
            return False
        if role != Qt.ItemDataRole.CheckStateRole:
            return False
        desired = Qt.CheckState(value) == Qt.CheckState.Checked
        self.item_toggled.emit(self.item_id(index.row()), desired)
        return True

    def flags(self, index: QModelIndex) -> Qt.ItemFlag:
        flags = super().flags(index)
        if index.isValid() and index.column() == CHECKBOX_COLUMN:
            flags |= Qt.ItemFlag.ItemIsUserCheckable
        return flags

    def headerData(self, section: int, orientation: Qt.Orientation, role=Qt.ItemDataRole.DisplayRole):
        """Returns the header text; section 0 (checkbox column) is blank.

        Vertical headers show 1-based row numbers within the page.
        """
        if role == Qt.ItemDataRole.DisplayRole:
            if orientation == Qt.Orientation.Horizontal:
                if section == CHECKBOX_COLUMN:
                    return ""
                return DISPLAY_COLUMNS[self._columns[section - 1]][0].upper()
            if orientation == Qt.Orientation.Vertical:
                return str(section + 1)
        return None

    def get_column_index(self, column_name):
        """Returns the model column of an API field, or None if not shown."""
        try:
            return self._columns.index(column_name) + 1
        except ValueError:
            return None
