"""
History list for the session window.

Shows committed expressions newest-first and lets the user reuse an
answer by double-clicking it.
"""

from typing import Tuple

from PyQt6.QtWidgets import QListWidget, QListWidgetItem, QAbstractItemView
from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QFont

from ..models import HistoryRecord
from ..output.formatting import format_answer, format_history_line


class HistoryView(QListWidget):
    """
    Read-only list of history records.

    Signals:
        answer_activated: Emitted with the formatted answer of a
            double-clicked entry
    """

    answer_activated = pyqtSignal(str)

    LATEX_TOOLTIP = "Pasted as LaTeX"

    def __init__(self, separator: str = ",", parent=None):
        super().__init__(parent)
        self.separator = separator
        self._records: Tuple[HistoryRecord, ...] = ()

        self.setFont(QFont("Monospace", 12))
        self.setSelectionMode(QAbstractItemView.SelectionMode.NoSelection)
        self.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        self.setWordWrap(True)
        self.itemDoubleClicked.connect(self._on_double_click)

    def set_records(self, records: Tuple[HistoryRecord, ...]) -> None:
        """Replace the displayed records; skips work if unchanged."""
        if records == self._records:
            return
        self._records = records

        self.clear()
        for record in records:
            item = QListWidgetItem(format_history_line(record, self.separator))
            item.setData(Qt.ItemDataRole.UserRole, record)
            item.setTextAlignment(Qt.AlignmentFlag.AlignRight)
            if record.is_latex_origin:
                font = item.font()
                font.setItalic(True)
                item.setFont(font)
                item.setToolTip(self.LATEX_TOOLTIP)
            self.addItem(item)

    def _on_double_click(self, item: QListWidgetItem) -> None:
        record = item.data(Qt.ItemDataRole.UserRole)
        if record is not None:
            self.answer_activated.emit(format_answer(record.answer, self.separator))
