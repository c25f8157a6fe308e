"""
In-memory input field.

Implements the QLineEdit methods the controller uses, for the terminal
session and for driving the controller without Qt.
"""


class TextBuffer:
    """A single-line text buffer with an optional selection."""

    def __init__(self, text: str = ""):
        self._text = text
        self._selection_start = -1
        self._selection_length = 0

    def text(self) -> str:
        return self._text

    def setText(self, text: str) -> None:
        self._text = text
        self.deselect()

    def clear(self) -> None:
        self.setText("")

    def insert(self, text: str) -> None:
        """Replace the selection (or append) with ``text``."""
        if self._selection_start >= 0:
            start = self._selection_start
            end = start + self._selection_length
            self._text = self._text[:start] + text + self._text[end:]
        else:
            self._text += text
        self.deselect()

    # === Selection ===

    def selectionStart(self) -> int:
        return self._selection_start

    def selectionLength(self) -> int:
        return self._selection_length

    def setSelection(self, start: int, length: int) -> None:
        if length <= 0:
            self.deselect()
            return
        self._selection_start = start
        self._selection_length = min(length, len(self._text) - start)

    def selectAll(self) -> None:
        self.setSelection(0, len(self._text))

    def deselect(self) -> None:
        self._selection_start = -1
        self._selection_length = 0
