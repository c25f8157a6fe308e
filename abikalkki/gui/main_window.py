"""
Main application window for Abikalkki.

PyQt6-based GUI: history list on top, hint line and expression field
at the bottom.
"""

import logging
import sys
from typing import Optional

from PyQt6.QtWidgets import (
    QApplication,
    QLabel,
    QLineEdit,
    QMainWindow,
    QMenu,
    QVBoxLayout,
    QWidget,
)
from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import (
    QAction,
    QClipboard,
    QContextMenuEvent,
    QFont,
    QKeyEvent,
    QKeySequence,
    QMouseEvent,
)

from ..config import Settings, DEFAULT_SETTINGS
from ..models import SessionState
from ..session import SessionController, SessionStore
from .focus import FocusManager
from .history_view import HistoryView

logger = logging.getLogger(__name__)

KEY_NAMES = {
    Qt.Key.Key_Return: "Return",
    Qt.Key.Key_Enter: "Enter",
}

PASTE_ACTION_NAME = "edit-paste"


def find_paste_action(menu: QMenu) -> Optional[QAction]:
    """The Paste entry of a standard line edit context menu, if any."""
    for action in menu.actions():
        if action.objectName() == PASTE_ACTION_NAME:
            return action
    for action in menu.actions():
        if action.text().replace("&", "").startswith("Paste"):
            return action
    return None


class ExpressionInput(QLineEdit):
    """
    The session's single input field.

    Key releases are reported through ``key_released`` (the controller
    previews or commits on them). Every paste (the shortcut, the context
    menu, the X11 middle-click selection and calls to ``paste()``) is
    offered to ``paste_handler`` first; if it returns True the default
    paste is suppressed.

    Signals:
        key_released: Emitted with a key name ("Return", "Enter" or the
            typed text)
    """

    key_released = pyqtSignal(str)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.paste_handler = None

        self.setFont(QFont("Monospace", 14))
        self.setPlaceholderText("Type an expression, e.g. 2+2 or sin(30)")
        self.setObjectName("math-line")

    def _offer_paste(self, text: str) -> bool:
        return bool(self.paste_handler and self.paste_handler(text))

    def paste(self) -> None:
        """Paste the clipboard, letting ``paste_handler`` take it first."""
        if not self._offer_paste(QApplication.clipboard().text()):
            super().paste()

    def create_context_menu(self) -> QMenu:
        """Standard context menu with Paste routed through ``paste()``."""
        menu = self.createStandardContextMenu()
        action = find_paste_action(menu)
        if action is not None:
            action.triggered.disconnect()
            action.triggered.connect(lambda checked=False: self.paste())
        return menu

    def contextMenuEvent(self, event: QContextMenuEvent) -> None:
        menu = self.create_context_menu()
        menu.exec(event.globalPos())
        menu.deleteLater()

    def keyPressEvent(self, event: QKeyEvent) -> None:
        if event.matches(QKeySequence.StandardKey.Paste):
            self.paste()
            event.accept()
            return
        super().keyPressEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        clipboard = QApplication.clipboard()
        if (
            event.button() == Qt.MouseButton.MiddleButton
            and clipboard.supportsSelection()
            and self._offer_paste(clipboard.text(QClipboard.Mode.Selection))
        ):
            event.accept()
            return
        super().mouseReleaseEvent(event)

    def keyReleaseEvent(self, event: QKeyEvent) -> None:
        super().keyReleaseEvent(event)
        if event.isAutoRepeat():
            return
        self.key_released.emit(KEY_NAMES.get(event.key(), event.text()))


class MainWindow(QMainWindow):
    """
    Main application window for Abikalkki.

    Layout:
    - Welcome label (until the first commit)
    - History list, newest on top
    - Hint line (documentation or preview result)
    - Expression field
    """

    WELCOME_TEXT = (
        "<h1>Abikalkki</h1>"
        "<p>Start by typing an expression in the field below.</p>"
    )

    def __init__(self, settings: Optional[Settings] = None):
        super().__init__()
        self.settings = settings or DEFAULT_SETTINGS

        self.setWindowTitle("Abikalkki")
        self.setGeometry(100, 100, 600, 700)
        self.setMinimumSize(360, 300)

        self._init_ui()

        self.store = SessionStore()
        self.controller = SessionController(
            self.math_input, store=self.store, settings=self.settings
        )
        self.focus_manager = FocusManager(self.math_input)

        self.math_input.paste_handler = self.controller.paste
        self.math_input.key_released.connect(self.controller.handle_key)
        self.history_view.answer_activated.connect(self._on_answer_activated)
        self._unsubscribe = self.store.subscribe(self._render)

        self._render(self.store.get())

    def _init_ui(self):
        """Initialize the main UI layout."""
        central_widget = QWidget()
        self.setCentralWidget(central_widget)

        layout = QVBoxLayout(central_widget)
        layout.setSpacing(6)
        layout.setContentsMargins(10, 10, 10, 10)

        self.welcome_label = QLabel(self.WELCOME_TEXT)
        self.welcome_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.welcome_label.setWordWrap(True)
        layout.addWidget(self.welcome_label)

        self.history_view = HistoryView(separator=self.settings.decimal_separator)
        layout.addWidget(self.history_view, stretch=1)

        self.hint_label = QLabel("")
        self.hint_label.setFont(QFont("Monospace", 11))
        self.hint_label.setStyleSheet("color: gray;")
        self.hint_label.setTextFormat(Qt.TextFormat.PlainText)
        layout.addWidget(self.hint_label)

        self.math_input = ExpressionInput()
        layout.addWidget(self.math_input)

    # === Rendering ===

    def _render(self, state: SessionState) -> None:
        """Re-render history and hint from a store snapshot."""
        has_history = len(state.history) > 0
        self.welcome_label.setVisible(not has_history)
        self.history_view.setVisible(has_history)
        self.history_view.set_records(state.history)

        self.hint_label.setText(state.hint or "")
        self.hint_label.setVisible(bool(state.hint))

    # === Event Handlers ===

    def _on_answer_activated(self, answer: str) -> None:
        """Insert a history answer at the cursor."""
        self.math_input.insert(answer)
        self.math_input.setFocus()
        self.controller.preview()

    def showEvent(self, event) -> None:
        super().showEvent(event)
        self.focus_manager.start()
        self.math_input.setFocus()

    def closeEvent(self, event) -> None:
        self.focus_manager.stop()
        self._unsubscribe()
        super().closeEvent(event)


def run_app(settings: Optional[Settings] = None) -> int:
    """Run the Abikalkki application."""
    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName("Abikalkki")

    window = MainWindow(settings)
    with window.focus_manager:
        window.show()
        code = app.exec()

    logger.debug("Event loop finished with code %d", code)
    return code
