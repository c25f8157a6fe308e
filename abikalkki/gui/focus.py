"""
Application-wide focus redirection.

Lets the user type or paste from anywhere in the window without
clicking the expression field first.
"""

import logging
from typing import Optional

from PyQt6.QtCore import QCoreApplication, QEvent, QObject
from PyQt6.QtGui import QKeyEvent, QKeySequence
from PyQt6.QtWidgets import (
    QAbstractSpinBox,
    QApplication,
    QLineEdit,
    QPlainTextEdit,
    QTextEdit,
    QWidget,
)

logger = logging.getLogger(__name__)

TEXT_INPUT_TYPES = (QLineEdit, QTextEdit, QPlainTextEdit, QAbstractSpinBox)


class FocusManager(QObject):
    """
    Event filter installed on the QApplication while a session is mounted.

    - Key presses aimed at a widget that is not a text input move focus
      to ``target``; printable keys and the paste shortcut are forwarded
      to it so they are not lost.
    - Window activation moves focus to ``target``.

    ``start()`` and ``stop()`` are idempotent. Use as a context manager to
    guarantee removal:

        with FocusManager(line_edit):
            app.exec()
    """

    def __init__(self, target: QWidget, app: Optional[QCoreApplication] = None):
        super().__init__()
        self.target = target
        self._app = app
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def start(self) -> None:
        if self._active:
            return
        app = self._app or QApplication.instance()
        if app is None:
            raise RuntimeError("FocusManager needs a running QApplication")
        app.installEventFilter(self)
        self._app = app
        self._active = True
        logger.debug("Focus manager started")

    def stop(self) -> None:
        if not self._active:
            return
        self._app.removeEventFilter(self)
        self._active = False
        logger.debug("Focus manager stopped")

    def __enter__(self) -> "FocusManager":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    # === Filtering ===

    def _focus_target(self) -> None:
        if not self.target.hasFocus():
            self.target.setFocus()

    def eventFilter(self, obj: QObject, event: QEvent) -> bool:
        # Key events also pass through the QWindow; only widgets count
        if not isinstance(obj, QWidget):
            return False

        if event.type() == QEvent.Type.WindowActivate and obj.isWindow():
            self._focus_target()
            return False

        if event.type() != QEvent.Type.KeyPress:
            return False
        if obj is self.target or isinstance(obj, TEXT_INPUT_TYPES):
            return False

        self._focus_target()

        forward = event.text().isprintable() and event.text() != ""
        if forward or event.matches(QKeySequence.StandardKey.Paste):
            QCoreApplication.sendEvent(
                self.target,
                QKeyEvent(
                    event.type(),
                    event.key(),
                    event.modifiers(),
                    event.text(),
                    event.isAutoRepeat(),
                    event.count(),
                ),
            )
            return True
        return False
