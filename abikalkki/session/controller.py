"""
Session controller: live preview, commit and paste interception.

The controller works against any input field with QLineEdit's text and
selection methods, so the same code drives the Qt window, the terminal
session and the tests.
"""

import logging
from typing import Optional, Protocol

from ..config import Settings, DEFAULT_SETTINGS
from ..models import HistoryRecord
from ..output.formatting import format_preview
from .state import SessionStore

logger = logging.getLogger(__name__)

LATEX_MARKER = "\\"


class InputField(Protocol):
    """The subset of QLineEdit the controller uses."""

    def text(self) -> str: ...

    def setText(self, text: str) -> None: ...

    def clear(self) -> None: ...

    def selectionStart(self) -> int: ...

    def selectionLength(self) -> int: ...


class SessionController:
    """
    Mediates between input events, the engine and the session store.

    Args:
        field: The single input field of the session
        store: Session state store (a fresh one if omitted)
        engine: Expression engine (an ``ExpressionEngine`` if omitted)
        settings: Display settings for the preview
    """

    def __init__(
        self,
        field: InputField,
        store: Optional[SessionStore] = None,
        engine=None,
        settings: Optional[Settings] = None,
    ):
        self.field = field
        self.store = store or SessionStore()
        self.settings = settings or DEFAULT_SETTINGS
        if engine is None:
            from ..engine import ExpressionEngine

            engine = ExpressionEngine(self.settings)
        self.engine = engine

    # === Event entry points ===

    def handle_key(self, key: str) -> None:
        """Route a key release: commit keys commit, anything else previews."""
        if key in self.settings.commit_keys:
            self.commit()
        else:
            self.preview()

    def preview(self) -> None:
        """Update the hint for the current buffer."""
        buffer = self.field.text()
        if buffer == "":
            self.store.set_hint(None)
            return

        open_function = self.engine.get_open_function(buffer.strip())
        if open_function is not None:
            doc = self.engine.get_documentation(open_function)
            if doc is not None:
                self.store.set_hint(doc.usage)
                return

        state = self.store.get()
        result = self.engine.calculate(buffer, state.answer, state.index)
        if result.is_err:
            self.store.set_hint(self.engine.parse_error(result.error))
        else:
            self.store.set_hint(
                format_preview(
                    result.value,
                    self.settings.preview_places,
                    self.settings.decimal_separator,
                )
            )

    def commit(self) -> bool:
        """
        Evaluate the buffer and append it to history.

        A failed evaluation leaves everything as it was and shows
        nothing; the preview already displays the error.

        Returns:
            True if a record was appended
        """
        buffer = self.field.text()
        state = self.store.get()
        result = self.engine.calculate(buffer, state.answer, state.index)
        if result.is_err:
            logger.debug("Commit rejected for %r: %s", buffer, result.error.kind.name)
            return False

        record = HistoryRecord(
            expression=self.engine.prettify(buffer),
            answer=result.value,
            is_latex_origin=state.pending_latex,
        )
        self.field.clear()
        self.store.commit(record, result.value)
        return True

    def paste(self, pasted: str) -> bool:
        """
        Intercept a paste of LaTeX that replaces the whole buffer.

        Returns:
            True if the paste was handled and the default paste must be
            suppressed
        """
        buffer = self.field.text()
        replaces_all = buffer == "" or (
            self.field.selectionStart() == 0
            and self.field.selectionLength() == len(buffer)
        )
        if not replaces_all or LATEX_MARKER not in pasted:
            return False

        converted = self.engine.latex_to_math(pasted)
        logger.debug("Converted pasted LaTeX %r to %r", pasted, converted)
        self.field.setText(converted)
        self.store.set_pending_latex(True)
        self.preview()
        return True
