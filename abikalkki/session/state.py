"""
Session state store.

Holds one immutable ``SessionState`` snapshot and swaps it on every
mutation, so observers only ever see complete states.
"""

import logging
from dataclasses import replace
from decimal import Decimal
from typing import Callable, List, Optional

from ..models import HistoryRecord, SessionState

logger = logging.getLogger(__name__)

Listener = Callable[[SessionState], None]


class SessionStore:
    """
    Observable store for a calculator session.

    Usage:
        store = SessionStore()
        unsubscribe = store.subscribe(render)
        store.set_hint("sin(x)")
    """

    def __init__(self, initial: Optional[SessionState] = None):
        self._state = initial or SessionState()
        self._listeners: List[Listener] = []

    def get(self) -> SessionState:
        """Current snapshot."""
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener called with each new snapshot.

        Returns:
            A callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _swap(self, state: SessionState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)

    # === Mutators ===

    def commit(self, record: HistoryRecord, new_answer: Decimal) -> None:
        """
        Prepend a history record and advance the answer in one step.

        Also clears the hint and consumes the pending LaTeX flag.
        """
        state = self._state
        self._swap(
            replace(
                state,
                answer=new_answer,
                history=(record,) + state.history,
                hint=None,
                pending_latex=False,
            )
        )
        logger.debug("Committed %r = %s", record.expression, new_answer)

    def set_hint(self, text: Optional[str]) -> None:
        if text == self._state.hint:
            return
        self._swap(replace(self._state, hint=text))

    def set_pending_latex(self, flag: bool) -> None:
        if flag == self._state.pending_latex:
            return
        self._swap(replace(self._state, pending_latex=flag))

    def set_index(self, value: Decimal) -> None:
        """Write back the index accumulator (engine-owned)."""
        self._swap(replace(self._state, index=value))
