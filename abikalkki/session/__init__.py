"""Session layer: state store, input controller and text buffer."""

from .state import SessionStore
from .controller import SessionController
from .buffer import TextBuffer

__all__ = ["SessionStore", "SessionController", "TextBuffer"]
