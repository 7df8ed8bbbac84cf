"""Keyboard input handling for the todo application.

This module maps key presses onto the messages carried by the current
TodoView, and tracks the selected row for deletion.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import Message
    from .views.todo_view import TodoView

logger = logging.getLogger(__name__)

BACKSPACE_KEYS = ("\x7f", "\x08")
ENTER_KEYS = ("enter", "\n", "\r")
CTRL_U = "\x15"
CTRL_X = "\x18"
PAGE_SIZE = 10


class KeybindingHandler:
    """Translates key presses into messages for the update loop."""

    def __init__(self, page_size: int = PAGE_SIZE) -> None:
        """Initialize keybinding handler.

        Args:
            page_size: Rows moved by pageup/pagedown
        """
        self.cursor = 0
        self.page_size = page_size
        self.quit_requested = False

    def handle_key(self, key: str, view: TodoView) -> tuple[bool, Message | None]:
        """Process a key press against the current view.

        Args:
            key: Key identifier ("up", "delete", "escape") or a raw character
            view: Widget tree that was on screen when the key was pressed

        Returns:
            Tuple of (handled, message):
                - handled: True if the key was recognized
                - message: Message to pass to update(), or None
        """
        if key in ENTER_KEYS:
            return True, view.on_submit
        if key in BACKSPACE_KEYS:
            if not view.input_text:
                return True, None
            return True, view.on_input(view.input_text[:-1])
        if key == CTRL_U:
            return True, view.on_input("")

        if key in ("delete", CTRL_X):
            return self._handle_delete(view)
        if key == "up":
            return self._move_cursor(-1, view)
        if key == "down":
            return self._move_cursor(1, view)
        if key == "pageup":
            return self._move_cursor(-self.page_size, view)
        if key == "pagedown":
            return self._move_cursor(self.page_size, view)
        if key == "home":
            return self._move_cursor(-len(view.rows), view)
        if key == "end":
            return self._move_cursor(len(view.rows), view)

        if key in ("escape", "\x1b"):
            logger.info("Quit requested")
            self.quit_requested = True
            return True, None

        if len(key) == 1 and key.isprintable():
            return True, view.on_input(view.input_text + key)

        logger.debug(f"Key {key!r} not assigned")
        return False, None

    def clamp_cursor(self, row_count: int) -> None:
        """Keep the cursor on an existing row after the list changes."""
        self.cursor = max(0, min(self.cursor, row_count - 1))

    def _handle_delete(self, view: TodoView) -> tuple[bool, Message | None]:
        """Issue the delete message of the selected row."""
        if not view.rows:
            return True, None
        self.clamp_cursor(len(view.rows))
        return True, view.rows[self.cursor].on_delete

    def _move_cursor(self, delta: int, view: TodoView) -> tuple[bool, Message | None]:
        """Move the row selection, staying inside the list."""
        self.cursor += delta
        self.clamp_cursor(len(view.rows))
        return True, None
