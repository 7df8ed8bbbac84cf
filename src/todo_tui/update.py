"""Message handling for the todo list.

All state changes go through update(). Each call runs to completion before
the next message is processed.
"""

from __future__ import annotations

import logging

from .exceptions import StorageError
from .models import InputChanged, Message, RemoveAt, SubmitPending, TodoState
from .persistence import TodoStore

logger = logging.getLogger(__name__)

CLEAN_TITLE = "Todos"
DIRTY_TITLE = "Todos (*dirty*)"


def update(state: TodoState, message: Message, store: TodoStore) -> None:
    """Apply one message to the state in place.

    Args:
        state: Application state to mutate
        message: Message describing the user event
        store: Persistence backend used when an item is submitted

    Raises:
        IndexError: If RemoveAt points outside the current list
        TypeError: If the message is not a known variant
    """
    logger.info(f"Message: {message!r}")

    if isinstance(message, SubmitPending):
        _submit_pending(state, store)
    elif isinstance(message, RemoveAt):
        _remove_at(state, message.index)
    elif isinstance(message, InputChanged):
        state.pending_input = message.text
        state.dirty = True
    else:
        raise TypeError(f"Unknown message: {message!r}")


def _submit_pending(state: TodoState, store: TodoStore) -> None:
    """Append the trimmed pending input and save the list."""
    trimmed = state.pending_input.strip()
    if not trimmed:
        return

    state.items.append(trimmed)
    state.pending_input = ""

    try:
        store.write(state.items)
    except StorageError as err:
        logger.error(f"Failed to save todos: {err}")
        state.dirty = True
    else:
        state.dirty = False


def _remove_at(state: TodoState, index: int) -> None:
    """Remove one item by position, shifting later items down."""
    # Negative indices would silently wrap with list.pop
    if not 0 <= index < len(state.items):
        raise IndexError(
            f"Todo index {index} out of range for {len(state.items)} item(s)"
        )
    del state.items[index]


def title(state: TodoState) -> str:
    """Return the window title, marking unsaved state."""
    return DIRTY_TITLE if state.dirty else CLEAN_TITLE
