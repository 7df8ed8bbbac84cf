"""State and message models for the todo application."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .exceptions import StorageError

if TYPE_CHECKING:
    from .persistence import TodoStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubmitPending:
    """Append the trimmed pending input to the list."""


@dataclass(frozen=True)
class RemoveAt:
    """Remove the item at a position in the list."""

    index: int


@dataclass(frozen=True)
class InputChanged:
    """Replace the pending input text."""

    text: str


Message = SubmitPending | RemoveAt | InputChanged


@dataclass
class TodoState:
    """In-memory state of the todo list.

    Attributes:
        items: Todo texts in display order (duplicates allowed)
        pending_input: Text of the entry field that has not been submitted yet
        dirty: Whether memory may differ from what was last written to disk
    """

    items: list[str] = field(default_factory=list)
    pending_input: str = ""
    dirty: bool = False

    @classmethod
    def load(cls, store: TodoStore) -> TodoState:
        """Build the initial state from persisted items.

        A store that cannot be read yields an empty list.

        Args:
            store: Persistence backend holding the saved todos

        Returns:
            Fresh state with the loaded items, clean and with empty input
        """
        try:
            items = store.read()
        except StorageError as err:
            logger.warning(f"Could not read todos, starting empty: {err}")
            items = []

        logger.info(f"Read from {store.data_path}: {items!r}")
        return cls(items=items)
