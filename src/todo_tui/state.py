"""State management for the todo application.

This module provides a single import point for the state model, messages,
the update function and persistence:
- models.py: State and message models
- update.py: Message handling and title derivation
- persistence.py: CSV file storage
"""

from __future__ import annotations

from .models import InputChanged, Message, RemoveAt, SubmitPending, TodoState
from .persistence import TodoStore
from .update import title, update

__all__ = [
    "InputChanged",
    "Message",
    "RemoveAt",
    "SubmitPending",
    "TodoState",
    "TodoStore",
    "title",
    "update",
]
