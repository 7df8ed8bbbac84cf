"""Terminal todo-list application built on Rich."""

from __future__ import annotations

__version__ = "0.1.0"
