"""Footer bar renderer for status indicators.

This module provides the render_footer_bar function that displays
a status bar with the item count and key hints.
"""

from __future__ import annotations

from rich.text import Text

from ..tui_utils import truncate_text

KEY_HINTS = "Enter: add · ↑/↓: select · Del/^X: delete · ^U: clear · Esc: quit"


def render_footer_bar(item_count: int, terminal_width: int = 80) -> Text:
    """Build Rich Text displaying footer status bar.

    Args:
        item_count: Number of todos in the list
        terminal_width: Terminal width for truncation calculations

    Returns:
        Rich Text component ready for rendering
    """
    if item_count > 0:
        count_text = "1 todo" if item_count == 1 else f"{item_count} todos"
        parts = [(count_text, "green")]
    else:
        parts = [("No todos", "dim")]

    # Format: "[count] | [hints]", hints dropped when there is no room
    available_width = terminal_width - len(parts[0][0]) - len(" | ")
    if available_width > 10:
        parts.append((" | ", "dim"))
        parts.append((truncate_text(KEY_HINTS, available_width), "cyan"))

    footer = Text()
    for text, style in parts:
        footer.append(text, style=style)

    return footer
