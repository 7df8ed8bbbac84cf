"""TUI utility functions for formatting and terminal input."""

from __future__ import annotations

import shutil

# Escape sequence suffixes (after "\x1b[" or "\x1bO") mapped to key names
ESCAPE_SEQUENCES = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
    "H": "home",
    "F": "end",
    "1~": "home",
    "3~": "delete",
    "4~": "end",
    "5~": "pageup",
    "6~": "pagedown",
}


def truncate_text(text: str, max_len: int) -> str:
    """
    Truncate text to max length, adding ellipsis if needed.

    Args:
        text: Text to truncate
        max_len: Maximum length including ellipsis

    Returns:
        Truncated text with "..." suffix if text exceeds max_len

    Examples:
        >>> truncate_text("short", 10)
        'short'
        >>> truncate_text("this is a long text", 10)
        'this is...'
    """
    if len(text) <= max_len:
        return text

    if max_len <= 3:
        return "..."[:max_len]

    return text[: max_len - 3] + "..."


def get_terminal_size() -> tuple[int, int]:
    """
    Get terminal size as (columns, rows) tuple.

    Returns:
        Tuple of (columns, rows), defaults to (80, 24) if unavailable
    """
    size = shutil.get_terminal_size(fallback=(80, 24))
    return (size.columns, size.lines)


def decode_escape_sequence(suffix: str) -> str:
    """
    Map the characters following "\\x1b[" or "\\x1bO" to a key name.

    Args:
        suffix: Sequence body such as "A" or "3~"

    Returns:
        Key name, or "unknown" for sequences that are not recognized

    Examples:
        >>> decode_escape_sequence("A")
        'up'
        >>> decode_escape_sequence("3~")
        'delete'
    """
    return ESCAPE_SEQUENCES.get(suffix, "unknown")
