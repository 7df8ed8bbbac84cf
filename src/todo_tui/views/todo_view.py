"""Todo list view construction and rendering.

build_view() maps state onto a TodoView: the input row and one row per item,
each carrying the message its controls issue. render_todo_view() turns a
TodoView into a Rich layout. Both are pure.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from rich.layout import Layout
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..models import InputChanged, RemoveAt, SubmitPending, TodoState
from ..tui_utils import truncate_text
from ..update import DIRTY_TITLE, title
from .footer_bar import render_footer_bar

PLACEHOLDER = "New todo"
ADD_LABEL = "[ Add ]"
DELETE_LABEL = "delete"
MAX_ITEM_WIDTH = 200
INPUT_CHROME_COLS = 6


@dataclass(frozen=True)
class TodoRow:
    """One list row: the item's text and the message its delete control issues."""

    text: str
    on_delete: RemoveAt


@dataclass(frozen=True)
class TodoView:
    """Widget tree for one frame of the application."""

    title: str
    input_text: str
    on_input: Callable[[str], InputChanged]
    on_submit: SubmitPending
    rows: tuple[TodoRow, ...]
    placeholder: str = PLACEHOLDER


def build_view(state: TodoState) -> TodoView:
    """Build the widget tree for the current state.

    Args:
        state: Current application state

    Returns:
        TodoView with one row per item, in list order
    """
    rows = tuple(
        TodoRow(text=item, on_delete=RemoveAt(index))
        for index, item in enumerate(state.items)
    )
    return TodoView(
        title=title(state),
        input_text=state.pending_input,
        on_input=InputChanged,
        on_submit=SubmitPending(),
        rows=rows,
    )


def viewport_start(total: int, cursor: int | None, viewport_size: int | None) -> int:
    """Return the first visible row index so that the cursor stays in view.

    Args:
        total: Number of rows in the list
        cursor: Selected row index, or None
        viewport_size: Number of rows that fit (None = show all)

    Returns:
        Index of the first row to render
    """
    if not viewport_size or viewport_size <= 0 or total <= viewport_size:
        return 0
    if cursor is None:
        return 0
    cursor = max(0, min(cursor, total - 1))
    return max(0, min(cursor - viewport_size + 1, total - viewport_size))


def _input_tail(text: str, terminal_width: int) -> str:
    """Return the end of text that fits in the input field."""
    # Panel borders and padding, grid gap, cursor glyph
    available = max(1, terminal_width - len(ADD_LABEL) - INPUT_CHROME_COLS)
    if len(text) <= available:
        return text
    return "…" + text[-(available - 1) :] if available > 1 else text[-1:]


def render_input_panel(view: TodoView, terminal_width: int = 80) -> Panel:
    """Build Rich Panel with the entry field and the Add control.

    Text longer than the field is shown by its tail so the cursor stays visible.

    Args:
        view: Widget tree for this frame
        terminal_width: Terminal width used to size the field

    Returns:
        Panel titled with the window title
    """
    if view.input_text:
        field = Text(_input_tail(view.input_text, terminal_width), style="white")
        field.append("▏", style="bold cyan")
    else:
        field = Text("▏", style="bold cyan")
        field.append(view.placeholder, style="dim italic")

    grid = Table.grid(expand=True, padding=(0, 1))
    grid.add_column(ratio=1, no_wrap=True, overflow="crop")
    grid.add_column(no_wrap=True, justify="right")
    grid.add_row(field, Text(ADD_LABEL, style="bold green"))

    return Panel(
        grid,
        title=f"[bold white]{view.title}[/bold white]",
        border_style="yellow" if view.title == DIRTY_TITLE else "blue",
    )


def render_list_panel(
    view: TodoView,
    cursor: int | None = None,
    viewport_size: int | None = None,
) -> Panel:
    """Build Rich Panel listing the todos with their delete controls.

    Args:
        view: Widget tree for this frame
        cursor: Index of the highlighted row, or None
        viewport_size: Maximum number of rows to show (None = show all)

    Returns:
        Panel with one table row per todo
    """
    table = Table(
        show_header=False,
        box=None,
        padding=(0, 1),
        expand=True,
    )
    table.add_column("#", style="dim", no_wrap=True, justify="right")
    table.add_column("Todo", style="white", ratio=1)
    # Right padding keeps the control clear of the scrollbar column
    table.add_column("", style="red", no_wrap=True, width=len(DELETE_LABEL) + 2)

    total = len(view.rows)
    start = viewport_start(total, cursor, viewport_size)
    end = total if not viewport_size or viewport_size <= 0 else min(start + viewport_size, total)

    for index in range(start, end):
        row = view.rows[index]
        style = "reverse" if index == cursor else None
        table.add_row(
            str(index + 1),
            Text(truncate_text(row.text, MAX_ITEM_WIDTH)),
            DELETE_LABEL,
            style=style,
        )

    if not total:
        table.add_row("", "[dim italic]Nothing to do[/dim italic]", "")

    showing_range = f"{start + 1}-{end}" if total else "0"
    return Panel(
        table,
        title=f"[dim]({showing_range}/{total})[/dim]",
        title_align="right",
        border_style="blue",
    )


def render_todo_view(
    view: TodoView,
    cursor: int | None = None,
    viewport_size: int | None = None,
    terminal_width: int = 80,
) -> Layout:
    """Build the full-screen layout for one frame.

    Args:
        view: Widget tree for this frame
        cursor: Index of the highlighted row, or None
        viewport_size: Number of list rows that fit on screen (None = show all)
        terminal_width: Terminal width for footer truncation

    Returns:
        Rich Layout with input, list and footer sections
    """
    layout = Layout()
    layout.split_column(
        Layout(name="input", size=3),
        Layout(name="list", ratio=1),
        Layout(name="footer", size=1),
    )

    layout["input"].update(render_input_panel(view, terminal_width))
    layout["list"].update(render_list_panel(view, cursor, viewport_size))
    layout["footer"].update(render_footer_bar(len(view.rows), terminal_width))

    return layout
