"""Main TUI application loop and layout.

This module runs the event loop: read one key, turn it into at most one
message, apply it with update(), rebuild the view and re-render.
"""

from __future__ import annotations

import codecs
import contextlib
import logging
import os
import select
import sys
import termios
import tty
from collections.abc import Iterator

from rich.console import Console
from rich.live import Live

from .config import Config
from .keybindings import KeybindingHandler
from .state import Message, TodoState, TodoStore, update
from .tui_utils import decode_escape_sequence, get_terminal_size
from .views.todo_view import TodoView, build_view, render_todo_view

logger = logging.getLogger(__name__)

# Rows taken by the input panel, list panel borders and footer
CHROME_ROWS = 6

# Seconds to wait for the rest of an escape sequence
ESCAPE_TIMEOUT = 0.05


@contextlib.contextmanager
def _cbreak_terminal() -> Iterator[None]:
    """Deliver key presses without waiting for Enter, restoring the terminal on exit."""
    if not sys.stdin.isatty():
        yield
        return

    fd = sys.stdin.fileno()
    saved = termios.tcgetattr(fd)
    try:
        tty.setcbreak(fd)
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)


class TodoApp:
    """Main TUI application owning the state and the event loop."""

    def __init__(self, config: Config, console: Console | None = None):
        """Initialize TUI application.

        Args:
            config: Runtime configuration
            console: Console to render on (defaults to a new Console)
        """
        self.config = config
        self.console = console or Console()
        self.store = TodoStore(config.data_path)
        self.state = TodoState()
        self.keybinding_handler = KeybindingHandler()
        self.should_quit = False

    def load(self) -> None:
        """Load persisted todos into a fresh state."""
        self.state = TodoState.load(self.store)
        self.keybinding_handler.cursor = 0

    def dispatch(self, message: Message) -> TodoView:
        """Apply one message and return the view for the new state.

        Args:
            message: Message to apply

        Returns:
            Widget tree built from the updated state
        """
        update(self.state, message, self.store)
        view = build_view(self.state)
        self.keybinding_handler.clamp_cursor(len(view.rows))
        return view

    def handle_key(self, key: str, view: TodoView) -> TodoView:
        """Route a key press through the keybindings and apply its message.

        Args:
            key: Decoded key press
            view: Widget tree currently on screen

        Returns:
            Widget tree to show next
        """
        handled, message = self.keybinding_handler.handle_key(key, view)
        if self.keybinding_handler.quit_requested:
            self.should_quit = True
        if handled and message is not None:
            return self.dispatch(message)
        return view

    def _list_viewport_size(self) -> int:
        """Number of list rows that fit on screen."""
        if self.config.list_viewport_rows:
            return self.config.list_viewport_rows
        _, rows = get_terminal_size()
        return max(1, rows - CHROME_ROWS)

    def _render(self, view: TodoView):
        """Build the renderable for a view at the current terminal size."""
        width, _ = get_terminal_size()
        return render_todo_view(
            view,
            cursor=self.keybinding_handler.cursor if view.rows else None,
            viewport_size=self._list_viewport_size(),
            terminal_width=width,
        )

    def _read_char(self) -> str:
        """Read one character from stdin without Python-level buffering."""
        fd = sys.stdin.fileno()
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        while True:
            data = os.read(fd, 1)
            if not data:
                return ""
            char = decoder.decode(data)
            if char:
                return char

    def _stdin_ready(self, timeout: float) -> bool:
        """Return True when stdin has input within the timeout."""
        ready, _, _ = select.select([sys.stdin], [], [], timeout)
        return bool(ready)

    def _poll_keyboard(self, timeout: float = 0.1) -> str | None:
        """Poll for keyboard input with timeout.

        Args:
            timeout: Timeout in seconds

        Returns:
            Key string if key pressed, None otherwise
        """
        if not self._stdin_ready(timeout):
            return None

        key = self._read_char()
        if not key:
            # stdin closed
            return "escape"
        if key != "\x1b":
            return key

        # Lone ESC unless the rest of a sequence follows immediately
        if not self._stdin_ready(ESCAPE_TIMEOUT):
            return "escape"

        introducer = self._read_char()
        if introducer == "O":
            # SS3 form: a single final character
            if not self._stdin_ready(ESCAPE_TIMEOUT):
                return "alt+O"
            return decode_escape_sequence(self._read_char())
        if introducer != "[":
            return f"alt+{introducer}"

        suffix = ""
        while self._stdin_ready(ESCAPE_TIMEOUT):
            char = self._read_char()
            suffix += char
            if char.isalpha() or char == "~":
                break
        return decode_escape_sequence(suffix)

    def run(self) -> int:
        """Run the main TUI event loop.

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        try:
            self.load()
            view = build_view(self.state)

            with _cbreak_terminal(), Live(
                self._render(view),
                console=self.console,
                auto_refresh=False,
                screen=True,
            ) as live:
                logger.info("TUI main loop started")

                while not self.should_quit:
                    self.console.set_window_title(view.title)
                    live.update(self._render(view), refresh=True)

                    key = self._poll_keyboard(timeout=self.config.refresh_seconds)
                    if key:
                        view = self.handle_key(key, view)

            logger.info("TUI main loop exited")
            return 0

        except KeyboardInterrupt:
            logger.info("TUI interrupted by user")
            return 130

        except Exception as err:
            logger.error(f"TUI crashed: {err}", exc_info=True)
            self.console.print(f"[red]Error: {err}[/red]")
            return 1
