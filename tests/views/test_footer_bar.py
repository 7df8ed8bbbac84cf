"""Tests for footer bar rendering."""

from __future__ import annotations

from rich.text import Text

from todo_tui.views.footer_bar import render_footer_bar


class TestRenderFooterBar:
    """Tests for footer bar rendering."""

    def test_no_todos(self) -> None:
        """Empty list shows a placeholder count."""
        footer = render_footer_bar(item_count=0)

        assert isinstance(footer, Text)
        assert "No todos" in footer.plain
        assert "Esc: quit" in footer.plain

    def test_single_todo(self) -> None:
        """One item uses the singular."""
        footer = render_footer_bar(item_count=1)

        assert "1 todo" in footer.plain
        assert "todos" not in footer.plain

    def test_multiple_todos(self) -> None:
        """Several items use the plural."""
        assert "5 todos" in render_footer_bar(item_count=5).plain

    def test_hints_truncated_to_width(self) -> None:
        """Key hints are cut to fit the terminal."""
        footer = render_footer_bar(item_count=3, terminal_width=40)

        assert len(footer.plain) <= 40
        assert footer.plain.endswith("...")

    def test_hints_dropped_when_too_narrow(self) -> None:
        """No hints when there is no room for them."""
        footer = render_footer_bar(item_count=3, terminal_width=12)
        assert footer.plain == "3 todos"
