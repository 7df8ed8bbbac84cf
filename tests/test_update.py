"""Unit tests for message handling and title derivation."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import Mock

import pytest

from todo_tui.exceptions import StorageError
from todo_tui.state import (
    InputChanged,
    RemoveAt,
    SubmitPending,
    TodoState,
    TodoStore,
    title,
    update,
)


@pytest.fixture
def store(tmp_path: Path) -> TodoStore:
    """Create a store writing into a temporary directory."""
    return TodoStore(tmp_path / "data.csv")


@pytest.fixture
def failing_store() -> Mock:
    """Create a store whose writes always fail."""
    store = Mock(spec=TodoStore)
    store.write.side_effect = StorageError("disk full")
    return store


class TestSubmitPending:
    """Tests for submitting the pending input."""

    def test_appends_trimmed_input(self, store: TodoStore) -> None:
        """Submitting should append the trimmed text and clear the input."""
        state = TodoState(items=["a"], pending_input="  b  ")

        update(state, SubmitPending(), store)

        assert state.items == ["a", "b"]
        assert state.pending_input == ""

    @pytest.mark.parametrize("text", ["", "   ", "\t\n"])
    def test_blank_input_is_ignored(self, store: TodoStore, text: str) -> None:
        """Input that trims to empty should change nothing."""
        state = TodoState(items=["a"], pending_input=text)

        update(state, SubmitPending(), store)

        assert state.items == ["a"]
        assert state.pending_input == text
        assert not store.data_path.exists()

    def test_writes_full_list(self, store: TodoStore) -> None:
        """Submitting should rewrite the file with every item."""
        state = TodoState(items=["first"], pending_input="second")

        update(state, SubmitPending(), store)

        assert store.read() == ["first", "second"]

    def test_successful_write_clears_dirty(self, store: TodoStore) -> None:
        """A saved list is no longer dirty."""
        state = TodoState(pending_input="x", dirty=True)

        update(state, SubmitPending(), store)

        assert state.dirty is False

    def test_failed_write_marks_dirty(self, failing_store: Mock) -> None:
        """A failed write keeps the item in memory and marks the state dirty."""
        state = TodoState(pending_input="keep me")

        update(state, SubmitPending(), failing_store)

        assert state.items == ["keep me"]
        assert state.pending_input == ""
        assert state.dirty is True
        failing_store.write.assert_called_once_with(["keep me"])

    def test_duplicates_allowed(self, store: TodoStore) -> None:
        """The same text can be added twice."""
        state = TodoState(items=["milk"], pending_input="milk")

        update(state, SubmitPending(), store)

        assert state.items == ["milk", "milk"]


class TestRemoveAt:
    """Tests for removing items by position."""

    def test_removes_middle_item(self, store: TodoStore) -> None:
        """Removing index 1 of three keeps the others in order."""
        state = TodoState(items=["a", "b", "c"])

        update(state, RemoveAt(1), store)

        assert state.items == ["a", "c"]

    def test_removes_last_item(self, store: TodoStore) -> None:
        """Removing the only item leaves an empty list."""
        state = TodoState(items=["only"])

        update(state, RemoveAt(0), store)

        assert state.items == []

    def test_does_not_write_or_touch_dirty(self, failing_store: Mock) -> None:
        """Removal neither persists nor changes the dirty flag."""
        state = TodoState(items=["a", "b"], dirty=False)

        update(state, RemoveAt(0), failing_store)

        failing_store.write.assert_not_called()
        assert state.dirty is False

    @pytest.mark.parametrize("index", [3, 10, -1])
    def test_out_of_range_raises(self, store: TodoStore, index: int) -> None:
        """Indexes outside the list are a contract violation."""
        state = TodoState(items=["a", "b", "c"])

        with pytest.raises(IndexError):
            update(state, RemoveAt(index), store)

        assert state.items == ["a", "b", "c"]


class TestInputChanged:
    """Tests for editing the pending input."""

    @pytest.mark.parametrize("dirty", [True, False])
    def test_replaces_text_and_marks_dirty(self, store: TodoStore, dirty: bool) -> None:
        """Editing always sets the dirty flag."""
        state = TodoState(pending_input="old", dirty=dirty)

        update(state, InputChanged("new"), store)

        assert state.pending_input == "new"
        assert state.dirty is True

    def test_empty_text_still_marks_dirty(self, store: TodoStore) -> None:
        """Clearing the input counts as an edit."""
        state = TodoState(pending_input="x")

        update(state, InputChanged(""), store)

        assert state.pending_input == ""
        assert state.dirty is True


class TestUnknownMessage:
    """Tests for message type validation."""

    def test_rejects_unknown_message(self, store: TodoStore) -> None:
        """Anything other than the three variants is a TypeError."""
        with pytest.raises(TypeError):
            update(TodoState(), "submit", store)  # type: ignore[arg-type]


class TestTitle:
    """Tests for the window title."""

    def test_clean_title(self) -> None:
        """Clean state shows the plain title."""
        assert title(TodoState(dirty=False)) == "Todos"

    def test_dirty_title(self) -> None:
        """Dirty state marks the title."""
        assert title(TodoState(dirty=True)) == "Todos (*dirty*)"


class TestScenarios:
    """End-to-end message sequences."""

    def test_type_and_submit(self, store: TodoStore) -> None:
        """Typing then submitting adds the item and clears the input."""
        state = TodoState()

        update(state, InputChanged("Buy milk"), store)
        assert title(state) == "Todos (*dirty*)"

        update(state, SubmitPending(), store)

        assert state.items == ["Buy milk"]
        assert state.pending_input == ""
        assert title(state) == "Todos"

    def test_add_then_remove_persists_only_on_submit(self, store: TodoStore) -> None:
        """Removal is only written out by the next submit."""
        state = TodoState()
        for text in ("a", "b", "c"):
            update(state, InputChanged(text), store)
            update(state, SubmitPending(), store)

        update(state, RemoveAt(1), store)
        assert store.read() == ["a", "b", "c"]

        update(state, InputChanged("d"), store)
        update(state, SubmitPending(), store)
        assert store.read() == ["a", "c", "d"]
