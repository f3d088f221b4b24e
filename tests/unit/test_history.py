"""
Tests for the History Engine.

Test assertions:
- Undo after N executes restores the initial document exactly
- A new entry after K undos discards the redo tail
- Capacity bound: 101 executes leave 100 entries, cursor at the newest
- Batches are undone and redone as one entry, and nest
- Redo re-executes from the current state, never replays a stored snapshot
"""

from __future__ import annotations

import pytest

from src.adapters.events import EventBus
from src.adapters.memory_surface import InMemorySurface
from src.components.history import (
    HISTORY_CHANGED,
    BatchCommand,
    Command,
    ExecuteInput,
    HistoryConfig,
    HistoryEngine,
    RedoInput,
    Snapshot,
    UndoInput,
    build_history_config,
    run,
)
from src.domain.errors import UnsupportedCommandError
from src.domain.markup import Selection
from src.rules.models import HistoryRules

# --- Helpers ---


class RecordingSurface(InMemorySurface):
    """Surface that remembers every markup restore."""

    def __init__(self, markup: str = "") -> None:
        super().__init__(markup)
        self.applied: list[str] = []

    def apply_markup(self, markup: str) -> None:
        self.applied.append(markup)
        super().apply_markup(markup)


def insert(history: HistoryEngine, text: str) -> Command:
    return history.execute("insert_html", {"html": text})


# --- Execute / Undo / Redo ---


class TestExecute:
    def test_captures_before_and_after(
        self, history: HistoryEngine, surface: InMemorySurface
    ) -> None:
        surface.select(0, 5)

        command = history.execute("format", {"command": "bold"})

        assert command.before == Snapshot("<p>hello world</p>", Selection(0, 5))
        assert command.after == Snapshot(
            "<p><strong>hello</strong> world</p>", Selection(0, 5)
        )
        assert history.cursor == 0
        assert history.can_undo()
        assert not history.can_redo()

    def test_failed_command_records_nothing(
        self, history: HistoryEngine, surface: InMemorySurface
    ) -> None:
        with pytest.raises(UnsupportedCommandError):
            history.execute("teleport", {})

        assert history.entries == ()
        assert surface.get_current_markup() == "<p>hello world</p>"

    def test_emits_history_changed(self, history: HistoryEngine, events: EventBus) -> None:
        insert(history, "!")

        (event,) = events.events_named(HISTORY_CHANGED)
        assert event.payload == {"can_undo": True, "can_redo": False}


class TestUndoRedo:
    def test_inverse_law(self, history: HistoryEngine, surface: InMemorySurface) -> None:
        initial = (surface.get_current_markup(), surface.get_selection_offsets())
        for text in ("a", "<em>b</em>", "c"):
            insert(history, text)

        for _ in range(3):
            assert history.undo()

        assert (surface.get_current_markup(), surface.get_selection_offsets()) == initial
        assert history.cursor == -1

    def test_undo_restores_selection(
        self, history: HistoryEngine, surface: InMemorySurface
    ) -> None:
        surface.select(2, 4)
        insert(history, "X")

        history.undo()

        assert surface.get_selection_offsets() == Selection(2, 4)

    def test_undo_with_nothing_is_noop(self, history: HistoryEngine, events: EventBus) -> None:
        assert history.undo() is False
        assert history.redo() is False
        assert events.recorded == []

    def test_redo_reapplies(self, history: HistoryEngine, surface: InMemorySurface) -> None:
        insert(history, "!")
        after = surface.get_current_markup()
        history.undo()

        assert history.redo()

        assert surface.get_current_markup() == after
        assert history.cursor == 0

    def test_truncation_after_undos(self, history: HistoryEngine) -> None:
        for text in ("a", "b", "c"):
            insert(history, text)
        history.undo()
        history.undo()

        insert(history, "d")

        assert len(history.entries) == 2
        assert history.cursor == 1
        assert not history.can_redo()

    def test_redo_from_diverged_state(self, surface: InMemorySurface) -> None:
        surface.apply_markup("<p>ab</p>")
        surface.select(2)
        history = HistoryEngine(surface)
        command = insert(history, "X")
        history.undo()

        # The document changes outside the history before redo.
        surface.apply_markup("<p>zz</p>")
        history.redo()

        assert surface.get_current_markup() == "<p>zzX</p>"
        assert command.after is not None
        assert command.after.markup == "<p>abX</p>"


class TestCapacity:
    def test_oldest_entry_evicted(self, surface: InMemorySurface) -> None:
        history = HistoryEngine(surface, config=HistoryConfig(capacity=100))
        first = insert(history, "0")
        for i in range(1, 101):
            insert(history, str(i))

        assert len(history.entries) == 100
        assert history.cursor == 99
        assert first not in history.entries

    def test_rules_set_capacity(self, surface: InMemorySurface) -> None:
        history = HistoryEngine(surface, config=build_history_config(HistoryRules(capacity=2)))
        for text in ("a", "b", "c"):
            insert(history, text)

        assert len(history.entries) == 2
        assert history.cursor == 1


# --- Batches ---


class TestBatches:
    def test_batch_is_one_entry(self, history: HistoryEngine, surface: InMemorySurface) -> None:
        initial = surface.get_current_markup()
        history.start_batch()
        insert(history, "A")
        insert(history, "B")
        batch = history.end_batch()

        assert isinstance(batch, BatchCommand)
        assert len(history.entries) == 1
        assert surface.get_current_markup() == "<p>hello worldAB</p>"

        history.undo()
        assert surface.get_current_markup() == initial
        assert not history.can_undo()

        history.redo()
        assert surface.get_current_markup() == "<p>hello worldAB</p>"

    def test_batch_undone_in_reverse_order(self) -> None:
        surface = RecordingSurface("<p>x</p>")
        history = HistoryEngine(surface)
        with history.batch():
            insert(history, "A")
            insert(history, "B")
        surface.applied.clear()

        history.undo()

        assert surface.applied == ["<p>xA</p>", "<p>x</p>"]

    def test_commands_run_immediately_inside_batch(
        self, history: HistoryEngine, surface: InMemorySurface
    ) -> None:
        history.start_batch()
        insert(history, "A")

        assert surface.get_current_markup() == "<p>hello worldA</p>"
        assert history.entries == ()
        history.end_batch()

    def test_nested_batches_commit_once(
        self, history: HistoryEngine, surface: InMemorySurface
    ) -> None:
        initial = surface.get_current_markup()
        history.start_batch()
        insert(history, "A")
        history.start_batch()
        insert(history, "B")
        inner = history.end_batch()
        insert(history, "C")
        outer = history.end_batch()

        assert len(history.entries) == 1
        assert outer is not None
        assert outer.commands[1] is inner
        assert history.batch_depth == 0

        history.undo()
        assert surface.get_current_markup() == initial

    def test_empty_batch_records_nothing(self, history: HistoryEngine, events: EventBus) -> None:
        history.start_batch()

        assert history.end_batch() is None
        assert history.entries == ()
        assert events.recorded == []

    def test_end_batch_without_start_is_noop(self, history: HistoryEngine) -> None:
        assert history.end_batch() is None

    def test_batch_context_manager(self, history: HistoryEngine) -> None:
        with history.batch():
            insert(history, "A")
            insert(history, "B")

        assert len(history.entries) == 1


# --- Clear ---


class TestClear:
    def test_clear_empties_history(self, history: HistoryEngine, events: EventBus) -> None:
        insert(history, "a")
        events.clear_recorded()

        history.clear()

        assert history.entries == ()
        assert history.cursor == -1
        (event,) = events.recorded
        assert event.payload == {"can_undo": False, "can_redo": False}


# --- Component ---


class TestComponent:
    def test_execute_undo_redo(self, history: HistoryEngine) -> None:
        result = run(ExecuteInput(kind="insert_html", payload={"html": "x"}), engine=history)
        assert result.can_undo and result.size == 1

        result = run(UndoInput(), engine=history)
        assert result.success and result.can_redo

        result = run(RedoInput(), engine=history)
        assert result.success and result.cursor == 0

    def test_undo_with_empty_history_reports_failure(self, history: HistoryEngine) -> None:
        assert run(UndoInput(), engine=history).success is False

    def test_unknown_input(self, history: HistoryEngine) -> None:
        with pytest.raises(ValueError, match="Unknown input type"):
            run(object(), engine=history)  # type: ignore[arg-type]
