"""
History Engine - undo/redo over snapshots of a host surface.

Key behaviors:
- Every command captures a before/after snapshot (markup + selection)
- Undo restores the exact before snapshot of the entry at the cursor
- Redo re-executes the next entry from the current state
- Batches group several commands into one undoable entry; batches nest
- New entries truncate the redo tail; the oldest entry is evicted past capacity

Invariants:
- -1 <= cursor < len(entries)
- len(entries) <= capacity
- Snapshots are captured once, on first execution, and never rewritten
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Protocol

from src.core.ports.events import NotifierPort
from src.core.ports.surface import SurfacePort
from src.domain.markup import Selection
from src.rules.models import HistoryRules

logger = logging.getLogger(__name__)

HISTORY_CHANGED = "history_changed"

# --- Configuration ---


@dataclass(frozen=True)
class HistoryConfig:
    """History limits."""

    capacity: int = 100


DEFAULT_CONFIG = HistoryConfig()


def build_history_config(rules: HistoryRules) -> HistoryConfig:
    return HistoryConfig(capacity=rules.capacity)


# --- Snapshots ---


@dataclass(frozen=True)
class Snapshot:
    """Document markup plus selection at one point in time."""

    markup: str
    selection: Selection | None = None


def capture(surface: SurfacePort) -> Snapshot:
    return Snapshot(
        markup=surface.get_current_markup(),
        selection=surface.get_selection_offsets(),
    )


def restore(surface: SurfacePort, snapshot: Snapshot) -> None:
    surface.apply_markup(snapshot.markup)
    surface.apply_selection_offsets(snapshot.selection)


# --- Commands ---


class HistoryEntry(Protocol):
    """Anything the history can hold."""

    @property
    def before(self) -> Snapshot | None: ...

    @property
    def after(self) -> Snapshot | None: ...

    def execute(self, surface: SurfacePort) -> None: ...

    def undo(self, surface: SurfacePort) -> None: ...


class Command:
    """
    A single document mutation.

    The first execute() captures before/after around surface.perform();
    later executions (redo) only replay the mutation.
    """

    def __init__(self, kind: str, payload: dict[str, Any] | None = None) -> None:
        self._kind = kind
        self._payload = dict(payload or {})
        self._before: Snapshot | None = None
        self._after: Snapshot | None = None

    @property
    def kind(self) -> str:
        return self._kind

    @property
    def payload(self) -> dict[str, Any]:
        return dict(self._payload)

    @property
    def before(self) -> Snapshot | None:
        return self._before

    @property
    def after(self) -> Snapshot | None:
        return self._after

    @property
    def executed(self) -> bool:
        return self._before is not None

    def execute(self, surface: SurfacePort) -> None:
        if self._before is not None:
            surface.perform(self._kind, dict(self._payload))
            return

        before = capture(surface)
        surface.perform(self._kind, dict(self._payload))
        self._before = before
        self._after = capture(surface)

    def undo(self, surface: SurfacePort) -> None:
        if self._before is not None:
            restore(surface, self._before)

    def __repr__(self) -> str:
        return f"Command(kind={self._kind!r}, payload={self._payload!r})"


class BatchCommand:
    """Ordered group of entries undone and redone as one."""

    def __init__(self, commands: list[HistoryEntry]) -> None:
        self._commands = tuple(commands)

    @property
    def commands(self) -> tuple[HistoryEntry, ...]:
        return self._commands

    @property
    def before(self) -> Snapshot | None:
        return self._commands[0].before if self._commands else None

    @property
    def after(self) -> Snapshot | None:
        return self._commands[-1].after if self._commands else None

    def execute(self, surface: SurfacePort) -> None:
        for command in self._commands:
            command.execute(surface)

    def undo(self, surface: SurfacePort) -> None:
        for command in reversed(self._commands):
            command.undo(surface)

    def __len__(self) -> int:
        return len(self._commands)

    def __repr__(self) -> str:
        return f"BatchCommand({list(self._commands)!r})"


# --- Engine ---


class HistoryEngine:
    """
    Undo/redo stack bound to one surface.

    Calls must be serialized per document; the engine holds no locks.
    """

    def __init__(
        self,
        surface: SurfacePort,
        notifier: NotifierPort | None = None,
        config: HistoryConfig | None = None,
    ) -> None:
        self._surface = surface
        self._notifier = notifier
        self._config = config or DEFAULT_CONFIG
        self._entries: list[HistoryEntry] = []
        self._cursor = -1
        self._pending: list[list[HistoryEntry]] = []

    @property
    def config(self) -> HistoryConfig:
        return self._config

    @property
    def surface(self) -> SurfacePort:
        return self._surface

    @property
    def entries(self) -> tuple[HistoryEntry, ...]:
        return tuple(self._entries)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def batch_depth(self) -> int:
        return len(self._pending)

    def can_undo(self) -> bool:
        return self._cursor >= 0

    def can_redo(self) -> bool:
        return self._cursor < len(self._entries) - 1

    # --- Recording ---

    def execute(self, kind: str, payload: dict[str, Any] | None = None) -> Command:
        """
        Run a mutation through the surface and record it.

        Inside an open batch the command joins the innermost batch and no
        history entry is made until the outermost batch closes.
        """
        command = Command(kind, payload)
        command.execute(self._surface)

        if self._pending:
            self._pending[-1].append(command)
            logger.debug("Command %r joined batch at depth %d", kind, len(self._pending))
        else:
            self._commit(command)
        return command

    def start_batch(self) -> None:
        self._pending.append([])

    def end_batch(self) -> BatchCommand | None:
        """
        Close the innermost batch.

        Returns the recorded batch, or None when nothing was recorded (no
        open batch, or an empty one).
        """
        if not self._pending:
            return None

        commands = self._pending.pop()
        if not commands:
            return None

        batch = BatchCommand(commands)
        if self._pending:
            self._pending[-1].append(batch)
        else:
            self._commit(batch)
        return batch

    @contextmanager
    def batch(self) -> Iterator[None]:
        """Group every execute() in the block into one entry."""
        self.start_batch()
        try:
            yield
        finally:
            self.end_batch()

    def _commit(self, entry: HistoryEntry) -> None:
        del self._entries[self._cursor + 1 :]
        self._entries.append(entry)
        self._cursor = len(self._entries) - 1

        while len(self._entries) > self._config.capacity:
            self._entries.pop(0)
            self._cursor -= 1

        logger.debug("History committed entry, size=%d cursor=%d", len(self._entries), self._cursor)
        self._emit()

    # --- Navigation ---

    def undo(self) -> bool:
        if not self.can_undo():
            return False

        self._entries[self._cursor].undo(self._surface)
        self._cursor -= 1
        self._emit()
        return True

    def redo(self) -> bool:
        if not self.can_redo():
            return False

        self._cursor += 1
        self._entries[self._cursor].execute(self._surface)
        self._emit()
        return True

    def clear(self) -> None:
        self._entries.clear()
        self._pending.clear()
        self._cursor = -1
        self._emit()

    def _emit(self) -> None:
        if self._notifier is not None:
            self._notifier.notify(
                HISTORY_CHANGED,
                {"can_undo": self.can_undo(), "can_redo": self.can_redo()},
            )


def create_history(
    surface: SurfacePort,
    notifier: NotifierPort | None = None,
    rules: HistoryRules | None = None,
) -> HistoryEngine:
    """Create a HistoryEngine, optionally configured from rules."""
    config = build_history_config(rules) if rules is not None else DEFAULT_CONFIG
    return HistoryEngine(surface, notifier, config)
