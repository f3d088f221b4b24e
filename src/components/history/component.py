"""
History component - undo/redo entry points.

Invariants:
- I1: Undo after execute restores the exact before snapshot
- I2: A new entry after undo discards the redo tail
- I3: The history never holds more than capacity entries
- I4: A batch is undone as a single entry
"""

from __future__ import annotations

from ._impl import HistoryEngine
from .models import ExecuteInput, HistoryOutput, RedoInput, UndoInput


def _state(engine: HistoryEngine, success: bool = True) -> HistoryOutput:
    return HistoryOutput(
        can_undo=engine.can_undo(),
        can_redo=engine.can_redo(),
        cursor=engine.cursor,
        size=len(engine.entries),
        success=success,
    )


def run_execute(inp: ExecuteInput, engine: HistoryEngine) -> HistoryOutput:
    engine.execute(inp.kind, inp.payload)
    return _state(engine)


def run_undo(inp: UndoInput, engine: HistoryEngine) -> HistoryOutput:
    return _state(engine, success=engine.undo())


def run_redo(inp: RedoInput, engine: HistoryEngine) -> HistoryOutput:
    return _state(engine, success=engine.redo())


def run(
    inp: ExecuteInput | UndoInput | RedoInput,
    *,
    engine: HistoryEngine,
) -> HistoryOutput:
    """
    Main entry point for the history component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, ExecuteInput):
        return run_execute(inp, engine)
    elif isinstance(inp, UndoInput):
        return run_undo(inp, engine)
    elif isinstance(inp, RedoInput):
        return run_redo(inp, engine)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
