"""
History component - undo/redo with batch grouping.
"""

from ._impl import (
    DEFAULT_CONFIG,
    HISTORY_CHANGED,
    BatchCommand,
    Command,
    HistoryConfig,
    HistoryEngine,
    HistoryEntry,
    Snapshot,
    build_history_config,
    capture,
    create_history,
    restore,
)
from .component import run, run_execute, run_redo, run_undo
from .models import ExecuteInput, HistoryOutput, RedoInput, UndoInput
from .ports import NotifierPort, SurfacePort

__all__ = [
    # Entry points
    "run",
    "run_execute",
    "run_redo",
    "run_undo",
    # Input models
    "ExecuteInput",
    "RedoInput",
    "UndoInput",
    # Output models
    "HistoryOutput",
    # Ports
    "NotifierPort",
    "SurfacePort",
    # Engine
    "DEFAULT_CONFIG",
    "HISTORY_CHANGED",
    "BatchCommand",
    "Command",
    "HistoryConfig",
    "HistoryEngine",
    "HistoryEntry",
    "Snapshot",
    "build_history_config",
    "capture",
    "create_history",
    "restore",
]
