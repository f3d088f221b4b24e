"""
History component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# --- Input Models ---


@dataclass(frozen=True)
class ExecuteInput:
    """Input for recording a command."""

    kind: str
    payload: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class UndoInput:
    """Input for stepping back one entry."""


@dataclass(frozen=True)
class RedoInput:
    """Input for stepping forward one entry."""


# --- Output Models ---


@dataclass(frozen=True)
class HistoryOutput:
    """State of the history after an operation."""

    can_undo: bool
    can_redo: bool
    cursor: int
    size: int
    success: bool = True
