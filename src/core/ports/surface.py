"""
Editable surface interface.

Protocol-based interface for the live editing surface the history engine
and the export manager operate on. The surface owns the current document
and the caret; the core only reads and replaces them.

Key requirements:
- Selection offsets index the flattened text (text nodes, depth-first)
- apply_markup replaces the whole document; it is not a differential patch
- perform carries out a command's mutation and must be deterministic given
  the same starting state, since redo re-executes commands
"""

from __future__ import annotations

from typing import Any, Protocol

from src.domain.markup import Selection


class SurfacePort(Protocol):
    """Host editing surface."""

    def get_current_markup(self) -> str:
        """Serialize the current document."""
        ...

    def apply_markup(self, markup: str) -> None:
        """Replace the whole document."""
        ...

    def get_selection_offsets(self) -> Selection | None:
        """Current selection as flattened-text offsets, or None without focus."""
        ...

    def apply_selection_offsets(self, selection: Selection | None) -> None:
        """Restore a selection; None clears it."""
        ...

    def perform(self, kind: str, payload: dict[str, Any]) -> None:
        """
        Carry out a document mutation.

        Raises:
            UnsupportedCommandError: kind is not understood by the surface
        """
        ...
