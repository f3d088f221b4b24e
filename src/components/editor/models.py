"""
Editor component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

# --- Input Models ---


@dataclass(frozen=True)
class SwitchModeInput:
    mode: str


@dataclass(frozen=True)
class ExecCommandInput:
    """Input for a formatting command in visual mode."""

    command: str
    value: str | None = None


# --- Output Models ---


@dataclass(frozen=True)
class SessionOutput:
    """Snapshot of the session's views after an operation."""

    mode: str
    html: str
    bbcode: str
    can_undo: bool
    can_redo: bool
    success: bool = True
    errors: list[str] = field(default_factory=list)
