"""Event notification interface for UI listeners."""

from __future__ import annotations

from typing import Any, Protocol


class NotifierPort(Protocol):
    """Sink for editor events (history changes, warnings, diagnostics)."""

    def notify(self, event_name: str, payload: dict[str, Any]) -> None: ...
