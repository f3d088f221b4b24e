"""
Sanitizer component port definitions.
"""

from __future__ import annotations

from typing import Protocol

from src.rules.models import SanitizerRules


class RulesPort(Protocol):
    """Port for accessing sanitizer rules configuration."""

    @property
    def sanitizer(self) -> SanitizerRules: ...


class NotifierPort(Protocol):
    """Port for optional removal diagnostics."""

    def notify(self, event_name: str, payload: dict[str, object]) -> None: ...
