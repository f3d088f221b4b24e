"""
Translator component port definitions.
"""

from __future__ import annotations

from typing import Protocol

from src.rules.models import TranslatorRules


class RulesPort(Protocol):
    """Port for accessing translator rules configuration."""

    @property
    def translator(self) -> TranslatorRules: ...


class NotifierPort(Protocol):
    """Port for translation warnings."""

    def notify(self, event_name: str, payload: dict[str, object]) -> None: ...
