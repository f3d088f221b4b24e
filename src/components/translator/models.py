"""
Translator component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from src.domain.markup import MarkupNode

from ._impl import TranslationWarning

# --- Input Models ---


@dataclass(frozen=True)
class ToMarkupInput:
    """Input for converting dialect text to markup."""

    text: str


@dataclass(frozen=True)
class ToDialectInput:
    """Input for converting a markup tree to dialect text."""

    tree: MarkupNode


# --- Output Models ---


@dataclass(frozen=True)
class ToMarkupOutput:
    """Output for dialect -> markup."""

    tree: MarkupNode
    markup: str
    warnings: list[TranslationWarning] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class ToDialectOutput:
    """Output for markup -> dialect."""

    text: str
    success: bool = True
