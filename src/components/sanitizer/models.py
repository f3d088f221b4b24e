"""
Sanitizer component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from src.domain.markup import MarkupNode

from ._impl import SanitizerRemoval

# --- Input Models ---


@dataclass(frozen=True)
class SanitizeTreeInput:
    """Input for sanitizing a parsed markup tree."""

    tree: MarkupNode


@dataclass(frozen=True)
class SanitizeHtmlInput:
    """Input for sanitizing an HTML string."""

    markup: str


# --- Output Models ---


@dataclass(frozen=True)
class SanitizeTreeOutput:
    """Output for a sanitized tree."""

    tree: MarkupNode
    removals: list[SanitizerRemoval] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class SanitizeHtmlOutput:
    """Output for sanitized HTML."""

    markup: str
    removals: list[SanitizerRemoval] = field(default_factory=list)
    success: bool = True
