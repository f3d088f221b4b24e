"""
Export component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# --- Input Models ---


@dataclass(frozen=True)
class GetContentInput:
    """Input for reading the document in one format."""

    format: str = "html"
    options: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class SetContentInput:
    """Input for replacing the document."""

    content: str
    format: str = "html"
    options: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ImportSettingsInput:
    """Input for applying a settings document."""

    document: str


# --- Output Models ---


@dataclass(frozen=True)
class ExportOutput:
    """Output for export operations."""

    content: str = ""
    format: str = "html"
    success: bool = True
    errors: list[str] = field(default_factory=list)
