"""
Presets component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

# --- Input Models ---


@dataclass(frozen=True)
class ApplyPresetInput:
    """Input for applying a preset to the current selection."""

    preset_id: str
    force_block: bool = False


@dataclass(frozen=True)
class CreatePresetInput:
    """Input for creating a custom preset."""

    name: str
    styles: dict[str, str] = field(default_factory=dict)
    block: bool = False


# --- Output Models ---


@dataclass(frozen=True)
class PresetOutput:
    """Output for preset operations."""

    preset_id: str | None = None
    success: bool = True
    error: str | None = None
