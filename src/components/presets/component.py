"""
Presets component - custom preset management and preset application.

Invariants:
- I1: Built-in presets cannot be deleted
- I2: Applying a preset is one undoable history entry
"""

from __future__ import annotations

from src.domain.errors import UnknownPresetError

from ._impl import StylePresets
from .models import ApplyPresetInput, CreatePresetInput, PresetOutput


def run_apply(inp: ApplyPresetInput, presets: StylePresets) -> PresetOutput:
    try:
        presets.apply_preset(inp.preset_id, force_block=inp.force_block)
    except UnknownPresetError as e:
        return PresetOutput(preset_id=inp.preset_id, success=False, error=str(e))
    return PresetOutput(preset_id=inp.preset_id, success=True)


def run_create(inp: CreatePresetInput, presets: StylePresets) -> PresetOutput:
    preset_id = presets.create_custom_preset(inp.name, inp.styles, block=inp.block)
    return PresetOutput(preset_id=preset_id, success=True)


def run(
    inp: ApplyPresetInput | CreatePresetInput,
    *,
    presets: StylePresets,
) -> PresetOutput:
    """
    Main entry point for the presets component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, ApplyPresetInput):
        return run_apply(inp, presets)
    elif isinstance(inp, CreatePresetInput):
        return run_create(inp, presets)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
