"""
Export component - format conversion at the document boundary.

Invariants:
- I1: Exported HTML is sanitized unless sanitize is switched off
- I2: Unknown formats and malformed settings documents are reported, not applied
"""

from __future__ import annotations

from src.domain.errors import EditorError

from ._impl import ExportManager
from .models import ExportOutput, GetContentInput, ImportSettingsInput, SetContentInput


def run_get_content(inp: GetContentInput, manager: ExportManager) -> ExportOutput:
    try:
        content = manager.get_content(inp.format, inp.options or None)
    except EditorError as e:
        return ExportOutput(format=inp.format, success=False, errors=[str(e)])
    return ExportOutput(content=content, format=inp.format, success=True)


def run_set_content(inp: SetContentInput, manager: ExportManager) -> ExportOutput:
    try:
        manager.set_content(inp.content, inp.format, inp.options or None)
    except EditorError as e:
        return ExportOutput(format=inp.format, success=False, errors=[str(e)])
    return ExportOutput(format=inp.format, success=True)


def run_import_settings(inp: ImportSettingsInput, manager: ExportManager) -> ExportOutput:
    try:
        manager.import_settings(inp.document)
    except EditorError as e:
        return ExportOutput(success=False, errors=[str(e)])
    return ExportOutput(success=True)


def run(
    inp: GetContentInput | SetContentInput | ImportSettingsInput,
    *,
    manager: ExportManager,
) -> ExportOutput:
    """
    Main entry point for the export component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, GetContentInput):
        return run_get_content(inp, manager)
    elif isinstance(inp, SetContentInput):
        return run_set_content(inp, manager)
    elif isinstance(inp, ImportSettingsInput):
        return run_import_settings(inp, manager)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
