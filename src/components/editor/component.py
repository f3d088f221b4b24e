"""
Editor component - mode switching and formatting entry points.

Invariants:
- I1: In visual mode the HTML and BBCode views reflect the document after every change
- I2: Formatting commands outside visual mode do nothing
"""

from __future__ import annotations

from src.domain.errors import EditorError

from ._impl import EditorSession
from .models import ExecCommandInput, SessionOutput, SwitchModeInput


def _state(
    session: EditorSession, success: bool = True, errors: list[str] | None = None
) -> SessionOutput:
    return SessionOutput(
        mode=session.mode,
        html=session.html_view,
        bbcode=session.bbcode_view,
        can_undo=session.can_undo(),
        can_redo=session.can_redo(),
        success=success,
        errors=errors or [],
    )


def run_switch_mode(inp: SwitchModeInput, session: EditorSession) -> SessionOutput:
    try:
        session.switch_mode(inp.mode)
    except EditorError as e:
        return _state(session, success=False, errors=[str(e)])
    return _state(session)


def run_exec_command(inp: ExecCommandInput, session: EditorSession) -> SessionOutput:
    try:
        applied = session.exec_command(inp.command, inp.value)
    except EditorError as e:
        return _state(session, success=False, errors=[str(e)])
    if not applied:
        message = f"Commands need visual mode, not {session.mode}"
        return _state(session, success=False, errors=[message])
    return _state(session)


def run(
    inp: SwitchModeInput | ExecCommandInput,
    *,
    session: EditorSession,
) -> SessionOutput:
    """
    Main entry point for the editor component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, SwitchModeInput):
        return run_switch_mode(inp, session)
    elif isinstance(inp, ExecCommandInput):
        return run_exec_command(inp, session)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
