"""
Editor component - the tri-view editor session.
"""

from ._impl import FORMAT_COMMAND, EditorSession, create_editor_session
from .component import run, run_exec_command, run_switch_mode
from .models import ExecCommandInput, SessionOutput, SwitchModeInput
from .ports import NotifierPort, SurfacePort, TimePort

__all__ = [
    # Entry points
    "run",
    "run_exec_command",
    "run_switch_mode",
    # Input models
    "ExecCommandInput",
    "SwitchModeInput",
    # Output models
    "SessionOutput",
    # Ports
    "NotifierPort",
    "SurfacePort",
    "TimePort",
    # Service
    "FORMAT_COMMAND",
    "EditorSession",
    "create_editor_session",
]
