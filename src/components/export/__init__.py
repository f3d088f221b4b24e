"""
Export component - HTML/BBCode/text export and settings documents.
"""

from ._impl import (
    DEFAULT_CONFIG,
    ExportConfig,
    ExportManager,
    build_export_config,
    cleanup_html,
    cleanup_tree,
    create_export_manager,
    strip_images,
)
from .component import run, run_get_content, run_import_settings, run_set_content
from .models import ExportOutput, GetContentInput, ImportSettingsInput, SetContentInput
from .ports import NotifierPort, SurfacePort, TimePort

__all__ = [
    # Entry points
    "run",
    "run_get_content",
    "run_import_settings",
    "run_set_content",
    # Input models
    "GetContentInput",
    "ImportSettingsInput",
    "SetContentInput",
    # Output models
    "ExportOutput",
    # Ports
    "NotifierPort",
    "SurfacePort",
    "TimePort",
    # Service
    "DEFAULT_CONFIG",
    "ExportConfig",
    "ExportManager",
    "build_export_config",
    "cleanup_html",
    "cleanup_tree",
    "create_export_manager",
    "strip_images",
]
