"""
Presets component - named style bundles for inline and block content.
"""

from ._impl import (
    PRESET_COMMAND,
    StylePresets,
    camel_to_kebab,
    create_presets,
    default_presets,
    generate_css,
    kebab_to_camel,
    parse_styles,
    styles_to_string,
)
from .component import run, run_apply, run_create
from .models import ApplyPresetInput, CreatePresetInput, PresetOutput
from .ports import NotifierPort

__all__ = [
    # Entry points
    "run",
    "run_apply",
    "run_create",
    # Input models
    "ApplyPresetInput",
    "CreatePresetInput",
    # Output models
    "PresetOutput",
    # Ports
    "NotifierPort",
    # Service
    "PRESET_COMMAND",
    "StylePresets",
    "camel_to_kebab",
    "create_presets",
    "default_presets",
    "generate_css",
    "kebab_to_camel",
    "parse_styles",
    "styles_to_string",
]
