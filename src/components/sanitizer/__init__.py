"""
Sanitizer component - allow-list filter for structured markup.
"""

from ._impl import (
    DEFAULT_CONFIG,
    HTMLSanitizer,
    SanitizerConfig,
    SanitizerRemoval,
    build_sanitizer_config,
    clean_attributes,
    clean_style,
    create_sanitizer,
    is_safe_url,
    sanitize_html,
    sanitize_tree,
)
from .component import (
    REMOVAL_EVENT,
    run,
    run_sanitize_html,
    run_sanitize_tree,
)
from .models import (
    SanitizeHtmlInput,
    SanitizeHtmlOutput,
    SanitizeTreeInput,
    SanitizeTreeOutput,
)
from .ports import NotifierPort, RulesPort

__all__ = [
    # Entry points
    "run",
    "run_sanitize_html",
    "run_sanitize_tree",
    "REMOVAL_EVENT",
    # Input models
    "SanitizeHtmlInput",
    "SanitizeTreeInput",
    # Output models
    "SanitizeHtmlOutput",
    "SanitizeTreeOutput",
    "SanitizerRemoval",
    # Ports
    "NotifierPort",
    "RulesPort",
    # Service
    "DEFAULT_CONFIG",
    "HTMLSanitizer",
    "SanitizerConfig",
    "build_sanitizer_config",
    "clean_attributes",
    "clean_style",
    "create_sanitizer",
    "is_safe_url",
    "sanitize_html",
    "sanitize_tree",
]
