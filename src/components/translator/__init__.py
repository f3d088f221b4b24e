"""
Translator component - bracket-tag dialect (BBCode) <-> structured markup.
"""

from ._impl import (
    DEFAULT_CONFIG,
    RULES_BY_NAME,
    TAG_ORDER,
    TAG_RULES,
    BBCodeTranslator,
    TagRule,
    TranslationWarning,
    TranslatorConfig,
    build_translator_config,
    create_translator,
    dialect_to_html,
    escape_dialect,
    html_to_dialect,
    recognise_styles,
    to_dialect,
    to_markup,
)
from .component import (
    WARNING_EVENT,
    run,
    run_to_dialect,
    run_to_markup,
)
from .models import (
    ToDialectInput,
    ToDialectOutput,
    ToMarkupInput,
    ToMarkupOutput,
)
from .ports import NotifierPort, RulesPort

__all__ = [
    # Entry points
    "run",
    "run_to_dialect",
    "run_to_markup",
    "WARNING_EVENT",
    # Input models
    "ToDialectInput",
    "ToMarkupInput",
    # Output models
    "ToDialectOutput",
    "ToMarkupOutput",
    "TranslationWarning",
    # Ports
    "NotifierPort",
    "RulesPort",
    # Service
    "DEFAULT_CONFIG",
    "RULES_BY_NAME",
    "TAG_ORDER",
    "TAG_RULES",
    "BBCodeTranslator",
    "TagRule",
    "TranslatorConfig",
    "build_translator_config",
    "create_translator",
    "dialect_to_html",
    "escape_dialect",
    "html_to_dialect",
    "recognise_styles",
    "to_dialect",
    "to_markup",
]
