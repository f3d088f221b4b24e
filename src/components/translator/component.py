"""
Translator component - structured markup <-> bracket-tag dialect.

Invariants:
- I1: Dialect text outside recognised tags is always escaped
- I2: Tags resolve in a fixed order, one non-recursive pass per tag
- I3: Color/size/URL parameters resolve to safe values, never raise
- I4: Unmatched tags stay literal text and are reported as warnings
"""

from __future__ import annotations

from src.domain.markup import parse_markup

from ._impl import (
    DEFAULT_CONFIG,
    TranslatorConfig,
    build_translator_config,
    dialect_to_html,
    to_dialect,
)
from .models import ToDialectInput, ToDialectOutput, ToMarkupInput, ToMarkupOutput
from .ports import NotifierPort, RulesPort

WARNING_EVENT = "translation_warning"


def _build_config(rules: RulesPort | None) -> TranslatorConfig:
    """Build translator config from rules port."""
    if rules is None:
        return DEFAULT_CONFIG
    return build_translator_config(rules.translator)


# --- Component Entry Points ---


def run_to_markup(
    inp: ToMarkupInput,
    *,
    rules: RulesPort | None = None,
    notifier: NotifierPort | None = None,
) -> ToMarkupOutput:
    """
    Convert dialect text to a markup tree.

    Args:
        inp: Input containing the dialect text.
        rules: Optional rules port for configuration.
        notifier: Optional sink for unmatched-tag warnings.

    Returns:
        ToMarkupOutput with the tree, its HTML and any warnings.
    """
    markup, warnings = dialect_to_html(inp.text, _build_config(rules))

    if warnings and notifier is not None:
        notifier.notify(
            WARNING_EVENT,
            {"count": len(warnings), "messages": [w.message for w in warnings]},
        )

    return ToMarkupOutput(
        tree=parse_markup(markup),
        markup=markup,
        warnings=warnings,
        success=True,
    )


def run_to_dialect(inp: ToDialectInput) -> ToDialectOutput:
    """Convert a markup tree to dialect text."""
    return ToDialectOutput(text=to_dialect(inp.tree), success=True)


def run(
    inp: ToMarkupInput | ToDialectInput,
    *,
    rules: RulesPort | None = None,
    notifier: NotifierPort | None = None,
) -> ToMarkupOutput | ToDialectOutput:
    """
    Main entry point for the translator component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, ToMarkupInput):
        return run_to_markup(inp, rules=rules, notifier=notifier)
    elif isinstance(inp, ToDialectInput):
        return run_to_dialect(inp)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
