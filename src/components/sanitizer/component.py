"""
Sanitizer component - allow-list filtering of structured markup.

Provides tree and string entry points. Malicious or malformed markup never
raises; it is degraded by unwrapping or omission.

Invariants:
- I1: Only allow-listed elements survive; others are unwrapped in place
- I2: Only allow-listed attributes and style declarations survive
- I3: href/src values with dangerous schemes are removed
- I4: Script-like content never reaches the output
"""

from __future__ import annotations

from ._impl import (
    DEFAULT_CONFIG,
    SanitizerConfig,
    SanitizerRemoval,
    build_sanitizer_config,
    sanitize_html,
    sanitize_tree,
)
from .models import (
    SanitizeHtmlInput,
    SanitizeHtmlOutput,
    SanitizeTreeInput,
    SanitizeTreeOutput,
)
from .ports import NotifierPort, RulesPort

REMOVAL_EVENT = "sanitizer_removed"


def _build_config(rules: RulesPort | None) -> SanitizerConfig:
    """Build sanitizer config from rules port."""
    if rules is None:
        return DEFAULT_CONFIG
    return build_sanitizer_config(rules.sanitizer)


def _report(removals: list[SanitizerRemoval], notifier: NotifierPort | None) -> None:
    if notifier is None or not removals:
        return
    notifier.notify(
        REMOVAL_EVENT,
        {
            "count": len(removals),
            "codes": sorted({removal.code for removal in removals}),
        },
    )


# --- Component Entry Points ---


def run_sanitize_tree(
    inp: SanitizeTreeInput,
    *,
    rules: RulesPort | None = None,
    notifier: NotifierPort | None = None,
) -> SanitizeTreeOutput:
    """
    Sanitize a markup tree.

    Args:
        inp: Input containing the tree to sanitize.
        rules: Optional rules port for configuration.
        notifier: Optional sink for removal diagnostics.

    Returns:
        SanitizeTreeOutput with a new, filtered tree.
    """
    tree, removals = sanitize_tree(inp.tree, _build_config(rules))
    _report(removals, notifier)
    return SanitizeTreeOutput(tree=tree, removals=removals, success=True)


def run_sanitize_html(
    inp: SanitizeHtmlInput,
    *,
    rules: RulesPort | None = None,
    notifier: NotifierPort | None = None,
) -> SanitizeHtmlOutput:
    """Sanitize an HTML string."""
    markup, removals = sanitize_html(inp.markup, _build_config(rules))
    _report(removals, notifier)
    return SanitizeHtmlOutput(markup=markup, removals=removals, success=True)


def run(
    inp: SanitizeTreeInput | SanitizeHtmlInput,
    *,
    rules: RulesPort | None = None,
    notifier: NotifierPort | None = None,
) -> SanitizeTreeOutput | SanitizeHtmlOutput:
    """
    Main entry point for the sanitizer component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, SanitizeTreeInput):
        return run_sanitize_tree(inp, rules=rules, notifier=notifier)
    elif isinstance(inp, SanitizeHtmlInput):
        return run_sanitize_html(inp, rules=rules, notifier=notifier)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
