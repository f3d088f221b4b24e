"""
HTML Sanitizer - allow-list filter over a markup tree.

Key behaviors:
- Disallowed elements are unwrapped: their children take their place
- Raw-content elements (script, style, ...) are dropped with their subtree
- Comments and other non-text, non-element nodes are removed
- Attributes are filtered per tag plus a global allow-list
- href/src values with dangerous schemes are removed
- Links that keep an href get rel/target defaults when absent
- Inline styles are filtered declaration by declaration

Invariants:
- sanitize(sanitize(x)) == sanitize(x)
- Children spliced in from an unwrapped element are filtered like any other
- The input tree is never mutated; a new tree is returned
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from src.domain import validators
from src.domain.markup import MarkupNode, NodeKind, parse_markup, serialize_markup
from src.rules.models import SanitizerRules

logger = logging.getLogger(__name__)

_DEFAULTS = SanitizerRules()

# --- Configuration ---


@dataclass(frozen=True)
class SanitizerConfig:
    """Sanitizer allow-lists and link defaults."""

    allowed_tags: frozenset[str] = field(
        default_factory=lambda: frozenset(_DEFAULTS.allowed_tags)
    )
    allowed_attributes: dict[str, frozenset[str]] = field(
        default_factory=lambda: {
            tag: frozenset(names) for tag, names in _DEFAULTS.allowed_attributes.items()
        }
    )
    allowed_styles: frozenset[str] = field(
        default_factory=lambda: frozenset(_DEFAULTS.allowed_styles)
    )
    forbidden_styles: tuple[str, ...] = tuple(_DEFAULTS.forbidden_styles)
    drop_tags: frozenset[str] = field(default_factory=lambda: frozenset(_DEFAULTS.drop_tags))
    dangerous_schemes: tuple[str, ...] = tuple(_DEFAULTS.dangerous_schemes)
    css_color_names: frozenset[str] = field(
        default_factory=lambda: frozenset(_DEFAULTS.css_color_names)
    )
    url_base: str = _DEFAULTS.url_base
    link_rel: str = _DEFAULTS.link_rel
    link_target: str = _DEFAULTS.link_target


DEFAULT_CONFIG = SanitizerConfig()


def build_sanitizer_config(rules: SanitizerRules) -> SanitizerConfig:
    """Map the sanitizer section of the rules file onto a config."""
    return SanitizerConfig(
        allowed_tags=frozenset(tag.lower() for tag in rules.allowed_tags),
        allowed_attributes={
            tag.lower(): frozenset(name.lower() for name in names)
            for tag, names in rules.allowed_attributes.items()
        },
        allowed_styles=frozenset(prop.lower() for prop in rules.allowed_styles),
        forbidden_styles=tuple(rule.lower() for rule in rules.forbidden_styles),
        drop_tags=frozenset(tag.lower() for tag in rules.drop_tags),
        dangerous_schemes=tuple(rules.dangerous_schemes),
        css_color_names=frozenset(name.lower() for name in rules.css_color_names),
        url_base=rules.url_base,
        link_rel=rules.link_rel,
        link_target=rules.link_target,
    )


# --- Diagnostics ---


@dataclass(frozen=True)
class SanitizerRemoval:
    """Something the sanitizer removed or rewrote."""

    code: str
    message: str
    path: str | None = None


# --- Styles ---


def clean_style(
    style: str,
    config: SanitizerConfig = DEFAULT_CONFIG,
    removals: list[SanitizerRemoval] | None = None,
    path: str | None = None,
) -> str | None:
    """
    Filter an inline style value.

    Returns the rejoined surviving declarations, or None when nothing
    survives so the caller can drop the attribute.
    """
    kept: list[str] = []

    def reject(declaration: str, reason: str) -> None:
        if removals is not None:
            removals.append(
                SanitizerRemoval(
                    code="stripped_style",
                    message=f"Style '{declaration}' removed: {reason}",
                    path=path,
                )
            )

    for declaration in style.split(";"):
        declaration = declaration.strip()
        if not declaration:
            continue

        prop, _, value = declaration.partition(":")
        prop = prop.strip()
        value = value.strip()
        if not prop or not value:
            reject(declaration, "malformed")
            continue

        normalized_prop = prop.lower()
        normalized_value = value.lower()

        if normalized_prop not in config.allowed_styles:
            reject(declaration, "property not allowed")
            continue

        normalized = f"{normalized_prop}:{normalized_value}"
        if any(forbidden in normalized for forbidden in config.forbidden_styles):
            reject(declaration, "forbidden value")
            continue

        if normalized_prop in ("color", "background-color"):
            if not validators.is_valid_css_color(normalized_value, config.css_color_names):
                reject(declaration, "invalid color")
                continue

        kept.append(f"{normalized_prop}: {value}")

    return "; ".join(kept) if kept else None


# --- Attributes ---


def is_safe_url(url: str | None, config: SanitizerConfig = DEFAULT_CONFIG) -> bool:
    """Check an href/src value against the configured dangerous schemes."""
    return validators.is_safe_url(url, config.dangerous_schemes, config.url_base)


def clean_attributes(
    tag: str,
    attributes: dict[str, str],
    config: SanitizerConfig = DEFAULT_CONFIG,
    removals: list[SanitizerRemoval] | None = None,
    path: str | None = None,
) -> dict[str, str]:
    """Filter an element's attributes; returns a new ordered mapping."""
    allowed = config.allowed_attributes.get(tag, frozenset()) | config.allowed_attributes.get(
        "*", frozenset()
    )
    cleaned: dict[str, str] = {}

    for raw_name, value in attributes.items():
        name = raw_name.lower()

        if name not in allowed:
            if removals is not None:
                removals.append(
                    SanitizerRemoval(
                        code="stripped_attribute",
                        message=f"Attribute '{name}' stripped from '{tag}'",
                        path=path,
                    )
                )
            continue

        if name in ("href", "src") and not is_safe_url(value, config):
            if removals is not None:
                removals.append(
                    SanitizerRemoval(
                        code="unsafe_url",
                        message=f"Unsafe URL in {name}: {value[:50]}",
                        path=path,
                    )
                )
            continue

        if name == "style":
            style = clean_style(value, config, removals, path)
            if style is None:
                if removals is not None:
                    removals.append(
                        SanitizerRemoval(
                            code="removed_style",
                            message=f"Empty style attribute removed from '{tag}'",
                            path=path,
                        )
                    )
                continue
            value = style

        cleaned[name] = value

    if tag == "a" and "href" in cleaned:
        cleaned.setdefault("rel", config.link_rel)
        cleaned.setdefault("target", config.link_target)

    return cleaned


# --- Tree Walk ---


def sanitize_tree(
    tree: MarkupNode,
    config: SanitizerConfig = DEFAULT_CONFIG,
) -> tuple[MarkupNode, list[SanitizerRemoval]]:
    """
    Sanitize a markup tree.

    Returns:
        Tuple of (sanitized tree, list of removals)
    """
    removals: list[SanitizerRemoval] = []

    def clean_children(children: list[MarkupNode], path: str) -> list[MarkupNode]:
        cleaned: list[MarkupNode] = []

        for index, child in enumerate(children):
            child_path = f"{path}[{index}]"

            if child.kind == NodeKind.TEXT:
                cleaned.append(MarkupNode.text(child.text_content or ""))
                continue

            if child.kind != NodeKind.ELEMENT:
                removals.append(
                    SanitizerRemoval(
                        code="dropped_node",
                        message=f"Node of kind '{child.kind.value}' removed",
                        path=child_path,
                    )
                )
                continue

            tag = (child.tag_name or "").lower()

            if tag in config.drop_tags:
                removals.append(
                    SanitizerRemoval(
                        code="dropped_element",
                        message=f"Element '{tag}' removed with its content",
                        path=child_path,
                    )
                )
                continue

            if tag not in config.allowed_tags:
                removals.append(
                    SanitizerRemoval(
                        code="unwrapped_element",
                        message=f"Element '{tag}' unwrapped",
                        path=child_path,
                    )
                )
                cleaned.extend(clean_children(child.children, f"{child_path}.{tag}"))
                continue

            element = MarkupNode.element(
                tag, clean_attributes(tag, child.attributes, config, removals, child_path)
            )
            element.children = clean_children(child.children, f"{child_path}.{tag}")
            cleaned.append(element)

        return cleaned

    if tree.kind == NodeKind.ELEMENT:
        # A bare element is sanitized as the only child of a fresh root.
        result = MarkupNode.root(clean_children([tree], "root"))
    elif tree.kind == NodeKind.ROOT:
        result = MarkupNode.root(clean_children(tree.children, "root"))
    else:
        result = MarkupNode.root(clean_children([tree], "root"))

    if removals:
        logger.debug("Sanitizer removed or rewrote %d item(s)", len(removals))
    return result, removals


def sanitize_html(
    markup: str,
    config: SanitizerConfig = DEFAULT_CONFIG,
) -> tuple[str, list[SanitizerRemoval]]:
    """Parse, sanitize and serialize an HTML string."""
    if not markup:
        return "", []
    tree, removals = sanitize_tree(parse_markup(markup), config)
    return serialize_markup(tree), removals


# --- Service Class ---


class HTMLSanitizer:
    """
    Sanitizer service bound to one configuration.
    """

    def __init__(self, config: SanitizerConfig | None = None) -> None:
        self._config = config or DEFAULT_CONFIG

    @property
    def config(self) -> SanitizerConfig:
        return self._config

    def sanitize(self, tree: MarkupNode) -> MarkupNode:
        return sanitize_tree(tree, self._config)[0]

    def sanitize_with_report(
        self, tree: MarkupNode
    ) -> tuple[MarkupNode, list[SanitizerRemoval]]:
        return sanitize_tree(tree, self._config)

    def sanitize_html(self, markup: str) -> str:
        return sanitize_html(markup, self._config)[0]

    def is_safe_url(self, url: str | None) -> bool:
        return is_safe_url(url, self._config)

    def is_valid_color(self, value: str | None) -> bool:
        return validators.is_valid_css_color(value, self._config.css_color_names)


def create_sanitizer(rules: SanitizerRules | None = None) -> HTMLSanitizer:
    """Create an HTMLSanitizer, optionally configured from rules."""
    if rules is None:
        return HTMLSanitizer()
    return HTMLSanitizer(build_sanitizer_config(rules))
