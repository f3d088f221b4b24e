"""
BBCode Translator - converts between markup trees and the bracket-tag dialect.

Key behaviors:
- to_markup: tokenize and escape, then resolve tags in a fixed order
- to_dialect: walk a markup tree and recognise the structures to_markup emits
- Color, size and URL parameters go through the shared validators

Invariants:
- Tag resolution order is fixed: code, img, url, quote, list, color, size,
  bg, b, i, u, s, center, left, right
- Matching is non-greedy and does not balance nested same-name tags
- Text outside recognised tag tokens is always entity-escaped
- Unmatched tags are left as literal text; translation never raises

Known limitations:
- Hand-authored markup that is not in the shapes to_markup produces may not
  round-trip (e.g. <b> inside <p> loses the paragraph)
- The dialect has no escape for literal "[b]" text
"""

from __future__ import annotations

import html
import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from functools import partial

from src.domain import validators
from src.domain.markup import MarkupNode, NodeKind, flatten_text, parse_markup
from src.rules.models import TranslatorRules

logger = logging.getLogger(__name__)

_DEFAULTS = TranslatorRules()

# --- Configuration ---


@dataclass(frozen=True)
class TranslatorConfig:
    """Parameter resolution defaults for the dialect."""

    named_colors: dict[str, str] = field(default_factory=lambda: dict(_DEFAULTS.named_colors))
    default_color: str = _DEFAULTS.default_color
    default_size: str = _DEFAULTS.default_size
    default_size_unit: str = _DEFAULTS.default_size_unit
    url_placeholder: str = _DEFAULTS.url_placeholder
    blocked_url_schemes: tuple[str, ...] = tuple(_DEFAULTS.blocked_url_schemes)


DEFAULT_CONFIG = TranslatorConfig()


def build_translator_config(rules: TranslatorRules) -> TranslatorConfig:
    """Map the translator section of the rules file onto a config."""
    return TranslatorConfig(
        named_colors={name.lower(): value for name, value in rules.named_colors.items()},
        default_color=rules.default_color,
        default_size=rules.default_size,
        default_size_unit=rules.default_size_unit,
        url_placeholder=rules.url_placeholder,
        blocked_url_schemes=tuple(rules.blocked_url_schemes),
    )


# --- Diagnostics ---


@dataclass(frozen=True)
class TranslationWarning:
    """A dialect tag that could not be resolved."""

    code: str
    message: str
    path: str | None = None


# --- Parameter Resolution ---


def _attr(value: str) -> str:
    # Brackets and backslashes are encoded so attribute values stay inert to later passes.
    escaped = html.escape(value, quote=True).replace("\\", "&#92;")
    return escaped.replace("[", "&#91;").replace("]", "&#93;")


def _color(param: str | None, config: TranslatorConfig) -> str:
    value = html.unescape(param) if param else None
    return validators.resolve_color(value, config.named_colors, config.default_color)


def _size(param: str | None, config: TranslatorConfig) -> str:
    value = html.unescape(param) if param else None
    return validators.resolve_size(value, config.default_size, config.default_size_unit)


def _url(value: str | None, config: TranslatorConfig) -> str:
    raw = html.unescape(value).strip() if value else None
    return validators.resolve_url(raw, config.blocked_url_schemes, config.url_placeholder)


# --- Tag Rules ---

MarkupFn = Callable[[str, str | None, TranslatorConfig], str]
DialectFn = Callable[[str, str | None], str]


def _wrap_markup(
    open_tag: str, close_tag: str, content: str, param: str | None, config: TranslatorConfig
) -> str:
    return f"{open_tag}{content}{close_tag}"


def _color_markup(content: str, param: str | None, config: TranslatorConfig) -> str:
    return f'<span style="color:{_attr(_color(param, config))}">{content}</span>'


def _size_markup(content: str, param: str | None, config: TranslatorConfig) -> str:
    return f'<span style="font-size:{_attr(_size(param, config))}">{content}</span>'


def _bg_markup(content: str, param: str | None, config: TranslatorConfig) -> str:
    color = _attr(_color(param, config))
    return (
        f'<span style="background-color:{color}; padding: 0.2em 0.35em; '
        f'border-radius: 0.35em">{content}</span>'
    )


def _url_markup(content: str, param: str | None, config: TranslatorConfig) -> str:
    href = _url(param or content, config)
    return f'<a href="{_attr(href)}" rel="noopener nofollow">{content}</a>'


def _img_markup(content: str, param: str | None, config: TranslatorConfig) -> str:
    src = _url(content, config)
    return f'<img src="{_attr(src)}" alt="" style="max-width: 100%; height: auto;">'


def _code_markup(content: str, param: str | None, config: TranslatorConfig) -> str:
    # Brackets become entities so later passes leave code content alone.
    guarded = content.replace("[", "&#91;").replace("]", "&#93;")
    return f"<pre><code>{guarded}</code></pre>"


_ITEM_EDGE = re.compile(r"^(?:\s|\\n)+|(?:\s|\\n)+$")


def _list_markup(content: str, param: str | None, config: TranslatorConfig) -> str:
    items = [_ITEM_EDGE.sub("", item) for item in content.split("[*]")]
    list_items = "".join(f"<li>{item}</li>" for item in items if item)
    if param:
        return f'<ol type="{_attr(param)}">{list_items}</ol>'
    return f"<ul>{list_items}</ul>"


def _simple_dialect(name: str, content: str, param: str | None) -> str:
    if param:
        return f"[{name}={param}]{content}[/{name}]"
    return f"[{name}]{content}[/{name}]"


def _img_dialect(content: str, param: str | None) -> str:
    return f"[img]{content}[/img]"


def _list_dialect(content: str, param: str | None) -> str:
    return _simple_dialect("list", content, param)


def _default_pattern(name: str) -> re.Pattern[str]:
    return re.compile(rf"\[{name}(?:=([^\]]+))?\](.*?)\[/{name}\]")


@dataclass(frozen=True)
class TagRule:
    """One dialect tag: how it becomes markup and how it is written back."""

    name: str
    to_markup: MarkupFn
    to_dialect: DialectFn
    pattern: re.Pattern[str]
    takes_param: bool = True

    def replace(self, text: str, config: TranslatorConfig) -> str:
        """Replace every match of this tag in text, one non-recursive pass."""

        def substitute(match: re.Match[str]) -> str:
            if self.takes_param:
                param, content = match.group(1), match.group(2)
            else:
                param, content = None, match.group(1)
            return self.to_markup(content, param, config)

        return self.pattern.sub(substitute, text)


def _rule(name: str, to_markup: MarkupFn) -> TagRule:
    return TagRule(
        name=name,
        to_markup=to_markup,
        to_dialect=partial(_simple_dialect, name),
        pattern=_default_pattern(name),
    )


def _wrap_rule(name: str, open_tag: str, close_tag: str) -> TagRule:
    return _rule(name, partial(_wrap_markup, open_tag, close_tag))


TAG_ORDER: tuple[str, ...] = (
    "code",
    "img",
    "url",
    "quote",
    "list",
    "color",
    "size",
    "bg",
    "b",
    "i",
    "u",
    "s",
    "center",
    "left",
    "right",
)

TAG_RULES: tuple[TagRule, ...] = (
    _rule("code", _code_markup),
    TagRule(
        name="img",
        to_markup=_img_markup,
        to_dialect=_img_dialect,
        pattern=re.compile(r"\[img\](.*?)\[/img\]"),
        takes_param=False,
    ),
    _rule("url", _url_markup),
    _wrap_rule("quote", "<blockquote>", "</blockquote>"),
    TagRule(
        name="list",
        to_markup=_list_markup,
        to_dialect=_list_dialect,
        pattern=re.compile(r"\[list(?:=([1a]))?\](.*?)\[/list\]", re.DOTALL),
    ),
    _rule("color", _color_markup),
    _rule("size", _size_markup),
    _rule("bg", _bg_markup),
    _wrap_rule("b", "<strong>", "</strong>"),
    _wrap_rule("i", "<em>", "</em>"),
    _wrap_rule("u", '<span style="text-decoration: underline">', "</span>"),
    _wrap_rule("s", '<span style="text-decoration: line-through">', "</span>"),
    _wrap_rule("center", '<div style="text-align: center">', "</div>"),
    _wrap_rule("left", '<div style="text-align: left">', "</div>"),
    _wrap_rule("right", '<div style="text-align: right">', "</div>"),
)

RULES_BY_NAME: dict[str, TagRule] = {rule.name: rule for rule in TAG_RULES}

# "*" is the list item delimiter; it is a tag token but has no rule of its own.
KNOWN_TAG_NAMES: frozenset[str] = frozenset(TAG_ORDER) | {"*"}

TAG_TOKEN_PATTERN = re.compile(r"\[(/)?([^=\]\s]+)(?:=([^\]]+))?\]")


# --- Dialect -> Markup ---


def _escape_text(text: str) -> str:
    # Backslashes are encoded so a typed backslash-n is never read as a line marker.
    return html.escape(text, quote=True).replace("\\", "&#92;").replace("\n", "\\n")


def escape_dialect(text: str) -> str:
    """
    Phase 1: escape everything outside recognised tag tokens.

    Tag names and brackets pass through; parameter values are
    entity-escaped so they stay inert until a rule resolves them.
    """
    text = text.replace("\r\n", "\n")
    parts: list[str] = []
    current = 0

    for match in TAG_TOKEN_PATTERN.finditer(text):
        closing, name, param = match.groups()
        if name not in KNOWN_TAG_NAMES:
            continue
        if match.start() > current:
            parts.append(_escape_text(text[current : match.start()]))
        if closing:
            parts.append(f"[/{name}]")
        elif param is not None:
            parts.append(f"[{name}={_escape_text(param)}]")
        else:
            parts.append(f"[{name}]")
        current = match.end()

    if current < len(text):
        parts.append(_escape_text(text[current:]))

    return "".join(parts)


def find_unmatched_tags(converted: str) -> list[TranslationWarning]:
    """Report recognised tag tokens still present after resolution."""
    warnings: list[TranslationWarning] = []
    for match in TAG_TOKEN_PATTERN.finditer(converted):
        closing, name, _ = match.groups()
        if name not in KNOWN_TAG_NAMES:
            continue
        kind = "closing" if closing else "opening"
        warnings.append(
            TranslationWarning(
                code="unmatched_tag",
                message=f"Unmatched {kind} tag '[{'/' if closing else ''}{name}]' left as text",
                path=f"offset {match.start()}",
            )
        )
    return warnings


def dialect_to_html(
    text: str,
    config: TranslatorConfig = DEFAULT_CONFIG,
) -> tuple[str, list[TranslationWarning]]:
    """
    Convert dialect text to an HTML string.

    Returns:
        Tuple of (html, list of warnings)
    """
    if not text:
        return "", []

    converted = escape_dialect(text)

    for name in TAG_ORDER:
        converted = RULES_BY_NAME[name].replace(converted, config)

    warnings = find_unmatched_tags(converted)
    if warnings:
        logger.warning("Dialect translation left %d unmatched tag(s)", len(warnings))

    converted = converted.replace("\\n", "\n").replace("\n", "<br>")
    return converted, warnings


def to_markup(text: str, config: TranslatorConfig = DEFAULT_CONFIG) -> MarkupNode:
    """Convert dialect text to a markup tree."""
    converted, _ = dialect_to_html(text, config)
    return parse_markup(converted)


# --- Markup -> Dialect ---

# Elements with a direct structural match.
STRUCTURAL_MATCHES: dict[str, str] = {
    "strong": "b",
    "b": "b",
    "em": "i",
    "i": "i",
    "u": "u",
    "s": "s",
    "strike": "s",
    "del": "s",
    "blockquote": "quote",
}

# Elements that end a line when followed by more content.
BLOCK_ELEMENTS: frozenset[str] = frozenset(
    ["p", "div", "h1", "h2", "h3", "h4", "h5", "h6", "tr", "table", "hr"]
)

_ALIGNMENTS = {"center", "left", "right"}


def _style_declarations(style: str) -> list[tuple[str, str]]:
    declarations = []
    for declaration in style.split(";"):
        prop, _, value = declaration.partition(":")
        prop, value = prop.strip().lower(), value.strip()
        if prop and value:
            declarations.append((prop, value))
    return declarations


def recognise_styles(node: MarkupNode) -> list[tuple[str, str | None]]:
    """
    Recognise dialect tags expressed as inline styles.

    Returns (tag, param) pairs, outermost first.
    """
    found: list[tuple[str, str | None]] = []
    for prop, value in _style_declarations(node.attributes.get("style", "")):
        lowered = value.lower()
        if prop == "text-align" and lowered in _ALIGNMENTS:
            found.append((lowered, None))
        elif prop == "color":
            found.append(("color", value))
        elif prop == "background-color":
            found.append(("bg", value))
        elif prop == "font-size":
            found.append(("size", value))
        elif prop == "text-decoration":
            if "underline" in lowered:
                found.append(("u", None))
            if "line-through" in lowered:
                found.append(("s", None))
    return found


def _code_text(node: MarkupNode) -> str:
    if node.kind == NodeKind.TEXT:
        return node.text_content or ""
    if node.is_element and node.tag_name == "br":
        return "\n"
    return "".join(_code_text(child) for child in node.children)


def _children_to_dialect(children: list[MarkupNode]) -> str:
    parts: list[str] = []
    last = len(children) - 1
    for index, child in enumerate(children):
        part = node_to_dialect(child)
        if (
            child.is_element
            and child.tag_name in BLOCK_ELEMENTS
            and not recognise_styles(child)
            and index < last
            and part
            and not part.endswith("\n")
        ):
            part += "\n"
        parts.append(part)
    return "".join(parts)


def _list_to_dialect(node: MarkupNode) -> str:
    items = [
        _children_to_dialect(child.children)
        for child in node.children
        if child.is_element and child.tag_name == "li"
    ]
    param: str | None = None
    if node.tag_name == "ol":
        list_type = node.attributes.get("type", "1")
        param = list_type if list_type in ("1", "a") else "1"
    content = "".join(f"[*]{item}" for item in items)
    return RULES_BY_NAME["list"].to_dialect(content, param)


def node_to_dialect(node: MarkupNode) -> str:
    """Serialize one node (and its subtree) to dialect text."""
    if node.kind == NodeKind.TEXT:
        return node.text_content or ""
    if node.kind == NodeKind.ROOT:
        return _children_to_dialect(node.children)
    if node.kind != NodeKind.ELEMENT:
        return ""

    tag = node.tag_name or ""

    if tag == "br":
        return "\n"
    if tag == "img":
        src = node.attributes.get("src")
        return RULES_BY_NAME["img"].to_dialect(src, None) if src else ""
    if tag == "pre" or tag == "code":
        return RULES_BY_NAME["code"].to_dialect(_code_text(node), None)
    if tag in ("ul", "ol"):
        return _list_to_dialect(node)

    content = _children_to_dialect(node.children)

    if tag == "a" and node.attributes.get("href"):
        href = node.attributes["href"]
        param = None if href == flatten_text(node) else href
        content = RULES_BY_NAME["url"].to_dialect(content, param)
    elif tag in STRUCTURAL_MATCHES:
        content = RULES_BY_NAME[STRUCTURAL_MATCHES[tag]].to_dialect(content, None)

    for name, param in reversed(recognise_styles(node)):
        content = RULES_BY_NAME[name].to_dialect(content, param)

    return content


def to_dialect(tree: MarkupNode) -> str:
    """Convert a markup tree to dialect text."""
    return node_to_dialect(tree)


def html_to_dialect(markup: str) -> str:
    """Convert an HTML string to dialect text."""
    if not markup:
        return ""
    return to_dialect(parse_markup(markup))


# --- Service Class ---


class BBCodeTranslator:
    """
    Translator service bound to one configuration.
    """

    def __init__(self, config: TranslatorConfig | None = None) -> None:
        self._config = config or DEFAULT_CONFIG

    @property
    def config(self) -> TranslatorConfig:
        return self._config

    def to_markup(self, text: str) -> MarkupNode:
        return to_markup(text, self._config)

    def to_html(self, text: str) -> str:
        return dialect_to_html(text, self._config)[0]

    def to_html_with_warnings(self, text: str) -> tuple[str, list[TranslationWarning]]:
        return dialect_to_html(text, self._config)

    def to_dialect(self, tree: MarkupNode) -> str:
        return to_dialect(tree)

    def html_to_dialect(self, markup: str) -> str:
        return html_to_dialect(markup)


def create_translator(rules: TranslatorRules | None = None) -> BBCodeTranslator:
    """Create a BBCodeTranslator, optionally configured from rules."""
    if rules is None:
        return BBCodeTranslator()
    return BBCodeTranslator(build_translator_config(rules))
