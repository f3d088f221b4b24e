"""
Color, size and URL validation shared by the translator and the sanitizer.

All functions are pure. Resolvers never fail: invalid input resolves to a
safe default. Checkers return booleans and leave the decision to the caller.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from urllib.parse import urljoin, urlsplit

HEX_COLOR_PATTERN = re.compile(r"^#([0-9a-f]{3}){1,2}$", re.IGNORECASE)
RGB_COLOR_PATTERN = re.compile(
    r"^rgba?\(\s*\d+\s*,\s*\d+\s*,\s*\d+\s*(,\s*[\d.]+\s*)?\)$", re.IGNORECASE
)
HSL_COLOR_PATTERN = re.compile(
    r"^hsla?\(\s*\d+\s*,\s*\d+%\s*,\s*\d+%\s*(,\s*[\d.]+\s*)?\)$", re.IGNORECASE
)
SIZE_WITH_UNIT_PATTERN = re.compile(r"^\d+(px|em|rem|%)$")
BARE_SIZE_PATTERN = re.compile(r"^\d+$")

# Lookup used when resolving dialect color parameters.
DIALECT_COLOR_NAMES: dict[str, str] = {
    "red": "#ff0000",
    "green": "#008000",
    "blue": "#0000ff",
    "black": "#000000",
    "white": "#ffffff",
    "yellow": "#ffff00",
}

# Named colors accepted in inline styles.
CSS_COLOR_NAMES: frozenset[str] = frozenset(
    [
        "black",
        "white",
        "red",
        "green",
        "blue",
        "yellow",
        "orange",
        "purple",
        "pink",
        "brown",
        "gray",
        "grey",
    ]
)

DEFAULT_COLOR = "#000000"
DEFAULT_SIZE = "14px"
DEFAULT_SIZE_UNIT = "px"
URL_PLACEHOLDER = "#"
DIALECT_BLOCKED_SCHEMES: tuple[str, ...] = ("javascript:", "data:")
DANGEROUS_SCHEMES: tuple[str, ...] = ("javascript:", "vbscript:", "data:", "file:")
DEFAULT_URL_BASE = "https://editor.invalid/"

# Browsers drop these before reading a URL scheme.
_URL_IGNORED_CHARS = re.compile(r"[\x00-\x20\x7f]")


# --- Resolvers (dialect parameters) ---


def resolve_color(
    value: str | None,
    named: Mapping[str, str] = DIALECT_COLOR_NAMES,
    default: str = DEFAULT_COLOR,
) -> str:
    """
    Resolve a dialect color parameter.

    Hex colors are kept as written, names are looked up, anything else
    falls back to the default.
    """
    if not value:
        return default
    if HEX_COLOR_PATTERN.match(value):
        return value
    return named.get(value.lower(), default)


def resolve_size(
    value: str | None,
    default: str = DEFAULT_SIZE,
    unit: str = DEFAULT_SIZE_UNIT,
) -> str:
    """Resolve a dialect size parameter; bare integers get the default unit."""
    if not value:
        return default
    if SIZE_WITH_UNIT_PATTERN.match(value):
        return value
    if BARE_SIZE_PATTERN.match(value):
        return value + unit
    return default


def resolve_url(
    value: str | None,
    blocked: Iterable[str] = DIALECT_BLOCKED_SCHEMES,
    placeholder: str = URL_PLACEHOLDER,
) -> str:
    """
    Resolve a dialect URL.

    Blocked schemes become the placeholder; every other value is returned
    unchanged. This is a first line of defence only; the sanitizer makes
    the final decision on href and src values.
    """
    if not value:
        return placeholder
    if _URL_IGNORED_CHARS.sub("", value).lower().startswith(tuple(blocked)):
        return placeholder
    return value


# --- Checkers (sanitizer) ---


def is_valid_css_color(value: str | None, names: Iterable[str] = CSS_COLOR_NAMES) -> bool:
    """Check hex, rgb()/rgba(), hsl()/hsla() or a named color."""
    if not value:
        return False
    if HEX_COLOR_PATTERN.match(value):
        return True
    if RGB_COLOR_PATTERN.match(value):
        return True
    if HSL_COLOR_PATTERN.match(value):
        return True
    return value.lower() in set(names)


def is_safe_url(
    url: str | None,
    dangerous: Iterable[str] = DANGEROUS_SCHEMES,
    base: str = DEFAULT_URL_BASE,
) -> bool:
    """
    Check a URL against dangerous schemes.

    The value is resolved against a base so relative paths are accepted.
    An empty value is unsafe; a value that cannot be parsed is treated as
    safe (relative-path fail-open).
    """
    if not url:
        return False

    candidate = _URL_IGNORED_CHARS.sub("", url)
    try:
        scheme = urlsplit(urljoin(base, candidate)).scheme.lower()
    except ValueError:
        return True

    if not scheme:
        return True
    return not any(scheme + ":" == proto.lower() for proto in dangerous)
