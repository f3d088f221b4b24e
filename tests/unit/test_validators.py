"""
Tests for the shared color/size/URL validators.

Resolvers never raise and fall back to safe defaults; checkers return
booleans.
"""

from __future__ import annotations

import pytest

from src.domain import validators


class TestResolveColor:
    @pytest.mark.parametrize("value", ["#abc", "#A0B1C2"])
    def test_hex_kept_as_written(self, value: str) -> None:
        assert validators.resolve_color(value) == value

    def test_named_color_looked_up(self) -> None:
        assert validators.resolve_color("red") == "#ff0000"
        assert validators.resolve_color("Blue") == "#0000ff"

    @pytest.mark.parametrize("value", [None, "", "chartreuse", "#12", "expression(1)"])
    def test_unknown_falls_back_to_default(self, value: str | None) -> None:
        assert validators.resolve_color(value) == "#000000"


class TestResolveSize:
    def test_size_with_unit_kept(self) -> None:
        assert validators.resolve_size("2em") == "2em"
        assert validators.resolve_size("120%") == "120%"

    def test_bare_integer_gets_px(self) -> None:
        assert validators.resolve_size("18") == "18px"

    @pytest.mark.parametrize("value", [None, "", "big", "1.5em", "-4px"])
    def test_invalid_falls_back(self, value: str | None) -> None:
        assert validators.resolve_size(value) == "14px"


class TestResolveUrl:
    @pytest.mark.parametrize(
        "value",
        ["javascript:alert(1)", "JavaScript:alert(1)", " javascript:x", "data:text/html,x"],
    )
    def test_blocked_schemes_become_placeholder(self, value: str) -> None:
        assert validators.resolve_url(value) == "#"

    def test_other_urls_unchanged(self) -> None:
        assert validators.resolve_url("https://example.com/a?b=c") == "https://example.com/a?b=c"
        assert validators.resolve_url("/relative/path") == "/relative/path"

    def test_empty_becomes_placeholder(self) -> None:
        assert validators.resolve_url("") == "#"


class TestCssColor:
    @pytest.mark.parametrize(
        "value",
        [
            "#fff", "rgb(1, 2, 3)", "rgba(1,2,3,0.5)",
            "hsl(120, 50%, 50%)", "hsla(1,2%,3%,0.1)", "Red",
        ],
    )
    def test_valid(self, value: str) -> None:
        assert validators.is_valid_css_color(value)

    @pytest.mark.parametrize("value", [None, "", "url(x)", "expression(alert(1))", "teal"])
    def test_invalid(self, value: str | None) -> None:
        assert not validators.is_valid_css_color(value)


class TestSafeUrl:
    @pytest.mark.parametrize(
        "url",
        ["https://example.com", "/path", "page.html", "#anchor", "mailto:a@b.c"],
    )
    def test_safe(self, url: str) -> None:
        assert validators.is_safe_url(url)

    @pytest.mark.parametrize(
        "url",
        [
            "javascript:alert(1)",
            "JAVASCRIPT:alert(1)",
            "java\tscript:alert(1)",
            "vbscript:msgbox",
            "data:text/html;base64,xx",
            "file:///etc/passwd",
        ],
    )
    def test_dangerous(self, url: str) -> None:
        assert not validators.is_safe_url(url)

    def test_empty_is_unsafe(self) -> None:
        assert not validators.is_safe_url("")
        assert not validators.is_safe_url(None)
