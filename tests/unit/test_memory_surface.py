"""
Tests for the in-memory editing surface.

Each command kind is checked against the markup it leaves behind and the
selection it leaves the caret at.
"""

from __future__ import annotations

import pytest

from src.adapters.memory_surface import ALIGNMENT_STYLES, InMemorySurface
from src.domain.errors import UnsupportedCommandError
from src.domain.markup import Selection


class TestSurfacePort:
    def test_round_trips_markup(self) -> None:
        surface = InMemorySurface("<p>a <b>b</b></p>")

        assert surface.get_current_markup() == "<p>a <b>b</b></p>"
        assert surface.text == "a b"

    def test_selection_clamped_to_text(self) -> None:
        surface = InMemorySurface("<p>abc</p>")

        surface.apply_selection_offsets(Selection(-2, 10))

        assert surface.get_selection_offsets() == Selection(0, 3)

    def test_apply_markup_clamps_selection(self) -> None:
        surface = InMemorySurface("<p>abcdef</p>", Selection(4, 6))

        surface.apply_markup("<p>ab</p>")

        assert surface.get_selection_offsets() == Selection(2, 2)

    def test_tree_is_a_copy(self) -> None:
        surface = InMemorySurface("<p>abc</p>")

        surface.tree.children.clear()

        assert surface.get_current_markup() == "<p>abc</p>"

    def test_unknown_kind_raises(self) -> None:
        surface = InMemorySurface("<p>abc</p>")

        with pytest.raises(UnsupportedCommandError):
            surface.perform("teleport", {})


class TestFormat:
    @pytest.mark.parametrize(
        "command,tag",
        [("bold", "strong"), ("italic", "em"), ("underline", "u"), ("strikeThrough", "s")],
    )
    def test_wraps_selection(self, command: str, tag: str) -> None:
        surface = InMemorySurface("<p>hello world</p>")
        surface.select(6, 11)

        surface.perform("format", {"command": command})

        assert surface.get_current_markup() == f"<p>hello <{tag}>world</{tag}></p>"

    def test_fore_color_uses_styled_span(self) -> None:
        surface = InMemorySurface("<p>abc</p>")
        surface.select(0, 1)

        surface.perform("format", {"command": "foreColor", "value": "#ff0000"})

        assert surface.get_current_markup() == '<p><span style="color: #ff0000">a</span>bc</p>'

    def test_collapsed_selection_changes_nothing(self) -> None:
        surface = InMemorySurface("<p>abc</p>")
        surface.select(1)

        surface.perform("format", {"command": "bold"})

        assert surface.get_current_markup() == "<p>abc</p>"

    def test_unknown_format_raises(self) -> None:
        surface = InMemorySurface("<p>abc</p>")

        with pytest.raises(UnsupportedCommandError):
            surface.perform("format", {"command": "blink"})


class TestInsertAndDelete:
    def test_insert_replaces_selection(self) -> None:
        surface = InMemorySurface("<p>hello world</p>")
        surface.select(0, 5)

        surface.perform("insert_html", {"html": "<em>bye</em>"})

        assert surface.get_current_markup() == "<p><em>bye</em> world</p>"
        assert surface.get_selection_offsets() == Selection(3, 3)

    def test_insert_without_selection_appends(self) -> None:
        surface = InMemorySurface("<p>abc</p>")

        surface.perform("insert_html", {"html": "d"})

        assert surface.get_current_markup() == "<p>abcd</p>"

    def test_insert_into_empty_document(self) -> None:
        surface = InMemorySurface()

        surface.perform("insert_html", {"html": "<p>new</p>"})

        assert surface.get_current_markup() == "<p>new</p>"

    def test_delete_selection(self) -> None:
        surface = InMemorySurface("<p>abcdef</p>")
        surface.select(1, 3)

        surface.perform("delete", {})

        assert surface.get_current_markup() == "<p>adef</p>"
        assert surface.get_selection_offsets() == Selection(1, 1)

    def test_delete_collapsed_removes_previous_character(self) -> None:
        surface = InMemorySurface("<p>abc</p>")
        surface.select(2)

        surface.perform("delete", {})

        assert surface.get_current_markup() == "<p>ac</p>"

    def test_delete_at_start_is_noop(self) -> None:
        surface = InMemorySurface("<p>abc</p>")
        surface.select(0)

        surface.perform("delete", {})

        assert surface.get_current_markup() == "<p>abc</p>"


class TestStylesAndPresets:
    def test_style_wraps_in_span(self) -> None:
        surface = InMemorySurface("<p>abc</p>")
        surface.select(1, 2)

        surface.perform("style", {"style": "font-size: 18px"})

        assert surface.get_current_markup() == '<p>a<span style="font-size: 18px">b</span>c</p>'

    def test_inline_preset(self) -> None:
        surface = InMemorySurface("<p>abc</p>")
        surface.select(0, 3)

        surface.perform("preset", {"css_class": "preset-x", "style": "color: red;"})

        assert surface.get_current_markup() == (
            '<p><span class="preset-x" style="color: red;">abc</span></p>'
        )

    def test_block_preset_wraps_containing_block(self) -> None:
        surface = InMemorySurface("<p>one</p><p>two</p>")
        surface.select(4)

        surface.perform("preset", {"css_class": "preset-card", "style": "", "block": True})

        assert surface.get_current_markup() == (
            '<p>one</p><div class="preset-card" style=""><p>two</p></div>'
        )


class TestImages:
    MARKUP = (
        '<p>a</p><div class="image-wrapper" data-image-id="img_1" style="width: 10px">'
        '<img src="a.png"></div><p>b</p>'
    )

    def test_remove_image(self) -> None:
        surface = InMemorySurface(self.MARKUP)

        surface.perform("remove_image", {"image_id": "img_1"})

        assert surface.get_current_markup() == "<p>a</p><p>b</p>"

    def test_remove_unknown_image_changes_nothing(self) -> None:
        surface = InMemorySurface(self.MARKUP)

        surface.perform("remove_image", {"image_id": "img_2"})

        assert surface.get_current_markup() == self.MARKUP

    @pytest.mark.parametrize("alignment", ["left", "center", "right"])
    def test_align_image(self, alignment: str) -> None:
        surface = InMemorySurface(self.MARKUP)

        surface.perform("image_align", {"image_id": "img_1", "alignment": alignment})

        expected = f"width: 10px; {ALIGNMENT_STYLES[alignment]}"
        assert f'style="{expected}"' in surface.get_current_markup()

    def test_realign_replaces_previous_alignment(self) -> None:
        surface = InMemorySurface(self.MARKUP)

        surface.perform("image_align", {"image_id": "img_1", "alignment": "left"})
        surface.perform("image_align", {"image_id": "img_1", "alignment": "right"})

        markup = surface.get_current_markup()
        assert "float: right" in markup
        assert "float: left" not in markup

    def test_unknown_alignment_raises(self) -> None:
        surface = InMemorySurface(self.MARKUP)

        with pytest.raises(UnsupportedCommandError):
            surface.perform("image_align", {"image_id": "img_1", "alignment": "justify"})
