"""
Tests for the export manager.

Test assertions:
- Exported HTML is sanitized, cleaned and prefixed per the export options
- Unknown formats raise UnsupportedFormatError
- Settings documents round-trip and carry a clock timestamp
- Malformed settings documents raise InvalidSettingsError and change nothing
"""

from __future__ import annotations

import json

import pytest

from src.adapters.clock import FixedClock
from src.adapters.events import EventBus
from src.adapters.memory_surface import InMemorySurface
from src.components.export import (
    ExportManager,
    GetContentInput,
    ImportSettingsInput,
    SetContentInput,
    cleanup_html,
    run,
)
from src.components.history import HistoryEngine
from src.components.images import ImageRegistry
from src.components.presets import StylePresets
from src.domain.errors import InvalidSettingsError, UnsupportedFormatError

WRAPPED_IMAGE = (
    '<p>a</p><div class="image-wrapper selected" data-image-id="img_1" '
    'contenteditable="false"><img src="a.png" alt=""></div>'
)

# --- Fixtures ---


@pytest.fixture
def presets(history: HistoryEngine, events: EventBus) -> StylePresets:
    return StylePresets(history, events, id_factory=lambda: "custom_1")


@pytest.fixture
def manager(
    surface: InMemorySurface,
    history: HistoryEngine,
    presets: StylePresets,
    events: EventBus,
    clock: FixedClock,
) -> ExportManager:
    return ExportManager(
        surface,
        presets=presets,
        images=ImageRegistry(history, events),
        notifier=events,
        clock=clock,
    )


# --- Export ---


class TestGetContent:
    def test_html(self, manager: ExportManager, events: EventBus) -> None:
        assert manager.get_content("html") == "<p>hello world</p>"
        assert events.events_named("export")[0].payload == {
            "format": "html",
            "content": "<p>hello world</p>",
        }

    def test_html_is_sanitized(self, manager: ExportManager, surface: InMemorySurface) -> None:
        surface.apply_markup('<p onclick="x()">hi<script>bad()</script></p>')

        assert manager.get_html() == "<p>hi</p>"

    def test_sanitize_can_be_switched_off(
        self, manager: ExportManager, surface: InMemorySurface
    ) -> None:
        surface.apply_markup('<p onclick="x()">hi</p>')

        assert manager.get_html({"sanitize": False}) == '<p onclick="x()">hi</p>'

    def test_bbcode(self, manager: ExportManager, surface: InMemorySurface) -> None:
        surface.apply_markup("<p><strong>bold</strong> move</p>")

        assert manager.get_content("bbcode") == "[b]bold[/b] move"

    def test_bbcode_never_has_style_block(self, manager: ExportManager) -> None:
        assert "<style>" not in manager.get_bbcode({"includeStyles": True})

    def test_text(self, manager: ExportManager, surface: InMemorySurface) -> None:
        surface.apply_markup("<p>a <em>b</em></p><p>c</p>")

        assert manager.get_content("text") == "a bc"

    def test_text_preserve_lines(self, manager: ExportManager, surface: InMemorySurface) -> None:
        surface.apply_markup("<pre>a\n\n\n\nb</pre>")

        assert manager.get_text({"preserveLines": True}) == "a\n\nb"
        assert manager.get_text() == "a\n\n\n\nb"

    def test_unknown_format(self, manager: ExportManager) -> None:
        with pytest.raises(UnsupportedFormatError):
            manager.get_content("pdf")


class TestExportOptions:
    def test_include_styles(self, manager: ExportManager) -> None:
        html = manager.get_html({"includeStyles": True})

        assert html.startswith("<style>.preset-neutral {")
        assert html.endswith("</style>\n<p>hello world</p>")

    def test_cleanup_strips_editor_markup(
        self, manager: ExportManager, surface: InMemorySurface
    ) -> None:
        surface.apply_markup(WRAPPED_IMAGE)

        html = manager.get_html({"sanitize": False, "cleanup": True})

        assert html == '<p>a</p><div><img src="a.png" alt=""></div>'

    def test_sanitize_drops_wrapper_attributes(
        self, manager: ExportManager, surface: InMemorySurface
    ) -> None:
        surface.apply_markup(WRAPPED_IMAGE)

        html = manager.get_html()

        assert "data-image-id" not in html
        assert "contenteditable" not in html
        assert '<img src="a.png" alt="">' in html

    def test_preserve_images_off(self, manager: ExportManager, surface: InMemorySurface) -> None:
        surface.apply_markup(WRAPPED_IMAGE)

        assert manager.get_html({"preserveImages": False}) == "<p>a</p>"

    def test_options_persist(self, manager: ExportManager) -> None:
        manager.set_export_options(sanitize=False, cleanup=True)

        options = manager.get_export_options()
        assert options.sanitize is False
        assert options.cleanup is True
        assert options.include_styles is False

    def test_call_options_do_not_persist(self, manager: ExportManager) -> None:
        manager.get_html({"includeStyles": True})

        assert manager.get_export_options().include_styles is False

    def test_invalid_options(self, manager: ExportManager) -> None:
        with pytest.raises(InvalidSettingsError):
            manager.get_html({"format": "pdf"})


def test_cleanup_html_collapses_whitespace() -> None:
    assert cleanup_html("<p>a\n\n   b</p>  ") == "<p>a b</p>"


# --- Import ---


class TestSetContent:
    def test_html_is_sanitized(self, manager: ExportManager, surface: InMemorySurface) -> None:
        manager.set_content("<p>a<script>x()</script></p>")

        assert surface.get_current_markup() == "<p>a</p>"

    def test_bbcode(self, manager: ExportManager, surface: InMemorySurface) -> None:
        manager.set_content("[b]x[/b]", "bbcode")

        assert surface.get_current_markup() == "<strong>x</strong>"

    def test_text_is_escaped(self, manager: ExportManager, surface: InMemorySurface) -> None:
        manager.set_content("a <b> c", "text")

        assert surface.get_current_markup() == "a &lt;b&gt; c"
        assert surface.text == "a <b> c"

    def test_emits_content_imported(self, manager: ExportManager, events: EventBus) -> None:
        manager.set_content("x", "text")

        assert events.events_named("content_imported")[0].payload == {
            "format": "text",
            "content": "x",
        }

    def test_unknown_format(self, manager: ExportManager, surface: InMemorySurface) -> None:
        with pytest.raises(UnsupportedFormatError):
            manager.set_content("x", "rtf")

        assert surface.get_current_markup() == "<p>hello world</p>"


# --- Settings ---


class TestSettings:
    def test_export_document(self, manager: ExportManager, presets: StylePresets) -> None:
        presets.create_custom_preset("Loud", {"color": "red"})

        document = json.loads(manager.export_settings())

        assert document["content"] == "<p>hello world</p>"
        assert document["metadata"]["exportedAt"].startswith("2026-01-02T03:04:05")
        assert document["metadata"]["version"] == "1.0"
        assert document["exportOptions"]["includeStyles"] is False
        assert document["presets"]["custom"]["custom_1"]["class"] == "preset-custom_1"
        assert document["images"] == []

    def test_round_trip(
        self, manager: ExportManager, presets: StylePresets, events: EventBus, clock: FixedClock
    ) -> None:
        presets.create_custom_preset("Loud", {"color": "red"})
        manager.set_export_options(includeStyles=True)
        document = manager.export_settings()

        target_surface = InMemorySurface()
        target_history = HistoryEngine(target_surface)
        target_presets = StylePresets(target_history)
        target = ExportManager(target_surface, presets=target_presets, notifier=events, clock=clock)

        state = target.import_settings(document)

        assert target_surface.get_current_markup() == "<p>hello world</p>"
        assert target.get_export_options().include_styles is True
        assert target_presets.get_preset("custom_1").name == "Loud"
        assert state.metadata is not None
        assert events.events_named("settings_imported")[-1].payload == {"version": "1.0"}

    def test_import_accepts_dict(self, manager: ExportManager, surface: InMemorySurface) -> None:
        manager.import_settings({"content": "<p>from dict</p>"})

        assert surface.get_current_markup() == "<p>from dict</p>"

    @pytest.mark.parametrize("document", ["{not json", '{"images": "nope"}', "[]"])
    def test_malformed_document(
        self, manager: ExportManager, surface: InMemorySurface, document: str
    ) -> None:
        with pytest.raises(InvalidSettingsError):
            manager.import_settings(document)

        assert surface.get_current_markup() == "<p>hello world</p>"


# --- Component ---


class TestComponent:
    def test_get_and_set(self, manager: ExportManager) -> None:
        assert run(SetContentInput(content="[i]x[/i]", format="bbcode"), manager=manager).success

        result = run(GetContentInput(format="bbcode"), manager=manager)
        assert result.content == "[i]x[/i]"

    def test_unknown_format_reported(self, manager: ExportManager) -> None:
        result = run(GetContentInput(format="pdf"), manager=manager)

        assert not result.success
        assert result.errors

    def test_bad_settings_reported(self, manager: ExportManager) -> None:
        result = run(ImportSettingsInput(document="nope"), manager=manager)

        assert not result.success
