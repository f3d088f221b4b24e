"""
Editor session - one document seen through three views.

Wires the surface, the history engine, the translator, the sanitizer, the
export manager, presets and images together, and keeps the HTML and BBCode
views in step with the visual document.

Key behaviors:
- Modes are visual, html and bbcode; switching refreshes the target view
- In visual mode every change re-syncs the HTML view (sanitized) and the
  BBCode view
- Formatting commands only run in visual mode
- Every change marks the session dirty and emits "changed"
- destroy() clears the history and drops event listeners
"""

from __future__ import annotations

import logging
from typing import Any

from src.adapters.events import EventBus
from src.adapters.memory_surface import InMemorySurface
from src.components.export import ExportManager, create_export_manager
from src.components.history import HistoryEngine, create_history
from src.components.images import ImageRegistry
from src.components.presets import StylePresets
from src.components.sanitizer import HTMLSanitizer, create_sanitizer
from src.components.translator import BBCodeTranslator, create_translator
from src.core.ports.events import NotifierPort
from src.core.ports.surface import SurfacePort
from src.core.ports.time import TimePort
from src.domain.entities import EDITOR_MODES, ExportOptions, ImageMetadata, PersistedState
from src.domain.errors import UnsupportedModeError
from src.domain.markup import flatten_text, parse_markup
from src.rules.models import EditorRules

logger = logging.getLogger(__name__)

FORMAT_COMMAND = "format"


class EditorSession:
    """Composition root for one editor instance."""

    def __init__(
        self,
        surface: SurfacePort | None = None,
        *,
        rules: EditorRules | None = None,
        notifier: NotifierPort | None = None,
        clock: TimePort | None = None,
    ) -> None:
        rules = rules or EditorRules()
        self.surface: SurfacePort = surface or InMemorySurface()
        self.events: NotifierPort = notifier or EventBus()

        self.sanitizer: HTMLSanitizer = create_sanitizer(rules.sanitizer)
        self.translator: BBCodeTranslator = create_translator(rules.translator)
        self.history: HistoryEngine = create_history(self.surface, self.events, rules.history)
        self.presets = StylePresets(self.history, self.events)
        self.images = ImageRegistry(self.history, self.events)
        self.exporter: ExportManager = create_export_manager(
            self.surface,
            rules.export,
            sanitizer=self.sanitizer,
            translator=self.translator,
            presets=self.presets,
            images=self.images,
            notifier=self.events,
            clock=clock,
        )

        self._mode = "visual"
        self._html_view = ""
        self._bbcode_view = ""
        self._dirty = False
        self.sync_modes()

    # --- State ---

    @property
    def mode(self) -> str:
        return self._mode

    @property
    def html_view(self) -> str:
        return self._html_view

    @property
    def bbcode_view(self) -> str:
        return self._bbcode_view

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    def mark_dirty(self) -> None:
        self._dirty = True
        self.events.notify("changed", {"mode": self._mode})

    def mark_clean(self) -> None:
        self._dirty = False

    # --- Modes ---

    def switch_mode(self, mode: str) -> None:
        if mode not in EDITOR_MODES:
            raise UnsupportedModeError(f"Unsupported editor mode: {mode}")

        self._mode = mode
        if mode == "html":
            self._refresh_html_view()
        elif mode == "bbcode":
            self._refresh_bbcode_view()

        logger.debug("Switched to %s mode", mode)
        self.events.notify("mode_changed", {"mode": mode})

    def _refresh_html_view(self) -> None:
        self._html_view = self.sanitizer.sanitize_html(self.surface.get_current_markup())

    def _refresh_bbcode_view(self) -> None:
        self._bbcode_view = self.translator.html_to_dialect(self.surface.get_current_markup())

    def sync_modes(self) -> None:
        if self._mode == "visual":
            self._refresh_html_view()
            self._refresh_bbcode_view()

    def sync_from_html(self, markup: str | None = None) -> None:
        """Push the HTML view (optionally replaced first) into the document."""
        if markup is not None:
            self._html_view = markup
        self.surface.apply_markup(self.sanitizer.sanitize_html(self._html_view))
        self._refresh_bbcode_view()
        self.mark_dirty()

    def sync_from_bbcode(self, text: str | None = None) -> None:
        """Push the BBCode view (optionally replaced first) into the document."""
        if text is not None:
            self._bbcode_view = text
        markup = self.translator.to_html(self._bbcode_view)
        self.surface.apply_markup(self.sanitizer.sanitize_html(markup))
        self._refresh_html_view()
        self.mark_dirty()

    def _after_change(self) -> None:
        self.sync_modes()
        self.mark_dirty()

    # --- Commands ---

    def exec_command(self, command: str, value: str | None = None) -> bool:
        """Run a formatting command on the selection; ignored outside visual mode."""
        if self._mode != "visual":
            return False
        self.history.execute(FORMAT_COMMAND, {"command": command, "value": value})
        self._after_change()
        return True

    def undo(self) -> bool:
        changed = self.history.undo()
        if changed:
            self._after_change()
        return changed

    def redo(self) -> bool:
        changed = self.history.redo()
        if changed:
            self._after_change()
        return changed

    def can_undo(self) -> bool:
        return self.history.can_undo()

    def can_redo(self) -> bool:
        return self.history.can_redo()

    def clear_history(self) -> None:
        self.history.clear()

    # --- Content ---

    def get_text_content(self) -> str:
        if self._mode == "html":
            return self._html_view
        if self._mode == "bbcode":
            return self._bbcode_view
        return flatten_text(parse_markup(self.surface.get_current_markup()))

    def char_count(self) -> int:
        return len(self.get_text_content())

    def get_content(
        self, format: str = "html", options: ExportOptions | dict[str, Any] | None = None
    ) -> str:
        return self.exporter.get_content(format, options)

    def set_content(
        self,
        content: str,
        format: str = "html",
        options: ExportOptions | dict[str, Any] | None = None,
    ) -> None:
        self.exporter.set_content(content, format, options)
        self._after_change()

    def set_options(self, **changes: Any) -> ExportOptions:
        return self.exporter.set_export_options(**changes)

    def get_options(self) -> ExportOptions:
        return self.exporter.get_export_options()

    def export_settings(self) -> str:
        return self.exporter.export_settings()

    def import_settings(self, document: str | dict[str, Any]) -> PersistedState:
        state = self.exporter.import_settings(document)
        self._after_change()
        return state

    # --- Presets & Images ---

    def apply_style(self, preset_id: str, force_block: bool = False) -> None:
        self.presets.apply_preset(preset_id, force_block=force_block)
        self._after_change()

    def add_image(self, src: str, **metadata: Any) -> ImageMetadata:
        image = self.images.add_image(src, **metadata)
        self._after_change()
        return image

    def remove_image(self, image_id: str) -> None:
        self.images.remove_image(image_id)
        self._after_change()

    def set_image_alignment(self, image_id: str, alignment: str) -> None:
        self.images.set_alignment(image_id, alignment)
        self._after_change()

    # --- Lifecycle ---

    def destroy(self) -> None:
        """
        Tear the session down.

        Clears the history and the image registry, emits "destroyed", then
        drops every listener on the session's own event bus.
        """
        self.history.clear()
        self.images.clear()
        self.events.notify("destroyed", {})
        if isinstance(self.events, EventBus):
            self.events.clear_listeners()
        logger.debug("Editor session destroyed")


def create_editor_session(
    surface: SurfacePort | None = None,
    rules: EditorRules | None = None,
    **services: Any,
) -> EditorSession:
    return EditorSession(surface, rules=rules, **services)
