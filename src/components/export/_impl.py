"""
Export manager - reading and replacing the document in every format.

Key behaviors:
- HTML export is sanitized, cleaned of editor-only markup and prefixed
  with preset CSS according to the export options
- BBCode export is the dialect rendering of the exported HTML
- Text export is the flattened document text
- Imported HTML/BBCode passes through the sanitizer when sanitize is set
- Settings documents carry content, images, presets, options and metadata

Invariants:
- Unknown formats raise UnsupportedFormatError
- A malformed settings document raises InvalidSettingsError and changes nothing
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from src.adapters.clock import SystemClock
from src.components.images import WRAPPER_CLASS, ImageRegistry
from src.components.presets import StylePresets
from src.components.sanitizer import HTMLSanitizer
from src.components.translator import BBCodeTranslator
from src.core.ports.events import NotifierPort
from src.core.ports.surface import SurfacePort
from src.core.ports.time import TimePort
from src.domain.entities import (
    CONTENT_FORMATS,
    ExportOptions,
    PersistedState,
    PresetCollection,
    SettingsMetadata,
)
from src.domain.errors import InvalidSettingsError, UnsupportedFormatError
from src.domain.markup import (
    MarkupNode,
    flatten_text,
    parse_markup,
    remove_elements,
    serialize_markup,
)
from src.rules.models import ExportRules

logger = logging.getLogger(__name__)

_DEFAULTS = ExportRules()

_WHITESPACE_RUN = re.compile(r"\s+")
_BLANK_LINE_RUN = re.compile(r"\n\s*\n")

# --- Configuration ---


@dataclass(frozen=True)
class ExportConfig:
    """Settings document version and the editor-only markup stripped by cleanup."""

    format_version: str = _DEFAULTS.format_version
    temp_attributes: tuple[str, ...] = tuple(_DEFAULTS.temp_attributes)
    temp_classes: tuple[str, ...] = tuple(_DEFAULTS.temp_classes)


DEFAULT_CONFIG = ExportConfig()


def build_export_config(rules: ExportRules) -> ExportConfig:
    return ExportConfig(
        format_version=rules.format_version,
        temp_attributes=tuple(name.lower() for name in rules.temp_attributes),
        temp_classes=tuple(rules.temp_classes),
    )


# --- Cleanup ---


def cleanup_tree(tree: MarkupNode, config: ExportConfig = DEFAULT_CONFIG) -> MarkupNode:
    """Drop editor-only attributes and classes, then empty class/style attributes."""
    cleaned = MarkupNode(
        kind=tree.kind,
        tag_name=tree.tag_name,
        text_content=tree.text_content,
    )
    for name, value in tree.attributes.items():
        if name.lower() in config.temp_attributes:
            continue
        if name == "class":
            value = " ".join(c for c in value.split() if c not in config.temp_classes)
        if name in ("class", "style") and not value.strip():
            continue
        cleaned.attributes[name] = value
    cleaned.children = [cleanup_tree(child, config) for child in tree.children]
    return cleaned


def cleanup_html(markup: str, config: ExportConfig = DEFAULT_CONFIG) -> str:
    """Clean a markup string and collapse whitespace runs to single spaces."""
    cleaned = serialize_markup(cleanup_tree(parse_markup(markup), config))
    return _WHITESPACE_RUN.sub(" ", cleaned).strip()


def strip_images(tree: MarkupNode) -> MarkupNode:
    def is_image(node: MarkupNode) -> bool:
        return node.tag_name == "img" or WRAPPER_CLASS in node.attributes.get("class", "").split()

    return remove_elements(tree, is_image)


def _require_format(format: str) -> str:
    if format not in CONTENT_FORMATS:
        raise UnsupportedFormatError(f"Unsupported format: {format}")
    return format


# --- Service Class ---


class ExportManager:
    """Export and import for one editing surface."""

    def __init__(
        self,
        surface: SurfacePort,
        *,
        sanitizer: HTMLSanitizer | None = None,
        translator: BBCodeTranslator | None = None,
        presets: StylePresets | None = None,
        images: ImageRegistry | None = None,
        notifier: NotifierPort | None = None,
        clock: TimePort | None = None,
        config: ExportConfig | None = None,
    ) -> None:
        self._surface = surface
        self._sanitizer = sanitizer or HTMLSanitizer()
        self._translator = translator or BBCodeTranslator()
        self._presets = presets
        self._images = images
        self._notifier = notifier
        self._clock = clock or SystemClock()
        self._config = config or DEFAULT_CONFIG
        self._options = ExportOptions()

    def _emit(self, event_name: str, payload: dict[str, Any]) -> None:
        if self._notifier is not None:
            self._notifier.notify(event_name, payload)

    # --- Options ---

    def _resolve(self, options: ExportOptions | dict[str, Any] | None) -> ExportOptions:
        """Overlay the explicitly given options on the current ones."""
        if options is None:
            return self._options.model_copy()
        if isinstance(options, dict):
            try:
                options = ExportOptions.model_validate(options)
            except ValidationError as e:
                raise InvalidSettingsError(f"Invalid export options:\n{e}") from e
        changes = {name: getattr(options, name) for name in options.model_fields_set}
        return self._options.model_copy(update=changes)

    def set_export_options(self, **changes: Any) -> ExportOptions:
        self._options = self._resolve(changes)
        return self.get_export_options()

    def get_export_options(self) -> ExportOptions:
        return self._options.model_copy()

    # --- Export ---

    def _render_html(self, opts: ExportOptions) -> str:
        tree = parse_markup(self._surface.get_current_markup())
        if not opts.preserve_images:
            tree = strip_images(tree)
        if opts.sanitize:
            tree = self._sanitizer.sanitize(tree)

        markup = serialize_markup(tree)
        if opts.cleanup:
            markup = cleanup_html(markup, self._config)
        if opts.include_styles and self._presets is not None:
            markup = f"<style>{self._presets.generate_css()}</style>\n{markup}"
        return markup

    def get_html(self, options: ExportOptions | dict[str, Any] | None = None) -> str:
        opts = self._resolve(options)
        markup = self._render_html(opts)
        self._emit("export", {"format": "html", "content": markup})
        return markup

    def get_bbcode(self, options: ExportOptions | dict[str, Any] | None = None) -> str:
        # A style block has no dialect form.
        opts = self._resolve(options).model_copy(update={"include_styles": False})
        text = self._translator.html_to_dialect(self._render_html(opts))
        self._emit("export", {"format": "bbcode", "content": text})
        return text

    def get_text(self, options: ExportOptions | dict[str, Any] | None = None) -> str:
        opts = self._resolve(options)
        text = flatten_text(parse_markup(self._surface.get_current_markup()))
        if opts.preserve_lines:
            text = _BLANK_LINE_RUN.sub("\n\n", text)
        self._emit("export", {"format": "text", "content": text})
        return text

    def get_content(
        self, format: str = "html", options: ExportOptions | dict[str, Any] | None = None
    ) -> str:
        _require_format(format)
        if format == "bbcode":
            return self.get_bbcode(options)
        elif format == "text":
            return self.get_text(options)
        return self.get_html(options)

    # --- Import ---

    def set_content(
        self,
        content: str,
        format: str = "html",
        options: ExportOptions | dict[str, Any] | None = None,
    ) -> None:
        _require_format(format)
        opts = self._resolve(options)

        if format == "text":
            markup = serialize_markup(MarkupNode.root([MarkupNode.text(content)]))
        else:
            markup = self._translator.to_html(content) if format == "bbcode" else content
            if opts.sanitize:
                markup = self._sanitizer.sanitize_html(markup)

        self._surface.apply_markup(markup)
        logger.debug("Imported %d chars of %s content", len(content), format)
        self._emit("content_imported", {"format": format, "content": content})

    # --- Settings ---

    def export_settings(self) -> str:
        """Serialize the session into a settings document (JSON, indent 2)."""
        presets = (
            PresetCollection.model_validate(self._presets.export_presets())
            if self._presets is not None
            else PresetCollection()
        )
        state = PersistedState(
            content=self._render_html(
                self._options.model_copy(update={"cleanup": True, "include_styles": False})
            ),
            images=self._images.get_all_images() if self._images is not None else [],
            presets=presets,
            export_options=self._options,
            metadata=SettingsMetadata(
                exported_at=self._clock.now_utc(),
                version=self._config.format_version,
            ),
        )
        return state.model_dump_json(by_alias=True, indent=2)

    def import_settings(self, document: str | dict[str, Any]) -> PersistedState:
        """
        Apply a settings document.

        Raises:
            InvalidSettingsError: the document is not valid JSON or does not
                match the settings schema
        """
        try:
            if isinstance(document, str):
                state = PersistedState.model_validate_json(document)
            else:
                state = PersistedState.model_validate(document)
        except ValidationError as e:
            logger.warning("Rejected settings document: %d error(s)", e.error_count())
            raise InvalidSettingsError(f"Invalid settings document:\n{e}") from e

        if state.content:
            self.set_content(state.content, "html")
        self._options = self._resolve(state.export_options)
        if self._presets is not None and state.presets.custom:
            self._presets.import_presets(state.presets)

        version = state.metadata.version if state.metadata is not None else None
        self._emit("settings_imported", {"version": version})
        return state


def create_export_manager(
    surface: SurfacePort,
    rules: ExportRules | None = None,
    **services: Any,
) -> ExportManager:
    config = build_export_config(rules) if rules is not None else DEFAULT_CONFIG
    return ExportManager(surface, config=config, **services)
