"""
Style presets - named inline-style bundles applied through the history.

Key behaviors:
- Nine built-in presets; card and quote are block presets
- Custom presets get generated custom_<hex> ids and preset-<id> classes
- Inline presets wrap the selection in a span; block presets wrap the
  enclosing top-level block in a div
- Applying a preset is an undoable "preset" command
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from uuid import uuid4

from pydantic import ValidationError

from src.components.history import HistoryEngine
from src.core.ports.events import NotifierPort
from src.domain.entities import PresetCollection, StylePreset
from src.domain.errors import InvalidSettingsError, UnknownPresetError

logger = logging.getLogger(__name__)

PRESET_COMMAND = "preset"

_PILL = {"padding": "0.5em 0.75em", "borderRadius": "0.375em", "fontWeight": "500"}


def _pill(name: str, css_class: str, background: str, color: str) -> StylePreset:
    return StylePreset(
        name=name,
        styles={"backgroundColor": background, "color": color, **_PILL},
        css_class=css_class,
    )


def default_presets() -> dict[str, StylePreset]:
    """Fresh copies of the built-in presets."""
    return {
        "neutral": _pill("Neutral", "preset-neutral", "#6c757d", "#ffffff"),
        "accent": _pill("Accent", "preset-accent", "#007bff", "#ffffff"),
        "success": _pill("Success", "preset-success", "#28a745", "#ffffff"),
        "warning": _pill("Warning", "preset-warning", "#ffc107", "#212529"),
        "error": _pill("Error", "preset-error", "#dc3545", "#ffffff"),
        "info": _pill("Info", "preset-info", "#17a2b8", "#ffffff"),
        "card": StylePreset(
            name="Card",
            styles={
                "backgroundColor": "#ffffff",
                "color": "#333333",
                "padding": "1.5em",
                "borderRadius": "0.5em",
                "border": "1px solid #dee2e6",
                "boxShadow": "0 0.125rem 0.25rem rgba(0, 0, 0, 0.075)",
                "margin": "1em 0",
            },
            css_class="preset-card",
            block=True,
        ),
        "badge": StylePreset(
            name="Badge",
            styles={
                "backgroundColor": "#e9ecef",
                "color": "#495057",
                "padding": "0.25em 0.5em",
                "borderRadius": "0.25em",
                "fontSize": "0.875em",
                "fontWeight": "600",
            },
            css_class="preset-badge",
        ),
        "quote": StylePreset(
            name="Quote",
            styles={
                "backgroundColor": "#f8f9fa",
                "color": "#6c757d",
                "padding": "1em 1.5em",
                "borderRadius": "0.375em",
                "borderLeft": "4px solid #007bff",
                "fontStyle": "italic",
                "margin": "1em 0",
            },
            css_class="preset-quote",
            block=True,
        ),
    }


# --- Style Strings ---


def camel_to_kebab(name: str) -> str:
    return re.sub(r"([a-z0-9])([A-Z])", r"\1-\2", name).lower()


def kebab_to_camel(name: str) -> str:
    head, *rest = name.split("-")
    return head + "".join(part.capitalize() for part in rest)


def styles_to_string(styles: dict[str, str]) -> str:
    """{'backgroundColor': '#fff'} -> 'background-color: #fff;'"""
    return " ".join(f"{camel_to_kebab(prop)}: {value};" for prop, value in styles.items())


def parse_styles(css: str) -> dict[str, str]:
    """Inverse of styles_to_string; malformed declarations are skipped."""
    styles: dict[str, str] = {}
    for declaration in css.split(";"):
        prop, _, value = declaration.partition(":")
        prop, value = prop.strip(), value.strip()
        if prop and value:
            styles[kebab_to_camel(prop.lower())] = value
    return styles


def generate_css(presets: dict[str, StylePreset]) -> str:
    return "".join(
        f".{preset.css_class} {{ {styles_to_string(preset.styles)} }}\n"
        for preset in presets.values()
    )


# --- Service Class ---


class StylePresets:
    """Built-in plus custom presets for one editor session."""

    def __init__(
        self,
        history: HistoryEngine | None = None,
        notifier: NotifierPort | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._history = history
        self._notifier = notifier
        self._id_factory = id_factory or (lambda: f"custom_{uuid4().hex[:12]}")
        self._defaults = default_presets()
        self._custom: dict[str, StylePreset] = {}

    def _emit(self, event_name: str, payload: dict[str, object]) -> None:
        if self._notifier is not None:
            self._notifier.notify(event_name, payload)

    def get_preset(self, preset_id: str) -> StylePreset:
        preset = self._defaults.get(preset_id) or self._custom.get(preset_id)
        if preset is None:
            raise UnknownPresetError(f"Unknown preset: {preset_id}")
        return preset

    def get_presets(self) -> dict[str, StylePreset]:
        return {**self._defaults, **self._custom}

    def generate_css(self) -> str:
        return generate_css(self.get_presets())

    # --- Custom Presets ---

    def create_custom_preset(
        self, name: str, styles: dict[str, str] | str, block: bool = False
    ) -> str:
        if isinstance(styles, str):
            styles = parse_styles(styles)
        preset_id = self._id_factory()
        self._custom[preset_id] = StylePreset(
            name=name,
            styles=dict(styles),
            css_class=f"preset-{preset_id}",
            block=block,
            custom=True,
        )
        logger.debug("Created custom preset %s", preset_id)
        self._emit("preset_created", {"preset": preset_id})
        return preset_id

    def update_preset(self, preset_id: str, styles: dict[str, str] | str) -> StylePreset:
        if isinstance(styles, str):
            styles = parse_styles(styles)
        updated = self.get_preset(preset_id).model_copy(update={"styles": dict(styles)})
        if preset_id in self._custom:
            self._custom[preset_id] = updated
        else:
            self._defaults[preset_id] = updated
        self._emit("preset_updated", {"preset": preset_id})
        return updated

    def duplicate_preset(self, preset_id: str, name: str | None = None) -> str:
        original = self.get_preset(preset_id)
        return self.create_custom_preset(
            name or f"{original.name} (copy)", dict(original.styles), block=original.block
        )

    def delete_preset(self, preset_id: str) -> None:
        if preset_id not in self._custom:
            raise UnknownPresetError(f"No custom preset: {preset_id}")
        del self._custom[preset_id]
        self._emit("preset_deleted", {"preset": preset_id})

    # --- Applying ---

    def apply_preset(self, preset_id: str, force_block: bool = False) -> None:
        """Record a preset command wrapping the selection or its block."""
        preset = self.get_preset(preset_id)
        if self._history is None:
            raise RuntimeError("StylePresets has no history engine to apply presets through")

        block = preset.block or force_block
        self._history.execute(
            PRESET_COMMAND,
            {
                "css_class": preset.css_class,
                "style": styles_to_string(preset.styles),
                "block": block,
            },
        )
        self._emit("preset_applied", {"preset": preset_id, "block": block})

    # --- Import / Export ---

    def export_presets(self) -> dict[str, object]:
        collection = PresetCollection(default=self._defaults, custom=self._custom)
        return collection.model_dump(by_alias=True)

    def import_presets(self, data: dict[str, object] | PresetCollection) -> int:
        """Merge the custom section of an exported collection; returns the count."""
        try:
            collection = (
                data
                if isinstance(data, PresetCollection)
                else PresetCollection.model_validate(data)
            )
        except ValidationError as e:
            raise InvalidSettingsError(f"Invalid presets document:\n{e}") from e

        for preset_id, preset in collection.custom.items():
            self._custom[preset_id] = preset.model_copy(update={"custom": True})
        self._emit("presets_imported", {"count": len(collection.custom)})
        return len(collection.custom)


def create_presets(
    history: HistoryEngine | None = None,
    notifier: NotifierPort | None = None,
) -> StylePresets:
    return StylePresets(history, notifier)
