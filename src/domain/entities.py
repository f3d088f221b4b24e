from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# --- Enums / Literals ---
EditorMode = Literal["visual", "html", "bbcode"]
ContentFormat = Literal["html", "bbcode", "text"]
Alignment = Literal["left", "center", "right"]

EDITOR_MODES: tuple[str, ...] = ("visual", "html", "bbcode")
CONTENT_FORMATS: tuple[str, ...] = ("html", "bbcode", "text")
ALIGNMENTS: tuple[str, ...] = ("left", "center", "right")

# --- Presets ---

class StylePreset(BaseModel):
    """Named bundle of inline styles; serialized with a `class` key."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    styles: dict[str, str] = Field(default_factory=dict)  # camelCase CSS properties
    css_class: str = Field(alias="class")
    block: bool = False
    custom: bool = False

class PresetCollection(BaseModel):
    default: dict[str, StylePreset] = Field(default_factory=dict)
    custom: dict[str, StylePreset] = Field(default_factory=dict)

# --- Images ---

class ImageMetadata(BaseModel):
    id: str
    src: str
    width: int | None = None
    height: int | None = None
    alt: str = ""
    title: str = ""
    style: dict[str, str] = Field(default_factory=dict)

# --- Export ---

class ExportOptions(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    sanitize: bool = True
    include_styles: bool = False
    preserve_images: bool = True
    format: ContentFormat = "html"
    cleanup: bool = False
    preserve_lines: bool = False

class SettingsMetadata(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    exported_at: datetime
    version: str = "1.0"

class PersistedState(BaseModel):
    """The settings document written by export_settings and read by import_settings."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    content: str = ""
    images: list[ImageMetadata] = Field(default_factory=list)
    presets: PresetCollection = Field(default_factory=PresetCollection)
    export_options: ExportOptions = Field(default_factory=ExportOptions)
    metadata: SettingsMetadata | None = None
