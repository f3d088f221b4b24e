"""
Images component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from src.domain.entities import ImageMetadata

# --- Input Models ---


@dataclass(frozen=True)
class AddImageInput:
    """Input for inserting an image at the selection."""

    src: str
    width: int | None = None
    height: int | None = None
    alt: str = ""
    title: str = ""
    style: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class RemoveImageInput:
    image_id: str


@dataclass(frozen=True)
class AlignImageInput:
    image_id: str
    alignment: str


# --- Output Models ---


@dataclass(frozen=True)
class ImageOutput:
    """Output for image operations."""

    image: ImageMetadata | None = None
    success: bool = True
    errors: list[str] = field(default_factory=list)
