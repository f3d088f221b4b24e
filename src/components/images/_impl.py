"""
Image registry - image metadata plus undoable insert/remove/align.

Key behaviors:
- Only image URLs are accepted (image file extension or data:image/ URL)
- Script-capable or local-file URLs are rejected with InvalidImageError
- Images wider than the maximum are scaled down, keeping the aspect ratio
- Each image is inserted inside a wrapper div carrying data-image-id
- The document decides which images exist: metadata is kept for every id
  ever added, but only ids with a wrapper in the current markup are visible,
  so undo and redo never leave the registry out of step
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from uuid import uuid4

from src.components.history import HistoryEngine
from src.core.ports.events import NotifierPort
from src.domain import validators
from src.domain.entities import ALIGNMENTS, ImageMetadata
from src.domain.errors import InvalidImageError
from src.domain.markup import MarkupNode, find_elements, parse_markup, serialize_markup

logger = logging.getLogger(__name__)

MAX_IMAGE_WIDTH = 800
WRAPPER_CLASS = "image-wrapper"
IMAGE_ID_ATTRIBUTE = "data-image-id"

_IMAGE_EXTENSION = re.compile(r"\.(jpg|jpeg|png|gif|bmp|webp|svg)$", re.IGNORECASE)


def is_image_url(url: str | None) -> bool:
    if not url:
        return False
    return bool(_IMAGE_EXTENSION.search(url)) or url.startswith("data:image/")


def is_acceptable_image_source(url: str | None) -> bool:
    """An image URL that is not script-capable; inline data:image/ URLs are allowed."""
    if not is_image_url(url):
        return False
    assert url is not None
    if url.startswith("data:image/"):
        return True
    return validators.is_safe_url(url, validators.DANGEROUS_SCHEMES, validators.DEFAULT_URL_BASE)


def fit_dimensions(
    width: int | None, height: int | None, max_width: int = MAX_IMAGE_WIDTH
) -> tuple[int | None, int | None]:
    if width is None or width <= max_width:
        return width, height
    if height is None:
        return max_width, None
    return max_width, round(height * max_width / width)


def image_markup(image: ImageMetadata) -> str:
    """Wrapper div plus img for one image."""
    declarations = []
    if image.width is not None:
        declarations.append(f"width: {image.width}px;")
    if image.height is not None:
        declarations.append(f"height: {image.height}px;")
    declarations.extend(f"{prop}: {value};" for prop, value in image.style.items())

    img = MarkupNode.element(
        "img",
        {"src": image.src, "alt": image.alt, "title": image.title, "style": " ".join(declarations)},
    )
    wrapper = MarkupNode.element(
        "div",
        {"class": WRAPPER_CLASS, IMAGE_ID_ATTRIBUTE: image.id, "contenteditable": "false"},
    )
    wrapper.children.append(img)
    return serialize_markup(wrapper)


# --- Service Class ---


class ImageRegistry:
    """Images inserted during one editor session."""

    def __init__(
        self,
        history: HistoryEngine,
        notifier: NotifierPort | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._history = history
        self._notifier = notifier
        self._id_factory = id_factory or (lambda: f"img_{uuid4().hex[:12]}")
        self._images: dict[str, ImageMetadata] = {}

    def _emit(self, event_name: str, payload: dict[str, object]) -> None:
        if self._notifier is not None:
            self._notifier.notify(event_name, payload)

    def _document_ids(self) -> list[str]:
        """Image ids with a wrapper in the current document, in document order."""
        tree = parse_markup(self._history.surface.get_current_markup())
        wrappers = find_elements(tree, lambda node: IMAGE_ID_ATTRIBUTE in node.attributes)
        return [node.attributes[IMAGE_ID_ATTRIBUTE] for node in wrappers]

    def _require(self, image_id: str) -> ImageMetadata:
        image = self.get_image_metadata(image_id)
        if image is None:
            raise InvalidImageError(f"Unknown image: {image_id}")
        return image

    def add_image(
        self,
        src: str,
        width: int | None = None,
        height: int | None = None,
        alt: str = "",
        title: str = "",
        style: dict[str, str] | None = None,
    ) -> ImageMetadata:
        if not is_acceptable_image_source(src):
            raise InvalidImageError(f"Not a usable image URL: {src[:50]}")

        width, height = fit_dimensions(width, height)
        image = ImageMetadata(
            id=self._id_factory(),
            src=src,
            width=width,
            height=height,
            alt=alt,
            title=title,
            style=dict(style or {}),
        )
        self._history.execute("insert_html", {"html": image_markup(image)})
        self._images[image.id] = image
        logger.debug("Added image %s", image.id)
        self._emit("image_added", {"id": image.id, "src": src})
        return image

    def remove_image(self, image_id: str) -> None:
        self._require(image_id)
        # Metadata stays so an undo brings the image back intact.
        self._history.execute("remove_image", {"image_id": image_id})
        self._emit("image_deleted", {"id": image_id})

    def set_alignment(self, image_id: str, alignment: str) -> None:
        self._require(image_id)
        if alignment not in ALIGNMENTS:
            raise InvalidImageError(f"Unsupported alignment: {alignment}")
        self._history.execute("image_align", {"image_id": image_id, "alignment": alignment})
        self._emit("image_aligned", {"id": image_id, "alignment": alignment})

    def get_image_metadata(self, image_id: str) -> ImageMetadata | None:
        if image_id not in self._document_ids():
            return None
        return self._images.get(image_id)

    def get_all_images(self) -> list[ImageMetadata]:
        ids = dict.fromkeys(self._document_ids())
        return [self._images[image_id] for image_id in ids if image_id in self._images]

    def clear(self) -> None:
        self._images.clear()
