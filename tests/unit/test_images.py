"""
Tests for the image registry.
"""

from __future__ import annotations

import pytest

from src.adapters.events import EventBus
from src.adapters.memory_surface import InMemorySurface
from src.components.history import HistoryEngine
from src.components.images import (
    MAX_IMAGE_WIDTH,
    AddImageInput,
    AlignImageInput,
    ImageRegistry,
    RemoveImageInput,
    fit_dimensions,
    image_markup,
    is_acceptable_image_source,
    is_image_url,
    run,
)
from src.domain.entities import ImageMetadata
from src.domain.errors import InvalidImageError

# --- Fixtures ---


@pytest.fixture
def registry(history: HistoryEngine, events: EventBus) -> ImageRegistry:
    return ImageRegistry(history, events, id_factory=lambda: "img_1")


# --- Sources ---


class TestSources:
    @pytest.mark.parametrize(
        "url",
        [
            "https://x.com/a.png",
            "/static/photo.JPEG",
            "pic.webp",
            "data:image/png;base64,AAAA",
        ],
    )
    def test_accepts_images(self, url: str) -> None:
        assert is_image_url(url)
        assert is_acceptable_image_source(url)

    @pytest.mark.parametrize(
        "url",
        ["https://x.com/page.html", "", "javascript:alert(1)//a.png", "file:///etc/a.png"],
    )
    def test_rejects(self, url: str) -> None:
        assert not is_acceptable_image_source(url)


class TestDimensions:
    def test_small_image_unchanged(self) -> None:
        assert fit_dimensions(400, 300) == (400, 300)

    def test_wide_image_scaled_keeping_ratio(self) -> None:
        assert fit_dimensions(1600, 900) == (MAX_IMAGE_WIDTH, 450)

    def test_missing_height(self) -> None:
        assert fit_dimensions(1200, None) == (800, None)
        assert fit_dimensions(None, None) == (None, None)


def test_image_markup() -> None:
    image = ImageMetadata(id="img_9", src="a.png", width=10, height=5, alt="A")

    assert image_markup(image) == (
        '<div class="image-wrapper" data-image-id="img_9" contenteditable="false">'
        '<img src="a.png" alt="A" title="" style="width: 10px; height: 5px;"></div>'
    )


# --- Registry ---


class TestRegistry:
    def test_add_inserts_through_history(
        self,
        registry: ImageRegistry,
        surface: InMemorySurface,
        history: HistoryEngine,
        events: EventBus,
    ) -> None:
        image = registry.add_image("https://x.com/a.png", width=1000, height=500)

        assert (image.width, image.height) == (800, 400)
        assert 'data-image-id="img_1"' in surface.get_current_markup()
        assert registry.get_image_metadata("img_1") == image
        assert len(history.entries) == 1
        assert events.events_named("image_added")[0].payload == {
            "id": "img_1",
            "src": "https://x.com/a.png",
        }

    def test_add_invalid_raises(self, registry: ImageRegistry, history: HistoryEngine) -> None:
        with pytest.raises(InvalidImageError):
            registry.add_image("javascript:alert(1)")

        assert history.entries == ()
        assert registry.get_all_images() == []

    def test_remove(self, registry: ImageRegistry, surface: InMemorySurface) -> None:
        registry.add_image("a.png")

        registry.remove_image("img_1")

        assert "img" not in surface.get_current_markup()
        assert registry.get_image_metadata("img_1") is None

    def test_remove_unknown(self, registry: ImageRegistry) -> None:
        with pytest.raises(InvalidImageError):
            registry.remove_image("img_404")

    def test_alignment(self, registry: ImageRegistry, surface: InMemorySurface) -> None:
        registry.add_image("a.png")

        registry.set_alignment("img_1", "right")

        assert "float: right" in surface.get_current_markup()

    def test_invalid_alignment(self, registry: ImageRegistry) -> None:
        registry.add_image("a.png")

        with pytest.raises(InvalidImageError):
            registry.set_alignment("img_1", "justify")

    def test_undo_add(
        self, registry: ImageRegistry, surface: InMemorySurface, history: HistoryEngine
    ) -> None:
        registry.add_image("a.png")

        history.undo()

        assert surface.get_current_markup() == "<p>hello world</p>"
        assert registry.get_all_images() == []
        assert registry.get_image_metadata("img_1") is None

    def test_redo_add_brings_metadata_back(
        self, registry: ImageRegistry, history: HistoryEngine
    ) -> None:
        image = registry.add_image("a.png")
        history.undo()

        history.redo()

        assert registry.get_all_images() == [image]

    def test_undo_remove_restores_image(
        self, registry: ImageRegistry, surface: InMemorySurface, history: HistoryEngine
    ) -> None:
        image = registry.add_image("a.png")
        registry.remove_image("img_1")

        history.undo()

        assert 'data-image-id="img_1"' in surface.get_current_markup()
        assert registry.get_image_metadata("img_1") == image

        registry.remove_image("img_1")
        assert registry.get_all_images() == []


# --- Component ---


class TestComponent:
    def test_add_align_remove(self, registry: ImageRegistry) -> None:
        added = run(AddImageInput(src="a.png", width=20), registry=registry)
        assert added.success and added.image is not None

        aligned = run(AlignImageInput(image_id="img_1", alignment="center"), registry=registry)
        assert aligned.success

        removed = run(RemoveImageInput(image_id="img_1"), registry=registry)
        assert removed.success

    def test_invalid_source_reports_errors(self, registry: ImageRegistry) -> None:
        result = run(AddImageInput(src="notes.txt"), registry=registry)

        assert not result.success
        assert result.errors
