"""
Images component - image insertion, removal and alignment.

Invariants:
- I1: Unsafe or non-image sources are never inserted
- I2: Every change to the document goes through the history engine
"""

from __future__ import annotations

from src.domain.errors import InvalidImageError

from ._impl import ImageRegistry
from .models import AddImageInput, AlignImageInput, ImageOutput, RemoveImageInput


def run_add(inp: AddImageInput, registry: ImageRegistry) -> ImageOutput:
    try:
        image = registry.add_image(
            inp.src,
            width=inp.width,
            height=inp.height,
            alt=inp.alt,
            title=inp.title,
            style=inp.style,
        )
    except InvalidImageError as e:
        return ImageOutput(success=False, errors=[str(e)])
    return ImageOutput(image=image, success=True)


def run_remove(inp: RemoveImageInput, registry: ImageRegistry) -> ImageOutput:
    try:
        registry.remove_image(inp.image_id)
    except InvalidImageError as e:
        return ImageOutput(success=False, errors=[str(e)])
    return ImageOutput(success=True)


def run_align(inp: AlignImageInput, registry: ImageRegistry) -> ImageOutput:
    try:
        registry.set_alignment(inp.image_id, inp.alignment)
    except InvalidImageError as e:
        return ImageOutput(success=False, errors=[str(e)])
    return ImageOutput(image=registry.get_image_metadata(inp.image_id), success=True)


def run(
    inp: AddImageInput | RemoveImageInput | AlignImageInput,
    *,
    registry: ImageRegistry,
) -> ImageOutput:
    """
    Main entry point for the images component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, AddImageInput):
        return run_add(inp, registry)
    elif isinstance(inp, RemoveImageInput):
        return run_remove(inp, registry)
    elif isinstance(inp, AlignImageInput):
        return run_align(inp, registry)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
