"""
Images component - image registry for the editing surface.
"""

from ._impl import (
    IMAGE_ID_ATTRIBUTE,
    MAX_IMAGE_WIDTH,
    WRAPPER_CLASS,
    ImageRegistry,
    fit_dimensions,
    image_markup,
    is_acceptable_image_source,
    is_image_url,
)
from .component import run, run_add, run_align, run_remove
from .models import AddImageInput, AlignImageInput, ImageOutput, RemoveImageInput
from .ports import NotifierPort

__all__ = [
    # Entry points
    "run",
    "run_add",
    "run_align",
    "run_remove",
    # Input models
    "AddImageInput",
    "AlignImageInput",
    "RemoveImageInput",
    # Output models
    "ImageOutput",
    # Ports
    "NotifierPort",
    # Service
    "IMAGE_ID_ATTRIBUTE",
    "MAX_IMAGE_WIDTH",
    "WRAPPER_CLASS",
    "ImageRegistry",
    "fit_dimensions",
    "image_markup",
    "is_acceptable_image_source",
    "is_image_url",
]
