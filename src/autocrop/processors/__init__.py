"""Autocrop processors.

Numpy/OpenCV wrappers around the border scanning core.
"""

# Base processor
from .base import BaseProcessor

# Image I/O
from .image_io import (
    load_image,
    save_image,
    get_image_files,
)

# Border cropping
from .border_crop import (
    BorderCropProcessor,
    detect_content_bounds,
    crop_borders,
    draw_bounds,
)

__all__ = [
    # Base
    "BaseProcessor",

    # Image I/O
    "load_image",
    "save_image",
    "get_image_files",

    # Border cropping
    "BorderCropProcessor",
    "detect_content_bounds",
    "crop_borders",
    "draw_bounds",
]
