"""Whitespace border detection and cropping for rasterized images."""

__version__ = "1.0.0"

from .core import (
    Color,
    HashProfile,
    NumpyRaster,
    Point,
    Raster,
    Rectangle,
    ScanSettings,
    auto,
    bounds,
    bounds_hash,
    crop,
)
from .exceptions import AutocropError, CapabilityError
from .pipeline import AutocropPipeline

__all__ = [
    "auto",
    "bounds",
    "bounds_hash",
    "crop",
    "Color",
    "HashProfile",
    "NumpyRaster",
    "Point",
    "Raster",
    "Rectangle",
    "ScanSettings",
    "AutocropError",
    "CapabilityError",
    "AutocropPipeline",
]
