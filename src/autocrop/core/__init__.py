"""Border location and cropping core."""

from .bitset import Bitset
from .comparator import hash_distance, lines_differ
from .cropper import auto, crop
from .geometry import (
    DIRECTIONS,
    DOWNWARD,
    LEFTWARD,
    RIGHTWARD,
    UPWARD,
    Point,
    Rectangle,
)
from .hashing import LineHash, hash_line, hash_values, window_layout
from .lines import read_line
from .luminance import luminance, luminance_array
from .raster import Color, LuminanceSource, NumpyRaster, Raster, SubImager
from .scanner import bounds, bounds_hash, find_border, find_border_hash, line_has_content
from .settings import DEFAULT_SETTINGS, ExhaustedEdge, HashProfile, ScanSettings

__all__ = [
    # Geometry
    "Point",
    "Rectangle",
    "DIRECTIONS",
    "RIGHTWARD",
    "LEFTWARD",
    "DOWNWARD",
    "UPWARD",

    # Rasters
    "Color",
    "Raster",
    "SubImager",
    "LuminanceSource",
    "NumpyRaster",

    # Luminance and hashing
    "luminance",
    "luminance_array",
    "read_line",
    "Bitset",
    "LineHash",
    "hash_line",
    "hash_values",
    "window_layout",
    "hash_distance",
    "lines_differ",

    # Settings
    "HashProfile",
    "ExhaustedEdge",
    "ScanSettings",
    "DEFAULT_SETTINGS",

    # Scanning and cropping
    "find_border",
    "find_border_hash",
    "line_has_content",
    "bounds",
    "bounds_hash",
    "crop",
    "auto",
]
