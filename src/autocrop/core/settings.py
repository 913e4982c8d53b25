"""Tunable parameters shared by the border scanners."""

from dataclasses import dataclass
from enum import Enum


class HashProfile(str, Enum):
    """Line hash variants.

    ``EXTENDED`` produces a 32-bit light/dark hash plus a 32-bit contrast
    hash per line; ``SIMPLE`` produces a single 64-bit light/dark hash.
    """

    EXTENDED = "extended"
    SIMPLE = "simple"

    @property
    def hash_width(self) -> int:
        return 32 if self is HashProfile.EXTENDED else 64

    @property
    def tracks_contrast(self) -> bool:
        return self is HashProfile.EXTENDED


class ExhaustedEdge(str, Enum):
    """Where an edge lands when a scan crosses the raster without finding a border.

    ``COLLAPSE`` moves the edge to the far side of the raster, so a blank
    raster yields an empty rectangle. ``KEEP`` leaves the edge at the
    raster boundary it started from, so nothing is cropped on that side.
    """

    COLLAPSE = "collapse"
    KEEP = "keep"


@dataclass(frozen=True)
class ScanSettings:
    """Thresholds for both the hash-based and the naive scanners."""

    profile: HashProfile = HashProfile.EXTENDED
    dark_limit: int = 128            # luminance at or below which a pixel is dark
    near_black: int = 30             # luminance below which a pixel is near-black
    near_white: int = 230            # luminance above which a pixel is near-white
    contrast_ratio: float = 0.12     # share of saturated pixels that flags a window
    saturated_min_distance: int = 1  # after a fully uniform line
    mixed_min_distance: int = 3      # after a line that already mixes light and dark
    simple_min_distance: int = 1     # SIMPLE profile
    exhausted_edge: ExhaustedEdge = ExhaustedEdge.COLLAPSE


DEFAULT_SETTINGS = ScanSettings()
