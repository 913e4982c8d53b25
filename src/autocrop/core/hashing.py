"""Perceptual hashing of whole scan-lines.

A line of ``length`` pixels is split into ``hash_width`` equal windows of
``window_size = length // hash_width`` pixels (at least one). Each complete
window contributes one bit to the base hash: set when the window's mean
luminance is above the dark limit. Pixels after the last complete window
are ignored. Windows start at the low-coordinate end of the line
whatever the sweep direction.

The extended profile also builds a contrast hash. A window's contrast bit
is set when it is saturated towards its own classification: a dark window
with more than ``contrast_ratio`` near-black pixels, or a light window with
more than ``contrast_ratio`` near-white pixels.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .bitset import Bitset
from .geometry import Point
from .lines import read_line
from .raster import Raster
from .settings import DEFAULT_SETTINGS, HashProfile, ScanSettings


@dataclass
class LineHash:
    """Hash(es) summarising one scan-line."""

    profile: HashProfile
    base: Bitset
    contrast: Optional[Bitset] = None
    windows: int = 0

    @property
    def is_saturated(self) -> bool:
        """True if every hashed window got the same light/dark classification."""
        return self.base.is_uniform(self.windows)


def window_layout(length: int, hash_width: int) -> Tuple[int, int]:
    """Return ``(window_size, window_count)`` for a line of ``length`` pixels."""
    window_size = max(1, length // hash_width)
    return window_size, min(hash_width, length // window_size)


def hash_values(values: np.ndarray, settings: ScanSettings = DEFAULT_SETTINGS) -> LineHash:
    """Hash a 1-D array of luminance values."""
    profile = HashProfile(settings.profile)
    width = profile.hash_width
    base = Bitset(width)
    contrast = Bitset(width) if profile.tracks_contrast else None

    window_size, windows = window_layout(len(values), width)
    if windows == 0:
        return LineHash(profile, base, contrast, 0)

    blocks = np.asarray(values[:windows * window_size], dtype=np.int64)
    blocks = blocks.reshape(windows, window_size)

    light = blocks.sum(axis=1) > window_size * settings.dark_limit
    for pos in np.flatnonzero(light):
        base.set(int(pos))

    if contrast is not None:
        limit = window_size * settings.contrast_ratio
        near_black = (blocks < settings.near_black).sum(axis=1)
        near_white = (blocks > settings.near_white).sum(axis=1)
        saturated = np.where(light, near_white > limit, near_black > limit)
        for pos in np.flatnonzero(saturated):
            contrast.set(int(pos))

    return LineHash(profile, base, contrast, windows)


def hash_line(
    raster: Raster,
    start: Point,
    sweep: Point,
    settings: ScanSettings = DEFAULT_SETTINGS,
) -> LineHash:
    """Hash the line running from ``start`` to the raster edge along ``sweep``.

    Windows are always laid out from the low-coordinate end of the line, so
    every scan drops the same trailing pixels whatever its sweep direction.
    """
    values = read_line(raster, start, sweep)
    if sweep.is_backward():
        values = values[::-1]
    return hash_values(values, settings)
