"""Tests for scan-line hashing."""

import numpy as np
import pytest

from autocrop.core import (
    DIRECTIONS,
    DOWNWARD,
    LEFTWARD,
    RIGHTWARD,
    UPWARD,
    Bitset,
    HashProfile,
    NumpyRaster,
    Point,
    ScanSettings,
    hash_line,
    hash_values,
    window_layout,
)
from autocrop.core.scanner import scan_corner
from tests.conftest import PixelRaster

FULL32 = (1 << 32) - 1
SIMPLE = ScanSettings(profile=HashProfile.SIMPLE)


def line(*runs):
    """Build a luminance line from (value, count) runs."""
    return np.concatenate([np.full(count, value, dtype=np.uint8) for value, count in runs])


class TestWindowLayout:
    """Window size and count for different line lengths."""

    @pytest.mark.parametrize("length,width,expected", [
        (192, 32, (6, 32)),
        (128, 64, (2, 64)),
        (130, 64, (2, 64)),
        (100, 64, (1, 64)),
        (10, 32, (1, 10)),
        (0, 32, (1, 0)),
    ])
    def test_layout(self, length, width, expected):
        assert window_layout(length, width) == expected


class TestExtendedProfile:
    """32-bit base hash plus contrast hash."""

    def test_white_line(self):
        h = hash_values(line((255, 192)))
        assert h.profile is HashProfile.EXTENDED
        assert h.windows == 32
        assert h.base.value == FULL32
        assert h.contrast.value == FULL32
        assert h.is_saturated

    def test_black_line(self):
        h = hash_values(line((0, 192)))
        assert h.base.value == 0
        assert h.contrast.value == FULL32
        assert h.is_saturated

    def test_mid_tones_have_no_contrast_bits(self):
        light = hash_values(line((180, 192)))
        dark = hash_values(line((100, 192)))
        assert light.base.value == FULL32
        assert light.contrast.value == 0
        assert dark.base.value == 0
        assert dark.contrast.value == 0

    def test_half_dark_line(self):
        h = hash_values(line((0, 96), (255, 96)))
        assert h.base.value == FULL32 ^ 0xFFFF
        assert h.contrast.value == FULL32
        assert not h.is_saturated

    def test_contrast_needs_more_than_ratio(self):
        # window size 25: the contrast limit is 0.12 * 25 = 3 pixels
        rest = line((200, 25 * 31))
        three = hash_values(np.concatenate([line((255, 3), (200, 22)), rest]))
        four = hash_values(np.concatenate([line((255, 4), (200, 21)), rest]))
        assert three.windows == 32
        assert not three.contrast.test(0)
        assert four.contrast.test(0)
        assert four.contrast.popcount() == 1

    def test_mean_must_exceed_dark_limit(self):
        # two pixels summing to exactly 2 * 128 are dark
        h = hash_values(line((128, 64)))
        assert h.base.value == 0

    def test_trailing_pixels_are_ignored(self):
        h = hash_values(line((255, 32), (0, 1)))
        assert h.windows == 32
        assert h.base.value == FULL32

    def test_custom_thresholds(self):
        h = hash_values(line((100, 64)), ScanSettings(dark_limit=90))
        assert h.base.value == FULL32


class TestSimpleProfile:
    """Single 64-bit hash."""

    def test_width_and_no_contrast(self):
        h = hash_values(line((255, 128)), SIMPLE)
        assert h.profile is HashProfile.SIMPLE
        assert h.base.width == 64
        assert h.base.value == (1 << 64) - 1
        assert h.contrast is None

    def test_bits_follow_window_position(self):
        h = hash_values(line((255, 2), (0, 126)), SIMPLE)
        assert list(h.base.positions()) == [0]


class TestWindowGuard:
    """Lines shorter than the hash width."""

    def test_short_line(self):
        h = hash_values(line((255, 5)))
        assert h.windows == 5
        assert h.base == Bitset(32, 0b11111)
        assert h.is_saturated

    def test_empty_line(self):
        h = hash_values(np.empty(0, dtype=np.uint8))
        assert h.windows == 0
        assert h.base.value == 0

    def test_tiny_raster(self):
        raster = NumpyRaster(np.full((10, 10), 255, dtype=np.uint8))
        h = hash_line(raster, Point(0, 0), Point(1, 0), SIMPLE)
        assert h.windows == 10
        assert h.base.popcount() == 10


class TestHashLine:
    """Hashing lines read from rasters."""

    @pytest.mark.parametrize("direction", DIRECTIONS)
    def test_array_and_pixel_paths_agree(self, offset_block_page, direction):
        fast = NumpyRaster(offset_block_page)
        slow = PixelRaster(offset_block_page)
        sweep = direction.transpose()
        start = scan_corner(fast.bounds(), direction)

        for step in range(0, 60, 7):
            point = Point(start.x + direction.x * step, start.y + direction.y * step)
            assert hash_line(fast, point, sweep) == hash_line(slow, point, sweep)

    def test_start_outside_raster(self, white_page):
        h = hash_line(NumpyRaster(white_page), Point(-1, 0), Point(1, 0))
        assert h.windows == 0

    @pytest.mark.parametrize("forward,backward", [
        ((Point(0, 0), DOWNWARD), (Point(0, 199), UPWARD)),
        ((Point(0, 0), RIGHTWARD), (Point(299, 0), LEFTWARD)),
    ])
    def test_windows_start_at_low_end_of_line(self, forward, backward):
        # 200 and 300 leave a tail after the last window
        image = np.full((200, 300), 255, dtype=np.uint8)
        image[0:5, 0:5] = 0
        raster = NumpyRaster(image)
        assert hash_line(raster, *backward) == hash_line(raster, *forward)
