"""Raster abstractions consumed by the border scanners.

A raster only has to expose its bounds and a per-pixel colour lookup.
Two optional capabilities are detected at call time:

* ``sub_image(rect)`` - produce a cropped view, required by :func:`crop`.
* ``luminance_plane()`` - a precomputed ``uint8`` luminance array indexed
  ``[y - min.y, x - min.x]``; when present, scan-lines are read as array
  slices instead of pixel by pixel.
"""

from typing import NamedTuple, Optional, Protocol, Union, runtime_checkable

import numpy as np

from .geometry import Point, Rectangle
from .luminance import CHANNEL_INDEX, luminance_array


class Color(NamedTuple):
    """8-bit RGBA colour."""

    r: int
    g: int
    b: int
    a: int = 255


ColorValue = Union[int, Color]


@runtime_checkable
class Raster(Protocol):
    """Read-only pixel source."""

    def bounds(self) -> Rectangle:
        ...

    def at(self, x: int, y: int) -> ColorValue:
        ...


@runtime_checkable
class SubImager(Protocol):
    """Raster that can produce a view restricted to a rectangle."""

    def sub_image(self, rect: Rectangle) -> Raster:
        ...


@runtime_checkable
class LuminanceSource(Protocol):
    """Raster that can hand out its whole luminance plane at once."""

    def luminance_plane(self) -> np.ndarray:
        ...


class NumpyRaster:
    """Raster backed by an OpenCV-style numpy array.

    The array is never copied: :meth:`sub_image` returns a new raster over a
    slice of the same buffer. Sub-views keep the parent's coordinate system,
    so the bounds of a crop are the rectangle it was cropped to.
    """

    def __init__(
        self,
        array: np.ndarray,
        origin: Point = Point(0, 0),
        channel_order: str = "BGR",
    ):
        if not isinstance(array, np.ndarray):
            raise TypeError("Image must be a numpy array")
        if array.dtype != np.uint8:
            raise ValueError(f"Image must be 8-bit, got dtype={array.dtype}")
        if array.ndim not in (2, 3) or (array.ndim == 3 and array.shape[2] not in (1, 3, 4)):
            raise ValueError(f"Unsupported image shape: {array.shape}")
        if channel_order not in CHANNEL_INDEX:
            raise ValueError(f"Unknown channel order: {channel_order}")

        self._array = array
        self._origin = origin
        self._channel_order = channel_order
        self._luma: Optional[np.ndarray] = None

    @property
    def array(self) -> np.ndarray:
        return self._array

    @property
    def origin(self) -> Point:
        return self._origin

    @property
    def channel_order(self) -> str:
        return self._channel_order

    def bounds(self) -> Rectangle:
        height, width = self._array.shape[:2]
        return Rectangle.from_shape(height, width, self._origin)

    def at(self, x: int, y: int) -> ColorValue:
        pixel = self._array[y - self._origin.y, x - self._origin.x]
        if self._array.ndim == 2:
            return int(pixel)
        if self._array.shape[2] == 1:
            return int(pixel[0])

        ri, gi, bi = CHANNEL_INDEX[self._channel_order]
        alpha = int(pixel[3]) if self._array.shape[2] == 4 else 255
        return Color(int(pixel[ri]), int(pixel[gi]), int(pixel[bi]), alpha)

    def luminance_plane(self) -> np.ndarray:
        if self._luma is None:
            self._luma = luminance_array(self._array, self._channel_order)
        return self._luma

    def sub_image(self, rect: Rectangle) -> "NumpyRaster":
        region = rect.intersect(self.bounds())
        if region.empty:
            region = Rectangle(self._origin, self._origin)

        x0 = region.min.x - self._origin.x
        y0 = region.min.y - self._origin.y
        view = self._array[y0:y0 + region.height, x0:x0 + region.width]
        return NumpyRaster(view, origin=region.min, channel_order=self._channel_order)

    def __repr__(self) -> str:
        return f"NumpyRaster(bounds={self.bounds()}, shape={self._array.shape})"
