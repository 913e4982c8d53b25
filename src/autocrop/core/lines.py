"""Reading scan-lines out of a raster."""

import numpy as np

from .geometry import Point
from .luminance import luminance
from .raster import LuminanceSource, Raster


def read_line(raster: Raster, start: Point, sweep: Point) -> np.ndarray:
    """Return the luminance of every pixel from ``start`` to the raster edge.

    Args:
        raster: Pixel source
        start: First pixel of the line
        sweep: Unit vector along the line

    Returns:
        1-D uint8 array, empty if ``start`` lies outside the raster
    """
    bounds = raster.bounds()
    if not bounds.contains(start):
        return np.empty(0, dtype=np.uint8)

    if isinstance(raster, LuminanceSource):
        plane = raster.luminance_plane()
        col = start.x - bounds.min.x
        row = start.y - bounds.min.y
        if sweep.x > 0:
            return plane[row, col:]
        if sweep.x < 0:
            return plane[row, col::-1]
        if sweep.y > 0:
            return plane[row:, col]
        return plane[row::-1, col]

    values = []
    point = start
    while bounds.contains(point):
        values.append(luminance(raster.at(point.x, point.y)))
        point = point + sweep
    return np.asarray(values, dtype=np.uint8)
