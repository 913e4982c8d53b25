"""Locating the content rectangle by scanning inward from each side.

Each of the four scans starts on the outermost line of its side and steps
one line at a time towards the opposite side. Lines run perpendicular to
the direction of travel. When line ``p`` is recognised as content, the edge
is the boundary between ``p`` and the margin before it: ``p`` itself for the
left/top scans and ``p + 1`` for the right/bottom scans, which matches the
min-inclusive/max-exclusive rectangle convention.
"""

import logging
from typing import Optional

from .comparator import lines_differ
from .geometry import DOWNWARD, LEFTWARD, RIGHTWARD, UPWARD, Point, Rectangle
from .hashing import hash_line
from .lines import read_line
from .raster import Raster
from .settings import DEFAULT_SETTINGS, ExhaustedEdge, ScanSettings

logger = logging.getLogger(__name__)


def scan_corner(bounds: Rectangle, direction: Point) -> Point:
    """First pixel of the outermost line for a scan in ``direction``."""
    if direction.is_backward():
        return bounds.max - Point(1, 1)
    return bounds.min


def _edge_at(position: Point, direction: Point) -> Point:
    if direction.is_backward():
        return position - direction
    return position


def _exhausted_edge(bounds: Rectangle, direction: Point, settings: ScanSettings) -> Point:
    collapse = ExhaustedEdge(settings.exhausted_edge) is ExhaustedEdge.COLLAPSE
    if direction.is_backward() == collapse:
        return bounds.min
    return bounds.max


def line_has_content(raster: Raster, start: Point, sweep: Point, dark_limit: int = 128) -> bool:
    """True if any pixel on the line is at or below ``dark_limit``."""
    return bool((read_line(raster, start, sweep) <= dark_limit).any())


def find_border(
    raster: Raster,
    direction: Point,
    settings: ScanSettings = DEFAULT_SETTINGS,
) -> Point:
    """Naive scan: stop at the first line holding a single dark pixel.

    Args:
        raster: Pixel source
        direction: One of the four unit direction vectors
        settings: Scan thresholds (only ``dark_limit`` and
            ``exhausted_edge`` are used)

    Returns:
        Point whose coordinate along ``direction`` is the detected edge
    """
    bounds = raster.bounds()
    sweep = direction.transpose()
    position = scan_corner(bounds, direction)

    while bounds.contains(position):
        if line_has_content(raster, position, sweep, settings.dark_limit):
            edge = _edge_at(position, direction)
            logger.debug(f"Dark pixel found scanning {direction}: edge at {edge}")
            return edge
        position = position + direction

    logger.debug(f"No content found scanning {direction}")
    return _exhausted_edge(bounds, direction, settings)


def find_border_hash(
    raster: Raster,
    direction: Point,
    settings: ScanSettings = DEFAULT_SETTINGS,
) -> Point:
    """Hash scan: stop at the first line whose hash departs from the previous one.

    Args:
        raster: Pixel source
        direction: One of the four unit direction vectors
        settings: Hash profile and comparator thresholds

    Returns:
        Point whose coordinate along ``direction`` is the detected edge
    """
    bounds = raster.bounds()
    sweep = direction.transpose()
    position = scan_corner(bounds, direction)

    if bounds.contains(position):
        previous = hash_line(raster, position, sweep, settings)
        position = position + direction

        while bounds.contains(position):
            current = hash_line(raster, position, sweep, settings)
            if lines_differ(previous, current, settings):
                edge = _edge_at(position, direction)
                logger.debug(f"Line hash changed scanning {direction}: edge at {edge}")
                return edge
            previous = current
            position = position + direction

    logger.debug(f"No border found scanning {direction}")
    return _exhausted_edge(bounds, direction, settings)


def _combine(left: Point, right: Point, top: Point, bottom: Point) -> Rectangle:
    return Rectangle.from_coords(left.x, top.y, right.x, bottom.y)


def bounds(raster: Raster, settings: Optional[ScanSettings] = None) -> Rectangle:
    """Content rectangle found with the naive dark-pixel scanner."""
    settings = settings or DEFAULT_SETTINGS
    rect = _combine(
        find_border(raster, RIGHTWARD, settings),
        find_border(raster, LEFTWARD, settings),
        find_border(raster, DOWNWARD, settings),
        find_border(raster, UPWARD, settings),
    )
    logger.debug(f"Naive bounds of {raster.bounds()}: {rect}")
    return rect


def bounds_hash(raster: Raster, settings: Optional[ScanSettings] = None) -> Rectangle:
    """Content rectangle found with the line-hash scanner."""
    settings = settings or DEFAULT_SETTINGS
    rect = _combine(
        find_border_hash(raster, RIGHTWARD, settings),
        find_border_hash(raster, LEFTWARD, settings),
        find_border_hash(raster, DOWNWARD, settings),
        find_border_hash(raster, UPWARD, settings),
    )
    logger.debug(f"Hash bounds of {raster.bounds()}: {rect}")
    return rect
