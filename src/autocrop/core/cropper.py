"""Cropping a raster to its content rectangle."""

import logging
from typing import Optional

from ..exceptions import CapabilityError
from .geometry import Rectangle
from .raster import Raster, SubImager
from .scanner import bounds_hash
from .settings import ScanSettings

logger = logging.getLogger(__name__)


def crop(raster: Raster, rect: Rectangle) -> Raster:
    """Return a view of ``raster`` restricted to ``rect``.

    The rectangle is clipped to the raster bounds. An empty rectangle
    produces an empty view anchored at the raster's min corner.

    Raises:
        CapabilityError: If the raster cannot produce sub-views
    """
    if not isinstance(raster, SubImager):
        raise CapabilityError(
            "image does not support cropping",
            capability="sub_image",
            raster_type=type(raster).__name__,
        )

    raster_bounds = raster.bounds()
    region = rect.intersect(raster_bounds)
    if region.empty:
        logger.warning(f"Crop rectangle {rect} leaves no content inside {raster_bounds}")
        region = Rectangle(raster_bounds.min, raster_bounds.min)

    return raster.sub_image(region)


def auto(raster: Raster, settings: Optional[ScanSettings] = None) -> Raster:
    """Locate the content with the hash scanner and crop to it."""
    return crop(raster, bounds_hash(raster, settings))
