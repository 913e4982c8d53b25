"""Border cropping for numpy images."""

from typing import Any, Dict, Optional, Tuple, Union

import cv2
import numpy as np

from .base import BaseProcessor
from ..config import Config, ScanConfig, ScanMethod, get_default_config
from ..core import HashProfile, NumpyRaster, Rectangle, bounds, bounds_hash, crop


class BorderCropProcessor(BaseProcessor):
    """Processor that removes uniform margins around the image content."""

    def __init__(self, config: Optional[Config] = None):
        super().__init__(config or get_default_config())

    def detect_bounds(self, image: np.ndarray) -> Rectangle:
        """Return the content rectangle of ``image`` without cropping."""
        self.validate_image(image)
        return detect_content_bounds(image, self.config.scan)

    def process(
        self,
        image: np.ndarray,
        return_analysis: bool = False,
        **kwargs
    ) -> Union[np.ndarray, Tuple[np.ndarray, Dict[str, Any]]]:
        """Crop the margins off an image.

        Args:
            image: Input image (BGR, BGRA or grayscale)
            return_analysis: If True, also return an analysis dictionary

        Returns:
            Cropped image or (cropped_image, analysis) if return_analysis=True
        """
        self.validate_image(image)
        self.clear_debug_images()

        return crop_borders(
            image,
            self.config.scan,
            return_analysis=return_analysis,
            _processor=self,
        )


def detect_content_bounds(
    image: np.ndarray,
    scan_config: Optional[ScanConfig] = None,
) -> Rectangle:
    """Locate the content rectangle of an image.

    Args:
        image: Input image (BGR, BGRA or grayscale)
        scan_config: Scanner selection and thresholds

    Returns:
        Content rectangle in pixel coordinates of ``image``
    """
    scan_config = scan_config or ScanConfig()
    raster = NumpyRaster(image)
    settings = scan_config.to_settings()

    if ScanMethod(scan_config.method) is ScanMethod.NAIVE:
        return bounds(raster, settings)
    return bounds_hash(raster, settings)


def crop_borders(
    image: np.ndarray,
    scan_config: Optional[ScanConfig] = None,
    return_analysis: bool = False,
    **kwargs
) -> Union[np.ndarray, Tuple[np.ndarray, Dict[str, Any]]]:
    """Crop an image to its content rectangle.

    The returned array is a view into ``image``; copy it before modifying.

    Args:
        image: Input image (BGR, BGRA or grayscale)
        scan_config: Scanner selection and thresholds
        return_analysis: If True, returns additional analysis information

    Returns:
        Cropped image or tuple with analysis if return_analysis=True
    """
    processor = kwargs.get('_processor', None)
    scan_config = scan_config or ScanConfig()

    rect = detect_content_bounds(image, scan_config)
    cropped = crop(NumpyRaster(image), rect)
    crop_rect = cropped.bounds()

    if processor:
        processor.save_debug_image('detected_bounds', draw_bounds(image, crop_rect))

    if not return_analysis:
        return cropped.array

    h, w = image.shape[:2]
    original_area = h * w
    analysis = {
        "method": ScanMethod(scan_config.method).value,
        "profile": HashProfile(scan_config.profile).value,
        "detected_bounds": rect.as_tuple(),
        "crop_bounds": crop_rect.as_tuple(),
        "empty": crop_rect.empty,
        "original_shape": image.shape,
        "cropped_shape": cropped.array.shape,
        "margins_removed": None if crop_rect.empty else {
            "top": crop_rect.min.y,
            "bottom": h - crop_rect.max.y,
            "left": crop_rect.min.x,
            "right": w - crop_rect.max.x,
        },
        "area_retention": crop_rect.area / original_area if original_area > 0 else 0,
    }

    return cropped.array, analysis


def draw_bounds(image: np.ndarray, rect: Rectangle) -> np.ndarray:
    """Return a BGR copy of ``image`` with ``rect`` outlined in green."""
    if image.ndim == 2:
        vis = cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
    elif image.shape[2] == 4:
        vis = cv2.cvtColor(image, cv2.COLOR_BGRA2BGR)
    elif image.shape[2] == 1:
        vis = cv2.cvtColor(image[:, :, 0], cv2.COLOR_GRAY2BGR)
    else:
        vis = image.copy()

    if not rect.empty:
        cv2.rectangle(vis, (rect.min.x, rect.min.y), (rect.max.x - 1, rect.max.y - 1), (0, 255, 0), 2)
    return vis
