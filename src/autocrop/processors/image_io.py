"""Image I/O utilities for loading and saving images."""

import logging
from pathlib import Path
from typing import List, Union

import cv2
import numpy as np

from ..exceptions import ImageLoadError, ImageSaveError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

IMAGE_EXTENSIONS = [".jpg", ".jpeg", ".png", ".tif", ".tiff", ".bmp", ".webp"]


def load_image(image_path: PathLike) -> np.ndarray:
    """Load image from file.

    Grayscale and colour images are returned as they are stored; images
    with an alpha channel keep it (BGRA).

    Args:
        image_path: Path to the image file

    Returns:
        numpy array containing the image

    Raises:
        ImageLoadError: If image cannot be loaded
    """
    path = Path(image_path)
    if not path.exists():
        raise ImageLoadError(f"Image file not found: {path}", image_path=str(path))

    image = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    if image is None:
        raise ImageLoadError(f"Could not load image: {path}", image_path=str(path))

    if image.dtype != np.uint8:
        # 16-bit PNG/TIFF: scale down to 8 bits per channel
        image = cv2.convertScaleAbs(image, alpha=255.0 / 65535.0)

    logger.debug(f"Loaded image: {path} ({image.shape}, dtype={image.dtype})")
    return image


def save_image(image: np.ndarray, output_path: PathLike, quality: int = 95) -> None:
    """Save image to file.

    Args:
        image: Image array to save
        output_path: Path where to save the image
        quality: JPEG quality (ignored for other formats)

    Raises:
        ImageSaveError: If image is None, empty or cannot be written
    """
    path = Path(output_path)

    if image is None:
        raise ImageSaveError(f"Cannot save None as image to {path}", image_path=str(path))

    if image.size == 0:
        raise ImageSaveError(f"Cannot save empty image to {path}", image_path=str(path))

    path.parent.mkdir(parents=True, exist_ok=True)

    params = []
    if path.suffix.lower() in ['.jpg', '.jpeg']:
        params = [cv2.IMWRITE_JPEG_QUALITY, quality]

    # Slices of a larger image are not contiguous
    if not cv2.imwrite(str(path), np.ascontiguousarray(image), params):
        raise ImageSaveError(f"OpenCV failed to save image: {path}", image_path=str(path))

    logger.debug(f"Saved image: {path} ({image.shape})")


def get_image_files(directory: PathLike) -> List[Path]:
    """Get all image files from directory.

    Args:
        directory: Directory to search for images

    Returns:
        List of paths to image files, sorted
    """
    directory = Path(directory)
    image_files = set()  # Use set to avoid duplicates on case-insensitive filesystems

    for ext in IMAGE_EXTENSIONS:
        image_files.update(directory.glob(f"*{ext}"))
        image_files.update(directory.glob(f"*{ext.upper()}"))

    return sorted(image_files)
