"""Base processor class shared by the autocrop image processors."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np

from ..exceptions import ValidationError
from .image_io import save_image


class BaseProcessor(ABC):
    """Wraps an image function with configuration, validation and debug output."""

    def __init__(self, config: Optional[Any] = None):
        self.config = config
        self.debug_images: Dict[str, np.ndarray] = {}

    def get_config_value(self, path: str, default: Any) -> Any:
        """Look up a dotted attribute path such as ``"output.jpeg_quality"``."""
        value = self.config
        for name in path.split("."):
            if value is None:
                return default
            value = getattr(value, name, None)
        return default if value is None else value

    @abstractmethod
    def process(self, image: np.ndarray, **kwargs) -> Any:
        """Process an image. Must be implemented by subclasses."""

    def validate_image(self, image: np.ndarray) -> None:
        """Reject anything that is not a non-empty 8-bit gray, BGR or BGRA array."""
        if image is None:
            raise ValidationError("Image cannot be None")
        if not isinstance(image, np.ndarray):
            raise ValidationError(f"Image must be a numpy array, got {type(image).__name__}")
        if image.size == 0:
            raise ValidationError("Image cannot be empty")
        if image.dtype != np.uint8:
            raise ValidationError(f"Image must be 8-bit, got dtype={image.dtype}")
        if image.ndim not in (2, 3) or (image.ndim == 3 and image.shape[2] not in (1, 3, 4)):
            raise ValidationError(f"Unsupported image shape: {image.shape}")

    def debug_enabled(self) -> bool:
        return bool(self.get_config_value("output.save_debug_images", False))

    def save_debug_image(self, name: str, image: np.ndarray) -> None:
        """Keep ``image`` under ``name`` until the next call to :meth:`clear_debug_images`."""
        if self.debug_enabled():
            self.debug_images[name] = image

    def get_debug_images(self) -> Dict[str, np.ndarray]:
        return self.debug_images

    def clear_debug_images(self) -> None:
        self.debug_images = {}

    def save_debug_images_to_dir(self, debug_dir: Path, prefix: str = "") -> List[Path]:
        """Write the kept debug images as ``<prefix>_<name>.png``.

        Returns:
            Paths of the written files

        Raises:
            ImageSaveError: If a file cannot be written
        """
        written = []
        for name, image in self.debug_images.items():
            path = debug_dir / (f"{prefix}_{name}.png" if prefix else f"{name}.png")
            save_image(image, path)
            written.append(path)
        return written
