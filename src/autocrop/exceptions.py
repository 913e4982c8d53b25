"""
Exceptions raised by autocrop.

Every exception carries a human readable ``message`` plus a ``details``
dict of context (which raster type, which file, ...) that is appended
when the exception is printed.
"""

from typing import Any, Dict, Optional


def _context(**values: Any) -> Dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}


class AutocropError(Exception):
    """Base exception for all autocrop errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = dict(details or {})

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({context})"


class CapabilityError(AutocropError):
    """A raster lacks an optional capability an operation needs."""

    def __init__(self, message: str, capability: Optional[str] = None,
                 raster_type: Optional[str] = None, **details: Any) -> None:
        super().__init__(message, _context(capability=capability, raster_type=raster_type, **details))
        self.capability = capability


class ConfigurationError(AutocropError):
    """Configuration could not be read or failed validation."""


class ProcessingError(AutocropError):
    """An image file could not be processed."""

    def __init__(self, message: str, processor: Optional[str] = None,
                 image_path: Optional[str] = None, **details: Any) -> None:
        super().__init__(message, _context(processor=processor, image_path=image_path, **details))
        self.image_path = image_path


class ImageLoadError(ProcessingError):
    """An image file is missing or cannot be decoded."""


class ImageSaveError(ProcessingError):
    """An image cannot be encoded or written."""


class ValidationError(AutocropError):
    """Input data is not a usable image."""
