"""
Pytest configuration and shared fixtures for autocrop tests.

Provides synthetic page images and configuration shared by all test modules.
"""

import shutil
import tempfile
from pathlib import Path
from typing import Generator

import numpy as np
import pytest

from autocrop.config import Config, get_default_config
from autocrop.core import Color, NumpyRaster, Rectangle
from autocrop.utils.logging_utils import setup_logging

PAGE_HEIGHT = 128
PAGE_WIDTH = 192


class PixelRaster:
    """Raster exposing only bounds() and at(), with no optional capabilities."""

    def __init__(self, image: np.ndarray):
        self._inner = NumpyRaster(image)

    def bounds(self) -> Rectangle:
        return self._inner.bounds()

    def at(self, x: int, y: int) -> Color:
        return self._inner.at(x, y)


def blank_page(height: int = PAGE_HEIGHT, width: int = PAGE_WIDTH, value: int = 255) -> np.ndarray:
    """Create a uniform BGR page."""
    return np.full((height, width, 3), value, dtype=np.uint8)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def white_page() -> np.ndarray:
    """A blank white page."""
    return blank_page()


@pytest.fixture
def block_page() -> np.ndarray:
    """White page with a solid black block at x in [48, 144), y in [32, 96)."""
    image = blank_page()
    image[32:96, 48:144] = 0
    return image


@pytest.fixture
def offset_block_page() -> np.ndarray:
    """White page with an off-centre black block at x in [30, 100), y in [20, 70)."""
    image = blank_page()
    image[20:70, 30:100] = 0
    return image


@pytest.fixture
def speckled_page(block_page: np.ndarray) -> np.ndarray:
    """The block page plus one isolated dark pixel in the top-left margin."""
    image = block_page.copy()
    image[5, 10] = 0
    return image


@pytest.fixture
def stripe_page() -> np.ndarray:
    """White page crossed by a full-width black stripe at y in [40, 56)."""
    image = blank_page()
    image[40:56, :] = 0
    return image


@pytest.fixture
def framed_page() -> np.ndarray:
    """White page holding a 1px black frame around x in [48, 144), y in [32, 96)."""
    image = blank_page()
    image[32, 48:144] = 0
    image[95, 48:144] = 0
    image[32:96, 48] = 0
    image[32:96, 143] = 0
    return image


@pytest.fixture
def sample_config() -> Config:
    """Create a sample configuration for testing."""
    config = get_default_config()
    config.logging.level = "DEBUG"
    config.logging.use_rich = False
    return config


@pytest.fixture(autouse=True)
def setup_test_logging():
    """Setup logging for tests."""
    setup_logging(
        level="WARNING",  # Only show warnings and errors in tests
        use_rich=False,
        format_style="minimal"
    )


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests (deselect with '-m \"not unit\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )


def pytest_collection_modifyitems(config, items):
    """Add markers based on test location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        else:
            item.add_marker(pytest.mark.integration)
