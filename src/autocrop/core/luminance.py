"""Perceptual luminance of pixel colours.

Uses the conventional integer luma weights (0.299, 0.587, 0.114 scaled to
16 bits) applied to 16-bit channel values, so an 8-bit input channel ``c``
is widened to ``c * 0x101`` before weighting.
"""

from typing import Sequence, Union

import numpy as np

R_WEIGHT = 19595
G_WEIGHT = 38470
B_WEIGHT = 7471

# Channel positions inside the last array axis for each supported order.
CHANNEL_INDEX = {
    "BGR": (2, 1, 0),
    "RGB": (0, 1, 2),
}


def _luma16(r: int, g: int, b: int) -> int:
    return (R_WEIGHT * r + G_WEIGHT * g + B_WEIGHT * b + (1 << 15)) >> 24


def luminance(color: Union[int, Sequence[int]]) -> int:
    """Return the 8-bit luminance (0 = darkest, 255 = lightest) of a colour.

    Args:
        color: Either an 8-bit gray value or an ``(r, g, b[, a])`` sequence
            of 8-bit channels.

    Returns:
        Luminance in ``[0, 255]``
    """
    if isinstance(color, (int, np.integer)):
        return min(max(int(color), 0), 255)

    r, g, b = (int(c) * 0x101 for c in color[:3])
    return _luma16(r, g, b)


def luminance_array(image: np.ndarray, channel_order: str = "BGR") -> np.ndarray:
    """Vectorised :func:`luminance` over a whole image.

    Args:
        image: ``HxW`` gray, ``HxWx1``, ``HxWx3`` or ``HxWx4`` uint8 array
        channel_order: Order of the colour channels ("BGR" for OpenCV
            images, "RGB" otherwise); alpha, if present, is ignored

    Returns:
        ``HxW`` uint8 luminance plane
    """
    if image.ndim == 2:
        return image.astype(np.uint8, copy=False)
    if image.shape[2] == 1:
        return image[:, :, 0].astype(np.uint8, copy=False)

    ri, gi, bi = CHANNEL_INDEX[channel_order]
    wide = image.astype(np.int64) * 0x101
    luma = (R_WEIGHT * wide[:, :, ri] + G_WEIGHT * wide[:, :, gi]
            + B_WEIGHT * wide[:, :, bi] + (1 << 15)) >> 24
    return luma.astype(np.uint8)
