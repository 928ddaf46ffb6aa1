"""
Image to ASCII Art Converter - Density Mapping
==============================================
Brightness to ramp character mapping.

Brightness uses the Rec. 601 luma weights (the same ones PIL applies in
``convert('L')``): ``0.299 R + 0.587 G + 0.114 B``. A block's brightness is
the luma of its mean color, which equals the mean luma since the formula
is linear.
"""

import math

import numpy as np

LUMA_WEIGHTS = (0.299, 0.587, 0.114)


def luminosity(red, green, blue):
    """Perceptual brightness in [0, 255]; works on scalars and arrays."""
    return LUMA_WEIGHTS[0] * red + LUMA_WEIGHTS[1] * green + LUMA_WEIGHTS[2] * blue


def grayscale(rgb: np.ndarray) -> np.ndarray:
    """Convert an (H, W, 3+) array to float64 brightness of shape (H, W)."""
    rgb = np.asarray(rgb, dtype=np.float64)
    return luminosity(rgb[..., 0], rgb[..., 1], rgb[..., 2])


def density_index(brightness: float, ramp_length: int, invert: bool = False) -> int:
    """
    Map a brightness value onto a ramp index.

    ``index = floor(brightness / 256 * ramp_length)``, clamped to the ramp,
    so dark values land on the dense end (index 0). Non-finite input falls
    back to the lightest character regardless of ``invert``.
    """
    if ramp_length < 1:
        raise ValueError("ramp must contain at least one character")

    if not math.isfinite(brightness):
        return ramp_length - 1

    index = int(math.floor(brightness / 256.0 * ramp_length))
    index = max(0, min(ramp_length - 1, index))

    if invert:
        index = ramp_length - 1 - index
    return index


def density_char(brightness: float, ramp: str, invert: bool = False) -> str:
    """Get the ramp character for a brightness value."""
    return ramp[density_index(brightness, len(ramp), invert)]
