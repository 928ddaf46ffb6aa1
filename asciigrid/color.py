"""
Image to ASCII Art Converter - Color Resolution
===============================================
Per-cell representative colors and the terminal color-capability signals
used when building a configuration.
"""

import logging
import os
from typing import Mapping, Optional, Tuple, Union

import numpy as np

from asciigrid.config import ConversionConfig
from asciigrid.constants import ANSI_PALETTE, ColorMode

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]


def average_color(block: np.ndarray) -> RGB:
    """
    Arithmetic mean color of a pixel block.

    Args:
        block: Array of shape (..., 3+) holding RGB(A) pixels

    Returns:
        Rounded (r, g, b), or black for an empty block
    """
    if block.size == 0:
        return (0, 0, 0)

    flat = np.asarray(block, dtype=np.float64).reshape(-1, block.shape[-1])
    mean = flat[:, :3].mean(axis=0)
    if not np.all(np.isfinite(mean)):
        return (0, 0, 0)

    r, g, b = (int(round(c)) for c in np.clip(mean, 0, 255))
    return (r, g, b)


def nearest_ansi16(rgb: RGB) -> int:
    """Index of the nearest ANSI palette color by Euclidean distance."""
    r, g, b = rgb
    best_index = 7
    best_distance = None

    for index, (pr, pg, pb) in enumerate(ANSI_PALETTE):
        distance = (r - pr) ** 2 + (g - pg) ** 2 + (b - pb) ** 2
        if best_distance is None or distance < best_distance:
            best_distance = distance
            best_index = index

    return best_index


def rgb_to_hex(rgb: RGB) -> str:
    """Convert an RGB tuple to ``#RRGGBB``."""
    r, g, b = rgb
    return f"#{r:02X}{g:02X}{b:02X}"


class ColorResolver:
    """Decide how a cell's color is represented for the configured mode."""

    def __init__(self, mode: ColorMode = ColorMode.TRUECOLOR):
        self.mode = mode

    @classmethod
    def from_config(cls, config: ConversionConfig) -> 'ColorResolver':
        return cls(config.color_mode)

    def resolve(self, rgb: Optional[RGB]) -> Optional[Union[RGB, int]]:
        """
        Resolve a cell color.

        Returns:
            None for ColorMode.NONE (or no color), the RGB tuple unchanged for
            truecolor, or the palette index for 16-color output
        """
        if rgb is None or self.mode == ColorMode.NONE:
            return None
        if self.mode == ColorMode.ANSI16:
            return nearest_ansi16(rgb)
        return rgb


# =============================================================================
# ENVIRONMENT SIGNALS
# =============================================================================

def supports_truecolor(environ: Optional[Mapping[str, str]] = None) -> bool:
    """True when ``COLORTERM`` advertises 24-bit color."""
    environ = os.environ if environ is None else environ
    value = environ.get('COLORTERM', '')
    return 'truecolor' in value or '24bit' in value


def color_disabled(environ: Optional[Mapping[str, str]] = None) -> bool:
    """True when the ``NO_COLOR`` convention asks for colorless output."""
    environ = os.environ if environ is None else environ
    return bool(environ.get('NO_COLOR'))


def resolve_color_mode(no_color: bool = False,
                       environ: Optional[Mapping[str, str]] = None) -> ColorMode:
    """
    Pick the color mode for a run.

    The environment's ``NO_COLOR`` always wins over explicit color requests;
    otherwise truecolor is used when the terminal advertises it and the
    16-color palette when it does not.
    """
    if color_disabled(environ):
        logger.info("NO_COLOR is set, disabling color")
        return ColorMode.NONE
    if no_color:
        logger.info("Using non-colored ascii")
        return ColorMode.NONE
    if supports_truecolor(environ):
        logger.info("Using truecolor ascii")
        return ColorMode.TRUECOLOR

    logger.warning("Truecolor is not supported. Using ansi color.")
    return ColorMode.ANSI16
