"""
Image to ASCII Art Converter - Resizing
=======================================
Target grid dimensions and the source sub-block behind every cell.
"""

import logging
from typing import Tuple

import numpy as np

from asciigrid.config import ConversionConfig, clamp
from asciigrid.constants import SizePolicy
from asciigrid.errors import DegenerateImage

logger = logging.getLogger(__name__)


def calculate_dimensions(width: int, height: int,
                         config: ConversionConfig) -> Tuple[int, int]:
    """
    Calculate the interior grid size for a ``width`` x ``height`` source.

    The policy axis is bounded by ``config.target_size`` and by the source
    itself (a cell never covers less than one pixel); the other axis follows
    from the source aspect ratio times the character ratio. With a border the
    interior shrinks by two cells on the policy axis so that the bordered
    total still matches the requested size.

    Args:
        width: Source width in pixels
        height: Source height in pixels
        config: Resolved conversion configuration

    Returns:
        Tuple of (columns, rows), border excluded
    """
    if width <= 0 or height <= 0:
        raise DegenerateImage(f"Cannot resize a {width}x{height} image")

    target = config.target_size
    ratio = config.ratio

    if config.size_policy == SizePolicy.FIT_HEIGHT:
        # Leave the last terminal row for the shell prompt
        rows = target - 1 if height > target else height
        if config.border:
            rows = max(1, rows - 2)

        if ratio > 0:
            columns = int(round(rows * (width / height) / ratio))
        else:
            columns = width
        columns = clamp(columns, 1, width)
    else:
        columns = min(target, width)
        if config.border:
            columns = max(1, columns - 2)

        rows = int(round(columns * (height / width) * ratio))
        rows = clamp(rows, 1, height)

    logger.debug("Grid for %dx%d source: %d columns, %d rows", width, height, columns, rows)
    return columns, rows


def block_bounds(width: int, height: int, columns: int, rows: int) -> np.ndarray:
    """
    Split the source into ``columns`` x ``rows`` rectangular sub-blocks.

    Block edges sit at ``floor(i * size / count)``, so the last row and
    column end exactly on the image edge and absorb any remainder.

    Returns:
        Array of shape (rows * columns, 4) holding (x0, y0, x1, y1) per cell,
        row-major
    """
    if width <= 0 or height <= 0:
        raise DegenerateImage(f"Cannot split a {width}x{height} image")

    xs = (np.arange(columns + 1) * width) // columns
    ys = (np.arange(rows + 1) * height) // rows

    x0, y0 = np.meshgrid(xs[:-1], ys[:-1])
    x1, y1 = np.meshgrid(xs[1:], ys[1:])

    return np.stack([x0.ravel(), y0.ravel(), x1.ravel(), y1.ravel()], axis=1)
