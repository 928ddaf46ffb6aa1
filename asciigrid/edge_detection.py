#!/usr/bin/env python3
"""
Image to ASCII Art Converter - Edge Detection
=============================================
This module contains the EdgeProcessor class used by outline mode.

The chain is loosely based on Canny: grayscale, Gaussian blur, Sobel
gradients, non-maximum suppression, then either a single threshold or
hysteresis edge linking. It runs on the full-resolution source so the
resulting edge map shares the source's sub-block bounds.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
from scipy import ndimage

from asciigrid.config import ConversionConfig
from asciigrid.constants import EdgeDirection
from asciigrid.density import grayscale
from asciigrid.image import SourceImage

logger = logging.getLogger(__name__)

# Sobel magnitudes are amplified before clipping to the 0-255 range
EDGE_GAIN = 3.0


@dataclass(frozen=True)
class EdgeMap:
    """Per-pixel edge strength (0 where there is no edge) and direction bucket."""
    strength: np.ndarray
    buckets: np.ndarray


class EdgeProcessor:
    """Outline-mode edge detection and character mapping."""

    # Neighbour offsets (dy, dx) along the gradient for each direction bucket
    GRADIENT_NEIGHBOURS = {
        EdgeDirection.VERTICAL.value: (0, 1),
        EdgeDirection.DIAGONAL_UP.value: (1, 1),
        EdgeDirection.HORIZONTAL.value: (1, 0),
        EdgeDirection.DIAGONAL_DOWN.value: (1, -1),
    }

    @staticmethod
    def gauss_kernel(sigma: float) -> np.ndarray:
        """Build a normalised 3x3 Gaussian kernel."""
        if sigma <= 0:
            raise ValueError(f"The given sigma {sigma} was smaller or equal to zero")

        s = 2.0 * sigma * sigma
        kernel = np.zeros((3, 3), dtype=np.float64)
        for y in range(-1, 2):
            for x in range(-1, 2):
                kernel[y + 1, x + 1] = math.exp(-(x * x + y * y) / s) / (math.pi * s)

        return kernel / kernel.sum()

    @staticmethod
    def blur(gray: np.ndarray, sigma: float) -> np.ndarray:
        """Gaussian blur with edge pixels repeated past the border."""
        kernel = EdgeProcessor.gauss_kernel(sigma)
        return ndimage.convolve(gray, kernel, mode='nearest')

    @staticmethod
    def sobel(gray: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """
        Apply the Sobel operator.

        Returns:
            Tuple of (magnitude clipped to 0-255, direction in radians)
        """
        sobel_x = np.array([[-1, 0, 1], [-2, 0, 2], [-1, 0, 1]], dtype=np.float64)
        sobel_y = np.array([[-1, -2, -1], [0, 0, 0], [1, 2, 1]], dtype=np.float64)

        gx = ndimage.convolve(gray, sobel_x, mode='nearest')
        gy = ndimage.convolve(gray, sobel_y, mode='nearest')

        magnitude = np.clip(np.sqrt(gx**2 + gy**2) * EDGE_GAIN, 0, 255)
        direction = np.arctan2(gy, gx)

        return magnitude, direction

    @staticmethod
    def quantize_direction(direction: np.ndarray) -> np.ndarray:
        """
        Bucket gradient angles into the four EdgeDirection values.

        The edge runs perpendicular to the gradient, so a horizontal
        gradient (0 degrees) is a vertical edge.
        """
        deg = np.rad2deg(direction) % 180
        buckets = np.full(deg.shape, EdgeDirection.VERTICAL.value, dtype=np.uint8)
        buckets[(deg >= 22.5) & (deg < 67.5)] = EdgeDirection.DIAGONAL_UP.value
        buckets[(deg >= 67.5) & (deg < 112.5)] = EdgeDirection.HORIZONTAL.value
        buckets[(deg >= 112.5) & (deg < 157.5)] = EdgeDirection.DIAGONAL_DOWN.value
        return buckets

    @classmethod
    def non_max_suppression(cls, magnitude: np.ndarray, buckets: np.ndarray) -> np.ndarray:
        """Zero every pixel that is not a local maximum along its gradient."""
        rows, cols = magnitude.shape
        padded = np.pad(magnitude, 1, mode='constant', constant_values=0)
        result = np.zeros_like(magnitude)

        for bucket, (dy, dx) in cls.GRADIENT_NEIGHBOURS.items():
            mask = buckets == bucket
            if not mask.any():
                continue

            ahead = padded[1 + dy:1 + dy + rows, 1 + dx:1 + dx + cols]
            behind = padded[1 - dy:1 - dy + rows, 1 - dx:1 - dx + cols]
            keep = mask & (magnitude >= ahead) & (magnitude >= behind)
            result[keep] = magnitude[keep]

        return result

    @staticmethod
    def threshold(magnitude: np.ndarray, value: float) -> np.ndarray:
        """Single-threshold edge mask."""
        return magnitude >= value

    @staticmethod
    def hysteresis(magnitude: np.ndarray, low: float, high: float) -> np.ndarray:
        """
        Edge tracking by hysteresis.

        Pixels at or above ``high`` are edges; pixels at or above ``low`` are
        kept when 8-connected (through other candidates) to such a pixel.
        """
        strong = magnitude >= high
        candidates = magnitude >= low

        labels, count = ndimage.label(candidates, structure=np.ones((3, 3), dtype=bool))
        if count == 0:
            return strong

        linked = np.unique(labels[strong])
        linked = linked[linked > 0]
        return np.isin(labels, linked)

    @classmethod
    def detect(cls, image: SourceImage, config: ConversionConfig) -> EdgeMap:
        """
        Detect edges on the full-resolution source image.

        Args:
            image: Source image
            config: Conversion configuration (sigma, thresholds, hysteresis)

        Returns:
            EdgeMap with the same dimensions as the source
        """
        logger.info("Detecting edges on %dx%d source", image.width, image.height)
        gray = grayscale(image.rgb)
        gray = cls.blur(gray, config.blur_sigma)

        magnitude, direction = cls.sobel(gray)
        buckets = cls.quantize_direction(direction)
        thinned = cls.non_max_suppression(magnitude, buckets)

        if config.hysteresis:
            logger.debug("Hysteresis thresholds: low=%.1f high=%.1f",
                         config.low_threshold, config.high_threshold)
            edges = cls.hysteresis(thinned, config.low_threshold, config.high_threshold)
        else:
            logger.debug("Single threshold: %.1f", config.high_threshold)
            edges = cls.threshold(thinned, config.high_threshold)

        strength = np.where(edges, thinned, 0.0)
        logger.debug("Edge pixels: %d", int(np.count_nonzero(strength)))

        return EdgeMap(strength=strength, buckets=buckets)

    @staticmethod
    def aggregate(edge_map: EdgeMap, bounds) -> Tuple[float, Optional[int]]:
        """
        Reduce a sub-block to its strongest edge pixel.

        Returns:
            Tuple of (edge strength, direction bucket), or (0.0, None) when the
            block holds no edge
        """
        x0, y0, x1, y1 = bounds
        block = edge_map.strength[y0:y1, x0:x1]
        if block.size == 0:
            return 0.0, None

        idx = int(np.argmax(block))
        value = float(block.flat[idx])
        if value <= 0:
            return 0.0, None

        return value, int(edge_map.buckets[y0:y1, x0:x1].flat[idx])

    @staticmethod
    def edge_char(bucket: Optional[int], charset: str) -> str:
        """Directional character for a bucket; the last character is the blank."""
        if bucket is None:
            return charset[-1]
        return charset[bucket]
