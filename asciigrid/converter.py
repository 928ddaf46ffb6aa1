"""
Image to ASCII Art Converter - Pipeline
=======================================
Resize, map, color and assemble a source image into rendered text.

Every cell is a pure function of its source sub-block and the config, so
rows are computed on a thread pool and merged in order before rendering.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from PIL import Image
import numpy as np

from asciigrid.color import average_color
from asciigrid.config import ConversionConfig
from asciigrid.density import density_char, luminosity
from asciigrid.edge_detection import EdgeMap, EdgeProcessor
from asciigrid.formatters import render
from asciigrid.grid import Cell, OutputGrid
from asciigrid.image import SourceImage
from asciigrid.resize import block_bounds, calculate_dimensions

logger = logging.getLogger(__name__)


@dataclass
class AsciiArtResult:
    """Result of ASCII art generation."""
    text: str                                          # Rendered output
    grid: OutputGrid                                   # Final grid (transforms applied)
    width: int = 0                                     # Grid columns, border included
    height: int = 0                                    # Grid rows, border included
    original_size: Tuple[int, int] = (0, 0)            # Source (width, height)

    @property
    def lines(self) -> List[str]:
        return self.grid.text_lines()


class AsciiArtGenerator:
    """Main class for generating ASCII art from images."""

    def __init__(self, config: Optional[ConversionConfig] = None):
        """Initialize with optional configuration."""
        self.config = config or ConversionConfig()

    def _fallback_cell(self, bounds) -> Cell:
        ramp = self.config.outline_characters if self.config.outline else self.config.characters
        return Cell(ramp[-1], 0.0, (0, 0, 0), bounds)

    def _make_cell(self, rgb: np.ndarray, bounds: Tuple[int, int, int, int],
                   edge_map: Optional[EdgeMap]) -> Cell:
        x0, y0, x1, y1 = bounds
        block = rgb[y0:y1, x0:x1]
        if block.size == 0:
            logger.debug("Empty sub-block at %s, using fallback cell", bounds)
            return self._fallback_cell(bounds)

        if edge_map is not None:
            value, bucket = EdgeProcessor.aggregate(edge_map, bounds)
            char = EdgeProcessor.edge_char(bucket, self.config.outline_characters)
            gray = int(round(value))
            return Cell(char, value, (gray, gray, gray), bounds)

        mean = block.reshape(-1, 3).mean(axis=0)
        value = float(luminosity(mean[0], mean[1], mean[2]))
        if not np.isfinite(value):
            logger.debug("Non-finite brightness at %s, using fallback cell", bounds)
            return self._fallback_cell(bounds)

        char = density_char(value, self.config.characters, self.config.invert)
        return Cell(char, value, average_color(block), bounds)

    def _convert_row(self, rgb: np.ndarray, bounds: np.ndarray, columns: int,
                     row: int, edge_map: Optional[EdgeMap]) -> List[Cell]:
        start = row * columns
        return [
            self._make_cell(rgb, tuple(int(v) for v in bounds[idx]), edge_map)
            for idx in range(start, start + columns)
        ]

    def build_grid(self, source: SourceImage) -> OutputGrid:
        """Compute every cell and apply the geometric transforms."""
        config = self.config
        logger.debug("Input image: %dx%d", source.width, source.height)

        columns, rows = calculate_dimensions(source.width, source.height, config)
        bounds = block_bounds(source.width, source.height, columns, rows)
        logger.debug("Columns: %d, Rows: %d", columns, rows)

        edge_map = None
        if config.outline:
            edge_map = EdgeProcessor.detect(source, config)

        rgb = source.rgb
        workers = min(config.threads, rows)
        logger.info("Starting conversion to ascii (%d worker(s))", workers)

        if workers > 1:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                row_cells = list(executor.map(
                    lambda row: self._convert_row(rgb, bounds, columns, row, edge_map),
                    range(rows),
                ))
        else:
            row_cells = [self._convert_row(rgb, bounds, columns, row, edge_map)
                         for row in range(rows)]

        cells = [cell for row in row_cells for cell in row]
        grid = OutputGrid(cells, columns, rows)

        if config.flip_x:
            logger.info("Flipping image horizontally")
            grid = grid.flip_x()
        if config.flip_y:
            logger.info("Flipping image vertically")
            grid = grid.flip_y()
        if config.border:
            grid = grid.with_border()

        return grid

    def generate(self, image: Union[SourceImage, Image.Image, np.ndarray]) -> AsciiArtResult:
        """
        Generate ASCII art from an image.

        Args:
            image: SourceImage, PIL Image or numpy pixel array

        Returns:
            AsciiArtResult containing the rendered text and the grid
        """
        source = as_source_image(image)
        grid = self.build_grid(source)
        text = render(grid, self.config)

        return AsciiArtResult(
            text=text,
            grid=grid,
            width=grid.width,
            height=grid.height,
            original_size=source.size,
        )


def as_source_image(image: Union[SourceImage, Image.Image, np.ndarray]) -> SourceImage:
    if isinstance(image, SourceImage):
        return image
    if isinstance(image, Image.Image):
        return SourceImage.from_pil(image)
    return SourceImage.from_array(image)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def convert(image: Union[SourceImage, Image.Image, np.ndarray],
            config: Optional[ConversionConfig] = None) -> str:
    """Convert an image to its rendered text."""
    return AsciiArtGenerator(config).generate(image).text


def image_to_ascii(image: Union[SourceImage, Image.Image, np.ndarray],
                   **kwargs) -> AsciiArtResult:
    """
    Convenience function to convert an image to ASCII art.

    Args:
        image: Image to convert
        **kwargs: ConversionConfig fields

    Returns:
        AsciiArtResult
    """
    return AsciiArtGenerator(ConversionConfig(**kwargs)).generate(image)
