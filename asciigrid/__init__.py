"""
Image to ASCII Art Converter
============================
Convert decoded raster images into character-grid renderings.

Features:
- Density-based ASCII art with preset or custom character ramps
- Outline mode using Sobel edges with optional hysteresis
- Truecolor or 16-color ANSI output, foreground or background
- Plain text, ANSI and HTML output
- Flips, borders and terminal centering
"""

from asciigrid.color import ColorResolver, resolve_color_mode
from asciigrid.config import ConversionConfig
from asciigrid.constants import CharacterSet, ColorMode, OutputFormat, SizePolicy
from asciigrid.converter import AsciiArtGenerator, AsciiArtResult, convert, image_to_ascii
from asciigrid.edge_detection import EdgeProcessor
from asciigrid.errors import (
    AsciiArtError,
    DegenerateImage,
    InvalidConfiguration,
    UnsupportedColorMode,
)
from asciigrid.formatters import AnsiColorFormatter, HtmlFormatter, PlainFormatter, render
from asciigrid.grid import Cell, OutputGrid
from asciigrid.image import SourceImage

__version__ = "0.1.0"

__all__ = [
    # Main classes
    'AsciiArtGenerator',
    'ConversionConfig',
    'AsciiArtResult',
    'SourceImage',
    'Cell',
    'OutputGrid',

    # Enums
    'ColorMode',
    'OutputFormat',
    'SizePolicy',

    # Character sets
    'CharacterSet',

    # Processors
    'EdgeProcessor',
    'ColorResolver',

    # Formatters
    'PlainFormatter',
    'AnsiColorFormatter',
    'HtmlFormatter',
    'render',

    # Errors
    'AsciiArtError',
    'InvalidConfiguration',
    'DegenerateImage',
    'UnsupportedColorMode',

    # Convenience functions
    'convert',
    'image_to_ascii',
    'resolve_color_mode',
]
