"""
Image to ASCII Art Converter - Output Formatters
================================================
Serialize an OutputGrid as plain text, ANSI escape sequences or HTML.
"""

import logging
from typing import List, Optional, Tuple

from asciigrid.color import ColorResolver, rgb_to_hex
from asciigrid.config import ConversionConfig
from asciigrid.constants import ANSI_PALETTE, ANSI_RESET, ColorMode, OutputFormat
from asciigrid.errors import UnsupportedColorMode
from asciigrid.grid import Cell, OutputGrid

logger = logging.getLogger(__name__)


# =============================================================================
# PLAIN TEXT OUTPUT
# =============================================================================

class PlainFormatter:
    """Characters only, rows joined by newlines."""

    @staticmethod
    def format_lines(grid: OutputGrid, color_mode: ColorMode = ColorMode.NONE) -> List[str]:
        if color_mode != ColorMode.NONE:
            raise UnsupportedColorMode(
                f"Plain text output cannot represent {color_mode.name} colors"
            )
        return grid.text_lines()

    @classmethod
    def format_grid(cls, grid: OutputGrid, color_mode: ColorMode = ColorMode.NONE) -> str:
        return '\n'.join(cls.format_lines(grid, color_mode))


# =============================================================================
# ANSI COLOR OUTPUT
# =============================================================================

class AnsiColorFormatter:
    """Format a grid with ANSI color codes for terminal output."""

    RESET = ANSI_RESET

    @staticmethod
    def rgb_to_ansi_24bit(r: int, g: int, b: int, foreground: bool = True) -> str:
        """Convert RGB to 24-bit ANSI color code (true color)."""
        code = 38 if foreground else 48
        return f"\033[{code};2;{r};{g};{b}m"

    @staticmethod
    def palette_to_ansi_16(index: int, foreground: bool = True) -> str:
        """Convert a palette index (0-15) to a 16-color ANSI code."""
        base = 30 if foreground else 40
        if index >= 8:
            base += 60
            index -= 8
        return f"\033[{base + index}m"

    @classmethod
    def escape_for(cls, resolved, background: bool) -> str:
        """Escape sequence for a resolved color (RGB tuple or palette index)."""
        if isinstance(resolved, int):
            return cls.palette_to_ansi_16(resolved, not background)
        r, g, b = resolved
        return cls.rgb_to_ansi_24bit(r, g, b, not background)

    @classmethod
    def format_lines(cls, grid: OutputGrid,
                     color_mode: ColorMode = ColorMode.TRUECOLOR,
                     background: bool = False) -> List[str]:
        if color_mode == ColorMode.NONE:
            return grid.text_lines()

        resolver = ColorResolver(color_mode)
        output_lines = []

        for row in grid.rows():
            output = ""
            for cell in row:
                resolved = resolver.resolve(cell.color)
                if resolved is not None:
                    output += cls.escape_for(resolved, background)
                output += cell.char

            output += cls.RESET
            output_lines.append(output)

        return output_lines

    @classmethod
    def format_grid(cls, grid: OutputGrid,
                    color_mode: ColorMode = ColorMode.TRUECOLOR,
                    background: bool = False) -> str:
        """
        Format a grid with ANSI colors.

        Args:
            grid: Assembled output grid
            color_mode: ColorMode.TRUECOLOR, ColorMode.ANSI16 or ColorMode.NONE
            background: Apply color to background instead of foreground

        Returns:
            String with ANSI color codes
        """
        return '\n'.join(cls.format_lines(grid, color_mode, background))


# =============================================================================
# HTML OUTPUT
# =============================================================================

class HtmlFormatter:
    """Format a grid as a minimal HTML document."""

    @staticmethod
    def escape(text: str) -> str:
        return text.replace('&', '&amp;').replace('<', '&lt;').replace('>', '&gt;')

    @staticmethod
    def html_top(title: str = "ASCII Art") -> str:
        return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title}</title>
    <style>* {{font-family: Courier, monospace;}}</style>
</head>
<body>
<pre>"""

    @staticmethod
    def html_bottom() -> str:
        return "\n</pre>\n</body>\n</html>"

    @classmethod
    def colored_char(cls, cell: Cell, hex_color: Optional[str], background: bool) -> str:
        """A single cell, wrapped in a styled span when it carries a color."""
        char = cls.escape(cell.char)
        if hex_color is None:
            return char
        if background:
            return f'<span style="background-color: {hex_color}">{char}</span>'
        if cell.char.isspace():
            return char
        return f'<span style="color: {hex_color}">{char}</span>'

    @classmethod
    def format_grid(cls, grid: OutputGrid,
                    color_mode: ColorMode = ColorMode.TRUECOLOR,
                    background: bool = False) -> str:
        """
        Format a grid as HTML.

        Palette colors are written as the hex value of the palette entry.
        """
        resolver = ColorResolver(color_mode)
        lines = []

        for row in grid.rows():
            line = ""
            for cell in row:
                resolved = resolver.resolve(cell.color)
                if isinstance(resolved, int):
                    resolved = ANSI_PALETTE[resolved]
                hex_color = rgb_to_hex(resolved) if resolved is not None else None
                line += cls.colored_char(cell, hex_color, background)
            lines.append(line)

        return cls.html_top() + '\n'.join(lines) + cls.html_bottom()


# =============================================================================
# RENDERING
# =============================================================================

def _center(lines: List[str], grid: OutputGrid,
            terminal_size: Tuple[int, int], center_x: bool, center_y: bool) -> str:
    columns, rows = terminal_size

    if center_x:
        padding = " " * (max(0, columns - grid.width) // 2)
        lines = [padding + line for line in lines]

    text = '\n'.join(lines)

    if center_y:
        spacing = "\n" * (max(0, rows - grid.height) // 2)
        text = spacing + text + spacing

    return text


def render(grid: OutputGrid, config: ConversionConfig) -> str:
    """
    Serialize a finished grid according to the configured output format.

    Plain text is always colorless: a configured color mode is dropped
    here, with a warning, rather than rejected.
    """
    fmt = config.output_format

    if fmt == OutputFormat.HTML:
        return HtmlFormatter.format_grid(grid, config.color_mode, config.background)

    if fmt == OutputFormat.PLAIN:
        if config.color_mode != ColorMode.NONE:
            logger.warning("Plain text output does not support colors. "
                           "For colored output please use either .html or .ansi files")
        lines = PlainFormatter.format_lines(grid)
    else:
        lines = AnsiColorFormatter.format_lines(grid, config.color_mode, config.background)

    return _center(lines, grid, config.terminal_size, config.center_x, config.center_y)
