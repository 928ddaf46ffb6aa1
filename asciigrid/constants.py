"""
Image to ASCII Art Converter - Constants
========================================
Enums, character presets and palettes shared by the conversion pipeline.
"""

from enum import Enum, auto
from pathlib import Path
from typing import Optional, Tuple, Union


# =============================================================================
# ENUMS
# =============================================================================

class ColorMode(Enum):
    """How cell colors are emitted."""
    NONE = auto()         # Characters only
    ANSI16 = auto()       # Nearest of the 16 standard terminal colors
    TRUECOLOR = auto()    # 24-bit RGB


class OutputFormat(Enum):
    """Serialization target for the finished grid."""
    PLAIN = auto()
    ANSI = auto()
    HTML = auto()

    @classmethod
    def from_path(cls, path: Optional[Union[str, Path]]) -> 'OutputFormat':
        """Infer the output format from a file extension (terminal if None)."""
        if path is None:
            return cls.ANSI

        ext = Path(path).suffix.lower()
        if ext in ('.html', '.htm'):
            return cls.HTML
        elif ext in ('.ansi', '.ans'):
            return cls.ANSI
        return cls.PLAIN


class SizePolicy(Enum):
    """Which axis the target size bounds."""
    EXPLICIT = auto()     # User supplied cell count (columns)
    FIT_WIDTH = auto()    # Terminal columns
    FIT_HEIGHT = auto()   # Terminal rows


class EdgeDirection(Enum):
    """Edge orientation buckets, indexed like the outline ramp."""
    VERTICAL = 0
    DIAGONAL_UP = 1
    HORIZONTAL = 2
    DIAGONAL_DOWN = 3


# =============================================================================
# SIZE LIMITS
# =============================================================================

MIN_SIZE = 20                # Smaller output is barely recognisable
MAX_SIZE = 230               # Wider output wraps on most terminals
DEFAULT_RATIO = 0.43         # Width/height of a monospace character cell
MIN_RATIO = 0.0
MAX_RATIO = 2.0
DEFAULT_TERMINAL_SIZE = (80, 24)
DEFAULT_THREADS = 4


# =============================================================================
# CHARACTER SETS
# =============================================================================

class CharacterSet:
    """Predefined character ramps (densest first)."""

    SHORT: str = "Ñ@#W$9876543210?!abc;:+=-,._ "
    FLAT: str = "MWNXK0Okxdolc:;,'...   "
    LONG: str = "$@B%8&WM#*oahkbdpqwmZO0QLCJUYXzcvunxrjft/\\|()1{}[]?-_+~<>i!lI;:,\"^`'. "

    # One character per EdgeDirection, followed by the blank
    OUTLINE: str = "|/_\\ "

    DEFAULT: str = FLAT

    @classmethod
    def get_preset(cls, name: str) -> str:
        """
        Resolve a preset name or index to its ramp.

        Names are matched exactly (lowercase). Anything else is treated as a
        literal ramp, so any user string can be passed straight through.
        """
        presets = {
            '0': cls.SHORT,
            's': cls.SHORT,
            'short': cls.SHORT,
            '1': cls.FLAT,
            'f': cls.FLAT,
            'flat': cls.FLAT,
            '2': cls.LONG,
            'l': cls.LONG,
            'long': cls.LONG,
        }
        return presets.get(name, name)


# =============================================================================
# BORDER
# =============================================================================

BORDER_TOP_LEFT = '╔'
BORDER_TOP_RIGHT = '╗'
BORDER_BOTTOM_LEFT = '╚'
BORDER_BOTTOM_RIGHT = '╝'
BORDER_HORIZONTAL = '═'
BORDER_VERTICAL = '║'


# =============================================================================
# ANSI PALETTE
# =============================================================================

# VGA values, in SGR order: 30-37 then 90-97
ANSI_PALETTE: Tuple[Tuple[int, int, int], ...] = (
    (0, 0, 0),          # black
    (170, 0, 0),        # red
    (0, 170, 0),        # green
    (170, 85, 0),       # yellow
    (0, 0, 170),        # blue
    (170, 0, 170),      # magenta
    (0, 170, 170),      # cyan
    (170, 170, 170),    # white
    (128, 128, 128),    # bright black
    (255, 0, 0),        # bright red
    (0, 255, 0),        # bright green
    (255, 255, 0),      # bright yellow
    (0, 0, 255),        # bright blue
    (255, 0, 255),      # bright magenta
    (0, 255, 255),      # bright cyan
    (255, 255, 255),    # bright white
)

ANSI_RESET = "\033[0m"
