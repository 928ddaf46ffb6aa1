"""
Image to ASCII Art Converter - Configuration
============================================
The resolved, immutable settings passed to every pipeline stage.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from asciigrid.constants import (
    CharacterSet,
    ColorMode,
    OutputFormat,
    SizePolicy,
    DEFAULT_RATIO,
    DEFAULT_TERMINAL_SIZE,
    DEFAULT_THREADS,
    MAX_RATIO,
    MAX_SIZE,
    MIN_RATIO,
    MIN_SIZE,
)
from asciigrid.errors import InvalidConfiguration


def clamp(value, lower, upper):
    """Clamp *value* into ``[lower, upper]``."""
    return max(lower, min(upper, value))


@dataclass(frozen=True)
class ConversionConfig:
    """Configuration for a single conversion."""

    # Character ramp, densest first (preset name/index or literal string)
    characters: str = CharacterSet.DEFAULT

    # Size parameters
    size: Optional[int] = None                          # Explicit column count
    fit_width: bool = False                             # Bound by terminal columns
    fit_height: bool = False                            # Bound by terminal rows
    terminal_size: Tuple[int, int] = DEFAULT_TERMINAL_SIZE
    ratio: float = DEFAULT_RATIO                        # Character aspect correction

    # Output
    color_mode: ColorMode = ColorMode.TRUECOLOR
    output_format: OutputFormat = OutputFormat.ANSI
    background: bool = False                            # Color the cell background

    # Transforms
    invert: bool = False
    flip_x: bool = False
    flip_y: bool = False
    border: bool = False
    center_x: bool = False
    center_y: bool = False

    # Outline mode
    outline: bool = False
    hysteresis: bool = False
    outline_characters: str = CharacterSet.OUTLINE
    blur_sigma: float = 1.4
    high_threshold: float = 255 * 0.5
    low_threshold: float = 255 * 0.3

    # Worker pool size for cell computation
    threads: int = DEFAULT_THREADS

    def __post_init__(self):
        characters = CharacterSet.get_preset(self.characters) if self.characters else ''
        if not characters:
            raise InvalidConfiguration("character ramp must not be empty")
        if len(self.outline_characters) < 5:
            raise InvalidConfiguration(
                "outline characters need four directions and a blank, "
                f"got {self.outline_characters!r}"
            )
        if self.size is not None and (self.fit_width or self.fit_height):
            raise InvalidConfiguration("size conflicts with width/height fitting")
        if self.fit_width and self.fit_height:
            raise InvalidConfiguration("width and height fitting are mutually exclusive")
        if self.low_threshold > self.high_threshold:
            raise InvalidConfiguration(
                f"low threshold {self.low_threshold} exceeds high threshold {self.high_threshold}"
            )

        # Frozen, so normalised values go through object.__setattr__
        object.__setattr__(self, 'characters', characters)
        if self.size is not None:
            object.__setattr__(self, 'size', int(clamp(self.size, MIN_SIZE, MAX_SIZE)))
        object.__setattr__(self, 'ratio', float(clamp(self.ratio, MIN_RATIO, MAX_RATIO)))
        object.__setattr__(self, 'threads', max(1, int(self.threads)))
        columns, rows = self.terminal_size
        object.__setattr__(self, 'terminal_size', (max(1, int(columns)), max(1, int(rows))))

    @property
    def size_policy(self) -> SizePolicy:
        if self.size is not None:
            return SizePolicy.EXPLICIT
        if self.fit_height:
            return SizePolicy.FIT_HEIGHT
        return SizePolicy.FIT_WIDTH

    @property
    def target_size(self) -> int:
        """Bound for the policy axis, clamped to the supported range."""
        policy = self.size_policy
        if policy == SizePolicy.EXPLICIT:
            return self.size
        elif policy == SizePolicy.FIT_HEIGHT:
            return clamp(self.terminal_size[1], MIN_SIZE, MAX_SIZE)
        return clamp(self.terminal_size[0], MIN_SIZE, MAX_SIZE)
