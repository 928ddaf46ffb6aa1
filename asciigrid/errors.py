"""Exceptions raised by the conversion pipeline."""


class AsciiArtError(Exception):
    """Base class for conversion failures."""


class InvalidConfiguration(AsciiArtError, ValueError):
    """Conflicting or unusable configuration values."""


class DegenerateImage(AsciiArtError, ValueError):
    """The source image has zero width or height."""


class UnsupportedColorMode(AsciiArtError, ValueError):
    """Color was requested for an output target that cannot represent it."""
