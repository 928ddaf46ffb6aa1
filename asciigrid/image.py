"""
Image to ASCII Art Converter - Source Image
===========================================
Read-only RGBA pixel buffer consumed by the pipeline.
"""

from dataclasses import dataclass
from typing import Tuple

from PIL import Image
import numpy as np

from asciigrid.errors import DegenerateImage


@dataclass(frozen=True)
class SourceImage:
    """Immutable row-major RGBA buffer of shape ``(height, width, 4)``."""

    pixels: np.ndarray

    def __post_init__(self):
        if self.pixels.ndim != 3 or self.pixels.shape[2] != 4:
            raise ValueError(f"Expected an (H, W, 4) buffer, got {self.pixels.shape}")
        if self.pixels.shape[0] == 0 or self.pixels.shape[1] == 0:
            raise DegenerateImage(
                f"Image has no pixels ({self.pixels.shape[1]}x{self.pixels.shape[0]})"
            )
        # Freeze a private copy; the caller's array stays writable
        pixels = self.pixels.copy()
        pixels.setflags(write=False)
        object.__setattr__(self, 'pixels', pixels)

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    @property
    def rgb(self) -> np.ndarray:
        """RGB channels as float64, alpha dropped."""
        return self.pixels[:, :, :3].astype(np.float64)

    @classmethod
    def from_array(cls, array: np.ndarray) -> 'SourceImage':
        """
        Build a source image from a numpy array.

        Accepts grayscale ``(H, W)``, RGB ``(H, W, 3)`` or RGBA ``(H, W, 4)``
        input; missing channels are filled in with an opaque alpha.
        """
        arr = np.asarray(array)
        if arr.ndim == 2:
            arr = np.stack([arr, arr, arr], axis=-1)
        if arr.ndim != 3 or arr.shape[2] not in (3, 4):
            raise ValueError(f"Unsupported pixel array shape {arr.shape}")

        if arr.shape[2] == 3:
            alpha = np.full(arr.shape[:2] + (1,), 255, dtype=np.uint8)
            arr = np.concatenate([arr.astype(np.uint8), alpha], axis=-1)

        return cls(np.ascontiguousarray(arr, dtype=np.uint8))

    @classmethod
    def from_pil(cls, image: Image.Image) -> 'SourceImage':
        """Build a source image from any PIL image mode."""
        if image.width == 0 or image.height == 0:
            raise DegenerateImage(f"Image has no pixels ({image.width}x{image.height})")
        return cls(np.array(image.convert('RGBA'), dtype=np.uint8))
