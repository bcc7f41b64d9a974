import logging

import numpy as np
from PIL import Image

from .config import OUTSIDE_COLOR

logger = logging.getLogger(__name__)


class Texture:
    """
    Read-only image backed by a (height, width, channels) numpy array.

    A 2-D array is treated as a single channel image. bounds() reports the
    largest valid (x, y) index, so an empty texture reports negative bounds.
    Reads outside the image return the zero colour instead of raising.
    """

    def __init__(self, pixels):
        pixels = np.asarray(pixels)
        if pixels.ndim == 2:
            pixels = pixels[:, :, np.newaxis]
        if pixels.ndim != 3:
            raise ValueError(f"expected a 2-D or 3-D pixel array, got shape {pixels.shape}")
        self.pixels = pixels
        self.height, self.width, self.channels = pixels.shape
        self._outside = np.full(self.channels, OUTSIDE_COLOR, dtype=pixels.dtype)

    def __repr__(self):
        return f"{type(self).__name__}({self.width}x{self.height}x{self.channels}, {self.pixels.dtype})"

    def contains(self, x, y):
        return 0 <= x < self.width and 0 <= y < self.height

    def bounds(self):
        return self.width - 1, self.height - 1

    def at(self, x, y):
        if self.contains(x, y):
            return self.pixels[y, x]
        return self._outside

    @classmethod
    def from_image(cls, image):
        """Build from a PIL image. Palette and other exotic modes are converted to RGBA."""
        if image.mode not in ("L", "RGB", "RGBA"):
            image = image.convert("RGBA")
        pixels = np.array(image)
        logger.debug("%s from %s image %dx%d", cls.__name__, image.mode, image.width, image.height)
        return cls(pixels)

    def to_image(self):
        pixels = self.pixels
        if self.channels == 1:
            pixels = pixels[:, :, 0]
        return Image.fromarray(np.ascontiguousarray(pixels))


class Surface(Texture):
    """Writable image. Writes outside the pixel grid are dropped."""

    @classmethod
    def blank(cls, width, height, channels=3, dtype=np.uint8):
        return cls(np.zeros((height, width, channels), dtype=dtype))

    def set(self, x, y, color):
        if self.contains(x, y):
            self.pixels[y, x] = color

    def clear(self, color=OUTSIDE_COLOR):
        self.pixels[:] = color
