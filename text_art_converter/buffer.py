"""
Image to Text Art Converter - Data Model
========================================
Pixel buffers, rectangles, colors and grid dimensions.
"""

from PIL import Image
import numpy as np
from typing import Optional, Tuple, Union
from dataclasses import dataclass
import math

from text_art_converter.constants import LUMA_PER_MILLE, MIN_SELECTION_SIZE
from text_art_converter.errors import BufferShapeError


# =============================================================================
# COLOR
# =============================================================================

@dataclass(frozen=True)
class Color:
    """An 8-bit RGB color."""
    r: int
    g: int
    b: int

    @property
    def hex(self) -> str:
        """Lowercase '#rrggbb' representation."""
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    @property
    def luminance(self) -> float:
        wr, wg, wb = LUMA_PER_MILLE
        return (wr * self.r + wg * self.g + wb * self.b) / 1000

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)


BLACK = Color(0, 0, 0)


# =============================================================================
# RECTANGLES AND GRIDS
# =============================================================================

@dataclass(frozen=True)
class Rect:
    """Rectangle in source-pixel coordinates."""
    x: int
    y: int
    width: int
    height: int

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    @classmethod
    def full(cls, buffer: 'PixelBuffer') -> 'Rect':
        """Rectangle covering the whole buffer."""
        return cls(0, 0, buffer.width, buffer.height)

    def clamped(self, width: int, height: int) -> 'Rect':
        """Intersect with a width x height area anchored at the origin."""
        x = min(max(0, self.x), width)
        y = min(max(0, self.y), height)
        right = min(max(x, self.x + self.width), width)
        bottom = min(max(y, self.y + self.height), height)
        return Rect(x, y, right - x, bottom - y)

    @classmethod
    def from_corners(cls, x0: float, y0: float, x1: float, y1: float,
                     width: int, height: int,
                     min_size: int = MIN_SELECTION_SIZE) -> Optional['Rect']:
        """
        Build a selection from two drag corners.

        The corners may be given in any order. The selection is clamped to
        the buffer and discarded when it is smaller than ``min_size`` on
        either axis.

        Args:
            x0, y0: Corner where the drag started
            x1, y1: Corner where the drag ended
            width, height: Buffer dimensions
            min_size: Smallest accepted selection size in pixels

        Returns:
            The selection rectangle, or None for a discarded selection
        """
        left = max(0, int(math.floor(min(x0, x1))))
        top = max(0, int(math.floor(min(y0, y1))))
        right = min(width, int(math.floor(max(x0, x1))))
        bottom = min(height, int(math.floor(max(y0, y1))))

        rect = cls(left, top, right - left, bottom - top)
        if rect.width < min_size or rect.height < min_size:
            return None
        return rect


@dataclass(frozen=True)
class GridSpec:
    """Target character grid dimensions."""
    width: int
    height: int

    def __post_init__(self):
        if self.width < 1 or self.height < 1:
            raise ValueError(f"Grid dimensions must be at least 1x1, got {self.width}x{self.height}")

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    @classmethod
    def from_aspect(cls, width: int, aspect_ratio: float) -> 'GridSpec':
        """Grid of the given width whose height follows an image aspect ratio (w/h)."""
        return cls(width, max(1, int(math.floor(width / aspect_ratio + 0.5))))

    def capped(self, max_width: int, max_height: int) -> 'GridSpec':
        return GridSpec(min(self.width, max_width), min(self.height, max_height))


# =============================================================================
# PIXEL BUFFER
# =============================================================================

class PixelBuffer:
    """
    Row-major RGBA pixel data with 8-bit channels.

    The data is held as a flat ``numpy.uint8`` array of length
    ``width * height * 4``. Tone adjustment and equalization rewrite it in
    place; sampling and rendering only read it. Read-only input arrays are
    copied so the in-place passes always have a writable buffer.
    """

    def __init__(self, data: Union[np.ndarray, bytes, bytearray], width: int, height: int):
        if isinstance(data, (bytes, bytearray, memoryview)):
            data = np.frombuffer(bytes(data), dtype=np.uint8)
        arr = np.asarray(data)
        if arr.dtype != np.uint8:
            arr = np.clip(arr, 0, 255).astype(np.uint8)
        arr = arr.reshape(-1)
        if not arr.flags.writeable:
            arr = arr.copy()

        if width < 0 or height < 0 or arr.size != width * height * 4:
            raise BufferShapeError(arr.size, width, height)

        self.data = arr
        self.width = width
        self.height = height

    def __repr__(self) -> str:
        return f"PixelBuffer({self.width}x{self.height})"

    @property
    def pixels(self) -> np.ndarray:
        """(height, width, 4) view sharing memory with ``data``."""
        return self.data.reshape(self.height, self.width, 4)

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    def full_rect(self) -> Rect:
        return Rect.full(self)

    def copy(self) -> 'PixelBuffer':
        return PixelBuffer(self.data.copy(), self.width, self.height)

    def pixel(self, x: int, y: int) -> Tuple[int, int, int, int]:
        r, g, b, a = self.pixels[y, x]
        return int(r), int(g), int(b), int(a)

    @classmethod
    def from_bytes(cls, data: bytes, width: int, height: int) -> 'PixelBuffer':
        return cls(data, width, height)

    @classmethod
    def blank(cls, width: int, height: int,
              color: Tuple[int, int, int, int] = (0, 0, 0, 255)) -> 'PixelBuffer':
        """Buffer filled with a single RGBA color."""
        arr = np.empty((height, width, 4), dtype=np.uint8)
        arr[:, :] = color
        return cls(arr, width, height)

    @classmethod
    def from_image(cls, image: Image.Image,
                   max_size: Optional[Tuple[int, int]] = None) -> 'PixelBuffer':
        """
        Decode a PIL image into an RGBA buffer.

        Args:
            image: PIL Image in any mode
            max_size: Optional (width, height) box; larger images are scaled
                down to fit while keeping their aspect ratio

        Returns:
            PixelBuffer with the image's pixels
        """
        if max_size is not None:
            image = resize_to_fit(image, *max_size)
        if image.mode != 'RGBA':
            image = image.convert('RGBA')
        arr = np.array(image, dtype=np.uint8)
        return cls(arr, image.width, image.height)

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.pixels.copy())


def resize_to_fit(image: Image.Image,
                  max_width: int = 800,
                  max_height: int = 500) -> Image.Image:
    """Resize image to fit within max dimensions while maintaining aspect ratio."""
    width, height = image.size

    if width <= max_width and height <= max_height:
        return image

    ratio = min(max_width / width, max_height / height)
    new_size = (max(1, int(width * ratio)), max(1, int(height * ratio)))

    return image.resize(new_size, Image.Resampling.LANCZOS)
