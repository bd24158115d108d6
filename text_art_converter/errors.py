"""Exceptions raised by the text art pipeline."""


class TextArtError(Exception):
    """Base class for text art conversion errors."""


class BufferShapeError(TextArtError, ValueError):
    """Pixel data length does not match width * height * 4."""

    def __init__(self, length: int, width: int, height: int):
        self.length = length
        self.width = width
        self.height = height
        super().__init__(
            f"Pixel buffer holds {length} values, expected {width * height * 4} "
            f"for {width}x{height} RGBA"
        )


class DegenerateRampError(TextArtError, ValueError):
    """A glyph ramp with no characters."""

    def __init__(self):
        super().__init__("Glyph ramp must contain at least one character")
