"""Luminance to glyph mapping."""

import math

from text_art_converter.buffer import Color
from text_art_converter.errors import DegenerateRampError


class GlyphMapper:
    """Maps a color to a character of a dark-to-light glyph ramp."""

    @staticmethod
    def validate_ramp(ramp: str) -> str:
        if not ramp:
            raise DegenerateRampError()
        return ramp

    @staticmethod
    def glyph_index(luminance: float, ramp_length: int) -> int:
        """Ramp index for a luminance in 0..255, clamped to the ramp."""
        index = int(math.floor(luminance / 255.0 * (ramp_length - 1)))
        return max(0, min(ramp_length - 1, index))

    @classmethod
    def map_to_glyph(cls, color: Color, ramp: str) -> str:
        """
        Pick the ramp character for a color's luminance.

        Args:
            color: Sampled cell color
            ramp: Glyph ramp, darkest character first

        Returns:
            A single character of ``ramp``
        """
        cls.validate_ramp(ramp)
        if len(ramp) == 1:
            return ramp
        return ramp[cls.glyph_index(color.luminance, len(ramp))]
