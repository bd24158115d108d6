"""
Image to Text Art Converter - Constants
=======================================
Enums, character ramps and numeric constants shared by the pipeline.
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Optional


# =============================================================================
# ENUMS
# =============================================================================

class SamplingMethod(Enum):
    """Strategy for reducing a cell of pixels to one color."""
    AVERAGE = auto()
    CENTER = auto()
    DOMINANT = auto()
    MEDIAN = auto()
    WEIGHTED_AVERAGE = auto()

    @classmethod
    def parse(cls, name: str) -> 'SamplingMethod':
        """Parse a sampling method name such as 'average' or 'weighted'."""
        methods = {
            'average': cls.AVERAGE,
            'center': cls.CENTER,
            'dominant': cls.DOMINANT,
            'median': cls.MEDIAN,
            'weighted': cls.WEIGHTED_AVERAGE,
            'weighted_average': cls.WEIGHTED_AVERAGE,
        }
        try:
            return methods[name.lower()]
        except KeyError:
            raise ValueError(f"Unknown sampling method: {name}") from None


class OutputFormat(Enum):
    """Text encoding of the rendered glyph grid."""
    HTML = auto()           # <span style="color: #rrggbb">g</span>, rows split by <br>
    BRACKET_COLOR = auto()  # [color=#rrggbb]g[/color], rows split by newline

    @classmethod
    def parse(cls, name: str) -> 'OutputFormat':
        """Parse an output format name such as 'html' or 'bracket'."""
        formats = {
            'html': cls.HTML,
            'bracket': cls.BRACKET_COLOR,
            'bracket_color': cls.BRACKET_COLOR,
            'bbcode': cls.BRACKET_COLOR,
        }
        try:
            return formats[name.lower()]
        except KeyError:
            raise ValueError(f"Unknown output format: {name}") from None


# =============================================================================
# CHARACTER SETS
# =============================================================================

@dataclass
class CharacterSet:
    """Predefined glyph ramps (darkest first)."""

    BLOCK: str = "█"
    GRADIENT: str = "░▒▓█"
    ASCII: str = ".:;+=xX$&#@"
    BRAILLE: str = "⠀⠁⠃⠇⠏⠟⠿⡿"

    # Used when a custom ramp is requested but left empty
    CUSTOM_DEFAULT: str = "█"

    @classmethod
    def presets(cls) -> dict:
        return {
            'block': cls.BLOCK,
            'gradient': cls.GRADIENT,
            'ascii': cls.ASCII,
            'braille': cls.BRAILLE,
        }

    @classmethod
    def get_preset(cls, name: str) -> str:
        """Get character set by name."""
        try:
            return cls.presets()[name.lower()]
        except KeyError:
            raise ValueError(f"Unknown character set: {name}") from None

    @classmethod
    def resolve(cls, name: str, custom: Optional[str] = None) -> str:
        """
        Resolve a character set selection to a glyph ramp.

        Args:
            name: Preset name, or 'custom'
            custom: Characters of the custom ramp (dark to light)

        Returns:
            The glyph ramp string
        """
        if name.lower() == 'custom':
            return custom or cls.CUSTOM_DEFAULT
        return cls.get_preset(name)


# =============================================================================
# NUMERIC CONSTANTS
# =============================================================================

# ITU-R BT.601 luma weights
LUMA_R = 0.299
LUMA_G = 0.587
LUMA_B = 0.114

# Same weights in thousandths, for exact integer luminance
LUMA_PER_MILLE = (299, 587, 114)

# Renders with more cells than this report progress
PROGRESS_CELL_THRESHOLD = 1000

# Live preview grid caps
PREVIEW_MAX_WIDTH = 40
PREVIEW_MAX_HEIGHT = 25

# Channel quantization step for dominant color buckets
DOMINANT_QUANT_STEP = 16

# Selections smaller than this (either axis) are discarded
MIN_SELECTION_SIZE = 5
