"""
Image to Text Art Converter
===========================
Converts raster images into grids of colored glyphs.

Features:
- Brightness, contrast, saturation and threshold adjustment
- Histogram equalization auto-enhance
- Five cell sampling strategies (average, center, dominant, median, weighted)
- Block, gradient, ASCII, braille and custom glyph ramps
- HTML span and [color=#rrggbb] bracket output
"""

from text_art_converter.adjustments import HistogramEqualizer, ToneAdjuster, process
from text_art_converter.buffer import BLACK, Color, GridSpec, PixelBuffer, Rect, resize_to_fit
from text_art_converter.config import AdjustmentConfig, Presets, RenderConfig
from text_art_converter.constants import CharacterSet, OutputFormat, SamplingMethod
from text_art_converter.errors import BufferShapeError, DegenerateRampError, TextArtError
from text_art_converter.generator import TextArtGenerator, image_to_text_art
from text_art_converter.glyphs import GlyphMapper
from text_art_converter.log import setup_logging
from text_art_converter.renderer import (
    ArtRenderer,
    BracketColorFormatter,
    HtmlFormatter,
    TextArtResult,
    cell_edges,
    format_result,
)
from text_art_converter.sampling import RegionSampler

__version__ = "1.0.0"

__all__ = [
    # Main classes
    'TextArtGenerator',
    'RenderConfig',
    'AdjustmentConfig',
    'TextArtResult',

    # Data model
    'PixelBuffer',
    'Rect',
    'Color',
    'GridSpec',
    'BLACK',

    # Enums and character sets
    'SamplingMethod',
    'OutputFormat',
    'CharacterSet',

    # Processors
    'ToneAdjuster',
    'HistogramEqualizer',
    'RegionSampler',
    'GlyphMapper',
    'ArtRenderer',
    'process',

    # Formatters
    'HtmlFormatter',
    'BracketColorFormatter',
    'format_result',
    'cell_edges',

    # Errors
    'TextArtError',
    'BufferShapeError',
    'DegenerateRampError',

    # Helpers
    'Presets',
    'image_to_text_art',
    'resize_to_fit',
    'setup_logging',
]
