"""
Image to Text Art Converter - Pipeline
======================================
Ties tone processing and rendering together for one configuration.
"""

from PIL import Image
from typing import Optional, Tuple, Union

from text_art_converter.adjustments import process
from text_art_converter.buffer import GridSpec, PixelBuffer, Rect
from text_art_converter.config import AdjustmentConfig, RenderConfig
from text_art_converter.constants import CharacterSet, OutputFormat, SamplingMethod
from text_art_converter.log import get_logger
from text_art_converter.renderer import ArtRenderer, ProgressCallback, TextArtResult

logger = get_logger('generator')


class TextArtGenerator:
    """Main class for generating text art from pixel buffers."""

    def __init__(self, config: Optional[RenderConfig] = None,
                 progress: Optional[ProgressCallback] = None):
        """Initialize with optional configuration and progress callback."""
        self.config = config or RenderConfig()
        self.progress = progress

    def prepare(self, buffer: PixelBuffer) -> PixelBuffer:
        """Return a tone-processed copy of ``buffer``; the input is left untouched."""
        processed = buffer.copy()
        return process(processed, self.config.adjustments, self.config.auto_enhance)

    def generate_result(self, buffer: PixelBuffer) -> TextArtResult:
        config = self.config
        processed = self.prepare(buffer)
        return ArtRenderer.render_cells(processed, config.selection, config.grid,
                                        config.sampling, config.charset, self.progress)

    def generate(self, buffer: PixelBuffer) -> str:
        """
        Convert a pixel buffer to text art.

        Args:
            buffer: Source RGBA pixels

        Returns:
            Text art in the configured output format
        """
        config = self.config
        logger.debug("generating %dx%d %s art from %s",
                     config.grid.width, config.grid.height, config.output_format.name, buffer)
        processed = self.prepare(buffer)
        return ArtRenderer.render(processed, config.selection, config.grid, config.sampling,
                                  config.charset, config.output_format, self.progress)

    def preview(self, buffer: PixelBuffer) -> str:
        """Capped HTML preview of the configured render."""
        config = self.config
        processed = self.prepare(buffer)
        return ArtRenderer.preview(processed, config.selection, config.grid,
                                   config.sampling, config.charset)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def image_to_text_art(image: Image.Image,
                      width: int = 50,
                      height: Optional[int] = None,
                      sampling: Union[str, SamplingMethod] = 'average',
                      charset: str = 'block',
                      output_format: Union[str, OutputFormat] = 'html',
                      selection: Optional[Tuple[int, int, int, int]] = None,
                      auto_enhance: bool = False,
                      custom_charset: Optional[str] = None,
                      **adjustments) -> str:
    """
    Convenience function to convert a PIL image to text art.

    Args:
        image: PIL Image
        width: Grid width in characters
        height: Grid height in characters (follows the image aspect ratio if None)
        sampling: Sampling method name or enum
        charset: Preset name, 'custom', or a literal glyph ramp
        output_format: 'html', 'bracket' or an OutputFormat
        selection: Optional (x, y, width, height) source region
        auto_enhance: Apply histogram equalization
        custom_charset: Glyph ramp used when charset is 'custom'
        **adjustments: brightness, contrast, saturation, threshold

    Returns:
        Text art string
    """
    if isinstance(sampling, str):
        sampling = SamplingMethod.parse(sampling)
    if isinstance(output_format, str):
        output_format = OutputFormat.parse(output_format)
    if charset.lower() in CharacterSet.presets() or charset.lower() == 'custom':
        charset = CharacterSet.resolve(charset, custom_charset)

    buffer = PixelBuffer.from_image(image)
    if height is None:
        grid = GridSpec.from_aspect(width, buffer.width / buffer.height)
    else:
        grid = GridSpec(width, height)

    config = RenderConfig(
        grid=grid,
        sampling=sampling,
        charset=charset,
        output_format=output_format,
        selection=Rect(*selection) if selection else None,
        adjustments=AdjustmentConfig(**adjustments),
        auto_enhance=auto_enhance,
    )
    return TextArtGenerator(config).generate(buffer)
