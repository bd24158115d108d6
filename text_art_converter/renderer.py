"""
Image to Text Art Converter - Rendering
=======================================
Partitions the source area into a grid of cells, samples and maps each
cell, and serializes the glyph grid into one of the output encodings.
"""

import math
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from text_art_converter.buffer import Color, GridSpec, PixelBuffer, Rect
from text_art_converter.constants import (
    OutputFormat,
    PREVIEW_MAX_HEIGHT,
    PREVIEW_MAX_WIDTH,
    PROGRESS_CELL_THRESHOLD,
    SamplingMethod,
)
from text_art_converter.glyphs import GlyphMapper
from text_art_converter.log import get_logger
from text_art_converter.sampling import RegionSampler

logger = get_logger('renderer')

ProgressCallback = Callable[[bool], None]


@dataclass
class TextArtResult:
    """Glyph grid produced by a render."""
    lines: List[str]                                   # One string of glyphs per row
    colors: List[List[Color]]                          # Cell colors, row-major
    width: int = 0                                     # Grid columns
    height: int = 0                                    # Grid rows
    source: Rect = field(default_factory=lambda: Rect(0, 0, 0, 0))  # Sampled area

    def cells(self):
        """Iterate ``(row, col, glyph, color)`` in row-major order."""
        for row, (line, color_line) in enumerate(zip(self.lines, self.colors)):
            for col, (glyph, color) in enumerate(zip(line, color_line)):
                yield row, col, glyph, color


def cell_edges(start: int, length: int, count: int) -> List[int]:
    """
    Floor-based boundaries splitting ``length`` pixels into ``count`` cells.

    Returns ``count + 1`` non-decreasing edges; cell ``i`` spans
    ``[edges[i], edges[i + 1])``. Cells narrower than a pixel may be empty.
    """
    size = length / count
    return [int(math.floor(start + i * size)) for i in range(count + 1)]


# =============================================================================
# FORMATTERS
# =============================================================================

class HtmlFormatter:
    """Format a glyph grid as colored HTML spans."""

    ROW_SEPARATOR = '<br>'

    @staticmethod
    def escape(glyph: str) -> str:
        return glyph.replace('&', '&amp;').replace('<', '&lt;').replace('>', '&gt;')

    @classmethod
    def cell(cls, glyph: str, color: Color) -> str:
        return f'<span style="color: {color.hex}">{cls.escape(glyph)}</span>'

    @classmethod
    def format_result(cls, result: TextArtResult) -> str:
        rows = []
        for line, color_line in zip(result.lines, result.colors):
            rows.append(''.join(cls.cell(glyph, color) for glyph, color in zip(line, color_line)))
        return cls.ROW_SEPARATOR.join(rows)

    @staticmethod
    def document(fragment: str,
                 font_size: str = "10px",
                 font_family: str = "monospace",
                 background_color: str = "#000000",
                 line_height: float = 1.0) -> str:
        """
        Wrap an HTML fragment in a standalone page.

        Args:
            fragment: Output of ``format_result``
            font_size: CSS font size
            font_family: CSS font family
            background_color: Background color
            line_height: Line height multiplier

        Returns:
            HTML document string
        """
        return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <style>
        .text-art {{
            font-family: {font_family};
            font-size: {font_size};
            line-height: {line_height};
            background-color: {background_color};
            white-space: pre;
            display: inline-block;
            padding: 10px;
        }}
    </style>
</head>
<body>
<div class="text-art">{fragment}</div>
</body>
</html>"""


class BracketColorFormatter:
    """Format a glyph grid as ``[color=#rrggbb]g[/color]`` markup."""

    ROW_SEPARATOR = '\n'

    @staticmethod
    def cell(glyph: str, color: Color) -> str:
        return f'[color={color.hex}]{glyph}[/color]'

    @classmethod
    def format_result(cls, result: TextArtResult) -> str:
        rows = []
        for line, color_line in zip(result.lines, result.colors):
            rows.append(''.join(cls.cell(glyph, color) for glyph, color in zip(line, color_line)))
        return cls.ROW_SEPARATOR.join(rows)


FORMATTERS = {
    OutputFormat.HTML: HtmlFormatter,
    OutputFormat.BRACKET_COLOR: BracketColorFormatter,
}


def format_result(result: TextArtResult, output_format: OutputFormat) -> str:
    """Serialize a render result in the requested encoding."""
    try:
        formatter = FORMATTERS[output_format]
    except KeyError:
        raise ValueError(f"Unknown output format: {output_format}") from None
    return formatter.format_result(result)


# =============================================================================
# RENDERER
# =============================================================================

class ArtRenderer:
    """Walks the cell grid and produces text art."""

    @staticmethod
    def source_rect(buffer: PixelBuffer, rect: Optional[Rect]) -> Rect:
        """Effective source area: the selection if it has area, else the whole buffer."""
        if rect is not None:
            rect = rect.clamped(buffer.width, buffer.height)
            if not rect.is_empty:
                return rect
        return Rect.full(buffer)

    @classmethod
    def render_cells(cls, buffer: PixelBuffer, rect: Optional[Rect], grid: GridSpec,
                     sampling: SamplingMethod, ramp: str,
                     progress: Optional[ProgressCallback] = None) -> TextArtResult:
        """
        Sample and map every cell of the grid.

        Args:
            buffer: Processed source pixels (read only)
            rect: Optional selection; ignored when None or without area
            grid: Target character grid
            sampling: Cell sampling strategy
            ramp: Glyph ramp, darkest character first
            progress: Called with True before and False after renders of
                more than 1000 cells

        Returns:
            TextArtResult with glyph and color rows
        """
        GlyphMapper.validate_ramp(ramp)
        source = cls.source_rect(buffer, rect)

        x_edges = cell_edges(source.x, source.width, grid.width)
        y_edges = cell_edges(source.y, source.height, grid.height)

        large = grid.cell_count > PROGRESS_CELL_THRESHOLD
        if large and progress is not None:
            progress(True)

        started = time.perf_counter()
        try:
            colors = RegionSampler.sample_grid(buffer, x_edges, y_edges, sampling)
            lines = [''.join(GlyphMapper.map_to_glyph(color, ramp) for color in row)
                     for row in colors]
        finally:
            if large and progress is not None:
                progress(False)

        logger.debug("rendered %dx%d cells from %s with %s in %.1f ms",
                     grid.width, grid.height, source, sampling.name,
                     (time.perf_counter() - started) * 1000)

        return TextArtResult(
            lines=lines,
            colors=colors,
            width=grid.width,
            height=grid.height,
            source=source,
        )

    @classmethod
    def render(cls, buffer: PixelBuffer, rect: Optional[Rect], grid: GridSpec,
               sampling: SamplingMethod, ramp: str, output_format: OutputFormat,
               progress: Optional[ProgressCallback] = None) -> str:
        """Render the grid and serialize it in ``output_format``."""
        result = cls.render_cells(buffer, rect, grid, sampling, ramp, progress)
        return format_result(result, output_format)

    @classmethod
    def preview(cls, buffer: PixelBuffer, rect: Optional[Rect], grid: GridSpec,
                sampling: SamplingMethod, ramp: str) -> str:
        """
        Small live preview.

        The grid is capped at 40x25 cells and the output is always HTML,
        whatever output format the final render uses.
        """
        capped = grid.capped(PREVIEW_MAX_WIDTH, PREVIEW_MAX_HEIGHT)
        return cls.render(buffer, rect, capped, sampling, ramp, OutputFormat.HTML)
