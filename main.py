#!/usr/bin/env python3
"""
Image to Text Art Converter - Command Line
==========================================
Loads an image with Pillow, runs the text art pipeline and writes the
result to stdout or a file.
"""

from PIL import Image, UnidentifiedImageError
from typing import List, Optional, Tuple
import argparse
import sys

from text_art_converter import (
    AdjustmentConfig,
    CharacterSet,
    GridSpec,
    HtmlFormatter,
    OutputFormat,
    PixelBuffer,
    Presets,
    Rect,
    RenderConfig,
    SamplingMethod,
    TextArtGenerator,
    TextArtError,
    setup_logging,
)
from text_art_converter.log import get_logger

logger = get_logger('cli')


# =============================================================================
# ARGUMENT PARSING
# =============================================================================

def _parse_selection(value: str) -> Tuple[int, int, int, int]:
    try:
        x, y, w, h = (int(part) for part in value.split(','))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected X,Y,W,H, got {value!r}") from None
    return x, y, w, h


def _parse_size(value: str) -> Tuple[int, int]:
    try:
        w, h = (int(part) for part in value.lower().split('x'))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected WxH, got {value!r}") from None
    if w < 1 or h < 1:
        raise argparse.ArgumentTypeError(f"size must be positive, got {value!r}")
    return w, h


def create_argument_parser() -> argparse.ArgumentParser:
    """Create command line argument parser."""
    parser = argparse.ArgumentParser(
        description='Convert images to colored text art',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s image.png                          # 50 columns, height from aspect ratio
  %(prog)s image.png -w 80 -H 40              # Fixed grid
  %(prog)s image.png --format bracket         # [color=#rrggbb]g[/color] output
  %(prog)s image.png --charset ascii -o a.html
  %(prog)s image.png --select 10,10,200,120   # Render a sub-rectangle
  %(prog)s image.png --preset retro           # Apply a preset
        """
    )

    # Input/Output
    parser.add_argument('input', help='Input image file')
    parser.add_argument('-o', '--output', help='Output file (.html writes a full page)')

    # Size options
    parser.add_argument('-w', '--width', type=int, help='Grid width in characters')
    parser.add_argument('-H', '--height', type=int, help='Grid height in characters')
    parser.add_argument('--fit', type=_parse_size, default=None, metavar='WxH',
                        help='Downscale the image to fit this box before sampling')

    # Rendering options
    parser.add_argument('--preset', choices=Presets.names(),
                        help='Start from a preset configuration')
    parser.add_argument('--sampling', choices=['average', 'center', 'dominant', 'median', 'weighted'],
                        help='Cell color sampling method')
    parser.add_argument('--charset', choices=list(CharacterSet.presets()) + ['custom'],
                        help='Glyph ramp preset')
    parser.add_argument('--custom-charset', help='Custom glyph ramp (dark to light)')
    parser.add_argument('--format', choices=['html', 'bracket'], default='html',
                        help='Output encoding')
    parser.add_argument('--select', type=_parse_selection, metavar='X,Y,W,H',
                        help='Source region in original image pixels')
    parser.add_argument('--preview', action='store_true',
                        help='Render the capped HTML live preview instead')

    # Adjustment options
    parser.add_argument('--brightness', type=int, help='Brightness (-100..100)')
    parser.add_argument('--contrast', type=int, help='Contrast (-100..100)')
    parser.add_argument('--saturation', type=int, help='Saturation (-100..100)')
    parser.add_argument('--threshold', type=int, help='Threshold (1..255, 0 disables)')
    parser.add_argument('--auto-enhance', action='store_true',
                        help='Apply histogram equalization')

    # Other options
    parser.add_argument('-v', '--verbose', action='store_true', help='Verbose logging')
    parser.add_argument('--log-file', help='Write debug log to this file')

    return parser


def _scale_selection(select: Tuple[int, int, int, int], source_size: Tuple[int, int],
                     buffer: PixelBuffer) -> Rect:
    """Map a selection in source image pixels onto a possibly downscaled buffer."""
    x, y, w, h = select
    sx = buffer.width / source_size[0]
    sy = buffer.height / source_size[1]
    left, top = int(x * sx), int(y * sy)
    right, bottom = int(round((x + w) * sx)), int(round((y + h) * sy))
    return Rect(left, top, right - left, bottom - top)


def build_config(args: argparse.Namespace, buffer: PixelBuffer,
                 source_size: Optional[Tuple[int, int]] = None) -> RenderConfig:
    """
    Combine preset, explicit options and image dimensions into a config.

    Args:
        args: Parsed command line
        buffer: Loaded (and possibly downscaled) pixels
        source_size: (width, height) of the image before downscaling;
            defaults to the buffer size

    Returns:
        Render configuration
    """
    config = Presets.get(args.preset) if args.preset else RenderConfig()

    base = config.adjustments
    adjustments = AdjustmentConfig(
        brightness=base.brightness if args.brightness is None else args.brightness,
        contrast=base.contrast if args.contrast is None else args.contrast,
        saturation=base.saturation if args.saturation is None else args.saturation,
        threshold=base.threshold if args.threshold is None else args.threshold,
    ).clamped()

    if args.width is not None and args.height is not None:
        grid = GridSpec(args.width, args.height)
    elif args.height is not None:
        grid = GridSpec(max(1, round(args.height * buffer.width / buffer.height)), args.height)
    else:
        width = config.grid.width if args.width is None else args.width
        grid = GridSpec.from_aspect(width, buffer.width / buffer.height)

    if args.charset:
        charset = CharacterSet.resolve(args.charset, args.custom_charset)
    elif args.custom_charset:
        charset = args.custom_charset
    else:
        charset = config.charset

    selection = None
    if args.select:
        selection = _scale_selection(args.select, source_size or (buffer.width, buffer.height), buffer)

    return config.replace(
        grid=grid,
        sampling=SamplingMethod.parse(args.sampling) if args.sampling else config.sampling,
        charset=charset,
        output_format=OutputFormat.parse(args.format),
        selection=selection,
        adjustments=adjustments,
        auto_enhance=args.auto_enhance or config.auto_enhance,
    )


def _report_progress(active: bool) -> None:
    if active:
        print("Processing...", file=sys.stderr)


# =============================================================================
# ENTRY POINT
# =============================================================================

def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for command line usage."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    setup_logging(debug=args.verbose, log_path=args.log_file)

    # Load image
    try:
        with Image.open(args.input) as image:
            source_size = image.size
            buffer = PixelBuffer.from_image(image, max_size=args.fit)
    except (OSError, UnidentifiedImageError) as e:
        print(f"Error loading image: {e}", file=sys.stderr)
        return 1
    logger.info("loaded %s as %s", args.input, buffer)

    try:
        config = build_config(args, buffer, source_size)
        generator = TextArtGenerator(config, progress=_report_progress)
        text = generator.preview(buffer) if args.preview else generator.generate(buffer)
    except (TextArtError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.output:
        is_html = args.preview or config.output_format == OutputFormat.HTML
        if is_html and args.output.lower().endswith('.html'):
            text = HtmlFormatter.document(text)
        with open(args.output, 'w', encoding='utf-8') as f:
            f.write(text)
        print(f"Saved to {args.output}", file=sys.stderr)
    else:
        print(text)

    return 0


if __name__ == '__main__':
    sys.exit(main())
