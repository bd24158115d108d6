import sys
import unittest
from pathlib import Path

import numpy as np
from PIL import Image

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from text_art_converter.buffer import GridSpec, PixelBuffer, Rect
from text_art_converter.config import AdjustmentConfig, RenderConfig
from text_art_converter.constants import OutputFormat, SamplingMethod
from text_art_converter.generator import TextArtGenerator, image_to_text_art


class TextArtGeneratorTests(unittest.TestCase):
    def test_source_buffer_is_not_mutated(self):
        buffer = PixelBuffer.blank(4, 4, (100, 100, 100, 255))
        before = buffer.data.copy()
        config = RenderConfig(grid=GridSpec(2, 2),
                              adjustments=AdjustmentConfig(brightness=50, threshold=128),
                              auto_enhance=True)
        TextArtGenerator(config).generate(buffer)
        np.testing.assert_array_equal(buffer.data, before)

    def test_adjustments_apply_before_sampling(self):
        buffer = PixelBuffer.blank(2, 2, (100, 100, 100, 255))
        config = RenderConfig(grid=GridSpec(1, 1), charset="ab",
                              output_format=OutputFormat.BRACKET_COLOR,
                              adjustments=AdjustmentConfig(threshold=50))
        self.assertEqual(TextArtGenerator(config).generate(buffer), "[color=#ffffff]b[/color]")

    def test_generate_result(self):
        buffer = PixelBuffer.blank(6, 6, (0, 0, 0, 255))
        buffer.pixels[3:, 3:] = (255, 255, 255, 255)
        config = RenderConfig(grid=GridSpec(2, 2), charset=" #", selection=Rect(0, 0, 6, 6),
                              sampling=SamplingMethod.CENTER)
        result = TextArtGenerator(config).generate_result(buffer)
        self.assertEqual(result.lines, ["  ", " #"])

    def test_preview_is_html(self):
        buffer = PixelBuffer.blank(4, 4)
        config = RenderConfig(grid=GridSpec(2, 2), output_format=OutputFormat.BRACKET_COLOR)
        self.assertTrue(TextArtGenerator(config).preview(buffer).startswith("<span"))

    def test_progress_callback_is_forwarded(self):
        calls = []
        buffer = PixelBuffer.blank(4, 4)
        config = RenderConfig(grid=GridSpec(50, 30))
        TextArtGenerator(config, progress=calls.append).generate(buffer)
        self.assertEqual(calls, [True, False])


class ImageToTextArtTests(unittest.TestCase):
    def test_solid_red_image(self):
        image = Image.new('RGB', (4, 4), (255, 0, 0))
        text = image_to_text_art(image, width=2, height=2, charset="ab", output_format='bracket')
        self.assertEqual(
            text,
            "[color=#ff0000]a[/color][color=#ff0000]a[/color]\n"
            "[color=#ff0000]a[/color][color=#ff0000]a[/color]",
        )

    def test_height_follows_aspect_ratio(self):
        image = Image.new('RGB', (40, 20), (0, 0, 255))
        text = image_to_text_art(image, width=10, charset='gradient', output_format='bracket')
        self.assertEqual(text.count("\n"), 4)
        self.assertEqual(text.count("[color=#0000ff]"), 50)

    def test_options(self):
        image = Image.new('RGB', (8, 8), (90, 90, 90))
        text = image_to_text_art(image, width=2, height=1, sampling='median', charset='block',
                                 selection=(0, 0, 4, 4), brightness=10)
        cell = '<span style="color: #646464">█</span>'
        self.assertEqual(text, cell + cell)

    def test_custom_charset_name_uses_custom_ramp(self):
        image = Image.new('RGB', (4, 4), (255, 255, 255))
        text = image_to_text_art(image, width=2, height=1, charset='custom',
                                 custom_charset='xy', output_format='bracket')
        self.assertEqual(text, "[color=#ffffff]y[/color][color=#ffffff]y[/color]")

    def test_custom_charset_without_ramp_falls_back(self):
        image = Image.new('RGB', (4, 4), (255, 255, 255))
        text = image_to_text_art(image, width=2, height=1, charset='custom',
                                 output_format='bracket')
        self.assertEqual(text, "[color=#ffffff]█[/color][color=#ffffff]█[/color]")


if __name__ == "__main__":
    unittest.main()
