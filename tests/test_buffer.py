import sys
import unittest
from pathlib import Path

import numpy as np
from PIL import Image

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from text_art_converter.adjustments import ToneAdjuster
from text_art_converter.buffer import Color, GridSpec, PixelBuffer, Rect, resize_to_fit
from text_art_converter.config import AdjustmentConfig
from text_art_converter.errors import BufferShapeError


class PixelBufferTests(unittest.TestCase):
    def test_shape_mismatch_fails_fast(self):
        with self.assertRaises(BufferShapeError):
            PixelBuffer(np.zeros(15, dtype=np.uint8), 2, 2)
        with self.assertRaises(ValueError):
            PixelBuffer.from_bytes(bytes(17), 2, 2)

    def test_from_bytes(self):
        buffer = PixelBuffer.from_bytes(bytes([1, 2, 3, 4, 5, 6, 7, 8]), 2, 1)
        self.assertEqual(buffer.pixel(1, 0), (5, 6, 7, 8))
        self.assertEqual(buffer.pixel_count, 2)

    def test_pixels_view_shares_memory(self):
        buffer = PixelBuffer.blank(3, 2)
        buffer.pixels[1, 2] = (9, 9, 9, 9)
        self.assertEqual(list(buffer.data[-4:]), [9, 9, 9, 9])

    def test_copy_is_independent(self):
        buffer = PixelBuffer.blank(2, 2, (1, 1, 1, 255))
        clone = buffer.copy()
        clone.pixels[0, 0] = (200, 200, 200, 255)
        self.assertEqual(buffer.pixel(0, 0), (1, 1, 1, 255))

    def test_read_only_array_is_copied(self):
        source = np.frombuffer(bytes([100, 100, 100, 255] * 4), dtype=np.uint8)
        buffer = PixelBuffer(source, 2, 2)
        self.assertTrue(buffer.data.flags.writeable)
        ToneAdjuster.adjust(buffer, AdjustmentConfig(brightness=10))
        self.assertEqual(buffer.pixel(1, 1), (110, 110, 110, 255))
        self.assertEqual(int(source[0]), 100)

    def test_from_rgb_image_gets_opaque_alpha(self):
        image = Image.new('RGB', (3, 2), (10, 20, 30))
        buffer = PixelBuffer.from_image(image)
        self.assertEqual((buffer.width, buffer.height), (3, 2))
        self.assertEqual(buffer.pixel(2, 1), (10, 20, 30, 255))

    def test_from_image_fits_box(self):
        image = Image.new('RGB', (400, 100), (0, 0, 0))
        buffer = PixelBuffer.from_image(image, max_size=(200, 200))
        self.assertEqual((buffer.width, buffer.height), (200, 50))

    def test_to_image_round_trip(self):
        buffer = PixelBuffer.blank(4, 3, (5, 6, 7, 8))
        image = buffer.to_image()
        self.assertEqual(image.size, (4, 3))
        self.assertEqual(image.mode, 'RGBA')
        self.assertEqual(image.getpixel((3, 2)), (5, 6, 7, 8))


class ResizeTests(unittest.TestCase):
    def test_small_images_are_not_upscaled(self):
        image = Image.new('RGB', (10, 10))
        self.assertIs(resize_to_fit(image, 800, 500), image)

    def test_keeps_aspect_ratio(self):
        image = Image.new('RGB', (1600, 500))
        self.assertEqual(resize_to_fit(image, 800, 500).size, (800, 250))


class RectTests(unittest.TestCase):
    def test_from_corners_normalizes_drag(self):
        self.assertEqual(Rect.from_corners(40, 30, 10, 5, 100, 100), Rect(10, 5, 30, 25))

    def test_from_corners_clamps_to_buffer(self):
        self.assertEqual(Rect.from_corners(-10, 90, 50, 140, 100, 100), Rect(0, 90, 50, 10))

    def test_tiny_selection_is_discarded(self):
        self.assertIsNone(Rect.from_corners(10, 10, 14, 40, 100, 100))

    def test_clamped(self):
        self.assertEqual(Rect(-2, 3, 10, 10).clamped(6, 6), Rect(0, 3, 6, 3))
        self.assertTrue(Rect(8, 8, 4, 4).clamped(6, 6).is_empty)


class GridSpecTests(unittest.TestCase):
    def test_rejects_empty_grid(self):
        with self.assertRaises(ValueError):
            GridSpec(0, 5)
        with self.assertRaises(ValueError):
            GridSpec(5, -1)

    def test_from_aspect(self):
        self.assertEqual(GridSpec.from_aspect(50, 2.0), GridSpec(50, 25))
        self.assertEqual(GridSpec.from_aspect(3, 10.0), GridSpec(3, 1))

    def test_capped(self):
        self.assertEqual(GridSpec(100, 10).capped(40, 25), GridSpec(40, 10))
        self.assertEqual(GridSpec(100, 10).cell_count, 1000)


class ColorTests(unittest.TestCase):
    def test_hex_is_lowercase(self):
        self.assertEqual(Color(255, 10, 171).hex, "#ff0aab")

    def test_luminance(self):
        self.assertAlmostEqual(Color(255, 0, 0).luminance, 76.245)


if __name__ == "__main__":
    unittest.main()
