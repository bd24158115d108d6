import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from text_art_converter.buffer import Color
from text_art_converter.constants import CharacterSet
from text_art_converter.errors import DegenerateRampError
from text_art_converter.glyphs import GlyphMapper


class GlyphMapperTests(unittest.TestCase):
    def test_single_character_ramp(self):
        for color in (Color(0, 0, 0), Color(255, 255, 255), Color(12, 200, 99)):
            self.assertEqual(GlyphMapper.map_to_glyph(color, "#"), "#")

    def test_empty_ramp_fails(self):
        with self.assertRaises(DegenerateRampError):
            GlyphMapper.map_to_glyph(Color(0, 0, 0), "")
        with self.assertRaises(ValueError):
            GlyphMapper.validate_ramp("")

    def test_black_maps_to_darkest(self):
        self.assertEqual(GlyphMapper.map_to_glyph(Color(0, 0, 0), CharacterSet.ASCII), ".")

    def test_pure_red_with_two_glyphs(self):
        self.assertEqual(GlyphMapper.map_to_glyph(Color(255, 0, 0), "ab"), "a")

    def test_index_scales_with_luminance(self):
        ramp = "0123456789"
        self.assertEqual(GlyphMapper.map_to_glyph(Color(128, 128, 128), ramp), "4")
        self.assertEqual(GlyphMapper.map_to_glyph(Color(200, 200, 200), ramp), "7")

    def test_monotonic(self):
        for ramp in (CharacterSet.GRADIENT, CharacterSet.ASCII, CharacterSet.BRAILLE, "ab"):
            previous = -1
            for value in range(256):
                glyph = GlyphMapper.map_to_glyph(Color(value, value, value), ramp)
                index = ramp.index(glyph)
                self.assertGreaterEqual(index, previous)
                previous = index

    def test_index_is_clamped(self):
        self.assertEqual(GlyphMapper.glyph_index(-40, 4), 0)
        self.assertEqual(GlyphMapper.glyph_index(400, 4), 3)


if __name__ == "__main__":
    unittest.main()
