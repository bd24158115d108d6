import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from text_art_converter.buffer import GridSpec
from text_art_converter.config import AdjustmentConfig, Presets, RenderConfig
from text_art_converter.constants import CharacterSet, OutputFormat, SamplingMethod


class AdjustmentConfigTests(unittest.TestCase):
    def test_defaults_are_identity(self):
        self.assertTrue(AdjustmentConfig().is_identity)
        self.assertFalse(AdjustmentConfig(threshold=1).is_identity)

    def test_clamped(self):
        cfg = AdjustmentConfig(brightness=300, contrast=-259, saturation=101, threshold=-4).clamped()
        self.assertEqual(cfg, AdjustmentConfig(brightness=100, contrast=-100, saturation=100, threshold=0))


class RenderConfigTests(unittest.TestCase):
    def test_defaults(self):
        config = RenderConfig()
        self.assertEqual(config.grid, GridSpec(50, 30))
        self.assertEqual(config.sampling, SamplingMethod.AVERAGE)
        self.assertEqual(config.charset, CharacterSet.BLOCK)
        self.assertEqual(config.output_format, OutputFormat.HTML)
        self.assertIsNone(config.selection)
        self.assertFalse(config.auto_enhance)

    def test_replace_returns_new_config(self):
        config = RenderConfig()
        changed = config.replace(sampling=SamplingMethod.MEDIAN)
        self.assertEqual(changed.sampling, SamplingMethod.MEDIAN)
        self.assertEqual(config.sampling, SamplingMethod.AVERAGE)


class PresetTests(unittest.TestCase):
    def test_retro(self):
        config = Presets.get('retro')
        self.assertEqual(config.adjustments.threshold, 50)
        self.assertEqual(config.sampling, SamplingMethod.DOMINANT)
        self.assertEqual(config.charset, CharacterSet.BLOCK)

    def test_every_named_preset_loads(self):
        for name in Presets.names():
            self.assertIsInstance(Presets.get(name), RenderConfig)
        self.assertEqual(Presets.get('Terminal').charset, CharacterSet.ASCII)

    def test_unknown_preset(self):
        with self.assertRaises(ValueError):
            Presets.get('sepia')


class ConstantsTests(unittest.TestCase):
    def test_parse_sampling(self):
        self.assertEqual(SamplingMethod.parse('weighted'), SamplingMethod.WEIGHTED_AVERAGE)
        self.assertEqual(SamplingMethod.parse('Center'), SamplingMethod.CENTER)
        with self.assertRaises(ValueError):
            SamplingMethod.parse('mode')

    def test_parse_output_format(self):
        self.assertEqual(OutputFormat.parse('bracket'), OutputFormat.BRACKET_COLOR)
        self.assertEqual(OutputFormat.parse('HTML'), OutputFormat.HTML)
        with self.assertRaises(ValueError):
            OutputFormat.parse('ansi')

    def test_charset_presets(self):
        self.assertEqual(len(CharacterSet.get_preset('block')), 1)
        self.assertEqual(len(CharacterSet.get_preset('gradient')), 4)
        self.assertEqual(len(CharacterSet.get_preset('ascii')), 11)
        self.assertEqual(len(CharacterSet.get_preset('braille')), 8)
        with self.assertRaises(ValueError):
            CharacterSet.get_preset('emoji')

    def test_custom_charset(self):
        self.assertEqual(CharacterSet.resolve('custom', ' .oO'), ' .oO')
        self.assertEqual(CharacterSet.resolve('custom', ''), '█')
        self.assertEqual(CharacterSet.resolve('ascii'), CharacterSet.ASCII)


if __name__ == "__main__":
    unittest.main()
