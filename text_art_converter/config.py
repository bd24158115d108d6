"""
Image to Text Art Converter - Configuration
===========================================
Immutable configuration snapshots passed into each pipeline call.
"""

from typing import Optional
from dataclasses import dataclass, field, replace

from text_art_converter.buffer import GridSpec, Rect
from text_art_converter.constants import CharacterSet, OutputFormat, SamplingMethod


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, int(value)))


@dataclass(frozen=True)
class AdjustmentConfig:
    """Tone adjustment sliders."""

    brightness: int = 0     # -100..100, added to each channel
    contrast: int = 0       # -100..100
    saturation: int = 0     # -100..100, -100 is grayscale
    threshold: int = 0      # 0..255, 0 disables binarization

    @property
    def is_identity(self) -> bool:
        return (self.brightness == 0 and self.contrast == 0
                and self.saturation == 0 and self.threshold == 0)

    def clamped(self) -> 'AdjustmentConfig':
        """Copy with every slider forced into its documented range."""
        return AdjustmentConfig(
            brightness=_clamp(self.brightness, -100, 100),
            contrast=_clamp(self.contrast, -100, 100),
            saturation=_clamp(self.saturation, -100, 100),
            threshold=_clamp(self.threshold, 0, 255),
        )


@dataclass(frozen=True)
class RenderConfig:
    """Everything one conversion needs besides the pixels."""

    grid: GridSpec = field(default_factory=lambda: GridSpec(50, 30))
    sampling: SamplingMethod = SamplingMethod.AVERAGE
    charset: str = CharacterSet.BLOCK
    output_format: OutputFormat = OutputFormat.HTML
    selection: Optional[Rect] = None
    adjustments: AdjustmentConfig = field(default_factory=AdjustmentConfig)
    auto_enhance: bool = False

    def replace(self, **changes) -> 'RenderConfig':
        return replace(self, **changes)


# =============================================================================
# PRESET CONFIGURATIONS
# =============================================================================

class Presets:
    """Predefined configuration presets."""

    @staticmethod
    def photo() -> RenderConfig:
        """Mild contrast boost for photographs."""
        return RenderConfig(
            adjustments=AdjustmentConfig(brightness=0, contrast=10, saturation=5),
            sampling=SamplingMethod.AVERAGE,
            charset=CharacterSet.BLOCK,
        )

    @staticmethod
    def artwork() -> RenderConfig:
        """Vivid colors for illustrations."""
        return RenderConfig(
            adjustments=AdjustmentConfig(brightness=5, contrast=20, saturation=15),
            sampling=SamplingMethod.DOMINANT,
            charset=CharacterSet.GRADIENT,
        )

    @staticmethod
    def terminal() -> RenderConfig:
        """Muted colors with an ASCII ramp."""
        return RenderConfig(
            adjustments=AdjustmentConfig(brightness=0, contrast=30, saturation=-20),
            sampling=SamplingMethod.CENTER,
            charset=CharacterSet.ASCII,
        )

    @staticmethod
    def retro() -> RenderConfig:
        """Binarized blocks."""
        return RenderConfig(
            adjustments=AdjustmentConfig(brightness=-5, contrast=25, saturation=-10, threshold=50),
            sampling=SamplingMethod.DOMINANT,
            charset=CharacterSet.BLOCK,
        )

    @classmethod
    def names(cls):
        return ['photo', 'artwork', 'terminal', 'retro']

    @classmethod
    def get(cls, name: str) -> RenderConfig:
        """Get a preset by name."""
        if name.lower() not in cls.names():
            raise ValueError(f"Unknown preset: {name}")
        return getattr(cls, name.lower())()
