"""
Image to Text Art Converter - Tone Processing
=============================================
Brightness, contrast, saturation and threshold adjustment, plus histogram
equalization ("auto enhance").

Both passes rewrite the buffer in place. Intermediate math is done in
float64; results are stored back into the 8-bit buffer rounded to the
nearest integer (ties to even) and clamped to 0..255. Alpha is untouched.
"""

import time

import numpy as np

from text_art_converter.buffer import PixelBuffer
from text_art_converter.config import AdjustmentConfig
from text_art_converter.constants import LUMA_B, LUMA_G, LUMA_PER_MILLE, LUMA_R
from text_art_converter.log import get_logger

logger = get_logger('adjustments')


def _luminance(rgb: np.ndarray) -> np.ndarray:
    return LUMA_R * rgb[..., 0] + LUMA_G * rgb[..., 1] + LUMA_B * rgb[..., 2]


def _round_half_up(values: np.ndarray) -> np.ndarray:
    return np.floor(values + 0.5)


def _store(buffer: PixelBuffer, rgb: np.ndarray) -> None:
    pixels = buffer.pixels
    pixels[..., :3] = np.clip(np.rint(rgb), 0, 255).astype(np.uint8)


# =============================================================================
# TONE ADJUSTMENT
# =============================================================================

class ToneAdjuster:
    """Per-pixel tone transforms: brightness -> contrast -> saturation -> threshold."""

    @staticmethod
    def contrast_factor(contrast: int) -> float:
        """
        Contrast multiplier around mid-gray.

        Returns ``inf`` when ``259 - contrast`` is not positive.
        """
        denominator = 255.0 * (259 - contrast)
        if denominator <= 0:
            return float('inf')
        return 259.0 * (contrast + 255) / denominator

    @staticmethod
    def apply_brightness(rgb: np.ndarray, brightness: int) -> np.ndarray:
        return np.clip(rgb + brightness, 0, 255)

    @classmethod
    def apply_contrast(cls, rgb: np.ndarray, contrast: int) -> np.ndarray:
        factor = cls.contrast_factor(contrast)
        if np.isinf(factor):
            # Infinite contrast: everything snaps to black or white around 128
            return np.where(rgb - 128 >= 0, 255.0, 0.0)
        return np.clip(factor * (rgb - 128) + 128, 0, 255)

    @staticmethod
    def apply_saturation(rgb: np.ndarray, saturation: int) -> np.ndarray:
        gray = _luminance(rgb)[..., np.newaxis]
        factor = (saturation + 100) / 100.0
        return np.clip(gray + factor * (rgb - gray), 0, 255)

    @staticmethod
    def apply_threshold(rgb: np.ndarray, threshold: int) -> np.ndarray:
        if threshold <= 0:
            return rgb
        avg = rgb.sum(axis=-1, keepdims=True) / 3.0
        return np.broadcast_to(np.where(avg < threshold, 0.0, 255.0), rgb.shape).copy()

    @classmethod
    def transform(cls, rgb: np.ndarray, cfg: AdjustmentConfig) -> np.ndarray:
        """Apply the adjustment chain to a float array whose last axis is RGB."""
        rgb = cls.apply_brightness(rgb, cfg.brightness)
        rgb = cls.apply_contrast(rgb, cfg.contrast)
        rgb = cls.apply_saturation(rgb, cfg.saturation)
        rgb = cls.apply_threshold(rgb, cfg.threshold)
        return rgb

    @classmethod
    def adjust(cls, buffer: PixelBuffer, cfg: AdjustmentConfig) -> PixelBuffer:
        """
        Apply tone adjustments to every pixel in place.

        Args:
            buffer: Pixel buffer to modify
            cfg: Adjustment sliders

        Returns:
            The same buffer, for chaining
        """
        if cfg.is_identity:
            return buffer

        started = time.perf_counter()
        rgb = buffer.pixels[..., :3].astype(np.float64)
        _store(buffer, cls.transform(rgb, cfg))

        logger.debug("adjusted %s with %s in %.1f ms",
                     buffer, cfg, (time.perf_counter() - started) * 1000)
        return buffer


# =============================================================================
# HISTOGRAM EQUALIZATION
# =============================================================================

class HistogramEqualizer:
    """Luminance histogram equalization applied as a per-pixel channel scale."""

    @staticmethod
    def luminance_levels(buffer: PixelBuffer) -> np.ndarray:
        """
        Rounded luminance (0..255) of every pixel.

        Computed with integer weights in thousandths, so white lands exactly
        on 255. Colours whose float luminance sits on an exact .5 boundary
        can fall in the neighbouring bucket compared with a float64
        computation (a few thousand of the 16.7M RGB colours).
        """
        rgb = buffer.pixels[..., :3].astype(np.intp)
        wr, wg, wb = LUMA_PER_MILLE
        return (wr * rgb[..., 0] + wg * rgb[..., 1] + wb * rgb[..., 2] + 500) // 1000

    @staticmethod
    def histogram(levels: np.ndarray) -> np.ndarray:
        return np.bincount(levels.ravel(), minlength=256)

    @classmethod
    def equalize(cls, buffer: PixelBuffer) -> PixelBuffer:
        """
        Equalize the luminance histogram in place.

        The whole histogram and its cumulative distribution are built before
        any pixel is rewritten. Each pixel's channels are then scaled by
        ``new_gray / max(gray, 1)``. A buffer whose pixels all fall in one
        luminance bucket is left unchanged.

        Args:
            buffer: Pixel buffer to modify

        Returns:
            The same buffer, for chaining
        """
        if buffer.pixel_count == 0:
            return buffer

        levels = cls.luminance_levels(buffer)
        hist = cls.histogram(levels)
        if np.count_nonzero(hist) <= 1:
            logger.debug("equalize skipped: %s has a single luminance level", buffer)
            return buffer

        cdf = np.cumsum(hist)
        new_levels = _round_half_up(cdf / buffer.pixel_count * 255)

        # Second pass over the buffer: the cdf is complete at this point
        factor = new_levels[levels] / np.maximum(levels, 1)
        rgb = buffer.pixels[..., :3].astype(np.float64) * factor[..., np.newaxis]
        _store(buffer, rgb)

        logger.debug("equalized %s across %d luminance levels", buffer, np.count_nonzero(hist))
        return buffer


def process(buffer: PixelBuffer, cfg: AdjustmentConfig, auto_enhance: bool = False) -> PixelBuffer:
    """Run tone adjustment and, when enabled, equalization on a buffer in place."""
    ToneAdjuster.adjust(buffer, cfg)
    if auto_enhance:
        HistogramEqualizer.equalize(buffer)
    return buffer
