"""
Image to Text Art Converter - Region Sampling
=============================================
Reduces a rectangular region of pixels to one representative color.

Five strategies are available (see ``SamplingMethod``). All of them read
the buffer only, and every empty or out-of-bounds region yields black.
"""

import numpy as np
from scipy import ndimage
from typing import List, Sequence

from text_art_converter.buffer import BLACK, Color, PixelBuffer
from text_art_converter.constants import DOMINANT_QUANT_STEP, SamplingMethod
from text_art_converter.log import get_logger

logger = get_logger('sampling')


def _round_half_up(value: float) -> int:
    return int(np.floor(value + 0.5))


def _color(values: Sequence[float]) -> Color:
    r, g, b = (_round_half_up(v) for v in values)
    return Color(r, g, b)


class RegionSampler:
    """Pixel region sampling strategies."""

    @staticmethod
    def region(buffer: PixelBuffer, start_x: int, start_y: int,
               end_x: int, end_y: int) -> np.ndarray:
        """RGB values of the in-bounds part of ``[start_x, end_x) x [start_y, end_y)``."""
        x0, x1 = max(0, start_x), min(buffer.width, end_x)
        y0, y1 = max(0, start_y), min(buffer.height, end_y)
        if x1 <= x0 or y1 <= y0:
            return np.empty((0, 0, 3), dtype=np.uint8)
        return buffer.pixels[y0:y1, x0:x1, :3]

    # -------------------------------------------------------------------------
    # Strategies
    # -------------------------------------------------------------------------

    @classmethod
    def average(cls, buffer: PixelBuffer, start_x: int, start_y: int,
                end_x: int, end_y: int) -> Color:
        """Arithmetic mean of each channel."""
        block = cls.region(buffer, start_x, start_y, end_x, end_y)
        if block.size == 0:
            return BLACK
        return _color(block.reshape(-1, 3).mean(axis=0, dtype=np.float64))

    @classmethod
    def center(cls, buffer: PixelBuffer, start_x: int, start_y: int,
               end_x: int, end_y: int) -> Color:
        """The single pixel at the region's midpoint."""
        if end_x <= start_x or end_y <= start_y:
            return BLACK
        cx = (start_x + end_x) // 2
        cy = (start_y + end_y) // 2
        if not (0 <= cx < buffer.width and 0 <= cy < buffer.height):
            return BLACK
        r, g, b, _ = buffer.pixel(cx, cy)
        return Color(r, g, b)

    @classmethod
    def dominant(cls, buffer: PixelBuffer, start_x: int, start_y: int,
                 end_x: int, end_y: int) -> Color:
        """
        Most frequent color after quantizing each channel to 16 levels.

        Ties between equally populated buckets go to the bucket whose first
        pixel comes earliest in row-major scan order.
        """
        block = cls.region(buffer, start_x, start_y, end_x, end_y)
        if block.size == 0:
            return BLACK

        step = DOMINANT_QUANT_STEP
        quantized = (block.reshape(-1, 3).astype(np.int64) // step) * step
        keys = (quantized[:, 0] << 16) | (quantized[:, 1] << 8) | quantized[:, 2]

        unique, first_seen, counts = np.unique(keys, return_index=True, return_counts=True)
        winners = np.flatnonzero(counts == counts.max())
        key = int(unique[winners[np.argmin(first_seen[winners])]])
        return Color((key >> 16) & 0xFF, (key >> 8) & 0xFF, key & 0xFF)

    @classmethod
    def median(cls, buffer: PixelBuffer, start_x: int, start_y: int,
               end_x: int, end_y: int) -> Color:
        """Per-channel median; even counts average the two middle values."""
        block = cls.region(buffer, start_x, start_y, end_x, end_y)
        if block.size == 0:
            return BLACK
        return _color(np.median(block.reshape(-1, 3), axis=0))

    @classmethod
    def weighted_average(cls, buffer: PixelBuffer, start_x: int, start_y: int,
                         end_x: int, end_y: int) -> Color:
        """
        Mean weighted towards the region center.

        Each pixel is weighted by ``1 - distance / diagonal`` where distance is
        measured from the pixel's integer coordinates to the region midpoint.
        """
        block = cls.region(buffer, start_x, start_y, end_x, end_y)
        if block.size == 0:
            return BLACK

        max_distance = np.hypot(end_x - start_x, end_y - start_y)
        if max_distance == 0:
            return BLACK

        center_x = (start_x + end_x) / 2.0
        center_y = (start_y + end_y) / 2.0
        ys = np.arange(max(0, start_y), max(0, start_y) + block.shape[0], dtype=np.float64)
        xs = np.arange(max(0, start_x), max(0, start_x) + block.shape[1], dtype=np.float64)
        distance = np.hypot(xs[np.newaxis, :] - center_x, ys[:, np.newaxis] - center_y)
        weights = 1.0 - distance / max_distance

        total_weight = weights.sum()
        if total_weight <= 0:
            return BLACK

        totals = np.tensordot(weights, block.astype(np.float64), axes=([0, 1], [0, 1]))
        return _color(totals / total_weight)

    # -------------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------------

    @classmethod
    def sample(cls, buffer: PixelBuffer, start_x: int, start_y: int,
               end_x: int, end_y: int,
               method: SamplingMethod = SamplingMethod.AVERAGE) -> Color:
        """
        Sample one representative color from a region.

        Args:
            buffer: Source pixels
            start_x, start_y: Inclusive top-left corner
            end_x, end_y: Exclusive bottom-right corner
            method: Sampling strategy

        Returns:
            The sampled color (black for an empty region)
        """
        if method == SamplingMethod.AVERAGE:
            return cls.average(buffer, start_x, start_y, end_x, end_y)
        elif method == SamplingMethod.CENTER:
            return cls.center(buffer, start_x, start_y, end_x, end_y)
        elif method == SamplingMethod.DOMINANT:
            return cls.dominant(buffer, start_x, start_y, end_x, end_y)
        elif method == SamplingMethod.MEDIAN:
            return cls.median(buffer, start_x, start_y, end_x, end_y)
        elif method == SamplingMethod.WEIGHTED_AVERAGE:
            return cls.weighted_average(buffer, start_x, start_y, end_x, end_y)
        else:
            raise ValueError(f"Unknown sampling method: {method}")

    @classmethod
    def sample_grid(cls, buffer: PixelBuffer, x_edges: Sequence[int], y_edges: Sequence[int],
                    method: SamplingMethod = SamplingMethod.AVERAGE) -> List[List[Color]]:
        """
        Sample every cell of a grid partition.

        Cell ``(row, col)`` spans ``[x_edges[col], x_edges[col + 1])`` by
        ``[y_edges[row], y_edges[row + 1])``. Edges must be non-decreasing.

        Args:
            buffer: Source pixels
            x_edges: Column boundaries, one more than the number of columns
            y_edges: Row boundaries, one more than the number of rows
            method: Sampling strategy

        Returns:
            Row-major grid of colors
        """
        if method == SamplingMethod.AVERAGE:
            return cls._average_grid(buffer, x_edges, y_edges)

        return [
            [cls.sample(buffer, x_edges[col], y_edges[row], x_edges[col + 1], y_edges[row + 1], method)
             for col in range(len(x_edges) - 1)]
            for row in range(len(y_edges) - 1)
        ]

    @classmethod
    def _average_grid(cls, buffer: PixelBuffer, x_edges: Sequence[int],
                      y_edges: Sequence[int]) -> List[List[Color]]:
        """
        Average every cell with one labelled reduction per grid row.

        Each grid row's strip of pixels is reduced on its own against a
        column label row broadcast over the strip, so working memory stays
        proportional to one strip rather than the whole covered area.
        """
        cols = len(x_edges) - 1
        rows = len(y_edges) - 1
        x_edges = np.clip(np.asarray(x_edges, dtype=np.intp), 0, buffer.width)
        y_edges = np.clip(np.asarray(y_edges, dtype=np.intp), 0, buffer.height)

        x0, x1 = int(x_edges[0]), int(x_edges[-1])
        if x1 <= x0 or y_edges[-1] <= y_edges[0]:
            return [[BLACK] * cols for _ in range(rows)]

        # Column label (1-based) of each pixel column in the covered area
        col_of = np.repeat(np.arange(1, cols + 1, dtype=np.int32), np.diff(x_edges))
        index = np.arange(1, cols + 1)
        counts = np.outer(np.diff(y_edges), np.diff(x_edges))

        grid = []
        for row in range(rows):
            top, bottom = int(y_edges[row]), int(y_edges[row + 1])
            if bottom <= top:
                grid.append([BLACK] * cols)
                continue

            strip = buffer.pixels[top:bottom, x0:x1]
            labels = np.broadcast_to(col_of, (bottom - top, x1 - x0))
            sums = [ndimage.sum_labels(strip[..., channel], labels, index) for channel in range(3)]

            line = []
            for col in range(cols):
                count = counts[row, col]
                if count == 0:
                    line.append(BLACK)
                else:
                    line.append(_color([sums[c][col] / count for c in range(3)]))
            grid.append(line)

        logger.debug("averaged %d cells over %dx%d pixels",
                     rows * cols, x1 - x0, int(y_edges[-1] - y_edges[0]))
        return grid
